[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ledgercodec"
version = "0.1.0"
description = "CBOR encoding helpers and numeric value types for ledger transactions"
requires-python = ">=3.10"
dependencies = []
keywords = ["cbor", "ledger", "bignum", "bigint", "serialization", "multiasset"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ledgercodec"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
