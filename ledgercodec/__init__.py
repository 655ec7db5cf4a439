"""CBOR codec helpers, integer and amount types, values with assets, and byte builders."""

__version__ = "0.1.0"

__all__ = [
    "bigint",
    "bignum",
    "cbor",
    "emptiness",
    "integer",
    "typed_bytes",
    "value",
]