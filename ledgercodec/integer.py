"""Signed CBOR integers covering the full uint and nint ranges."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ledgercodec.bignum import U64_MAX, BigNum
from ledgercodec.cbor import CborReader, CborWriter, DeserializeError, MajorType

I32_MIN = -(1 << 31)
I32_MAX = (1 << 31) - 1

# CBOR can express integers from -2**64 up to 2**64 - 1.
_MIN = -(1 << 64)
_MAX = U64_MAX

_SIGNED_DECIMAL = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True, order=True)
class Int:
    """A signed integer as encoded by CBOR's uint / nint major types."""

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise TypeError(f"Int needs an int, got {type(self.value).__name__}")
        if not _MIN <= self.value <= _MAX:
            raise ValueError(f"{self.value} is outside the CBOR integer range")

    def __str__(self) -> str:
        return str(self.value)

    def __int__(self) -> int:
        return self.value

    @classmethod
    def new_negative(cls, value: BigNum) -> Int:
        """The negation of an unsigned amount."""
        return cls(-value.value)

    @classmethod
    def new_i32(cls, value: int) -> Int:
        """Build from a value that fits in a signed 32-bit integer."""
        if not I32_MIN <= value <= I32_MAX:
            raise OverflowError(f"{value} does not fit in a signed 32-bit integer")
        return cls(value)

    def is_positive(self) -> bool:
        """True for zero and above."""
        return self.value >= 0

    def as_positive(self) -> BigNum | None:
        """The value as a BigNum when it is not negative, otherwise None."""
        if self.is_positive():
            return BigNum(self.value)
        return None

    def as_negative(self) -> BigNum | None:
        """The absolute value as a BigNum when negative, otherwise None."""
        if self.is_positive():
            return None
        return BigNum(-self.value)

    def as_i32_or_nothing(self) -> int | None:
        """The value if it fits in a signed 32-bit integer, otherwise None."""
        if I32_MIN <= self.value <= I32_MAX:
            return self.value
        return None

    def as_i32_or_fail(self) -> int:
        """The value if it fits in a signed 32-bit integer, else OverflowError."""
        result = self.as_i32_or_nothing()
        if result is None:
            raise OverflowError("out of range integral type conversion attempted")
        return result

    def to_str(self) -> str:
        """Decimal representation, with a minus sign when negative."""
        return str(self.value)

    @classmethod
    def from_str(cls, text: str) -> Int:
        """Parse a decimal string whose magnitude fits in 64 bits."""
        if not _SIGNED_DECIMAL.fullmatch(text):
            raise ValueError(f"invalid digit in {text!r}")
        number = int(text)
        if abs(number) > U64_MAX:
            raise ValueError(
                f"{number} out of bounds. Value (without sign) must fit "
                f"within 4 bytes limit of {U64_MAX}"
            )
        return cls(number)

    def to_bytes(self) -> bytes:
        """CBOR encoding as uint or nint."""
        writer = CborWriter()
        if self.value < 0:
            writer.write_negative(self.value)
        else:
            writer.write_unsigned(self.value)
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> Int:
        """Decode a CBOR uint or nint."""
        reader = CborReader(data)
        try:
            major = reader.peek_type()
            if major is MajorType.UNSIGNED:
                return cls(reader.read_unsigned())
            if major is MajorType.NEGATIVE:
                return cls(reader.read_negative())
            raise DeserializeError("no variant matched")
        except DeserializeError as error:
            raise error.annotate("Int")

    def to_hex(self) -> str:
        """Hex of the CBOR encoding."""
        return self.to_bytes().hex()

    @classmethod
    def from_hex(cls, text: str) -> Int:
        """Decode from the hex of a CBOR uint or nint."""
        return cls.from_bytes(bytes.fromhex(text))