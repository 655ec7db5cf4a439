"""Unsigned 64-bit amounts with checked arithmetic and CBOR encoding."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ledgercodec.cbor import CborReader, CborWriter, DeserializeError

U64_MAX = (1 << 64) - 1
U32_MAX = (1 << 32) - 1

_DECIMAL = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True, order=True)
class BigNum:
    """A non-negative integer that fits in 64 bits."""

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise TypeError(f"BigNum needs an int, got {type(self.value).__name__}")
        if not 0 <= self.value <= U64_MAX:
            raise ValueError(f"{self.value} does not fit in an unsigned 64-bit integer")

    def __str__(self) -> str:
        return str(self.value)

    def __int__(self) -> int:
        return self.value

    @classmethod
    def from_str(cls, text: str) -> BigNum:
        """Parse a decimal string; signs other than a leading '+' are rejected."""
        if not _DECIMAL.fullmatch(text):
            raise ValueError(f"invalid digit in {text!r}")
        number = int(text)
        if number > U64_MAX:
            raise ValueError(f"{text!r} is too large for an unsigned 64-bit integer")
        return cls(number)

    def to_str(self) -> str:
        """Decimal representation."""
        return str(self.value)

    @classmethod
    def zero(cls) -> BigNum:
        return cls(0)

    @classmethod
    def one(cls) -> BigNum:
        return cls(1)

    def is_zero(self) -> bool:
        return self.value == 0

    def div_floor(self, other: BigNum) -> BigNum:
        """Integer division rounding down."""
        return BigNum(self.value // other.value)

    def checked_mul(self, other: BigNum) -> BigNum:
        """Multiply, raising OverflowError past 64 bits."""
        result = self.value * other.value
        if result > U64_MAX:
            raise OverflowError("overflow")
        return BigNum(result)

    def checked_add(self, other: BigNum) -> BigNum:
        """Add, raising OverflowError past 64 bits."""
        result = self.value + other.value
        if result > U64_MAX:
            raise OverflowError("overflow")
        return BigNum(result)

    def checked_sub(self, other: BigNum) -> BigNum:
        """Subtract, raising OverflowError when the result would be negative."""
        result = self.value - other.value
        if result < 0:
            raise OverflowError("underflow")
        return BigNum(result)

    def clamped_sub(self, other: BigNum) -> BigNum:
        """Subtract, returning zero instead of going below zero."""
        return BigNum(max(self.value - other.value, 0))

    def compare(self, other: BigNum) -> int:
        """Return -1, 0 or 1 as self is less than, equal to or greater than other."""
        return (self.value > other.value) - (self.value < other.value)

    def less_than(self, other: BigNum) -> bool:
        return self.compare(other) < 0

    @staticmethod
    def max(a: BigNum, b: BigNum) -> BigNum:
        """The larger of two amounts; the first one on a tie."""
        return b if a.less_than(b) else a

    def to_u32(self) -> int:
        """The value as an int, failing if it does not fit in 32 bits."""
        if self.value > U32_MAX:
            raise ValueError(f"Value {self.value} is bigger than max u32 {U32_MAX}")
        return self.value

    def to_bytes(self) -> bytes:
        """CBOR encoding as an unsigned integer."""
        return CborWriter().write_unsigned(self.value).getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> BigNum:
        """Decode a CBOR unsigned integer."""
        try:
            return cls(CborReader(data).read_unsigned())
        except DeserializeError as error:
            raise error.annotate("BigNum")

    def to_hex(self) -> str:
        """Hex of the CBOR encoding."""
        return self.to_bytes().hex()

    @classmethod
    def from_hex(cls, text: str) -> BigNum:
        """Decode from the hex of a CBOR unsigned integer."""
        return cls.from_bytes(bytes.fromhex(text))


Coin = BigNum


def to_bignum(value: int) -> BigNum:
    return BigNum(value)


def from_bignum(value: BigNum) -> int:
    return value.value