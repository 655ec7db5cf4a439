"""Arbitrary-precision signed integers with CBOR bignum encoding."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ledgercodec.bignum import U64_MAX, BigNum
from ledgercodec.cbor import (
    CborReader,
    CborWriter,
    DeserializeError,
    MajorType,
    read_bounded_bytes,
    write_bounded_bytes,
)
from ledgercodec.integer import Int

_SIGNED_DECIMAL = re.compile(r"[+-]?[0-9]+")

_POSITIVE_BIGNUM_TAG = 2
_NEGATIVE_BIGNUM_TAG = 3
_NINT_MIN = -(1 << 64)


def _to_big_endian(number: int) -> bytes:
    return number.to_bytes((number.bit_length() + 7) // 8, "big")


@dataclass(frozen=True, order=True)
class BigInt:
    """A signed integer of any size."""

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise TypeError(f"BigInt needs an int, got {type(self.value).__name__}")

    def __str__(self) -> str:
        return str(self.value)

    def __int__(self) -> int:
        return self.value

    def is_zero(self) -> bool:
        return self.value == 0

    def as_u64(self) -> BigNum | None:
        """The value as a BigNum if it is non-negative and fits in 64 bits."""
        if 0 <= self.value <= U64_MAX:
            return BigNum(self.value)
        return None

    def as_int(self) -> Int | None:
        """The value as an Int if its magnitude fits in 64 bits."""
        if abs(self.value) <= U64_MAX:
            return Int(self.value)
        return None

    @classmethod
    def from_str(cls, text: str) -> BigInt:
        """Parse a decimal string with an optional sign."""
        if not _SIGNED_DECIMAL.fullmatch(text):
            raise ValueError(f"invalid digit in {text!r}")
        return cls(int(text))

    def to_str(self) -> str:
        """Decimal representation."""
        return str(self.value)

    def add(self, other: BigInt) -> BigInt:
        return BigInt(self.value + other.value)

    def mul(self, other: BigInt) -> BigInt:
        return BigInt(self.value * other.value)

    @classmethod
    def one(cls) -> BigInt:
        return cls(1)

    def increment(self) -> BigInt:
        return self.add(BigInt.one())

    def div_ceil(self, other: BigInt) -> BigInt:
        """Truncating division, incremented by one when there is a remainder."""
        if other.value == 0:
            raise ZeroDivisionError("division by zero")
        quotient = abs(self.value) // abs(other.value)
        if (self.value < 0) != (other.value < 0):
            quotient = -quotient
        remainder = self.value - quotient * other.value
        result = BigInt(quotient)
        return result if remainder == 0 else result.increment()

    def to_bytes(self) -> bytes:
        """CBOR encoding: uint/nint when it fits, otherwise a tagged bignum."""
        writer = CborWriter()
        value = self.value
        if 0 <= value <= U64_MAX:
            writer.write_unsigned(value)
        elif _NINT_MIN <= value < 0:
            writer.write_negative(value)
        elif value > 0:
            writer.write_tag(_POSITIVE_BIGNUM_TAG)
            write_bounded_bytes(writer, _to_big_endian(value))
        else:
            writer.write_tag(_NEGATIVE_BIGNUM_TAG)
            write_bounded_bytes(writer, _to_big_endian(-value - 1))
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> BigInt:
        """Decode a CBOR uint, nint or tagged bignum."""
        reader = CborReader(data)
        try:
            major = reader.peek_type()
            if major is MajorType.TAG:
                tag = reader.read_tag()
                payload = read_bounded_bytes(reader)
                magnitude = int.from_bytes(payload, "big")
                if tag == _POSITIVE_BIGNUM_TAG:
                    return cls(magnitude)
                if tag == _NEGATIVE_BIGNUM_TAG:
                    return cls(-(magnitude + 1))
                raise DeserializeError(
                    f"tag mismatch: found {tag}, expected {_POSITIVE_BIGNUM_TAG}"
                )
            if major is MajorType.UNSIGNED:
                return cls(reader.read_unsigned())
            if major is MajorType.NEGATIVE:
                return cls(reader.read_negative())
            raise DeserializeError("no variant matched")
        except DeserializeError as error:
            raise error.annotate("BigInt")


def to_bigint(value: int) -> BigInt:
    return BigInt(value)