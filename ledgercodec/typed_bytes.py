"""Byte arrays and slices, and a builder that lays out big-endian fields."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import reduce
from typing import Any


def _check_range(data: bytes, start: int, size: int) -> None:
    if start < 0 or size < 0 or start + size > len(data):
        raise IndexError(
            f"range {start}..{start + size} out of bounds for length {len(data)}"
        )


@dataclass(frozen=True, order=True)
class ByteSlice:
    """A read-only view over part of a byte array."""

    data: bytes

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)

    def as_bytes(self) -> bytes:
        return self.data

    def sub(self, start: int, size: int) -> ByteSlice:
        """The slice of size bytes beginning at start, relative to this slice."""
        _check_range(self.data, start, size)
        return ByteSlice(self.data[start : start + size])


@dataclass(frozen=True)
class ByteArray:
    """An owned, immutable array of bytes."""

    data: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)

    def as_byteslice(self) -> ByteSlice:
        return ByteSlice(self.data)

    def as_bytes(self) -> bytes:
        return self.data

    def sub(self, start: int, size: int) -> ByteSlice:
        """The slice of size bytes beginning at start."""
        _check_range(self.data, start, size)
        return ByteSlice(self.data[start : start + size])


class ByteBuilder:
    """Appends bytes and big-endian integers; every method returns the builder."""

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._expected: int | None = None

    @classmethod
    def fixed(cls, size: int) -> ByteBuilder:
        """A builder whose final size must be exactly size bytes."""
        if size <= 0:
            raise ValueError("fixed size must be greater than zero")
        builder = cls()
        builder._expected = size
        return builder

    def _append_int(self, value: int, width: int) -> ByteBuilder:
        self._buffer += value.to_bytes(width, "big")
        return self

    def u8(self, value: int) -> ByteBuilder:
        return self._append_int(value, 1)

    def bytes(self, data: bytes) -> ByteBuilder:
        self._buffer += data
        return self

    def fold(
        self, items: Iterable[Any], func: Callable[[ByteBuilder, Any], ByteBuilder]
    ) -> ByteBuilder:
        """Thread the builder through func once for every item."""
        return reduce(func, items, self)

    def iter8(
        self, items: Iterable[Any], func: Callable[[ByteBuilder, Any], ByteBuilder]
    ) -> ByteBuilder:
        """Write a one-byte count, then each of fewer than 256 items via func."""
        items = list(items)
        if len(items) >= 256:
            raise ValueError(f"too many items for a one-byte count: {len(items)}")
        return self.u8(len(items)).fold(items, func)

    def iter16(
        self, items: Iterable[Any], func: Callable[[ByteBuilder, Any], ByteBuilder]
    ) -> ByteBuilder:
        """Write a two-byte count, then each of fewer than 65536 items via func."""
        items = list(items)
        if len(items) >= 65536:
            raise ValueError(f"too many items for a two-byte count: {len(items)}")
        return self.u16(len(items)).fold(items, func)

    def sub(self, func: Callable[[ByteBuilder], ByteBuilder]) -> ByteBuilder:
        """Let func append to this buffer through an unconstrained builder."""
        child = ByteBuilder()
        child._buffer = self._buffer
        result = func(child)
        self._buffer = result._buffer
        return self

    def u16(self, value: int) -> ByteBuilder:
        return self._append_int(value, 2)

    def u32(self, value: int) -> ByteBuilder:
        return self._append_int(value, 4)

    def u64(self, value: int) -> ByteBuilder:
        return self._append_int(value, 8)

    def u128(self, value: int) -> ByteBuilder:
        return self._append_int(value, 16)

    def finalize(self) -> ByteArray:
        """The built bytes; a fixed builder must hold exactly its size."""
        if self._expected is not None and self._expected != len(self._buffer):
            raise ValueError(
                f"internal-error: bytebuilder: expected size {self._expected} "
                f"but got {len(self._buffer)}"
            )
        return ByteArray(bytes(self._buffer))

    def finalize_as_bytes(self) -> bytes:
        """The built bytes without any size check."""
        return bytes(self._buffer)