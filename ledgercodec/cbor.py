"""Minimal CBOR reading and writing used by the ledger types."""

from __future__ import annotations

from enum import IntEnum

BOUNDED_BYTES_CHUNK_SIZE = 64

_U64_MAX = (1 << 64) - 1
_BREAK = 0xFF
_INDEFINITE_BYTES = 0x5F


class MajorType(IntEnum):
    """The eight CBOR major types."""

    UNSIGNED = 0
    NEGATIVE = 1
    BYTES = 2
    TEXT = 3
    ARRAY = 4
    MAP = 5
    TAG = 6
    SPECIAL = 7


class DeserializeError(Exception):
    """Raised when CBOR input cannot be decoded into the expected shape."""

    def __init__(self, failure: str, location: str | None = None) -> None:
        self.failure = failure
        self.location = location
        super().__init__(self._render())

    def _render(self) -> str:
        if self.location is None:
            return f"Deserialization failed because: {self.failure}"
        return f"Deserialization failed in {self.location} because: {self.failure}"

    def __str__(self) -> str:
        return self._render()

    def annotate(self, location: str) -> DeserializeError:
        """Prefix the error location with an outer location and return self."""
        if self.location is None:
            self.location = location
        else:
            self.location = f"{location}.{self.location}"
        self.args = (self._render(),)
        return self


class CborWriter:
    """Accumulates CBOR-encoded items into a byte buffer."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def _write_head(self, major: MajorType, value: int) -> None:
        if value < 0 or value > _U64_MAX:
            raise ValueError(f"value {value} does not fit in a CBOR argument")
        prefix = major << 5
        if value < 24:
            self._buffer.append(prefix | value)
        elif value < 1 << 8:
            self._buffer.append(prefix | 24)
            self._buffer += value.to_bytes(1, "big")
        elif value < 1 << 16:
            self._buffer.append(prefix | 25)
            self._buffer += value.to_bytes(2, "big")
        elif value < 1 << 32:
            self._buffer.append(prefix | 26)
            self._buffer += value.to_bytes(4, "big")
        else:
            self._buffer.append(prefix | 27)
            self._buffer += value.to_bytes(8, "big")

    def write_unsigned(self, value: int) -> CborWriter:
        """Write an unsigned integer between 0 and 2**64 - 1."""
        self._write_head(MajorType.UNSIGNED, value)
        return self

    def write_negative(self, value: int) -> CborWriter:
        """Write a negative integer between -2**64 and -1."""
        if value >= 0 or value < -(1 << 64):
            raise ValueError(f"value {value} is not a CBOR negative integer")
        self._write_head(MajorType.NEGATIVE, -1 - value)
        return self

    def write_bytes(self, data: bytes) -> CborWriter:
        """Write a definite-length byte string."""
        self._write_head(MajorType.BYTES, len(data))
        self._buffer += data
        return self

    def write_raw(self, data: bytes) -> CborWriter:
        """Append already encoded bytes unchanged."""
        self._buffer += data
        return self

    def write_tag(self, tag: int) -> CborWriter:
        """Write a semantic tag header."""
        self._write_head(MajorType.TAG, tag)
        return self

    def write_array_header(self, length: int | None) -> CborWriter:
        """Write an array header; None starts an indefinite-length array."""
        if length is None:
            self._buffer.append((MajorType.ARRAY << 5) | 31)
        else:
            self._write_head(MajorType.ARRAY, length)
        return self

    def write_break(self) -> CborWriter:
        """Write the break code that ends an indefinite-length item."""
        self._buffer.append(_BREAK)
        return self

    def getvalue(self) -> bytes:
        """Return everything written so far."""
        return bytes(self._buffer)


class CborReader:
    """Decodes CBOR items one at a time from a byte string."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def _peek_header(self) -> tuple[MajorType, int | None, int]:
        """Return (major type, argument or None if indefinite, header size)."""
        if self._pos >= len(self._data):
            raise DeserializeError("unexpected end of input")
        initial = self._data[self._pos]
        major = MajorType(initial >> 5)
        info = initial & 0x1F
        if info < 24:
            return major, info, 1
        if info <= 27:
            size = 1 << (info - 24)
            end = self._pos + 1 + size
            if end > len(self._data):
                raise DeserializeError("unexpected end of input")
            return major, int.from_bytes(self._data[self._pos + 1 : end], "big"), 1 + size
        if info == 31:
            return major, None, 1
        raise DeserializeError(f"reserved additional information {info}")

    def _take_header(self, expected: MajorType) -> int | None:
        major, argument, size = self._peek_header()
        if major is not expected:
            raise DeserializeError(f"expected {expected.name}, found {major.name}")
        self._pos += size
        return argument

    def _take_definite(self, expected: MajorType) -> int:
        major, argument, size = self._peek_header()
        if major is not expected:
            raise DeserializeError(f"expected {expected.name}, found {major.name}")
        if argument is None:
            raise DeserializeError(f"indefinite length not supported for {expected.name}")
        self._pos += size
        return argument

    def _take_payload(self, length: int) -> bytes:
        end = self._pos + length
        if end > len(self._data):
            raise DeserializeError("unexpected end of input")
        payload = self._data[self._pos : end]
        self._pos = end
        return payload

    def peek_type(self) -> MajorType:
        """Return the major type of the next item without consuming it."""
        if self._pos >= len(self._data):
            raise DeserializeError("unexpected end of input")
        return MajorType(self._data[self._pos] >> 5)

    def read_unsigned(self) -> int:
        """Read an unsigned integer."""
        return self._take_definite(MajorType.UNSIGNED)

    def read_negative(self) -> int:
        """Read a negative integer over its full range down to -2**64."""
        return -1 - self._take_definite(MajorType.NEGATIVE)

    def read_tag(self) -> int:
        """Read a semantic tag number."""
        return self._take_definite(MajorType.TAG)

    def read_bytes(self) -> bytes:
        """Read a byte string, joining the chunks of an indefinite one."""
        length = self._take_header(MajorType.BYTES)
        if length is not None:
            return self._take_payload(length)
        chunks = []
        while not self._at_break():
            chunk_length = self._take_definite(MajorType.BYTES)
            chunks.append(self._take_payload(chunk_length))
        self.read_break()
        return b"".join(chunks)

    def read_array_header(self) -> int | None:
        """Read an array header; None means indefinite length."""
        return self._take_header(MajorType.ARRAY)

    def _at_break(self) -> bool:
        if self._pos >= len(self._data):
            raise DeserializeError("unexpected end of input")
        return self._data[self._pos] == _BREAK

    def read_break(self) -> None:
        """Consume the break code, failing if something else comes next."""
        if self._pos >= len(self._data) or self._data[self._pos] != _BREAK:
            raise DeserializeError("ending break missing")
        self._pos += 1

    def at_end(self) -> bool:
        """Whether all input has been consumed."""
        return self._pos >= len(self._data)


class CborReadLen:
    """Tracks elements read against a declared (possibly indefinite) length."""

    def __init__(self, length: int | None) -> None:
        self.length = length
        self.read = 0

    def read_elems(self, count: int) -> None:
        """Mark count elements as read, failing past a definite length."""
        if self.length is None:
            return
        self.read += count
        if self.read > self.length:
            raise DeserializeError(
                f"definite length mismatch: expected {self.length}, found more"
            )

    def finish(self) -> None:
        """Check that exactly the declared number of elements was read."""
        if self.length is not None and self.read != self.length:
            raise DeserializeError(
                f"definite length mismatch: expected {self.length}, found {self.read}"
            )


def write_bounded_bytes(writer: CborWriter, data: bytes) -> CborWriter:
    """Write bytes, splitting anything over 64 bytes into indefinite chunks."""
    if len(data) <= BOUNDED_BYTES_CHUNK_SIZE:
        return writer.write_bytes(data)
    writer.write_raw(bytes([_INDEFINITE_BYTES]))
    for start in range(0, len(data), BOUNDED_BYTES_CHUNK_SIZE):
        writer.write_bytes(data[start : start + BOUNDED_BYTES_CHUNK_SIZE])
    return writer.write_break()


def read_bounded_bytes(reader: CborReader) -> bytes:
    """Read bytes written by write_bounded_bytes."""
    found = reader.peek_type()
    if found is not MajorType.BYTES:
        raise DeserializeError(f"expected {MajorType.BYTES.name}, found {found.name}")
    length = reader._take_header(MajorType.BYTES)
    if length is not None:
        data = reader._take_payload(length)
        if len(data) > BOUNDED_BYTES_CHUNK_SIZE:
            raise DeserializeError(
                f"out of range: found {len(data)}, "
                f"expected between 0 and {BOUNDED_BYTES_CHUNK_SIZE}"
            )
        return data
    chunks = []
    while reader.peek_type() is not MajorType.SPECIAL:
        chunk_type = reader.peek_type()
        if chunk_type is not MajorType.BYTES:
            raise DeserializeError(
                f"expected {MajorType.BYTES.name}, found {chunk_type.name}"
            )
        chunk_length = reader._take_header(MajorType.BYTES)
        if chunk_length is None:
            raise DeserializeError(
                "Illegal CBOR: Indefinite string found inside indefinite string"
            )
        chunks.append(reader._take_payload(chunk_length))
    reader.read_break()
    return b"".join(chunks)