import pytest

from ledgercodec.cbor import (
    CborReadLen,
    CborReader,
    CborWriter,
    DeserializeError,
    MajorType,
    read_bounded_bytes,
    write_bounded_bytes,
)


@pytest.mark.parametrize(
    "value, encoded",
    [
        (0, "00"),
        (23, "17"),
        (24, "1818"),
        (1000, "1903e8"),
        (1000000000000, "1b000000e8d4a51000"),
        ((1 << 64) - 1, "1bffffffffffffffff"),
    ],
)
def test_unsigned_encoding_and_round_trip(value, encoded):
    data = CborWriter().write_unsigned(value).getvalue()
    assert data.hex() == encoded
    assert CborReader(data).read_unsigned() == value


@pytest.mark.parametrize(
    "value, encoded",
    [
        (-1, "20"),
        (-1000, "3903e7"),
        (-9223372036854775809, "3b8000000000000000"),
        (-18446744073709551616, "3bffffffffffffffff"),
    ],
)
def test_negative_encoding_and_round_trip(value, encoded):
    data = CborWriter().write_negative(value).getvalue()
    assert data.hex() == encoded
    assert CborReader(data).read_negative() == value


def test_write_unsigned_rejects_out_of_range():
    with pytest.raises(ValueError):
        CborWriter().write_unsigned(1 << 64)
    with pytest.raises(ValueError):
        CborWriter().write_unsigned(-1)


def test_write_negative_rejects_out_of_range():
    with pytest.raises(ValueError):
        CborWriter().write_negative(0)
    with pytest.raises(ValueError):
        CborWriter().write_negative(-(1 << 64) - 1)


def test_tag_array_and_bytes_round_trip():
    writer = CborWriter()
    writer.write_tag(2).write_bytes(b"\x01\x00").write_array_header(2)
    writer.write_array_header(None).write_break()
    data = writer.getvalue()
    assert data.hex() == "c2420100829fff"
    reader = CborReader(data)
    assert reader.peek_type() is MajorType.TAG
    assert reader.read_tag() == 2
    assert reader.read_bytes() == b"\x01\x00"
    assert reader.read_array_header() == 2
    assert reader.read_array_header() is None
    reader.read_break()
    assert reader.at_end()


def test_read_wrong_type_raises():
    reader = CborReader(bytes.fromhex("20"))
    with pytest.raises(DeserializeError, match="expected UNSIGNED, found NEGATIVE"):
        reader.read_unsigned()


def test_read_past_end_raises():
    with pytest.raises(DeserializeError):
        CborReader(b"").peek_type()
    with pytest.raises(DeserializeError):
        CborReader(bytes.fromhex("1a0001")).read_unsigned()


def test_read_break_missing():
    with pytest.raises(DeserializeError, match="ending break missing"):
        CborReader(bytes.fromhex("00")).read_break()


def test_read_indefinite_bytes_joins_chunks():
    reader = CborReader(bytes.fromhex("5f4201024103ff"))
    assert reader.read_bytes() == b"\x01\x02\x03"
    assert reader.at_end()


def test_annotate_builds_location_path():
    error = DeserializeError("no variant matched")
    assert error.annotate("coin") is error
    error.annotate("Value")
    assert error.location == "Value.coin"
    assert str(error) == "Deserialization failed in Value.coin because: no variant matched"


def test_read_len_definite():
    tracker = CborReadLen(2)
    tracker.read_elems(1)
    with pytest.raises(DeserializeError):
        tracker.finish()
    tracker.read_elems(1)
    tracker.finish()
    assert tracker.read == 2
    with pytest.raises(DeserializeError):
        tracker.read_elems(1)


def test_read_len_indefinite_never_fails():
    tracker = CborReadLen(None)
    tracker.read_elems(100)
    tracker.finish()
    assert tracker.read == 0


def test_bounded_bytes_read_chunked():
    chunks = [
        bytes([0x52]) + b"some random string",
        bytes([0x44, 0x01, 0x02, 0x03, 0x04]),
    ]
    expected = b"".join(chunk[1:] for chunk in chunks)
    data = bytes([0x5F]) + b"".join(chunks) + bytes([0xFF])
    reader = CborReader(data)
    assert read_bounded_bytes(reader) == expected
    assert reader.at_end()


def test_bounded_bytes_write_chunked():
    chunk_64 = bytes([0x58, 64]) + bytes([37] * 64)
    chunk_4 = bytes([0x44, 0x01, 0x02, 0x03, 0x04])
    data = chunk_64[2:] + chunk_4[1:]
    writer = CborWriter()
    write_bounded_bytes(writer, data)
    expected = bytes([0x5F]) + chunk_64 + chunk_4 + bytes([0xFF])
    assert writer.getvalue() == expected


def test_bounded_bytes_short_is_definite_and_round_trips():
    writer = CborWriter()
    write_bounded_bytes(writer, b"\xaa" * 64)
    data = writer.getvalue()
    assert data[:2] == bytes([0x58, 64])
    assert read_bounded_bytes(CborReader(data)) == b"\xaa" * 64


def test_bounded_bytes_long_round_trip():
    payload = bytes(range(200))
    writer = CborWriter()
    write_bounded_bytes(writer, payload)
    assert read_bounded_bytes(CborReader(writer.getvalue())) == payload


def test_bounded_bytes_definite_too_long_rejected():
    data = CborWriter().write_bytes(b"\x00" * 65).getvalue()
    with pytest.raises(DeserializeError, match="out of range"):
        read_bounded_bytes(CborReader(data))


def test_bounded_bytes_rejects_non_bytes():
    with pytest.raises(DeserializeError, match="expected BYTES"):
        read_bounded_bytes(CborReader(bytes.fromhex("01")))


def test_bounded_bytes_rejects_nested_indefinite():
    with pytest.raises(DeserializeError, match="Indefinite string"):
        read_bounded_bytes(CborReader(bytes.fromhex("5f5f4101ffff")))


def test_bounded_bytes_rejects_non_bytes_chunk():
    with pytest.raises(DeserializeError, match="expected BYTES"):
        read_bounded_bytes(CborReader(bytes.fromhex("5f01ff")))


def test_bounded_bytes_missing_break():
    with pytest.raises(DeserializeError):
        read_bounded_bytes(CborReader(bytes.fromhex("5f4101")))