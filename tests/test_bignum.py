import pytest

from ledgercodec.bignum import BigNum, U64_MAX, from_bignum, to_bignum
from ledgercodec.cbor import DeserializeError


@pytest.mark.parametrize(
    "divisor, expected",
    [(1, 10), (3, 3), (4, 2), (5, 2), (6, 1), (12, 0)],
)
def test_div_floor(divisor, expected):
    assert to_bignum(10).div_floor(to_bignum(divisor)) == to_bignum(expected)


def test_div_floor_by_zero():
    with pytest.raises(ZeroDivisionError):
        BigNum(5).div_floor(BigNum.zero())


def test_construction_range():
    with pytest.raises(ValueError):
        BigNum(-1)
    with pytest.raises(ValueError):
        BigNum(U64_MAX + 1)
    assert BigNum(U64_MAX).value == U64_MAX


def test_from_str_and_to_str():
    assert BigNum.from_str("12345").to_str() == "12345"
    assert BigNum.from_str("+7") == BigNum(7)
    assert str(BigNum(42)) == "42"


@pytest.mark.parametrize("text", ["", "-1", "abc", " 1", "1_000", "18446744073709551616"])
def test_from_str_rejects(text):
    with pytest.raises(ValueError):
        BigNum.from_str(text)


def test_zero_and_one():
    assert BigNum.zero().is_zero()
    assert not BigNum.one().is_zero()
    assert BigNum.one().value == 1


def test_checked_add():
    assert BigNum(2).checked_add(BigNum(3)) == BigNum(5)
    with pytest.raises(OverflowError, match="overflow"):
        BigNum(U64_MAX).checked_add(BigNum(1))


def test_checked_mul():
    assert BigNum(6).checked_mul(BigNum(7)) == BigNum(42)
    with pytest.raises(OverflowError, match="overflow"):
        BigNum(1 << 32).checked_mul(BigNum(1 << 32))


def test_checked_sub():
    assert BigNum(10).checked_sub(BigNum(4)) == BigNum(6)
    with pytest.raises(OverflowError, match="underflow"):
        BigNum(3).checked_sub(BigNum(4))


def test_clamped_sub():
    assert BigNum(3).clamped_sub(BigNum(4)) == BigNum(0)
    assert BigNum(10).clamped_sub(BigNum(4)) == BigNum(6)


def test_compare_and_less_than():
    assert BigNum(1).compare(BigNum(2)) == -1
    assert BigNum(2).compare(BigNum(2)) == 0
    assert BigNum(3).compare(BigNum(2)) == 1
    assert BigNum(1).less_than(BigNum(2))
    assert not BigNum(2).less_than(BigNum(2))


def test_max():
    assert BigNum.max(BigNum(3), BigNum(9)) == BigNum(9)
    assert BigNum.max(BigNum(9), BigNum(3)) == BigNum(9)


def test_to_u32():
    assert BigNum((1 << 32) - 1).to_u32() == (1 << 32) - 1
    with pytest.raises(ValueError, match="bigger than max u32"):
        BigNum(1 << 32).to_u32()


def test_cbor_encoding_values():
    assert BigNum(0).to_bytes() == b"\x00"
    assert BigNum(1000000000000).to_hex() == "1b000000e8d4a51000"


@pytest.mark.parametrize("number", [0, 23, 24, 255, 256, 65536, U64_MAX])
def test_bytes_round_trip(number):
    original = BigNum(number)
    assert BigNum.from_bytes(original.to_bytes()) == original
    assert BigNum.from_hex(original.to_hex()) == original


def test_from_bytes_rejects_negative():
    with pytest.raises(DeserializeError) as info:
        BigNum.from_bytes(bytes([0x20]))
    assert info.value.location == "BigNum"


def test_from_hex_rejects_bad_hex():
    with pytest.raises(ValueError):
        BigNum.from_hex("zz")


def test_to_from_bignum():
    assert from_bignum(to_bignum(34482)) == 34482


def test_ordering():
    assert sorted([BigNum(3), BigNum(1), BigNum(2)]) == [BigNum(1), BigNum(2), BigNum(3)]