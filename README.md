# ledgercodec

Small building blocks for encoding ledger transaction data as CBOR. The package has
no dependencies outside the standard library.

## Modules

- `ledgercodec.cbor`: a minimal CBOR codec.
  - `CborWriter` writes unsigned and negative integers, byte strings, tags, array
    headers (definite, or indefinite with `None`), break codes and raw bytes;
    `getvalue()` returns the encoded bytes.
  - `CborReader` reads the same items back. `peek_type()` returns a `MajorType`;
    `read_bytes()` joins the chunks of an indefinite byte string;
    `read_negative()` covers the full range down to `-2**64`.
  - `DeserializeError` carries the failure and a dotted location, which
    `annotate(location)` extends outwards.
  - `CborReadLen` tracks elements read against a declared length through
    `read_elems(count)` and `finish()`.
  - `write_bounded_bytes` / `read_bounded_bytes` write byte strings of up to 64
    bytes as they are and split longer ones into 64-byte chunks of an
    indefinite-length byte string; a definite string longer than 64 bytes is
    rejected on reading.
- `ledgercodec.bignum`: `BigNum`, an unsigned 64-bit amount (`Coin` is an alias)
  with `checked_add`, `checked_sub`, `checked_mul`, `clamped_sub`, `div_floor`,
  `compare`, `less_than`, `BigNum.max`, `to_u32`, decimal `from_str` / `to_str`
  and CBOR `to_bytes` / `from_bytes` / `to_hex` / `from_hex`. Also `to_bignum`
  and `from_bignum`.
- `ledgercodec.integer`: `Int`, a CBOR `int` covering `-2**64` to `2**64 - 1`,
  with `new_negative`, `new_i32`, `as_positive`, `as_negative`,
  `as_i32_or_nothing`, `as_i32_or_fail`, string parsing (magnitude limited to
  64 bits) and CBOR round trips.
- `ledgercodec.bigint`: `BigInt`, an arbitrary-precision integer with `add`,
  `mul`, `increment`, `div_ceil`, `as_u64` and `as_int`. It encodes as a plain
  CBOR uint/nint when it fits and as a bignum with tag 2 or 3 otherwise. Also
  `to_bigint`.
- `ledgercodec.value`: `Value`, a coin amount with optional native assets held as
  a `dict` of policy id bytes to asset name bytes to `BigNum`. It supports
  `checked_add`, `checked_sub`, `clamped_sub` and a partial ordering through
  `compare` (returns `None` when two values are incomparable) and the `<`, `<=`,
  `>`, `>=` operators. Subtraction drops assets and policies that reach zero.
- `ledgercodec.typed_bytes`: `ByteBuilder` appends bytes and big-endian `u8` to
  `u128` fields, folds over items, and writes counted lists with `iter8` /
  `iter16`; `ByteBuilder.fixed(size)` makes `finalize()` check the final length.
  `ByteArray` and `ByteSlice` give `(start, size)` sub-slices.
- `ledgercodec.emptiness`: `is_none_or_empty(value)`, true for `None`, for empty
  sized objects, or as decided by an object's own `is_none_or_empty` method.

## Example

```python
from ledgercodec.bignum import BigNum
from ledgercodec.bigint import BigInt
from ledgercodec.value import Value

fee = BigNum.from_str("170000")
total = fee.checked_add(BigNum.one())
print(total.to_str())            # 170001
print(total.to_hex())            # CBOR, hex encoded

big = BigInt.from_str("18446744073709551616")
print(big.to_bytes().hex())      # c249010000000000000000

policy = bytes(28)
a = Value(BigNum(1), {policy: {b"\x01": BigNum(2)}})
b = Value(BigNum(2), {policy: {b"\x01": BigNum(1)}})
print(a.compare(b))              # None: more assets but less coin
```

## Errors

- Overflowing or underflowing checked arithmetic (`BigNum.checked_add`,
  `checked_sub`, `checked_mul`, `Value.checked_add`, `Value.checked_sub`),
  `Int.new_i32` and `Int.as_i32_or_fail` raise `OverflowError`.
- Malformed decimal strings, out-of-range values, `BigNum.to_u32` on values over
  32 bits and a fixed `ByteBuilder` of the wrong length raise `ValueError`.
- Malformed or unexpected CBOR raises `DeserializeError`.

## What this package does not do

It holds no Plutus cost model tables and does not build, hash or sign
transactions. `Value` has no CBOR or JSON encoding of its own; only `BigNum`,
`Int` and `BigInt` encode to and from CBOR.

## Running the tests

```
pip install -e ".[test]"
pytest
```