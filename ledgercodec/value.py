"""Ledger values: a coin amount plus an optional bundle of native assets."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from ledgercodec.bignum import BigNum, Coin

# policy id -> asset name -> amount
MultiAsset = dict[bytes, dict[bytes, BigNum]]


def _copy_assets(multiasset: Mapping[bytes, Mapping[bytes, BigNum]]) -> MultiAsset:
    return {bytes(policy): {bytes(name): amount for name, amount in assets.items()}
            for policy, assets in multiasset.items()}


def _amount_or_zero(multiasset: MultiAsset, policy: bytes, name: bytes) -> BigNum:
    return multiasset.get(policy, {}).get(name, BigNum.zero())


def _covered_by(lhs: MultiAsset, rhs: MultiAsset) -> bool:
    """Whether every amount in lhs is at most the matching amount in rhs."""
    return all(
        amount.clamped_sub(_amount_or_zero(rhs, policy, name)).is_zero()
        for policy, assets in lhs.items()
        for name, amount in assets.items()
    )


def _compare_assets(lhs: MultiAsset, rhs: MultiAsset) -> int | None:
    lhs_covered = _covered_by(lhs, rhs)
    rhs_covered = _covered_by(rhs, lhs)
    if lhs_covered and rhs_covered:
        return 0
    if lhs_covered:
        return -1
    if rhs_covered:
        return 1
    return None


def _subtract_assets(lhs: MultiAsset, rhs: MultiAsset) -> MultiAsset:
    """Clamped per-asset subtraction dropping emptied assets and policies."""
    result = _copy_assets(lhs)
    for policy, assets in rhs.items():
        for name, amount in assets.items():
            current_assets = result.get(policy)
            if current_assets is None or name not in current_assets:
                continue
            remaining = current_assets[name].clamped_sub(amount)
            if remaining.is_zero():
                del current_assets[name]
                if not current_assets:
                    del result[policy]
            else:
                current_assets[name] = remaining
    return result


def _merge_assets(lhs: MultiAsset, rhs: MultiAsset) -> MultiAsset:
    result: MultiAsset = {}
    for multiasset in (lhs, rhs):
        for policy, assets in multiasset.items():
            target = result.setdefault(policy, {})
            for name, amount in assets.items():
                current = target.get(name)
                target[name] = amount if current is None else current.checked_add(amount)
    return result


@dataclass
class Value:
    """An amount of coin together with optional native assets."""

    coin: Coin
    multiasset: MultiAsset | None = None

    def __post_init__(self) -> None:
        if self.multiasset is not None:
            self.multiasset = _copy_assets(self.multiasset)

    @classmethod
    def zero(cls) -> Value:
        return cls(Coin.zero())

    @classmethod
    def from_assets(cls, multiasset: Mapping[bytes, Mapping[bytes, BigNum]]) -> Value:
        """A value holding only assets and no coin."""
        return cls.with_assets(Coin.zero(), multiasset)

    @classmethod
    def with_assets(
        cls, coin: Coin, multiasset: Mapping[bytes, Mapping[bytes, BigNum]]
    ) -> Value:
        """A value with coin and assets; an empty bundle is stored as None."""
        if not multiasset:
            return cls(coin)
        return cls(coin, _copy_assets(multiasset))

    def is_zero(self) -> bool:
        return self.coin.is_zero() and not self.multiasset

    def checked_add(self, other: Value) -> Value:
        """Sum of two values, raising OverflowError on any overflow."""
        coin = self.coin.checked_add(other.coin)
        if self.multiasset is not None and other.multiasset is not None:
            multiasset: MultiAsset | None = _merge_assets(self.multiasset, other.multiasset)
        elif self.multiasset is not None:
            multiasset = _copy_assets(self.multiasset)
        elif other.multiasset is not None:
            multiasset = _copy_assets(other.multiasset)
        else:
            multiasset = None
        return Value(coin, multiasset)

    def _sub_assets(self, other: Value) -> MultiAsset | None:
        if self.multiasset is None:
            return None
        if other.multiasset is None:
            return _copy_assets(self.multiasset)
        remaining = _subtract_assets(self.multiasset, other.multiasset)
        return remaining or None

    def checked_sub(self, other: Value) -> Value:
        """Difference of coins (OverflowError on underflow); assets are clamped."""
        coin = self.coin.checked_sub(other.coin)
        return Value(coin, self._sub_assets(other))

    def clamped_sub(self, other: Value) -> Value:
        """Difference where every amount stops at zero."""
        coin = self.coin.clamped_sub(other.coin)
        return Value(coin, self._sub_assets(other))

    def compare(self, other: Value) -> int | None:
        """-1, 0 or 1 for less, equal or greater; None when incomparable."""
        assets_order = _compare_assets(self.multiasset or {}, other.multiasset or {})
        if assets_order is None:
            return None
        coin_order = self.coin.compare(other.coin)
        if assets_order == 0:
            return coin_order
        if coin_order == 0 or coin_order == assets_order:
            return assets_order
        return None

    def __lt__(self, other: Value) -> bool:
        return self.compare(other) == -1

    def __le__(self, other: Value) -> bool:
        return self.compare(other) in (-1, 0)

    def __gt__(self, other: Value) -> bool:
        return self.compare(other) == 1

    def __ge__(self, other: Value) -> bool:
        return self.compare(other) in (0, 1)