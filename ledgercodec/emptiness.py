"""A check for values that are missing or hold nothing."""

from __future__ import annotations

from collections.abc import Sized
from typing import Any


def is_none_or_empty(value: Any) -> bool:
    """True when value is None or empty.

    Objects defining their own is_none_or_empty method decide for themselves;
    other sized objects count as empty when their length is zero.
    """
    if value is None:
        return True
    own_check = getattr(value, "is_none_or_empty", None)
    if callable(own_check):
        return bool(own_check())
    if isinstance(value, Sized):
        return len(value) == 0
    raise TypeError(f"cannot tell whether a {type(value).__name__} is empty")