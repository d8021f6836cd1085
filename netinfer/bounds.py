"""Bounding and conditional replacement of array elements, in place."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import numpy as np


def _inplace(a: Any) -> np.ndarray:
    if not isinstance(a, np.ndarray):
        raise TypeError("argument must be a numpy array to be changed in place")
    return a


def bound_below(a: np.ndarray, value: float) -> None:
    """Raise every element below ``value`` to ``value``."""
    a = _inplace(a)
    a[a < value] = value


def bound_above(a: np.ndarray, value: float) -> None:
    """Lower every element above ``value`` to ``value``."""
    a = _inplace(a)
    a[a > value] = value


def bound_both(a: np.ndarray, low: float, high: float) -> None:
    """Set elements below ``low`` to ``low``, and others above ``high`` to ``high``."""
    a = _inplace(a)
    below = a < low
    above = (a > high) & ~below
    a[below] = low
    a[above] = high


def set_cond(a: np.ndarray, func: Callable[[Any], Any], value: Any) -> None:
    """Set every element for which ``func`` is true to ``value``."""
    a = _inplace(a)
    mask = np.fromiter((bool(func(x)) for x in a.flat), dtype=bool, count=a.size)
    a[mask.reshape(a.shape)] = value


def set_inf(a: np.ndarray, value: float) -> None:
    """Replace every infinite element by ``value``."""
    a = _inplace(a)
    a[np.isinf(a)] = value


def set_nan(a: np.ndarray, value: float) -> None:
    """Replace every NaN element by ``value``."""
    a = _inplace(a)
    a[np.isnan(a)] = value


def set_value(a: np.ndarray, old: Any, new: Any) -> None:
    """Replace every element equal to ``old`` by ``new``."""
    a = _inplace(a)
    a[a == old] = new


def first_nan(a: Any) -> int:
    """Return the row-major index of the first NaN, or -1 if there is none."""
    flat = np.isnan(np.asarray(a)).reshape(-1)
    hits = np.flatnonzero(flat)
    return int(hits[0]) if hits.size else -1