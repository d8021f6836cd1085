"""Covariances, row and column scaling, and small vector operations.

Functions that change data work in place on numpy arrays.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import numpy as np

from . import rng


def _matrix(m: Any) -> np.ndarray:
    arr = np.asarray(m)
    if arr.ndim != 2:
        raise ValueError(f"expected a 2-dimensional matrix, got {arr.ndim} dimensions")
    return arr


def _inplace(a: Any, ndim: int | None = None) -> np.ndarray:
    if not isinstance(a, np.ndarray):
        raise TypeError("argument must be a numpy array to be changed in place")
    if ndim is not None and a.ndim != ndim:
        raise ValueError(f"expected {ndim} dimensions, got {a.ndim}")
    return a


def cov1(m: Any) -> np.ndarray:
    """Return m * m^T divided by the column count."""
    arr = _matrix(m)
    return (arr @ arr.T) / arr.shape[1]


def cov2(m1: Any, m2: Any) -> np.ndarray:
    """Return m1 * m2^T divided by the column count."""
    a = _matrix(m1)
    b = _matrix(m2)
    if a.shape[1] != b.shape[1]:
        raise ValueError("matrices differ in column count")
    return (a @ b.T) / a.shape[1]


def cov2_rowwise(m1: Any, m2: Any) -> np.ndarray:
    """Return the covariance of each row of m1 with the same row of m2."""
    a = _matrix(m1)
    b = _matrix(m2)
    if a.shape != b.shape:
        raise ValueError("matrices differ in shape")
    return np.einsum("ij,ij->i", a, b) / a.shape[1]


def _clip(a: np.ndarray) -> np.ndarray:
    a[a < -1] = -1
    a[a > 1] = 1
    return a


def cov1_bounded(m: Any) -> np.ndarray:
    """Return cov1(m) with every entry limited to [-1, 1]."""
    return _clip(cov1(m))


def cov2_bounded(m1: Any, m2: Any) -> np.ndarray:
    """Return cov2(m1, m2) with every entry limited to [-1, 1]."""
    return _clip(cov2(m1, m2))


def cov2_rowwise_bounded(m1: Any, m2: Any) -> np.ndarray:
    """Return cov2_rowwise(m1, m2) with every entry limited to [-1, 1]."""
    return _clip(cov2_rowwise(m1, m2))


def _factors(v: Any, size: int, func: Callable[[float], float] | None, dtype: Any) -> np.ndarray:
    vec = np.asarray(v).reshape(-1)
    if vec.size != size:
        raise ValueError(f"scale vector must have length {size}")
    if func is not None:
        vec = np.array([func(x) for x in vec])
    return vec.astype(dtype, copy=False)


def scale_rows(m: np.ndarray, v: Any, func: Callable[[float], float] | None = None) -> None:
    """Multiply row i of m in place by v[i], or by func(v[i]) when func is given."""
    m = _inplace(m, 2)
    m *= _factors(v, m.shape[0], func, m.dtype)[:, None]


def scale_columns(m: np.ndarray, v: Any, func: Callable[[float], float] | None = None) -> None:
    """Multiply column j of m in place by v[j], or by func(v[j]) when func is given."""
    m = _inplace(m, 2)
    m *= _factors(v, m.shape[1], func, m.dtype)[None, :]


def eq(d: Any, value: Any) -> np.ndarray:
    """Return 1 where d equals value and 0 elsewhere."""
    arr = np.asarray(d)
    if arr.ndim != 1:
        raise ValueError("expected a vector")
    return (arr == value).astype(np.uint8)


def diff(d: np.ndarray) -> None:
    """Replace each element after the first by its difference from its predecessor."""
    d = _inplace(d, 1)
    if d.size > 1:
        d[1:] = np.diff(d)


def cumsum(d: np.ndarray) -> None:
    """Replace each element by the running sum up to it."""
    d = _inplace(d, 1)
    np.cumsum(d, out=d)


def fluctuate(a: np.ndarray, amplitude: float) -> None:
    """Multiply every element by 1 + y*amplitude, y uniform in [-1, 1)."""
    a = _inplace(a)
    draws = np.fromiter((rng.uniform() for _ in range(a.size)), dtype=np.float64, count=a.size)
    factors = 1 + (2 * draws - 1) * amplitude
    a *= factors.reshape(a.shape).astype(a.dtype)