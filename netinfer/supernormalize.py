"""Rank-based transformation of matrix rows to a standard normal distribution."""

from __future__ import annotations

import random
import time
from statistics import NormalDist

import numpy as np

from . import rng
from .dataproc import normalize_rows
from .logger import log
from .matrix_ops import fluctuate

_AUTO_LIMIT = 30


def _inplace(m: object) -> np.ndarray:
    if not isinstance(m, np.ndarray):
        raise TypeError("matrix must be a numpy array to be changed in place")
    if m.ndim != 2:
        raise ValueError(f"expected a 2-dimensional matrix, got {m.ndim} dimensions")
    if not np.issubdtype(m.dtype, np.floating):
        raise TypeError("matrix must hold floating point values")
    return m


def normal_quantiles(n: int) -> np.ndarray:
    """Return the standard normal quantiles at (i+1)/(n+1) for i = 0..n-1."""
    if n < 0:
        raise ValueError(f"count must be non-negative, got {n}")
    dist = NormalDist()
    return np.array([dist.inv_cdf((i + 1) / (n + 1)) for i in range(n)], dtype=np.float32)


def supernormalize_rows(m: np.ndarray) -> None:
    """Replace each row in place by normal quantiles assigned by rank.

    Ties are ranked in their order of appearance. Rows are then shifted and
    scaled to zero mean and unit variance.
    """
    m = _inplace(m)
    log(10, "Supernormalization started for matrix size (%d*%d).", m.shape[0], m.shape[1])
    pinv = normal_quantiles(m.shape[1])
    for row in m:
        row[np.argsort(row, kind="stable")] = pinv
    normalize_rows(m)
    log(10, "Supernormalization completed.")


def supernormalize_rows_fluc(m: np.ndarray, fluc: float) -> None:
    """Supernormalize, jitter every element by a relative ``fluc``, and renormalize."""
    supernormalize_rows(m)
    fluctuate(m, fluc)
    normalize_rows(m)


def supernormalize_rows_auto(m: np.ndarray) -> None:
    """Supernormalize, adding jitter of 2/ncol**2 when there are fewer than 30 columns."""
    m = _inplace(m)
    ncol = m.shape[1]
    if ncol < _AUTO_LIMIT:
        supernormalize_rows_fluc(m, 2.0 / ncol**2)
    else:
        supernormalize_rows(m)


def supernormalize_rows_random(m: np.ndarray, generator: random.Random | None = None) -> None:
    """Replace each row in place by fresh normal draws assigned by rank, then renormalize.

    Without a generator, one seeded with the current time is used.
    """
    m = _inplace(m)
    gen = generator if generator is not None else rng.new_generator(int(time.time()))
    ncol = m.shape[1]
    log(10, "Randomized normalization started for matrix size (%d*%d).", m.shape[0], ncol)
    for row in m:
        draws = np.sort(np.array([gen.gauss(0.0, 1.0) for _ in range(ncol)], dtype=m.dtype))
        row[np.argsort(row, kind="stable")] = draws
    normalize_rows(m)
    log(10, "Randomized normalization completed.")