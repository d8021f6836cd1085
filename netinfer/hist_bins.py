"""Construction and reshaping of histogram bin ranges.

A bin range for n bins is a sequence of n+1 increasing edges.
"""

from __future__ import annotations

import math
from collections.abc import Callable, MutableSequence, Sequence
from typing import Any

import numpy as np

from . import rng
from .mathfuncs import cdf_quantile

_FLUC = 1e-5


def fluctuate_binrange(ranges: MutableSequence[float], diff: float) -> None:
    """Jitter inner edges and widen outer edges, in place.

    Each inner edge moves by at most ``diff``/2 of its narrower neighbouring
    bin; the outer edges move outwards by ``diff`` of their own bin width.
    """
    n = len(ranges) - 1
    if n < 1:
        raise ValueError("a bin range needs at least two edges")
    for i in range(n - 1, 0, -1):
        width = min(ranges[i] - ranges[i - 1], ranges[i + 1] - ranges[i])
        ranges[i] += width * (rng.uniform() - 0.5) * diff
    ranges[0] -= (ranges[1] - ranges[0]) * diff
    ranges[n] += (ranges[n] - ranges[n - 1]) * diff


def uniform_bins(dmin: float, dmax: float, n: int) -> list[float]:
    """Return edges of n bins of equal width spanning [dmin, dmax], slightly jittered."""
    if n < 1:
        raise ValueError(f"bin count must be positive, got {n}")
    step = (dmax - dmin) / n
    edges = [float(dmin)]
    for _ in range(n):
        edges.append(edges[-1] + step)
    fluctuate_binrange(edges, _FLUC)
    return edges


def _edges(hold: Any, nsp: int) -> tuple[np.ndarray, np.ndarray]:
    if nsp <= 1:
        raise ValueError(f"split factor must exceed 1, got {nsp}")
    edges = np.asarray(hold, dtype=np.float64).reshape(-1)
    if edges.size < 2:
        raise ValueError("a bin range needs at least two edges")
    return edges, np.diff(edges) / nsp


def finer_range(hold: Any, nsp: int) -> np.ndarray:
    """Split every bin of ``hold`` into ``nsp`` equal bins and return the new edges."""
    edges, step = _edges(hold, nsp)
    nbin = edges.size - 1
    out = np.empty(nbin * nsp + 1)
    grid = out[:-1].reshape(nbin, nsp)
    grid[:, 0] = edges[:-1]
    for j in range(1, nsp - 1):
        grid[:, j] = grid[:, j - 1] + step
    grid[:, nsp - 1] = edges[1:] - step
    out[-1] = edges[-1]
    return out


def finer_central(hold: Any, nsp: int) -> np.ndarray:
    """Return ``nsp`` central points for every bin of ``hold``.

    Point j of a bin of width w starting at a lies at a + w*(j + 1/2)/nsp,
    except the last, which lies one step w/nsp before the bin's upper edge.
    """
    edges, step = _edges(hold, nsp)
    nbin = edges.size - 1
    grid = np.empty((nbin, nsp))
    grid[:, 0] = edges[:-1] + 0.5 * step
    for j in range(1, nsp - 1):
        grid[:, j] = grid[:, j - 1] + step
    grid[:, nsp - 1] = edges[1:] - step
    return grid.reshape(-1)


def unequal_bins_from_equal_bins(binrange: Sequence[float]) -> list[float]:
    """Reshape equal-count bins into a smooth transition to equal-width bins.

    Bin i keeps a geometric blend of its own width and the mean width that
    moves from the former to the latter across the range; widths are then
    rescaled so the total span is unchanged.
    """
    n = len(binrange) - 1
    if n < 1:
        raise ValueError("a bin range needs at least two edges")
    start = float(binrange[0])
    total = float(binrange[n]) - start
    log_mean = math.log(total / n)
    widths = [float(b) - float(a) for a, b in zip(binrange, binrange[1:])]
    t2 = float(n - 1)
    for k in range(1, n - 1):
        widths[k] = math.exp((math.log(widths[k]) * (t2 - k) + log_mean * k) / t2)
    widths[n - 1] = total / n
    scale = total / sum(abs(w) for w in widths)
    out = [start]
    for w in widths[:-1]:
        out.append(out[-1] + w * scale)
    out.append(start + total)
    return out


def equal_bins_from_cdf(
    n: int,
    left: float,
    right: float,
    cdf: Callable[[float], float],
    eps: float,
) -> list[float]:
    """Return the n-1 inner edges of n bins of equal probability under ``cdf``."""
    return cdf_quantile(n, left, right, cdf, eps)


def unequal_bins_param_count(n: int) -> int:
    """Return a bin count for n samples: floor(n**0.4), at most 100."""
    if n < 0:
        raise ValueError(f"sample count must be non-negative, got {n}")
    if n == 0:
        return 0
    return min(math.floor(math.exp(math.log(n) / 2.5)), 100)