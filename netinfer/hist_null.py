"""Histogram bin ranges shaped by a known null distribution."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

import numpy as np

from .hist_bins import equal_bins_from_cdf, unequal_bins_from_equal_bins

_NBEXTEND = 1000
_EPS = 1e-5


def _prefilled(n: int, binrange: Sequence[float]) -> list[float]:
    if n < 1:
        raise ValueError(f"bin count must be positive, got {n}")
    if len(binrange) != n + 1:
        raise ValueError(f"bin range must hold {n + 1} edges")
    low, high = float(binrange[0]), float(binrange[n])
    if not high > low:
        raise ValueError("upper edge must exceed lower edge")
    return [low, high]


def equal_bins_from_pdfs(
    n: int,
    binrange: Sequence[float],
    pdfs: Callable[[np.ndarray], np.ndarray],
) -> list[float]:
    """Return edges of n bins of (nearly) equal probability under a density.

    Only the first and last entries of ``binrange`` are used. ``pdfs`` maps an
    array of locations to their densities. The cumulative distribution is
    approximated by a piecewise constant density on 1000 sub-bins per bin,
    and the edges are refined until they move by less than 1e-5 of a bin.
    """
    low, high = _prefilled(n, binrange)
    step = (high - low) / n
    br = [low]
    for _ in range(n - 1):
        br.append(br[-1] + step)
    br.append(high)

    offsets = (np.arange(_NBEXTEND) + 0.5) / _NBEXTEND
    diffmax = 2 * _EPS
    while diffmax > _EPS:
        edges = np.asarray(br, dtype=np.float64)
        starts = edges[:-1]
        widths = np.diff(edges)
        locs = (starts[:, None] + widths[:, None] * offsets[None, :]).reshape(-1)
        dens = np.asarray(pdfs(locs), dtype=np.float64).reshape(-1)
        if dens.shape != locs.shape:
            raise ValueError("density function returned the wrong number of values")
        sub = np.repeat(widths / _NBEXTEND, _NBEXTEND)
        cum = np.cumsum(dens * sub)
        total = float(cum[-1])
        if not (total > 0 and math.isfinite(total)):
            raise ValueError("density has no positive finite mass over the range")
        cum = (cum * (n / total)).tolist()
        sub_list = sub.tolist()
        start_list = starts.tolist()

        diffmax = 0.0
        dlast = 0.0
        dnext = 1.0
        inext = 1
        for i, dnow in enumerate(cum):
            if inext >= n:
                break
            if dnow > dnext:
                b, k = divmod(i, _NBEXTEND)
                w = sub_list[i]
                slope = w / (dnow - dlast)
                iaim = min(math.floor(dnow), n - 1)
                base = start_list[b] + w * k
                while inext <= iaim:
                    t1 = base + (inext - dlast) * slope
                    t2 = abs(t1 - br[inext]) / (br[inext + 1] - br[inext])
                    diffmax = max(diffmax, t2)
                    br[inext] = t1
                    inext += 1
                dnext = float(inext)
            dlast = dnow
    return br


def unequal_bins_from_pdfs(
    n: int,
    binrange: Sequence[float],
    pdfs: Callable[[np.ndarray], np.ndarray],
) -> list[float]:
    """Return edges moving smoothly from equal-count bins to equal-width bins."""
    return unequal_bins_from_equal_bins(equal_bins_from_pdfs(n, binrange, pdfs))


def unequal_bins_from_cdf(
    n: int,
    binrange: Sequence[float],
    cdf: Callable[[float], float],
) -> list[float]:
    """Like unequal_bins_from_pdfs, with equal-count bins found from a CDF."""
    low, high = _prefilled(n, binrange)
    inner = equal_bins_from_cdf(n, low, high, cdf, (high - low) * 1e-6)
    return unequal_bins_from_equal_bins([low, *inner, high])