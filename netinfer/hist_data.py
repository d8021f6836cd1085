"""Histogram bin ranges derived from a data set.

Bins of (nearly) equal count cover the lower quantiles of the data, and
bins of equal width cover the rest.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np

from .general_alg import remove_sorted_duplicates
from .hist_bins import fluctuate_binrange
from .logger import log

_FLUC = 1e-5
_NBR = 100
_NBEXTEND = 50


class InsufficientDataError(ValueError):
    """Raised when a data set is too small to size a histogram."""


def _vector(d: Any) -> np.ndarray:
    arr = np.asarray(d, dtype=np.float32).reshape(-1)
    if arr.size == 0:
        raise InsufficientDataError("empty data set")
    return arr


def unequal_bins_param_sizing(d: Any, ebwrate: float) -> tuple[float, int]:
    """Return (nbinsplit, nbin1) for a data set.

    With n data points and rate = 5*ebwrate, nbinsplit is
    min(1 - rate/sqrt(n), 0.9995) and nbin1 is min(int(n**0.25 - rate), 100).
    Raises InsufficientDataError when nbin1 < 4 or nbinsplit < 0.
    """
    n = _vector(d).size
    rate = ebwrate * 5
    nbinsplit = min(1 - rate / math.sqrt(n), 0.9995)
    nbin = min(int(math.sqrt(math.sqrt(n)) - rate), 100)
    if nbin < 4 or nbinsplit < 0:
        raise InsufficientDataError("not enough data to size histogram")
    return nbinsplit, nbin


def unequal_bins_exp_ranges(d: Any, nsmnv: int, nbinsplit: float, nbin1: int) -> list[float]:
    """Return approximate bin edges for ``d`` without sorting it.

    The lower ``nbinsplit`` quantile is split into ``nbin1`` bins of nearly
    equal count, found on a fine histogram shaped after the null density
    exp(-nsmnv*x) and assuming uniform density within each fine bin. The
    remainder is covered by bins as wide as the last of those.
    """
    data = _vector(d)
    if nsmnv <= 0:
        raise ValueError(f"nsmnv must be positive, got {nsmnv}")
    if not 0 < nbinsplit < 1:
        raise ValueError(f"nbinsplit must lie in (0, 1), got {nbinsplit}")
    if nbin1 <= 0:
        raise ValueError(f"nbin1 must be positive, got {nbin1}")

    nb = _NBR * nbin1 + 1
    nbe = nb + _NBEXTEND * nbin1
    edges = np.empty(nbe + 1)
    edges[0] = 0.0
    idx = np.arange(1, nb, dtype=np.float64)
    edges[1:nb] = -np.log(1 - idx * nbinsplit / nb) / nsmnv
    width = edges[nb - 1] - edges[nb - 2]
    edges[nb:nbe] = edges[nb - 1] + width * np.arange(1, nbe - nb + 1)
    edges[nbe] = math.inf

    pos = np.searchsorted(edges, data.astype(np.float64), side="right") - 1
    pos = pos[(pos >= 0) & (pos < nbe)]
    counts = np.bincount(pos, minlength=nbe).astype(np.float64).tolist()
    edge_list = edges.tolist()

    tunit = math.floor(data.size * nbinsplit / nbin1)
    if tunit <= 0:
        raise ValueError("too few data points for the requested bins")
    ans = [0.0]
    tremain = 0.0
    for i, tadd in enumerate(counts):
        if len(ans) > nbin1:
            break
        tremain += tadd
        if tremain < tunit:
            continue
        tremain -= tadd
        tloc = 0.0
        density = tadd / (edge_list[i + 1] - edge_list[i])
        while tremain + tadd >= tunit and len(ans) <= nbin1:
            lack = tunit - tremain
            tloc += lack / density if density else math.inf
            tadd -= lack
            tremain = 0.0
            ans.append(edge_list[i] + tloc)
        tremain += tadd
    if len(ans) <= nbin1:
        raise ValueError("could not form the requested equal-count bins")

    vmax = float(data.max())
    width = ans[nbin1] - ans[nbin1 - 1]
    if not width > 0:
        raise ValueError("degenerate bin width")
    nbin2 = max(math.ceil((vmax - ans[nbin1]) / width), 0)
    for _ in range(nbin2):
        ans.append(ans[-1] + width)
    fluctuate_binrange(ans, _FLUC)
    return ans


def unequal_bins_exact_ranges(d: Any, nbinsplit: float, nbin1: int) -> tuple[list[float], int]:
    """Return bin edges for ``d`` from its sorted values, and the equal-count bin count.

    The lower ``nbinsplit`` quantile is split into at most ``nbin1`` bins of
    equal count; duplicate edges are merged, so the returned count may be
    smaller. The rest is covered by bins of equal width.
    """
    if nbin1 <= 0:
        raise ValueError(f"nbin1 must be positive, got {nbin1}")
    vs = np.sort(_vector(d)).astype(np.float64).tolist()
    n = len(vs)
    l1 = math.floor(n * nbinsplit)
    if not 0 < l1 < n:
        raise ValueError(f"nbinsplit {nbinsplit} leaves no data on one side")
    step = l1 / nbin1
    l2 = math.floor(l1 - step)
    gap = vs[l1] - vs[l2]
    if not gap > 0:
        raise ValueError("degenerate bin width at the split point")
    nbin2 = math.ceil((vs[-1] - vs[l1]) / gap)
    heads = remove_sorted_duplicates([vs[math.floor(step * i)] for i in range(nbin1)])
    edges = list(heads)
    if nbin2:
        step2 = (vs[-1] - vs[l1]) / nbin2
        edges.extend(vs[l1] + i * step2 for i in range(nbin2))
    edges.append(vs[-1])
    fluctuate_binrange(edges, _FLUC)
    return edges, len(heads)


def unequal_bins_exact(d: Any, ebwrate: float) -> list[float]:
    """Size and build exact unequal bin edges for ``d``."""
    nbinsplit, nbin1 = unequal_bins_param_sizing(d, ebwrate)
    edges, nbin1 = unequal_bins_exact_ranges(d, nbinsplit, nbin1)
    nbin = len(edges) - 1
    log(
        9,
        "Histogram range constructed: %d bins of equal count for %f quantile, "
        "%d bins of equal width for the rest.",
        nbin1,
        nbinsplit,
        nbin - nbin1,
    )
    return edges


def unequal_bins_exp(d: Any, nsmnv: int, ebwrate: float) -> list[float]:
    """Size and build approximate unequal bin edges for ``d``."""
    nbinsplit, nbin1 = unequal_bins_param_sizing(d, ebwrate)
    edges = unequal_bins_exp_ranges(d, nsmnv, nbinsplit, nbin1)
    nbin = len(edges) - 1
    log(
        9,
        "Histogram range constructed: %d bins of equal count for %f quantile, "
        "%d bins of equal width for the rest.",
        nbin1,
        nbinsplit,
        nbin - nbin1,
    )
    return edges