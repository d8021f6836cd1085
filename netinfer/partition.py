"""Splitting a range of work items evenly across workers."""

from __future__ import annotations


def get_start(total: int, nthreads: int, index: int) -> int:
    """Return the first item handled by worker ``index`` of ``nthreads``.

    Items are split into contiguous blocks whose sizes differ by at most one,
    the larger blocks going to the first workers.
    """
    if nthreads <= 0:
        raise ValueError(f"worker count must be positive, got {nthreads}")
    if total < 0 or index < 0:
        raise ValueError("total and index must be non-negative")
    base = total // nthreads
    extra = min(total - base * nthreads, index)
    return min(extra + base * index, total)


def get_start_end(total: int, index: int, nthreads: int) -> tuple[int, int]:
    """Return the half-open item range (start, end) of worker ``index``."""
    return get_start(total, nthreads, index), get_start(total, nthreads, index + 1)


def split_ranges(total: int, nthreads: int) -> list[range]:
    """Return the item range of every worker, in worker order."""
    return [range(*get_start_end(total, i, nthreads)) for i in range(nthreads)]