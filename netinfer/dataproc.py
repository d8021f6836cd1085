"""Row-oriented data processing on float matrices.

Covers dense loading, row normalisation, flattening with and without
diagonal elements, masked row selection, permutation of rows and columns,
and row comparison. Matrices are numpy arrays of 32-bit floats.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, BinaryIO

import numpy as np

from .logger import log

FTYPE = np.float32
_FTYPE_MAX = float(np.finfo(FTYPE).max)


def _matrix(m: Any) -> np.ndarray:
    arr = np.asarray(m)
    if arr.ndim != 2:
        raise ValueError(f"expected a 2-dimensional matrix, got {arr.ndim} dimensions")
    return arr


def _writable_matrix(m: Any) -> np.ndarray:
    if not isinstance(m, np.ndarray):
        raise TypeError("matrix must be a numpy array to be changed in place")
    if m.ndim != 2:
        raise ValueError(f"expected a 2-dimensional matrix, got {m.ndim} dimensions")
    return m


def _mask(mask: Any, size: int) -> np.ndarray:
    arr = np.asarray(mask)
    if arr.ndim != 1 or arr.shape[0] != size:
        raise ValueError(f"mask must have length {size}")
    return arr != 0


def _offdiag(n1: int, n2: int) -> np.ndarray:
    return ~np.eye(n1, n2, dtype=bool)


def from_dense(data: Any, nrow: int, ncol: int) -> np.ndarray:
    """Return the row-major data as an (nrow, ncol) float matrix."""
    arr = np.asarray(data, dtype=FTYPE).reshape(-1)
    if arr.size != nrow * ncol:
        raise ValueError(f"expected {nrow * ncol} values, got {arr.size}")
    return arr.reshape(nrow, ncol)


def from_dense_file(f: BinaryIO, nrow: int, ncol: int) -> np.ndarray:
    """Read an (nrow, ncol) matrix of native 32-bit floats from a binary file."""
    nbytes = nrow * ncol * np.dtype(FTYPE).itemsize
    raw = f.read(nbytes)
    if raw is None or len(raw) != nbytes:
        log(3, "Failed to read data matrix file.")
        raise ValueError("failed to read data matrix file")
    return np.frombuffer(raw, dtype=FTYPE).reshape(nrow, ncol).copy()


def normalize_rows(m: np.ndarray) -> None:
    """Shift and scale every row in place to zero mean and unit variance."""
    m = _writable_matrix(m)
    ncol = m.shape[1]
    if ncol == 0:
        return
    with np.errstate(divide="ignore", invalid="ignore"):
        m -= m.mean(axis=1, keepdims=True)
        var = np.einsum("ij,ij->i", m, m) / ncol
        m *= (1 / np.sqrt(var))[:, None]


def flatten(m: Any) -> np.ndarray:
    """Return the elements of a matrix in row-major order."""
    return _matrix(m).reshape(-1).copy()


def wrap(v: Any, nrow: int, ncol: int) -> np.ndarray:
    """Return a vector of nrow*ncol values as an (nrow, ncol) matrix."""
    arr = np.asarray(v).reshape(-1)
    if arr.size != nrow * ncol:
        raise ValueError(f"expected {nrow * ncol} values, got {arr.size}")
    return arr.reshape(nrow, ncol).copy()


def flatten_nodiag(m: Any) -> np.ndarray:
    """Return the off-diagonal elements of a matrix in row-major order."""
    arr = _matrix(m)
    return arr[_offdiag(*arr.shape)]


def wrap_nodiag(v: Any, nrow: int, ncol: int) -> np.ndarray:
    """Place a vector into the off-diagonal elements of an (nrow, ncol) matrix.

    The diagonal of the result is zero.
    """
    arr = np.asarray(v).reshape(-1)
    expected = nrow * ncol - min(nrow, ncol)
    if arr.size != expected:
        raise ValueError(f"expected {expected} values, got {arr.size}")
    out = np.zeros((nrow, ncol), dtype=arr.dtype if arr.size else FTYPE)
    out[_offdiag(nrow, ncol)] = arr
    return out


def strip_diag(data: Sequence[Any], n1: int, n2: int) -> list[Any]:
    """Drop the diagonal elements of a row-major (n1, n2) matrix.

    Diagonal slots are overwritten with elements taken from the end, so the
    order of the remaining elements changes.
    """
    d = list(data)
    if len(d) != n1 * n2:
        raise ValueError(f"expected {n1 * n2} values, got {len(d)}")
    nc = min(n1, n2)
    end = n1 * n2 - 1 if n1 == n2 else n1 * n2
    for i in range(nc):
        if i * (n2 + 1) >= end:
            break
        end -= 1
        d[i * (n2 + 1)] = d[end]
        if end > 0 and (end - 1) // n2 == (end - 1) % n2:
            end -= 1
    return d[:max(end, 0)]


def count_values_by_row(g: Any, nv: int) -> np.ndarray:
    """Return the number of distinct values in each row of a genotype matrix.

    Elements must lie in 0, ..., nv-1.
    """
    arr = _matrix(g).astype(np.intp)
    if arr.size and (arr.min() < 0 or arr.max() >= nv):
        raise ValueError(f"values must lie in [0, {nv})")
    present = np.zeros((arr.shape[0], nv), dtype=bool)
    rows = np.repeat(np.arange(arr.shape[0]), arr.shape[1])
    present[rows, arr.reshape(-1)] = True
    return present.sum(axis=1)


def count_ratio(d: Any, nv: int) -> np.ndarray:
    """Return the fraction of elements taking each value 0, ..., nv."""
    arr = np.asarray(d).reshape(-1).astype(np.intp)
    if arr.size == 0:
        raise ValueError("cannot count ratios of an empty vector")
    if arr.min() < 0 or arr.max() > nv:
        raise ValueError(f"values must lie in [0, {nv}]")
    return np.bincount(arr, minlength=nv + 1).astype(np.float64) / arr.size


def rows_save(d: Any, mask: Any) -> np.ndarray:
    """Return the rows of ``d`` whose mask entries are nonzero, in order."""
    arr = _matrix(d)
    return arr[_mask(mask, arr.shape[0])].copy()


def rows_save_nodiag(d: Any, mask: Any) -> np.ndarray:
    """Return the selected rows of ``d``, diagonal elements dropped, concatenated."""
    arr = _matrix(d)
    ns = arr.shape[1]
    pieces = [
        np.delete(arr[i], i) if i < ns else arr[i]
        for i in np.flatnonzero(_mask(mask, arr.shape[0]))
    ]
    if not pieces:
        return np.empty(0, dtype=arr.dtype)
    return np.concatenate(pieces)


def rows_load(d: Any, dest: np.ndarray, mask: Any) -> int:
    """Fill the selected rows of ``dest`` from the leading rows of ``d``.

    Returns the number of rows loaded.
    """
    src = _matrix(d)
    dest = _writable_matrix(dest)
    if src.shape[1] != dest.shape[1]:
        raise ValueError("source and destination differ in column count")
    selected = np.flatnonzero(_mask(mask, dest.shape[0]))
    n = selected.size
    if n > src.shape[0]:
        raise ValueError(f"source has {src.shape[0]} rows, {n} needed")
    dest[selected] = src[:n]
    return int(n)


def rows_load_nodiag(d: Any, dest: np.ndarray, mask: Any) -> int:
    """Fill the off-diagonal elements of the selected rows of ``dest`` from ``d``.

    Returns the number of elements consumed from ``d``.
    """
    src = np.asarray(d).reshape(-1)
    dest = _writable_matrix(dest)
    ns = dest.shape[1]
    n = 0
    for i in np.flatnonzero(_mask(mask, dest.shape[0])):
        count = ns - 1 if i < ns else ns
        if n + count > src.size:
            raise ValueError("source vector too short")
        chunk = src[n:n + count]
        if i < ns:
            dest[i, :i] = chunk[:i]
            dest[i, i + 1:] = chunk[i:]
        else:
            dest[i] = chunk
        n += count
    return n


def _permutation(perm: Any, size: int) -> np.ndarray:
    p = np.asarray(perm, dtype=np.intp).reshape(-1)
    if p.size != size or not np.array_equal(np.sort(p), np.arange(size)):
        raise ValueError(f"not a permutation of {size} elements")
    return p


def permute_columns(m: np.ndarray, perm: Any) -> None:
    """Permute columns in place: new column i is old column perm[i]."""
    m = _writable_matrix(m)
    m[:] = m[:, _permutation(perm, m.shape[1])]


def permute_rows(m: np.ndarray, perm: Any) -> None:
    """Permute rows in place: new row i is old row perm[i]."""
    m = _writable_matrix(m)
    m[:] = m[_permutation(perm, m.shape[0])]


def minmax_nodiag(d: Any, shift: int) -> tuple[float, float]:
    """Return the minimum and maximum of ``d`` excluding elements (j, j+shift)."""
    arr = _matrix(d)
    n1, n2 = arr.shape
    keep = np.ones((n1, n2), dtype=bool)
    rows = np.arange(n1)
    cols = rows + shift
    inside = (cols >= 0) & (cols < n2)
    keep[rows[inside], cols[inside]] = False
    values = arr[keep]
    if values.size == 0:
        return _FTYPE_MAX, -_FTYPE_MAX
    return float(values.min()), float(values.max())


def _row_hash(row: np.ndarray) -> int:
    bits = np.ascontiguousarray(row, dtype=FTYPE).view(np.uint32)
    if bits.size == 0:
        return 0
    h = int(bits[0])
    for b in bits[1:]:
        h = ((h << 1) | (h >> 31)) & 0xFFFFFFFF
        h ^= int(b)
    return h


def compare_rows(m1: Any, m2: Any, nodiag: bool, warn: bool) -> bool:
    """Look for unexpected equal or unequal rows between two matrices.

    Returns True if a row of ``m2`` equals a row of ``m1`` at a different
    index, or at the same index when ``nodiag`` is false, or if with
    ``nodiag`` true a row of ``m2`` differs from the row of ``m1`` at the
    same index.
    """
    a = _matrix(m1)
    b = _matrix(m2)
    if a.shape[1] != b.shape[1]:
        raise ValueError("matrices differ in column count")
    hashes = [_row_hash(r) for r in a]
    with np.errstate(invalid="ignore"):
        for i, row in enumerate(b):
            h = _row_hash(row)
            for j, other in enumerate(a):
                expect_diff = nodiag and i == j
                if expect_diff == (h != hashes[j]):
                    continue
                differs = bool(np.any((row.astype(FTYPE) - other.astype(FTYPE)) != 0))
                if expect_diff == differs:
                    continue
                if warn:
                    log(
                        5,
                        "Detected identical rows in dt and dt2 (at the same or different "
                        "row numbers), or different rows at the same row number when nodiag "
                        "is true. Make sure your input data and the nodiag flag are correct.",
                    )
                return True
    return False