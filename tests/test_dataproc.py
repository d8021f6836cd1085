import io

import numpy as np
import pytest

from netinfer import dataproc


def _rand(shape, seed=0):
    return np.random.default_rng(seed).standard_normal(shape).astype(np.float32)


def test_from_dense_round_trip():
    data = list(range(6))
    m = dataproc.from_dense(data, 2, 3)
    assert m.shape == (2, 3)
    assert m.dtype == np.float32
    assert dataproc.flatten(m).tolist() == [float(x) for x in data]


def test_from_dense_size_mismatch():
    with pytest.raises(ValueError):
        dataproc.from_dense([1, 2, 3], 2, 2)


def test_from_dense_file_round_trip():
    m = _rand((3, 4))
    buf = io.BytesIO(m.tobytes())
    out = dataproc.from_dense_file(buf, 3, 4)
    assert np.array_equal(out, m)


def test_from_dense_file_short():
    buf = io.BytesIO(_rand((2, 2)).tobytes())
    with pytest.raises(ValueError):
        dataproc.from_dense_file(buf, 3, 3)


def test_normalize_rows():
    m = _rand((4, 50)) * 3 + 7
    dataproc.normalize_rows(m)
    assert np.allclose(m.mean(axis=1), 0, atol=1e-5)
    assert np.allclose((m * m).mean(axis=1), 1, atol=1e-4)


def test_normalize_rows_requires_array():
    with pytest.raises(TypeError):
        dataproc.normalize_rows([[1.0, 2.0]])


def test_wrap_round_trip():
    m = _rand((3, 5))
    assert np.array_equal(dataproc.wrap(dataproc.flatten(m), 3, 5), m)
    with pytest.raises(ValueError):
        dataproc.wrap(np.zeros(4), 3, 5)


def test_flatten_nodiag_square():
    m = np.arange(9, dtype=np.float32).reshape(3, 3)
    assert dataproc.flatten_nodiag(m).tolist() == [1, 2, 3, 5, 6, 7]


@pytest.mark.parametrize("shape", [(3, 3), (2, 4), (4, 2), (1, 3), (5, 1)])
def test_nodiag_round_trip(shape):
    m = _rand(shape, seed=1)
    v = dataproc.flatten_nodiag(m)
    assert v.size == shape[0] * shape[1] - min(shape)
    w = dataproc.wrap_nodiag(v, *shape)
    diag = np.eye(*shape, dtype=bool)
    assert np.all(w[diag] == 0)
    assert np.array_equal(w[~diag], m[~diag])


def test_wrap_nodiag_wrong_size():
    with pytest.raises(ValueError):
        dataproc.wrap_nodiag(np.zeros(9), 3, 3)


@pytest.mark.parametrize("shape", [(2, 2), (3, 3), (2, 3), (3, 2), (4, 4), (4, 6)])
def test_strip_diag_keeps_offdiagonal(shape):
    n1, n2 = shape
    data = list(range(n1 * n2))
    out = dataproc.strip_diag(data, n1, n2)
    diag = {i * (n2 + 1) for i in range(min(n1, n2))}
    expected = sorted(x for x in data if x not in diag)
    assert sorted(out) == expected


def test_strip_diag_wrong_size():
    with pytest.raises(ValueError):
        dataproc.strip_diag([1, 2, 3], 2, 2)


def test_count_values_by_row():
    g = np.array([[0, 0, 1], [2, 2, 2]], dtype=np.uint8)
    assert dataproc.count_values_by_row(g, 3).tolist() == [2, 1]
    with pytest.raises(ValueError):
        dataproc.count_values_by_row(g, 2)


def test_count_ratio():
    d = np.array([0, 1, 1, 3], dtype=np.uint8)
    r = dataproc.count_ratio(d, 3)
    assert r.shape == (4,)
    assert r.sum() == pytest.approx(1.0)
    assert r[1] == pytest.approx(0.5)
    assert r[2] == 0
    with pytest.raises(ValueError):
        dataproc.count_ratio(d, 2)
    with pytest.raises(ValueError):
        dataproc.count_ratio([], 2)


def test_rows_save_load_round_trip():
    m = _rand((5, 3), seed=2)
    mask = np.array([1, 0, 1, 1, 0], dtype=np.uint8)
    saved = dataproc.rows_save(m, mask)
    assert saved.shape == (3, 3)
    dest = np.zeros_like(m)
    assert dataproc.rows_load(saved, dest, mask) == 3
    sel = mask.astype(bool)
    assert np.array_equal(dest[sel], m[sel])
    assert np.all(dest[~sel] == 0)


def test_rows_load_errors():
    dest = np.zeros((3, 2), dtype=np.float32)
    with pytest.raises(ValueError):
        dataproc.rows_load(np.zeros((1, 2)), dest, [1, 1, 0])
    with pytest.raises(ValueError):
        dataproc.rows_load(np.zeros((3, 3)), dest, [1, 1, 0])
    with pytest.raises(ValueError):
        dataproc.rows_save(dest, [1, 0])


@pytest.mark.parametrize("shape", [(4, 4), (5, 3), (3, 5)])
def test_rows_nodiag_round_trip(shape):
    m = _rand(shape, seed=3)
    full = np.ones(shape[0], dtype=np.uint8)
    assert np.array_equal(dataproc.rows_save_nodiag(m, full), dataproc.flatten_nodiag(m))
    mask = np.zeros(shape[0], dtype=np.uint8)
    mask[::2] = 1
    saved = dataproc.rows_save_nodiag(m, mask)
    dest = np.zeros_like(m)
    assert dataproc.rows_load_nodiag(saved, dest, mask) == saved.size
    sel = mask.astype(bool)
    off = ~np.eye(*shape, dtype=bool)
    assert np.array_equal(dest[sel][off[sel]], m[sel][off[sel]])
    assert np.all(dest[~sel] == 0)


def test_rows_load_nodiag_short_source():
    dest = np.zeros((3, 3), dtype=np.float32)
    with pytest.raises(ValueError):
        dataproc.rows_load_nodiag(np.zeros(3), dest, [1, 1, 1])


def test_permute_columns_and_rows():
    m = _rand((3, 4), seed=4)
    orig = m.copy()
    perm = [2, 0, 3, 1]
    dataproc.permute_columns(m, perm)
    for i, p in enumerate(perm):
        assert np.array_equal(m[:, i], orig[:, p])
    m = orig.copy()
    dataproc.permute_rows(m, [1, 2, 0])
    assert np.array_equal(m[0], orig[1])
    assert np.array_equal(m[2], orig[0])


def test_permute_invalid():
    m = _rand((2, 3))
    with pytest.raises(ValueError):
        dataproc.permute_columns(m, [0, 0, 1])
    with pytest.raises(ValueError):
        dataproc.permute_rows(m, [0, 1, 2])


def test_minmax_nodiag_excludes_diagonal():
    m = np.arange(16, dtype=np.float32).reshape(4, 4)
    np.fill_diagonal(m, 100)
    m[3, 2] = -50
    lo, hi = dataproc.minmax_nodiag(m, 0)
    assert hi < 100
    assert lo == -50
    lo2, hi2 = dataproc.minmax_nodiag(m, 10)
    assert (lo2, hi2) == (float(m.min()), float(m.max()))


def test_minmax_nodiag_shifted():
    m = np.zeros((3, 4), dtype=np.float32)
    m[0, 1] = m[1, 2] = m[2, 3] = 9
    lo, hi = dataproc.minmax_nodiag(m, 1)
    assert hi == 0 and lo == 0


def test_compare_rows():
    m = _rand((4, 5), seed=5)
    assert dataproc.compare_rows(m, m.copy(), True, False) is False
    assert dataproc.compare_rows(m, m.copy(), False, False) is True
    other = _rand((3, 5), seed=6)
    assert dataproc.compare_rows(m, other, False, False) is False
    shifted = m.copy()
    shifted[[0, 1]] = shifted[[1, 0]]
    assert dataproc.compare_rows(m, shifted, True, False) is True


def test_compare_rows_shape_mismatch():
    with pytest.raises(ValueError):
        dataproc.compare_rows(_rand((2, 3)), _rand((2, 4)), False, False)