import numpy as np
import pytest

from netinfer.hist_null import (
    equal_bins_from_pdfs,
    unequal_bins_from_cdf,
    unequal_bins_from_pdfs,
)


def _flat(x):
    return np.ones_like(x)


def _ramp(x):
    return 2 * x


def test_equal_bins_uniform_density():
    out = equal_bins_from_pdfs(4, [0.0, 0.0, 0.0, 0.0, 1.0], _flat)
    assert len(out) == 5
    assert out[0] == 0.0
    assert out[-1] == 1.0
    assert np.allclose(out, np.linspace(0.0, 1.0, 5), atol=1e-3)


def test_equal_bins_ramp_density_equal_mass():
    n = 5
    out = equal_bins_from_pdfs(n, [0.0] * n + [1.0], _ramp)
    mass = np.diff(np.square(out))
    assert np.allclose(mass, 1 / n, atol=1e-3)
    assert np.all(np.diff(out) > 0)


def test_equal_bins_wrong_length():
    with pytest.raises(ValueError):
        equal_bins_from_pdfs(3, [0.0, 1.0], _flat)


def test_equal_bins_zero_density():
    with pytest.raises(ValueError):
        equal_bins_from_pdfs(2, [0.0, 0.0, 1.0], np.zeros_like)


def test_unequal_from_pdfs_span_and_order():
    out = unequal_bins_from_pdfs(6, [0.0] * 6 + [1.0], _ramp)
    assert len(out) == 7
    assert out[0] == 0.0
    assert out[-1] == 1.0
    assert np.all(np.diff(out) > 0)


def test_unequal_from_pdfs_uniform_stays_uniform():
    out = unequal_bins_from_pdfs(4, [0.0, 0.0, 0.0, 0.0, 2.0], _flat)
    assert np.allclose(out, np.linspace(0.0, 2.0, 5), atol=1e-3)


def test_unequal_from_cdf_uniform():
    def cdf(x):
        return min(max(x, 0.0), 1.0)

    out = unequal_bins_from_cdf(4, [0.0, 0.0, 0.0, 0.0, 1.0], cdf)
    assert np.allclose(out, np.linspace(0.0, 1.0, 5), atol=1e-5)


def test_unequal_from_cdf_bad_range():
    with pytest.raises(ValueError):
        unequal_bins_from_cdf(2, [1.0, 0.0, 1.0], lambda x: x)