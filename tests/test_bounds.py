import math

import numpy as np
import pytest

from netinfer import bounds


def test_bound_below_keeps_larger_values():
    a = np.array([-3.0, 0.5, 2.0, -0.1])
    original = a.copy()
    bounds.bound_below(a, 0.0)
    assert np.all(a >= 0.0)
    assert np.array_equal(a[original >= 0], original[original >= 0])


def test_bound_above_on_matrix():
    a = np.array([[1.0, 5.0], [-2.0, 3.0]])
    original = a.copy()
    bounds.bound_above(a, 2.0)
    assert a.max() == 2.0
    assert np.array_equal(a[original <= 2], original[original <= 2])


def test_bound_both_limits_range():
    a = np.linspace(-4, 4, 17)
    bounds.bound_both(a, -1.0, 1.0)
    assert a.min() == -1.0 and a.max() == 1.0
    assert np.allclose(a[6:11], np.linspace(-1, 1, 5))


def test_bound_both_leaves_nan():
    a = np.array([math.nan, 5.0, -5.0])
    bounds.bound_both(a, -1.0, 1.0)
    assert math.isnan(a[0])
    assert list(a[1:]) == [1.0, -1.0]


def test_bounds_require_numpy_array():
    with pytest.raises(TypeError):
        bounds.bound_below([1.0, 2.0], 0.0)


def test_set_cond_with_predicate():
    a = np.array([1.0, -2.0, 3.0, -4.0])
    bounds.set_cond(a, lambda x: x < 0, 0.0)
    assert np.all(a >= 0)
    assert a[0] == 1.0 and a[2] == 3.0


def test_set_inf_and_set_nan():
    a = np.array([[math.inf, 1.0], [math.nan, -math.inf]])
    bounds.set_inf(a, 9.0)
    assert not np.isinf(a).any()
    assert math.isnan(a[1, 0])
    bounds.set_nan(a, 7.0)
    assert not np.isnan(a).any()
    assert a[1, 0] == 7.0 and a[0, 0] == 9.0


def test_set_value_round_trip():
    a = np.array([0.0, 2.0, 0.0, 3.0])
    original = a.copy()
    bounds.set_value(a, 0.0, -1.0)
    assert not (a == 0.0).any()
    bounds.set_value(a, -1.0, 0.0)
    assert np.array_equal(a, original)


def test_first_nan_row_major():
    m = np.zeros((3, 4))
    m[2, 1] = math.nan
    m[1, 3] = math.nan
    assert bounds.first_nan(m) == 1 * 4 + 3


def test_first_nan_absent():
    assert bounds.first_nan(np.arange(5.0)) == -1