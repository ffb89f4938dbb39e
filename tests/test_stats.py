import numpy as np
import pytest

from madqc.utils.stats import median_and_mad, median_of_sorted, robust_scale_mad, robust_zscores


def test_median_of_sorted_even_and_odd():
    assert median_of_sorted(np.array([1.0, 2.0, 3.0, 4.0, 5.0])) == 3.0
    assert median_of_sorted(np.array([1.0, 2.0, 3.0, 4.0])) == 2.5
    assert median_of_sorted(np.array([7.0])) == 7.0
    assert median_of_sorted(np.array([1.0, 3.0])) == 2.0


def test_median_of_sorted_empty_raises():
    with pytest.raises(ValueError):
        median_of_sorted(np.array([]))


def test_median_and_mad_matches_numpy():
    rng = np.random.default_rng(3)
    for n in (1, 2, 5, 8, 31, 100):
        x = rng.standard_t(df=3, size=n)
        med, mad = median_and_mad(x)
        assert med == pytest.approx(np.median(x))
        assert mad == pytest.approx(np.median(np.abs(x - np.median(x))))


def test_robust_zscores_zero_mad_policy():
    z = robust_zscores(np.array([2.0, 2.0, 3.0, 1.0]), 2.0, 0.0)
    assert z[0] == 0.0 and z[1] == 0.0
    assert np.isinf(z[2]) and np.isinf(z[3])


def test_robust_scale_mad_gaussian():
    rng = np.random.default_rng(0)
    x = rng.normal(scale=2.0, size=20000)
    assert robust_scale_mad(x) == pytest.approx(2.0, rel=0.05)
