"""Tests for evointegration.math.statistics module."""

import math

import numpy as np
import pytest

from evointegration.math.statistics import Statistics


class TestMissingValues:
    """NaN entries are ignored, as with R's na.rm = TRUE."""

    def test_mean_ignores_nan(self):
        assert Statistics.mean([1.0, float("nan"), 3.0]) == 2.0

    def test_mean_of_nothing_is_nan(self):
        assert math.isnan(Statistics.mean([]))
        assert math.isnan(Statistics.mean([float("nan")]))

    def test_sample_stdev(self):
        assert Statistics.stdev([0.9, 0.5, 0.1]) == pytest.approx(0.4)

    def test_stdev_needs_two_values(self):
        assert math.isnan(Statistics.stdev([1.0]))
        assert math.isnan(Statistics.variance([1.0, float("nan")]))


class TestClamp:
    def test_bounds(self):
        assert Statistics.clamp(-0.2) == 0.0
        assert Statistics.clamp(1.7) == 1.0
        assert Statistics.clamp(0.3) == 0.3

    def test_nan_passes_through(self):
        assert math.isnan(Statistics.clamp(float("nan")))


class TestLeastSquares:
    def test_exact_line(self):
        x = np.arange(10.0)
        design = np.column_stack([np.ones_like(x), x])
        coef, fitted, rss, cov = Statistics.least_squares(design, 3.0 + 2.0 * x)
        assert coef == pytest.approx([3.0, 2.0])
        assert rss == pytest.approx(0.0, abs=1e-18)
        assert cov is not None

    def test_rank_deficient_has_no_covariance(self):
        x = np.arange(5.0)
        design = np.column_stack([np.ones_like(x), x, 2 * x])
        _, _, _, cov = Statistics.least_squares(design, x)
        assert cov is None

    def test_r_squared_undefined_without_variance(self):
        y = np.ones(4)
        assert math.isnan(Statistics.r_squared(y, y))


class TestSummarize:
    def test_over_finite_values(self):
        mean, sd, low, high, n = Statistics.summarize([0.7, float("nan"), 0.8])
        assert mean == pytest.approx(0.75)
        assert sd == pytest.approx(math.sqrt(0.005))
        assert (low, high, n) == (0.7, 0.8, 2)

    def test_single_value_has_no_sd(self):
        mean, sd, _, _, n = Statistics.summarize([0.73])
        assert mean == 0.73 and n == 1
        assert math.isnan(sd)

    def test_empty(self):
        result = Statistics.summarize([float("nan")])
        assert result[-1] == 0
        assert all(math.isnan(v) for v in result[:4])
