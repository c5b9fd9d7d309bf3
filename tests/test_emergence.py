"""Tests for Emergent Complexity."""

import math

import pytest

from evointegration.config import MetricConfig
from evointegration.exceptions import DiagnosticCode, InvalidMethodError
from evointegration.metrics import (
    PredictionMethod,
    compute_emergence_information,
    compute_emergent_complexity,
    estimate_emergence_from_traits,
)

COMPONENTS = [10, 15, 12, 18, 20]


class TestEmergentComplexity:
    def test_synergistic_collective(self):
        result = compute_emergent_complexity(COMPONENTS, 95, "sum")
        assert result.predicted == 75
        assert result.deviation == pytest.approx(20 / 75)
        assert result.E == pytest.approx(0.2667, abs=1e-4)
        assert result.synergistic is True
        assert result.fold_change == pytest.approx(1.2667, abs=1e-4)
        assert result.method == "sum"

    def test_additive_collective(self):
        result = compute_emergent_complexity(COMPONENTS, 75, PredictionMethod.SUM)
        assert result.deviation == 0.0
        assert result.E == 0.0
        assert result.synergistic is False

    def test_mean_times_count_equals_sum(self):
        by_mean = compute_emergent_complexity(COMPONENTS, 95, "mean")
        assert by_mean.predicted == pytest.approx(75)

    def test_max_prediction(self):
        result = compute_emergent_complexity(COMPONENTS, 30, "max")
        assert result.predicted == 20
        assert result.E == pytest.approx(0.5)

    def test_large_deviation_saturates(self):
        result = compute_emergent_complexity([1, 1], 10)
        assert result.deviation == pytest.approx(4.0)
        assert result.E == 1.0
        assert result.fold_change == pytest.approx(5.0)

    def test_missing_states_ignored(self):
        result = compute_emergent_complexity([10, float("nan"), 5], 15)
        assert result.predicted == 15
        assert result.E == 0.0

    def test_unknown_method(self):
        with pytest.raises(InvalidMethodError):
            compute_emergent_complexity(COMPONENTS, 95, "median")


class TestDegenerate:
    def test_no_components(self):
        result = compute_emergent_complexity([], 5.0)
        assert result.E == 0.0
        assert result.diagnostics[0].code == DiagnosticCode.EI400

    def test_zero_prediction_uses_epsilon(self):
        result = compute_emergent_complexity([0, 0], 0.002)
        assert result.predicted == pytest.approx(1e-3)
        assert result.deviation == pytest.approx(1.0)
        assert result.diagnostics[0].code == DiagnosticCode.EI401

    def test_configurable_epsilon(self):
        config = MetricConfig(prediction_epsilon=0.5)
        result = compute_emergent_complexity([0.0], 0.5, config=config)
        assert result.predicted == 0.5
        assert result.E == 0.0


class TestInformationForm:
    def test_independent_components(self):
        """Two fair bits with a uniform joint: no shared information."""
        result = compute_emergence_information([[0.5, 0.5], [0.5, 0.5]], [0.25] * 4)
        assert result.H_components == pytest.approx(2.0)
        assert result.H_joint == pytest.approx(2.0)
        assert result.mutual_information == pytest.approx(0.0)
        assert result.E == pytest.approx(0.0)

    def test_perfectly_coupled_components(self):
        """Two copies of one bit: joint has two outcomes."""
        result = compute_emergence_information([[0.5, 0.5], [0.5, 0.5]], [0.5, 0, 0, 0.5])
        assert result.H_joint == pytest.approx(1.0)
        assert result.mutual_information == pytest.approx(1.0)
        assert result.E == pytest.approx(0.5)

    def test_zero_component_entropy(self):
        result = compute_emergence_information([[1.0], [1.0]], [1.0])
        assert result.E == 0.0
        assert result.diagnostics[0].code == DiagnosticCode.EI402
        assert not math.isnan(result.E)


class TestTraits:
    def test_sum_prediction(self):
        result = estimate_emergence_from_traits([2.0, 3.0], 10.0)
        assert result.predicted == 5.0
        assert result.E == 1.0
        assert result.method == "sum"
