"""Tests for Hierarchical Coherence."""

import pandas as pd
import pytest

from evointegration.exceptions import DiagnosticCode, InputError, MissingColumnsError
from evointegration.metrics import (
    compute_coherence_from_experiment,
    compute_hierarchical_coherence,
    estimate_coherence_proxy,
    fitness_table_from_groups,
)


class TestHierarchicalCoherence:
    def test_only_between_variance_gives_one(self):
        table = fitness_table_from_groups([[1.0, 1.0, 1.0], [5.0, 5.0, 5.0]])
        result = compute_hierarchical_coherence(table)
        assert result.H == pytest.approx(1.0)
        assert result.ICC == result.H
        assert result.Var_within == 0.0

    def test_only_within_variance_gives_zero(self):
        table = fitness_table_from_groups([[1.0, 2.0, 3.0], [1.0, 2.0, 3.0]])
        result = compute_hierarchical_coherence(table)
        assert result.H == pytest.approx(0.0)
        assert result.Var_between == pytest.approx(0.0)

    def test_variance_components(self):
        """Means 2 and 6 (grand mean 4); sample variances 1 and 4."""
        table = fitness_table_from_groups([[1.0, 2.0, 3.0], [4.0, 6.0, 8.0]])
        result = compute_hierarchical_coherence(table)
        assert result.Var_between == pytest.approx(4.0)
        assert result.Var_within == pytest.approx(2.5)
        assert result.Var_total == pytest.approx(6.5)
        assert result.H == pytest.approx(4.0 / 6.5)
        assert result.n_collectives == 2
        assert result.n_components == 6

    def test_within_variance_is_unweighted_mean(self):
        """A large group does not dominate the within-collective term."""
        table = fitness_table_from_groups([[0.0, 2.0], [5.0, 5.0, 5.0, 5.0, 5.0, 5.0]])
        result = compute_hierarchical_coherence(table)
        assert result.Var_within == pytest.approx((2.0 + 0.0) / 2)

    def test_between_variance_is_size_weighted(self):
        table = fitness_table_from_groups([[0.0], [3.0, 3.0]])
        result = compute_hierarchical_coherence(table)
        # means 0 (n=1) and 3 (n=2), grand mean 2
        assert result.Var_between == pytest.approx((1 * 4 + 2 * 1) / 3)

    def test_singleton_groups_skipped_in_within(self):
        table = fitness_table_from_groups([[1.0], [2.0, 4.0]])
        result = compute_hierarchical_coherence(table)
        assert result.Var_within == pytest.approx(2.0)

    def test_missing_fitness_dropped(self):
        table = pd.DataFrame(
            {"collective_id": [1, 1, 2, 2], "fitness": [1.0, None, 5.0, 5.0]}
        )
        result = compute_hierarchical_coherence(table)
        assert result.H == pytest.approx(1.0)


class TestDegenerate:
    def test_no_variance_is_neutral(self):
        table = fitness_table_from_groups([[2.0, 2.0], [2.0, 2.0]])
        result = compute_hierarchical_coherence(table)
        assert result.H == 0.5
        assert result.ICC == 0.5
        assert result.diagnostics[0].code == DiagnosticCode.EI500

    def test_all_singletons_is_neutral(self):
        table = fitness_table_from_groups([[1.0], [3.0]])
        result = compute_hierarchical_coherence(table)
        assert result.H == 0.5
        assert result.is_degenerate

    def test_empty_table_is_neutral(self):
        result = compute_hierarchical_coherence(pd.DataFrame(columns=["collective_id", "fitness"]))
        assert result.H == 0.5
        assert result.n_components == 0

    def test_missing_column(self):
        with pytest.raises(MissingColumnsError):
            compute_hierarchical_coherence({"collective_id": [1, 2]})


class TestConstructors:
    def test_fitness_table_from_groups(self):
        table = fitness_table_from_groups([[0.5, 0.7], [0.9]])
        assert list(table.columns) == ["collective_id", "component_id", "fitness"]
        assert table["collective_id"].tolist() == [1, 1, 2]
        assert table["component_id"].tolist() == [1, 2, 1]

    def test_experiment(self):
        result = compute_coherence_from_experiment([10.0, 20.0], [[1.0, 1.0], [3.0, 3.0]])
        assert result.H == pytest.approx(1.0)

    def test_experiment_needs_vector_per_group(self):
        with pytest.raises(InputError):
            compute_coherence_from_experiment([1.0, 2.0, 3.0], [[1.0], [2.0]])


class TestProxy:
    def test_weighted_estimate(self):
        estimate = estimate_coherence_proxy(1.0, 0.5)
        assert estimate.estimate == pytest.approx(0.8)
        assert estimate.method == "proxy"
        assert estimate.precision == "+/- 0.20"
