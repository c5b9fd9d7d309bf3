"""Tests for the Integration Index."""

import math

import numpy as np
import pandas as pd
import pytest

from evointegration.exceptions import DiagnosticCode
from evointegration.graph import InteractionNetwork
from evointegration.metrics import compute_integration_from_edges, compute_integration_index


class TestIntegrationIndex:
    def test_complete_graph_has_zero_integration(self, complete_graph):
        """Equal degrees: H_observed = H_max, so I = 0."""
        result = compute_integration_index(complete_graph)
        assert result.H_observed == pytest.approx(result.H_max)
        assert result.I == pytest.approx(0.0, abs=1e-12)
        assert result.connectivity == 1.0
        assert result.n_nodes == 5
        assert result.n_edges == 10
        assert not result.is_degenerate

    def test_star_graph(self, star_graph):
        """Degrees (4, 1, 1, 1, 1): H = 0.5 + 4 * 0.375 = 2 bits."""
        result = compute_integration_index(star_graph)
        assert result.H_observed == pytest.approx(2.0)
        assert result.H_max == pytest.approx(math.log2(5))
        assert result.I == pytest.approx(1 - 2.0 / math.log2(5))
        assert result.connectivity == pytest.approx(0.4)

    def test_star_more_integrated_than_complete(self, star_graph, complete_graph):
        assert compute_integration_index(star_graph).I > compute_integration_index(complete_graph).I

    def test_isolated_nodes_excluded_from_distribution(self):
        """A node with no edges adds nothing to H but counts towards H_max."""
        matrix = np.zeros((4, 4))
        matrix[0, 1] = matrix[1, 0] = 1
        result = compute_integration_index(matrix)
        assert result.H_observed == pytest.approx(1.0)
        assert result.H_max == pytest.approx(2.0)
        assert result.I == pytest.approx(0.5)

    def test_accepts_network_object(self, star_graph):
        net = InteractionNetwork.from_matrix(star_graph)
        assert compute_integration_index(net).I == compute_integration_index(star_graph).I

    def test_value_is_primary_scalar(self, star_graph):
        result = compute_integration_index(star_graph)
        assert result.value == result.I


class TestBounds:
    @pytest.mark.parametrize("seed", range(10))
    def test_random_networks_in_unit_interval(self, seed):
        rng = np.random.default_rng(seed)
        n = int(rng.integers(2, 15))
        matrix = (rng.random((n, n)) < 0.3).astype(float)
        for directed in (False, True):
            result = compute_integration_index(matrix, directed=directed)
            assert 0.0 <= result.I <= 1.0
            assert 0.0 <= result.connectivity <= 1.0

    def test_directed_connectivity_clamped(self):
        """Both arcs of every pair would otherwise give connectivity 2."""
        matrix = np.ones((3, 3)) - np.eye(3)
        result = compute_integration_index(matrix, directed=True)
        assert result.n_edges == 6
        assert result.connectivity == 1.0


class TestDegenerate:
    def test_no_edges(self, empty_graph):
        result = compute_integration_index(empty_graph)
        assert (result.I, result.H_observed, result.H_max, result.connectivity) == (0, 0, 0, 0)
        assert result.n_nodes == 3
        assert result.is_degenerate
        assert result.diagnostics[0].code == DiagnosticCode.EI100

    def test_no_nodes(self):
        result = compute_integration_index(np.zeros((0, 0)))
        assert result.I == 0.0
        assert result.diagnostics[0].code == DiagnosticCode.EI100

    def test_single_node(self):
        result = compute_integration_index([[0.0]])
        assert result.I == 0.0
        assert not math.isnan(result.I)
        assert result.diagnostics[0].code == DiagnosticCode.EI102

    def test_degenerate_logged(self, empty_graph, caplog):
        with caplog.at_level("WARNING", logger="evointegration"):
            compute_integration_index(empty_graph)
        assert "EI100" in caplog.text


class TestFromEdges:
    def test_edge_list_matches_matrix(self):
        edges = pd.DataFrame({"from": ["hub"] * 4, "to": ["a", "b", "c", "d"]})
        result = compute_integration_from_edges(edges)
        assert result.I == pytest.approx(1 - 2.0 / math.log2(5))
        assert result.n_edges == 4
