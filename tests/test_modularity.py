"""Tests for Modular Independence."""

import math

import numpy as np
import pytest

from evointegration.config import MetricConfig
from evointegration.exceptions import DiagnosticCode, InputError, InvalidMethodError
from evointegration.metrics import (
    CommunityMethod,
    compute_modular_independence,
    compute_modularity_from_membership,
    modularity_to_independence,
)


def clique(n):
    return np.ones((n, n)) - np.eye(n)


def disconnected_cliques(size):
    w = np.zeros((2 * size, 2 * size))
    w[:size, :size] = clique(size)
    w[size:, size:] = clique(size)
    return w


class TestIndependenceTransform:
    @pytest.mark.parametrize(
        "q, expected",
        [(-0.5, 0.0), (1.0, 1.0), (0.25, 0.5), (0.0, 1 / 3), (-0.9, 0.0), (1.4, 1.0)],
    )
    def test_affine_rescale_and_clamp(self, q, expected):
        assert modularity_to_independence(q) == pytest.approx(expected)

    def test_configurable_offsets(self):
        config = MetricConfig(modularity_offset=0.0, modularity_span=1.0)
        assert modularity_to_independence(0.4, config) == pytest.approx(0.4)


class TestModularIndependence:
    @pytest.mark.parametrize("method", list(CommunityMethod))
    def test_two_cliques_beat_one_clique(self, method):
        split = compute_modular_independence(disconnected_cliques(4), method=method)
        whole = compute_modular_independence(clique(8), method=method)
        assert split.M > whole.M
        assert split.n_communities == 2
        assert split.module_sizes == (4, 4)
        assert split.modularity_Q == pytest.approx(0.5)
        assert split.M == pytest.approx(2 / 3)

    @pytest.mark.parametrize("method", list(CommunityMethod))
    def test_m_in_unit_interval(self, method):
        rng = np.random.default_rng(7)
        for _ in range(5):
            w = rng.random((12, 12)) * (rng.random((12, 12)) < 0.35)
            result = compute_modular_independence(w, method=method)
            assert 0.0 <= result.M <= 1.0
            assert len(result.membership) == 12
            assert sum(result.module_sizes) == 12

    def test_default_method_is_louvain(self):
        result = compute_modular_independence(disconnected_cliques(3))
        assert result.method == "louvain"

    def test_method_name_strings_accepted(self):
        result = compute_modular_independence(disconnected_cliques(3), method="Walktrap")
        assert result.method == "walktrap"

    def test_unknown_method_rejected(self):
        with pytest.raises(InvalidMethodError) as exc_info:
            compute_modular_independence(clique(4), method="infomap")
        assert "louvain" in exc_info.value.supported

    def test_module_entropy_two_equal_modules(self):
        result = compute_modular_independence(disconnected_cliques(4))
        assert result.module_entropy == pytest.approx(math.log(2), abs=1e-8)

    def test_single_clique_is_one_module(self):
        result = compute_modular_independence(clique(6))
        assert result.n_communities == 1
        assert result.modularity_Q == pytest.approx(0.0, abs=1e-12)
        assert result.M == pytest.approx(1 / 3)

    def test_weighted_edges_used(self):
        """Strong within-pair weights split a ring into pairs."""
        w = np.zeros((6, 6))
        for a, b, weight in [(0, 1, 10), (2, 3, 10), (4, 5, 10), (1, 2, 1), (3, 4, 1), (5, 0, 1)]:
            w[a, b] = w[b, a] = weight
        result = compute_modular_independence(w)
        assert result.n_communities == 3


class TestDegenerate:
    def test_no_edges(self):
        result = compute_modular_independence(np.zeros((4, 4)))
        assert result.M == 0.0
        assert result.modularity_Q == 0.0
        assert result.n_communities == 1
        assert result.membership == (0, 0, 0, 0)
        assert result.diagnostics[0].code == DiagnosticCode.EI300

    def test_single_node(self):
        result = compute_modular_independence([[0.0]])
        assert result.M == 0.0
        assert result.n_communities == 1
        assert result.is_degenerate


class TestFromMembership:
    def test_caller_partition(self):
        labels = ["queen"] * 4 + ["worker"] * 4
        result = compute_modularity_from_membership(disconnected_cliques(4), labels)
        assert result.modularity_Q == pytest.approx(0.5)
        assert result.M == pytest.approx(2 / 3)
        assert result.membership == (0, 0, 0, 0, 1, 1, 1, 1)
        assert result.method == "membership"

    def test_poor_partition_lowers_q(self):
        good = compute_modularity_from_membership(disconnected_cliques(3), [0, 0, 0, 1, 1, 1])
        poor = compute_modularity_from_membership(disconnected_cliques(3), [0, 1, 0, 1, 0, 1])
        assert poor.modularity_Q < good.modularity_Q

    def test_length_mismatch(self):
        with pytest.raises(InputError):
            compute_modularity_from_membership(clique(4), [0, 1])


@pytest.mark.slow
@pytest.mark.parametrize("method", list(CommunityMethod))
def test_planted_partition_recovered(method):
    """Three dense 25-node modules over sparse background edges."""
    rng = np.random.default_rng(11)
    size, k = 25, 3
    n = size * k
    block = np.repeat(np.arange(k), size)
    same = block[:, None] == block[None, :]
    prob = np.where(same, 0.5, 0.02)
    upper = np.triu(rng.random((n, n)) < prob, k=1).astype(float)
    w = upper + upper.T

    result = compute_modular_independence(w, method=method)
    assert result.n_communities == k
    assert result.modularity_Q > 0.4
    assert compute_modularity_from_membership(w, block).modularity_Q == pytest.approx(
        result.modularity_Q, abs=0.02
    )
