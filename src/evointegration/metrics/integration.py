"""Integration Index (I).

Measures how concentrated a system's interaction network is, using the
Shannon entropy of its degree distribution:

    p_i = degree_i / Σ degree
    H_observed = -Σ p_i log₂ p_i
    H_max = log₂(N)
    I = 1 - H_observed / H_max

A hub-dominated network has a low-entropy degree distribution and a high
I; a network in which every node has the same degree has I = 0.
"""

from typing import Any, Union

from ..exceptions import Diagnostic, DiagnosticCode
from ..graph import InteractionNetwork
from ..logging_config import get_logger
from ..math import Entropy, Statistics
from .models import IntegrationResult

logger = get_logger(__name__)

NetworkLike = Union[InteractionNetwork, Any]


def _zero_result(n_nodes: int, n_edges: int, diagnostic: Diagnostic) -> IntegrationResult:
    return IntegrationResult(
        I=0.0,
        H_observed=0.0,
        H_max=0.0,
        connectivity=0.0,
        n_nodes=n_nodes,
        n_edges=n_edges,
        diagnostics=(diagnostic.emit(logger),),
    )


def compute_integration_index(network: NetworkLike, directed: bool = False) -> IntegrationResult:
    """
    Compute the Integration Index of an interaction network.

    Args:
        network: An InteractionNetwork or an N x N adjacency/weight matrix
        directed: Treat a raw matrix as directed (ignored when an
            InteractionNetwork is passed, which carries its own flag)

    Returns:
        IntegrationResult. Networks with no nodes, no edges or a single
        node give I = 0 with a diagnostic.
    """
    if not isinstance(network, InteractionNetwork):
        network = InteractionNetwork.from_matrix(network, directed=directed)

    n_nodes = network.n_nodes
    n_edges = network.n_edges

    if n_nodes == 1:
        return _zero_result(
            n_nodes,
            n_edges,
            Diagnostic(DiagnosticCode.EI102, "Single-node network: H_max is zero, I undefined"),
        )

    if n_nodes == 0 or n_edges == 0:
        return _zero_result(
            n_nodes,
            n_edges,
            Diagnostic(
                DiagnosticCode.EI100,
                "Network has no nodes or edges",
                {"n_nodes": n_nodes, "n_edges": n_edges},
            ),
        )

    degrees = network.degree()
    total_degree = int(degrees.sum())
    if total_degree == 0:
        return _zero_result(
            n_nodes,
            n_edges,
            Diagnostic(DiagnosticCode.EI101, "Total degree is zero", {"n_nodes": n_nodes}),
        )

    h_observed = Entropy.shannon(degrees)
    h_max = Entropy.maximum(n_nodes)
    connectivity = Statistics.clamp(n_edges / (n_nodes * (n_nodes - 1) / 2))
    integration = Statistics.clamp(1.0 - h_observed / h_max)

    logger.debug(
        "Integration index: I=%.4f H=%.4f H_max=%.4f (n=%d, e=%d)",
        integration,
        h_observed,
        h_max,
        n_nodes,
        n_edges,
    )

    return IntegrationResult(
        I=integration,
        H_observed=h_observed,
        H_max=h_max,
        connectivity=connectivity,
        n_nodes=n_nodes,
        n_edges=n_edges,
    )


def compute_integration_from_edges(edges: Any, directed: bool = False) -> IntegrationResult:
    """Compute the Integration Index from an edge list with ``from``/``to`` columns."""
    return compute_integration_index(InteractionNetwork.from_edges(edges, directed=directed))
