"""Modular Independence (M).

Detects decomposable structure with community detection and rescales the
resulting modularity Q from its theoretical range [-0.5, 1] onto [0, 1]:

    M = clamp((Q + 0.5) / 1.5, 0, 1)

Different detection methods can return different partitions for the same
network; the method used is reported with every result. Louvain and
walktrap are deterministic here, but partitions are not bit-compatible
with other implementations of the same algorithms.
"""

from enum import Enum
from typing import Any, Callable, Optional, Sequence, Union

import numpy as np

from ..config import DEFAULT_CONFIG, MetricConfig
from ..exceptions import Diagnostic, DiagnosticCode, InputError, InvalidMethodError
from ..graph import (
    InteractionNetwork,
    Partition,
    compute_modularity,
    fast_greedy,
    louvain,
    relabel,
    walktrap,
)
from ..logging_config import get_logger
from ..math import Entropy, Statistics
from .models import ModularityResult

logger = get_logger(__name__)


class CommunityMethod(str, Enum):
    """Community-detection algorithms available to ModularIndependence."""

    LOUVAIN = "louvain"
    WALKTRAP = "walktrap"
    FAST_GREEDY = "fast_greedy"

    @classmethod
    def parse(cls, value: Union["CommunityMethod", str]) -> "CommunityMethod":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidMethodError(
                "community detection method", value, [m.value for m in cls]
            ) from None


def _detector(method: CommunityMethod, config: MetricConfig) -> Callable[[np.ndarray], np.ndarray]:
    if method is CommunityMethod.LOUVAIN:
        return lambda w: louvain(
            w, max_passes=config.louvain_max_passes, max_coarsen=config.louvain_max_coarsen
        )
    if method is CommunityMethod.WALKTRAP:
        return lambda w: walktrap(w, steps=config.walktrap_steps)
    return fast_greedy


def modularity_to_independence(q: float, config: Optional[MetricConfig] = None) -> float:
    """Affine rescale of modularity Q onto [0, 1]: clamp((Q + 0.5) / 1.5, 0, 1)."""
    config = config or DEFAULT_CONFIG
    return Statistics.clamp((q + config.modularity_offset) / config.modularity_span)


def _as_network(network: Any) -> InteractionNetwork:
    if isinstance(network, InteractionNetwork):
        return network
    return InteractionNetwork.from_matrix(network)


def _result(partition: Partition, n_nodes: int, config: MetricConfig) -> ModularityResult:
    sizes = partition.sizes()
    module_entropy = Entropy.proportions_nats(
        sizes / n_nodes, epsilon=config.module_entropy_epsilon
    )
    return ModularityResult(
        M=modularity_to_independence(partition.modularity, config),
        modularity_Q=partition.modularity,
        n_communities=partition.n_communities,
        membership=tuple(int(c) for c in partition.membership),
        module_sizes=tuple(int(s) for s in sizes),
        module_entropy=module_entropy,
        method=partition.method,
    )


def compute_modular_independence(
    network: Any,
    method: Union[CommunityMethod, str] = CommunityMethod.LOUVAIN,
    config: Optional[MetricConfig] = None,
) -> ModularityResult:
    """
    Compute Modular Independence by community detection.

    Args:
        network: InteractionNetwork or N x N weight matrix (read as
            weighted and undirected)
        method: "louvain" (default), "walktrap" or "fast_greedy"
        config: Policy constants (defaults to DEFAULT_CONFIG)

    Returns:
        ModularityResult. Networks with fewer than two nodes or no edges
        give M = 0 and a single community, with a diagnostic.

    Raises:
        InvalidMethodError: If *method* is not a known algorithm.
    """
    config = config or DEFAULT_CONFIG
    method = CommunityMethod.parse(method)
    network = _as_network(network)

    n_nodes = network.n_nodes
    n_edges = network.n_edges
    if n_nodes < 2 or n_edges == 0:
        diagnostic = Diagnostic(
            DiagnosticCode.EI300,
            "Network too small or no edges",
            {"n_nodes": n_nodes, "n_edges": n_edges},
        ).emit(logger)
        return ModularityResult(
            M=0.0,
            modularity_Q=0.0,
            n_communities=1,
            membership=tuple([0] * n_nodes),
            module_sizes=(n_nodes,) if n_nodes else (),
            module_entropy=0.0,
            method=method.value,
            diagnostics=(diagnostic,),
        )

    weights = network.undirected_weights
    membership = _detector(method, config)(weights)
    partition = Partition(
        membership=membership,
        modularity=compute_modularity(weights, membership),
        method=method.value,
    )

    logger.debug(
        "Modular independence via %s: Q=%.4f, %d communities",
        method.value,
        partition.modularity,
        partition.n_communities,
    )
    return _result(partition, n_nodes, config)


def compute_modularity_from_membership(
    network: Any, membership: Sequence[Any], config: Optional[MetricConfig] = None
) -> ModularityResult:
    """
    Compute Q and M for a caller-supplied community assignment.

    Args:
        network: InteractionNetwork or N x N weight matrix
        membership: One community label per node (any hashable labels)

    Raises:
        InputError: If the membership length does not match the network.
    """
    config = config or DEFAULT_CONFIG
    network = _as_network(network)
    labels = list(membership)
    if len(labels) != network.n_nodes:
        raise InputError(
            f"membership has {len(labels)} entries for {network.n_nodes} nodes",
            details={"n_nodes": str(network.n_nodes)},
        )

    assignment = relabel(labels)
    partition = Partition(
        membership=assignment,
        modularity=compute_modularity(network.undirected_weights, assignment),
        method="membership",
    )
    return _result(partition, max(network.n_nodes, 1), config)
