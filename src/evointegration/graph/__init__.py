"""Interaction-network models and community detection."""

from .algorithms import compute_modularity, fast_greedy, louvain, relabel, walktrap
from .models import InteractionNetwork, Partition

__all__ = [
    "InteractionNetwork",
    "Partition",
    "compute_modularity",
    "louvain",
    "walktrap",
    "fast_greedy",
    "relabel",
]
