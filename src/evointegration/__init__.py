"""
evointegration - Integration metrics for biological collectives

Scalar measures of how far a biological collective behaves as one unit
rather than a loose aggregate of parts, and detection of the cohesion
threshold (kappa ~ 0.73) beyond which evolutionary transitions stop being
reversible.
"""

__version__ = "0.1.0"

from .config import DEFAULT_CONFIG, MetricConfig, load_config
from .graph import InteractionNetwork
from .metrics import (
    CommunityMethod,
    PredictionMethod,
    compute_coherence_from_experiment,
    compute_cohesion_coefficient,
    compute_cohesion_from_survival,
    compute_emergence_information,
    compute_emergent_complexity,
    compute_hierarchical_coherence,
    compute_integration_from_edges,
    compute_integration_index,
    compute_modular_independence,
    compute_modularity_from_membership,
    estimate_coherence_proxy,
    estimate_cohesion_proxy,
    estimate_emergence_from_traits,
    fitness_table_from_groups,
)
from .threshold import detect_threshold, validate_multi_method

__all__ = [
    "InteractionNetwork",
    "MetricConfig",
    "DEFAULT_CONFIG",
    "load_config",
    "compute_integration_index",
    "compute_integration_from_edges",
    "compute_cohesion_coefficient",
    "compute_cohesion_from_survival",
    "estimate_cohesion_proxy",
    "compute_modular_independence",
    "compute_modularity_from_membership",
    "CommunityMethod",
    "compute_emergent_complexity",
    "compute_emergence_information",
    "estimate_emergence_from_traits",
    "PredictionMethod",
    "compute_hierarchical_coherence",
    "compute_coherence_from_experiment",
    "fitness_table_from_groups",
    "estimate_coherence_proxy",
    "detect_threshold",
    "validate_multi_method",
]
