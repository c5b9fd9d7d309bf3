"""The five integration metrics: I, C, M, E and H."""

from .coherence import (
    compute_coherence_from_experiment,
    compute_hierarchical_coherence,
    estimate_coherence_proxy,
    fitness_table_from_groups,
)
from .cohesion import (
    compute_cohesion_coefficient,
    compute_cohesion_from_survival,
    estimate_cohesion_proxy,
)
from .emergence import (
    PredictionMethod,
    compute_emergence_information,
    compute_emergent_complexity,
    estimate_emergence_from_traits,
)
from .integration import compute_integration_from_edges, compute_integration_index
from .models import (
    CoherenceResult,
    CohesionResult,
    EmergenceResult,
    InformationEmergenceResult,
    IntegrationResult,
    MetricResult,
    ModularityResult,
    ProxyEstimate,
)
from .modularity import (
    CommunityMethod,
    compute_modular_independence,
    compute_modularity_from_membership,
    modularity_to_independence,
)

__all__ = [
    "compute_integration_index",
    "compute_integration_from_edges",
    "compute_cohesion_coefficient",
    "compute_cohesion_from_survival",
    "estimate_cohesion_proxy",
    "compute_modular_independence",
    "compute_modularity_from_membership",
    "modularity_to_independence",
    "CommunityMethod",
    "compute_emergent_complexity",
    "compute_emergence_information",
    "estimate_emergence_from_traits",
    "PredictionMethod",
    "compute_hierarchical_coherence",
    "compute_coherence_from_experiment",
    "fitness_table_from_groups",
    "estimate_coherence_proxy",
    "MetricResult",
    "IntegrationResult",
    "CohesionResult",
    "ModularityResult",
    "EmergenceResult",
    "InformationEmergenceResult",
    "CoherenceResult",
    "ProxyEstimate",
]
