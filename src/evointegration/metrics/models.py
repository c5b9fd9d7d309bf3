"""Result records returned by the metric functions.

Every record is a frozen dataclass whose first field is the metric's
primary scalar (I, C, M, E, H). Vectors are stored as tuples so a result
can be shared and serialized without copying. Degenerate inputs produce a
well-defined record with at least one entry in ``diagnostics``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any

from ..exceptions import Diagnostic


def _plain(value: Any) -> Any:
    if isinstance(value, Diagnostic):
        return value.to_json()
    if isinstance(value, tuple):
        return [_plain(v) for v in value]
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


class MetricResult:
    """Shared behaviour for metric result records."""

    primary: str = ""

    @property
    def value(self) -> float:
        """The metric's primary scalar."""
        return getattr(self, self.primary)

    @property
    def is_degenerate(self) -> bool:
        """True when the result is a documented fallback for degenerate input."""
        return bool(getattr(self, "diagnostics", ()))

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict; NaN becomes None."""
        return {f.name: _plain(getattr(self, f.name)) for f in fields(self)}  # type: ignore[arg-type]


@dataclass(frozen=True)
class IntegrationResult(MetricResult):
    """Integration Index: 1 - H_observed / H_max over the degree distribution."""

    primary = "I"

    I: float
    H_observed: float
    H_max: float
    connectivity: float
    n_nodes: int
    n_edges: int
    diagnostics: tuple[Diagnostic, ...] = ()


@dataclass(frozen=True)
class CohesionResult(MetricResult):
    """Cohesion Coefficient: mean clamped viability loss on isolation."""

    primary = "C"

    C: float
    C_sd: float
    component_cohesions: tuple[float, ...]
    high_cohesion_proportion: float
    n_components: int
    diagnostics: tuple[Diagnostic, ...] = ()


@dataclass(frozen=True)
class ModularityResult(MetricResult):
    """Modular Independence: modularity Q rescaled onto [0, 1]."""

    primary = "M"

    M: float
    modularity_Q: float
    n_communities: int
    membership: tuple[int, ...]
    module_sizes: tuple[int, ...]
    module_entropy: float
    method: str
    diagnostics: tuple[Diagnostic, ...] = ()


@dataclass(frozen=True)
class EmergenceResult(MetricResult):
    """Emergent Complexity: relative deviation from an additive prediction."""

    primary = "E"

    E: float
    deviation: float
    predicted: float
    observed: float
    synergistic: bool
    fold_change: float
    method: str
    diagnostics: tuple[Diagnostic, ...] = ()


@dataclass(frozen=True)
class InformationEmergenceResult(MetricResult):
    """Emergent Complexity from mutual information between parts and whole."""

    primary = "E"

    E: float
    mutual_information: float
    H_components: float
    H_joint: float
    diagnostics: tuple[Diagnostic, ...] = ()


@dataclass(frozen=True)
class CoherenceResult(MetricResult):
    """Hierarchical Coherence: share of fitness variance between collectives."""

    primary = "H"

    H: float
    Var_between: float
    Var_within: float
    Var_total: float
    ICC: float
    n_collectives: int
    n_components: int
    diagnostics: tuple[Diagnostic, ...] = ()


@dataclass(frozen=True)
class ProxyEstimate(MetricResult):
    """A metric estimated from subjective [0, 1] scores instead of measurements."""

    primary = "estimate"

    estimate: float
    precision: str
    method: str = "proxy"
