"""Emergent Complexity (E).

Two readings of non-additivity:

* Value form: how far an observed collective value departs from an
  additive prediction built from its parts,

      deviation = |observed - predicted| / predicted,   E = min(1, deviation)

* Information form: the mutual information between parts and whole,

      MI = Σ H(component) - H(joint),   E = min(1, |MI| / Σ H(component))

  Σ H(component) treats the components as independent; it is an
  approximation, not the joint entropy of the components.
"""

from enum import Enum
from typing import Any, Optional, Sequence, Union

import numpy as np

from ..config import DEFAULT_CONFIG, MetricConfig
from ..exceptions import Diagnostic, DiagnosticCode, InvalidMethodError
from ..logging_config import get_logger
from ..math import Entropy, Statistics
from .models import EmergenceResult, InformationEmergenceResult

logger = get_logger(__name__)


class PredictionMethod(str, Enum):
    """How a collective value is predicted from its parts."""

    SUM = "sum"
    MEAN = "mean"
    MAX = "max"

    @classmethod
    def parse(cls, value: Union["PredictionMethod", str]) -> "PredictionMethod":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidMethodError("prediction method", value, [m.value for m in cls]) from None

    def predict(self, states: np.ndarray) -> float:
        """Additive prediction of the collective value; missing states are skipped."""
        finite = Statistics.finite(states)
        if self is PredictionMethod.SUM:
            return float(finite.sum())
        if self is PredictionMethod.MEAN:
            # Scaled by the full count, missing entries included
            return Statistics.mean(finite) * states.size
        return float(finite.max()) if finite.size else float("nan")


def compute_emergent_complexity(
    component_states: Sequence[float],
    collective_state: float,
    prediction_method: Union[PredictionMethod, str] = PredictionMethod.SUM,
    config: Optional[MetricConfig] = None,
) -> EmergenceResult:
    """
    Compute Emergent Complexity from component and collective values.

    Args:
        component_states: Measured value of each component
        collective_state: Observed value of the collective
        prediction_method: "sum" (default), "mean" (mean x count) or "max"
        config: Policy constants (defaults to DEFAULT_CONFIG)

    Returns:
        EmergenceResult. No components gives E = 0 with a diagnostic. A
        prediction of exactly 0 is replaced by ``prediction_epsilon``
        (1e-3), which loses precision for collectives near zero.

    Raises:
        InvalidMethodError: If *prediction_method* is unknown.
    """
    config = config or DEFAULT_CONFIG
    method = PredictionMethod.parse(prediction_method)
    states = np.asarray(component_states, dtype=float).ravel()
    observed = float(collective_state)

    if states.size == 0:
        diagnostic = Diagnostic(DiagnosticCode.EI400, "No component states provided").emit(logger)
        return EmergenceResult(
            E=0.0,
            deviation=0.0,
            predicted=0.0,
            observed=observed,
            synergistic=False,
            fold_change=float("nan"),
            method=method.value,
            diagnostics=(diagnostic,),
        )

    predicted = method.predict(states)

    diagnostics: tuple[Diagnostic, ...] = ()
    if predicted == 0:
        predicted = config.prediction_epsilon
        diagnostics = (
            Diagnostic(
                DiagnosticCode.EI401,
                "Additive prediction is zero; epsilon substituted",
                {"epsilon": config.prediction_epsilon},
            ).emit(logger),
        )

    deviation = abs(observed - predicted) / predicted
    emergence = deviation if np.isnan(deviation) else min(1.0, deviation)

    return EmergenceResult(
        E=emergence,
        deviation=deviation,
        predicted=predicted,
        observed=observed,
        synergistic=bool(observed > predicted),
        fold_change=observed / predicted,
        method=method.value,
        diagnostics=diagnostics,
    )


def compute_emergence_information(
    component_distributions: Sequence[Any], joint_distribution: Any
) -> InformationEmergenceResult:
    """
    Compute Emergent Complexity from component and joint distributions.

    Args:
        component_distributions: One probability vector (or mapping) per
            component
        joint_distribution: Probability vector (or mapping) over the
            joint outcomes

    Masses are used as given: non-positive entries are dropped before the
    log and nothing is renormalized.

    Returns:
        InformationEmergenceResult. Zero component entropy gives E = 0
        with a diagnostic.
    """
    h_components = float(sum(Entropy.of_masses(p) for p in component_distributions))
    h_joint = Entropy.of_masses(joint_distribution)
    mutual_information = h_components - h_joint

    if h_components == 0:
        diagnostic = Diagnostic(
            DiagnosticCode.EI402,
            "Component entropy is zero; emergence undefined",
            {"H_joint": h_joint},
        ).emit(logger)
        return InformationEmergenceResult(
            E=0.0,
            mutual_information=mutual_information,
            H_components=h_components,
            H_joint=h_joint,
            diagnostics=(diagnostic,),
        )

    return InformationEmergenceResult(
        E=min(1.0, abs(mutual_information) / h_components),
        mutual_information=mutual_information,
        H_components=h_components,
        H_joint=h_joint,
    )


def estimate_emergence_from_traits(
    component_traits: Sequence[float], collective_trait: float
) -> EmergenceResult:
    """Emergent Complexity of a measured collective trait against the sum of its parts."""
    return compute_emergent_complexity(component_traits, collective_trait, PredictionMethod.SUM)
