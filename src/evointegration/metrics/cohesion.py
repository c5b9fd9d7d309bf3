"""Cohesion Coefficient (C).

Quantifies how much components depend on the collective to survive:

    V_i = viability_isolated / viability_integrated
    cohesion_i = clamp(1 - V_i, 0, 1)
    C = mean(cohesion_i)

A component that does better alone than integrated (V_i > 1) has
cohesion 0, never a negative value.
"""

from typing import Any, Optional

import numpy as np

from ..config import DEFAULT_CONFIG, MetricConfig
from ..exceptions import Diagnostic, DiagnosticCode
from ..logging_config import get_logger
from ..math import Statistics
from ..tables import as_table, numeric_column, require_columns
from .models import CohesionResult, ProxyEstimate

logger = get_logger(__name__)

VIABILITY_COLUMNS = ("viability_isolated", "viability_integrated")
SURVIVAL_COLUMNS = ("time_isolated", "time_integrated")

COHESION_PROXY_PRECISION = "+/- 0.15"


def compute_cohesion_coefficient(
    viability_table: Any, config: Optional[MetricConfig] = None
) -> CohesionResult:
    """
    Compute the Cohesion Coefficient from per-component viability.

    Args:
        viability_table: Table with ``viability_isolated`` and
            ``viability_integrated`` columns (``component_id`` optional)
        config: Policy constants (defaults to DEFAULT_CONFIG)

    Returns:
        CohesionResult. An empty table gives C = 0 with a diagnostic.

    Raises:
        MissingColumnsError: If a viability column is absent.
    """
    config = config or DEFAULT_CONFIG
    table = as_table(viability_table)
    require_columns(table, VIABILITY_COLUMNS, "viability_table")

    n = len(table)
    if n == 0:
        diagnostic = Diagnostic(DiagnosticCode.EI200, "No viability data provided").emit(logger)
        return CohesionResult(
            C=0.0,
            C_sd=float("nan"),
            component_cohesions=(),
            high_cohesion_proportion=0.0,
            n_components=0,
            diagnostics=(diagnostic,),
        )

    isolated = numeric_column(table, "viability_isolated").to_numpy()
    integrated = numeric_column(table, "viability_integrated").to_numpy()

    with np.errstate(divide="ignore", invalid="ignore"):
        ratio = isolated / integrated
    cohesions = np.clip(1.0 - ratio, 0.0, 1.0)

    diagnostics: tuple[Diagnostic, ...] = ()
    # Zero integrated viability gives ±inf ratios; they are excluded like missing values
    cohesions = np.where(np.isfinite(ratio), cohesions, np.nan)
    n_dropped = int(np.sum(~np.isfinite(cohesions)))
    if n_dropped:
        diagnostics = (
            Diagnostic(
                DiagnosticCode.EI201,
                "Components with missing or non-finite viability ratio ignored",
                {"n_ignored": n_dropped},
            ).emit(logger),
        )

    high_count = int(np.sum(cohesions[np.isfinite(cohesions)] > config.high_cohesion_threshold))
    mean_cohesion = Statistics.mean(cohesions)

    logger.debug("Cohesion coefficient: C=%.4f over %d components", mean_cohesion, n)

    return CohesionResult(
        C=mean_cohesion,
        C_sd=Statistics.stdev(cohesions),
        component_cohesions=tuple(float(c) for c in cohesions),
        high_cohesion_proportion=high_count / n,
        n_components=n,
        diagnostics=diagnostics,
    )


def compute_cohesion_from_survival(
    survival_table: Any, config: Optional[MetricConfig] = None
) -> CohesionResult:
    """
    Compute the Cohesion Coefficient from survival times.

    Both ``time_isolated`` and ``time_integrated`` are scaled by the
    longest integrated survival time, then treated as viabilities.
    """
    table = as_table(survival_table)
    require_columns(table, SURVIVAL_COLUMNS, "survival_table")

    if len(table) == 0:
        viability = table.assign(viability_isolated=[], viability_integrated=[])
        return compute_cohesion_coefficient(viability, config=config)

    time_integrated = numeric_column(table, "time_integrated")
    longest = time_integrated.max()
    viability = table.assign(
        viability_isolated=numeric_column(table, "time_isolated") / longest,
        viability_integrated=time_integrated / longest,
    )
    return compute_cohesion_coefficient(viability, config=config)


def estimate_cohesion_proxy(
    trait_loss: float, functional_dependence: float, config: Optional[MetricConfig] = None
) -> ProxyEstimate:
    """
    Estimate C from proxy scores when viability cannot be measured.

    Args:
        trait_loss: Proportion of essential traits lost when isolated (0-1)
        functional_dependence: Degree of functional interdependence (0-1)

    Returns:
        ProxyEstimate with the weighted score and its stated precision.
    """
    config = config or DEFAULT_CONFIG
    estimate = (
        trait_loss * config.proxy_primary_weight
        + functional_dependence * config.proxy_secondary_weight
    )
    return ProxyEstimate(estimate=estimate, precision=COHESION_PROXY_PRECISION)
