"""Hierarchical Coherence (H).

Partitions fitness variance into a between-collective and a
within-collective part, as a reading of the level at which selection acts:

    Var_between = Σ_g n_g (mean_g - grand_mean)² / Σ_g n_g
    Var_within  = mean_g var_g          (unweighted mean of group variances)
    H = ICC = Var_between / (Var_between + Var_within)

Var_within is deliberately NOT the size-weighted pooled variance of a
textbook ANOVA; groups of different sizes count equally. Singleton
groups have no variance and are skipped in that mean.
"""

from typing import Any, Optional, Sequence

import pandas as pd

from ..config import DEFAULT_CONFIG, MetricConfig
from ..exceptions import Diagnostic, DiagnosticCode, InputError
from ..logging_config import get_logger
from ..math import Statistics
from ..tables import as_table, numeric_column, require_columns
from .models import CoherenceResult, ProxyEstimate

logger = get_logger(__name__)

FITNESS_COLUMNS = ("collective_id", "fitness")

COHERENCE_PROXY_PRECISION = "+/- 0.20"


def compute_hierarchical_coherence(
    fitness_table: Any, config: Optional[MetricConfig] = None
) -> CoherenceResult:
    """
    Compute Hierarchical Coherence from component fitness grouped by collective.

    Args:
        fitness_table: Table with ``collective_id`` and ``fitness`` columns
            (``component_id`` optional)
        config: Policy constants (defaults to DEFAULT_CONFIG)

    Returns:
        CoherenceResult. Zero or undefined total variance gives the
        neutral H = 0.5 with a diagnostic.

    Raises:
        MissingColumnsError: If ``collective_id`` or ``fitness`` is absent.
    """
    config = config or DEFAULT_CONFIG
    table = as_table(fitness_table)
    require_columns(table, FITNESS_COLUMNS, "fitness_table")

    n_components = len(table)
    n_collectives = int(table["collective_id"].nunique())

    data = pd.DataFrame(
        {"collective_id": table["collective_id"], "fitness": numeric_column(table, "fitness")}
    ).dropna(subset=["fitness"])

    groups = data.groupby("collective_id", sort=True)["fitness"]
    sizes = groups.size()
    means = groups.mean()
    grand_mean = Statistics.mean(data["fitness"])

    if sizes.sum() > 0:
        var_between = float((sizes * (means - grand_mean) ** 2).sum() / sizes.sum())
    else:
        var_between = float("nan")
    var_within = Statistics.mean(groups.var(ddof=1))
    total_var = var_between + var_within

    if not total_var > 0:
        diagnostic = Diagnostic(
            DiagnosticCode.EI500,
            "No variance in fitness data",
            {"n_collectives": n_collectives, "n_components": n_components},
        ).emit(logger)
        return CoherenceResult(
            H=config.neutral_coherence,
            Var_between=0.0,
            Var_within=0.0,
            Var_total=0.0,
            ICC=config.neutral_coherence,
            n_collectives=n_collectives,
            n_components=n_components,
            diagnostics=(diagnostic,),
        )

    coherence = var_between / total_var
    logger.debug(
        "Hierarchical coherence: H=%.4f (between=%.4g, within=%.4g)",
        coherence,
        var_between,
        var_within,
    )

    return CoherenceResult(
        H=coherence,
        Var_between=var_between,
        Var_within=var_within,
        Var_total=total_var,
        ICC=coherence,
        n_collectives=n_collectives,
        n_components=n_components,
    )


def fitness_table_from_groups(groups: Sequence[Sequence[float]]) -> pd.DataFrame:
    """Build a long fitness table from one fitness vector per collective.

    Collectives and components are numbered from 1.
    """
    rows = [
        {"collective_id": g, "component_id": c, "fitness": float(value)}
        for g, members in enumerate(groups, start=1)
        for c, value in enumerate(members, start=1)
    ]
    return pd.DataFrame(rows, columns=["collective_id", "component_id", "fitness"])


def compute_coherence_from_experiment(
    group_fitness: Sequence[float],
    individual_fitness_by_group: Sequence[Sequence[float]],
    config: Optional[MetricConfig] = None,
) -> CoherenceResult:
    """
    Compute Hierarchical Coherence from a multilevel selection experiment.

    Args:
        group_fitness: Group-level fitness, one value per group; only its
            length is used to select the groups
        individual_fitness_by_group: Individual fitness values for each group

    Raises:
        InputError: If there are fewer individual vectors than groups.
    """
    if len(individual_fitness_by_group) < len(group_fitness):
        raise InputError(
            "individual_fitness_by_group needs one vector per group",
            details={
                "groups": str(len(group_fitness)),
                "vectors": str(len(individual_fitness_by_group)),
            },
        )
    groups = [individual_fitness_by_group[i] for i in range(len(group_fitness))]
    return compute_hierarchical_coherence(fitness_table_from_groups(groups), config=config)


def estimate_coherence_proxy(
    proportion_specialized: float,
    role_differentiation: float,
    config: Optional[MetricConfig] = None,
) -> ProxyEstimate:
    """
    Estimate H from reproductive specialization when fitness is unavailable.

    Args:
        proportion_specialized: Proportion of components with specialized roles
        role_differentiation: Degree of role differentiation (0-1)
    """
    config = config or DEFAULT_CONFIG
    estimate = (
        proportion_specialized * config.proxy_primary_weight
        + role_differentiation * config.proxy_secondary_weight
    )
    return ProxyEstimate(estimate=estimate, precision=COHERENCE_PROXY_PRECISION)
