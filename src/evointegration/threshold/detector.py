"""Integration-threshold detection.

``detect_threshold`` locates the cohesion value at which the relationship
between cohesion and an outcome (e.g. reversibility of a transition)
changes regime. ``validate_multi_method`` cross-checks that breakpoint
against two unrelated estimators. Estimator failures never propagate:
they come back as ``failed``/NaN estimates with a diagnostic attached.
"""

from typing import Any, Optional

import numpy as np

from ..config import DEFAULT_CONFIG, MetricConfig
from ..exceptions import Diagnostic, DiagnosticCode
from ..logging_config import get_logger
from ..math import Statistics
from ..tables import as_table, numeric_column, require_columns
from .curvature import max_curvature_threshold
from .logistic import logistic_inflection
from .models import (
    CURVATURE_METHOD,
    LOGISTIC_METHOD,
    SEGMENTED_METHOD,
    MethodEstimate,
    MultiMethodResult,
    ThresholdResult,
    ThresholdSummary,
)
from .segmented import fit_segmented

logger = get_logger(__name__)

DEFAULT_PREDICTOR = "Cohesion_Coefficient_C"
DEFAULT_OUTCOME = "Reversible"


def _load_xy(dataset: Any, predictor_col: str, outcome_col: str) -> tuple[np.ndarray, np.ndarray]:
    """Predictor and outcome arrays with incomplete rows removed."""
    table = as_table(dataset)
    require_columns(table, [predictor_col, outcome_col], "dataset")
    x = numeric_column(table, predictor_col).to_numpy()
    y = numeric_column(table, outcome_col).to_numpy()
    complete = np.isfinite(x) & np.isfinite(y)
    return x[complete], y[complete]


def _linear_r2(x: np.ndarray, y: np.ndarray) -> float:
    if x.size < 2:
        return float("nan")
    design = np.column_stack([np.ones_like(x), x])
    _, fitted, _, _ = Statistics.least_squares(design, y)
    return Statistics.r_squared(y, fitted)


def _detect(x: np.ndarray, y: np.ndarray, initial: float, config: MetricConfig) -> ThresholdResult:
    r2_linear = _linear_r2(x, y)

    try:
        fit = fit_segmented(
            x,
            y,
            initial,
            max_iter=config.segmented_max_iter,
            tol=config.segmented_tol,
            min_points=config.segmented_min_points,
        )
    except Exception as e:
        diagnostic = Diagnostic(
            DiagnosticCode.EI600,
            "Segmented regression failed",
            {"error": str(e), "initial_guess": initial},
        ).emit(logger)
        return ThresholdResult.failed(
            initial,
            r2_linear,
            error=str(e),
            n_observations=int(x.size),
            diagnostics=(diagnostic,),
        )

    margin = config.wald_z * fit.standard_error
    logger.debug(
        "Breakpoint %.4f (se %.4f) after %d iterations",
        fit.breakpoint,
        fit.standard_error,
        fit.iterations,
    )
    return ThresholdResult(
        threshold=fit.breakpoint,
        ci_lower=fit.breakpoint - margin,
        ci_upper=fit.breakpoint + margin,
        r2_linear=r2_linear,
        r2_segmented=fit.r_squared,
        r2_improvement=fit.r_squared - r2_linear,
        slopes=fit.slopes,
        method=SEGMENTED_METHOD,
        standard_error=fit.standard_error,
        iterations=fit.iterations,
        n_observations=int(x.size),
    )


def detect_threshold(
    dataset: Any,
    predictor_col: str = DEFAULT_PREDICTOR,
    outcome_col: str = DEFAULT_OUTCOME,
    initial_guess: Optional[float] = None,
    config: Optional[MetricConfig] = None,
) -> ThresholdResult:
    """
    Detect the breakpoint in the outcome-versus-predictor relationship.

    Args:
        dataset: Table holding the predictor and outcome columns
        predictor_col: Cohesion-like predictor column
        outcome_col: Outcome column (binary or continuous)
        initial_guess: Breakpoint seed (defaults to config.initial_threshold)
        config: Policy constants (defaults to DEFAULT_CONFIG)

    Returns:
        ThresholdResult with a Wald interval (estimate ± z·se). When the
        breakpoint fit fails, ``method == "failed"``, ``threshold`` is the
        initial guess and the interval bounds are NaN.

    Raises:
        MissingColumnsError: If either column is absent.
    """
    config = config or DEFAULT_CONFIG
    initial = config.initial_threshold if initial_guess is None else float(initial_guess)
    x, y = _load_xy(dataset, predictor_col, outcome_col)
    return _detect(x, y, initial, config)


def _alternative(estimator, method: str, code: DiagnosticCode, *args, **kwargs) -> MethodEstimate:
    try:
        return MethodEstimate(threshold=float(estimator(*args, **kwargs)), method=method)
    except Exception as e:
        diagnostic = Diagnostic(code, f"{method} estimate unavailable", {"error": str(e)}).emit(
            logger
        )
        return MethodEstimate(
            threshold=float("nan"), method=method, error=str(e), diagnostics=(diagnostic,)
        )


def validate_multi_method(
    dataset: Any,
    predictor_col: str = DEFAULT_PREDICTOR,
    outcome_col: str = DEFAULT_OUTCOME,
    initial_guess: Optional[float] = None,
    config: Optional[MetricConfig] = None,
) -> MultiMethodResult:
    """
    Estimate the threshold three ways and summarise their agreement.

    Methods:
        segmented: breakpoint regression (``detect_threshold``)
        logistic_inflection: -b0/b1 of a logistic fit
        max_curvature: peak |second difference| of a smoothing spline

    A method that fails contributes NaN (a failed segmented fit keeps its
    fallback record but is left out of the summary). The summary's mean,
    sd, min and max cover only the methods that succeeded.

    ``initial_guess`` seeds the segmented fit as in ``detect_threshold``.

    Raises:
        MissingColumnsError: If either column is absent.
    """
    config = config or DEFAULT_CONFIG
    initial = config.initial_threshold if initial_guess is None else float(initial_guess)
    x, y = _load_xy(dataset, predictor_col, outcome_col)

    segmented = _detect(x, y, initial, config)
    logistic = _alternative(logistic_inflection, LOGISTIC_METHOD, DiagnosticCode.EI601, x, y)
    curvature = _alternative(
        max_curvature_threshold,
        CURVATURE_METHOD,
        DiagnosticCode.EI602,
        x,
        y,
        spar=config.spline_spar,
        grid_points=config.curvature_grid_points,
    )

    estimates = [
        segmented.threshold if segmented.succeeded else float("nan"),
        logistic.threshold,
        curvature.threshold,
    ]
    mean, sd, low, high, n_methods = Statistics.summarize(estimates)
    summary = ThresholdSummary(
        mean_threshold=mean,
        sd_threshold=sd,
        min_threshold=low,
        max_threshold=high,
        n_methods=n_methods,
    )

    diagnostics: tuple[Diagnostic, ...] = ()
    if n_methods == 0:
        diagnostics = (
            Diagnostic(DiagnosticCode.EI603, "No method produced a threshold").emit(logger),
        )

    return MultiMethodResult(
        segmented=segmented,
        logistic_inflection=logistic,
        max_curvature=curvature,
        summary=summary,
        diagnostics=diagnostics,
    )
