"""Maximum-curvature threshold of a smoothed outcome curve.

The (predictor, outcome) relationship is smoothed with a cubic smoothing
spline, evaluated on an even grid, and differenced twice; the threshold is
the grid value where the second difference is largest in magnitude.

Smoothness follows R's ``smooth.spline(spar=)`` convention so the same
``spar`` gives comparable curves: with the predictor rescaled to [0, 1]
and knots at the distinct predictor values,

    λ = r · 256^(3·spar - 1),   r = tr(XᵀWX) / tr(Ω)

where X is the cubic B-spline design, W the tie counts and Ω the Gram
matrix of basis second derivatives.
"""

import numpy as np
from scipy.interpolate import BSpline, make_smoothing_spline

from ..exceptions import FitError
from ..logging_config import get_logger

logger = get_logger(__name__)

MIN_DISTINCT_POINTS = 5


def _knots(xs: np.ndarray) -> np.ndarray:
    return np.concatenate([[xs[0]] * 3, xs, [xs[-1]] * 3])


def spar_to_lambda(xs: np.ndarray, weights: np.ndarray, spar: float) -> float:
    """Translate R's ``spar`` into the penalty weight λ for sorted, scaled xs."""
    t = _knots(xs)
    n_basis = len(t) - 4
    basis = BSpline(t, np.eye(n_basis), 3)

    design = basis(xs)
    trace_xwx = float(np.sum(weights[:, None] * design**2))

    # B'' is piecewise linear: two Gauss-Legendre points per interval are exact
    breaks = np.unique(t)
    half = np.diff(breaks) / 2
    mid = breaks[:-1] + half
    nodes, gauss_weights = np.polynomial.legendre.leggauss(2)
    points = (mid[:, None] + half[:, None] * nodes[None, :]).ravel()
    point_weights = (half[:, None] * gauss_weights[None, :]).ravel()
    second = basis.derivative(2)(points)
    trace_omega = float(np.sum(point_weights[:, None] * second**2))

    if trace_omega == 0:
        raise FitError("spline penalty is degenerate")
    return trace_xwx / trace_omega * 256.0 ** (3.0 * spar - 1.0)


def max_curvature_threshold(
    x: np.ndarray, y: np.ndarray, spar: float = 0.5, grid_points: int = 100
) -> float:
    """
    Predictor value of maximum absolute curvature of the smoothed curve.

    Args:
        x: Predictor values (finite)
        y: Outcome values (finite)
        spar: Smoothing parameter, R smooth.spline convention
        grid_points: Evaluation grid size over [min(x), max(x)]

    Returns:
        Grid value at the largest |second difference|

    Raises:
        FitError: With fewer than five distinct predictor values.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)

    # Tied predictor values are averaged and weighted by their count
    distinct, inverse, counts = np.unique(x, return_inverse=True, return_counts=True)
    if distinct.size < MIN_DISTINCT_POINTS:
        raise FitError(
            f"smoothing spline needs {MIN_DISTINCT_POINTS} distinct predictor values, "
            f"got {distinct.size}"
        )
    mean_y = np.bincount(inverse, weights=y) / counts
    weights = counts.astype(float)

    origin = distinct[0]
    span = distinct[-1] - distinct[0]
    scaled = (distinct - origin) / span

    lam = spar_to_lambda(scaled, weights, spar)
    spline = make_smoothing_spline(scaled, mean_y, w=weights, lam=lam)
    logger.debug("Smoothing spline: spar=%.3f lambda=%.3g", spar, lam)

    grid = np.linspace(distinct[0], distinct[-1], grid_points)
    fitted = spline((grid - origin) / span)

    dx = np.diff(grid)
    dy = np.diff(fitted)
    second = np.diff(dy) / dx[:-1]

    return float(grid[int(np.argmax(np.abs(second)))])
