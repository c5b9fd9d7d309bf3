"""Two-regime (breakpoint) linear regression.

Fits

    y = b0 + b1·x + β·(x - ψ)₊

by Muggeo's iterative re-linearisation: at the current breakpoint ψ the
model is augmented with U = (x - ψ)₊ and V = -1(x > ψ); the coefficient γ
on V estimates how far ψ is from the optimum, and ψ ← ψ + γ/β. Steps that
do not lower the residual sum of squares or leave the predictor range are
halved, and the iteration stops when halving no longer helps. The
converged breakpoint is checked against the exact profile minimum.

Reference: Muggeo (2003), "Estimating regression models with unknown
break-points", Statistics in Medicine 22:3055-3071.
"""

from dataclasses import dataclass

import numpy as np

from ..exceptions import SegmentedFitError
from ..logging_config import get_logger
from ..math import Statistics

logger = get_logger(__name__)

MAX_STEP_HALVINGS = 10


@dataclass(frozen=True)
class SegmentedFit:
    """Converged breakpoint regression."""

    breakpoint: float
    standard_error: float
    intercept: float
    slope_left: float
    slope_change: float
    r_squared: float
    iterations: int

    @property
    def slope_right(self) -> float:
        return self.slope_left + self.slope_change

    @property
    def slopes(self) -> tuple[float, float]:
        return (self.slope_left, self.slope_right)


def _hinge(x: np.ndarray, psi: float) -> np.ndarray:
    return np.maximum(x - psi, 0.0)


def _admissible(x: np.ndarray, psi: float, min_points: int) -> bool:
    """ψ must leave at least *min_points* observations in each regime."""
    left = int(np.sum(x <= psi))
    right = int(np.sum(x > psi))
    return left >= min_points and right >= min_points


def _rss_at(x: np.ndarray, y: np.ndarray, psi: float) -> float:
    design = np.column_stack([np.ones_like(x), x, _hinge(x, psi)])
    _, _, rss, _ = Statistics.least_squares(design, y)
    return rss


def _profile_minimum(x: np.ndarray, y: np.ndarray, min_points: int) -> tuple[float, float]:
    """Exact least-squares breakpoint over the admissible range (Hudson, 1966).

    Between consecutive distinct predictor values the regimes are fixed,
    so the hinge model is linear in (b0, b1, β, -βψ) and its unconstrained
    fit gives the best ψ in that interval whenever it lands inside it.
    Otherwise the interval minimum sits on an endpoint.
    """
    values, counts = np.unique(x, return_counts=True)
    n_left = np.cumsum(counts)
    ones = np.ones_like(x)

    best_psi, best_rss = float("nan"), np.inf
    for j in range(values.size - 1):
        if n_left[j] < min_points or x.size - n_left[j] < min_points:
            continue
        candidates = [float(values[j])]
        right = (x > values[j]).astype(float)
        coef, _, _, _ = Statistics.least_squares(
            np.column_stack([ones, x, x * right, right]), y
        )
        if coef[2] != 0:
            psi = -coef[3] / coef[2]
            if values[j] < psi < values[j + 1]:
                candidates.append(float(psi))
        for psi in candidates:
            rss = _rss_at(x, y, psi)
            if rss < best_rss:
                best_psi, best_rss = psi, rss
    return best_psi, best_rss


def fit_segmented(
    x: np.ndarray,
    y: np.ndarray,
    initial: float,
    max_iter: int = 30,
    tol: float = 1e-5,
    min_points: int = 2,
) -> SegmentedFit:
    """
    Estimate a single breakpoint and the slopes on either side of it.

    The Muggeo iteration starts at *initial* and stops once the full step
    |γ/β| or the relative drop in RSS falls below *tol*, or once step
    halving can no longer lower the RSS. RSS(ψ) has a kink at every data
    point, so the iteration can settle next to a local minimum; the
    result is then compared with the exact profile minimum and the better
    of the two is kept, much as R's ``segmented`` restarts to escape
    local optima.

    Args:
        x: Predictor values (finite)
        y: Outcome values (finite), same length as x
        initial: Starting breakpoint
        max_iter: Iteration cap
        tol: Convergence tolerance on |γ/β| relative to the predictor
            range, and on the relative RSS decrease
        min_points: Observations required in each regime

    Returns:
        SegmentedFit at the least-squares breakpoint

    Raises:
        SegmentedFitError: If the predictor is constant, there are too
            few observations, the initial breakpoint is inadmissible,
            there is no slope change to locate, or the iteration does not
            converge.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    n = x.size

    if n < max(5, 2 * min_points):
        raise SegmentedFitError(f"too few observations ({n})")
    x_range = float(np.ptp(x))
    if x_range == 0:
        raise SegmentedFitError("predictor is constant")
    if not _admissible(x, initial, min_points):
        raise SegmentedFitError(
            f"initial breakpoint {initial} leaves fewer than {min_points} observations in a regime"
        )

    psi = float(initial)
    for iteration in range(1, max_iter + 1):
        design = np.column_stack([np.ones_like(x), x, _hinge(x, psi), -(x > psi).astype(float)])
        coef, _, _, _ = Statistics.least_squares(design, y)
        slope, beta, gamma = coef[1], coef[2], coef[3]

        slope_scale = max(abs(slope), float(np.std(y)) / x_range, np.finfo(float).tiny)
        if abs(beta) <= 1e-8 * slope_scale:
            raise SegmentedFitError("no change in slope to locate", iterations=iteration)

        step = gamma / beta
        if abs(step) <= tol * x_range:
            break

        current_rss = _rss_at(x, y, psi)
        factor = 1.0
        for _ in range(MAX_STEP_HALVINGS):
            candidate = psi + factor * step
            if _admissible(x, candidate, min_points):
                candidate_rss = _rss_at(x, y, candidate)
                if candidate_rss < current_rss:
                    break
            factor /= 2
        else:
            logger.debug(
                "Segmented iteration %d: step halving exhausted, RSS no longer "
                "decreases at psi %.6f",
                iteration,
                psi,
            )
            break

        logger.debug("Segmented iteration %d: psi %.6f -> %.6f", iteration, psi, candidate)
        psi = candidate
        if current_rss - candidate_rss <= tol * current_rss:
            break
    else:
        raise SegmentedFitError(f"no convergence after {max_iter} iterations", iterations=max_iter)

    profile_psi, profile_rss = _profile_minimum(x, y, min_points)
    if profile_rss < _rss_at(x, y, psi):
        logger.debug("Segmented fit moved from local minimum %.6f to %.6f", psi, profile_psi)
        psi = profile_psi

    # Standard error of ψ from the augmented model at the solution:
    # se(ψ) = se(γ) / |β| (γ ≈ 0 at convergence)
    design = np.column_stack([np.ones_like(x), x, _hinge(x, psi), -(x > psi).astype(float)])
    coef, _, _, cov = Statistics.least_squares(design, y)
    if cov is None or coef[2] == 0:
        raise SegmentedFitError("breakpoint standard error undefined", iterations=iteration)
    standard_error = float(np.sqrt(max(cov[3, 3], 0.0)) / abs(coef[2]))

    final = np.column_stack([np.ones_like(x), x, _hinge(x, psi)])
    final_coef, fitted, _, _ = Statistics.least_squares(final, y)

    return SegmentedFit(
        breakpoint=psi,
        standard_error=standard_error,
        intercept=float(final_coef[0]),
        slope_left=float(final_coef[1]),
        slope_change=float(final_coef[2]),
        r_squared=Statistics.r_squared(y, fitted),
        iterations=iteration,
    )
