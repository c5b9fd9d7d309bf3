"""Descriptive statistics and least-squares helpers shared by the metrics."""

import math
from typing import Optional, Sequence

import numpy as np


class Statistics:
    """Statistical helpers with R-style missing-value handling."""

    @staticmethod
    def finite(values: Sequence[float]) -> np.ndarray:
        """Return the finite entries of *values* as a float array."""
        arr = np.asarray(values, dtype=float).ravel()
        return arr[np.isfinite(arr)]

    @staticmethod
    def mean(values: Sequence[float]) -> float:
        """Arithmetic mean ignoring missing values; NaN when none remain."""
        arr = Statistics.finite(values)
        if arr.size == 0:
            return float("nan")
        return float(arr.mean())

    @staticmethod
    def stdev(values: Sequence[float]) -> float:
        """Sample standard deviation ignoring missing values; NaN below 2 values."""
        arr = Statistics.finite(values)
        if arr.size < 2:
            return float("nan")
        return float(arr.std(ddof=1))

    @staticmethod
    def variance(values: Sequence[float]) -> float:
        """Sample variance ignoring missing values; NaN below 2 values."""
        arr = Statistics.finite(values)
        if arr.size < 2:
            return float("nan")
        return float(arr.var(ddof=1))

    @staticmethod
    def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
        """Clamp a scalar into [lower, upper]; NaN passes through."""
        if math.isnan(value):
            return value
        return max(lower, min(upper, value))

    @staticmethod
    def r_squared(y: np.ndarray, fitted: np.ndarray) -> float:
        """
        Coefficient of determination R² = 1 - RSS / TSS.

        Returns NaN when y has no variance.
        """
        y = np.asarray(y, dtype=float)
        rss = float(np.sum((y - fitted) ** 2))
        tss = float(np.sum((y - y.mean()) ** 2))
        if tss == 0:
            return float("nan")
        return 1.0 - rss / tss

    @staticmethod
    def least_squares(
        design: np.ndarray, y: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray, float, Optional[np.ndarray]]:
        """
        Ordinary least squares fit.

        Args:
            design: n x p design matrix (include the intercept column)
            y: Response vector of length n

        Returns:
            (coefficients, fitted values, residual sum of squares,
            coefficient covariance matrix or None when the design is
            rank deficient or has no residual degrees of freedom)
        """
        coef, _, rank, _ = np.linalg.lstsq(design, y, rcond=None)
        fitted = design @ coef
        rss = float(np.sum((y - fitted) ** 2))

        n, p = design.shape
        dof = n - p
        if rank < p or dof <= 0:
            return coef, fitted, rss, None

        sigma2 = rss / dof
        xtx_inv = np.linalg.inv(design.T @ design)
        return coef, fitted, rss, sigma2 * xtx_inv

    @staticmethod
    def summarize(values: Sequence[float]) -> tuple[float, float, float, float, int]:
        """
        Mean, sample sd, min and max over the finite entries.

        Returns:
            (mean, sd, min, max, n) with NaN for statistics that are
            undefined for the number of finite values present.
        """
        arr = Statistics.finite(values)
        n = int(arr.size)
        if n == 0:
            nan = float("nan")
            return nan, nan, nan, nan, 0
        return (
            float(arr.mean()),
            Statistics.stdev(arr),
            float(arr.min()),
            float(arr.max()),
            n,
        )
