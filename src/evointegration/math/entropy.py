"""Information theory: Shannon entropy over counts and probability masses."""

import math
from collections.abc import Iterable, Mapping
from typing import Union

import numpy as np

Masses = Union[Mapping[object, float], Iterable[float], np.ndarray]


def _as_array(values: Masses) -> np.ndarray:
    if isinstance(values, Mapping):
        values = list(values.values())
    elif not isinstance(values, np.ndarray):
        values = list(values)
    return np.asarray(values, dtype=float).ravel()


class Entropy:
    """Information entropy calculations."""

    @staticmethod
    def shannon(distribution: Masses) -> float:
        """
        Compute Shannon entropy H(X) = -Σ p(x) log₂ p(x) from counts.

        Counts are normalized by their total; zero counts contribute
        nothing (0·log 0 = 0) and are never passed to log.

        Args:
            distribution: Counts or weights, as a mapping or a sequence

        Returns:
            Entropy in bits
        """
        counts = _as_array(distribution)
        total = float(counts.sum()) if counts.size else 0.0
        if total <= 0:
            return 0.0

        p = counts[counts > 0] / total
        return float(-np.sum(p * np.log2(p)))

    @staticmethod
    def of_masses(masses: Masses) -> float:
        """
        Compute -Σ p log₂ p over probability masses as given.

        Non-positive masses are dropped before the log; the remainder is
        NOT renormalized. Callers are responsible for supplying masses
        that sum to 1.

        Returns:
            Entropy in bits
        """
        p = _as_array(masses)
        p = p[np.isfinite(p) & (p > 0)]
        if p.size == 0:
            return 0.0
        return float(-np.sum(p * np.log2(p)))

    @staticmethod
    def maximum(n: int) -> float:
        """Entropy of a uniform distribution over *n* outcomes: log₂(n)."""
        if n <= 1:
            return 0.0
        return math.log2(n)

    @staticmethod
    def proportions_nats(proportions: Masses, epsilon: float = 1e-10) -> float:
        """
        Compute -Σ p ln(p + ε) over proportions.

        The epsilon keeps empty categories finite; used for the
        size distribution of detected modules.

        Returns:
            Entropy in nats
        """
        p = _as_array(proportions)
        if p.size == 0:
            return 0.0
        return float(-np.sum(p * np.log(p + epsilon)))
