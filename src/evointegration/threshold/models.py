"""Result records for threshold detection."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, Optional

from ..exceptions import Diagnostic

SEGMENTED_METHOD = "segmented_regression"
FAILED_METHOD = "failed"
LOGISTIC_METHOD = "logistic_inflection"
CURVATURE_METHOD = "max_curvature"


def _plain(value: Any) -> Any:
    if isinstance(value, Diagnostic):
        return value.to_json()
    if isinstance(value, tuple):
        return [_plain(v) for v in value]
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


class _Record:
    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict; NaN becomes None."""
        return {f.name: _plain(getattr(self, f.name)) for f in fields(self)}  # type: ignore[arg-type]


@dataclass(frozen=True)
class ThresholdResult(_Record):
    """Outcome of a breakpoint fit.

    A failed fit is still a usable record: ``threshold`` holds the initial
    guess, the interval bounds are NaN, ``method`` is ``"failed"`` and
    ``error`` carries the reason.
    """

    threshold: float
    ci_lower: float
    ci_upper: float
    r2_linear: float
    r2_segmented: float
    r2_improvement: float
    slopes: tuple[float, ...]
    method: str
    standard_error: float = float("nan")
    iterations: int = 0
    n_observations: int = 0
    error: Optional[str] = None
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.method != FAILED_METHOD

    @classmethod
    def failed(
        cls,
        initial_guess: float,
        r2_linear: float,
        error: str,
        n_observations: int,
        diagnostics: tuple[Diagnostic, ...] = (),
    ) -> "ThresholdResult":
        nan = float("nan")
        return cls(
            threshold=initial_guess,
            ci_lower=nan,
            ci_upper=nan,
            r2_linear=r2_linear,
            r2_segmented=nan,
            r2_improvement=nan,
            slopes=(),
            method=FAILED_METHOD,
            n_observations=n_observations,
            error=error,
            diagnostics=diagnostics,
        )


@dataclass(frozen=True)
class MethodEstimate(_Record):
    """Threshold from one alternative estimator; NaN when it failed."""

    threshold: float
    method: str
    error: Optional[str] = None
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def succeeded(self) -> bool:
        return not math.isnan(self.threshold)


@dataclass(frozen=True)
class ThresholdSummary(_Record):
    """Agreement of the threshold estimates that succeeded."""

    mean_threshold: float
    sd_threshold: float
    min_threshold: float
    max_threshold: float
    n_methods: int


@dataclass(frozen=True)
class MultiMethodResult(_Record):
    """Thresholds from three unrelated estimators plus their summary."""

    segmented: ThresholdResult
    logistic_inflection: MethodEstimate
    max_curvature: MethodEstimate
    summary: ThresholdSummary
    diagnostics: tuple[Diagnostic, ...] = ()
