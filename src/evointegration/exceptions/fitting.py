"""Model-fitting exceptions raised inside the threshold estimators.

These never reach callers of ``detect_threshold`` or
``validate_multi_method``; the detector converts them into a ``failed``
result carrying a diagnostic.
"""

from typing import Any, Dict, Optional

from .base import EvoIntegrationError


class FitError(EvoIntegrationError):
    """Base class for estimator failures."""

    pass


class SegmentedFitError(FitError):
    """Raised when the breakpoint regression cannot produce an estimate."""

    def __init__(self, reason: str, iterations: Optional[int] = None):
        details: Dict[str, Any] = {"reason": reason}
        if iterations is not None:
            details["iterations"] = iterations
        super().__init__(f"Segmented regression failed: {reason}", details=details)
        self.reason = reason
        self.iterations = iterations
