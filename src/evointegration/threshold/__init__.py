"""Detection of the integration threshold (kappa) and its cross-validation."""

from .curvature import max_curvature_threshold
from .detector import detect_threshold, validate_multi_method
from .logistic import logistic_inflection
from .models import MethodEstimate, MultiMethodResult, ThresholdResult, ThresholdSummary
from .segmented import SegmentedFit, fit_segmented

__all__ = [
    "detect_threshold",
    "validate_multi_method",
    "fit_segmented",
    "logistic_inflection",
    "max_curvature_threshold",
    "SegmentedFit",
    "ThresholdResult",
    "MethodEstimate",
    "ThresholdSummary",
    "MultiMethodResult",
]
