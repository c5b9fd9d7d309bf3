"""Exception hierarchy for evointegration."""

from .base import EvoIntegrationError
from .config import ConfigurationError, InvalidConfigError
from .diagnostics import Diagnostic, DiagnosticCode
from .fitting import FitError, SegmentedFitError
from .input import (
    InputError,
    InvalidMethodError,
    InvalidNetworkError,
    MissingColumnsError,
)

__all__ = [
    "EvoIntegrationError",
    "InputError",
    "MissingColumnsError",
    "InvalidMethodError",
    "InvalidNetworkError",
    "ConfigurationError",
    "InvalidConfigError",
    "FitError",
    "SegmentedFitError",
    "Diagnostic",
    "DiagnosticCode",
]
