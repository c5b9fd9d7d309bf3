"""Non-fatal diagnostics for degenerate inputs.

Metrics never raise on degenerate-but-well-formed data. They return a
defined fallback result and attach one of these records to it, so callers
can tell "computed, but degenerate" apart from a normal result without
catching anything.

Code convention:
    EI1xx - Integration Index
    EI2xx - Cohesion Coefficient
    EI3xx - Modular Independence
    EI4xx - Emergent Complexity
    EI5xx - Hierarchical Coherence
    EI6xx - Threshold detection
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DiagnosticCode(Enum):
    """Structured codes for degenerate-input diagnostics."""

    # Integration Index (EI1xx)
    EI100 = "EI100"  # Network has no nodes or edges
    EI101 = "EI101"  # Total degree is zero
    EI102 = "EI102"  # Single node, H_max = 0

    # Cohesion Coefficient (EI2xx)
    EI200 = "EI200"  # Empty viability table
    EI201 = "EI201"  # Non-finite viability ratios dropped

    # Modular Independence (EI3xx)
    EI300 = "EI300"  # Network too small or has no edges

    # Emergent Complexity (EI4xx)
    EI400 = "EI400"  # No component states
    EI401 = "EI401"  # Predicted value was zero, epsilon substituted
    EI402 = "EI402"  # Component entropy is zero

    # Hierarchical Coherence (EI5xx)
    EI500 = "EI500"  # No variance in fitness data

    # Threshold detection (EI6xx)
    EI600 = "EI600"  # Segmented regression failed
    EI601 = "EI601"  # Logistic inflection unavailable
    EI602 = "EI602"  # Maximum-curvature estimate unavailable
    EI603 = "EI603"  # No method produced a threshold


@dataclass(frozen=True)
class Diagnostic:
    """A degenerate-input notice attached to a result.

    Attributes:
        code: Structured code for categorization
        message: Human-readable description
        context: Additional values (counts, offending parameters, error text)
    """

    code: DiagnosticCode
    message: str
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def to_json(self) -> dict[str, Any]:
        """Structured logging format."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context,
        }

    def emit(self, logger: logging.Logger) -> "Diagnostic":
        """Log this diagnostic at WARNING level and return it."""
        logger.warning("%s", self, extra={"diagnostic": self.to_json()})
        return self
