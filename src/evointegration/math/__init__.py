"""Mathematical utilities shared by the integration metrics."""

from .entropy import Entropy
from .statistics import Statistics

__all__ = [
    "Entropy",
    "Statistics",
]
