"""Base exception for evointegration."""

from typing import Any, Dict, Optional


def _render(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.6g}"
    if isinstance(value, list):
        return "[" + ", ".join(_render(v) for v in value) + "]"
    return str(value)


class EvoIntegrationError(Exception):
    """Root of every error the package raises on bad input or configuration.

    ``details`` carries the offending values (column names, shapes, config
    keys) so the CLI can print them next to the message.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def __str__(self) -> str:
        if not self.details:
            return self.message
        rendered = ", ".join(f"{key}={_render(value)}" for key, value in self.details.items())
        return f"{self.message} ({rendered})"
