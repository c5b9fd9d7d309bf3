"""Input-related exceptions: missing columns, malformed matrices, bad method names."""

from typing import Iterable, List, Optional

from .base import EvoIntegrationError


class InputError(EvoIntegrationError):
    """Raised when caller-supplied data cannot be used as given."""

    pass


class MissingColumnsError(InputError):
    """Raised when a table lacks columns a metric requires."""

    def __init__(self, table: str, missing: Iterable[str], required: Iterable[str]):
        missing_list: List[str] = list(missing)
        required_list: List[str] = list(required)
        super().__init__(
            f"{table} must contain columns: {', '.join(required_list)}",
            details={"missing": missing_list},
        )
        self.table = table
        self.missing = missing_list
        self.required = required_list


class InvalidMethodError(InputError):
    """Raised when a method name is outside its enumerated set."""

    def __init__(self, kind: str, value: object, supported: Iterable[str]):
        supported_list = list(supported)
        super().__init__(
            f"Unknown {kind}: {value!r}",
            details={"supported": ", ".join(supported_list)},
        )
        self.kind = kind
        self.value = value
        self.supported = supported_list


class InvalidNetworkError(InputError):
    """Raised when an adjacency matrix is not a finite, non-negative square matrix."""

    def __init__(self, reason: str, shape: Optional[tuple] = None):
        details = {"reason": reason}
        if shape is not None:
            details["shape"] = shape
        super().__init__(f"Invalid interaction network: {reason}", details=details)
        self.reason = reason
        self.shape = shape
