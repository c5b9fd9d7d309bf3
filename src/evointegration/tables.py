"""Helpers for the named-column tables the metrics consume."""

from typing import Any, Sequence

import pandas as pd

from .exceptions import MissingColumnsError


def as_table(data: Any) -> pd.DataFrame:
    """Return *data* as a DataFrame (mappings of columns and records accepted)."""
    if isinstance(data, pd.DataFrame):
        return data
    return pd.DataFrame(data)


def require_columns(table: pd.DataFrame, required: Sequence[str], name: str) -> None:
    """Raise MissingColumnsError unless every required column is present."""
    missing = [col for col in required if col not in table.columns]
    if missing:
        raise MissingColumnsError(name, missing, required)


def numeric_column(table: pd.DataFrame, column: str) -> pd.Series:
    """Column coerced to float; unparseable entries become NaN."""
    return pd.to_numeric(table[column], errors="coerce").astype(float)
