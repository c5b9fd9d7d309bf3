"""Shared CLI helpers."""

import json
import math
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

import pandas as pd
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import MetricConfig
from ..exceptions import EvoIntegrationError, InputError
from ..graph import InteractionNetwork
from ..logging_config import get_logger

console = Console()
logger = get_logger(__name__)

EDGE_COLUMNS = ("from", "to")


def get_config(ctx: typer.Context) -> MetricConfig:
    """Configuration resolved by the root callback."""
    return ctx.obj["config"]


def load_csv(path: Path) -> pd.DataFrame:
    """Read a CSV table, turning parser failures into InputError."""
    try:
        return pd.read_csv(path)
    except (OSError, ValueError) as e:
        raise InputError(f"Cannot read {path}: {e}")


def load_network(path: Path, directed: bool = False) -> InteractionNetwork:
    """Read a network from CSV.

    A file with ``from``/``to`` columns is an edge list; anything else is
    a labelled square matrix whose first column holds the node labels (the
    layout ``DataFrame.to_csv`` writes).
    """
    table = load_csv(path)
    if all(col in table.columns for col in EDGE_COLUMNS):
        return InteractionNetwork.from_edges(table, directed=directed)
    matrix = table.set_index(table.columns[0])
    return InteractionNetwork.from_matrix(matrix, directed=directed)


@contextmanager
def reporting_errors() -> Iterator[None]:
    """Print library errors in red and exit with status 1."""
    try:
        yield
    except EvoIntegrationError as e:
        logger.debug("%s: %s", e.__class__.__name__, e)
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)


def _format(value: Any) -> str:
    if isinstance(value, float):
        return "NaN" if math.isnan(value) else f"{value:.4f}"
    if isinstance(value, tuple):
        if len(value) > 12:
            return f"{len(value)} values"
        return ", ".join(_format(v) for v in value)
    return str(value)


def emit_result(result: Any, title: str, json_output: bool) -> None:
    """Print a result record as JSON or as a two-column rich table."""
    if json_output:
        print(json.dumps(result.to_dict(), indent=2, default=str))
        return

    table = Table(title=title, show_header=True, title_justify="left")
    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right")
    for name, value in vars(result).items():
        if name == "diagnostics":
            continue
        table.add_row(name, _format(value))
    console.print(table)

    for diagnostic in getattr(result, "diagnostics", ()):
        console.print(f"[yellow]{diagnostic}[/yellow]", highlight=False)
