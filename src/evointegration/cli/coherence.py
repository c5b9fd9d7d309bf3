"""Coherence CLI command -- Hierarchical Coherence from grouped fitness."""

from pathlib import Path

import typer

from ..metrics import compute_hierarchical_coherence
from . import app
from ._common import emit_result, get_config, load_csv, reporting_errors


@app.command()
def coherence(
    ctx: typer.Context,
    fitness_csv: Path = typer.Argument(
        ..., help="Table with collective_id and fitness columns", exists=True, dir_okay=False
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
):
    """
    Hierarchical Coherence (H): share of fitness variance between collectives.
    """
    with reporting_errors():
        table = load_csv(fitness_csv)
        result = compute_hierarchical_coherence(table, config=get_config(ctx))
    emit_result(result, "Hierarchical Coherence", json_output)
