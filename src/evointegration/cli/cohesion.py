"""Cohesion CLI command -- Cohesion Coefficient from viability measurements."""

from pathlib import Path

import typer

from ..metrics import compute_cohesion_coefficient, compute_cohesion_from_survival
from ..metrics.cohesion import SURVIVAL_COLUMNS
from . import app
from ._common import emit_result, get_config, load_csv, reporting_errors


@app.command()
def cohesion(
    ctx: typer.Context,
    viability_csv: Path = typer.Argument(
        ...,
        help="Table with viability_isolated/viability_integrated "
        "(or time_isolated/time_integrated) columns",
        exists=True,
        dir_okay=False,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
):
    """
    Cohesion Coefficient (C): viability lost when components are isolated.

    Survival tables (time_isolated/time_integrated) are normalised to
    viabilities first.
    """
    config = get_config(ctx)
    with reporting_errors():
        table = load_csv(viability_csv)
        if all(col in table.columns for col in SURVIVAL_COLUMNS):
            result = compute_cohesion_from_survival(table, config=config)
        else:
            result = compute_cohesion_coefficient(table, config=config)
    emit_result(result, "Cohesion Coefficient", json_output)
