"""Threshold CLI command -- locate the integration threshold kappa."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..threshold import MultiMethodResult, detect_threshold, validate_multi_method
from ..threshold.detector import DEFAULT_OUTCOME, DEFAULT_PREDICTOR
from . import app
from ._common import console, emit_result, get_config, load_csv, reporting_errors


def _fmt(value: float) -> str:
    return "NaN" if value != value else f"{value:.4f}"


def _print_validation(result: MultiMethodResult) -> None:
    table = Table(title="Threshold estimates", show_header=True, title_justify="left")
    table.add_column("Method", style="cyan")
    table.add_column("Threshold", justify="right")
    table.add_column("Note")

    segmented = result.segmented
    table.add_row(segmented.method, _fmt(segmented.threshold), segmented.error or "")
    for estimate in (result.logistic_inflection, result.max_curvature):
        table.add_row(estimate.method, _fmt(estimate.threshold), estimate.error or "")
    console.print(table)

    summary = result.summary
    console.print(
        f"Mean [bold]{_fmt(summary.mean_threshold)}[/bold] "
        f"(sd {_fmt(summary.sd_threshold)}, range {_fmt(summary.min_threshold)}"
        f"-{_fmt(summary.max_threshold)}) over {summary.n_methods} method(s)",
        highlight=False,
    )
    for diagnostic in result.diagnostics:
        console.print(f"[yellow]{diagnostic}[/yellow]", highlight=False)


@app.command()
def threshold(
    ctx: typer.Context,
    data_csv: Path = typer.Argument(
        ..., help="Table with predictor and outcome columns", exists=True, dir_okay=False
    ),
    predictor: str = typer.Option(DEFAULT_PREDICTOR, "--predictor", help="Predictor column"),
    outcome: str = typer.Option(DEFAULT_OUTCOME, "--outcome", help="Outcome column"),
    initial: Optional[float] = typer.Option(
        None, "--initial", help="Initial breakpoint guess (default from config)"
    ),
    validate: bool = typer.Option(
        False,
        "--validate",
        help="Cross-check with logistic inflection and maximum curvature",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
):
    """
    Detect the cohesion value where the outcome changes regime.

    [bold cyan]Examples:[/bold cyan]

      evointegration threshold transitions.csv

      evointegration threshold transitions.csv --validate --json
    """
    config = get_config(ctx)
    with reporting_errors():
        table = load_csv(data_csv)
        if not validate:
            result = detect_threshold(
                table, predictor, outcome, initial_guess=initial, config=config
            )
            emit_result(result, "Integration threshold", json_output)
            return
        validation = validate_multi_method(
            table, predictor, outcome, initial_guess=initial, config=config
        )

    if json_output:
        print(json.dumps(validation.to_dict(), indent=2, default=str))
    else:
        _print_validation(validation)
