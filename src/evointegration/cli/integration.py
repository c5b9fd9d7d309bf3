"""Integration CLI command -- Integration Index of an interaction network."""

from pathlib import Path

import typer

from ..metrics import compute_integration_index
from . import app
from ._common import emit_result, load_network, reporting_errors


@app.command()
def integration(
    network_csv: Path = typer.Argument(
        ..., help="Adjacency matrix or from/to edge list (CSV)", exists=True, dir_okay=False
    ),
    directed: bool = typer.Option(False, "--directed", help="Read interactions as directed"),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
):
    """
    Integration Index (I): 1 - degree entropy / maximum entropy.

    [bold cyan]Examples:[/bold cyan]

      evointegration integration colony.csv

      evointegration integration edges.csv --directed --json
    """
    with reporting_errors():
        network = load_network(network_csv, directed=directed)
        result = compute_integration_index(network)
    emit_result(result, "Integration Index", json_output)
