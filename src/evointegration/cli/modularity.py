"""Modularity CLI command -- Modular Independence of an interaction network."""

from pathlib import Path

import typer

from ..metrics import CommunityMethod, compute_modular_independence
from . import app
from ._common import emit_result, get_config, load_network, reporting_errors


@app.command()
def modularity(
    ctx: typer.Context,
    network_csv: Path = typer.Argument(
        ..., help="Adjacency matrix or from/to edge list (CSV)", exists=True, dir_okay=False
    ),
    method: str = typer.Option(
        CommunityMethod.LOUVAIN.value,
        "--method",
        "-m",
        help="Community detection: louvain | walktrap | fast_greedy",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
):
    """
    Modular Independence (M): modularity Q rescaled onto [0, 1].

    [bold cyan]Examples:[/bold cyan]

      evointegration modularity colony.csv

      evointegration modularity colony.csv --method walktrap
    """
    with reporting_errors():
        network = load_network(network_csv)
        result = compute_modular_independence(network, method=method, config=get_config(ctx))
    emit_result(result, "Modular Independence", json_output)
