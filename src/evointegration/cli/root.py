"""Root callback: logging, configuration and --version."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..config import load_config
from ..exceptions import ConfigurationError
from ..logging_config import setup_logging
from . import app
from ._common import console


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log fit details",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        dir_okay=False,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Quantify how far a biological collective behaves as one unit.

    [bold cyan]Examples:[/bold cyan]

      evointegration integration network.csv

      evointegration cohesion viability.csv --json

      evointegration threshold transitions.csv --validate
    """
    from .. import __version__

    if version:
        console.print(f"[bold cyan]evointegration[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)

    setup_logging(verbose=verbose, quiet=quiet, log_file=str(log_file) if log_file else None)

    try:
        settings = load_config(config_file=config)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)

    ctx.ensure_object(dict)
    ctx.obj["config"] = settings
