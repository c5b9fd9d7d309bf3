"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="evointegration",
    help="evointegration - integration metrics for biological collectives",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .root import main as _main_callback  # noqa: F401, E402
from .integration import integration as _integration  # noqa: F401, E402
from .modularity import modularity as _modularity  # noqa: F401, E402
from .cohesion import cohesion as _cohesion  # noqa: F401, E402
from .coherence import coherence as _coherence  # noqa: F401, E402
from .threshold import threshold as _threshold  # noqa: F401, E402
