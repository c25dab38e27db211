"""CLI entry point: registers the analyze command."""

import typer

app = typer.Typer(
    name="mood-metrics",
    help="mood-metrics - MOOD design metrics for TypeScript class hierarchies",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import the command to register it
from .analyze import main as _main  # noqa: F401, E402
