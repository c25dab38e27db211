"""Main analysis command."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..api import analyze
from ..exceptions import ConfigurationError, MoodMetricsError
from ..hierarchy import to_json
from ..logging_config import setup_logging
from . import app
from ._common import err_console, resolve_config

logger = logging.getLogger(__name__)


@app.command()
def main(
    entry: Optional[Path] = typer.Argument(
        None,
        help="Entry-point TypeScript file (or a directory of sources)",
        show_default=False,
    ),
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
    output: Optional[Path] = typer.Option(
        None,
        "-o",
        "--output",
        help="Write the JSON report to this file instead of stdout",
        dir_okay=False,
    ),
    indent: Optional[int] = typer.Option(
        None,
        "--indent",
        help="JSON indentation (default: 4)",
        min=0,
        max=16,
    ),
    no_follow_imports: bool = typer.Option(
        False,
        "--no-follow-imports",
        help="Analyze only the entry file(s), without following relative imports",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log resolution details to stderr",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Compute MOOD metrics and inheritance statistics for a TypeScript program.

    Prints one JSON object: per-class depth of inheritance and number of
    children, the MIF, AIF, MHF, AHF and POF ratios, and the maxima.

    [bold cyan]Examples:[/bold cyan]

      mood-metrics src/index.ts

      mood-metrics src --indent 2

      mood-metrics src/index.ts -o metrics.json
    """
    if version:
        from .. import __version__

        typer.echo(f"mood-metrics version {__version__}")
        raise typer.Exit(0)

    try:
        if entry is None:
            raise ConfigurationError("Expected entry-point path argument is empty")

        settings = resolve_config(
            config=config,
            indent=indent,
            no_follow_imports=no_follow_imports,
            verbose=verbose,
        )
        setup_logging(settings.verbosity)

        report = analyze(entry, settings)
        text = to_json(report, indent=settings.json_indent)

    except MoodMetricsError as e:
        logger.debug(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)

    except KeyboardInterrupt:
        err_console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)

    if output is not None:
        output.write_text(text + "\n", encoding="utf-8")
        logger.info(f"Report written to {output}")
    else:
        typer.echo(text)
