"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config

# stdout carries only the JSON report
err_console = Console(stderr=True)


def resolve_config(
    config: Optional[Path] = None,
    indent: Optional[int] = None,
    no_follow_imports: bool = False,
    verbose: bool = False,
) -> AnalysisConfig:
    """Build configuration from CLI options."""
    overrides = {}
    if indent is not None:
        overrides["json_indent"] = indent
    if no_follow_imports:
        overrides["follow_imports"] = False
    if verbose:
        overrides["verbose"] = True
    return load_config(config_file=config, **overrides)
