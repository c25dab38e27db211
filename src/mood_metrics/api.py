"""Public API for mood-metrics.

Example:
    >>> from mood_metrics import analyze
    >>>
    >>> report = analyze("src/index.ts")
    >>> report["mif"], report["maxDepthOfInheritance"]
    >>>
    >>> # With customization
    >>> report = analyze("src", vendor_dirs=("node_modules", "vendor"))
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Union

from .config import AnalysisConfig, load_config
from .exceptions import ConfigurationError
from .hierarchy import MoodAnalyzer, format_metrics, to_json
from .scanning import SemanticModel, SourceProgram

logger = logging.getLogger(__name__)


def analyze(
    entry: Union[str, Path, None],
    config: Optional[AnalysisConfig] = None,
    **overrides,
) -> dict[str, Any]:
    """Analyze the TypeScript program rooted at ``entry``.

    Runs the full pipeline:
    1. Load configuration (explicit ``config``, or auto-discovered + overrides)
    2. Load and parse every file reachable from ``entry``
    3. Resolve every class, classify its properties, aggregate the ratios
    4. Return the formatted report

    Args:
        entry: Entry-point source file, or a directory of sources
        config: Ready-made configuration; when omitted it is loaded with
            ``load_config(**overrides)``
        **overrides: Configuration overrides (e.g., follow_imports=False)

    Returns:
        Report dict with ``classes``, the five ratios and the two maxima

    Raises:
        ConfigurationError: If ``entry`` is missing or invalid
        UnsupportedHierarchyError: If any class has more than one base type
    """
    if entry is None or str(entry) == "":
        raise ConfigurationError("Expected entry-point path argument is empty")

    if config is None:
        config = load_config(**overrides)

    program = SourceProgram.load(Path(entry), config)
    logger.info(f"Analyzing {len(program.source_files())} of {len(program)} loaded files")

    result = MoodAnalyzer(SemanticModel(program)).analyze()
    return format_metrics(result)


def analyze_json(
    entry: Union[str, Path, None],
    config: Optional[AnalysisConfig] = None,
    **overrides,
) -> str:
    """Like ``analyze`` but returns the serialized JSON report."""
    if config is None:
        config = load_config(**overrides)
    return to_json(analyze(entry, config), indent=config.json_indent)
