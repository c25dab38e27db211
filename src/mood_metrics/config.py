"""Configuration loading and management for mood-metrics.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.mood-metrics.toml)
    3. Project config (./mood-metrics.toml)
    4. Explicit config file
    5. Environment variables (MOOD_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(json_indent=2)
    >>> config.json_indent
    2
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import InvalidConfigError, InvalidPathError, MoodMetricsError

Verbosity = Literal["quiet", "normal", "verbose"]


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for one analysis run.

    Attributes:
        Source discovery:
            vendor_dirs: Directory names whose contents are never analyzed
            extensions: File extensions treated as TypeScript sources
            include_declaration_files: Load ``.d.ts`` files reached by imports
            follow_imports: Follow relative imports from the entry point

        Limits:
            max_files: Maximum number of source files to load
            max_file_size_mb: Files larger than this are skipped

        Output control:
            json_indent: Indentation of the JSON report
            verbosity: Logging verbosity level
    """

    # Source discovery
    vendor_dirs: tuple[str, ...] = ("node_modules",)
    extensions: tuple[str, ...] = (".ts", ".tsx", ".mts", ".cts")
    include_declaration_files: bool = True
    follow_imports: bool = True

    # Limits
    max_files: int = 10000
    max_file_size_mb: float = 10.0

    # Output control
    json_indent: int = 4
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.extensions:
            raise InvalidConfigError("extensions", self.extensions, "at least one extension required")
        for ext in self.extensions:
            if not ext.startswith("."):
                raise InvalidConfigError("extensions", ext, "extensions must start with '.'")
        if self.max_files < 1:
            raise InvalidConfigError("max_files", self.max_files, "must be at least 1")
        if self.max_file_size_mb <= 0:
            raise InvalidConfigError("max_file_size_mb", self.max_file_size_mb, "must be positive")
        if self.json_indent < 0:
            raise InvalidConfigError("json_indent", self.json_indent, "must be non-negative")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError("verbosity", self.verbosity, "expected quiet/normal/verbose")

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated AnalysisConfig instance

    Raises:
        InvalidPathError: If the explicit config file does not exist
        InvalidConfigError: If a config value is invalid
        MoodMetricsError: If a config file cannot be parsed
    """
    merged: dict = {}

    global_config = Path.home() / ".mood-metrics.toml"
    if global_config.exists():
        merged.update(_read_config_file(global_config))

    project_config = Path.cwd() / "mood-metrics.toml"
    if project_config.exists():
        merged.update(_read_config_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise InvalidPathError(config_file, "config file not found")
        merged.update(_read_config_file(config_file))

    merged.update(_load_env_vars())

    # Convert verbosity boolean flags to string
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    # TOML arrays arrive as lists
    for key in ("vendor_dirs", "extensions"):
        if isinstance(merged.get(key), list):
            merged[key] = tuple(merged[key])

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise MoodMetricsError(f"Invalid configuration: {e}")


def _read_config_file(path: Path) -> dict:
    try:
        data = _load_toml_file(path)
    except MoodMetricsError:
        raise
    except Exception as e:
        raise MoodMetricsError(f"Invalid config file '{path}': {e}")
    # A [mood-metrics] table is accepted as well as top-level keys
    section = data.get("mood-metrics")
    if isinstance(section, dict):
        return dict(section)
    return data


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from MOOD_* environment variables.

    Supported environment variables:
        MOOD_INCLUDE_DECLARATION_FILES: bool (true/false/1/0)
        MOOD_FOLLOW_IMPORTS: bool
        MOOD_MAX_FILES: int
        MOOD_MAX_FILE_SIZE_MB: float
        MOOD_JSON_INDENT: int
        MOOD_VERBOSITY: quiet/normal/verbose
        MOOD_VENDOR_DIRS: comma-separated directory names
        MOOD_EXTENSIONS: comma-separated extensions

    Returns:
        Dict of field_name -> parsed_value for any MOOD_* vars found.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"MOOD_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Args:
        value: Raw string from environment
        type_hint: Type annotation from dataclass

    Returns:
        Parsed value or None if can't parse

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # tuple[str, ...]: comma-separated
    if origin is tuple:
        return tuple(part.strip() for part in value.split(",") if part.strip())

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        MoodMetricsError: If no TOML parser is available
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise MoodMetricsError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
