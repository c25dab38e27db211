"""Exception hierarchy for mood-metrics."""

from .analysis import (
    AnalysisError,
    ParsingError,
    UnsupportedHierarchyError,
)
from .base import MoodMetricsError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "MoodMetricsError",
    "AnalysisError",
    "ParsingError",
    "UnsupportedHierarchyError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
