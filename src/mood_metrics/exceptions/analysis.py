"""Analysis-related exceptions: unsupported hierarchies, unparseable sources."""

from pathlib import Path
from typing import Dict, List, Optional

from .base import MoodMetricsError


class AnalysisError(MoodMetricsError):
    """Base class for analysis-related errors."""
    pass


class UnsupportedHierarchyError(AnalysisError):
    """Raised when a class hierarchy cannot be measured.

    Covers classes with more than one direct base type and cyclic
    ``extends`` chains. Either one aborts the whole analysis.
    """

    def __init__(self, class_name: str, reason: str, base_types: Optional[List[str]] = None):
        details: Dict[str, str] = {"class": class_name, "reason": reason}
        if base_types:
            details["base_types"] = ", ".join(base_types)

        super().__init__(f"Unsupported class hierarchy for {class_name}", details=details)
        self.class_name = class_name
        self.reason = reason
        self.base_types = base_types or []


class ParsingError(AnalysisError):
    """Raised when a source file cannot be read or parsed."""

    def __init__(self, filepath: Path, language: str, reason: str):
        super().__init__(
            f"Failed to parse {language} file: {filepath}",
            details={"filepath": str(filepath), "language": language, "reason": reason},
        )
        self.filepath = filepath
        self.language = language
        self.reason = reason
