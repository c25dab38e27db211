"""Root of the mood-metrics error taxonomy."""

from typing import Mapping, Optional


class MoodMetricsError(Exception):
    """Root of every error mood-metrics raises.

    ``details`` carries the structured context (class names, paths, config
    keys) that the CLI prints after the message. Values are stored as text.
    """

    def __init__(self, message: str, details: Optional[Mapping[str, object]] = None):
        super().__init__(message)
        self.message = message
        self.details = {key: str(value) for key, value in (details or {}).items()}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
