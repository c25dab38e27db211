"""Analysis driver: one pre-order traversal over the whole program."""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from .aggregator import MoodMetrics, aggregate
from .models import ClassMetrics
from .resolver import HierarchyResolver

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """Every resolved class plus the program-wide ratios."""

    classes: list[ClassMetrics]
    ratios: MoodMetrics


class MoodAnalyzer:
    """Runs the resolver over every class-like node of a program.

    The model must provide ``source_files()``, ``walk(source)``,
    ``is_class_like(node)`` and ``type_at(node, source)`` on top of what
    ``HierarchyResolver`` needs.
    """

    def __init__(self, model) -> None:
        self.model = model
        self.resolver = HierarchyResolver(model)

    def analyze(self, files: Optional[Iterable] = None) -> AnalysisResult:
        sources = list(files) if files is not None else self.model.source_files()
        for source in sources:
            for node in self.model.walk(source):
                if self.model.is_class_like(node):
                    self.resolver.resolve(self.model.type_at(node, source))

        classes = self.resolver.registry.classes()
        logger.info(f"Resolved {len(classes)} classes in {len(sources)} files")
        return AnalysisResult(classes=classes, ratios=aggregate(classes))
