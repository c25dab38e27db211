"""Hierarchy resolution: one memoized ClassMetrics per class.

``resolve`` is called once per class-like node by the traversal, and again
out of order whenever a subclass needs its ancestors. Memoization by
(name, path) is what keeps child counts exact under those repeated calls.
"""

import logging
from typing import Optional

from ..exceptions import UnsupportedHierarchyError
from ..scanning.models import ClassType, PropertyKind
from .classifier import classify
from .models import ClassIdentity, ClassMetrics, ClassRegistry

logger = logging.getLogger(__name__)


class HierarchyResolver:
    """Resolves classes into ``ClassMetrics`` against a semantic model.

    The model must provide ``base_types(class_type)`` and
    ``properties(class_type)``.
    """

    def __init__(self, model, registry: Optional[ClassRegistry] = None) -> None:
        self.model = model
        self.registry = registry if registry is not None else ClassRegistry()
        self._in_progress: set[ClassIdentity] = set()

    def resolve(self, class_type: ClassType) -> ClassMetrics:
        """Return the metrics for ``class_type``, computing them on first use.

        Raises:
            UnsupportedHierarchyError: If the class (or an ancestor) has more
                than one direct base type or extends itself through a cycle
        """
        identity = (class_type.name, class_type.path)
        existing = self.registry.get(identity)
        if existing is not None:
            return existing

        if identity in self._in_progress:
            raise UnsupportedHierarchyError(class_type.name, "circular inheritance")

        self._in_progress.add(identity)
        try:
            metrics = self._build(class_type)
        finally:
            self._in_progress.discard(identity)

        self.registry.register(metrics)
        logger.debug(
            f"Resolved {metrics.class_name} (depth={metrics.depth_of_inheritance}, "
            f"parent={metrics.parent_class_name or '-'})"
        )
        return metrics

    def _build(self, class_type: ClassType) -> ClassMetrics:
        metrics = ClassMetrics(class_name=class_type.name, class_path=class_type.path)

        parent = self._resolve_parent(class_type)
        if parent is not None:
            parent.number_of_children += 1
            metrics.depth_of_inheritance = 1 + parent.depth_of_inheritance
            metrics.parent_class_name = parent.class_name

        classify(PropertyKind.METHODS, parent, class_type, self.model, metrics.methods)
        classify(PropertyKind.ATTRIBUTES, parent, class_type, self.model, metrics.attributes)
        return metrics

    def _resolve_parent(self, class_type: ClassType) -> Optional[ClassMetrics]:
        base_types = self.model.base_types(class_type)
        if not base_types:
            return None
        if len(base_types) > 1:
            raise UnsupportedHierarchyError(
                class_type.name,
                f"unsupported multiple inheritance ({len(base_types)} base types)",
                [base.name for base in base_types],
            )
        return self.resolve(base_types[0])
