"""Per-class metrics models.

``ClassMetrics`` is keyed by (class_name, class_path). Child -> parent links
are by name only; the parent keeps a running count of its direct children.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional

from ..scanning.models import PropertyDeclaration, PropertyKind

ClassIdentity = tuple[str, str]


@dataclass
class PropertyBucket:
    """Own / inherited / overridden properties of one kind for one class.

    ``private_count`` is tracked separately from the three lists, and
    ``length()`` adds it on top of them: a private member counts twice.
    """

    kind: PropertyKind
    own: list[PropertyDeclaration] = field(default_factory=list)
    inherited: list[PropertyDeclaration] = field(default_factory=list)
    overridden: list[PropertyDeclaration] = field(default_factory=list)
    private_count: int = 0

    def all_properties(self) -> list[PropertyDeclaration]:
        return [*self.inherited, *self.overridden, *self.own]

    def names(self) -> set[str]:
        return {prop.name for prop in self.all_properties()}

    def length(self) -> int:
        return len(self.all_properties()) + self.private_count


@dataclass
class ClassMetrics:
    """Hierarchy position and classified properties of one class."""

    class_name: str
    class_path: str = ""
    parent_class_name: str = ""  # "" for a root class
    depth_of_inheritance: int = 0
    number_of_children: int = 0
    methods: PropertyBucket = field(default_factory=lambda: PropertyBucket(PropertyKind.METHODS))
    attributes: PropertyBucket = field(
        default_factory=lambda: PropertyBucket(PropertyKind.ATTRIBUTES)
    )

    @property
    def identity(self) -> ClassIdentity:
        return (self.class_name, self.class_path)

    def bucket(self, kind: PropertyKind) -> PropertyBucket:
        return self.methods if kind is PropertyKind.METHODS else self.attributes


class ClassRegistry:
    """Identity -> ClassMetrics map for one analysis run, in registration order."""

    def __init__(self) -> None:
        self._entries: dict[ClassIdentity, ClassMetrics] = {}

    def get(self, identity: ClassIdentity) -> Optional[ClassMetrics]:
        return self._entries.get(identity)

    def register(self, metrics: ClassMetrics) -> None:
        if metrics.identity in self._entries:
            raise ValueError(f"Class already registered: {metrics.identity}")
        self._entries[metrics.identity] = metrics

    def classes(self) -> list[ClassMetrics]:
        return list(self._entries.values())

    def __contains__(self, identity: object) -> bool:
        return identity in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ClassMetrics]:
        return iter(self._entries.values())
