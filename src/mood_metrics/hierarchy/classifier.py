"""Property classification relative to the parent class.

A property is *own* when the parent does not know its name, *overridden*
when the parent knows the name and the declaration sits directly in this
class body, and *inherited* otherwise. A constructor parameter property
redeclaring a parent member is enclosed by the constructor, not the class,
so it counts as inherited. Private members are counted on the side,
whatever their bucket.
"""

from typing import Optional

from ..scanning.models import ClassType, PropertyKind
from .models import ClassMetrics, PropertyBucket


def classify(
    kind: PropertyKind,
    parent: Optional[ClassMetrics],
    class_type: ClassType,
    model,
    bucket: Optional[PropertyBucket] = None,
) -> PropertyBucket:
    """Populate ``bucket`` with the ``kind`` properties visible on ``class_type``.

    Args:
        kind: METHODS or ATTRIBUTES
        parent: Already-classified parent metrics, or None for a root class
        class_type: The class being classified
        model: Semantic model providing ``properties(class_type)``
        bucket: Bucket to fill (a new one is created otherwise)

    Returns:
        The populated bucket
    """
    if bucket is None:
        bucket = PropertyBucket(kind)
    parent_names = parent.bucket(kind).names() if parent is not None else set()

    for symbol in model.properties(class_type):
        decl = symbol.first_declaration
        if decl is None or PropertyKind.of(decl.kind) is not kind:
            continue

        if decl.is_private:
            bucket.private_count += 1

        if decl.name not in parent_names:
            bucket.own.append(decl)
        elif decl.owner is class_type.declaration and decl.declared_in_class_body:
            bucket.overridden.append(decl)
        else:
            bucket.inherited.append(decl)

    return bucket
