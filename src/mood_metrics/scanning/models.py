"""Declaration models produced by the TypeScript semantic model.

These are plain data objects; nothing here holds tree-sitter nodes, so the
hierarchy engine can be driven by any source that builds them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class DeclarationKind(Enum):
    """Syntactic shape of a class member declaration."""

    METHOD = "method"
    FIELD = "field"
    PARAMETER = "parameter"  # constructor parameter property
    GETTER = "getter"
    SETTER = "setter"


class PropertyKind(Enum):
    """Property family measured by the MOOD metrics."""

    METHODS = "methods"
    ATTRIBUTES = "attributes"

    @classmethod
    def of(cls, kind: DeclarationKind) -> Optional[PropertyKind]:
        """Map a declaration shape to its family, or None if it is neither."""
        return _KIND_FAMILY.get(kind)


_KIND_FAMILY = {
    DeclarationKind.METHOD: PropertyKind.METHODS,
    DeclarationKind.FIELD: PropertyKind.ATTRIBUTES,
    DeclarationKind.PARAMETER: PropertyKind.ATTRIBUTES,
    DeclarationKind.GETTER: PropertyKind.ATTRIBUTES,
}


@dataclass(frozen=True)
class SourceLocation:
    """A 1-based position in a source file."""

    file: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(eq=False)
class PropertyDeclaration:
    """One member declaration inside a class body."""

    name: str
    kind: DeclarationKind
    owner: ClassDeclaration
    is_private: bool = False
    is_static: bool = False
    location: Optional[SourceLocation] = None

    @property
    def declared_in_class_body(self) -> bool:
        """False for parameter properties: their enclosing declaration is the constructor."""
        return self.kind is not DeclarationKind.PARAMETER

    def __repr__(self) -> str:
        return f"PropertyDeclaration({self.owner.name}.{self.name}, {self.kind.value})"


@dataclass(eq=False)
class ClassDeclaration:
    """A class-like declaration and the raw text of its ``extends`` clause."""

    name: str
    location: Optional[SourceLocation] = None
    heritage: list[str] = field(default_factory=list)
    members: list[PropertyDeclaration] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"ClassDeclaration({self.name} @ {self.location})"


@dataclass(frozen=True)
class ClassType:
    """A resolved class type.

    External types (base classes that could not be traced to a declaration,
    e.g. library classes) carry no declaration.
    """

    name: str
    declaration: Optional[ClassDeclaration] = None

    @property
    def path(self) -> str:
        """``file:line:col`` of the first declaration, or "" if unknown."""
        if self.declaration is None or self.declaration.location is None:
            return ""
        return str(self.declaration.location)


@dataclass
class PropertySymbol:
    """A property visible on a class, declared there or inherited."""

    name: str
    declarations: list[PropertyDeclaration] = field(default_factory=list)

    @property
    def first_declaration(self) -> Optional[PropertyDeclaration]:
        return self.declarations[0] if self.declarations else None
