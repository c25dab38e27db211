"""TypeScript semantic source: program loading, declarations and name resolution."""

from .models import (
    ClassDeclaration,
    ClassType,
    DeclarationKind,
    PropertyDeclaration,
    PropertyKind,
    PropertySymbol,
    SourceLocation,
)
from .program import SourceFile, SourceProgram
from .semantic import SemanticModel

__all__ = [
    "ClassDeclaration",
    "ClassType",
    "DeclarationKind",
    "PropertyDeclaration",
    "PropertyKind",
    "PropertySymbol",
    "SourceLocation",
    "SourceFile",
    "SourceProgram",
    "SemanticModel",
]
