"""Shared test fixtures for mood-metrics tests."""

import textwrap
from pathlib import Path

import pytest

from mood_metrics.scanning.models import (
    ClassDeclaration,
    ClassType,
    DeclarationKind,
    PropertyDeclaration,
    PropertySymbol,
    SourceLocation,
)


class StubModel:
    """In-memory semantic model.

    Classes are declared directly with their members and base types, so the
    hierarchy engine can be tested without parsing anything. A "source
    file" is a list of class types; walking it yields those types in order.
    """

    def __init__(self):
        self._bases: dict = {}
        self._line = 0
        self.files: list = [[]]

    def add_class(
        self,
        name,
        *,
        bases=(),
        methods=(),
        private_methods=(),
        fields=(),
        private_fields=(),
        getters=(),
        setters=(),
        parameters=(),
        static_methods=(),
    ) -> ClassType:
        self._line += 1
        decl = ClassDeclaration(
            name=name,
            location=SourceLocation("/virtual/stub.ts", self._line, 1),
            heritage=[base.name for base in bases],
        )
        members = [
            *((n, DeclarationKind.METHOD, False, False) for n in methods),
            *((n, DeclarationKind.METHOD, True, False) for n in private_methods),
            *((n, DeclarationKind.FIELD, False, False) for n in fields),
            *((n, DeclarationKind.FIELD, True, False) for n in private_fields),
            *((n, DeclarationKind.GETTER, False, False) for n in getters),
            *((n, DeclarationKind.SETTER, False, False) for n in setters),
            *((n, DeclarationKind.PARAMETER, False, False) for n in parameters),
            *((n, DeclarationKind.METHOD, False, True) for n in static_methods),
        ]
        decl.members = [
            PropertyDeclaration(name=n, kind=kind, owner=decl, is_private=private, is_static=static)
            for n, kind, private, static in members
        ]

        class_type = ClassType(name, decl)
        self._bases[class_type] = list(bases)
        self.files[0].append(class_type)
        return class_type

    @staticmethod
    def external(name) -> ClassType:
        """A base type with no declaration, like a library class."""
        return ClassType(name)

    def set_bases(self, class_type, bases):
        self._bases[class_type] = list(bases)

    # Resolver interface

    def base_types(self, class_type):
        return list(self._bases.get(class_type, []))

    def properties(self, class_type):
        if class_type.declaration is None:
            return []
        symbols: dict = {}
        for member in class_type.declaration.members:
            if member.is_static:
                continue
            symbols.setdefault(member.name, PropertySymbol(member.name)).declarations.append(
                member
            )
        for base in self.base_types(class_type):
            for inherited in self.properties(base):
                symbols.setdefault(inherited.name, inherited)
        return list(symbols.values())

    # Analyzer interface

    def source_files(self):
        return self.files

    @staticmethod
    def walk(source):
        return iter(source)

    @staticmethod
    def is_class_like(node):
        return isinstance(node, ClassType)

    @staticmethod
    def type_at(node, source):
        return node


@pytest.fixture
def stub_model():
    """Empty in-memory semantic model."""
    return StubModel()


@pytest.fixture
def ts_project(tmp_path):
    """Write TypeScript files under a temporary project root.

    Usage: ``root = ts_project({"src/a.ts": "class A {}"})``
    """

    def write(files: dict) -> Path:
        for relative, text in files.items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
        return tmp_path

    return write
