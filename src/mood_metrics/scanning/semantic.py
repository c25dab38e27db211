"""Semantic model over a loaded TypeScript program.

Answers the questions the hierarchy engine asks of a class: its resolved
type, its direct base types and the properties visible on it (declared
there or inherited). Base classes are resolved by name: local classes
first, then imported bindings, then a class of that name that is unique in
the program. Anything else becomes an external type with no declaration.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator, Optional

from .declarations import (
    bare_class_name,
    build_class_declaration,
    extends_values,
    instantiated_name,
    is_class_node,
    node_text,
    split_type_arguments,
    walk,
)
from .models import ClassDeclaration, ClassType, PropertySymbol
from .program import SourceFile, SourceProgram

if TYPE_CHECKING:
    from tree_sitter import Node

logger = logging.getLogger(__name__)

_NodeKey = tuple[str, int, int]


class SemanticModel:
    """Name-resolving view of a ``SourceProgram``."""

    def __init__(self, program: SourceProgram) -> None:
        self.program = program
        self._declarations: dict[_NodeKey, ClassDeclaration] = {}
        self._types: dict[ClassDeclaration, ClassType] = {}
        self._origins: dict[ClassDeclaration, tuple[SourceFile, Node]] = {}
        self._bases: dict[ClassDeclaration, list[ClassType]] = {}
        self._properties: dict[ClassDeclaration, list[PropertySymbol]] = {}
        self._expanding: set[ClassDeclaration] = set()

        self._class_nodes: dict[str, list[Node]] = {}
        self._by_name: dict[str, list[tuple[SourceFile, Node]]] = {}
        for source in program:
            nodes = [node for node in walk(source.root_node) if is_class_node(node)]
            self._class_nodes[source.path] = nodes
            for node in nodes:
                self._by_name.setdefault(bare_class_name(node), []).append((source, node))

    # ── Traversal ──────────────────────────────────────────────

    def source_files(self) -> list[SourceFile]:
        return self.program.source_files()

    @staticmethod
    def walk(source: SourceFile) -> Iterator[Node]:
        return walk(source.root_node)

    @staticmethod
    def is_class_like(node: Node) -> bool:
        return is_class_node(node)

    # ── Types ──────────────────────────────────────────────────

    def type_at(self, node: Node, source: SourceFile) -> ClassType:
        """The class type declared by a class-like node."""
        key = (source.path, node.start_byte, node.end_byte)
        decl = self._declarations.get(key)
        if decl is None:
            decl = build_class_declaration(node, source)
            self._declarations[key] = decl
            self._origins[decl] = (source, node)
            self._types[decl] = ClassType(decl.name, decl)
        return self._types[decl]

    def base_types(self, class_type: ClassType) -> list[ClassType]:
        """Direct base types, in ``extends`` order."""
        decl = class_type.declaration
        if decl is None:
            return []
        if decl not in self._bases:
            source, node = self._origins[decl]
            self._bases[decl] = [self._resolve_base(value, source) for value in extends_values(node)]
        return list(self._bases[decl])

    def properties(self, class_type: ClassType) -> list[PropertySymbol]:
        """Instance properties visible on the class: own members, then inherited."""
        decl = class_type.declaration
        if decl is None:
            return []
        if decl in self._properties:
            return list(self._properties[decl])
        if decl in self._expanding:
            # Cyclic extends; the resolver reports it
            return []

        self._expanding.add(decl)
        try:
            symbols: dict[str, PropertySymbol] = {}
            for member in decl.members:
                if member.is_static:
                    continue
                symbols.setdefault(member.name, PropertySymbol(member.name)).declarations.append(
                    member
                )
            for base in self.base_types(class_type):
                for inherited in self.properties(base):
                    symbols.setdefault(inherited.name, inherited)
        finally:
            self._expanding.discard(decl)

        self._properties[decl] = list(symbols.values())
        return list(self._properties[decl])

    # ── Name resolution ────────────────────────────────────────

    def _resolve_base(self, value: Node, source: SourceFile) -> ClassType:
        """The type named by one ``extends`` value.

        ``extends Box<string>`` names the instantiated type ``Box<string>``:
        it shares the declaration of ``Box<T>`` but is a distinct type.
        """
        value, type_args = split_type_arguments(value)
        found: Optional[tuple[SourceFile, Node]] = None

        if value.type == "identifier":
            name = node_text(value)
            found = self._resolve_local(source, name, set())
            if found is None:
                found = self._resolve_global(name)
        elif value.type == "member_expression":
            obj = value.child_by_field_name("object")
            prop = value.child_by_field_name("property")
            if obj is not None and prop is not None and obj.type == "identifier":
                target = self._namespace_target(source, node_text(obj))
                if target is not None:
                    found = self._resolve_export(target, node_text(prop), set())

        if found is None:
            logger.debug(f"Unresolved base type '{node_text(value)}' in {source.path}")
            return ClassType(instantiated_name(node_text(value), type_args))
        target_source, target_node = found
        declared = self.type_at(target_node, target_source)
        if type_args is None:
            return declared
        return ClassType(
            instantiated_name(bare_class_name(target_node), type_args), declared.declaration
        )

    def _resolve_local(
        self, source: SourceFile, name: str, seen: set
    ) -> Optional[tuple[SourceFile, Node]]:
        for node in self._class_nodes.get(source.path, []):
            if bare_class_name(node) == name:
                return source, node

        for reference in source.references:
            if reference.is_reexport:
                continue
            for binding in reference.bindings:
                if binding.local != name or binding.imported == "*":
                    continue
                target = self.program.resolve_module(source, reference.specifier)
                if target is None:
                    return None
                return self._resolve_export(target, binding.imported, seen)
        return None

    def _resolve_export(
        self, source: SourceFile, exported: str, seen: set
    ) -> Optional[tuple[SourceFile, Node]]:
        key = (source.path, exported)
        if key in seen:
            return None
        seen.add(key)

        local = self._export_table(source).get(exported)
        if isinstance(local, str):
            return self._resolve_local(source, local, seen)
        if local is not None:
            return source, local

        for reference in source.references:
            if not reference.is_reexport:
                continue
            target = self.program.resolve_module(source, reference.specifier)
            if target is None:
                continue
            for binding in reference.bindings:
                if binding.local == "*":
                    found = self._resolve_export(target, exported, seen)
                    if found is not None:
                        return found
                elif binding.local == exported and binding.imported != "*":
                    return self._resolve_export(target, binding.imported, seen)
        return None

    def _export_table(self, source: SourceFile) -> dict:
        """Exported name -> class node, or -> local name for ``export { X }``."""
        table: dict = {}
        for statement in source.root_node.named_children:
            if statement.type != "export_statement" or statement.child_by_field_name("source"):
                continue
            is_default = any(child.type == "default" for child in statement.children)
            for child in statement.named_children:
                if child.type == "ambient_declaration":
                    child = next((c for c in child.named_children if is_class_node(c)), child)
                if is_class_node(child):
                    table["default" if is_default else bare_class_name(child)] = child
                elif child.type == "identifier" and is_default:
                    table["default"] = node_text(child)
                elif child.type == "export_clause":
                    for spec in child.named_children:
                        name = node_text(spec.child_by_field_name("name"))
                        alias = spec.child_by_field_name("alias")
                        table[node_text(alias) if alias is not None else name] = name
        return table

    def _namespace_target(self, source: SourceFile, name: str) -> Optional[SourceFile]:
        for reference in source.references:
            for binding in reference.bindings:
                if binding.local == name and binding.imported == "*" and not reference.is_reexport:
                    return self.program.resolve_module(source, reference.specifier)
        return None

    def _resolve_global(self, name: str) -> Optional[tuple[SourceFile, Node]]:
        candidates = self._by_name.get(name, [])
        if len(candidates) == 1:
            return candidates[0]
        if candidates:
            logger.debug(f"Base type '{name}' is ambiguous ({len(candidates)} declarations)")
        return None
