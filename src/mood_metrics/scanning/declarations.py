"""Syntax-level extraction from TypeScript parse trees.

Turns tree-sitter nodes into the declaration models in ``models``: class
names, ``extends`` values, member declarations with their syntactic kind,
and module references (imports and re-exports).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional

from .models import ClassDeclaration, DeclarationKind, PropertyDeclaration, SourceLocation

if TYPE_CHECKING:
    from tree_sitter import Node

    from .program import SourceFile

CLASS_NODE_TYPES = frozenset({"class_declaration", "abstract_class_declaration", "class"})

# Statements whose start counts as the start of the class they wrap
_WRAPPER_TYPES = frozenset({"export_statement", "ambient_declaration"})

_METHOD_NODE_TYPES = frozenset({"method_definition", "method_signature", "abstract_method_signature"})

ANONYMOUS_CLASS_NAME = "(Anonymous class)"


@dataclass(frozen=True)
class ImportBinding:
    """One name bound by an import or re-export.

    ``imported`` is the exported name in the target module, "default" for
    default imports and "*" for namespace bindings. For ``export * from``
    both fields are "*".
    """

    local: str
    imported: str


@dataclass(frozen=True)
class ModuleReference:
    """An import or re-export statement naming another module."""

    specifier: str
    bindings: tuple[ImportBinding, ...] = ()
    is_reexport: bool = False


def node_text(node: Optional[Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def walk(root: Node) -> Iterator[Node]:
    """Yield every node under ``root`` in pre-order (document order)."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def is_class_node(node: Node) -> bool:
    # The `class` keyword token shares its type with class expressions
    return node.is_named and node.type in CLASS_NODE_TYPES


def location_of(node: Node, source: SourceFile) -> SourceLocation:
    """1-based line and character column of ``node`` in ``source``."""
    row, col = node.start_point
    line_start = node.start_byte - col
    prefix = source.code[line_start : node.start_byte].decode("utf-8", errors="replace")
    return SourceLocation(source.path, row + 1, len(prefix) + 1)


def declaration_start(node: Node) -> Node:
    """The outermost ``export`` / ``declare`` statement wrapping a class, if any."""
    current = node
    while current.parent is not None and current.parent.type in _WRAPPER_TYPES:
        current = current.parent
    return current


def bare_class_name(node: Node) -> str:
    """Declared name without type parameters."""
    name_node = node.child_by_field_name("name")
    if name_node is not None:
        return node_text(name_node)

    parent = node.parent
    if parent is not None:
        if parent.type == "variable_declarator":
            return node_text(parent.child_by_field_name("name"))
        if parent.type == "export_statement" and any(c.type == "default" for c in parent.children):
            return "default"
    return ANONYMOUS_CLASS_NAME


def class_name(node: Node) -> str:
    """Class name as a type, e.g. ``Box<T>`` for a generic class."""
    name = bare_class_name(node)
    type_params = node.child_by_field_name("type_parameters")
    if type_params is None:
        return name

    params = [
        node_text(param.child_by_field_name("name"))
        for param in type_params.named_children
        if param.type == "type_parameter"
    ]
    return f"{name}<{', '.join(params)}>" if params else name


def extends_values(node: Node) -> list[Node]:
    """Expressions listed in the class's ``extends`` clause."""
    for child in node.named_children:
        if child.type != "class_heritage":
            continue
        for clause in child.named_children:
            if clause.type == "extends_clause":
                return list(clause.children_by_field_name("value"))
    return []


def split_type_arguments(value: Node) -> tuple[Node, Optional[Node]]:
    """Separate ``Box`` from ``<string>`` in an ``extends Box<string>`` value."""
    if value.type == "instantiation_expression":
        return value.named_children[0], value.child_by_field_name("type_arguments")
    sibling = value.next_named_sibling
    if sibling is not None and sibling.type == "type_arguments":
        return value, sibling
    return value, None


def instantiated_name(name: str, type_arguments: Optional[Node]) -> str:
    """``Box`` + ``<string, number>`` -> ``Box<string, number>``."""
    if type_arguments is None:
        return name
    args = [node_text(arg) for arg in type_arguments.named_children]
    return f"{name}<{', '.join(args)}>" if args else name


def build_class_declaration(node: Node, source: SourceFile) -> ClassDeclaration:
    decl = ClassDeclaration(
        name=class_name(node),
        location=location_of(declaration_start(node), source),
        heritage=[node_text(value) for value in extends_values(node)],
    )
    body = node.child_by_field_name("body")
    if body is not None:
        decl.members = list(_extract_members(body, decl, source))
    return decl


def _extract_members(
    body: Node, owner: ClassDeclaration, source: SourceFile
) -> Iterator[PropertyDeclaration]:
    for member in body.named_children:
        if member.type in _METHOD_NODE_TYPES:
            name = node_text(member.child_by_field_name("name"))
            if name == "constructor":
                yield from _parameter_properties(member, owner, source)
                continue
            yield _member(member, name, _method_kind(member), owner, source)
        elif member.type == "public_field_definition":
            name = node_text(member.child_by_field_name("name"))
            yield _member(member, name, DeclarationKind.FIELD, owner, source)


def _method_kind(node: Node) -> DeclarationKind:
    for child in node.children:
        if child.type == "get":
            return DeclarationKind.GETTER
        if child.type == "set":
            return DeclarationKind.SETTER
        if child.is_named and child.type not in ("accessibility_modifier", "override_modifier"):
            # Reached the name: accessor keywords always precede it
            break
    return DeclarationKind.METHOD


def _member(
    node: Node, name: str, kind: DeclarationKind, owner: ClassDeclaration, source: SourceFile
) -> PropertyDeclaration:
    name_node = node.child_by_field_name("name")
    return PropertyDeclaration(
        name=name,
        kind=kind,
        owner=owner,
        is_private=_has_private_marker(node, name_node),
        is_static=any(child.type == "static" for child in node.children),
        location=location_of(node, source),
    )


def _parameter_properties(
    constructor: Node, owner: ClassDeclaration, source: SourceFile
) -> Iterator[PropertyDeclaration]:
    """``constructor(private x: number)`` declares the property ``x``."""
    params = constructor.child_by_field_name("parameters")
    if params is None:
        return
    for param in params.named_children:
        if param.type not in ("required_parameter", "optional_parameter"):
            continue
        is_property = any(
            child.type in ("accessibility_modifier", "readonly", "override_modifier")
            for child in param.children
        )
        pattern = param.child_by_field_name("pattern")
        if not is_property or pattern is None or pattern.type != "identifier":
            continue
        yield PropertyDeclaration(
            name=node_text(pattern),
            kind=DeclarationKind.PARAMETER,
            owner=owner,
            is_private=_has_private_marker(param, pattern),
            location=location_of(param, source),
        )


def _has_private_marker(node: Node, name_node: Optional[Node]) -> bool:
    # `#name` members count as private although they carry no `private`
    # modifier; a modifier-only check would report them as public
    if name_node is not None and name_node.type == "private_property_identifier":
        return True
    return any(
        child.type == "accessibility_modifier" and node_text(child) == "private"
        for child in node.children
    )


def module_reference(statement: Node) -> Optional[ModuleReference]:
    """Describe an ``import_statement`` or re-exporting ``export_statement``."""
    source = statement.child_by_field_name("source")
    if source is None:
        return None
    specifier = _string_value(source)

    if statement.type == "import_statement":
        return ModuleReference(specifier, tuple(_import_bindings(statement)))
    return ModuleReference(specifier, tuple(_reexport_bindings(statement)), is_reexport=True)


def _import_bindings(statement: Node) -> Iterator[ImportBinding]:
    for clause in statement.named_children:
        if clause.type != "import_clause":
            continue
        for child in clause.named_children:
            if child.type == "identifier":
                yield ImportBinding(node_text(child), "default")
            elif child.type == "namespace_import":
                alias = next((c for c in child.named_children if c.type == "identifier"), None)
                if alias is not None:
                    yield ImportBinding(node_text(alias), "*")
            elif child.type == "named_imports":
                for spec in child.named_children:
                    if spec.type == "import_specifier":
                        yield _specifier_binding(spec)


def _reexport_bindings(statement: Node) -> Iterator[ImportBinding]:
    has_clause = False
    for child in statement.named_children:
        if child.type == "export_clause":
            has_clause = True
            for spec in child.named_children:
                if spec.type == "export_specifier":
                    # `export { A as B } from` exposes B for A
                    yield _specifier_binding(spec)
        elif child.type == "namespace_export":
            has_clause = True
            alias = child.named_children[0] if child.named_children else None
            if alias is not None:
                yield ImportBinding(_string_value(alias), "*")
    if not has_clause:
        yield ImportBinding("*", "*")


def _specifier_binding(spec: Node) -> ImportBinding:
    name = _string_value(spec.child_by_field_name("name"))
    alias = spec.child_by_field_name("alias")
    return ImportBinding(_string_value(alias) if alias is not None else name, name)


def _string_value(node: Optional[Node]) -> str:
    text = node_text(node)
    if node is not None and node.type == "string" and len(text) >= 2:
        return text[1:-1]
    return text
