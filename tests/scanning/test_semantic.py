"""Tests for scanning/semantic.py - base type and property resolution."""

import pytest

from mood_metrics.scanning.models import DeclarationKind
from mood_metrics.scanning.program import SourceProgram
from mood_metrics.scanning.semantic import SemanticModel


@pytest.fixture
def load_model(ts_project):
    """Write files, load the program from ``entry`` and return its model."""

    def _load(files, entry="index.ts"):
        root = ts_project(files)
        return SemanticModel(SourceProgram.load(root / entry))

    return _load


def _types(model):
    """Every class type in program order, keyed by name."""
    found = {}
    for source in model.source_files():
        for node in model.walk(source):
            if model.is_class_like(node):
                class_type = model.type_at(node, source)
                found[class_type.name] = class_type
    return found


def _property_names(model, class_type):
    return [symbol.name for symbol in model.properties(class_type)]


class TestTypeAt:
    """Class types for class-like nodes."""

    def test_type_is_cached(self, load_model):
        """The same node always yields the same type."""
        model = load_model({"index.ts": "class A {}\n"})
        (source,) = model.source_files()
        node = next(n for n in model.walk(source) if model.is_class_like(n))

        assert model.type_at(node, source) is model.type_at(node, source)

    def test_type_path(self, load_model, tmp_path):
        """A declared type's path is file:line:col."""
        model = load_model({"index.ts": "// models\nexport class A {}\n"})

        a = _types(model)["A"]

        assert a.path == f"{(tmp_path / 'index.ts').resolve().as_posix()}:2:1"

    def test_same_name_in_two_files(self, load_model):
        """Classes with the same name in different files are distinct types."""
        model = load_model(
            {
                "index.ts": 'import "./other";\nclass Model {}\n',
                "other.ts": "class Model {}\n",
            }
        )
        paths = {
            model.type_at(node, source).path
            for source in model.source_files()
            for node in model.walk(source)
            if model.is_class_like(node)
        }

        assert len(paths) == 2


class TestBaseTypes:
    """Resolution of extends clauses."""

    def test_root_class_has_no_bases(self, load_model):
        model = load_model({"index.ts": "class A {}\n"})
        assert model.base_types(_types(model)["A"]) == []

    def test_local_base(self, load_model):
        """A base declared in the same file."""
        model = load_model({"index.ts": "class A {}\nclass B extends A {}\n"})
        types = _types(model)

        assert model.base_types(types["B"]) == [types["A"]]

    def test_local_base_declared_later(self, load_model):
        """Declaration order does not matter."""
        model = load_model({"index.ts": "class B extends A {}\nclass A {}\n"})
        types = _types(model)

        assert model.base_types(types["B"]) == [types["A"]]

    def test_named_import(self, load_model):
        """A base imported by name from another file."""
        model = load_model(
            {
                "index.ts": 'import { Animal } from "./animal";\nclass Dog extends Animal {}\n',
                "animal.ts": "export class Animal {}\n",
            }
        )
        types = _types(model)

        assert model.base_types(types["Dog"]) == [types["Animal"]]

    def test_aliased_import(self, load_model):
        """An aliased import resolves to the exported class."""
        model = load_model(
            {
                "index.ts": 'import { Animal as Pet } from "./animal";\nclass Dog extends Pet {}\n',
                "animal.ts": "export class Animal {}\n",
            }
        )
        types = _types(model)

        assert model.base_types(types["Dog"]) == [types["Animal"]]

    def test_default_import(self, load_model):
        """A default import resolves to the default-exported class."""
        model = load_model(
            {
                "index.ts": 'import Base from "./base";\nclass Child extends Base {}\n',
                "base.ts": "export default class Base {}\n",
            }
        )
        types = _types(model)

        assert model.base_types(types["Child"]) == [types["Base"]]

    def test_namespace_import(self, load_model):
        """ns.Base resolves through a namespace import."""
        model = load_model(
            {
                "index.ts": 'import * as shapes from "./shapes";\nclass Square extends shapes.Shape {}\n',
                "shapes.ts": "export class Shape {}\n",
            }
        )
        types = _types(model)

        assert model.base_types(types["Square"]) == [types["Shape"]]

    def test_reexport_chain(self, load_model):
        """Bases re-exported through a barrel file resolve to the declaration."""
        model = load_model(
            {
                "index.ts": 'import { Entity } from "./models";\nclass User extends Entity {}\n',
                "models/index.ts": 'export * from "./entity";\n',
                "models/entity.ts": "export class Entity {}\n",
            }
        )
        types = _types(model)

        assert model.base_types(types["User"]) == [types["Entity"]]

    def test_renamed_reexport(self, load_model):
        """export { A as B } from exposes A under B."""
        model = load_model(
            {
                "index.ts": 'import { Record } from "./barrel";\nclass Row extends Record {}\n',
                "barrel.ts": 'export { Entity as Record } from "./entity";\n',
                "entity.ts": "export class Entity {}\n",
            }
        )
        types = _types(model)

        assert model.base_types(types["Row"]) == [types["Entity"]]

    def test_local_export_list(self, load_model):
        """export { Impl as Base } without a source resolves locally."""
        model = load_model(
            {
                "index.ts": 'import { Base } from "./base";\nclass Child extends Base {}\n',
                "base.ts": "class Impl {}\nexport { Impl as Base };\n",
            }
        )
        types = _types(model)

        assert model.base_types(types["Child"]) == [types["Impl"]]

    def test_unique_global_fallback(self, load_model):
        """An unimported base resolves to the only class of that name."""
        model = load_model(
            {
                "index.ts": 'import "./base";\nclass Child extends Base {}\n',
                "base.ts": "class Base {}\n",
            }
        )
        types = _types(model)

        assert model.base_types(types["Child"]) == [types["Base"]]

    def test_unresolved_base_is_external(self, load_model):
        """A base with no declaration becomes an external type."""
        model = load_model({"index.ts": "class AppError extends Error {}\n"})

        (base,) = model.base_types(_types(model)["AppError"])

        assert base.name == "Error"
        assert base.declaration is None
        assert base.path == ""
        assert model.properties(base) == []

    def test_instantiated_generic_base(self, load_model):
        """extends Box<string> names a distinct type sharing Box<T>'s declaration."""
        model = load_model({"index.ts": "class Box<T> {}\nclass S extends Box<string> {}\n"})
        types = _types(model)
        generic = types["Box<T>"]

        (base,) = model.base_types(types["S"])

        assert base.name == "Box<string>"
        assert base.declaration is generic.declaration
        assert base.path == generic.path
        assert base != generic

    def test_unresolved_generic_base_keeps_arguments(self, load_model):
        """An external generic base is named with its type arguments."""
        model = load_model({"index.ts": "class Cache extends Map<string, number> {}\n"})

        (base,) = model.base_types(_types(model)["Cache"])

        assert base.name == "Map<string, number>"
        assert base.declaration is None

    def test_multiple_bases_kept_in_order(self, load_model):
        """Every base is returned so the caller can reject the class."""
        model = load_model({"index.ts": "class A {}\nclass B {}\nclass C extends A, B {}\n"})
        types = _types(model)

        assert [t.name for t in model.base_types(types["C"])] == ["A", "B"]

    def test_vendored_base_resolves(self, load_model):
        """A base in node_modules resolves but its file is not analyzed."""
        model = load_model(
            {
                "index.ts": 'import { Base } from "./node_modules/lib/base";\nclass App extends Base {}\n',
                "node_modules/lib/base.ts": "export class Base { run() {} }\n",
            }
        )
        types = _types(model)

        (base,) = model.base_types(types["App"])

        assert "Base" not in types
        assert base.name == "Base"
        assert base.path.endswith("node_modules/lib/base.ts:1:1")
        assert _property_names(model, types["App"]) == ["run"]


class TestProperties:
    """Properties visible on a class."""

    def test_own_then_inherited(self, load_model):
        """Own members come first, then unshadowed base members."""
        model = load_model(
            {
                "index.ts": """
                    class Base { a() {} b() {} }
                    class Child extends Base { b() {} c() {} }
                """
            }
        )
        types = _types(model)

        assert _property_names(model, types["Child"]) == ["b", "c", "a"]

    def test_overriding_symbol_uses_own_declaration(self, load_model):
        """A redeclared name resolves to the subclass declaration."""
        model = load_model({"index.ts": "class Base { b() {} }\nclass Child extends Base { b() {} }\n"})
        types = _types(model)

        (symbol,) = model.properties(types["Child"])

        assert symbol.first_declaration.owner is types["Child"].declaration

    def test_static_members_excluded(self, load_model):
        """Static members belong to the constructor, not instances."""
        model = load_model({"index.ts": "class A { static make() {} run() {} static x = 1; }\n"})

        assert _property_names(model, _types(model)["A"]) == ["run"]

    def test_parameter_properties(self, load_model):
        """Constructor parameter properties are attributes of the class."""
        model = load_model(
            {"index.ts": "class P { constructor(private x: number, readonly y: number, z: number) {} }\n"}
        )

        symbols = model.properties(_types(model)["P"])

        assert [s.name for s in symbols] == ["x", "y"]
        assert all(s.first_declaration.kind is DeclarationKind.PARAMETER for s in symbols)
        assert [s.first_declaration.is_private for s in symbols] == [True, False]

    def test_accessor_pair_is_one_symbol(self, load_model):
        """A getter and setter share one symbol led by the getter."""
        model = load_model(
            {"index.ts": "class T { get v(): number { return 1; } set v(n: number) {} }\n"}
        )

        (symbol,) = model.properties(_types(model)["T"])

        assert [d.kind for d in symbol.declarations] == [
            DeclarationKind.GETTER,
            DeclarationKind.SETTER,
        ]

    def test_overloads_are_one_symbol(self, load_model):
        """Overload signatures and the implementation form one symbol."""
        model = load_model(
            {"index.ts": "class P { f(x: string): void; f(x: number): void; f(x: any) {} }\n"}
        )

        (symbol,) = model.properties(_types(model)["P"])

        assert len(symbol.declarations) == 3

    def test_properties_through_grandparent(self, load_model):
        """Properties propagate down a chain across files."""
        model = load_model(
            {
                "index.ts": 'import { Mid } from "./mid";\nclass Leaf extends Mid { leaf() {} }\n',
                "mid.ts": 'import { Root } from "./root";\nexport class Mid extends Root { mid() {} }\n',
                "root.ts": "export class Root { root() {} }\n",
            }
        )

        assert _property_names(model, _types(model)["Leaf"]) == ["leaf", "mid", "root"]

    def test_cyclic_extends_does_not_recurse(self, load_model):
        """A cycle in extends terminates."""
        model = load_model({"index.ts": "class A extends B { a() {} }\nclass B extends A { b() {} }\n"})
        types = _types(model)

        assert set(_property_names(model, types["A"])) == {"a", "b"}
