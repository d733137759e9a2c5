# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for per-declaration and per-module schema derivation."""

import textwrap

from fieldschema.compiler.derive import ModuleResult, derive, derive_module, extract_enum_cases
from fieldschema.compiler.diagnostics import DiagnosticKind, ErrorCategory
from fieldschema.config import DeriveConfig
from fieldschema.emit.python import render_module
from fieldschema.emit.resolve import resolve_schemas
from fieldschema.frontend.loader import parse_declarations
from fieldschema.model.declaration import Declaration
from fieldschema.model.schema import DeclarationSchema, DeferredProperties, SchemaKind, SchemaNode
from fieldschema.model.types import Literal, LiteralKind, PrimitiveKind

# ###############
# Test Helpers
# ###############


def _declarations(source: str) -> list[Declaration]:
    return parse_declarations(textwrap.dedent(source), source_label="test.yaml")


def _module(source: str, config: DeriveConfig | None = None) -> ModuleResult:
    return derive_module(_declarations(source), config)


def _schema(result: ModuleResult, type_name: str) -> DeclarationSchema:
    return next(s for s in result.schemas if s.type_name == type_name)


def _properties(schema: DeclarationSchema) -> dict[str, SchemaNode]:
    assert isinstance(schema.root.properties, dict)
    return schema.root.properties


def _kinds(result: ModuleResult) -> list[DiagnosticKind]:
    return [d.kind for d in result.diagnostics]


# ###############
# Required, optional and defaults
# ###############


class TestRequiredSemantics:
    def test_all_primitive_non_optional_fields(self) -> None:
        result = _module(
            """
            declarations:
              - name: Point
                attributes: [Schema]
                members:
                  - {name: label, type: String}
                  - {name: x, type: Double}
                  - {name: visible, type: Bool}
            """
        )
        assert result.diagnostics == []
        resolved = resolve_schemas(result.schemas)
        assert resolved["Point"] == {
            "type": "object",
            "properties": {
                "label": {"type": "string", "required": True},
                "x": {"type": "number", "required": True},
                "visible": {"type": "boolean", "required": True},
            },
        }

    def test_default_does_not_make_field_optional(self) -> None:
        result = _module(
            """
            declarations:
              - name: Person
                attributes: [Schema]
                members:
                  - {name: name, type: String, default: "John"}
            """
        )
        node = _properties(_schema(result, "Person"))["name"]
        assert node.required is True
        assert node.default == Literal(kind=LiteralKind.STRING, text='"John"')

    def test_optional_field_has_no_default(self) -> None:
        result = _module(
            """
            declarations:
              - name: Person
                attributes: [Schema]
                members:
                  - {name: nickname, type: String?}
            """
        )
        node = _properties(_schema(result, "Person"))["nickname"]
        assert node.required is False
        assert node.default is None

    def test_optional_field_with_default_keeps_default(self) -> None:
        result = _module(
            """
            declarations:
              - name: Settings
                attributes: [Schema]
                members:
                  - {name: retries, type: Int?, default: 3}
            """
        )
        node = _properties(_schema(result, "Settings"))["retries"]
        assert node.required is False
        assert node.default == Literal(kind=LiteralKind.INTEGER, text="3")

    def test_float_literal_text_is_preserved(self) -> None:
        result = _module(
            """
            declarations:
              - name: Product
                attributes: [Schema]
                members:
                  - {name: price, type: Double, default: 19.990}
            """
        )
        node = _properties(_schema(result, "Product"))["price"]
        assert node.default == Literal(kind=LiteralKind.FLOAT, text="19.990")


# ###############
# Arrays and references
# ###############


class TestArraysAndReferences:
    SOURCE = """
        declarations:
          - name: Item
            attributes: [Schema]
            members:
              - {name: sku, type: String}
          - name: Order
            attributes: [Schema]
            members:
              - {name: tags, type: "[String]"}
              - {name: grid, type: "[[Int]]"}
              - {name: items, type: "[Item]"}
              - name: featured
                type: Item
                attributes:
                  - Property: {description: "Highlighted item"}
        """

    def test_array_of_primitive_items_have_no_required(self) -> None:
        node = _properties(_schema(_module(self.SOURCE), "Order"))["tags"]
        assert node.type is SchemaKind.ARRAY
        assert node.required is True
        assert node.items == SchemaNode(type=SchemaKind.STRING)

    def test_nested_arrays(self) -> None:
        node = _properties(_schema(_module(self.SOURCE), "Order"))["grid"]
        assert node.items == SchemaNode(type=SchemaKind.ARRAY, items=SchemaNode(type=SchemaKind.NUMBER))

    def test_array_of_objects_defers_to_referenced_accessor(self) -> None:
        node = _properties(_schema(_module(self.SOURCE), "Order"))["items"]
        assert node.items == SchemaNode(type=SchemaKind.OBJECT, properties=DeferredProperties(type_name="Item"))

    def test_nested_object_keeps_field_entries(self) -> None:
        node = _properties(_schema(_module(self.SOURCE), "Order"))["featured"]
        assert node == SchemaNode(
            type=SchemaKind.OBJECT,
            properties=DeferredProperties(type_name="Item"),
            required=True,
            description="Highlighted item",
        )

    def test_references_are_recorded(self) -> None:
        assert _schema(_module(self.SOURCE), "Order").references == ("Item",)

    def test_resolved_nested_object(self) -> None:
        resolved = resolve_schemas(_module(self.SOURCE).schemas)
        assert resolved["Order"]["properties"]["featured"] == {
            "type": "object",
            "properties": {"sku": {"type": "string", "required": True}},
            "required": True,
            "description": "Highlighted item",
        }


# ###############
# Example validation
# ###############


class TestExampleValidation:
    def test_mismatch_reports_once_and_still_generates(self) -> None:
        result = _module(
            """
            declarations:
              - name: Flags
                attributes: [Schema]
                members:
                  - name: enabled
                    type: Bool
                    attributes:
                      - Property: {description: "Enabled", example: "yes please"}
                  - {name: count, type: Int}
            """
        )
        assert len(result.diagnostics) == 1
        diagnostic = result.diagnostics[0]
        assert diagnostic.category is ErrorCategory.VALIDATION
        assert not result.has_errors
        assert diagnostic.location.line == 9
        properties = _properties(_schema(result, "Flags"))
        assert list(properties) == ["enabled", "count"]
        assert properties["enabled"].example == Literal(kind=LiteralKind.STRING, text='"yes please"')

    def test_integer_example_on_double_is_accepted(self) -> None:
        result = _module(
            """
            declarations:
              - name: Product
                attributes: [Schema]
                members:
                  - name: price
                    type: Double
                    attributes:
                      - Property: {example: 20}
            """
        )
        assert result.diagnostics == []


# ###############
# Structural errors
# ###############


class TestStructuralErrors:
    def test_class_yields_no_schema_and_one_structural_error(self) -> None:
        result = _module(
            """
            declarations:
              - name: Service
                kind: class
                attributes: [Schema]
                members:
                  - {name: a, type: Int}
                  - {name: b, type: String}
            """
        )
        assert result.schemas == []
        assert len(result.diagnostics) == 1
        diagnostic = result.diagnostics[0]
        assert diagnostic.kind is DiagnosticKind.ONLY_STRUCTS
        assert diagnostic.category is ErrorCategory.STRUCTURAL
        assert (diagnostic.location.line, diagnostic.location.column) == (5, 18)
        assert result.has_errors

    def test_enum_with_schema_attribute_is_rejected(self) -> None:
        result = _module(
            """
            declarations:
              - name: Color
                kind: enum
                attributes: [Schema]
                members:
                  - {name: red, kind: case}
            """
        )
        assert result.schemas == []
        assert _kinds(result) == [DiagnosticKind.ONLY_STRUCTS]

    def test_misplaced_property_outside_schema_declaration(self) -> None:
        result = _module(
            """
            declarations:
              - name: Helper
                members:
                  - name: getName
                    kind: method
                    attributes:
                      - Property: ["Get name"]
            """
        )
        assert result.schemas == []
        assert _kinds(result) == [DiagnosticKind.ONLY_PROPERTIES]

    def test_misplaced_property_inside_schema_declaration(self) -> None:
        result = _module(
            """
            declarations:
              - name: Person
                attributes: [Schema]
                members:
                  - {name: name, type: String}
                  - name: getName
                    kind: method
                    attributes:
                      - Property: ["Get name"]
            """
        )
        assert _kinds(result) == [DiagnosticKind.ONLY_PROPERTIES]
        assert list(_properties(_schema(result, "Person"))) == ["name"]


# ###############
# Enumerations
# ###############


class TestEnums:
    def test_string_enum_from_case_names(self) -> None:
        result = _module(
            """
            declarations:
              - name: Role
                kind: enum
                members:
                  - {name: admin, kind: case}
                  - {name: guest, kind: case}
              - name: User
                attributes: [Schema]
                members:
                  - {name: role, type: Role}
            """
        )
        assert result.diagnostics == []
        node = _properties(_schema(result, "User"))["role"]
        assert node == SchemaNode(
            type=SchemaKind.STRING,
            enum=(Literal.string("admin"), Literal.string("guest")),
            required=True,
        )

    def test_numeric_enum_from_raw_values(self) -> None:
        result = _module(
            """
            declarations:
              - name: Level
                kind: enum
                members:
                  - {name: low, kind: case, value: 1}
                  - {name: high, kind: case, value: 10}
              - name: Alarm
                attributes: [Schema]
                members:
                  - {name: levels, type: "[Level]"}
            """
        )
        node = _properties(_schema(result, "Alarm"))["levels"]
        assert node.items == SchemaNode(
            type=SchemaKind.NUMBER,
            enum=(Literal(kind=LiteralKind.INTEGER, text="1"), Literal(kind=LiteralKind.INTEGER, text="10")),
        )

    def test_mixed_enum_is_unsupported(self) -> None:
        result = _module(
            """
            declarations:
              - name: Mixed
                kind: enum
                members:
                  - {name: a, kind: case, value: "a"}
                  - {name: b, kind: case, value: 2}
              - name: Holder
                attributes: [Schema]
                members:
                  - {name: mixed, type: Mixed}
                  - {name: id, type: Int}
            """
        )
        assert _kinds(result) == [DiagnosticKind.UNSUPPORTED_ENUM]
        assert result.diagnostics[0].category is ErrorCategory.UNSUPPORTED_FEATURE
        assert list(_properties(_schema(result, "Holder"))) == ["id"]

    def test_empty_enum_is_unsupported(self) -> None:
        result = _module(
            """
            declarations:
              - {name: Nothing, kind: enum}
              - name: Holder
                attributes: [Schema]
                members:
                  - {name: value, type: Nothing}
            """
        )
        assert _kinds(result) == [DiagnosticKind.UNSUPPORTED_ENUM]

    def test_extract_enum_cases_rejects_non_literal_raw_value(self) -> None:
        (decl,) = _declarations(
            """
            declarations:
              - name: Odd
                kind: enum
                members:
                  - {name: a, kind: case, value: !expr "compute()"}
            """
        )
        assert extract_enum_cases(decl) == ()


# ###############
# Module-level reference checks
# ###############


class TestReferenceChecks:
    def test_unresolved_reference_is_a_warning(self) -> None:
        result = _module(
            """
            declarations:
              - name: Person
                attributes: [Schema]
                members:
                  - {name: born, type: Date}
            """
        )
        assert _kinds(result) == [DiagnosticKind.UNRESOLVED_REFERENCE]
        assert not result.has_errors
        node = _properties(_schema(result, "Person"))["born"]
        assert node.properties == DeferredProperties(type_name="Date")

    def test_cycle_is_rejected(self) -> None:
        result = _module(
            """
            declarations:
              - name: A
                attributes: [Schema]
                members:
                  - {name: b, type: B}
              - name: B
                attributes: [Schema]
                members:
                  - {name: a, type: "[A]?"}
              - name: Leaf
                attributes: [Schema]
                members:
                  - {name: id, type: Int}
            """
        )
        assert [s.type_name for s in result.schemas] == ["Leaf"]
        assert _kinds(result) == [DiagnosticKind.REFERENCE_CYCLE] * 2
        assert result.diagnostics[0].message == "Reference cycle detected: A -> B -> A"
        assert result.diagnostics[1].message == "Reference cycle detected: B -> A -> B"

    def test_dependents_of_a_cycle_are_rejected(self) -> None:
        result = _module(
            """
            declarations:
              - name: Tree
                attributes: [Schema]
                members:
                  - {name: root, type: Node}
              - name: Node
                attributes: [Schema]
                members:
                  - {name: children, type: "[Node]"}
            """
        )
        assert result.schemas == []
        assert [d.message for d in result.diagnostics] == [
            "'Tree' depends on reference cycle Node -> Node",
            "Reference cycle detected: Node -> Node",
        ]

    def test_cycle_check_can_be_disabled(self) -> None:
        result = _module(
            """
            declarations:
              - name: Node
                attributes: [Schema]
                members:
                  - {name: next, type: Node?}
            """,
            DeriveConfig(check_cycles=False),
        )
        assert result.diagnostics == []
        assert [s.type_name for s in result.schemas] == ["Node"]


# ###############
# Configuration and end-to-end
# ###############


class TestConfigAndEndToEnd:
    def test_primitive_aliases(self) -> None:
        result = _module(
            """
            declarations:
              - name: Record
                attributes: [Schema]
                members:
                  - {name: id, type: UUID}
            """,
            DeriveConfig(primitive_aliases={"UUID": PrimitiveKind.STRING}),
        )
        assert result.diagnostics == []
        assert _properties(_schema(result, "Record"))["id"].type is SchemaKind.STRING

    def test_custom_schema_attribute(self) -> None:
        source = """
            declarations:
              - name: Record
                attributes: [JSONSchema]
                members:
                  - {name: id, type: Int}
            """
        assert _module(source).schemas == []
        assert len(_module(source, DeriveConfig(schema_attribute="JSONSchema")).schemas) == 1

    def test_derive_treats_declaration_as_schema_bearing(self) -> None:
        (decl,) = _declarations(
            """
            declarations:
              - name: Bare
                members:
                  - {name: id, type: Int}
            """
        )
        result = derive(decl)
        assert result.schema is not None
        assert not result.has_errors

    def test_rederiving_is_idempotent(self) -> None:
        source = """
            declarations:
              - name: Person
                attributes: [Schema]
                members:
                  - {name: name, type: String, default: "John"}
                  - {name: scores, type: "[Double]"}
            """
        first = render_module(_module(source).schemas)
        second = render_module(_module(source).schemas)
        assert first == second

    def test_name_then_age(self) -> None:
        result = _module(
            """
            declarations:
              - name: Person
                attributes: [Schema]
                members:
                  - {name: name, type: String}
                  - name: age
                    type: Int
                    attributes:
                      - Property: {example: 30}
            """
        )
        resolved = resolve_schemas(result.schemas)["Person"]
        assert list(resolved["properties"]) == ["name", "age"]
        assert resolved["properties"]["age"] == {"type": "number", "required": True, "example": 30}
