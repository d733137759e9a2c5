# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive construction of schema trees from classified fields."""

from __future__ import annotations

from collections.abc import Sequence

from fieldschema.model.declaration import SourceLocation
from fieldschema.model.schema import DeclarationSchema, DeferredProperties, SchemaKind, SchemaNode
from fieldschema.model.types import (
    ArrayCategory,
    EnumCategory,
    FieldDescriptor,
    Literal,
    LiteralKind,
    ObjectReferenceCategory,
    PrimitiveCategory,
    TypeCategory,
)

# ###############
# Public Interface
# ###############


def build_type(category: TypeCategory) -> SchemaNode:
    """Build the type-shaped subtree for *category*.

    The result never carries ``required``, ``description``, ``example`` or
    ``default``: those belong to a field, not to a type. Array items are
    built with this function for that reason.

    Raises:
        ValueError: If *category* contains an enumeration whose values cannot
            share a single schema type (see :func:`enum_schema_kind`).
    """
    if isinstance(category, PrimitiveCategory):
        return SchemaNode(type=SchemaKind(category.primitive.value))
    if isinstance(category, ArrayCategory):
        return SchemaNode(type=SchemaKind.ARRAY, items=build_type(category.element))
    if isinstance(category, ObjectReferenceCategory):
        return SchemaNode(type=SchemaKind.OBJECT, properties=DeferredProperties(type_name=category.type_name))
    kind = enum_schema_kind(category.values)
    if kind is None:
        raise ValueError(f"Enumeration '{category.type_name}' has no single schema type")
    return SchemaNode(type=kind, enum=category.values)


def build_field(field: FieldDescriptor, category: TypeCategory) -> SchemaNode:
    """Build the schema node of one field.

    The type-shaped core is followed by ``required`` (true iff the declared
    type has no optional marker, whatever the default), then by
    ``description``, ``example`` and ``default`` when present.
    """
    core = build_type(category)
    return core.model_copy(
        update={
            "required": not field.is_optional,
            "description": field.description,
            "example": field.example,
            "default": field.default_literal,
        }
    )


def build_declaration(
    type_name: str,
    fields: Sequence[tuple[FieldDescriptor, TypeCategory]],
    location: SourceLocation | None = None,
) -> DeclarationSchema:
    """Build the top-level object schema of a declaration from its classified fields.

    Properties keep declaration order; field names are used verbatim as keys.
    """
    properties: dict[str, SchemaNode] = {}
    references: list[str] = []
    for field, category in fields:
        properties[field.name] = build_field(field, category)
        for name in collect_references(category):
            if name not in references:
                references.append(name)
    return DeclarationSchema(
        type_name=type_name,
        root=SchemaNode(type=SchemaKind.OBJECT, properties=properties),
        references=tuple(references),
        location=location or SourceLocation(),
    )


def enum_schema_kind(values: Sequence[Literal]) -> SchemaKind | None:
    """Return the schema type shared by all enum *values*, or None if there is none.

    All-string values give ``string`` and all-numeric values give ``number``.
    An empty or mixed set gives None.
    """
    if not values:
        return None
    kinds = {value.kind for value in values}
    if kinds == {LiteralKind.STRING}:
        return SchemaKind.STRING
    if kinds <= {LiteralKind.INTEGER, LiteralKind.FLOAT}:
        return SchemaKind.NUMBER
    return None


def unsupported_enum(category: TypeCategory) -> EnumCategory | None:
    """Return the first enumeration inside *category* that :func:`build_type` cannot express."""
    if isinstance(category, ArrayCategory):
        return unsupported_enum(category.element)
    if isinstance(category, EnumCategory) and enum_schema_kind(category.values) is None:
        return category
    return None


def collect_references(category: TypeCategory) -> list[str]:
    """Recursively collect the names of object references inside *category*."""
    if isinstance(category, ObjectReferenceCategory):
        return [category.type_name]
    if isinstance(category, ArrayCategory):
        return collect_references(category.element)
    return []
