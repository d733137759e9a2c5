# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Extraction of per-field metadata from a declaration."""

from __future__ import annotations

from fieldschema.compiler.classifier import unwrap_optional
from fieldschema.compiler.diagnostics import DiagnosticBag, DiagnosticKind
from fieldschema.compiler.literals import parse_literal, string_literal_content
from fieldschema.logging import get_logger
from fieldschema.model.declaration import Argument, Attribute, Declaration, DeclarationKind, Member, MemberKind
from fieldschema.model.types import FieldDescriptor

_log = get_logger("extractor")

# ###############
# Public Interface
# ###############


def extract_fields(
    declaration: Declaration,
    bag: DiagnosticBag,
    *,
    schema_attribute: str = "Schema",
    property_attribute: str = "Property",
) -> list[FieldDescriptor] | None:
    """Extract FieldDescriptors for every stored field of *declaration*.

    Misplaced property attributes are reported first, one diagnostic per
    offending member; they never block extraction of the valid fields.
    A declaration that is not a struct gets a single ``only_structs``
    diagnostic and no fields at all.

    Args:
        declaration: The declaration to extract from.
        bag: Accumulator receiving diagnostics.
        schema_attribute: Name of the attribute requesting the schema.
        property_attribute: Name of the per-field metadata attribute.

    Returns:
        The fields in declaration order, or None if *declaration* is not a struct.
    """
    check_property_placement(declaration, bag, property_attribute=property_attribute)

    if declaration.kind is not DeclarationKind.STRUCT:
        attribute = declaration.attribute(schema_attribute)
        location = attribute.location if attribute is not None else declaration.location
        bag.report(
            DiagnosticKind.ONLY_STRUCTS,
            f"@{schema_attribute} can only be applied to structs",
            location,
        )
        return None

    fields: list[FieldDescriptor] = []
    for member in declaration.members:
        if member.kind is not MemberKind.FIELD:
            continue
        if member.declared_type is None:
            _log.debug("Skipping untyped field '%s' of '%s'", member.name, declaration.type_name)
            continue
        fields.append(_extract_field(member, property_attribute))
    return fields


def check_property_placement(
    declaration: Declaration,
    bag: DiagnosticBag,
    *,
    property_attribute: str = "Property",
) -> None:
    """Report ``only_properties`` for each non-field member carrying the property attribute."""
    for member in declaration.members:
        if member.kind is MemberKind.FIELD:
            continue
        attribute = member.attribute(property_attribute)
        if attribute is not None:
            bag.report(
                DiagnosticKind.ONLY_PROPERTIES,
                f"@{property_attribute} can only be applied to properties",
                attribute.location,
            )


def split_optional(declared_type: str) -> tuple[str, bool]:
    """Split declared-type text into its base type and whether it was optional."""
    text = declared_type.strip()
    base = unwrap_optional(text)
    if base is None:
        return text, False
    return base, True


# ################
# Implementation
# ################


def _extract_field(member: Member, property_attribute: str) -> FieldDescriptor:
    assert member.declared_type is not None
    base_type, is_optional = split_optional(member.declared_type)

    description: str | None = None
    example_argument: Argument | None = None
    attribute = member.attribute(property_attribute)
    if attribute is not None:
        description_argument = _argument(attribute, "description", 0)
        if description_argument is not None:
            content = string_literal_content(description_argument.expression)
            description = content.strip() if content is not None else None
        example_argument = _argument(attribute, "example", 1)

    example = None
    example_location = None
    if example_argument is not None:
        example = parse_literal(example_argument.expression)
        if example is not None:
            example_location = example_argument.location

    return FieldDescriptor(
        name=member.name,
        declared_type=member.declared_type.strip(),
        base_type=base_type,
        is_optional=is_optional,
        default_literal=parse_literal(member.initializer),
        description=description,
        example=example,
        location=member.location,
        example_location=example_location,
    )


def _argument(attribute: Attribute, label: str, position: int) -> Argument | None:
    """Return the argument labelled *label*, else the unlabelled argument at *position*."""
    for argument in attribute.arguments:
        if argument.label == label:
            return argument
    if position < len(attribute.arguments) and attribute.arguments[position].label is None:
        return attribute.arguments[position]
    return None
