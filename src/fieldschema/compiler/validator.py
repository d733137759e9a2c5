# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Check that an example literal's kind fits the field's declared type."""

from __future__ import annotations

from fieldschema.compiler.diagnostics import Diagnostic, DiagnosticBag, DiagnosticKind
from fieldschema.model.types import FieldDescriptor, LiteralKind, PrimitiveCategory, PrimitiveKind, TypeCategory

# ###############
# Public Interface
# ###############


def validate_example(field: FieldDescriptor, category: TypeCategory, bag: DiagnosticBag) -> Diagnostic | None:
    """Validate *field*'s example against *category*.

    Only primitive categories are checked; examples on array, reference and
    enum fields pass through unvalidated. A mismatch is reported once and
    does not stop processing: the example is still emitted as written.

    Returns:
        The reported diagnostic, or None if the example is absent or acceptable.
    """
    if field.example is None or not isinstance(category, PrimitiveCategory):
        return None

    accepted = _ACCEPTED_KINDS[category.primitive]
    if field.example.kind in accepted:
        return None

    expected = " or ".join(_describe(kind) for kind in accepted)
    message = (
        f"Example type mismatch for field '{field.name}': expected {expected} literal for"
        f" '{field.base_type}' but got {_describe(field.example.kind)} literal {field.example.text}"
    )
    return bag.report(
        DiagnosticKind.EXAMPLE_TYPE_MISMATCH,
        message,
        field.example_location or field.location,
    )


# ################
# Implementation
# ################

_ACCEPTED_KINDS: dict[PrimitiveKind, tuple[LiteralKind, ...]] = {
    PrimitiveKind.STRING: (LiteralKind.STRING,),
    PrimitiveKind.NUMBER: (LiteralKind.INTEGER, LiteralKind.FLOAT),
    PrimitiveKind.BOOLEAN: (LiteralKind.BOOLEAN,),
}


def _describe(kind: LiteralKind) -> str:
    return {
        LiteralKind.STRING: "a string",
        LiteralKind.INTEGER: "an integer",
        LiteralKind.FLOAT: "a float",
        LiteralKind.BOOLEAN: "a boolean",
    }[kind]
