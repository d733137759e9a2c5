# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model for fieldschema (declarations, literals, type categories, schema trees)."""

from fieldschema.model.declaration import (
    Argument,
    Attribute,
    Declaration,
    DeclarationKind,
    Member,
    MemberKind,
    SourceLocation,
)
from fieldschema.model.schema import DeclarationSchema, DeferredProperties, SchemaKind, SchemaNode
from fieldschema.model.types import (
    ArrayCategory,
    EnumCategory,
    FieldDescriptor,
    Literal,
    LiteralKind,
    ObjectReferenceCategory,
    PrimitiveCategory,
    PrimitiveKind,
    TypeCategory,
)

__all__ = [
    # Declarations
    "SourceLocation",
    "DeclarationKind",
    "MemberKind",
    "Argument",
    "Attribute",
    "Member",
    "Declaration",
    # Literals and types
    "LiteralKind",
    "Literal",
    "PrimitiveKind",
    "PrimitiveCategory",
    "ArrayCategory",
    "ObjectReferenceCategory",
    "EnumCategory",
    "TypeCategory",
    "FieldDescriptor",
    # Schema tree
    "SchemaKind",
    "DeferredProperties",
    "SchemaNode",
    "DeclarationSchema",
]
