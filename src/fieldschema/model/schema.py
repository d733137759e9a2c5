# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema tree produced by the builder and consumed by the emitters."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from fieldschema.model.declaration import SourceLocation
from fieldschema.model.types import Literal

# ###############
# Public Interface
# ###############


class SchemaKind(Enum):
    """Values of the ``"type"`` entry of a schema node."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


class DeferredProperties(BaseModel):
    """The ``properties`` of another type, fetched from its accessor when the schema is read."""

    model_config = ConfigDict(frozen=True)

    type_name: str


class SchemaNode(BaseModel):
    """One node of a schema tree.

    ``properties`` is either an ordered mapping of inline child nodes or a
    deferred reference to another type's properties. Entries left as None
    are absent from the rendered schema.
    """

    model_config = ConfigDict(frozen=True)

    type: SchemaKind
    properties: dict[str, SchemaNode] | DeferredProperties | None = None
    items: SchemaNode | None = None
    enum: tuple[Literal, ...] | None = None
    required: bool | None = None
    description: str | None = None
    example: Literal | None = None
    default: Literal | None = None


class DeclarationSchema(BaseModel):
    """The derived schema of one declaration.

    Attributes:
        type_name: Name of the declaration the schema belongs to.
        root: The top-level ``{"type": "object", "properties": ...}`` node.
        references: Names of the types whose accessors the schema defers to,
            in first-use order without duplicates.
        location: Location of the declaration.
    """

    model_config = ConfigDict(frozen=True)

    type_name: str
    root: SchemaNode
    references: tuple[str, ...] = ()
    location: SourceLocation = _Field(default_factory=SourceLocation)


SchemaNode.model_rebuild()
