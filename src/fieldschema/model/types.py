# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Literals, type categories and extracted field metadata."""

from __future__ import annotations

import json
import re
from enum import Enum
from typing import Annotated
from typing import Literal as _Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from fieldschema.model.declaration import SourceLocation

# ###############
# Public Interface
# ###############


class LiteralKind(Enum):
    """Kinds of source literals accepted for examples, defaults and enum raw values."""

    STRING = "String"
    INTEGER = "Integer"
    FLOAT = "Float"
    BOOLEAN = "Boolean"


_LEADING_ZEROS_RE = re.compile(r"^(-?)0+(?=[0-9])")


class Literal(BaseModel):
    """A kind-tagged source constant.

    ``text`` is the verbatim source token (string literals keep their
    surrounding double quotes) so that re-emission preserves formatting such
    as ``19.990`` exactly.
    """

    model_config = ConfigDict(frozen=True)

    kind: LiteralKind
    text: str

    @classmethod
    def string(cls, value: str) -> Literal:
        """Build a String literal from an unquoted Python string."""
        return cls(kind=LiteralKind.STRING, text=json.dumps(value))

    def value(self) -> str | int | float | bool:
        """Decode the literal text into the matching Python value."""
        if self.kind is LiteralKind.STRING:
            return json.loads(self.text)
        if self.kind is LiteralKind.BOOLEAN:
            return self.text == "true"
        digits = self.text.replace("_", "")
        if self.kind is LiteralKind.FLOAT:
            return float(digits)
        unsigned = digits.lstrip("+-")
        if unsigned[:2].lower() in ("0x", "0o", "0b"):
            return int(digits, 0)
        return int(digits, 10)

    def json_text(self) -> str:
        """Return the literal as JSON source text.

        Float text keeps its fraction and exponent verbatim. Separators, a
        leading ``+`` and redundant leading zeros are dropped since JSON
        accepts none of them.
        """
        if self.kind is LiteralKind.FLOAT:
            digits = self.text.replace("_", "").lstrip("+")
            return _LEADING_ZEROS_RE.sub(r"\1", digits)
        return json.dumps(self.value())


class PrimitiveKind(Enum):
    """Schema-level primitive kinds. Integer and floating types share ``number``."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


class PrimitiveCategory(BaseModel):
    """A declared type from the primitive vocabulary."""

    model_config = ConfigDict(frozen=True)

    kind: _Literal["primitive"] = "primitive"
    primitive: PrimitiveKind


class ArrayCategory(BaseModel):
    """An array of some element category (one level of bracketing)."""

    model_config = ConfigDict(frozen=True)

    kind: _Literal["array"] = "array"
    element: TypeCategory


class ObjectReferenceCategory(BaseModel):
    """A reference to another schema-bearing type, resolved through its own accessor."""

    model_config = ConfigDict(frozen=True)

    kind: _Literal["reference"] = "reference"
    type_name: str


class EnumCategory(BaseModel):
    """A known enumeration with its case values."""

    model_config = ConfigDict(frozen=True)

    kind: _Literal["enum"] = "enum"
    type_name: str
    values: tuple[Literal, ...] = ()


# The classification of a field's declared type for schema purposes.
TypeCategory = Annotated[
    PrimitiveCategory | ArrayCategory | ObjectReferenceCategory | EnumCategory,
    _Field(discriminator="kind"),
]


class FieldDescriptor(BaseModel):
    """Metadata extracted from one field of a declaration.

    Attributes:
        name: Field name, used verbatim as the schema property key.
        declared_type: Declared-type text as written, optional marker included.
        base_type: Declared type with the optional marker removed.
        is_optional: True iff the declared type carried an optional marker.
        default_literal: Literal initializer, if the field has one.
        description: Description from the property attribute.
        example: Example literal from the property attribute.
        location: Location of the field.
        example_location: Location of the example argument, for diagnostics.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    declared_type: str
    base_type: str
    is_optional: bool = False
    default_literal: Literal | None = None
    description: str | None = None
    example: Literal | None = None
    location: SourceLocation = _Field(default_factory=SourceLocation)
    example_location: SourceLocation | None = None


# Resolve forward references for models that use TypeCategory.
ArrayCategory.model_rebuild()
