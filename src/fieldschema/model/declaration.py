# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Declarations as delivered by the front end: types, members and attributes."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class SourceLocation(BaseModel):
    """A 1-based position in the source a declaration was read from."""

    model_config = ConfigDict(frozen=True)

    line: int = 1
    column: int = 1
    source: str | None = None

    def __str__(self) -> str:
        prefix = f"{self.source}:" if self.source else ""
        return f"{prefix}{self.line}:{self.column}"


class DeclarationKind(Enum):
    """Kinds of type declarations the engine can be pointed at."""

    STRUCT = "struct"
    CLASS = "class"
    ENUM = "enum"


class MemberKind(Enum):
    """Kinds of members found inside a declaration body."""

    FIELD = "field"
    METHOD = "method"
    INITIALIZER = "initializer"
    NESTED_TYPE = "nested_type"
    CASE = "case"


class Argument(BaseModel):
    """One argument of an attribute, holding the argument's expression source text."""

    model_config = ConfigDict(frozen=True)

    label: str | None = None
    expression: str
    location: SourceLocation = _Field(default_factory=SourceLocation)


class Attribute(BaseModel):
    """An attribute such as ``@Schema`` or ``@Property(...)`` attached to a declaration or member."""

    model_config = ConfigDict(frozen=True)

    name: str
    arguments: tuple[Argument, ...] = ()
    location: SourceLocation = _Field(default_factory=SourceLocation)


class Member(BaseModel):
    """A member of a declaration.

    Attributes:
        name: Member identifier.
        kind: Whether this is a stored field, a method, an enum case, etc.
        declared_type: Raw declared-type text, including any optional marker
            (e.g. ``"String?"``, ``"[Item]"``). Only meaningful for fields.
        initializer: Expression source text of the initializer, if any. For
            enum cases this is the raw value.
        attributes: Attributes attached to the member, in source order.
        location: Where the member starts.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kind: MemberKind = MemberKind.FIELD
    declared_type: str | None = None
    initializer: str | None = None
    attributes: tuple[Attribute, ...] = ()
    location: SourceLocation = _Field(default_factory=SourceLocation)

    def attribute(self, name: str) -> Attribute | None:
        """Return the first attached attribute called *name*, if any."""
        return next((a for a in self.attributes if a.name == name), None)


class Declaration(BaseModel):
    """A type declaration with its ordered members."""

    model_config = ConfigDict(frozen=True)

    type_name: str
    kind: DeclarationKind = DeclarationKind.STRUCT
    attributes: tuple[Attribute, ...] = ()
    members: tuple[Member, ...] = ()
    location: SourceLocation = _Field(default_factory=SourceLocation)

    def attribute(self, name: str) -> Attribute | None:
        """Return the first attached attribute called *name*, if any."""
        return next((a for a in self.attributes if a.name == name), None)
