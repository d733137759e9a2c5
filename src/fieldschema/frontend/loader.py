# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loader turning YAML declaration files into Declaration models.

The file is composed into a PyYAML node graph rather than loaded into plain
Python objects, so that every declaration, member, attribute and argument
keeps the line and column it was written at.

Document shape::

    declarations:
      - name: Person
        kind: struct                 # struct | class | enum (default: struct)
        attributes: [Schema]
        members:
          - name: age
            type: Int
            default: 30
            attributes:
              - Property: {description: "The age", example: 30}
          - name: greet
            kind: method
      - name: Color
        kind: enum
        members:
          - {name: red, kind: case, value: "r"}

Scalars used as literals (``default``, ``value`` and attribute arguments)
become expression text: YAML strings become double-quoted string literals;
integers, floats and booleans keep their written form. A scalar tagged
``!expr`` is passed through as raw expression text.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import TypeVar

import yaml

from fieldschema.compiler.literals import parse_literal
from fieldschema.model.declaration import (
    Argument,
    Attribute,
    Declaration,
    DeclarationKind,
    Member,
    MemberKind,
    SourceLocation,
)

# ###############
# Public Interface
# ###############


class DeclarationFileError(Exception):
    """Raised when a declaration file cannot be read or has an invalid shape.

    Attributes:
        location: Where the problem was found, if known.
    """

    def __init__(self, message: str, location: SourceLocation | None = None) -> None:
        super().__init__(f"{location}: {message}" if location is not None else message)
        self.location = location


def load_declarations(path: Path) -> list[Declaration]:
    """Load all declarations from a YAML (or JSON) declaration file.

    Raises:
        DeclarationFileError: If the file cannot be read or is malformed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise DeclarationFileError(f"Declaration file not found: {path}") from None
    except OSError as exc:
        raise DeclarationFileError(f"Cannot read declaration file: {exc}") from exc
    return parse_declarations(text, source_label=str(path))


def parse_declarations(text: str, source_label: str = "<string>") -> list[Declaration]:
    """Parse declaration YAML text into Declaration models, in document order.

    The document is either a mapping with a ``declarations`` list or the
    list itself. An empty document yields no declarations.

    Raises:
        DeclarationFileError: If the YAML is invalid or does not have the expected shape.
    """
    try:
        root = yaml.compose(text, Loader=yaml.SafeLoader)
    except yaml.YAMLError as exc:
        raise DeclarationFileError(f"Invalid YAML in {source_label}: {exc}") from exc

    if root is None:
        return []
    return _Reader(source_label).read_document(root)


# ################
# Implementation
# ################

_E = TypeVar("_E", bound=Enum)

_STR_TAG = "tag:yaml.org,2002:str"
_BOOL_TAG = "tag:yaml.org,2002:bool"
_NULL_TAG = "tag:yaml.org,2002:null"
_EXPR_TAG = "!expr"

_DECLARATION_KEYS = frozenset({"name", "kind", "attributes", "members"})
_MEMBER_KEYS = frozenset({"name", "kind", "type", "default", "value", "attributes"})


class _Reader:
    """Walks a composed YAML node graph, building model objects."""

    def __init__(self, source_label: str) -> None:
        self._source = source_label

    def read_document(self, root: yaml.Node) -> list[Declaration]:
        if isinstance(root, yaml.MappingNode):
            entries = self._mapping(root, frozenset({"declarations"}), "document")
            if "declarations" not in entries:
                raise DeclarationFileError("missing required key 'declarations'", self._loc(root))
            root = entries["declarations"]
        if not isinstance(root, yaml.SequenceNode):
            raise DeclarationFileError("'declarations' must be a list", self._loc(root))
        return [self._declaration(node) for node in root.value]

    def _declaration(self, node: yaml.Node) -> Declaration:
        entries = self._mapping(node, _DECLARATION_KEYS, "declaration")
        name = self._required_name(entries, node, "declaration")
        kind = self._enum_value(entries.get("kind"), DeclarationKind, DeclarationKind.STRUCT)
        members_node = entries.get("members")
        members: list[Member] = []
        if members_node is not None:
            if not isinstance(members_node, yaml.SequenceNode):
                raise DeclarationFileError(f"'members' of '{name}' must be a list", self._loc(members_node))
            members = [self._member(m) for m in members_node.value]
        return Declaration(
            type_name=name,
            kind=kind,
            attributes=self._attributes(entries.get("attributes")),
            members=tuple(members),
            location=self._loc(node),
        )

    def _member(self, node: yaml.Node) -> Member:
        entries = self._mapping(node, _MEMBER_KEYS, "member")
        name = self._required_name(entries, node, "member")
        kind = self._enum_value(entries.get("kind"), MemberKind, MemberKind.FIELD)
        declared_type = self._scalar_text(entries["type"]) if "type" in entries else None
        initializer_node = entries.get("value") if kind is MemberKind.CASE else entries.get("default")
        if isinstance(initializer_node, yaml.ScalarNode) and initializer_node.tag == _NULL_TAG:
            initializer_node = None
        return Member(
            name=name,
            kind=kind,
            declared_type=declared_type,
            initializer=self._expression(initializer_node) if initializer_node is not None else None,
            attributes=self._attributes(entries.get("attributes")),
            location=self._loc(node),
        )

    def _attributes(self, node: yaml.Node | None) -> tuple[Attribute, ...]:
        if node is None:
            return ()
        if not isinstance(node, yaml.SequenceNode):
            raise DeclarationFileError("'attributes' must be a list", self._loc(node))
        return tuple(self._attribute(item) for item in node.value)

    def _attribute(self, node: yaml.Node) -> Attribute:
        """Read ``Name``, ``{Name: {label: value}}`` or ``{Name: [value, ...]}``."""
        if isinstance(node, yaml.ScalarNode):
            return Attribute(name=node.value, location=self._loc(node))
        if not isinstance(node, yaml.MappingNode) or len(node.value) != 1:
            raise DeclarationFileError("an attribute must be a name or a single-key mapping", self._loc(node))
        key_node, args_node = node.value[0]
        arguments: list[Argument] = []
        if isinstance(args_node, yaml.MappingNode):
            for label_node, value_node in args_node.value:
                arguments.append(
                    Argument(
                        label=self._scalar_text(label_node),
                        expression=self._expression(value_node),
                        location=self._loc(value_node),
                    )
                )
        elif isinstance(args_node, yaml.SequenceNode):
            for value_node in args_node.value:
                arguments.append(Argument(expression=self._expression(value_node), location=self._loc(value_node)))
        elif not (isinstance(args_node, yaml.ScalarNode) and args_node.tag == _NULL_TAG):
            raise DeclarationFileError("attribute arguments must be a mapping or a list", self._loc(args_node))
        return Attribute(name=self._scalar_text(key_node), arguments=tuple(arguments), location=self._loc(node))

    def _expression(self, node: yaml.Node) -> str:
        """Convert a scalar node into literal expression source text."""
        if not isinstance(node, yaml.ScalarNode):
            raise DeclarationFileError("literal values must be scalars", self._loc(node))
        if node.tag == _EXPR_TAG:
            return node.value
        if node.tag == _STR_TAG:
            return json.dumps(node.value)
        if node.tag == _BOOL_TAG:
            return "true" if node.value.lower() in ("true", "yes", "on") else "false"
        if parse_literal(node.value) is None:
            raise DeclarationFileError(f"unsupported literal '{node.value}'", self._loc(node))
        return node.value

    def _mapping(self, node: yaml.Node, allowed: frozenset[str], what: str) -> dict[str, yaml.Node]:
        if not isinstance(node, yaml.MappingNode):
            raise DeclarationFileError(f"{what} must be a mapping", self._loc(node))
        entries: dict[str, yaml.Node] = {}
        for key_node, value_node in node.value:
            key = self._scalar_text(key_node)
            if key not in allowed:
                raise DeclarationFileError(f"unknown {what} key '{key}'", self._loc(key_node))
            if key in entries:
                raise DeclarationFileError(f"duplicate {what} key '{key}'", self._loc(key_node))
            entries[key] = value_node
        return entries

    def _required_name(self, entries: dict[str, yaml.Node], node: yaml.Node, what: str) -> str:
        if "name" not in entries:
            raise DeclarationFileError(f"{what} is missing required key 'name'", self._loc(node))
        return self._scalar_text(entries["name"])

    def _enum_value(self, node: yaml.Node | None, enum_type: type[_E], default: _E) -> _E:
        if node is None:
            return default
        text = self._scalar_text(node)
        try:
            return enum_type(text)
        except ValueError:
            valid = ", ".join(member.value for member in enum_type)
            raise DeclarationFileError(f"invalid kind '{text}' (expected one of: {valid})", self._loc(node)) from None

    def _scalar_text(self, node: yaml.Node) -> str:
        if not isinstance(node, yaml.ScalarNode):
            raise DeclarationFileError("expected a scalar value", self._loc(node))
        return node.value

    def _loc(self, node: yaml.Node) -> SourceLocation:
        mark = node.start_mark
        return SourceLocation(line=mark.line + 1, column=mark.column + 1, source=self._source)
