# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resolution of derived schemas into self-contained JSON documents.

Deferred references are inlined by resolving the referenced schema first.
Literals keep their written text in the JSON output (``19.990`` stays
``19.990``); :func:`resolve_schemas` returns decoded Python values.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from fieldschema.model.schema import DeclarationSchema, DeferredProperties, SchemaNode
from fieldschema.model.types import Literal

# ###############
# Public Interface
# ###############


class ResolutionError(Exception):
    """Raised when a deferred reference cannot be inlined."""


def resolve_schemas(schemas: Sequence[DeclarationSchema], *, raw_literals: bool = False) -> dict[str, dict[str, Any]]:
    """Inline every deferred reference and return one plain dict per schema.

    Args:
        schemas: Derived schemas. Every referenced type must be among them.
        raw_literals: Keep :class:`Literal` objects instead of decoding them
            to Python values.

    Returns:
        A mapping from type name to its resolved schema, in input order.

    Raises:
        ResolutionError: If a referenced type is missing or references form a cycle.
    """
    return _Resolver(schemas, raw_literals).resolve_all()


def render_json(schemas: Sequence[DeclarationSchema]) -> str:
    """Render the resolved schemas as one JSON object keyed by type name.

    The output is deterministic: identical input gives byte-identical text.

    Raises:
        ResolutionError: As for :func:`resolve_schemas`.
    """
    return _dump(resolve_schemas(schemas, raw_literals=True), 0) + "\n"


# ################
# Implementation
# ################

_INDENT = "  "


class _Resolver:
    def __init__(self, schemas: Sequence[DeclarationSchema], raw_literals: bool) -> None:
        self._schemas = {schema.type_name: schema for schema in schemas}
        self._raw = raw_literals
        self._resolved: dict[str, dict[str, Any]] = {}
        self._in_progress: set[str] = set()

    def resolve_all(self) -> dict[str, dict[str, Any]]:
        return {name: self._resolve(name) for name in self._schemas}

    def _resolve(self, type_name: str) -> dict[str, Any]:
        if type_name in self._resolved:
            return self._resolved[type_name]
        if type_name not in self._schemas:
            raise ResolutionError(f"Cannot resolve reference to '{type_name}': no schema was derived for it")
        if type_name in self._in_progress:
            raise ResolutionError(f"Cannot resolve reference to '{type_name}': references form a cycle")
        self._in_progress.add(type_name)
        try:
            document = self._node(self._schemas[type_name].root)
        finally:
            self._in_progress.discard(type_name)
        self._resolved[type_name] = document
        return document

    def _node(self, node: SchemaNode) -> dict[str, Any]:
        document: dict[str, Any] = {"type": node.type.value}
        if isinstance(node.properties, DeferredProperties):
            document["properties"] = self._resolve(node.properties.type_name)["properties"]
        elif node.properties is not None:
            document["properties"] = {name: self._node(child) for name, child in node.properties.items()}
        if node.items is not None:
            document["items"] = self._node(node.items)
        if node.enum is not None:
            document["enum"] = [self._literal(value) for value in node.enum]
        if node.required is not None:
            document["required"] = node.required
        if node.description is not None:
            document["description"] = node.description
        if node.example is not None:
            document["example"] = self._literal(node.example)
        if node.default is not None:
            document["default"] = self._literal(node.default)
        return document

    def _literal(self, literal: Literal) -> Any:
        return literal if self._raw else literal.value()


def _dump(value: Any, depth: int) -> str:
    """Write JSON text, emitting Literal objects with their written text."""
    if isinstance(value, Literal):
        return value.json_text()
    if isinstance(value, dict):
        if not value:
            return "{}"
        inner = _INDENT * (depth + 1)
        entries = [
            f"{inner}{json.dumps(key, ensure_ascii=False)}: {_dump(item, depth + 1)}" for key, item in value.items()
        ]
        return "{\n" + ",\n".join(entries) + "\n" + _INDENT * depth + "}"
    if isinstance(value, list):
        return "[" + ", ".join(_dump(item, depth + 1) for item in value) + "]"
    return json.dumps(value, ensure_ascii=False)
