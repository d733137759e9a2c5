# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Rendering of derived schemas as Python accessor source code.

Each schema becomes a class with a ``schema()`` classmethod whose body is the
schema tree as nested dict literals. Object references render as calls to
the referenced accessor, evaluated only when ``schema()`` runs, so the order
in which classes are defined does not matter.
"""

from __future__ import annotations

import json
import re
from collections.abc import Collection, Sequence

from fieldschema.model.schema import DeclarationSchema, DeferredProperties, SchemaNode
from fieldschema.model.types import Literal, LiteralKind

# ###############
# Public Interface
# ###############

GENERATED_HEADER = "# Generated by fieldschema. Do not edit."


def accessor_class_name(type_name: str) -> str:
    """Return the generated accessor class name for *type_name* (e.g. ``PersonSchema``)."""
    name = re.sub(r"\W", "_", type_name)
    if name[:1].isdigit():
        name = f"_{name}"
    return f"{name}Schema"


def render_accessor(schema: DeclarationSchema, *, external: Collection[str] = ()) -> str:
    """Render one accessor class.

    Args:
        schema: The derived schema.
        external: Referenced type names that are not rendered alongside this
            accessor. They are looked up through the runtime registry instead
            of by class name.

    Returns:
        The class source, without a trailing newline.
    """
    body = _render_node(schema.root, 2, external)
    return "\n".join(
        [
            f"@register({json.dumps(schema.type_name)})",
            f"class {accessor_class_name(schema.type_name)}(SchemaRepresentable):",
            f'    """JSON schema accessor for ``{schema.type_name}``."""',
            "",
            "    @classmethod",
            "    def schema(cls) -> dict[str, Any]:",
            f"        return {body}",
        ]
    )


def render_module(schemas: Sequence[DeclarationSchema]) -> str:
    """Render a complete Python module holding one accessor per schema, in input order."""
    local = {schema.type_name for schema in schemas}
    external = sorted({name for schema in schemas for name in schema.references if name not in local})

    runtime_names = ["SchemaRepresentable", "register"]
    if external:
        runtime_names.append("schema_for")
    lines = [
        GENERATED_HEADER,
        "",
        "from __future__ import annotations",
        "",
        "from typing import Any",
        "",
        f"from fieldschema.runtime import {', '.join(runtime_names)}",
    ]
    for schema in schemas:
        lines.extend(["", "", render_accessor(schema, external=external)])
    return "\n".join(lines) + "\n"


def python_literal(literal: Literal) -> str:
    """Render a literal as Python source, keeping numeric text as written where Python accepts it."""
    if literal.kind is LiteralKind.BOOLEAN:
        return "True" if literal.text == "true" else "False"
    if literal.kind is LiteralKind.STRING:
        return json.dumps(literal.value(), ensure_ascii=False)
    if literal.kind is LiteralKind.INTEGER and _LEADING_ZERO_RE.fullmatch(literal.text):
        return str(literal.value())
    return literal.text


# ################
# Implementation
# ################

_INDENT = "    "

# Python rejects decimal integers with leading zeros such as 007.
_LEADING_ZERO_RE = re.compile(r"[+-]?0[0-9_]*[0-9][0-9_]*")


def _render_node(node: SchemaNode, depth: int, external: Collection[str]) -> str:
    entries: list[tuple[str, str]] = [("type", json.dumps(node.type.value))]
    if isinstance(node.properties, DeferredProperties):
        entries.append(("properties", _deferred(node.properties.type_name, external)))
    elif node.properties is not None:
        entries.append(("properties", _render_properties(node.properties, depth + 1, external)))
    if node.items is not None:
        entries.append(("items", _render_node(node.items, depth + 1, external)))
    if node.enum is not None:
        entries.append(("enum", "[" + ", ".join(python_literal(v) for v in node.enum) + "]"))
    if node.required is not None:
        entries.append(("required", "True" if node.required else "False"))
    if node.description is not None:
        entries.append(("description", json.dumps(node.description, ensure_ascii=False)))
    if node.example is not None:
        entries.append(("example", python_literal(node.example)))
    if node.default is not None:
        entries.append(("default", python_literal(node.default)))
    return _render_dict([(json.dumps(key), value) for key, value in entries], depth)


def _render_properties(properties: dict[str, SchemaNode], depth: int, external: Collection[str]) -> str:
    entries = [
        (json.dumps(name, ensure_ascii=False), _render_node(child, depth + 1, external))
        for name, child in properties.items()
    ]
    return _render_dict(entries, depth)


def _render_dict(entries: list[tuple[str, str]], depth: int) -> str:
    if not entries:
        return "{}"
    inner = _INDENT * (depth + 1)
    lines = ["{"]
    lines.extend(f"{inner}{key}: {value}," for key, value in entries)
    lines.append(f"{_INDENT * depth}}}")
    return "\n".join(lines)


def _deferred(type_name: str, external: Collection[str]) -> str:
    if type_name in external:
        return f'schema_for({json.dumps(type_name)})["properties"]'
    return f'{accessor_class_name(type_name)}.schema()["properties"]'
