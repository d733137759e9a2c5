# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser for literal expressions attached as examples, defaults and enum raw values."""

from __future__ import annotations

import json
import re

from fieldschema.model.types import Literal, LiteralKind

# ###############
# Public Interface
# ###############


def parse_literal(expression: str | None) -> Literal | None:
    """Parse literal expression source text into a kind-tagged Literal.

    Supported forms are double-quoted strings, ``true``/``false``, integers
    (decimal, ``0x``, ``0o``, ``0b``, with ``_`` separators) and decimal
    floats with a fraction and/or exponent. Numbers take an optional ``+`` or
    ``-`` sign. The token text is kept verbatim.

    Args:
        expression: Expression source text, or None.

    Returns:
        The parsed Literal, or None when the expression is absent or is not a
        supported literal (e.g. a call such as ``Date()``).
    """
    if expression is None:
        return None
    text = expression.strip()
    if not text:
        return None

    if text.startswith('"'):
        if _STRING_RE.fullmatch(text) is None:
            return None
        try:
            json.loads(text)
        except json.JSONDecodeError:
            # Escapes JSON cannot decode (e.g. "\u{1F600}") are not representable.
            return None
        return Literal(kind=LiteralKind.STRING, text=text)
    if text in ("true", "false"):
        return Literal(kind=LiteralKind.BOOLEAN, text=text)
    if _INTEGER_RE.fullmatch(text):
        return Literal(kind=LiteralKind.INTEGER, text=text)
    if _FLOAT_RE.fullmatch(text):
        return Literal(kind=LiteralKind.FLOAT, text=text)
    return None


def string_literal_content(expression: str | None) -> str | None:
    """Return the decoded content of a string literal expression, or None if it is not one."""
    literal = parse_literal(expression)
    if literal is None or literal.kind is not LiteralKind.STRING:
        return None
    value = literal.value()
    assert isinstance(value, str)
    return value


# ################
# Implementation
# ################

_STRING_RE = re.compile(r'"(?:[^"\\\n]|\\.)*"')

# Digit runs allow single "_" separators between digits.
_DEC = r"[0-9](?:_?[0-9])*"
_HEX = r"[0-9a-fA-F](?:_?[0-9a-fA-F])*"
_OCT = r"[0-7](?:_?[0-7])*"
_BIN = r"[01](?:_?[01])*"

_INTEGER_RE = re.compile(rf"[+-]?(?:0x{_HEX}|0o{_OCT}|0b{_BIN}|{_DEC})")

_FLOAT_RE = re.compile(rf"[+-]?{_DEC}(?:\.{_DEC}(?:[eE][+-]?{_DEC})?|[eE][+-]?{_DEC})")
