# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Classification of declared-type text into schema type categories.

Rules are applied in order and the first match wins:

1. Array notation (``[T]`` or ``Array<T>``) classifies ``T`` and wraps it.
2. The closed primitive vocabulary (plus configured aliases).
3. Enumerations known to the caller.
4. Anything else is assumed to name another schema-bearing type. This last
   rule is a heuristic: an unknown name is trusted to have its own accessor.
"""

from __future__ import annotations

from collections.abc import Mapping

from fieldschema.model.types import (
    ArrayCategory,
    EnumCategory,
    Literal,
    ObjectReferenceCategory,
    PrimitiveCategory,
    PrimitiveKind,
    TypeCategory,
)

# ###############
# Public Interface
# ###############

# Bump whenever a spelling is added to or removed from PRIMITIVE_VOCABULARY.
VOCABULARY_VERSION = "1"

PRIMITIVE_VOCABULARY: dict[str, PrimitiveKind] = {
    "String": PrimitiveKind.STRING,
    "Substring": PrimitiveKind.STRING,
    "Character": PrimitiveKind.STRING,
    "Int": PrimitiveKind.NUMBER,
    "Int8": PrimitiveKind.NUMBER,
    "Int16": PrimitiveKind.NUMBER,
    "Int32": PrimitiveKind.NUMBER,
    "Int64": PrimitiveKind.NUMBER,
    "UInt": PrimitiveKind.NUMBER,
    "UInt8": PrimitiveKind.NUMBER,
    "UInt16": PrimitiveKind.NUMBER,
    "UInt32": PrimitiveKind.NUMBER,
    "UInt64": PrimitiveKind.NUMBER,
    "Double": PrimitiveKind.NUMBER,
    "Float": PrimitiveKind.NUMBER,
    "Float32": PrimitiveKind.NUMBER,
    "Float64": PrimitiveKind.NUMBER,
    "Decimal": PrimitiveKind.NUMBER,
    "Bool": PrimitiveKind.BOOLEAN,
}


def build_vocabulary(aliases: Mapping[str, PrimitiveKind] | None = None) -> dict[str, PrimitiveKind]:
    """Return the primitive vocabulary extended with *aliases*.

    Built-in spellings win over aliases of the same name.
    """
    vocabulary = dict(aliases or {})
    vocabulary.update(PRIMITIVE_VOCABULARY)
    return vocabulary


def classify(
    type_text: str,
    vocabulary: Mapping[str, PrimitiveKind] | None = None,
    enums: Mapping[str, tuple[Literal, ...]] | None = None,
) -> TypeCategory:
    """Classify declared-type text into a TypeCategory.

    Args:
        type_text: Declared type with any field-level optional marker already removed.
        vocabulary: Primitive spellings to accept. Defaults to PRIMITIVE_VOCABULARY.
        enums: Known enumerations mapped to their case values.

    Returns:
        The TypeCategory of *type_text*.
    """
    text = type_text.strip()
    vocab = PRIMITIVE_VOCABULARY if vocabulary is None else vocabulary

    element = array_element_type(text)
    if element is not None:
        return ArrayCategory(element=classify(element, vocab, enums))

    # Element-level optionality has no schema representation; items carry no "required".
    unwrapped = unwrap_optional(text)
    if unwrapped is not None:
        return classify(unwrapped, vocab, enums)

    primitive = vocab.get(text)
    if primitive is not None:
        return PrimitiveCategory(primitive=primitive)

    if enums is not None and text in enums:
        return EnumCategory(type_name=text, values=enums[text])

    return ObjectReferenceCategory(type_name=text)


def array_element_type(type_text: str) -> str | None:
    """Return the element type of ``[T]`` or ``Array<T>``, stripping exactly one level."""
    text = type_text.strip()
    if text.startswith("[") and text.endswith("]") and _balanced(text[1:-1], "[", "]"):
        return text[1:-1].strip()
    if text.startswith("Array<") and text.endswith(">") and _balanced(text[6:-1], "<", ">"):
        return text[6:-1].strip()
    return None


def unwrap_optional(type_text: str) -> str | None:
    """Return ``T`` for ``T?`` or ``Optional<T>``, or None if *type_text* is not optional."""
    text = type_text.strip()
    if text.endswith("?"):
        return text[:-1].strip()
    if text.startswith("Optional<") and text.endswith(">") and _balanced(text[9:-1], "<", ">"):
        return text[9:-1].strip()
    return None


# ################
# Implementation
# ################


def _balanced(text: str, opening: str, closing: str) -> bool:
    """Return True if *opening*/*closing* brackets in *text* never go negative and end at zero.

    Guards against treating ``[A]-[B]``-shaped text as a single bracketed type.
    """
    depth = 0
    for char in text:
        if char == opening:
            depth += 1
        elif char == closing:
            depth -= 1
            if depth < 0:
                return False
    return depth == 0
