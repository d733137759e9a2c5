# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Emission of derived schemas as Python accessors or resolved JSON."""

from fieldschema.emit.python import accessor_class_name, python_literal, render_accessor, render_module
from fieldschema.emit.resolve import ResolutionError, render_json, resolve_schemas

__all__ = [
    "render_accessor",
    "render_module",
    "accessor_class_name",
    "python_literal",
    "resolve_schemas",
    "render_json",
    "ResolutionError",
]
