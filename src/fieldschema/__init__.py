# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Build-time derivation of JSON schemas from declared fields."""

from fieldschema.compiler import DerivationResult, Diagnostic, ModuleResult, derive, derive_module
from fieldschema.config import DeriveConfig
from fieldschema.emit import render_json, render_module

__version__ = "0.1.0"

__all__ = [
    "derive",
    "derive_module",
    "DerivationResult",
    "ModuleResult",
    "Diagnostic",
    "DeriveConfig",
    "render_module",
    "render_json",
]
