# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema derivation pipeline: extraction, classification, validation, building."""

from fieldschema.compiler.builder import build_declaration, build_field, build_type
from fieldschema.compiler.classifier import PRIMITIVE_VOCABULARY, VOCABULARY_VERSION, build_vocabulary, classify
from fieldschema.compiler.derive import DerivationResult, ModuleResult, derive, derive_module, extract_enum_cases
from fieldschema.compiler.diagnostics import Diagnostic, DiagnosticBag, DiagnosticKind, ErrorCategory, Severity
from fieldschema.compiler.extractor import check_property_placement, extract_fields
from fieldschema.compiler.literals import parse_literal
from fieldschema.compiler.validator import validate_example

__all__ = [
    "derive",
    "derive_module",
    "DerivationResult",
    "ModuleResult",
    "extract_enum_cases",
    "extract_fields",
    "check_property_placement",
    "classify",
    "build_vocabulary",
    "PRIMITIVE_VOCABULARY",
    "VOCABULARY_VERSION",
    "parse_literal",
    "validate_example",
    "build_type",
    "build_field",
    "build_declaration",
    "Diagnostic",
    "DiagnosticBag",
    "DiagnosticKind",
    "ErrorCategory",
    "Severity",
]
