# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Diagnostics reported while deriving schemas.

Diagnostics are values, not exceptions: every stage appends to a shared
:class:`DiagnosticBag` and keeps going, so one malformed field never hides
the output or the errors of the rest of a declaration.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from fieldschema.model.declaration import SourceLocation

# ###############
# Public Interface
# ###############


class DiagnosticKind(enum.Enum):
    """All diagnostic kinds the engine can report."""

    ONLY_STRUCTS = "only_structs"
    ONLY_PROPERTIES = "only_properties"
    REFERENCE_CYCLE = "reference_cycle"
    EXAMPLE_TYPE_MISMATCH = "example_type_mismatch"
    UNSUPPORTED_ENUM = "unsupported_enum"
    UNRESOLVED_REFERENCE = "unresolved_reference"


class ErrorCategory(enum.Enum):
    """Taxonomy of derivation errors."""

    STRUCTURAL = "StructuralError"
    VALIDATION = "ValidationError"
    UNSUPPORTED_FEATURE = "UnsupportedFeatureError"


class Severity(enum.Enum):
    """How a diagnostic affects the build."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A problem found while deriving a schema.

    Attributes:
        kind: What went wrong.
        message: Human-readable description of the problem.
        location: Source location of the offending declaration, member or argument.
        severity: Whether the problem fails the build.
    """

    kind: DiagnosticKind
    message: str
    location: SourceLocation
    severity: Severity

    @property
    def category(self) -> ErrorCategory:
        """Return the error category this diagnostic belongs to."""
        return _CATEGORIES[self.kind]

    def format(self) -> str:
        """Render as ``source:line:column: severity[kind]: message``."""
        return f"{self.location}: {self.severity.value}[{self.kind.value}]: {self.message}"


@dataclass
class DiagnosticBag:
    """Collect-all accumulator threaded through the derivation stages."""

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def report(self, kind: DiagnosticKind, message: str, location: SourceLocation) -> Diagnostic:
        """Record a diagnostic with the default severity for *kind* and return it."""
        diagnostic = Diagnostic(kind=kind, message=message, location=location, severity=_SEVERITIES[kind])
        self.diagnostics.append(diagnostic)
        return diagnostic

    def extend(self, diagnostics: list[Diagnostic]) -> None:
        """Append already-built diagnostics, e.g. from a nested derivation."""
        self.diagnostics.extend(diagnostics)

    @property
    def has_errors(self) -> bool:
        """Return True if any error-severity diagnostic was reported."""
        return any(d.severity is Severity.ERROR for d in self.diagnostics)

    def __len__(self) -> int:
        return len(self.diagnostics)


# ################
# Implementation
# ################

_CATEGORIES: dict[DiagnosticKind, ErrorCategory] = {
    DiagnosticKind.ONLY_STRUCTS: ErrorCategory.STRUCTURAL,
    DiagnosticKind.ONLY_PROPERTIES: ErrorCategory.STRUCTURAL,
    DiagnosticKind.REFERENCE_CYCLE: ErrorCategory.STRUCTURAL,
    DiagnosticKind.EXAMPLE_TYPE_MISMATCH: ErrorCategory.VALIDATION,
    DiagnosticKind.UNSUPPORTED_ENUM: ErrorCategory.UNSUPPORTED_FEATURE,
    DiagnosticKind.UNRESOLVED_REFERENCE: ErrorCategory.UNSUPPORTED_FEATURE,
}

_SEVERITIES: dict[DiagnosticKind, Severity] = {
    DiagnosticKind.ONLY_STRUCTS: Severity.ERROR,
    DiagnosticKind.ONLY_PROPERTIES: Severity.ERROR,
    DiagnosticKind.REFERENCE_CYCLE: Severity.ERROR,
    DiagnosticKind.EXAMPLE_TYPE_MISMATCH: Severity.WARNING,
    DiagnosticKind.UNSUPPORTED_ENUM: Severity.ERROR,
    DiagnosticKind.UNRESOLVED_REFERENCE: Severity.WARNING,
}
