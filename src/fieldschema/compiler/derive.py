# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema derivation for single declarations and for whole modules.

A derivation is a pure function of its input: one declaration (or a list of
declarations) in, a result holding the schemas and all collected diagnostics
out. Nothing is retained between calls.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from fieldschema.compiler.builder import build_declaration, unsupported_enum
from fieldschema.compiler.classifier import build_vocabulary, classify
from fieldschema.compiler.diagnostics import Diagnostic, DiagnosticBag, DiagnosticKind, Severity
from fieldschema.compiler.extractor import check_property_placement, extract_fields
from fieldschema.compiler.literals import parse_literal
from fieldschema.compiler.references import detect_cycle, nodes_on_cycles, nodes_reaching_cycles, reference_graph
from fieldschema.compiler.validator import validate_example
from fieldschema.config import DeriveConfig
from fieldschema.logging import get_logger
from fieldschema.model.declaration import Declaration, DeclarationKind, MemberKind
from fieldschema.model.schema import DeclarationSchema
from fieldschema.model.types import FieldDescriptor, Literal, TypeCategory

_log = get_logger("derive")

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class DerivationResult:
    """Outcome of deriving one declaration.

    Attributes:
        schema: The derived schema, or None if the declaration was rejected.
        diagnostics: Everything reported while deriving, in report order.
    """

    schema: DeclarationSchema | None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any error-severity diagnostic was reported."""
        return any(d.severity is Severity.ERROR for d in self.diagnostics)


@dataclass(frozen=True)
class ModuleResult:
    """Outcome of deriving every schema-bearing declaration of a module.

    Attributes:
        schemas: Schemas ready for emission, in declaration order.
        diagnostics: Everything reported for the module, in report order.
    """

    schemas: list[DeclarationSchema] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any error-severity diagnostic was reported."""
        return any(d.severity is Severity.ERROR for d in self.diagnostics)


def derive(
    declaration: Declaration,
    config: DeriveConfig | None = None,
    *,
    enums: Mapping[str, tuple[Literal, ...]] | None = None,
) -> DerivationResult:
    """Derive the schema of a single declaration.

    Args:
        declaration: The declaration to derive. It is treated as carrying the
            schema attribute whether or not it does.
        config: Derivation settings; defaults to :class:`DeriveConfig`.
        enums: Known enumerations and their case values, as produced by
            :func:`extract_enum_cases`. Without it every non-primitive,
            non-array type is an object reference.

    Returns:
        A :class:`DerivationResult`. ``schema`` is None only when the
        declaration is not a struct.
    """
    config = config or DeriveConfig()
    bag = DiagnosticBag()

    fields = extract_fields(
        declaration,
        bag,
        schema_attribute=config.schema_attribute,
        property_attribute=config.property_attribute,
    )
    if fields is None:
        _log.debug("Rejected non-struct declaration '%s'", declaration.type_name)
        return DerivationResult(schema=None, diagnostics=bag.diagnostics)

    vocabulary = build_vocabulary(config.primitive_aliases)
    classified: list[tuple[FieldDescriptor, TypeCategory]] = []
    for descriptor in fields:
        category = classify(descriptor.base_type, vocabulary, enums)
        bad_enum = unsupported_enum(category)
        if bad_enum is not None:
            bag.report(
                DiagnosticKind.UNSUPPORTED_ENUM,
                f"Field '{descriptor.name}' uses enumeration '{bad_enum.type_name}', whose cases do not"
                " all have string or all have numeric raw values; the field is left out of the schema",
                descriptor.location,
            )
            continue
        validate_example(descriptor, category, bag)
        classified.append((descriptor, category))

    schema = build_declaration(declaration.type_name, classified, declaration.location)
    _log.debug(
        "Derived schema for '%s' with %d propert%s",
        declaration.type_name,
        len(classified),
        "y" if len(classified) == 1 else "ies",
    )
    return DerivationResult(schema=schema, diagnostics=bag.diagnostics)


def derive_module(declarations: Sequence[Declaration], config: DeriveConfig | None = None) -> ModuleResult:
    """Derive every declaration carrying the schema attribute.

    Steps performed:

    1. Enum declarations are collected for the enum-case extractor.
    2. Declarations without the schema attribute are only checked for
       misplaced property attributes.
    3. Each schema-bearing declaration is derived with :func:`derive`.
    4. References to types without a derived schema in the module are
       reported as warnings and still emitted as deferred calls.
    5. When ``config.check_cycles`` is set, declarations whose references
       lie on or lead into a reference cycle are rejected.

    Args:
        declarations: All declarations of the module, in source order.
        config: Derivation settings; defaults to :class:`DeriveConfig`.

    Returns:
        A :class:`ModuleResult` with the emit-ready schemas and all diagnostics.
    """
    config = config or DeriveConfig()
    bag = DiagnosticBag()
    enums = {d.type_name: extract_enum_cases(d) for d in declarations if d.kind is DeclarationKind.ENUM}

    derived: list[DeclarationSchema] = []
    for declaration in declarations:
        if declaration.attribute(config.schema_attribute) is None:
            check_property_placement(declaration, bag, property_attribute=config.property_attribute)
            continue
        result = derive(declaration, config, enums=enums)
        bag.extend(result.diagnostics)
        if result.schema is not None:
            derived.append(result.schema)

    _check_unresolved_references(derived, bag)
    if config.check_cycles:
        derived = _reject_cycles(derived, bag)

    return ModuleResult(schemas=derived, diagnostics=bag.diagnostics)


def extract_enum_cases(declaration: Declaration) -> tuple[Literal, ...]:
    """Return the case values of an enum declaration.

    A case's raw value is used when it has one; otherwise the case name
    stands for itself as a string. If any raw value is not a supported
    literal the enumeration has no usable values and an empty tuple is
    returned.
    """
    values: list[Literal] = []
    for member in declaration.members:
        if member.kind is not MemberKind.CASE:
            continue
        if member.initializer is None:
            values.append(Literal.string(member.name))
            continue
        raw_value = parse_literal(member.initializer)
        if raw_value is None:
            _log.debug("Enum '%s' case '%s' has a non-literal raw value", declaration.type_name, member.name)
            return ()
        values.append(raw_value)
    return tuple(values)


# ################
# Implementation
# ################


def _check_unresolved_references(schemas: list[DeclarationSchema], bag: DiagnosticBag) -> None:
    """Warn about deferred references to types with no schema in the module."""
    known = {schema.type_name for schema in schemas}
    for schema in schemas:
        for name in schema.references:
            if name not in known:
                bag.report(
                    DiagnosticKind.UNRESOLVED_REFERENCE,
                    f"'{schema.type_name}' references type '{name}', which has no derived schema in this module;"
                    f" assuming '{name}' provides its own schema accessor",
                    schema.location,
                )


def _reject_cycles(schemas: list[DeclarationSchema], bag: DiagnosticBag) -> list[DeclarationSchema]:
    """Report and drop schemas whose accessors would recurse without bound."""
    graph = reference_graph(schemas)
    rejected = nodes_reaching_cycles(graph)
    if not rejected:
        return schemas

    on_cycle = nodes_on_cycles(graph)
    kept: list[DeclarationSchema] = []
    for schema in schemas:
        if schema.type_name not in rejected:
            kept.append(schema)
            continue
        cycle = detect_cycle(graph, schema.type_name)
        assert cycle is not None
        cycle_str = " -> ".join(cycle)
        if schema.type_name in on_cycle:
            message = f"Reference cycle detected: {cycle_str}"
        else:
            message = f"'{schema.type_name}' depends on reference cycle {cycle_str}"
        bag.report(DiagnosticKind.REFERENCE_CYCLE, message, schema.location)
        _log.debug("Rejected '%s': %s", schema.type_name, message)
    return kept
