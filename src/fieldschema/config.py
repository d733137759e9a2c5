# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the fieldschema project configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from fieldschema.model.types import PrimitiveKind

# ###############
# Public Interface
# ###############

CONFIG_FILENAME = ".fieldschema.yaml"

OUTPUT_FORMATS: tuple[str, ...] = ("python", "json")


class ConfigError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""


@dataclass
class DeriveConfig:
    """Settings that steer schema derivation.

    Attributes:
        schema_attribute: Attribute name that requests a schema for a declaration.
        property_attribute: Attribute name carrying per-field description and example.
        check_cycles: Reject declarations whose object references form a cycle.
        primitive_aliases: Extra type spellings mapped onto a primitive kind,
            consulted after the built-in vocabulary.
        output_format: Default output of ``fieldschema generate``.
    """

    schema_attribute: str = "Schema"
    property_attribute: str = "Property"
    check_cycles: bool = True
    primitive_aliases: dict[str, PrimitiveKind] = field(default_factory=dict)
    output_format: str = "python"


def load_config(path: Path) -> DeriveConfig:
    """Load and parse a fieldschema configuration file.

    Args:
        path: Path to the ``.fieldschema.yaml`` file.

    Returns:
        A DeriveConfig populated from the file.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return parse_config(text, source_label=str(path))


def parse_config(text: str, source_label: str = "<string>") -> DeriveConfig:
    """Parse configuration YAML text into a DeriveConfig.

    An empty document yields the defaults.

    Raises:
        ConfigError: If the YAML is invalid, a key is unknown, or a value has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return DeriveConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: config must be a YAML mapping")

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"{source_label}: unknown config key(s): {', '.join(unknown)}")

    config = DeriveConfig()
    if "schema-attribute" in data:
        config.schema_attribute = _require_string(data, "schema-attribute", source_label)
    if "property-attribute" in data:
        config.property_attribute = _require_string(data, "property-attribute", source_label)
    if "check-cycles" in data:
        value = data["check-cycles"]
        if not isinstance(value, bool):
            raise ConfigError(f"{source_label}: 'check-cycles' must be a boolean")
        config.check_cycles = value
    if "primitive-aliases" in data:
        config.primitive_aliases = _parse_aliases(data["primitive-aliases"], source_label)
    if "output-format" in data:
        output_format = _require_string(data, "output-format", source_label)
        if output_format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"{source_label}: 'output-format' must be one of {', '.join(OUTPUT_FORMATS)}, got '{output_format}'"
            )
        config.output_format = output_format
    return config


def default_config_text() -> str:
    """Return the contents written by ``fieldschema init``."""
    return (
        "# fieldschema configuration\n"
        "schema-attribute: Schema\n"
        "property-attribute: Property\n"
        "check-cycles: true\n"
        "output-format: python\n"
        "primitive-aliases: {}\n"
    )


# ################
# Implementation
# ################

_KNOWN_KEYS: frozenset[str] = frozenset(
    {"schema-attribute", "property-attribute", "check-cycles", "primitive-aliases", "output-format"}
)


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a string field from a mapping, raising ConfigError on a wrong type."""
    value = mapping[key]
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{source_label}: '{key}' must be a non-empty string")
    return value


def _parse_aliases(raw: object, source_label: str) -> dict[str, PrimitiveKind]:
    """Parse the ``primitive-aliases`` mapping of type name to primitive kind."""
    if not isinstance(raw, dict):
        raise ConfigError(f"{source_label}: 'primitive-aliases' must be a mapping")
    aliases: dict[str, PrimitiveKind] = {}
    for type_name, kind in raw.items():
        try:
            aliases[str(type_name)] = PrimitiveKind(kind)
        except ValueError:
            valid = ", ".join(k.value for k in PrimitiveKind)
            raise ConfigError(
                f"{source_label}: primitive-aliases['{type_name}'] must be one of {valid}, got {kind!r}"
            ) from None
    return aliases
