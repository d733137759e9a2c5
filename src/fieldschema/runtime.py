# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Runtime support imported by generated schema modules.

Generated accessor classes subclass :class:`SchemaRepresentable` and register
themselves under the declaration name, so that a schema can defer to a type
generated in another module through :func:`schema_for`.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

# ###############
# Public Interface
# ###############


@runtime_checkable
class SchemaRepresentable(Protocol):
    """Capability marker for types that expose a JSON schema accessor."""

    @classmethod
    def schema(cls) -> dict[str, Any]:
        """Return the JSON schema of the type."""
        ...


class SchemaNotFoundError(LookupError):
    """Raised when no accessor is registered for a referenced type name."""


_T = TypeVar("_T", bound=type)


def register(type_name: str):
    """Class decorator registering a generated accessor under *type_name*."""

    def decorator(cls: _T) -> _T:
        _REGISTRY[type_name] = cls
        return cls

    return decorator


def schema_for(type_name: str) -> dict[str, Any]:
    """Return the schema of the accessor registered under *type_name*.

    Raises:
        SchemaNotFoundError: If nothing is registered under *type_name*.
    """
    try:
        accessor = _REGISTRY[type_name]
    except KeyError:
        raise SchemaNotFoundError(f"No schema accessor registered for '{type_name}'") from None
    return accessor.schema()


def registered_types() -> list[str]:
    """Return the names of all registered accessors, sorted."""
    return sorted(_REGISTRY)


# ################
# Implementation
# ################

_REGISTRY: dict[str, Any] = {}
