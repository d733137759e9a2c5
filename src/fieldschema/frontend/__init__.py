# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Front end reading structured declaration files."""

from fieldschema.frontend.loader import DeclarationFileError, load_declarations, parse_declarations

__all__ = [
    "load_declarations",
    "parse_declarations",
    "DeclarationFileError",
]
