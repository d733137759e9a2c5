# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Command-line interface for fieldschema."""
