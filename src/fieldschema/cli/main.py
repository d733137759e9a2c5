# Copyright 2026 FieldSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the fieldschema command-line interface."""

import argparse
import sys
from pathlib import Path

from fieldschema.compiler.derive import ModuleResult, derive_module
from fieldschema.config import (
    CONFIG_FILENAME,
    OUTPUT_FORMATS,
    ConfigError,
    DeriveConfig,
    default_config_text,
    load_config,
)
from fieldschema.emit.python import render_module
from fieldschema.emit.resolve import ResolutionError, render_json
from fieldschema.frontend.loader import DeclarationFileError, load_declarations
from fieldschema.logging import configure_logging, get_logger

_log = get_logger("cli")

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the fieldschema CLI."""
    parser = argparse.ArgumentParser(
        prog="fieldschema",
        description="fieldschema: derive JSON schemas from declared fields",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", help="Also write a debug-level log of the run to this file")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Write a default configuration file",
        description=f"Create a default {CONFIG_FILENAME} in a directory.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to write the configuration to (default: current directory)",
    )

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Report derivation diagnostics for a declaration file",
        description="Derive schemas and report diagnostics without writing output.",
    )
    check_parser.add_argument("file", help="YAML or JSON declaration file")
    check_parser.add_argument("--config", help=f"Configuration file (default: ./{CONFIG_FILENAME} if present)")

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate schema accessors for a declaration file",
        description="Derive schemas and write them as Python accessors or resolved JSON.",
    )
    generate_parser.add_argument("file", help="YAML or JSON declaration file")
    generate_parser.add_argument("--config", help=f"Configuration file (default: ./{CONFIG_FILENAME} if present)")
    generate_parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format (default: from configuration, else python)",
    )
    generate_parser.add_argument("-o", "--output", help="Output file (default: standard output)")

    args = parser.parse_args()
    configure_logging(verbose=args.verbose, log_file=Path(args.log_file) if args.log_file else None)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "generate":
        return _cmd_generate(args)
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / CONFIG_FILENAME
    if config_file.exists():
        print(f"Error: configuration already exists at '{config_file}'.", file=sys.stderr)
        return 1

    config_file.write_text(default_config_text(), encoding="utf-8")
    print(f"Initialized fieldschema configuration at '{config_file}'.")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    result = _derive_file(args)
    if result is None:
        return 1
    if not result.diagnostics:
        print(f"No issues found in {len(result.schemas)} schema(s).")
    return 1 if result.has_errors else 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    config = _load_config(args)
    if config is None:
        return 1
    result = _derive_file(args, config)
    if result is None:
        return 1

    output_format = args.format or config.output_format
    if output_format == "json":
        try:
            text = render_json(result.schemas)
        except ResolutionError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
    else:
        text = render_module(result.schemas)

    if args.output:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        _log.info("Wrote %d schema(s) to %s", len(result.schemas), output)
    else:
        sys.stdout.write(text)
    return 1 if result.has_errors else 0


def _load_config(args: argparse.Namespace) -> DeriveConfig | None:
    """Load the configuration named on the command line, the local default, or built-in defaults."""
    if args.config:
        path = Path(args.config)
    else:
        path = Path.cwd() / CONFIG_FILENAME
        if not path.exists():
            return DeriveConfig()
    try:
        return load_config(path)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None


def _derive_file(args: argparse.Namespace, config: DeriveConfig | None = None) -> ModuleResult | None:
    """Load the declaration file, derive it, and print diagnostics to stderr."""
    if config is None:
        config = _load_config(args)
        if config is None:
            return None
    try:
        declarations = load_declarations(Path(args.file))
    except DeclarationFileError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None

    _log.debug("Loaded %d declaration(s) from %s", len(declarations), args.file)
    result = derive_module(declarations, config)
    for diagnostic in result.diagnostics:
        print(diagnostic.format(), file=sys.stderr)
    return result
