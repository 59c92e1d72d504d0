# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the cndkit command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from yachalk import chalk

from cndkit.errors import CndError
from cndkit.export.artifact import ARTIFACT_SUFFIX, serialize, write_artifact
from cndkit.loader import LoadError, load_file
from cndkit.model.schema import Schema
from cndkit.validation.checks import validate
from cndkit.workspace.config import CONFIG_FILE_NAME, CndConfig, ConfigError, load_config
from cndkit.writer.cnd_writer import write_cnd

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the cndkit CLI."""
    parser = argparse.ArgumentParser(
        prog="cndkit",
        description="cndkit - Compact Node Definition (CND) tool",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to the configuration file (default: {CONFIG_FILE_NAME} in the current directory, if present)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Parse and validate CND files",
        description="Parse CND files and run the schema consistency checks.",
    )
    check_parser.add_argument("files", nargs="+", help="CND files to check")

    # export subcommand
    export_parser = subparsers.add_parser(
        "export",
        help="Export a CND file as a JSON artifact",
        description=(
            "Parse a CND file and write its schema as JSON. Without --output the artifact "
            "goes to the configured output directory, or to stdout if none is configured."
        ),
    )
    export_parser.add_argument("file", help="CND file to export")
    export_parser.add_argument("-o", "--output", default=None, help="Path of the JSON artifact to write")

    # format subcommand
    format_parser = subparsers.add_parser(
        "format",
        help="Print a CND file in canonical form",
        description="Parse a CND file and print it in canonical CND form.",
    )
    format_parser.add_argument("file", help="CND file to format")
    format_parser.add_argument(
        "--write",
        action="store_true",
        help="Rewrite the file in place instead of printing it",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Load the configuration and dispatch to the subcommand handler."""
    try:
        config, config_dir = _resolve_config(args.config)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.command == "check":
        return _cmd_check(args, config)
    if args.command == "export":
        return _cmd_export(args, config, config_dir)
    if args.command == "format":
        return _cmd_format(args, config)
    return 0


def _resolve_config(config_arg: str | None) -> tuple[CndConfig, Path]:
    """Return the configuration and the directory relative paths resolve against."""
    if config_arg is not None:
        path = Path(config_arg).resolve()
        return load_config(path), path.parent
    default = Path.cwd() / CONFIG_FILE_NAME
    if default.exists():
        return load_config(default), default.parent
    return CndConfig(), Path.cwd()


def _load(path: Path, config: CndConfig) -> Schema | None:
    """Parse *path*, printing the error and returning None on failure."""
    try:
        return load_file(path, namespaces=config.namespaces)
    except (LoadError, CndError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
    return None


def _cmd_check(args: argparse.Namespace, config: CndConfig) -> int:
    """Handle the check subcommand."""
    failed = 0
    for file_arg in args.files:
        path = Path(file_arg)
        schema = _load(path, config)
        if schema is None:
            print(chalk.red(f"FAIL  {path}"))
            failed += 1
            continue

        result = validate(schema)
        ok = not result.has_errors and not (config.strict and result.warnings)
        if ok:
            print(chalk.green(f"PASS  {path}") + f" ({len(schema.node_types)} node types)")
        else:
            print(chalk.red(f"FAIL  {path}"))
            failed += 1
        for error in result.errors:
            print(chalk.red(f"  error: {error.message}"))
        for warning in result.warnings:
            print(chalk.yellow(f"  warning: {warning.message}"))

    if failed:
        print(f"\n{failed} of {len(args.files)} file(s) failed.", file=sys.stderr)
        return 1
    return 0


def _cmd_export(args: argparse.Namespace, config: CndConfig, config_dir: Path) -> int:
    """Handle the export subcommand."""
    path = Path(args.file)
    schema = _load(path, config)
    if schema is None:
        return 1

    if args.output is not None:
        target: Path | None = Path(args.output)
    elif config.output_directory is not None:
        target = config_dir / config.output_directory / (path.stem + ARTIFACT_SUFFIX)
    else:
        target = None

    if target is None:
        print(serialize(schema, indent=2))
        return 0
    try:
        write_artifact(schema, target)
    except OSError as exc:
        print(f"Error: cannot write '{target}': {exc}", file=sys.stderr)
        return 1
    print(f"Wrote {target}.")
    return 0


def _cmd_format(args: argparse.Namespace, config: CndConfig) -> int:
    """Handle the format subcommand."""
    path = Path(args.file)
    schema = _load(path, config)
    if schema is None:
        return 1

    text = write_cnd(schema)
    if not args.write:
        sys.stdout.write(text)
        return 0
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        print(f"Error: cannot write '{path}': {exc}", file=sys.stderr)
        return 1
    print(f"Formatted {path}.")
    return 0
