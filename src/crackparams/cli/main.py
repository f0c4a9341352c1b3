"""CLI main module with subcommands for show, validate, and schema.

Usage:
    python -m crackparams.cli show --config params.xml
    python -m crackparams.cli validate --config params.xml --strict
    python -m crackparams.cli schema --namespace md
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml

from crackparams.core.builder import DEFAULT_STANZA, BuildResult, load_params
from crackparams.core.errors import CrackParamsError, ParseError, format_error
from crackparams.core.logging import setup_logging, setup_logging_for
from crackparams.core.params import CrackParams
from crackparams.core.render import format_value, render
from crackparams.core.schema import SCHEMA


def _setup_build_logging(args: argparse.Namespace) -> None:
    # Diagnostics are printed by the command; the console only shows errors
    setup_logging(args.log_file, level=logging.WARNING, console_level=logging.ERROR)


def _load(args: argparse.Namespace, strict: bool = False, reject_unknown: bool = False) -> BuildResult:
    return load_params(
        args.config,
        stanza=args.stanza,
        strict=strict,
        reject_unknown=reject_unknown,
    )


def cmd_show(args: argparse.Namespace) -> int:
    """Print the fully resolved parameters (defaults when no config is given)."""
    _setup_build_logging(args)
    if args.config is None:
        print(render(CrackParams()), end="")
        return 0
    try:
        result = _load(args)
    except (CrackParamsError, FileNotFoundError) as e:
        print(f"Error: {format_error(e)}", file=sys.stderr)
        return 2

    # Re-level logging from the document's own io_verbosity
    setup_logging_for(result.record.io.verbosity, args.log_file)
    for diag in result.diagnostics:
        print(f"Warning: {format_error(diag)}", file=sys.stderr)
    print(render(result.record), end="")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Build the parameters and report every diagnostic.

    Exit status is 0 when clean, 1 when diagnostics were found and 2 when the
    document could not be read or the build was aborted.
    """
    _setup_build_logging(args)
    try:
        result = _load(args, strict=args.strict, reject_unknown=args.reject_unknown)
    except (CrackParamsError, FileNotFoundError) as e:
        print(f"Error: {format_error(e)}", file=sys.stderr)
        return 1 if isinstance(e, ParseError) else 2

    if result.ok:
        print(f"{args.config}: OK")
        return 0

    print(f"{args.config}: {len(result.diagnostics)} problem(s)")
    print("-" * 40)
    for diag in result.diagnostics:
        print(f"  {format_error(diag)}")
    return 1


def cmd_schema(args: argparse.Namespace) -> int:
    """Print the parameter table as YAML."""
    setup_logging(args.log_file)
    namespaces = SCHEMA.namespaces
    if args.namespace:
        if args.namespace not in namespaces:
            print(f"Error: unknown namespace {args.namespace!r}", file=sys.stderr)
            return 2
        namespaces = (args.namespace,)

    data = {}
    for namespace in namespaces:
        data[namespace] = {
            attribute: {
                "key": spec.key,
                "kind": spec.kind.value,
                "default": format_value(spec.kind, spec.default),
                **({"unit": spec.unit} if spec.unit else {}),
                "description": spec.description,
            }
            for attribute, spec in SCHEMA.defaults_for(namespace).items()
        }
    yaml.safe_dump(data, sys.stdout, default_flow_style=False, sort_keys=False)
    return 0


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--stanza",
        default=DEFAULT_STANZA,
        help=f"Root element holding the parameters (default: {DEFAULT_STANZA})",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Optional JSON lines log file",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crackparams",
        description="Fracture simulation parameter tool",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # Show subcommand
    parser_show = subparsers.add_parser(
        "show",
        help="Print the resolved parameters",
    )
    parser_show.add_argument(
        "--config",
        "-c",
        type=Path,
        required=False,
        help="Path to XML parameter file (defaults are shown if omitted)",
    )
    _add_common(parser_show)
    parser_show.set_defaults(func=cmd_show)

    # Validate subcommand
    parser_validate = subparsers.add_parser(
        "validate",
        help="Check a parameter file and list problems",
    )
    parser_validate.add_argument(
        "--config",
        "-c",
        type=Path,
        required=True,
        help="Path to XML parameter file",
    )
    parser_validate.add_argument(
        "--strict",
        action="store_true",
        help="Stop at the first bad attribute",
    )
    parser_validate.add_argument(
        "--reject-unknown",
        action="store_true",
        help="Report unknown elements and attributes inside the stanza",
    )
    _add_common(parser_validate)
    parser_validate.set_defaults(func=cmd_validate)

    # Schema subcommand
    parser_schema = subparsers.add_parser(
        "schema",
        help="Print the parameter table with defaults",
    )
    parser_schema.add_argument(
        "--namespace",
        "-n",
        default=None,
        help="Only print this namespace",
    )
    _add_common(parser_schema)
    parser_schema.set_defaults(func=cmd_schema)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args) or 0)


if __name__ == "__main__":
    sys.exit(main())
