"""Command line interface for inspecting variable sets."""
from __future__ import annotations

from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Iterable
import logging
import sys

import yaml

from .accessor import VariableAccessor
from .log import configure_logging
from .resolver import VariableResolver
from .settings import FizzySettings
from .sources import VariableSource

logger = logging.getLogger(__name__)


def _parse_arguments(argv: Iterable[str]) -> Namespace:
    parser = ArgumentParser(prog="fizzy", description="Inspect hierarchical variable sets")
    parser.add_argument(
        "-c",
        "--cfg",
        "--config",
        dest="cfg",
        type=Path,
        metavar="CONFIGURATION_FILE",
        help="Sets a custom configuration file",
    )
    parser.add_argument("--vars-dir", type=Path, help="Directory holding the variable sets")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Sets the level of verbosity (repeat for more)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List the available variable sets")

    show_parser = subparsers.add_parser("show", help="Print the resolved variables of a set")
    show_parser.add_argument("name", help="Variable set name")

    get_parser = subparsers.add_parser("get", help="Print a single variable")
    get_parser.add_argument("name", help="Variable set name")
    get_parser.add_argument("path", help="Dotted variable path, e.g. `db.port`")
    get_parser.add_argument("--type", dest="type_name", help="Type to coerce to (append `?` for nullable)")
    get_parser.add_argument("--strict", action="store_true", help="Validate the type instead of converting")
    get_parser.add_argument("--required", action="store_true", help="Fail if the variable is undefined")

    return parser.parse_args(list(argv))


def _dump_yaml(value: object) -> str:
    return yaml.safe_dump(value, default_flow_style=False, sort_keys=True)


def _format_value(value: object) -> str:
    if isinstance(value, (dict, list)):
        return _dump_yaml(value).rstrip("\n")
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def main(argv: Iterable[str] | None = None) -> int:
    args = _parse_arguments(sys.argv[1:] if argv is None else argv)
    try:
        settings = FizzySettings.load(args.cfg).with_overrides(vars_dir=args.vars_dir, verbosity=args.verbose)
        configure_logging(settings.verbosity)
        if settings.cfg_file_path is not None:
            logger.debug("Configuration file: %s", settings.cfg_file_path)
        source = VariableSource(settings.vars_dir)

        if args.command == "list":
            return _handle_list(source)
        if args.command == "show":
            return _handle_show(args, source)
        if args.command == "get":
            return _handle_get(args, source)
    except (ValueError, OSError, TypeError, yaml.YAMLError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    raise ValueError(f"Unknown command: {args.command}")


def _handle_list(source: VariableSource) -> int:
    for name in source.available():
        print(name)
    return 0


def _handle_show(args: Namespace, source: VariableSource) -> int:
    variables = VariableResolver(source).resolve(args.name)
    sys.stdout.write(_dump_yaml(variables))
    return 0


def _handle_get(args: Namespace, source: VariableSource) -> int:
    accessor = VariableAccessor(VariableResolver(source).resolve(args.name))
    if args.required:
        value = accessor.get_required(args.path, args.type_name, strict=args.strict)
    else:
        value = accessor.get(args.path, args.type_name, strict=args.strict)
    print(_format_value(value))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
