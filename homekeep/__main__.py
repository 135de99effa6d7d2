"""CLI entry point for homekeep.

Inspect the subtype catalog, export schemas and onboarding questions, and
validate JSON documents from the command line.

Usage:
    python -m homekeep types
    python -m homekeep subtypes --type appliance
    python -m homekeep schema refrigerator
    python -m homekeep questions heat
    python -m homekeep validate item.json
    python -m homekeep validate house.json --property
    python -m homekeep env --category registry
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from homekeep.config import (
    EnvVar,
    get_environment,
    get_environment_info,
    list_environment_variables,
)
from homekeep.core import get_logger, setup_logging
from homekeep.onboarding import default_label, extract_questions
from homekeep.registry import UnknownSubtypeError, get_registry, list_type_names
from homekeep.validation import (
    validate_base,
    validate_maintenance_log,
    validate_property_data,
    validate_typed,
)

logger = get_logger("homekeep.cli")


def _emit(payload: Any) -> None:
    indent = get_environment(EnvVar.HOMEKEEP_JSON_INDENT)
    print(json.dumps(payload, indent=indent or None))


# =============================================================================
# Catalog Commands
# =============================================================================


def cmd_types(_args: argparse.Namespace) -> int:
    """List maintainable types."""
    _emit(list_type_names())
    return 0


def cmd_subtypes(args: argparse.Namespace) -> int:
    """List registered subtypes, optionally for one type."""
    registry = get_registry()
    entries = registry.list_by_type(args.type) if args.type else registry.list_all()
    _emit(
        [
            {
                "type": entry.type.value,
                "subtype": entry.subtype,
                "label": default_label(entry.subtype, registry),
            }
            for entry in entries
        ]
    )
    return 0


def cmd_schema(args: argparse.Namespace) -> int:
    """Print the JSON Schema of a subtype."""
    try:
        schema = get_registry().resolve(args.subtype)
    except UnknownSubtypeError as e:
        logger.error(str(e))
        return 1
    _emit(schema.json_schema())
    return 0


def cmd_questions(args: argparse.Namespace) -> int:
    """Print the ordered onboarding questions of a subtype."""
    try:
        schema = get_registry().resolve(args.subtype)
    except UnknownSubtypeError as e:
        logger.error(str(e))
        return 1
    _emit([question.to_dict() for question in extract_questions(schema)])
    return 0


# =============================================================================
# Validate Command
# =============================================================================


def _read_json(source: str) -> Any:
    if source == "-":
        return json.load(sys.stdin)
    return json.loads(Path(source).read_text(encoding="utf-8"))


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a JSON document and print the result."""
    try:
        data = _read_json(args.file)
    except OSError as e:
        logger.error(f"Cannot read {args.file}: {e}")
        return 1
    except json.JSONDecodeError as e:
        logger.error(f"{args.file} is not valid JSON: {e}")
        return 1

    if args.property:
        result = validate_property_data(data)
    elif args.log:
        result = validate_maintenance_log(data)
    elif args.base:
        result = validate_base(data)
    else:
        result = validate_typed(data, args.subtype)

    _emit(result.to_dict())
    if not result.success:
        logger.debug(f"Validation failed for {len(result.errors)} field(s)")
    return 0 if result.success else 1


# =============================================================================
# Env Command
# =============================================================================


def cmd_env(args: argparse.Namespace) -> int:
    """Show configuration variables and their current values."""
    rows = []
    for env_var in list_environment_variables(args.category):
        info = get_environment_info(env_var)
        rows.append(
            {
                "name": info.name,
                "value": get_environment(env_var),
                "default": info.default,
                "category": info.category,
                "description": info.description,
            }
        )
    _emit(rows)
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="python -m homekeep",
        description="Home maintenance schema registry and validation",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    types_parser = subparsers.add_parser("types", help="List maintainable types")
    types_parser.set_defaults(func=cmd_types)

    subtypes_parser = subparsers.add_parser("subtypes", help="List registered subtypes")
    subtypes_parser.add_argument(
        "--type",
        "-t",
        type=str,
        default=None,
        choices=list_type_names(),
        help="Only list subtypes of this type",
    )
    subtypes_parser.set_defaults(func=cmd_subtypes)

    schema_parser = subparsers.add_parser("schema", help="Print a subtype's JSON Schema")
    schema_parser.add_argument("subtype", type=str, help="Subtype name, e.g. 'heat'")
    schema_parser.set_defaults(func=cmd_schema)

    questions_parser = subparsers.add_parser(
        "questions",
        help="Print a subtype's onboarding questions",
    )
    questions_parser.add_argument("subtype", type=str, help="Subtype name, e.g. 'heat'")
    questions_parser.set_defaults(func=cmd_questions)

    validate_parser = subparsers.add_parser("validate", help="Validate a JSON file")
    validate_parser.add_argument("file", type=str, help="JSON file path, or '-' for stdin")
    mode = validate_parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--subtype",
        "-s",
        type=str,
        default=None,
        help="Validate as this subtype (default: the document's own subtype)",
    )
    mode.add_argument("--base", action="store_true", help="Base validation only")
    mode.add_argument("--property", action="store_true", help="Validate a property")
    mode.add_argument("--log", action="store_true", help="Validate a maintenance log")
    validate_parser.set_defaults(func=cmd_validate)

    env_parser = subparsers.add_parser("env", help="Show configuration variables")
    env_parser.add_argument(
        "--category",
        "-c",
        type=str,
        default=None,
        help="Only show one category (logging, registry, cli)",
    )
    env_parser.set_defaults(func=cmd_env)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    # Load environment variables from .env file
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)
    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    level = "DEBUG" if args.verbose else get_environment(EnvVar.HOMEKEEP_LOG_LEVEL)
    setup_logging(level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
