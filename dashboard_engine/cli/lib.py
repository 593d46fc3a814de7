"""Developer CLI commands for dashboard-engine.

Provides the `python . new|validate|apply|parse` commands. Every handler
takes its own argv slice, builds an argparse parser, and returns a
process exit code.
"""

import argparse
import json
from pathlib import Path
from typing import Any

from dashboard_engine.config import get_default_mode
from dashboard_engine.core import get_logger
from dashboard_engine.parsing import (
    OperationParseError,
    parse_operations_response,
    sanitize_operations,
)
from dashboard_engine.pipeline import OperationRejected, process_operations
from dashboard_engine.schema import build_schema
from dashboard_engine.validation import validate_schema

logger = get_logger("cli")


def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _emit(data: Any, output: Path | None) -> None:
    text = json.dumps(data, indent=2)
    if output:
        output.write_text(text + "\n", encoding="utf-8")
        logger.info(f"Saved to {output}")
    else:
        print(text)


# =============================================================================
# new
# =============================================================================


def cmd_new(args: argparse.Namespace) -> int:
    """Handle the new command."""
    mode = get_default_mode(args.mode)
    document = build_schema(mode, blank=args.blank).to_document()
    _emit(document, args.output)
    return 0


def handle_new_command(argv: list[str]) -> int:
    """Print or write a starting schema."""
    parser = argparse.ArgumentParser(
        prog="python . new",
        description="Create a starting dashboard schema",
    )
    parser.add_argument(
        "--mode",
        choices=["light", "dark"],
        default=None,
        help="Theme mode (default: DASHBOARD_DEFAULT_MODE or light)",
    )
    parser.add_argument(
        "--blank",
        action="store_true",
        help="Start without components",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write to file instead of stdout",
    )
    return cmd_new(parser.parse_args(argv))


# =============================================================================
# validate
# =============================================================================


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle the validate command."""
    try:
        document = _read_json(args.schema)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Cannot read schema: {e}")
        return 1

    result = validate_schema(document)
    if not result:
        logger.error(result.error)
        for issue in result.errors:
            logger.info(f"  {issue.path or '<root>'}: {issue.message} [{issue.error_type}]")
        return 1

    logger.info(f"{args.schema} is valid")
    return 0


def handle_validate_command(argv: list[str]) -> int:
    """Validate a schema file."""
    parser = argparse.ArgumentParser(
        prog="python . validate",
        description="Validate a dashboard schema file",
    )
    parser.add_argument("schema", type=Path, help="Schema JSON file")
    return cmd_validate(parser.parse_args(argv))


# =============================================================================
# apply
# =============================================================================


def cmd_apply(args: argparse.Namespace) -> int:
    """Handle the apply command."""
    try:
        document = _read_json(args.schema)
        operations = parse_operations_response(args.operations.read_text(encoding="utf-8"))
        if args.sanitize:
            operations = sanitize_operations(operations)
    except (OSError, json.JSONDecodeError, OperationParseError) as e:
        logger.error(f"Cannot read input: {e}")
        return 1

    try:
        result = process_operations(
            document,
            operations,
            warn_on_missing_target=args.warn_missing or None,
        )
    except OperationRejected as e:
        logger.error(f"Rejected ({e.stage}): {e.reason}")
        return 1

    for warning in result.warnings:
        logger.warning(warning)

    _emit(result.schema, args.output)
    return 0


def handle_apply_command(argv: list[str]) -> int:
    """Apply an operations file to a schema file."""
    parser = argparse.ArgumentParser(
        prog="python . apply",
        description="Validate and apply operations to a schema",
    )
    parser.add_argument("schema", type=Path, help="Schema JSON file")
    parser.add_argument(
        "operations",
        type=Path,
        help="Operations file: JSON array, object with 'operations', or raw model output",
    )
    parser.add_argument(
        "--sanitize",
        action="store_true",
        help="Drop malformed operations before validation",
    )
    parser.add_argument(
        "--warn-missing",
        action="store_true",
        help="Warn when a path selector matches no component",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write the result to file instead of stdout",
    )
    return cmd_apply(parser.parse_args(argv))


# =============================================================================
# parse
# =============================================================================


def cmd_parse(args: argparse.Namespace) -> int:
    """Handle the parse command."""
    try:
        content = args.response.read_text(encoding="utf-8")
        operations = sanitize_operations(parse_operations_response(content))
    except (OSError, OperationParseError) as e:
        logger.error(f"Parse failed: {e}")
        return 1

    _emit(operations, None)
    return 0


def handle_parse_command(argv: list[str]) -> int:
    """Extract sanitized operations from raw model output."""
    parser = argparse.ArgumentParser(
        prog="python . parse",
        description="Parse and sanitize operations from a model response",
    )
    parser.add_argument("response", type=Path, help="File holding the raw model response")
    return cmd_parse(parser.parse_args(argv))
