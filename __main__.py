"""CLI entry point for dashboard-engine.

This module acts as the central entry point for the project's CLI tools.
It delegates commands to the handlers in dashboard_engine.cli.
"""

import subprocess
import sys

from dotenv import load_dotenv

from dashboard_engine.cli import (
    handle_apply_command,
    handle_new_command,
    handle_parse_command,
    handle_validate_command,
)
from dashboard_engine.core import get_logger, setup_logging

# Load environment variables from .env file
load_dotenv()

logger = get_logger("cli")


def cmd_test(extra_args: list[str]) -> int:
    """Run pytest with provided arguments and test tier options.

    Usage:
        python . test                # Run all tests
        python . test --unit         # Run only unit tests (no I/O)
        python . test --integration  # Run tests touching the file system
        python . test -k "reorder"   # Run tests matching pattern
    """
    tier_markers = {
        "--unit": ["-m", "unit"],
        "--integration": ["-m", "integration"],
        "--all": [],
    }

    pytest_args: list[str] = []
    remaining_args: list[str] = []

    for arg in extra_args:
        if arg in tier_markers:
            pytest_args.extend(tier_markers[arg])
        else:
            remaining_args.append(arg)

    cmd = [sys.executable, "-m", "pytest", *pytest_args, *remaining_args]
    logger.info(f"Running: {' '.join(cmd)}")

    try:
        return subprocess.call(cmd)
    except KeyboardInterrupt:
        return 130


def show_help() -> None:
    """Display CLI help message."""
    print("Usage: python . {command} [args]")
    print("\n=== Schemas ===")
    print("  new        Create a starting schema")
    print("  validate   Validate a schema file")
    print("\n=== Operations ===")
    print("  apply      Validate and apply operations to a schema")
    print("  parse      Extract operations from raw model output")
    print("\n=== Development ===")
    print("  test       Run the test suite (--unit, --integration)")
    print("\nExamples:")
    print("  python . new --mode dark -o schema.json")
    print("  python . validate schema.json")
    print("  python . apply schema.json ops.json -o result.json")
    print("  python . apply schema.json response.txt --sanitize")
    print("  python . parse response.txt")
    print("\nLog level: DASHBOARD_LOG_LEVEL (default INFO)")


def main() -> int:
    """Main entry point for the CLI."""
    if len(sys.argv) < 2:
        show_help()
        return 1

    command = sys.argv[1]
    rest_args = sys.argv[2:]

    if command in ("-h", "--help"):
        show_help()
        return 0

    commands = {
        "new": lambda: handle_new_command(rest_args),
        "validate": lambda: handle_validate_command(rest_args),
        "apply": lambda: handle_apply_command(rest_args),
        "parse": lambda: handle_parse_command(rest_args),
        "test": lambda: cmd_test(rest_args),
    }

    if command in commands:
        setup_logging()
        return commands[command]()

    logger.error(f"Unknown command: {command}")
    show_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
