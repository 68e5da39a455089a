"""Command line front end for the polynomial calculator."""

from __future__ import annotations

import argparse
import io
import json
import sys
from typing import TextIO

from . import config
from .api import run as run_program
from .commands import Calculator
from .config import VERSION
from .input_stream import InputStream
from .logging_config import get_logger, setup_logging

logger = get_logger("cli")

# Bytes that are not UTF-8 become lone surrogates, which the parser rejects
# like any other unexpected character.
DECODE_ERRORS = "surrogateescape"


def print_result_json(program: str) -> None:
    """Run ``program`` in a fresh session and print the result as JSON."""
    result = run_program(program)
    print(json.dumps(result.to_dict()))


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the polycalc CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 once the input was processed, 1 if it could not be read)
    """
    parser = argparse.ArgumentParser(
        prog="polycalc",
        description="Stack calculator for sparse multivariate integer polynomials.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="Read commands from FILE instead of standard input",
    )
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Run the given program text (lines separated by newlines) and exit",
        dest="eval_program",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (calculator protocol)",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=config.LOG_LEVEL.upper(),
        help="Set logging level",
    )
    parser.add_argument(
        "--log-file", type=str, default=config.LOG_FILE, help="Write logs to file"
    )
    parser.add_argument(
        "--recursion-limit",
        type=int,
        help=f"Python recursion limit for deeply nested operands (default: {config.RECURSION_LIMIT})",
    )
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.version:
        print(VERSION)
        return 0

    # Applied by Calculator.run
    if args.recursion_limit and args.recursion_limit > 0:
        config.RECURSION_LIMIT = int(args.recursion_limit)

    if args.eval_program is not None:
        program = args.eval_program
        if program and not program.endswith("\n"):
            program += "\n"
    else:
        program = None

    if args.format == "json":
        if program is None:
            try:
                program = _read_source(args.file)
            except OSError as e:
                print(f"Error: cannot read {args.file}: {e}", file=sys.stderr)
                return 1
        print_result_json(program)
        return 0

    calculator = Calculator()
    if program is not None:
        calculator.run(InputStream.from_string(program))
        return 0
    if args.file:
        try:
            with _open_source(args.file) as f:
                calculator.run(InputStream(f))
        except OSError as e:
            logger.error("Cannot read %s: %s", args.file, e)
            print(f"Error: cannot read {args.file}: {e}", file=sys.stderr)
            return 1
        return 0

    calculator.run(InputStream(_stdin()))
    return 0


def _open_source(path: str) -> TextIO:
    return open(path, encoding="utf-8", errors=DECODE_ERRORS, newline="")


def _stdin() -> TextIO:
    if isinstance(sys.stdin, io.TextIOWrapper):
        sys.stdin.reconfigure(errors=DECODE_ERRORS)
    return sys.stdin


def _read_source(path: str | None) -> str:
    if path is None:
        return _stdin().read()
    with _open_source(path) as f:
        return f.read()


if __name__ == "__main__":
    sys.exit(main_entry())
