#!/usr/bin/env python3
"""
Polycalc - Polynomial Stack Calculator

Main entry point for the polycalc calculator. This file serves as a thin
wrapper that delegates all functionality to the polycalc_pkg package.

Usage:
    python polycalc.py < commands.txt       # Process standard input
    python polycalc.py commands.txt         # Process a file
    python polycalc.py -e $'ZERO\nPRINT'     # Run a program given inline
    python polycalc.py --help               # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for polycalc.

    Delegates all functionality to the polycalc_pkg.cli module,
    which handles argument parsing, input reading, and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    from polycalc_pkg.cli import main_entry

    try:
        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
