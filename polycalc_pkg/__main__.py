"""Main entry point for running polycalc_pkg as a module.

This allows running the calculator with:
    python -m polycalc_pkg < commands.txt
    python -m polycalc_pkg commands.txt
    python -m polycalc_pkg -e "ZERO"

This is equivalent to running:
    python polycalc.py
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
