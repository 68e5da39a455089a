"""Centralized configuration for the polynomial calculator.

This module defines:
- Coefficient width and the numeric bounds of every literal reader
- Command syntax limits
- Input buffering and recursion limits
- Logging defaults

Runtime knobs can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with POLYCALC_)

The numeric bounds are part of the input format and cannot be overridden.
"""

import importlib.metadata
import os

try:
    VERSION = importlib.metadata.version("polycalc")
except importlib.metadata.PackageNotFoundError:
    # Running from a source checkout
    VERSION = "1.0.0"

# Coefficients are fixed-width two's-complement integers
COEFF_BITS = 64
COEFF_MAX = 2 ** (COEFF_BITS - 1) - 1  # LONG_MAX
COEFF_MIN = -(2 ** (COEFF_BITS - 1))  # LONG_MIN
EXP_MAX = 2**31 - 1  # INT_MAX
UINT_MAX = 2**32 - 1

# Command syntax
MAX_COMMAND_LENGTH = 10

# Input buffering (characters requested from the source per refill)
INPUT_BUFFER_SIZE = int(os.getenv("POLYCALC_INPUT_BUFFER_SIZE", "1024"))

# Arithmetic recurses once per variable level; applied by Calculator.run
RECURSION_LIMIT = int(os.getenv("POLYCALC_RECURSION_LIMIT", "10000"))

# Logging
LOG_LEVEL = os.getenv("POLYCALC_LOG_LEVEL", "WARNING")
LOG_FILE = os.getenv("POLYCALC_LOG_FILE") or None
