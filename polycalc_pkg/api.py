"""Public API for polycalc - returns structured objects without side effects."""

from __future__ import annotations

import io

from .commands import Calculator
from .compose import compose
from .input_stream import InputStream
from .parser import parse_polynomial
from .poly import (
    add,
    at,
    degree,
    degree_by,
    from_coeff,
    is_eq,
    mul,
    neg,
    power,
    render,
    sub,
    variable,
    zero,
)
from .types import ParseError, ParseResult, SessionResult

__all__ = [
    "parse",
    "run",
    "zero",
    "from_coeff",
    "variable",
    "add",
    "sub",
    "neg",
    "mul",
    "power",
    "at",
    "compose",
    "degree",
    "degree_by",
    "is_eq",
    "render",
]


def parse(text: str) -> ParseResult:
    """Parse one polynomial literal.

    Args:
        text: Literal text (e.g., "(1,2)+(3,0)"); the trailing newline is optional

    Returns:
        ParseResult with the canonical polynomial and its rendering

    Example:
        >>> from polycalc_pkg.api import parse
        >>> parse("(1,2)+(3,0)").rendered
        '(3,0)+(1,2)'
        >>> parse("(1,2").error
        'ERROR 1 5'
    """
    try:
        poly = parse_polynomial(text)
    except ParseError as e:
        return ParseResult(
            ok=False,
            error=e.message,
            error_code=e.code,
            line=e.line,
            column=e.column,
        )
    return ParseResult(ok=True, poly=poly, rendered=render(poly))


def run(program: str) -> SessionResult:
    """Run a command program in a fresh calculator session.

    Args:
        program: Lines of literals and commands (e.g., "(1,1)\\nAT 4\\nPRINT\\n")

    Returns:
        SessionResult with printed lines, diagnostics and the final stack size

    Example:
        >>> from polycalc_pkg.api import run
        >>> run("(1,1)\\nAT 4\\nPRINT\\n").output
        ['4']
    """
    out = io.StringIO()
    err = io.StringIO()
    calculator = Calculator(out=out, err=err)
    calculator.run(InputStream.from_string(program))
    return SessionResult(
        ok=calculator.error_count == 0,
        output=out.getvalue().splitlines(),
        errors=err.getvalue().splitlines(),
        stack_size=calculator.stack.size(),
    )
