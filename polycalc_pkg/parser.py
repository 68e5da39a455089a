"""Polynomial literal parser.

Grammar (one literal per line, the trailing newline is consumed):

    poly  := coeff | mono ("+" mono)*
    mono  := "(" poly "," exp ")"

The parser keeps a stack of monomial accumulators, one per unmatched ``(``
plus one for the top level, instead of recursing: nesting depth is not
bounded by the grammar. Closing a monomial collapses the innermost
accumulator into a canonical coefficient and adds the resulting term to
the accumulator below it.

Any deviation raises ``ParseError`` located at the first offending
character, after the rest of the line has been discarded.
"""

from __future__ import annotations

from .input_stream import InputStream
from .logging_config import get_logger
from .numerics import is_number_start, read_coefficient, read_exponent
from .poly import Mono, Poly, add_monos, from_coeff
from .stack import Stack

logger = get_logger("parser")


def _expect(stream: InputStream, condition: bool) -> None:
    if not condition:
        raise stream.parse_error()


def _starts_poly(c: str) -> bool:
    return is_number_start(c) or c == "("


def read_polynomial(stream: InputStream) -> Poly:
    """Read one polynomial literal line from ``stream``.

    Args:
        stream: Input positioned at the first character of the literal

    Returns:
        Canonical polynomial

    Raises:
        ParseError: The literal is malformed or a number is out of bound
    """
    levels: Stack[list[Mono]] = Stack()
    levels.push([])
    expecting_mono = False

    _expect(stream, _starts_poly(stream.peek()))
    while stream.peek() != "\n":
        c = stream.peek()
        if c == "(":
            stream.read()
            levels.push([])
            expecting_mono = False
            _expect(stream, _starts_poly(stream.peek()))
        elif is_number_start(c) and not expecting_mono:
            coeff = read_coefficient(stream)
            if coeff != 0:
                levels.top().append(Mono(0, from_coeff(coeff)))
        elif c == "," and not expecting_mono and levels.size() > 1:
            stream.read()
            exp = read_exponent(stream)

            coeff_poly = add_monos(levels.pop())
            if not coeff_poly.is_zero():
                levels.top().append(Mono(exp, coeff_poly))

            _expect(stream, stream.peek() == ")")
            stream.read()

            if stream.peek() == "+":
                stream.read()
                expecting_mono = True
            else:
                _expect(stream, stream.peek() in ("\n", ","))
        else:
            _expect(stream, False)

    _expect(stream, levels.size() == 1 and not expecting_mono)
    stream.read()

    return add_monos(levels.pop())


def parse_polynomial(text: str) -> Poly:
    """Parse a single literal given as a string.

    A missing trailing newline is supplied; anything after the first line is
    ignored.
    """
    if not text.endswith("\n"):
        text += "\n"
    stream = InputStream.from_string(text)
    poly = read_polynomial(stream)
    logger.debug("Parsed literal %r", text.rstrip("\n"))
    return poly
