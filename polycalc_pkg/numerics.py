"""Bounded-precision decimal readers.

Every reader consumes an optional ``-`` and then at most as many digits as
its bound has, and compares the digit string against the bound digit by
digit, most significant first. No integer is built until the digits are
known to fit, so the check never depends on arbitrary-precision arithmetic.

Four readers are provided:

- ``read_coefficient``: polynomial coefficient, ``[COEFF_MIN, COEFF_MAX]``,
  must be followed by ``,`` or a newline.
- ``read_exponent``: monomial exponent, ``[0, EXP_MAX]``. A lone ``-0`` is
  accepted as 0, any other negative exponent is rejected.
- ``read_at_argument``: ``AT`` argument, ``[COEFF_MIN, COEFF_MAX]``, must be
  followed by a newline (left unconsumed).
- ``read_deg_by_argument`` / ``read_compose_argument``: unsigned command
  arguments, ``[0, UINT_MAX]``, the newline after them is consumed.

Literal readers raise ``ParseError`` (line and column); command argument
readers raise ``CommandError`` (line only). Either way the rest of the
offending line has been discarded.
"""

from __future__ import annotations

from .config import COEFF_MAX, COEFF_MIN, EXP_MAX, UINT_MAX
from .input_stream import EOF, InputStream
from .logging_config import get_logger
from .types import CommandError

logger = get_logger("numerics")

COEFF_TERMINATORS = frozenset({",", "\n"})

_NEGATIVE_BOUND_DIGITS = str(-COEFF_MIN)
_POSITIVE_BOUND_DIGITS = str(COEFF_MAX)
_EXP_BOUND_DIGITS = str(EXP_MAX)
_UINT_BOUND_DIGITS = str(UINT_MAX)


def is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def is_number_start(c: str) -> bool:
    return is_digit(c) or c == "-"


def exceeds_bound(digits: str, bound_digits: str) -> bool:
    """Check whether a non-negative decimal digit string is larger than a bound.

    Args:
        digits: Decimal digits, leading zeros included
        bound_digits: Decimal digits of the (non-negative) bound

    Returns:
        True if ``digits`` has more digits than the bound, or the same number
        of digits and a larger value
    """
    if len(digits) != len(bound_digits):
        return len(digits) > len(bound_digits)
    for digit, bound_digit in zip(digits, bound_digits):
        if digit != bound_digit:
            return digit > bound_digit
    return False


def _read_digits(stream: InputStream, max_length: int) -> str:
    digits = []
    while len(digits) < max_length and is_digit(stream.peek()):
        digits.append(stream.read())
    return "".join(digits)


def _read_sign(stream: InputStream) -> bool:
    if stream.peek() == "-":
        stream.read()
        return True
    return False


def read_coefficient(stream: InputStream) -> int:
    """Read a signed coefficient that must be followed by ``,`` or a newline."""
    negative = _read_sign(stream)
    bound_digits = _NEGATIVE_BOUND_DIGITS if negative else _POSITIVE_BOUND_DIGITS
    digits = _read_digits(stream, len(bound_digits))

    if not digits or stream.peek() not in COEFF_TERMINATORS:
        # A digit here means the literal is longer than any value in range
        code = "OUT_OF_BOUND" if is_digit(stream.peek()) else "MALFORMED_LITERAL"
        raise stream.parse_error(code=code)
    if exceeds_bound(digits, bound_digits):
        logger.debug("Coefficient %s%s out of bound", "-" if negative else "", digits)
        raise stream.parse_error(column=stream.column_number, code="OUT_OF_BOUND")

    value = int(digits)
    return -value if negative else value


def read_exponent(stream: InputStream) -> int:
    """Read a monomial exponent.

    The character after the exponent is left for the caller to check.
    """
    sign_column = None
    if _read_sign(stream):
        sign_column = stream.next_column
    digits = _read_digits(stream, len(_EXP_BOUND_DIGITS))

    # Only "-0" may carry a sign
    if sign_column is not None and digits != "0":
        raise stream.parse_error(column=sign_column, code="BAD_EXPONENT_SIGN")
    if not digits:
        raise stream.parse_error()
    if exceeds_bound(digits, _EXP_BOUND_DIGITS):
        logger.debug("Exponent %s out of bound", digits)
        raise stream.parse_error(column=stream.column_number, code="OUT_OF_BOUND")
    if is_digit(stream.peek()):
        raise stream.parse_error(code="OUT_OF_BOUND")

    return int(digits)


def read_at_argument(stream: InputStream) -> int:
    """Read the value argument of ``AT``; the trailing newline stays unread."""
    line = stream.line
    negative = _read_sign(stream)
    bound_digits = _NEGATIVE_BOUND_DIGITS if negative else _POSITIVE_BOUND_DIGITS
    digits = _read_digits(stream, len(bound_digits))

    if not digits or stream.peek() != "\n" or exceeds_bound(digits, bound_digits):
        stream.skip_line()
        raise CommandError(line, "WRONG_VALUE")

    value = int(digits)
    return -value if negative else value


def _read_unsigned_argument(stream: InputStream, code: str) -> int:
    line = stream.line
    digits = _read_digits(stream, len(_UINT_BOUND_DIGITS))
    terminator = stream.read()

    if not digits or terminator != "\n":
        if terminator not in ("\n", EOF):
            stream.skip_line()
        raise CommandError(line, code)
    if exceeds_bound(digits, _UINT_BOUND_DIGITS):
        raise CommandError(line, code)

    return int(digits)


def read_deg_by_argument(stream: InputStream) -> int:
    """Read the variable index argument of ``DEG_BY`` including its newline."""
    return _read_unsigned_argument(stream, "WRONG_VARIABLE")


def read_compose_argument(stream: InputStream) -> int:
    """Read the substitute count argument of ``COMPOSE`` including its newline."""
    return _read_unsigned_argument(stream, "WRONG_COUNT")
