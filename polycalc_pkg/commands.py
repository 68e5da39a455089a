"""Command dispatcher for the stack calculator.

Input is processed line by line. A line starting with a letter or ``_`` is
a command, anything else is a polynomial literal that is pushed onto the
operand stack. Results go to the output stream; diagnostics
(``ERROR <line> ...``) go to the error stream and never stop the session.
"""

from __future__ import annotations

import sys
from typing import Callable, NamedTuple, Optional, TextIO

from . import config
from .compose import compose
from .config import MAX_COMMAND_LENGTH
from .input_stream import EOF, InputStream
from .logging_config import get_logger
from .numerics import read_at_argument, read_compose_argument, read_deg_by_argument
from .parser import read_polynomial
from .poly import Poly, add, at, clone, degree, degree_by, mul, neg, sub, zero
from .stack import Stack
from .types import CalcError, CommandError

logger = get_logger("commands")


def is_command_char(c: str) -> bool:
    return ("a" <= c <= "z") or ("A" <= c <= "Z") or c == "_"


def _read_at_line(stream: InputStream) -> int:
    value = read_at_argument(stream)
    stream.read()  # newline
    return value


def apply_recursion_limit() -> None:
    """Raise the interpreter recursion limit to ``config.RECURSION_LIMIT``.

    Arithmetic recurses once per variable level of its operands.
    """
    if config.RECURSION_LIMIT > sys.getrecursionlimit():
        sys.setrecursionlimit(config.RECURSION_LIMIT)


class Command(NamedTuple):
    """Dispatch table entry."""

    handler: Callable[..., None]
    read_argument: Optional[Callable[[InputStream], int]] = None
    # Reported when the argument is missing
    argument_error: str = "WRONG_COMMAND"


class Calculator:
    """Operand stack plus the command set operating on it."""

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self.stack: Stack[Poly] = Stack()
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.error_count = 0

    # -- main loop --------------------------------------------------------

    def run(self, stream: InputStream) -> int:
        """Process ``stream`` to the end.

        Returns:
            Number of diagnostics reported
        """
        apply_recursion_limit()
        logger.info("Session started")
        while not stream.at_eof():
            line = stream.line
            try:
                if is_command_char(stream.peek()):
                    self.execute_command(stream)
                else:
                    self.push_literal(stream)
            except CalcError as e:
                self.report(e)
            except RecursionError:
                logger.warning(
                    "Line %d: operands nested deeper than the recursion limit (%d)",
                    line,
                    sys.getrecursionlimit(),
                )
                self.report(CommandError(line, "NESTING_TOO_DEEP"))
        logger.info(
            "Session finished: %d polynomial(s) on stack, %d error(s)",
            self.stack.size(),
            self.error_count,
        )
        return self.error_count

    def report(self, error: CalcError) -> None:
        self.error_count += 1
        logger.debug("%s (%s)", error.message, error.code)
        print(error.message, file=self.err)

    def push_literal(self, stream: InputStream) -> None:
        self.stack.push(read_polynomial(stream))

    def execute_command(self, stream: InputStream) -> None:
        """Read one command line and run it."""
        line = stream.line
        word, terminator = self._read_command_word(stream, line)
        command = COMMANDS.get(word)
        logger.debug("Line %d: command %r", line, word)

        if command is None:
            if terminator == " ":
                stream.skip_line()
            raise CommandError(line, "WRONG_COMMAND")

        if command.read_argument is None:
            if terminator != "\n":
                if terminator == " ":
                    stream.skip_line()
                raise CommandError(line, "WRONG_COMMAND")
            command.handler(self, line)
            return

        if terminator != " ":
            raise CommandError(line, command.argument_error)
        argument = command.read_argument(stream)
        command.handler(self, line, argument)

    def _read_command_word(self, stream: InputStream, line: int) -> tuple[str, str]:
        chars: list[str] = []
        while True:
            c = stream.read()
            if c in (" ", "\n", EOF):
                return "".join(chars), c
            if len(chars) >= MAX_COMMAND_LENGTH or not is_command_char(c):
                stream.skip_line()
                raise CommandError(line, "WRONG_COMMAND")
            chars.append(c)

    def _require(self, line: int, count: int) -> None:
        if self.stack.size() < count:
            raise CommandError(line, "STACK_UNDERFLOW")

    def _replace(self, count: int, value: Poly) -> None:
        """Pop ``count`` operands and push ``value`` in their place."""
        for _ in range(count):
            self.stack.pop()
        self.stack.push(value)

    def _print_flag(self, value: bool) -> None:
        print("1" if value else "0", file=self.out)

    # -- commands ---------------------------------------------------------
    # Results are computed before the stack is touched, so a command that
    # fails leaves its operands in place.

    def zero(self, line: int) -> None:
        self.stack.push(zero())

    def is_coeff(self, line: int) -> None:
        self._require(line, 1)
        self._print_flag(self.stack.top().is_coeff())

    def is_zero(self, line: int) -> None:
        self._require(line, 1)
        self._print_flag(self.stack.top().is_zero())

    def clone(self, line: int) -> None:
        self._require(line, 1)
        self.stack.push(clone(self.stack.top()))

    def add(self, line: int) -> None:
        self._require(line, 2)
        self._replace(2, add(self.stack.peek_second(), self.stack.top()))

    def mul(self, line: int) -> None:
        self._require(line, 2)
        self._replace(2, mul(self.stack.peek_second(), self.stack.top()))

    def neg(self, line: int) -> None:
        self._require(line, 1)
        self._replace(1, neg(self.stack.top()))

    def sub(self, line: int) -> None:
        """Replace the top two polynomials with top minus second."""
        self._require(line, 2)
        self._replace(2, sub(self.stack.top(), self.stack.peek_second()))

    def is_eq(self, line: int) -> None:
        self._require(line, 2)
        self._print_flag(self.stack.top() == self.stack.peek_second())

    def deg(self, line: int) -> None:
        self._require(line, 1)
        print(degree(self.stack.top()), file=self.out)

    def deg_by(self, line: int, var_idx: int) -> None:
        self._require(line, 1)
        print(degree_by(self.stack.top(), var_idx), file=self.out)

    def at(self, line: int, x: int) -> None:
        self._require(line, 1)
        self._replace(1, at(self.stack.top(), x))

    def print_top(self, line: int) -> None:
        self._require(line, 1)
        print(self.stack.top(), file=self.out)

    def pop(self, line: int) -> None:
        self._require(line, 1)
        self.stack.pop()

    def compose(self, line: int, count: int) -> None:
        """Compose the top polynomial with the ``count`` polynomials below it.

        The polynomial directly below the top replaces variable 0.
        """
        self._require(line, count + 1)
        substitutes = [self.stack.peek(depth) for depth in range(1, count + 1)]
        self._replace(count + 1, compose(self.stack.top(), substitutes))


COMMANDS: dict[str, Command] = {
    "ZERO": Command(Calculator.zero),
    "IS_COEFF": Command(Calculator.is_coeff),
    "IS_ZERO": Command(Calculator.is_zero),
    "CLONE": Command(Calculator.clone),
    "ADD": Command(Calculator.add),
    "MUL": Command(Calculator.mul),
    "NEG": Command(Calculator.neg),
    "SUB": Command(Calculator.sub),
    "IS_EQ": Command(Calculator.is_eq),
    "DEG": Command(Calculator.deg),
    "DEG_BY": Command(Calculator.deg_by, read_deg_by_argument, "WRONG_VARIABLE"),
    "AT": Command(Calculator.at, _read_at_line, "WRONG_VALUE"),
    "PRINT": Command(Calculator.print_top),
    "POP": Command(Calculator.pop),
    "COMPOSE": Command(Calculator.compose, read_compose_argument, "WRONG_COUNT"),
}
