"""Type definitions, error classes and result dataclasses for consistent API responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .poly import Poly


@dataclass
class ParseResult:
    """Result of parsing a single polynomial literal."""

    ok: bool
    poly: Poly | None = None
    rendered: str | None = None
    error: str | None = None
    error_code: str | None = None
    line: int | None = None
    column: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.rendered is not None:
            result_dict["result"] = self.rendered
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        if self.line is not None:
            result_dict["line"] = self.line
        if self.column is not None:
            result_dict["column"] = self.column
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"ParseResult(ok=False, error={self.error!r})"
        return f"ParseResult(ok=True, rendered={self.rendered!r})"


@dataclass
class SessionResult:
    """Result of running a command program through a fresh calculator session."""

    ok: bool
    output: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    stack_size: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "ok": self.ok,
            "output": list(self.output),
            "errors": list(self.errors),
            "stack_size": self.stack_size,
        }

    def __repr__(self) -> str:
        """Return string representation of the result."""
        return (
            f"SessionResult(ok={self.ok}, output={self.output!r}, "
            f"errors={self.errors!r}, stack_size={self.stack_size})"
        )


class CalcError(Exception):
    """Base class for recoverable calculator errors."""

    def __init__(self, message: str, code: str = "CALC_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ParseError(CalcError):
    """Raised when a polynomial literal or one of its numbers is malformed.

    The rest of the offending line has already been discarded when this is
    raised, so the caller can simply continue with the next line.
    """

    def __init__(self, line: int, column: int, code: str = "MALFORMED_LITERAL"):
        self.line = line
        self.column = column
        super().__init__(f"ERROR {line} {column}", code)


class CommandError(CalcError):
    """Raised when a command word, its argument or its operands are invalid."""

    def __init__(self, line: int, code: str):
        self.line = line
        super().__init__(f"ERROR {line} {code.replace('_', ' ')}", code)


class ContractViolation(RuntimeError):
    """Raised when an internal precondition is broken (a programming error)."""
