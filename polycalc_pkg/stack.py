"""Generic LIFO container.

Used as the calculator's operand stack, as the parser's stack of open
monomial accumulators and as the composition engine's frame stack.
"""

from __future__ import annotations

from typing import Callable, Generic, Iterator, Optional, TypeVar

from .types import ContractViolation

T = TypeVar("T")


class Stack(Generic[T]):
    """A growable stack of owned values."""

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[T] = []

    def push(self, value: T) -> None:
        self._items.append(value)

    def pop(self) -> T:
        """Remove and return the top value."""
        self._require(1, "pop")
        return self._items.pop()

    def top(self) -> T:
        self._require(1, "top")
        return self._items[-1]

    def peek_second(self) -> T:
        """Return the value directly below the top without removing anything."""
        self._require(2, "peek_second")
        return self._items[-2]

    def peek(self, depth: int = 0) -> T:
        """Return the value ``depth`` positions below the top (0 is the top)."""
        self._require(depth + 1, "peek")
        return self._items[-1 - depth]

    def size(self) -> int:
        return len(self._items)

    def destroy(self, cleanup: Optional[Callable[[T], None]] = None) -> None:
        """Empty the stack, handing every remaining value to ``cleanup`` top first."""
        while self._items:
            value = self._items.pop()
            if cleanup is not None:
                cleanup(value)

    def _require(self, count: int, operation: str) -> None:
        if len(self._items) < count:
            raise ContractViolation(
                f"Stack.{operation} needs {count} element(s), have {len(self._items)}"
            )

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __iter__(self) -> Iterator[T]:
        """Iterate from the bottom of the stack to the top."""
        return iter(self._items)

    def __repr__(self) -> str:
        return f"Stack({self._items!r})"
