"""Polynomial composition.

``compose(p, substitutes)`` replaces the variable at nesting depth ``i`` with
``substitutes[i]``; variables deeper than ``len(substitutes)`` become 0.

The walk over ``p`` keeps one frame per open nesting level on an explicit
stack instead of recursing, because literal nesting depth is unbounded.
"""

from __future__ import annotations

from typing import Sequence

from .poly import Mono, Poly, add, from_coeff, mul, power
from .stack import Stack


class _Frame:
    """One open nesting level: accumulated result and a cursor over its terms."""

    __slots__ = ("result", "terms", "index")

    def __init__(self, poly: Poly) -> None:
        self.result = from_coeff(poly.constant)
        self.terms = poly.terms
        self.index = 0

    def exhausted(self) -> bool:
        return self.index >= len(self.terms)

    def current(self) -> Mono:
        return self.terms[self.index]


def compose(p: Poly, substitutes: Sequence[Poly]) -> Poly:
    """Substitute ``substitutes[i]`` for the variable at depth ``i`` of ``p``.

    Args:
        p: Polynomial to compose into
        substitutes: Positional substitutes, ``substitutes[0]`` replaces the
            top variable

    Returns:
        Composed polynomial
    """
    count = len(substitutes)
    frames: Stack[_Frame] = Stack()
    frames.push(_Frame(p))

    while True:
        frame = frames.top()

        # A frame deeper than the substitute list only keeps its constant
        if frame.exhausted() or frames.size() > count:
            frames.pop()
            if not frames:
                return frame.result

            parent = frames.top()
            substitute = substitutes[frames.size() - 1]
            term = mul(frame.result, power(substitute, parent.current().exp))
            parent.result = add(parent.result, term)
            parent.index += 1
            continue

        frames.push(_Frame(frame.current().coeff))
