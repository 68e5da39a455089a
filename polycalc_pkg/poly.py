"""Sparse multivariate polynomials with 64-bit integer coefficients.

A ``Poly`` is a polynomial in its own top variable whose coefficients are
``Poly`` values in the next variable down:

    p = constant + sum(x ** mono.exp * mono.coeff for mono in terms)

Canonical form, established only by ``add_monos`` / ``_normalize``:

- ``terms`` is sorted strictly ascending by exponent;
- no term has a zero coefficient;
- an exponent-0 term may only appear first, and only when its coefficient
  depends on deeper variables; the integer part of that coefficient is
  always hoisted into ``constant``.

With these rules structural equality is value equality. Values are treated
as immutable: every operation returns a new ``Poly`` and may share
unchanged sub-terms with its operands.

Coefficient arithmetic wraps modulo 2 ** COEFF_BITS into the signed range,
so results always stay within the bounds the literal reader accepts.
"""

from __future__ import annotations

from operator import attrgetter
from typing import Iterable, NamedTuple, Sequence, Tuple, Union

from .config import COEFF_BITS

_MODULUS = 2**COEFF_BITS
_HALF = 2 ** (COEFF_BITS - 1)


def wrap(value: int) -> int:
    """Reduce an integer into the signed coefficient range (two's complement)."""
    return (value + _HALF) % _MODULUS - _HALF


class Mono(NamedTuple):
    """One term ``x ** exp * coeff``; ``coeff`` is a polynomial in the next variable."""

    exp: int
    coeff: "Poly"


class Poly:
    """Canonical sparse recursive polynomial."""

    __slots__ = ("constant", "terms")

    def __init__(self, constant: int = 0, terms: tuple[Mono, ...] = ()) -> None:
        # Raw constructor: callers are responsible for canonical form
        self.constant = constant
        self.terms = terms

    def is_zero(self) -> bool:
        return self.constant == 0 and not self.terms

    def is_coeff(self) -> bool:
        return not self.terms

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Poly):
            return NotImplemented
        return is_eq(self, other)

    def __hash__(self) -> int:
        return hash((self.constant, self.terms))

    def __add__(self, other: "Poly") -> "Poly":
        return add(self, other)

    def __sub__(self, other: "Poly") -> "Poly":
        return sub(self, other)

    def __neg__(self) -> "Poly":
        return neg(self)

    def __mul__(self, other: "Poly") -> "Poly":
        return mul(self, other)

    def __pow__(self, n: int) -> "Poly":
        return power(self, n)

    def __str__(self) -> str:
        return render(self)

    def __repr__(self) -> str:
        return f"Poly({render(self)!r})"


def zero() -> Poly:
    return Poly()


def from_coeff(c: int) -> Poly:
    return Poly(wrap(c))


def variable(index: int) -> Poly:
    """Build the polynomial equal to the variable at nesting depth ``index``."""
    result = Poly(0, (Mono(1, Poly(1)),))
    for _ in range(index):
        result = Poly(0, (Mono(0, result),))
    return result


def is_zero(p: Poly) -> bool:
    return p.is_zero()


def is_coeff(p: Poly) -> bool:
    return p.is_coeff()


def clone(p: Poly) -> Poly:
    """Return a deep copy of ``p`` that shares no term storage with it.

    Walks the term tree with an explicit stack of ``(source, copied terms)``
    frames, so nesting depth is unbounded.
    """
    frames: list[tuple[Poly, list[Mono]]] = [(p, [])]
    while True:
        poly, copied = frames[-1]
        if len(copied) < len(poly.terms):
            frames.append((poly.terms[len(copied)].coeff, []))
            continue

        frames.pop()
        copy = Poly(poly.constant, tuple(copied))
        if not frames:
            return copy
        parent, parent_copied = frames[-1]
        parent_copied.append(Mono(parent.terms[len(parent_copied)].exp, copy))


_exponent = attrgetter("exp")


def _is_sorted(monos: Sequence[Mono]) -> bool:
    return all(monos[i - 1].exp <= monos[i].exp for i in range(1, len(monos)))


def _normalize(constant: int, monos: Iterable[Mono]) -> Poly:
    """Hoist the exponent-0 constant and drop zero terms.

    ``monos`` must already be sorted with distinct exponents and canonical
    coefficients.
    """
    terms = []
    for mono in monos:
        coeff = mono.coeff
        if mono.exp == 0 and coeff.constant != 0:
            constant = wrap(constant + coeff.constant)
            coeff = Poly(0, coeff.terms)
        if not coeff.is_zero():
            terms.append(mono if coeff is mono.coeff else Mono(mono.exp, coeff))
    return Poly(constant, tuple(terms))


def add_monos(monos: Iterable[Mono], constant: int = 0) -> Poly:
    """Build the canonical polynomial ``constant + sum(monos)``.

    Args:
        monos: Terms in any order, exponents may repeat; coefficients must be
            canonical
        constant: Integer part added to the result

    Returns:
        Canonical polynomial
    """
    monos = list(monos)
    if not _is_sorted(monos):
        monos.sort(key=_exponent)

    merged: list[Mono] = []
    for mono in monos:
        if merged and merged[-1].exp == mono.exp:
            merged[-1] = Mono(mono.exp, add(merged[-1].coeff, mono.coeff))
        else:
            merged.append(mono)

    return _normalize(wrap(constant), merged)


def add(p: Poly, q: Poly) -> Poly:
    constant = wrap(p.constant + q.constant)
    if not q.terms:
        return Poly(constant, p.terms)
    if not p.terms:
        return Poly(constant, q.terms)

    p_terms, q_terms = p.terms, q.terms
    merged: list[Mono] = []
    i = j = 0
    while i < len(p_terms) and j < len(q_terms):
        p_mono, q_mono = p_terms[i], q_terms[j]
        if p_mono.exp < q_mono.exp:
            merged.append(p_mono)
            i += 1
        elif p_mono.exp > q_mono.exp:
            merged.append(q_mono)
            j += 1
        else:
            merged.append(Mono(p_mono.exp, add(p_mono.coeff, q_mono.coeff)))
            i += 1
            j += 1
    merged.extend(p_terms[i:])
    merged.extend(q_terms[j:])

    # Equal exponents may have cancelled, or produced a new exponent-0 constant
    return _normalize(constant, merged)


def neg(p: Poly) -> Poly:
    return Poly(wrap(-p.constant), tuple(Mono(m.exp, neg(m.coeff)) for m in p.terms))


def sub(p: Poly, q: Poly) -> Poly:
    return add(p, neg(q))


def mul(p: Poly, q: Poly) -> Poly:
    monos = [
        Mono(p_mono.exp + q_mono.exp, mul(p_mono.coeff, q_mono.coeff))
        for p_mono in p.terms
        for q_mono in q.terms
    ]
    if q.constant:
        q_constant = from_coeff(q.constant)
        monos.extend(Mono(m.exp, mul(m.coeff, q_constant)) for m in p.terms)
    if p.constant:
        p_constant = from_coeff(p.constant)
        monos.extend(Mono(m.exp, mul(m.coeff, p_constant)) for m in q.terms)

    return add_monos(monos, wrap(p.constant * q.constant))


def coeff_power(x: int, n: int) -> int:
    """Raise a coefficient to a non-negative power with wrapping multiplication."""
    result = 1
    while n != 0:
        if n % 2 == 1:
            result = wrap(result * x)
        n //= 2
        if n:
            x = wrap(x * x)
    return result


def power(p: Poly, n: int) -> Poly:
    """Raise ``p`` to a non-negative integer power by repeated squaring."""
    if p.is_coeff():
        return from_coeff(coeff_power(p.constant, n))

    result = from_coeff(1)
    x = p
    while n != 0:
        if n % 2 == 1:
            result = mul(result, x)
        n //= 2
        if n:
            x = mul(x, x)
    return result


def is_eq(p: Poly, q: Poly) -> bool:
    pending = [(p, q)]
    while pending:
        a, b = pending.pop()
        if a is b:
            continue
        if a.constant != b.constant or len(a.terms) != len(b.terms):
            return False
        for a_mono, b_mono in zip(a.terms, b.terms):
            if a_mono.exp != b_mono.exp:
                return False
            pending.append((a_mono.coeff, b_mono.coeff))
    return True


def degree(p: Poly) -> int:
    """Total degree; -1 for the zero polynomial.

    Every leaf of a canonical polynomial is a non-zero constant, so the
    total degree is the largest exponent sum along a path to a leaf.
    """
    result = -1
    pending = [(p, 0)]
    while pending:
        poly, offset = pending.pop()
        if poly.constant != 0:
            result = max(result, offset)
        pending.extend((mono.coeff, offset + mono.exp) for mono in poly.terms)
    return result


def degree_by(p: Poly, var_idx: int) -> int:
    """Degree in the variable at nesting depth ``var_idx``; -1 for zero."""
    if p.is_zero():
        return -1
    result = 0
    pending = [(p, var_idx)]
    while pending:
        poly, depth = pending.pop()
        if not poly.terms:
            continue
        if depth == 0:
            # Terms are sorted by exponent
            result = max(result, poly.terms[-1].exp)
        else:
            pending.extend((mono.coeff, depth - 1) for mono in poly.terms)
    return result


def at(p: Poly, x: int) -> Poly:
    """Substitute ``x`` for the top variable; the result has one level less."""
    result = zero()
    for mono in p.terms:
        scaled = mul(from_coeff(coeff_power(x, mono.exp)), mono.coeff)
        result = add(result, scaled)
    return add(result, from_coeff(p.constant))


RenderItem = Union[str, Tuple[Poly, int]]


def render(p: Poly) -> str:
    """Render ``p`` in literal syntax, e.g. ``(3,0)+(1,2)``.

    An exponent-0 term prints the constant of its parent inside its own
    coefficient. Uses an explicit work stack, so nesting depth is unbounded.
    """
    pieces: list[str] = []
    work: list[RenderItem] = [(p, 0)]
    while work:
        item = work.pop()
        if isinstance(item, str):
            pieces.append(item)
            continue

        poly, carried = item
        constant = poly.constant + carried
        if not poly.terms:
            pieces.append(str(constant))
            continue

        expanded: list[RenderItem] = []
        if constant != 0 and poly.terms[0].exp != 0:
            expanded.append(f"({constant},0)+")
        for index, mono in enumerate(poly.terms):
            if index:
                expanded.append("+")
            expanded.append("(")
            expanded.append((mono.coeff, constant if mono.exp == 0 else 0))
            expanded.append(f",{mono.exp})")
        work.extend(reversed(expanded))

    return "".join(pieces)
