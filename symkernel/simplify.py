# symkernel - Symbolic Simplification
# Copyright (c) 2024 symkernel Contributors. All rights reserved.

"""
Bounded multi-pass simplification.

``Entity.inner_simplified`` performs one bottom-up pass. ``simplify`` repeats
the rewrite passes of ``symkernel.patterns`` at most ``level`` times and keeps
every intermediate tree as a candidate; the candidate with the lowest
``simplicity`` score wins. The rules are not known to be confluent, so the
pass count is the termination guarantee: inputs such as ``1 + 1/x`` finish in
the same time for any level because a pass that changes nothing ends the loop.

Polynomial collapse converts a tree to a sparse polynomial (monomials over
atoms with ``Fraction`` coefficients) and rebuilds it in canonical order,
which cancels and combines terms the local rules cannot see:

Example:
    >>> x, y = var('x'), var('y')
    >>> simplify((x - y) * (x + y))
    x ^ 2 - y ^ 2
    >>> simplify(x * 3 * 2)
    6 * x
"""

from __future__ import annotations
import logging
from fractions import Fraction
from typing import Dict, FrozenSet, List, Optional, Tuple

from .arithmetic import Div, Minus, Mul, Pow, Sum
from .config import get_config
from .entity import Entity, EntityLike, _recursion_headroom, to_entity
from .numeric import Integer, Number, Rational, _fraction
from .patterns import PASSES, canonical_key

logger = logging.getLogger(__name__)


def simplify(expr: EntityLike, level: Optional[int] = None) -> Entity:
    """
    Simplify an expression with at most ``abs(level)`` rewrite passes.

    Args:
        expr: Expression to simplify.
        level: Number of passes; ``Config.simplify_level`` by default. A
               positive level also tries expanding the result, followed by
               simplification at ``-level``.

    Returns:
        The candidate with the lowest simplicity score (the first one on ties).
    """
    expr = to_entity(expr)
    if level is None:
        level = get_config().simplify_level
    with _recursion_headroom(expr):
        candidates = _alternate(expr, level)
    best = min(candidates, key=lambda c: c.simplicity)
    logger.debug("Simplified %d candidates of %s to score %s", len(candidates), expr, best.simplicity)
    return best


def _alternate(expr: Entity, level: int) -> List[Entity]:
    if not expr.direct_children:
        return [expr]
    res = expr.inner_simplified()
    if not res.direct_children:
        return [res]
    history = [res]
    for pass_number in range(abs(level)):
        previous = res
        for rule in PASSES:
            res = res.replace(rule).inner_simplified()
            history.append(res)
        collapsed = collapse(res)
        if collapsed is not None:
            history.append(collapsed.inner_simplified())
        res = min(history, key=lambda c: c.simplicity)
        logger.debug("Pass %d of %d: best score %s", pass_number + 1, abs(level), res.simplicity)
        if res == previous:
            logger.debug("Pass %d changed nothing, stopping", pass_number + 1)
            break
    if level > 0:
        expanded = expand(res)
        if expanded != res:
            history.append(simplify(expanded, -level))
    return history


# ----------------------------------------------------------------------
# Polynomial form
# ----------------------------------------------------------------------

# A monomial is a frozenset of (atom, power) pairs; a polynomial maps
# monomials to their coefficients
Monomial = FrozenSet[Tuple[Entity, int]]
Polynomial = Dict[Monomial, Fraction]


class _NotPolynomial(Exception):
    """Raised internally when a tree has no useful polynomial form."""


def to_polynomial(expr: Entity) -> Optional[Polynomial]:
    """
    Convert an expression to polynomial form.

    Subtrees that are not sums, differences, products, divisions by a nonzero
    rational or non-negative integer powers become atoms. Returns None when
    an atom evaluates to an infinity or NaN, or when expansion would exceed
    ``Config.max_expansion_terms``.
    """
    limit = get_config().max_expansion_terms
    try:
        with _recursion_headroom(expr):
            return _to_polynomial(expr, limit)
    except _NotPolynomial:
        return None


def _to_polynomial(expr: Entity, limit: int) -> Polynomial:
    if isinstance(expr, Rational):
        value = _fraction(expr)
        return {frozenset(): value} if value else {}

    if isinstance(expr, Sum):
        return _add_poly(_to_polynomial(expr.augend, limit), _to_polynomial(expr.addend, limit))

    if isinstance(expr, Minus):
        p2 = _to_polynomial(expr.minuend, limit)
        return _add_poly(_to_polynomial(expr.subtrahend, limit), {m: -c for m, c in p2.items()})

    if isinstance(expr, Mul):
        return _mul_poly(
            _to_polynomial(expr.multiplier, limit), _to_polynomial(expr.multiplicand, limit), limit
        )

    if isinstance(expr, Div) and isinstance(expr.divisor, Rational) and not expr.divisor.is_zero:
        divisor = _fraction(expr.divisor)
        return {m: c / divisor for m, c in _to_polynomial(expr.dividend, limit).items()}

    if isinstance(expr, Pow) and isinstance(expr.exponent, Integer) and expr.exponent.value >= 0:
        return _pow_poly(_to_polynomial(expr.base, limit), expr.exponent.value, limit)

    return _atom(expr)


def _atom(expr: Entity) -> Polynomial:
    value = expr if isinstance(expr, Number) else expr._evaled()
    if isinstance(value, Number) and not value.is_finite:
        raise _NotPolynomial(expr)
    return {frozenset({(expr, 1)}): Fraction(1)}


def _add_poly(p1: Polynomial, p2: Polynomial) -> Polynomial:
    """Add two polynomials."""
    result = dict(p1)
    for m, c in p2.items():
        result[m] = result.get(m, Fraction(0)) + c
    return {m: c for m, c in result.items() if c != 0}


def _mul_poly(p1: Polynomial, p2: Polynomial, limit: int) -> Polynomial:
    """Multiply two polynomials, giving up beyond ``limit`` terms."""
    if len(p1) * len(p2) > limit * limit:
        raise _NotPolynomial()
    result: Polynomial = {}
    for m1, c1 in p1.items():
        for m2, c2 in p2.items():
            mono = _mul_monomial(m1, m2)
            result[mono] = result.get(mono, Fraction(0)) + c1 * c2
    result = {m: c for m, c in result.items() if c != 0}
    if len(result) > limit:
        raise _NotPolynomial()
    return result


def _pow_poly(base: Polynomial, n: int, limit: int) -> Polynomial:
    result: Polynomial = {frozenset(): Fraction(1)}
    square = base
    while n:
        if n & 1:
            result = _mul_poly(result, square, limit)
        n >>= 1
        if n:
            square = _mul_poly(square, square, limit)
    return result


def _mul_monomial(m1: Monomial, m2: Monomial) -> Monomial:
    """Multiply two monomials by adding exponents."""
    powers: Dict[Entity, int] = {}
    for atom, exp in m1:
        powers[atom] = powers.get(atom, 0) + exp
    for atom, exp in m2:
        powers[atom] = powers.get(atom, 0) + exp
    return frozenset((a, e) for a, e in powers.items() if e != 0)


def _monomial_key(item: Tuple[Monomial, Fraction]):
    mono = item[0]
    degree = sum(p for _, p in mono)
    return (-degree, sorted((canonical_key(a), -p) for a, p in mono))


def from_polynomial(poly: Polynomial) -> Entity:
    """Convert a polynomial back to an expression, highest degree first."""
    result: Optional[Entity] = None
    for mono, coef in sorted(poly.items(), key=_monomial_key):
        term = _mono_to_expr(mono)
        if result is None:
            if term is None:
                result = Rational(coef)
            elif coef == 1:
                result = term
            else:
                result = Mul(Rational(coef), term)
            continue
        magnitude = abs(coef)
        if term is None:
            piece = Rational(magnitude)
        elif magnitude == 1:
            piece = term
        else:
            piece = Mul(Rational(magnitude), term)
        result = Sum(result, piece) if coef > 0 else Minus(result, piece)
    return Integer(0) if result is None else result


def _mono_to_expr(mono: Monomial) -> Optional[Entity]:
    """Convert a monomial to an expression; None for the empty monomial."""
    if not mono:
        return None
    factors = []
    for atom, exp in sorted(mono, key=lambda pair: canonical_key(pair[0])):
        factors.append(atom if exp == 1 else Pow(atom, Integer(exp)))
    result = factors[0]
    for f in factors[1:]:
        result = Mul(result, f)
    return result


def collapse(expr: Entity) -> Optional[Entity]:
    """The polynomial form of ``expr`` rebuilt canonically, or None."""
    poly = to_polynomial(expr)
    if poly is None:
        return None
    return from_polynomial(poly)


def expand(expr: EntityLike) -> Entity:
    """
    Fully expand an expression (distribute multiplication over addition).

    Returns the expression unchanged when it has no polynomial form.
    """
    expr = to_entity(expr)
    collapsed = collapse(expr)
    return expr if collapsed is None else collapsed
