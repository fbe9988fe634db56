# symkernel - Rewrite Passes
# Copyright (c) 2024 symkernel Contributors. All rights reserved.

"""
Local rewrite rules used by the simplifier.

Every pass is a function from a node to a replacement node (or the node
itself) and is applied to a whole tree with ``Entity.replace``. The rules
are value preserving wherever the original expression is defined; rules
that could hide an undefined value are guarded with ``provably_nonzero``.
"""

from __future__ import annotations
from typing import Any, List, Optional, Tuple

from . import numeric as num
from .arithmetic import (
    Div, Minus, Mul, Pow, Sum, is_minus_one, is_number, negative, provably_nonzero,
)
from .entity import Entity, FALSE, TRUE
from .logic import And, Not, Or
from .numeric import Integer, Number, Real
from .trigonometry import Cos, Cosec, Cotan, Sec, Sin, Tan


def canonical_key(e: Entity) -> Tuple[Any, ...]:
    """A sortable key identifying ``e`` up to structure, computed without recursion."""
    return tuple((type(n).__name__, str(n._leaf_key())) for n in e.nodes)


# ----------------------------------------------------------------------
# sort
# ----------------------------------------------------------------------

def _signed_terms(node: Entity) -> List[Tuple[bool, Entity]]:
    terms: List[Tuple[bool, Entity]] = []
    stack = [(True, node)]
    while stack:
        positive, e = stack.pop()
        if isinstance(e, Sum):
            stack.append((positive, e.addend))
            stack.append((positive, e.augend))
        elif isinstance(e, Minus):
            stack.append((not positive, e.minuend))
            stack.append((positive, e.subtrahend))
        else:
            terms.append((positive, e))
    return terms


def _factors(node: Entity) -> List[Entity]:
    factors: List[Entity] = []
    stack = [node]
    while stack:
        e = stack.pop()
        if isinstance(e, Mul):
            stack.append(e.multiplicand)
            stack.append(e.multiplier)
        else:
            factors.append(e)
    return factors


def _sorted_sum(node: Entity) -> Entity:
    constant: Number = num.ZERO
    symbolic: List[Tuple[bool, Entity]] = []
    for positive, term in _signed_terms(node):
        if is_number(term) and term.is_exact:
            constant = num.add(constant, term if positive else num.negate(term))
        else:
            symbolic.append((positive, term))
    symbolic.sort(key=lambda t: canonical_key(t[1]))
    if symbolic and isinstance(constant, Real) and constant.is_negative:
        symbolic.append((False, num.negate(constant)))
    elif not constant.is_zero or not symbolic:
        symbolic.append((True, constant))
    result: Optional[Entity] = None
    for positive, term in symbolic:
        if result is None:
            result = term if positive else negative(term)
        elif positive:
            result = Sum(result, term)
        else:
            result = Minus(result, term)
    return result


def _sorted_product(node: Entity) -> Entity:
    coefficient: Number = num.ONE
    symbolic: List[Entity] = []
    for factor in _factors(node):
        if is_number(factor) and factor.is_exact:
            coefficient = num.multiply(coefficient, factor)
        else:
            symbolic.append(factor)
    if coefficient.is_zero:
        return num.ZERO
    symbolic.sort(key=canonical_key)
    if coefficient != num.ONE or not symbolic:
        symbolic.insert(0, coefficient)
    result = symbolic[0]
    for factor in symbolic[1:]:
        result = Mul(result, factor)
    return result


def sort(node: Entity) -> Entity:
    """Flatten sum and product chains into a canonical order; fold exact numbers."""
    if isinstance(node, (Sum, Minus)):
        result = _sorted_sum(node)
    elif isinstance(node, Mul):
        result = _sorted_product(node)
    else:
        return node
    return node if result == node else result


# ----------------------------------------------------------------------
# common
# ----------------------------------------------------------------------

def _split_coefficient(e: Entity) -> Tuple[Number, Entity]:
    if isinstance(e, Mul) and is_number(e.multiplier) and e.multiplier.is_exact:
        return e.multiplier, e.multiplicand
    return num.ONE, e


def _split_power(e: Entity) -> Tuple[Entity, Entity]:
    if isinstance(e, Pow):
        return e.base, e.exponent
    return e, num.ONE


def _add_exponents(p: Entity, q: Entity) -> Entity:
    if is_number(p) and is_number(q):
        return num.add(p, q)
    return Sum(p, q)


def _non_negative(e: Entity) -> bool:
    return isinstance(e, Real) and not e.is_nan and not e.is_negative


def _scaled(coefficient: Number, term: Entity) -> Entity:
    if coefficient.is_zero:
        return num.ZERO
    if coefficient == num.ONE:
        return term
    return Mul(coefficient, term)


def _like_terms(node: Entity) -> Optional[Entity]:
    if not isinstance(node, (Sum, Minus)):
        return None
    a, b = node.direct_children
    if is_number(a) or is_number(b):
        return None
    ca, ra = _split_coefficient(a)
    cb, rb = _split_coefficient(b)
    if ra != rb:
        return None
    if isinstance(node, Sum):
        return _scaled(num.add(ca, cb), ra)
    return _scaled(num.subtract(ca, cb), ra)


def _signs(node: Entity) -> Optional[Entity]:
    if isinstance(node, Sum):
        a, b = node.augend, node.addend
        if isinstance(b, Mul) and is_minus_one(b.multiplier):
            return Minus(a, b.multiplicand)
        if isinstance(b, Real) and b.is_negative:
            return Minus(a, num.negate(b))
        if isinstance(a, Mul) and is_minus_one(a.multiplier):
            return Minus(b, a.multiplicand)
    if isinstance(node, Minus):
        a, b = node.subtrahend, node.minuend
        if isinstance(b, Mul) and is_minus_one(b.multiplier):
            return Sum(a, b.multiplicand)
        if isinstance(b, Real) and b.is_negative:
            return Sum(a, num.negate(b))
    if isinstance(node, Mul) and is_minus_one(node.multiplier):
        inner = node.multiplicand
        if isinstance(inner, Mul) and is_minus_one(inner.multiplier):
            return inner.multiplicand
        if isinstance(inner, Minus):
            return Minus(inner.minuend, inner.subtrahend)
    return None


def _merge_powers(node: Entity) -> Optional[Entity]:
    if isinstance(node, Mul):
        if is_number(node.multiplier):
            return None
        base, p = _split_power(node.multiplier)
        other, q = _split_power(node.multiplicand)
        if base != other:
            return None
        # a^-1 * a = a^0 would hide a = 0
        if not (_non_negative(p) and _non_negative(q)) and not provably_nonzero(base):
            return None
        return Pow(base, _add_exponents(p, q))
    if isinstance(node, Pow) and isinstance(node.base, Pow) and isinstance(node.exponent, Integer):
        base, p = node.base.base, node.base.exponent
        n = node.exponent
        if not (_non_negative(p) and n.value >= 0) and not provably_nonzero(base):
            return None
        exponent = num.multiply(p, n) if is_number(p) else Mul(n, p)
        return Pow(base, exponent)
    return None


def _flatten_division(node: Entity) -> Optional[Entity]:
    if not isinstance(node, Div):
        return None
    a, b = node.dividend, node.divisor
    if isinstance(a, Div):
        return Div(a.dividend, Mul(a.divisor, b))
    if isinstance(b, Div) and provably_nonzero(b.divisor):
        return Div(Mul(a, b.divisor), b.dividend)
    # (a * b) / a -> b
    if isinstance(a, Mul) and provably_nonzero(b):
        if a.multiplier == b:
            return a.multiplicand
        if a.multiplicand == b:
            return a.multiplier
    return None


_COMMON_RULES = (_like_terms, _signs, _merge_powers, _flatten_division)


def common(node: Entity) -> Entity:
    """Collect like terms, normalise signs, merge powers and flatten divisions."""
    for rule in _COMMON_RULES:
        result = rule(node)
        if result is not None:
            return result
    return node


# ----------------------------------------------------------------------
# power
# ----------------------------------------------------------------------

def power(node: Entity) -> Entity:
    """Combine powers with a common exponent and divide powers of one base."""
    if isinstance(node, Mul):
        a, b = node.multiplier, node.multiplicand
        if isinstance(a, Pow) and isinstance(b, Pow) and isinstance(a.exponent, Integer) \
                and a.exponent == b.exponent:
            return Pow(Mul(a.base, b.base), a.exponent)
    if isinstance(node, Div):
        base, p = _split_power(node.dividend)
        other, q = _split_power(node.divisor)
        if (isinstance(node.dividend, Pow) or isinstance(node.divisor, Pow)) \
                and base == other and not is_number(base) and provably_nonzero(base):
            if is_number(p) and is_number(q):
                return Pow(base, num.subtract(p, q))
            return Pow(base, Minus(p, q))
    return node


# ----------------------------------------------------------------------
# trigonometric
# ----------------------------------------------------------------------

def _square_of(e: Entity, kind: type) -> Optional[Entity]:
    if isinstance(e, Pow) and isinstance(e.base, kind) and e.exponent == Integer(2):
        return e.base.argument
    return None


def trigonometric(node: Entity) -> Entity:
    """Pythagorean identity, quotients of sin and cos, and parity."""
    if isinstance(node, Sum):
        a, b = node.augend, node.addend
        for first, second in ((a, b), (b, a)):
            x = _square_of(first, Sin)
            if x is not None and x == _square_of(second, Cos):
                return num.ONE
    if isinstance(node, Div):
        a, b = node.dividend, node.divisor
        if isinstance(a, Sin) and isinstance(b, Cos) and a.argument == b.argument:
            return Tan(a.argument)
        if isinstance(a, Cos) and isinstance(b, Sin) and a.argument == b.argument:
            return Cotan(a.argument)
        if a == num.ONE and isinstance(b, Cos):
            return Sec(b.argument)
        if a == num.ONE and isinstance(b, Sin):
            return Cosec(b.argument)
    if isinstance(node, (Sin, Cos)):
        arg = node.argument
        if isinstance(arg, Mul) and is_minus_one(arg.multiplier):
            if isinstance(node, Sin):
                return negative(Sin(arg.multiplicand))
            return Cos(arg.multiplicand)
    return node


# ----------------------------------------------------------------------
# boolean
# ----------------------------------------------------------------------

def boolean(node: Entity) -> Entity:
    """Double negation, idempotence, complements and De Morgan's laws."""
    if isinstance(node, Not) and isinstance(node.argument, Not):
        return node.argument.argument
    if isinstance(node, (And, Or)):
        a, b = node.left, node.right
        if a == b:
            return a
        if (isinstance(b, Not) and b.argument == a) or (isinstance(a, Not) and a.argument == b):
            return FALSE if isinstance(node, And) else TRUE
        if isinstance(a, Not) and isinstance(b, Not):
            if isinstance(node, And):
                return Not(Or(a.argument, b.argument))
            return Not(And(a.argument, b.argument))
    return node


PASSES = (sort, common, power, trigonometric, boolean)
