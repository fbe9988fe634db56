# symkernel - Logic and Comparison Nodes
# Copyright (c) 2024 symkernel Contributors. All rights reserved.

"""
Boolean connectives, equality, ordering comparisons and set membership.

All of these nodes have the boolean codomain: a numeric value reached
while evaluating them is undefined.

Ordering comparisons require real, defined operands. This is a property of
the node, separate from the numeric tower, where comparing with NaN reads as
true:

    >>> Real.nan > 1
    True
    >>> Greater(Real.nan, 1).evaled()
    NaN
"""

from __future__ import annotations
from abc import abstractmethod
from dataclasses import dataclass
import operator
from typing import Any, ClassVar, Optional

from .domain import Domain
from .entity import Boolean, Entity, FALSE, Priority, TRUE, WEIGHT
from .numeric import Number, Real


def _is_true(e: Entity) -> bool:
    return isinstance(e, Boolean) and e.value


def _is_false(e: Entity) -> bool:
    return isinstance(e, Boolean) and not e.value


class Statement(Entity):
    """A node whose value is a Boolean."""

    @property
    def codomain(self) -> Domain:
        return Domain.BOOLEAN


@dataclass(frozen=True, eq=False, repr=False)
class BinaryStatement(Statement):
    left: Entity
    right: Entity
    _symbol: ClassVar[str] = ''

    @staticmethod
    @abstractmethod
    def _fold(left: Entity, right: Entity) -> Optional[Entity]:
        """Rule shared by evaluation and simplification."""
        ...

    def _init_direct_children(self):
        return (self.left, self.right)

    def _rebuild(self, children):
        return type(self)(*children)

    def _inner_eval(self) -> Entity:
        return self._reduce_eval(self._fold)

    def _inner_simplify(self) -> Entity:
        return self._reduce_simplify(self._fold)

    def _render(self) -> str:
        return f"{self._wrap(self.left)} {self._symbol} {self._wrap(self.right, right=True)}"


# ----------------------------------------------------------------------
# Connectives
# ----------------------------------------------------------------------

def _not(a: Entity) -> Optional[Entity]:
    if isinstance(a, Boolean):
        return Boolean(not a.value)
    return None


@dataclass(frozen=True, eq=False, repr=False)
class Not(Statement):
    argument: Entity
    priority: ClassVar[Priority] = Priority.NEGATION

    def _init_direct_children(self):
        return (self.argument,)

    def _rebuild(self, children):
        return Not(*children)

    def _inner_eval(self) -> Entity:
        return self._reduce_eval(_not)

    def _inner_simplify(self) -> Entity:
        return self._reduce_simplify(_not)

    def _render(self) -> str:
        return f"not {self._wrap(self.argument, right=True)}"


def _and(a: Entity, b: Entity) -> Optional[Entity]:
    if _is_false(a) or _is_false(b):
        return FALSE
    if _is_true(a):
        return b
    if _is_true(b):
        return a
    return None


def _or(a: Entity, b: Entity) -> Optional[Entity]:
    if _is_true(a) or _is_true(b):
        return TRUE
    if _is_false(a):
        return b
    if _is_false(b):
        return a
    return None


def _xor(a: Entity, b: Entity) -> Optional[Entity]:
    if isinstance(a, Boolean) and isinstance(b, Boolean):
        return Boolean(a.value != b.value)
    if _is_false(a):
        return b
    if _is_false(b):
        return a
    if _is_true(a):
        return Not(b)
    if _is_true(b):
        return Not(a)
    return None


def _implies(a: Entity, b: Entity) -> Optional[Entity]:
    if _is_false(a) or _is_true(b):
        return TRUE
    if _is_true(a):
        return b
    if _is_false(b):
        return Not(a)
    return None


@dataclass(frozen=True, eq=False, repr=False)
class And(BinaryStatement):
    priority: ClassVar[Priority] = Priority.CONJUNCTION
    _symbol: ClassVar[str] = 'and'
    _fold = staticmethod(_and)


@dataclass(frozen=True, eq=False, repr=False)
class Or(BinaryStatement):
    priority: ClassVar[Priority] = Priority.DISJUNCTION
    _symbol: ClassVar[str] = 'or'
    _fold = staticmethod(_or)


@dataclass(frozen=True, eq=False, repr=False)
class Xor(BinaryStatement):
    priority: ClassVar[Priority] = Priority.DISJUNCTION
    _symbol: ClassVar[str] = 'xor'
    _fold = staticmethod(_xor)


@dataclass(frozen=True, eq=False, repr=False)
class Implies(BinaryStatement):
    priority: ClassVar[Priority] = Priority.IMPLICATION
    _symbol: ClassVar[str] = '->'
    _fold = staticmethod(_implies)


# ----------------------------------------------------------------------
# Equality
# ----------------------------------------------------------------------

def _equals_eval(a: Entity, b: Entity) -> Optional[Entity]:
    if a == b:
        return TRUE
    if isinstance(a, Number) and isinstance(b, Number):
        return Boolean(a.approx_equals(b))
    if isinstance(a, Boolean) and isinstance(b, Boolean):
        return FALSE
    return None


def _equals_simplify(a: Entity, b: Entity) -> Optional[Entity]:
    if a == b:
        return TRUE
    if isinstance(a, Number) and isinstance(b, Number) and a.is_exact and b.is_exact:
        return FALSE
    if isinstance(a, Boolean) and isinstance(b, Boolean):
        return FALSE
    return None


@dataclass(frozen=True, eq=False, repr=False)
class Equals(BinaryStatement):
    """Equality of two values; inexact numbers compare within the tolerance."""
    priority: ClassVar[Priority] = Priority.EQUALITY
    _symbol: ClassVar[str] = '='
    _fold = staticmethod(_equals_eval)

    def _inner_simplify(self) -> Entity:
        return self._reduce_simplify(_equals_simplify)


# ----------------------------------------------------------------------
# Ordering
# ----------------------------------------------------------------------

@dataclass(frozen=True, eq=False, repr=False)
class Comparison(BinaryStatement):
    """
    An ordering comparison.

    Defined only for real, non-NaN operands; comparing sets or complex
    numbers is undefined.
    """
    priority: ClassVar[Priority] = Priority.COMPARISON

    @staticmethod
    @abstractmethod
    def _operator(a: Any, b: Any) -> bool:
        ...

    def intrinsic_condition(self, left: Entity, right: Entity) -> Optional[bool]:
        for operand in (left, right):
            if operand.is_set_like or isinstance(operand, Boolean):
                return False
            if isinstance(operand, Number) and (not operand.is_real or operand.is_nan):
                return False
        if isinstance(left, Number) and isinstance(right, Number):
            return True
        return None

    def _own_simplicity(self) -> float:
        left = self.left
        return WEIGHT + (WEIGHT if isinstance(left, Number) and left.is_zero else 0.0)

    def _compared(self, a: Entity, b: Entity, exact_only: bool) -> Optional[Entity]:
        if not (isinstance(a, Real) and isinstance(b, Real)):
            return None
        if exact_only and not (a.is_exact and b.is_exact):
            return None
        return Boolean(bool(self._operator(a, b)))

    def _fold(self, left: Entity, right: Entity) -> Optional[Entity]:
        return self._compared(left, right, exact_only=False)

    def _inner_simplify(self) -> Entity:
        return self._reduce_simplify(lambda a, b: self._compared(a, b, exact_only=True))


@dataclass(frozen=True, eq=False, repr=False)
class Greater(Comparison):
    _symbol: ClassVar[str] = '>'
    _operator = staticmethod(operator.gt)


@dataclass(frozen=True, eq=False, repr=False)
class GreaterOrEqual(Comparison):
    _symbol: ClassVar[str] = '>='
    _operator = staticmethod(operator.ge)


@dataclass(frozen=True, eq=False, repr=False)
class Less(Comparison):
    _symbol: ClassVar[str] = '<'
    _operator = staticmethod(operator.lt)


@dataclass(frozen=True, eq=False, repr=False)
class LessOrEqual(Comparison):
    _symbol: ClassVar[str] = '<='
    _operator = staticmethod(operator.le)


# ----------------------------------------------------------------------
# Membership
# ----------------------------------------------------------------------

def _contains(element: Entity, collection: Entity) -> Optional[Entity]:
    if not collection.is_set_like:
        return None
    found = collection.try_contains(element)
    return None if found is None else Boolean(found)


@dataclass(frozen=True, eq=False, repr=False)
class In(BinaryStatement):
    """Membership of ``left`` in the set-like node ``right``."""
    priority: ClassVar[Priority] = Priority.CONTAINMENT
    _symbol: ClassVar[str] = 'in'
    _fold = staticmethod(_contains)

    def intrinsic_condition(self, element: Entity, collection: Entity) -> Optional[bool]:
        if isinstance(collection, (Number, Boolean)):
            return False
        return True if collection.is_set_like else None

