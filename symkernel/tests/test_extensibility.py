# symkernel - Extensibility Tests
# Copyright (c) 2024 symkernel Contributors. All rights reserved.

"""
A node kind defined outside the package takes part in evaluation,
substitution, membership and definedness checks without changes to the
kernel.
"""

from dataclasses import dataclass
from typing import ClassVar, Optional

from symkernel import var, contains, greater, TRUE, FALSE
from symkernel.arithmetic import Div
from symkernel.entity import Entity
from symkernel.numeric import Integer, Rational, Real


@dataclass(frozen=True, eq=False, repr=False)
class Interval(Entity):
    """Closed real interval [low, high]."""
    low: Entity
    high: Entity
    is_set_like: ClassVar[bool] = True

    def _init_direct_children(self):
        return (self.low, self.high)

    def _rebuild(self, children):
        return Interval(*children)

    def _inner_eval(self) -> Entity:
        return self._reduce_eval(lambda low, high: None)

    def _inner_simplify(self) -> Entity:
        return self._reduce_simplify(lambda low, high: None)

    def try_contains(self, element: Entity) -> Optional[bool]:
        bounds = (element, self.low, self.high)
        if not all(isinstance(b, Real) and not b.is_nan for b in bounds):
            return None
        return self.low <= element <= self.high

    def _render(self) -> str:
        return f"[{self.low}, {self.high}]"


class TestCustomKind:

    def test_registered(self):
        """Test a new kind is registered."""
        from symkernel.entity import kinds

        assert kinds()['Interval'] is Interval

    def test_generic_operations(self):
        """Test substitution, variables and printing on a new kind."""
        x = var('x')
        interval = Interval(x, 2)
        assert interval.substitute(x, 0) == Interval(Integer(0), Integer(2))
        assert interval.vars == {x}
        assert str(interval) == '[x, 2]'
        half = Rational(1, 2)
        assert interval.substitute(x, half).evaled() == Interval(half, 2)


class TestMembership:

    def test_decidable_membership(self):
        """Test membership of numbers in an interval."""
        assert contains(1, Interval(0, 2)).evaled() == TRUE
        assert contains(5, Interval(0, 2)).evaled() == FALSE

    def test_undecidable_membership_is_kept(self):
        """Test symbolic membership stays symbolic."""
        x = var('x')
        expr = contains(x, Interval(0, 2))
        assert expr.evaled() == expr

    def test_membership_in_a_number_is_undefined(self):
        """Test membership in a number is undefined."""
        assert contains(1, Integer(2)).evaled().is_nan


class TestDefinedness:

    def test_division_by_set_without_zero(self):
        """Test dividing by a set without zero is defined."""
        expr = Div(1, Interval(1, 2))
        assert not expr.evaled().is_nan

    def test_division_by_set_with_zero(self):
        """Test dividing by a set holding zero is undefined."""
        assert Div(1, Interval(-1, 1)).evaled().is_nan

    def test_sets_cannot_be_ordered(self):
        """Test comparing a set is undefined."""
        assert greater(Interval(0, 1), 0).evaled().is_nan
