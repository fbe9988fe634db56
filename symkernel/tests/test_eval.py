# symkernel - Evaluation Tests
# Copyright (c) 2024 symkernel Contributors. All rights reserved.

"""
Tests for Entity.evaled(): numeric reduction, definedness and codomains.
"""

import math

import pytest

from symkernel import (
    var, const, sin, cos, tan, log, ln, sqrt, exp, arcsin, factorial, signum, phi,
    pi, e, i, nan, provided, greater,
)
from symkernel import abs as abs_


class TestNumericEvaluation:

    def test_mixed_constant_expression(self):
        """Exact, irrational and constant parts combine to one value."""
        from symkernel.numeric import Integer

        total = Integer(1) + Integer(2) + log(2, 3) + sqrt(4) - Integer(4) ** 7 + e * pi
        result = total.evaled()
        assert abs(float(result) - (-16368.875303276605)) < 1e-8

    def test_substitute_then_evaluate(self):
        """Test sin(pi/3) after substitution."""
        x = var('x')
        result = sin(x).substitute(x, pi / 3).evaled()
        assert abs(float(result) - 0.8660254037844386) < 1e-8

    def test_exact_results_stay_exact(self):
        """Test exact inputs give exact results."""
        from symkernel.numeric import Integer, Rational

        x = var('x')
        assert (x ** 2 + 1).substitute(x, 3).evaled() == Integer(10)
        assert (x / 4).substitute(x, 2).evaled() == Rational(1, 2)

    def test_partial_evaluation(self):
        """Test constant parts fold around variables."""
        x = var('x')
        result = (x + const(2) * 3).evaled()
        assert result == x + 6

    def test_constants(self):
        """Test pi and e evaluate."""
        from symkernel.numeric import Integer

        assert ln(e).evaled() == Integer(1)
        assert exp(0).evaled() == Integer(1)
        assert abs(float(pi.evaled()) - math.pi) < 1e-15

    def test_trigonometric_values(self):
        """Test trigonometric values at table angles."""
        from symkernel.numeric import Integer, Rational

        assert sin(pi / 6).evaled() == Rational(1, 2)
        assert cos(pi).evaled() == Integer(-1)
        assert tan(pi / 4).evaled() == Integer(1)

    def test_abs_signum_factorial(self):
        """Test abs, signum and factorial."""
        from symkernel.numeric import Complex, Integer

        assert abs_(-3).evaled() == Integer(3)
        assert abs_(Complex(3, 4)).evaled() == Integer(5)
        assert signum(-2).evaled() == Integer(-1)
        assert factorial(5).evaled() == Integer(120)

    def test_eval_numerical(self):
        """Test eval_numerical() on constant and symbolic trees."""
        from symkernel.exceptions import NotConstantError
        from symkernel.numeric import Integer

        x = var('x')
        assert (x + 1).substitute(x, 1).eval_numerical() == Integer(2)
        with pytest.raises(NotConstantError):
            (x + 1).eval_numerical()

    def test_eval_boolean(self):
        """Test eval_boolean() on constant and symbolic trees."""
        from symkernel.entity import TRUE
        from symkernel.exceptions import NotConstantError

        x = var('x')
        assert greater(2, 1).eval_boolean() == TRUE
        with pytest.raises(NotConstantError):
            greater(x, 1).eval_boolean()


class TestUndefinedValues:
    """Undefined results become NaN instead of raising."""

    def test_division_by_zero_node(self):
        """Test division by zero is undefined."""
        from symkernel.arithmetic import Div

        x = var('x')
        assert Div(1, 0).evaled().is_nan
        assert Div(x, 0).evaled().is_nan
        assert (1 / (x - x)).substitute(x, 3).evaled().is_nan

    def test_symbolic_quotients_are_kept(self):
        """Test x/x and 0/x are not folded."""
        from symkernel.arithmetic import Div

        x = var('x')
        assert Div(x, x).evaled() == Div(x, x)
        assert Div(0, x).evaled() == Div(0, x)

    def test_zero_to_negative_power(self):
        """Test 0 to a negative power is undefined."""
        from symkernel.arithmetic import Pow

        assert Pow(0, -1).evaled().is_nan
        assert Pow(0, 2).evaled() == 0

    def test_nan_propagates_through_nodes(self):
        """Test NaN makes its parents NaN."""
        x = var('x')
        assert (x + nan).evaled().is_nan
        assert sin(nan).evaled().is_nan

    def test_factorial_of_negative_integer(self):
        """Test factorial of a negative integer is undefined."""
        assert factorial(-1).evaled().is_nan

    def test_comparisons_need_real_operands(self):
        """Test comparisons with non-real operands are undefined."""
        assert greater(nan, 1).evaled().is_nan
        assert greater(i, 0).evaled().is_nan


class TestCodomain:

    def test_complex_results_by_default(self):
        """Test complex values are allowed by default."""
        from symkernel.numeric import Complex, Real

        result = arcsin(2).evaled()
        assert isinstance(result, Complex)
        assert not isinstance(result, Real)

    def test_real_codomain_rejects_complex(self):
        """Test a real codomain turns complex results into NaN."""
        from symkernel.config import Config, using
        from symkernel.domain import Domain
        from symkernel.numeric import Complex, Integer

        with using(Config(codomain=Domain.REAL)):
            assert arcsin(2).evaled().is_nan
            assert sqrt(-4).evaled().is_nan
            assert sqrt(4).evaled() == Integer(2)
        assert sqrt(-4).evaled() == Complex(0, 2)


class TestProvided:

    def test_predicate_selects_value(self):
        """Test the predicate decides the value."""
        from symkernel.numeric import Integer

        x = var('x')
        expr = provided(x + 1, greater(x, 0))
        assert expr.substitute(x, 2).evaled() == Integer(3)
        assert expr.substitute(x, -2).evaled().is_nan

    def test_operations_keep_the_predicate(self):
        """Test operations move inside a condition."""
        from symkernel.arithmetic import Sum
        from symkernel.numeric import Integer
        from symkernel.omni import Provided

        x = var('x')
        condition = greater(x, 0)
        result = (provided(x, condition) + 1).evaled()
        assert result == Provided(Sum(x, Integer(1)), condition)

    def test_nested_predicates_merge(self):
        """Test nested conditions join with and."""
        from symkernel.logic import And, Less
        from symkernel.omni import Provided

        x = var('x')
        p, q = greater(x, 0), Less(x, 5)
        result = provided(provided(x, p), q).evaled()
        assert result == Provided(x, And(p, q))


class TestTotient:

    def test_integer_values(self):
        """Euler's totient of integers, 0 below 1."""
        from symkernel.numeric import Integer

        assert phi(36).evaled() == Integer(12)
        assert phi(7).evaled() == Integer(6)
        assert phi(1).evaled() == Integer(1)
        assert phi(0).evaled() == Integer(0)
        assert phi(-5).evaled() == Integer(0)

    def test_non_integers_are_undefined(self):
        """Only integers have a totient."""
        from symkernel.numeric import Rational

        assert phi(Rational(1, 2)).evaled().is_nan
        assert phi(pi).evaled().is_nan

    def test_symbolic_argument(self):
        """A symbolic totient waits for its argument."""
        from symkernel.numeric import Integer

        x = var('x')
        assert phi(x).evaled() == phi(x)
        assert phi(x).substitute(x, 10).evaled() == Integer(4)
        assert str(phi(x)) == 'phi(x)'

    def test_folded_by_simplification(self):
        """Integer totients are exact values."""
        from symkernel import apply
        from symkernel.numeric import Integer

        assert phi(12).inner_simplified() == Integer(4)
        assert apply(var('phi'), 9).evaled() == Integer(6)

    def test_large_prime_factor_is_kept(self):
        """Arguments with a prime factor past the search bound stay symbolic."""
        expr = phi(1000003 ** 2)
        assert expr.evaled() == expr
