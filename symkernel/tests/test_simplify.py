# symkernel - Simplification Tests
# Copyright (c) 2024 symkernel Contributors. All rights reserved.

"""
Tests for inner_simplified(), the rewrite passes and simplify().
"""

import time

import pytest

from symkernel import var, sin, cos, sqrt, log, pi, simplify, expand


class TestSimplification:
    """End-to-end behaviour of simplify()."""

    def test_multiplication_by_zero(self):
        """Test x * 3 * 0 = 0."""
        from symkernel.numeric import Integer

        x = var('x')
        result = simplify(x * 3 * 0)
        assert result == Integer(0)
        assert str(result) == '0'

    def test_numeric_coefficients_fold(self):
        """Test x * 3 * 2 = 6 * x."""
        from symkernel.arithmetic import Mul
        from symkernel.numeric import Integer

        x = var('x')
        result = simplify(x * 3 * 2)
        assert result == Mul(Integer(6), x)
        assert str(result) == '6 * x'

    def test_difference_of_squares(self):
        """Test (x - y)(x + y) = x^2 - y^2."""
        from symkernel.arithmetic import Minus, Pow
        from symkernel.numeric import Integer

        x, y = var('x'), var('y')
        result = simplify((x - y) * (x + y))
        assert result == Minus(Pow(x, Integer(2)), Pow(y, Integer(2)))
        assert str(result) == 'x ^ 2 - y ^ 2'

    def test_identities(self):
        """Test x + 0, x * 1, x^1, x^0 and log(x, 1)."""
        from symkernel.numeric import Integer

        x = var('x')
        assert simplify(x + 0) == x
        assert simplify(x * 1) == x
        assert simplify(x ** 1) == x
        assert simplify(x ** 0) == Integer(1)
        assert simplify(log(x, 1)) == Integer(0)

    def test_like_terms(self):
        """Test like terms are collected."""
        from symkernel.arithmetic import Mul
        from symkernel.numeric import Integer

        x = var('x')
        assert simplify(x - x) == Integer(0)
        assert simplify(2 * x + 3 * x) == Mul(Integer(5), x)

    def test_exact_values_fold(self):
        """Test exact subtrees fold."""
        from symkernel.numeric import Integer

        assert simplify(sqrt(4)) == Integer(2)
        assert simplify(sqrt(2) * sqrt(2)) == Integer(2)

    def test_inexact_values_are_kept(self):
        """Test sqrt(2) stays symbolic."""
        assert simplify(sqrt(2)) == sqrt(2)

    def test_exact_trigonometric_value(self):
        """Test sin(pi/3) = sqrt(3) / 2."""
        from symkernel.arithmetic import Div, Pow
        from symkernel.numeric import HALF, Integer

        result = simplify(sin(pi / 3))
        assert result == Div(Pow(Integer(3), HALF), Integer(2))
        assert str(result) == 'sqrt(3) / 2'

    def test_pythagorean_identity(self):
        """Test sin^2 + cos^2 = 1."""
        from symkernel.numeric import Integer

        x = var('x')
        assert simplify(sin(x) ** 2 + cos(x) ** 2) == Integer(1)

    def test_result_is_never_more_complex(self):
        """Test simplify() never scores worse than one pass."""
        x, y = var('x'), var('y')
        for expr in [(x + 1) * (x - 1), x / (y / 2), sin(x) / cos(x), (x + y) ** 2]:
            assert simplify(expr).simplicity <= expr.inner_simplified().simplicity

    def test_method_form(self):
        """Test the simplify() method."""
        from symkernel.numeric import Integer

        x = var('x')
        assert (x - x).simplify() == Integer(0)


class TestUndefinedValuesSurvive:
    """Simplification never turns an undefined expression into a defined one."""

    def test_self_division_is_not_cancelled(self):
        """Test x/x is kept."""
        x = var('x')
        assert simplify(x / x) == x / x

    def test_zero_over_variable_is_kept(self):
        """Test 0/x is kept."""
        x = var('x')
        assert simplify(0 / x) == 0 / x

    def test_division_by_zero_stays_visible(self):
        """Test 1/0 is kept and evaluates to NaN."""
        from symkernel.arithmetic import Div

        result = simplify(Div(1, 0))
        assert result == Div(1, 0)
        assert result.evaled().is_nan

    def test_undefined_parts_poison_the_whole(self):
        """Test 1 + 1/0 = NaN."""
        from symkernel.arithmetic import Div

        assert simplify(1 + Div(1, 0)).is_nan

    def test_self_division_of_nonzero_constant(self):
        """Test pi/pi = 1."""
        from symkernel.numeric import Integer

        assert simplify(pi / pi) == Integer(1)


class TestInnerSimplified:

    def test_single_pass(self):
        """Test one bottom-up pass."""
        from symkernel.numeric import Integer

        x = var('x')
        assert (x * 3 * 0).inner_simplified() == Integer(0)
        assert (x + 0).inner_simplified() == x

    def test_inverse_functions_cancel(self):
        """Test cos(arccos(x)) = x."""
        from symkernel import arccos

        x = var('x')
        assert cos(arccos(x)).inner_simplified() == x

    def test_exact_table_values(self):
        """Test table values of sin and cos."""
        from symkernel.numeric import HALF, Integer

        assert sin(pi / 6).inner_simplified() == HALF
        assert cos(pi).inner_simplified() == Integer(-1)
        assert sin(2 * pi).inner_simplified() == Integer(0)

    def test_logarithm_identities(self):
        """Only the identities that hold for every base are applied."""
        from symkernel.numeric import Integer

        x = var('x')
        assert log(x, 1).inner_simplified() == Integer(0)
        assert log(x, x).inner_simplified() == log(x, x)
        assert log(x, 0).inner_simplified() == log(x, 0)
        assert log(3, 3).inner_simplified() == Integer(1)


class TestExpand:

    def test_square_of_sum(self):
        """Test (x + 1)^2 expands."""
        x = var('x')
        assert str(expand((x + 1) ** 2)) == 'x ^ 2 + 2 * x + 1'

    def test_cancellation(self):
        """Test expansion cancels terms."""
        x, y = var('x'), var('y')
        assert str(expand((x + y) * (x - y))) == 'x ^ 2 - y ^ 2'

    def test_non_polynomial_unchanged(self):
        """Test non-polynomials are left alone."""
        x = var('x')
        expr = sin(x) / x
        assert expand(expr) == expr


class TestTermination:
    """The pass count bounds the work, whatever the input."""

    @pytest.mark.parametrize("level", [1, 5, 50])
    def test_reciprocal_sum(self, level):
        """Test 1 + 1/x finishes quickly at every level."""
        x = var('x')
        start = time.perf_counter()
        simplify(1 + 1 / x, level)
        assert time.perf_counter() - start < 5.0

    @pytest.mark.parametrize("level", [1, 5, 50])
    def test_power_quotient(self, level):
        """Test (1 + 1/x)^2 / (1 + 1/x) finishes quickly at every level."""
        x = var('x')
        base = 1 + 1 / x
        start = time.perf_counter()
        simplify(base ** 2 / base, level)
        assert time.perf_counter() - start < 5.0

    def test_zero_level_only_simplifies_inner_nodes(self):
        """Test level 0 runs only inner_simplified()."""
        from symkernel.arithmetic import Mul
        from symkernel.numeric import Integer

        x = var('x')
        assert simplify(x * 3 * 2, 0) == Mul(Mul(x, Integer(3)), Integer(2))
