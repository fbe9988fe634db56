# symkernel - Numeric Tower Tests
# Copyright (c) 2024 symkernel Contributors. All rights reserved.

"""
Tests for the numeric tower: downcasting, exactness and the absorbing
behaviour of NaN and the infinities.
"""

import pytest
from fractions import Fraction


class TestDowncasting:
    """Constructors return the most specific type."""

    def test_rational_with_unit_denominator(self):
        """Test Rational(a, 1) is an Integer."""
        from symkernel.numeric import Integer, Rational

        assert isinstance(Rational(6, 3), Integer)
        assert Rational(6, 3) == 2
        assert isinstance(Rational(-7, 1), Integer)

    def test_rational_in_lowest_terms(self):
        """Test rationals are reduced."""
        from symkernel.numeric import Rational

        r = Rational(4, 6)
        assert r.numerator == 2
        assert r.denominator == 3

    def test_complex_with_zero_imaginary(self):
        """Test Complex(r, 0) is real."""
        from symkernel.numeric import Complex, Integer, Rational

        assert type(Complex(5, 0)) is Integer
        assert type(Complex(2.5, 0)) is Rational
        assert type(Complex(1, 2)) is Complex

    def test_python_complex(self):
        """Test Python complex input."""
        from symkernel.numeric import Integer, number

        assert number(2 + 0j) == Integer(2)
        z = number(1 + 2j)
        assert z.real == 1
        assert z.imaginary == 2

    def test_float_becomes_nice_fraction(self):
        """Test floats become short fractions."""
        from symkernel.numeric import Rational, number

        assert number(0.5) == Rational(1, 2)
        assert number(0.1 + 0.2) == Rational(3, 10)

    def test_string_input(self):
        """Test decimal strings."""
        from symkernel.numeric import Rational, number

        assert number('1/3') == Rational(1, 3)
        assert number('0.75') == Rational(3, 4)

    def test_division_of_integers(self):
        """Test 6/3 = 2 as an Integer."""
        from symkernel.numeric import Integer

        result = Integer(6) / Integer(3)
        assert isinstance(result, Integer)
        assert result == 2

    def test_complex_product_lands_on_integer(self):
        """Test (1+2i)(1-2i) = 5."""
        from symkernel.numeric import Complex, Integer

        result = Complex(1, 2) * Complex(1, -2)
        assert type(result) is Integer
        assert result == 5

    def test_imaginary_unit_squared(self):
        """Test i^2 = -1."""
        from symkernel.numeric import IMAGINARY_ONE, Integer

        assert IMAGINARY_ONE ** 2 == Integer(-1)

    def test_computed_value_recovers_fraction(self):
        """sin(pi/6) is computed numerically and recognised as 1/2."""
        from symkernel.numeric import Integer, Rational, constant_value, divide, sin

        value = sin(divide(constant_value('pi'), Integer(6)))
        assert value == Rational(1, 2)
        assert value.is_exact


class TestInvalidNumbers:

    def test_zero_denominator(self):
        """Test a zero denominator is rejected."""
        from symkernel.exceptions import InvalidNumberError
        from symkernel.numeric import Rational

        with pytest.raises(InvalidNumberError):
            Rational(1, 0)

    def test_non_integer_components(self):
        """Test non-integral rational parts are rejected."""
        from symkernel.exceptions import InvalidNumberError
        from symkernel.numeric import Integer, Rational

        with pytest.raises(InvalidNumberError):
            Rational(1.5, 2)
        with pytest.raises(InvalidNumberError):
            Integer(True)

    def test_unsupported_values(self):
        """Test bools and containers are rejected."""
        from symkernel.exceptions import UnsupportedOperandError
        from symkernel.numeric import number

        with pytest.raises(UnsupportedOperandError):
            number(True)
        with pytest.raises(UnsupportedOperandError):
            number([1, 2])

    def test_numbers_are_immutable(self):
        """Test numbers cannot be mutated."""
        from symkernel.numeric import Integer

        with pytest.raises(AttributeError):
            Integer(1)._value = 2


class TestSpecialValues:
    """NaN absorbs everything; infinities follow extended arithmetic."""

    def test_nan_absorbs_arithmetic(self):
        """Test NaN op x = NaN."""
        from symkernel.numeric import Integer, Real

        nan = Real.nan
        assert (nan + 1).is_nan
        assert (1 + nan).is_nan
        assert (nan - nan).is_nan
        assert (Integer(0) * nan).is_nan
        assert (nan / 0).is_nan
        assert (nan ** 0).is_nan
        assert (Integer(1) ** nan).is_nan

    def test_infinity_arithmetic(self):
        """Test arithmetic with infinities."""
        from symkernel.numeric import Integer, Real

        inf = Real.positive_infinity
        assert inf + 1 == inf
        assert (inf - inf).is_nan
        assert (inf * Integer(0)).is_nan
        assert -inf == Real.negative_infinity

    def test_division_by_zero(self):
        """Test finite / 0 and 0 / 0."""
        from symkernel.numeric import Integer, Rational, Real

        assert Integer(1) / Integer(0) == Real.positive_infinity
        assert Integer(-1) / Integer(0) == Real.negative_infinity
        assert Rational(1, 2) / Integer(0) == Real.positive_infinity
        assert (Integer(0) / Integer(0)).is_nan

    def test_complex_division_by_zero(self):
        """Test complex / 0 gives signed infinities."""
        from symkernel.numeric import Complex, Integer, Real

        result = Complex(1, -2) / Integer(0)
        assert result.real == Real.positive_infinity
        assert result.imaginary == Real.negative_infinity

    def test_nan_comparisons_are_true(self):
        """Test ordered comparisons with NaN are true."""
        from symkernel.numeric import Real

        assert Real.nan > 1
        assert Real.nan < 1
        assert 1 <= Real.nan

    def test_complex_ordering_raises(self):
        """Test complex numbers cannot be ordered."""
        from symkernel.numeric import Complex

        with pytest.raises(TypeError):
            Complex(1, 2) < 1

    def test_special_values_are_exact(self):
        """Test NaN and infinities are exact."""
        from symkernel.numeric import Real

        assert Real.nan.is_exact
        assert Real.positive_infinity.is_exact
        assert not Real.nan.is_finite


class TestExactness:

    def test_exact_roots(self):
        """Test roots of perfect powers."""
        from symkernel.numeric import HALF, Integer, Rational, power, sqrt

        assert sqrt(Integer(4)) == Integer(2)
        assert power(Rational(4, 9), HALF) == Rational(2, 3)
        assert power(Integer(-8), Rational(1, 3)) == Integer(-2)

    def test_irrational_root_is_inexact(self):
        """Test sqrt(2) is inexact."""
        from symkernel.numeric import Integer, sqrt

        root = sqrt(Integer(2))
        assert not root.is_exact
        assert root.approx_equals(1.41421356)
        assert not root.approx_equals(1.5)

    def test_negative_square_root(self):
        """Test sqrt(-4) = 2i."""
        from symkernel.numeric import Complex, Integer, sqrt

        assert sqrt(Integer(-4)) == Complex(0, 2)

    def test_zero_to_the_zero(self):
        """Test 0^0 = 1."""
        from symkernel.numeric import ONE, ZERO, power

        assert power(ZERO, ZERO) == ONE

    def test_exact_logarithm(self):
        """Test logs of exact powers."""
        from symkernel.numeric import Integer, Rational, log

        assert log(Integer(2), Integer(8)) == Integer(3)
        assert log(Integer(3), Rational(1, 9)) == Integer(-2)

    def test_modulus(self):
        """Test abs() of complex numbers."""
        from symkernel.numeric import Complex, Integer, abs_

        assert abs_(Complex(3, 4)) == Integer(5)
        assert abs_(Integer(-3)) == Integer(3)

    def test_factorial(self):
        """Test factorial on integers and fractions."""
        from symkernel.numeric import Integer, Rational, factorial

        assert factorial(Integer(5)) == Integer(120)
        assert factorial(Integer(-1)).is_nan
        # gamma(3/2) = sqrt(pi) / 2
        assert factorial(Rational(1, 2)).approx_equals(0.886226925452758)


class TestEqualityAndHashing:

    def test_equal_values_hash_equal(self):
        """Test equal numbers hash equal."""
        from symkernel.numeric import Integer, Rational

        assert hash(Integer(2)) == hash(Rational(4, 2))
        assert len({Integer(1), Integer(1), Rational(2, 2)}) == 1

    def test_compare_with_python_numbers(self):
        """Test comparison against Python numbers."""
        from symkernel.numeric import Rational

        assert Rational(1, 2) == Fraction(1, 2)
        assert Rational(1, 2) == 0.5
        assert Rational(1, 2) != True  # noqa: E712


class TestRendering:

    def test_rendering(self):
        """Test number rendering."""
        from symkernel.numeric import Complex, Integer, Rational, Real

        assert str(Rational(1, 3)) == '1/3'
        assert str(Integer(-4)) == '-4'
        assert str(Complex(1, 2)) == '1 + 2i'
        assert str(Complex(1, -1)) == '1 - i'
        assert str(Complex(0, 1)) == 'i'
        assert str(Real.nan) == 'NaN'
        assert str(Real.positive_infinity) == '+oo'
        assert str(Real.negative_infinity) == '-oo'
