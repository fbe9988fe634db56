# symkernel - Rational Number Utilities
# Copyright (c) 2024 symkernel Contributors. All rights reserved.

"""
Utilities for recovering exact rationals.

Two directions are covered:

* Python floats typed by a user are converted to the fraction they were
  meant to denote, avoiding the binary representation issues of
  ``Fraction(float)``:

    >>> from fractions import Fraction
    >>> Fraction(0.1)
    Fraction(3602879701896397, 36028797018963968)  # Binary representation!
    >>> to_fraction(0.1)
    Fraction(1, 10)

* Arbitrary precision Reals produced by computation are searched for a short
  continued fraction, which is how ``sin(pi/6)`` becomes exactly ``1/2``.
"""

from fractions import Fraction
from typing import Optional, Union

import mpmath


# Type for things that can be converted to Fraction
Numeric = Union[int, float, Fraction]


def to_fraction(x: Numeric, max_denom: int = 10**12) -> Fraction:
    """
    Convert a numeric value to Fraction with human-friendly results.

    For floats, this function tries to detect "nice" decimal numbers
    (like 0.1, 0.25, 3.14159) and convert them to exact fractions.

    Args:
        x: A finite number (int, float, or Fraction).
        max_denom: Maximum denominator for fallback limit_denominator.

    Returns:
        A Fraction representing the number.

    Examples:
        >>> to_fraction(0.25)
        Fraction(1, 4)
        >>> to_fraction(3.14159)
        Fraction(314159, 100000)
    """
    if isinstance(x, Fraction):
        return x
    elif isinstance(x, int):
        return Fraction(x)
    else:
        return _float_to_nice_fraction(x, max_denom)


def _float_to_nice_fraction(x: float, max_denom: int = 10**12) -> Fraction:
    """
    Convert a float to a human-friendly Fraction.

    Strategy:
    1. Check if it's an exact integer
    2. Try parsing from string representation (catches 0.1 -> "1/10")
    3. Fall back to limit_denominator
    """
    if x == int(x):
        return Fraction(int(x))

    s = repr(x)

    # Scientific notation (1e-10) has no short decimal expansion to parse
    if 'e' in s or 'E' in s:
        return Fraction(x).limit_denominator(max_denom)

    result = Fraction(s)
    if result.denominator <= max_denom:
        return result
    return Fraction(x).limit_denominator(max_denom)


def find_rational(
    value: mpmath.mpf,
    tolerance: mpmath.mpf,
    max_part: int,
    depth: int,
) -> Optional[Fraction]:
    """
    Recover a short rational from a finite arbitrary precision Real.

    Expands ``value`` as a continued fraction. The expansion stops
    successfully as soon as a remainder falls below ``tolerance``, and fails
    when a partial quotient exceeds ``max_part`` or when ``depth`` steps did
    not terminate it.

    Args:
        value: Finite mpmath value.
        tolerance: Remainders below this are treated as zero.
        max_part: Largest partial quotient accepted.
        depth: Maximum number of continued fraction steps.

    Returns:
        The recovered Fraction, or None if the value does not look rational.

    Example:
        >>> find_rational(mpmath.mpf(1) / 3, mpmath.mpf('1e-16'), 10**8, 15)
        Fraction(1, 3)
    """
    quotients = []
    for _ in range(depth + 1):
        whole = mpmath.floor(value)
        if abs(whole) > max_part:
            return None
        quotients.append(int(whole))
        rest = value - whole
        if rest < tolerance:
            break
        value = 1 / rest
    else:
        return None

    result = Fraction(quotients[-1])
    for q in reversed(quotients[:-1]):
        result = q + 1 / result
    return result


def integer_root(n: int, k: int) -> Optional[int]:
    """
    Exact k-th root of a non-negative integer.

    Returns:
        ``r`` with ``r ** k == n``, or None if ``n`` is not a perfect power.

    Examples:
        >>> integer_root(27, 3)
        3
        >>> integer_root(28, 3) is None
        True
    """
    if n < 0 or k < 1:
        return None
    if n < 2:
        return n
    # Newton iteration on integers converges to the floor of the root
    x = 1 << ((n.bit_length() + k - 1) // k)
    while True:
        y = ((k - 1) * x + n // x ** (k - 1)) // k
        if y >= x:
            break
        x = y
    return x if x ** k == n else None


def integer_log(x: Fraction, base: Fraction) -> Optional[int]:
    """
    Exact logarithm of a positive rational in a positive rational base.

    Returns:
        ``k`` with ``base ** k == x``, or None if no such integer exists.

    Examples:
        >>> integer_log(Fraction(8), Fraction(2))
        3
        >>> integer_log(Fraction(1, 9), Fraction(3))
        -2
    """
    if x <= 0 or base <= 0 or base == 1:
        return None
    if x == 1:
        return 0
    # Normalise so that both the base and the target are greater than one
    sign = 1
    if base < 1:
        base = 1 / base
        sign = -sign
    if x < 1:
        x = 1 / x
        sign = -sign
    k = 0
    power = Fraction(1)
    while power < x:
        power *= base
        k += 1
    return sign * k if power == x else None
