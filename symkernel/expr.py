# symkernel - Public Constructors
# Copyright (c) 2024 symkernel Contributors. All rights reserved.

"""
User-facing constructors for symkernel expressions.

Example:
    >>> x = var('x')
    >>> expr = x**2 + sin(pi / 6)
    >>> expr.substitute(x, 3).evaled()
    19/2
"""

from __future__ import annotations
from fractions import Fraction
from typing import Union

from . import arithmetic as ar
from . import logic as lg
from . import numeric as num
from . import omni
from . import trigonometry as tr
from .entity import Entity, EntityLike, Variable, to_entity
from .numeric import Number


def var(name: str) -> Variable:
    """Create a symbolic variable with the given name."""
    if not isinstance(name, str):
        raise TypeError(f"Variable name must be a string, got {type(name).__name__}")
    if not name:
        raise ValueError("Variable name cannot be empty")
    return Variable(name)


def const(value: Union[int, float, complex, Fraction, str]) -> Number:
    """Create a constant, downcast to the most specific number type."""
    return num.number(value)


# Constants
pi = Variable('pi')
e = Variable('e')
i = num.IMAGINARY_ONE
nan = num.NAN
oo = num.POSITIVE_INFINITY


# Function constructors

def sin(x: EntityLike) -> tr.Sin:
    """Sine function."""
    return tr.Sin(to_entity(x))


def cos(x: EntityLike) -> tr.Cos:
    """Cosine function."""
    return tr.Cos(to_entity(x))


def tan(x: EntityLike) -> tr.Tan:
    """Tangent function."""
    return tr.Tan(to_entity(x))


def cot(x: EntityLike) -> tr.Cotan:
    """Cotangent function."""
    return tr.Cotan(to_entity(x))


def sec(x: EntityLike) -> tr.Sec:
    return tr.Sec(to_entity(x))


def csc(x: EntityLike) -> tr.Cosec:
    return tr.Cosec(to_entity(x))


def arcsin(x: EntityLike) -> tr.Arcsin:
    """Inverse sine, principal branch."""
    return tr.Arcsin(to_entity(x))


def arccos(x: EntityLike) -> tr.Arccos:
    """Inverse cosine, principal branch."""
    return tr.Arccos(to_entity(x))


def arctan(x: EntityLike) -> tr.Arctan:
    """Inverse tangent, principal branch."""
    return tr.Arctan(to_entity(x))


def arccot(x: EntityLike) -> tr.Arccotan:
    return tr.Arccotan(to_entity(x))


def arcsec(x: EntityLike) -> tr.Arcsec:
    return tr.Arcsec(to_entity(x))


def arccsc(x: EntityLike) -> tr.Arccosec:
    return tr.Arccosec(to_entity(x))


def log(base: EntityLike, x: EntityLike) -> ar.Log:
    """Logarithm of ``x`` in ``base``."""
    return ar.Log(to_entity(base), to_entity(x))


def ln(x: EntityLike) -> ar.Log:
    """Natural logarithm."""
    return ar.Log(e, to_entity(x))


def sqrt(x: EntityLike) -> ar.Pow:
    """Principal square root, ``x ^ (1/2)``."""
    return ar.Pow(to_entity(x), num.HALF)


def exp(x: EntityLike) -> ar.Pow:
    """Exponential function, ``e ^ x``."""
    return ar.Pow(e, to_entity(x))


def sinh(x: EntityLike) -> Entity:
    """Hyperbolic sine, ``(e^x - e^-x) / 2``."""
    x = to_entity(x)
    return (exp(x) - exp(-x)) / 2


def cosh(x: EntityLike) -> Entity:
    """Hyperbolic cosine, ``(e^x + e^-x) / 2``."""
    x = to_entity(x)
    return (exp(x) + exp(-x)) / 2


def tanh(x: EntityLike) -> Entity:
    """Hyperbolic tangent."""
    x = to_entity(x)
    return (exp(x) - exp(-x)) / (exp(x) + exp(-x))


def abs_(x: EntityLike) -> ar.Abs:
    """Absolute value."""
    return ar.Abs(to_entity(x))


# Alias for abs to avoid shadowing builtin
abs = abs_


def signum(x: EntityLike) -> ar.Signum:
    return ar.Signum(to_entity(x))


def factorial(x: EntityLike) -> ar.Factorial:
    return ar.Factorial(to_entity(x))


def phi(x: EntityLike) -> ar.Phi:
    """Euler's totient."""
    return ar.Phi(to_entity(x))


# Statements

def equals(a: EntityLike, b: EntityLike) -> lg.Equals:
    return lg.Equals(to_entity(a), to_entity(b))


def greater(a: EntityLike, b: EntityLike) -> lg.Greater:
    return lg.Greater(to_entity(a), to_entity(b))


def greater_or_equal(a: EntityLike, b: EntityLike) -> lg.GreaterOrEqual:
    return lg.GreaterOrEqual(to_entity(a), to_entity(b))


def less(a: EntityLike, b: EntityLike) -> lg.Less:
    return lg.Less(to_entity(a), to_entity(b))


def less_or_equal(a: EntityLike, b: EntityLike) -> lg.LessOrEqual:
    return lg.LessOrEqual(to_entity(a), to_entity(b))


def contains(element: EntityLike, collection: Entity) -> lg.In:
    """Membership of ``element`` in a set-like node."""
    return lg.In(to_entity(element), collection)


# Binders

def lambda_(parameter: Union[str, Variable], body: EntityLike) -> omni.Lambda:
    """Anonymous function ``lambda parameter: body``."""
    return omni.Lambda(parameter, to_entity(body))


def apply(function: EntityLike, *arguments: EntityLike) -> omni.Application:
    """Apply a function (a Lambda or a named Variable) to arguments."""
    return omni.Application(to_entity(function), tuple(to_entity(a) for a in arguments))


def provided(expression: EntityLike, predicate: EntityLike) -> omni.Provided:
    """``expression`` where ``predicate`` holds, undefined elsewhere."""
    return omni.Provided(to_entity(expression), to_entity(predicate))


def piecewise(*cases) -> omni.Piecewise:
    """
    The first of ``cases`` whose predicate holds.

    Each case is an ``(expression, predicate)`` pair or a ``provided`` node:

        >>> piecewise((x, greater(x, 0)), (-x, TRUE))
    """
    return omni.Piecewise(cases)
