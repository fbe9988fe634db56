# symkernel
# Copyright (c) 2024 symkernel Contributors. All rights reserved.

"""
symkernel - a computer-algebra kernel.

Expressions are immutable trees built from Python operators and the
constructors below. The kernel evaluates them to exact or arbitrary
precision values and simplifies them with a bounded set of rewrite passes.

Example:
    >>> import symkernel as sk
    >>> x = sk.var('x')
    >>> sk.simplify((x - 1) * (x + 1))
    x ^ 2 - 1
    >>> sk.sin(x).substitute(x, sk.pi / 3).evaled()
    0.866025403784439

Key Features:
    - Integer, Rational, Real and Complex numbers with automatic downcasting
    - Undefined values fold to NaN instead of raising
    - Capture-avoiding substitution under lambdas
    - Simplification that always terminates
"""

__version__ = "0.1.0"

# Core node model
from .entity import (
    Entity,
    Priority,
    Variable,
    Boolean,
    TRUE,
    FALSE,
    kinds,
    to_entity,
)

# Numeric tower
from .numeric import (
    Number,
    Complex,
    Real,
    Rational,
    Integer,
    number,
)

# Node kinds
from .arithmetic import Sum, Minus, Mul, Div, Pow, Log, Factorial, Phi, Signum, Abs
from .trigonometry import (
    Sin,
    Cos,
    Tan,
    Cotan,
    Sec,
    Cosec,
    Arcsin,
    Arccos,
    Arctan,
    Arccotan,
    Arcsec,
    Arccosec,
)
from .logic import (
    Not,
    And,
    Or,
    Xor,
    Implies,
    Equals,
    Greater,
    GreaterOrEqual,
    Less,
    LessOrEqual,
    In,
)
from .omni import Lambda, Application, Provided, Piecewise

# Expression constructors
from .expr import (
    var,
    const,
    pi,
    e,
    i,
    nan,
    oo,
    sin,
    cos,
    tan,
    cot,
    sec,
    csc,
    arcsin,
    arccos,
    arctan,
    arccot,
    arcsec,
    arccsc,
    log,
    ln,
    sqrt,
    exp,
    sinh,
    cosh,
    tanh,
    abs,
    signum,
    factorial,
    phi,
    equals,
    greater,
    greater_or_equal,
    less,
    less_or_equal,
    contains,
    lambda_,
    apply,
    provided,
    piecewise,
)

# Domains
from .domain import Domain, fits_domain

# Rational utilities
from .rational import to_fraction

# Configuration
from .config import Config, get_config, set_config, using

# Simplification utilities
from .simplify import simplify, expand

# Exceptions
from .exceptions import (
    SymKernelError,
    InvalidNumberError,
    NotConstantError,
    UnsupportedOperandError,
    TreeTooDeepError,
)

__all__ = [
    # Version
    "__version__",
    # Node model
    "Entity",
    "Priority",
    "Variable",
    "Boolean",
    "TRUE",
    "FALSE",
    "kinds",
    "to_entity",
    # Numbers
    "Number",
    "Complex",
    "Real",
    "Rational",
    "Integer",
    "number",
    # Arithmetic kinds
    "Sum",
    "Minus",
    "Mul",
    "Div",
    "Pow",
    "Log",
    "Factorial",
    "Phi",
    "Signum",
    "Abs",
    # Trigonometric kinds
    "Sin",
    "Cos",
    "Tan",
    "Cotan",
    "Sec",
    "Cosec",
    "Arcsin",
    "Arccos",
    "Arctan",
    "Arccotan",
    "Arcsec",
    "Arccosec",
    # Logic kinds
    "Not",
    "And",
    "Or",
    "Xor",
    "Implies",
    "Equals",
    "Greater",
    "GreaterOrEqual",
    "Less",
    "LessOrEqual",
    "In",
    # Binders
    "Lambda",
    "Application",
    "Provided",
    "Piecewise",
    # Expression constructors
    "var",
    "const",
    "pi",
    "e",
    "i",
    "nan",
    "oo",
    "sin",
    "cos",
    "tan",
    "cot",
    "sec",
    "csc",
    "arcsin",
    "arccos",
    "arctan",
    "arccot",
    "arcsec",
    "arccsc",
    "log",
    "ln",
    "sqrt",
    "exp",
    "sinh",
    "cosh",
    "tanh",
    "abs",
    "signum",
    "factorial",
    "phi",
    "equals",
    "greater",
    "greater_or_equal",
    "less",
    "less_or_equal",
    "contains",
    "lambda_",
    "apply",
    "provided",
    "piecewise",
    # Domains
    "Domain",
    "fits_domain",
    # Rational utilities
    "to_fraction",
    # Configuration
    "Config",
    "get_config",
    "set_config",
    "using",
    # Simplification
    "simplify",
    "expand",
    # Exceptions
    "SymKernelError",
    "InvalidNumberError",
    "NotConstantError",
    "UnsupportedOperandError",
    "TreeTooDeepError",
]
