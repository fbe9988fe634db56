# symkernel - Exceptions
# Copyright (c) 2024 symkernel Contributors. All rights reserved.

"""
Exception hierarchy for symkernel.

Only structural and type errors raise. Mathematically undefined results such
as ``1/0`` or ``inf - inf`` never raise; they are represented by NaN and the
signed infinities of the numeric tower.
"""

from __future__ import annotations
from typing import Any, Optional


class SymKernelError(Exception):
    """Base class for all symkernel exceptions."""
    pass


class InvalidNumberError(SymKernelError, ValueError):
    """Raised when a number is built from an invalid component."""

    def __init__(self, message: str, value: Optional[Any] = None):
        super().__init__(message)
        self.value = value


class NotConstantError(SymKernelError, TypeError):
    """
    Raised when a tree asked for a closed value does not reduce to one.

    Attributes:
        expected: What the caller asked for ('number' or 'boolean').
        actual: The evaluated tree that was returned instead.
    """

    def __init__(self, expected: str, actual: Any):
        super().__init__(
            f"Expected the expression to evaluate to a {expected}, got {actual}"
        )
        self.expected = expected
        self.actual = actual


class UnsupportedOperandError(SymKernelError, TypeError):
    """Raised when a Python object cannot be converted to an expression."""

    def __init__(self, value: Any):
        super().__init__(
            f"Cannot convert {type(value).__name__} to an expression. "
            f"Supported: Entity, bool, int, float, complex, Fraction"
        )
        self.value = value


class TreeTooDeepError(SymKernelError, RecursionError):
    """
    Raised when an expression is nested deeper than the configured guard.

    Raise ``Config.max_tree_depth`` to allow deeper trees.
    """

    def __init__(self, depth: int, limit: int):
        super().__init__(
            f"Expression depth {depth} exceeds the configured limit of {limit}. "
            f"Increase Config.max_tree_depth to process it."
        )
        self.depth = depth
        self.limit = limit
