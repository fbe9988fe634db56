# symkernel - Domains
# Copyright (c) 2024 symkernel Contributors. All rights reserved.

"""
Value domains used as node codomains.

A node's codomain describes which values it may legitimately produce. After
evaluation, a numeric result that falls outside the codomain is treated as
undefined (NaN); after simplification the node is left untouched instead.
"""

from __future__ import annotations
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .entity import Entity


class Domain(Enum):
    """Nested value domains, from most to least specific."""
    BOOLEAN = 'boolean'
    INTEGER = 'integer'
    RATIONAL = 'rational'
    REAL = 'real'
    COMPLEX = 'complex'
    ANY = 'any'

    def __repr__(self) -> str:
        return f"Domain.{self.name}"


def fits_domain(value: Entity, domain: Domain) -> bool:
    """
    Check whether a value belongs to a domain.

    Non-constant values always fit: only numbers and booleans can be
    decided.

    Example:
        >>> fits_domain(Integer(2), Domain.REAL)
        True
        >>> fits_domain(Complex(1, 2), Domain.REAL)
        False
    """
    from .entity import Boolean
    from .numeric import Complex, Integer, Rational, Real

    if domain is Domain.ANY:
        return True
    if isinstance(value, Boolean):
        return domain is Domain.BOOLEAN
    if not isinstance(value, Complex):
        return True
    if domain is Domain.COMPLEX:
        return True
    if domain is Domain.REAL:
        return isinstance(value, Real)
    if domain is Domain.RATIONAL:
        return isinstance(value, Rational)
    if domain is Domain.INTEGER:
        return isinstance(value, Integer)
    return False
