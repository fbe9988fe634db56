# symkernel - Configuration
# Copyright (c) 2024 symkernel Contributors. All rights reserved.

"""Configuration settings for symkernel."""

from __future__ import annotations
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace as _dc_replace
from fractions import Fraction
from typing import Iterator

from .domain import Domain

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """
    Runtime settings of the kernel.

    Attributes:
        precision: Decimal digits used for Real and Complex arithmetic.
        zero_tolerance: Distance below which a computed Real is treated as
                        an integer (or an imaginary part as zero).
        equality_tolerance: Tolerance used by ``Number.approx_equals``.
        max_rational_part: Largest numerator/denominator the continued
                           fraction search may recover from a Real.
        rational_search_depth: Number of continued fraction steps tried.
        max_expansion_terms: Upper bound on terms produced by polynomial
                             expansion during simplification.
        simplify_level: Default number of passes of ``simplify``.
        max_tree_depth: Deepest expression the recursive algorithms accept.
        codomain: Codomain of continuous nodes; ``Domain.REAL`` turns
                  complex-valued results into NaN.
    """
    precision: int = 100
    zero_tolerance: Fraction = Fraction(1, 10**16)
    equality_tolerance: Fraction = Fraction(1, 10**6)
    max_rational_part: int = 10**8
    rational_search_depth: int = 15
    max_expansion_terms: int = 2000
    simplify_level: int = 2
    max_tree_depth: int = 10000
    codomain: Domain = Domain.COMPLEX

    def __post_init__(self):
        # Convert tolerances to Fraction if given as float
        if isinstance(self.zero_tolerance, float):
            self.zero_tolerance = Fraction(self.zero_tolerance).limit_denominator(10**30)
        if isinstance(self.equality_tolerance, float):
            self.equality_tolerance = Fraction(self.equality_tolerance).limit_denominator(10**30)
        if self.precision < 15:
            raise ValueError(f"precision must be at least 15 digits, got {self.precision}")
        if self.zero_tolerance < 0 or self.equality_tolerance < 0:
            raise ValueError("tolerances must be non-negative")
        if self.max_tree_depth < 1:
            raise ValueError("max_tree_depth must be positive")

    @classmethod
    def low_precision(cls) -> Config:
        """Fast, lower precision configuration."""
        return cls(
            precision=30,
            rational_search_depth=10,
            max_expansion_terms=200,
            simplify_level=1,
        )

    @classmethod
    def medium_precision(cls) -> Config:
        """Balanced precision/speed configuration (default)."""
        return cls()

    @classmethod
    def high_precision(cls) -> Config:
        """High precision configuration."""
        return cls(
            precision=300,
            zero_tolerance=Fraction(1, 10**40),
            equality_tolerance=Fraction(1, 10**12),
            max_expansion_terms=10000,
            simplify_level=4,
        )

    def evolve(self, **changes) -> Config:
        """Return a copy with some fields replaced."""
        return _dc_replace(self, **changes)

    def __repr__(self) -> str:
        return (
            f"Config(precision={self.precision}, "
            f"zero_tolerance={self.zero_tolerance}, "
            f"simplify_level={self.simplify_level}, "
            f"codomain={self.codomain!r})"
        )


_active: ContextVar[Config] = ContextVar('symkernel_config', default=Config())


def get_config() -> Config:
    """Return the configuration active in the current context."""
    return _active.get()


def set_config(config: Config) -> None:
    """Replace the configuration of the current context."""
    logger.debug("Active configuration set to %r", config)
    _active.set(config)


@contextmanager
def using(config: Config) -> Iterator[Config]:
    """
    Temporarily activate a configuration.

    Example:
        >>> with using(Config.high_precision()):
        ...     value = expr.evaled()
    """
    token = _active.set(config)
    logger.debug("Entering configuration %r", config)
    try:
        yield config
    finally:
        _active.reset(token)
