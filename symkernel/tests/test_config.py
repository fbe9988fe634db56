# symkernel - Configuration Tests
# Copyright (c) 2024 symkernel Contributors. All rights reserved.

"""
Tests for Config and the context-local active configuration.
"""

import contextvars
from fractions import Fraction

import pytest


class TestConfig:

    def test_defaults(self):
        """Test the default settings."""
        from symkernel.config import Config
        from symkernel.domain import Domain

        config = Config()
        assert config.precision == 100
        assert config.simplify_level == 2
        assert config.codomain is Domain.COMPLEX
        assert config.zero_tolerance == Fraction(1, 10**16)

    def test_float_tolerances_become_fractions(self):
        """Test that float tolerances are stored as fractions."""
        from symkernel.config import Config

        config = Config(zero_tolerance=1e-20, equality_tolerance=0.001)
        assert isinstance(config.zero_tolerance, Fraction)
        assert abs(config.equality_tolerance - Fraction(1, 1000)) < Fraction(1, 10**15)

    def test_invalid_values(self):
        """Test that out-of-range settings are rejected."""
        from symkernel.config import Config

        with pytest.raises(ValueError):
            Config(precision=10)
        with pytest.raises(ValueError):
            Config(zero_tolerance=Fraction(-1))
        with pytest.raises(ValueError):
            Config(max_tree_depth=0)

    def test_presets(self):
        """Test the precision presets are ordered."""
        from symkernel.config import Config

        assert Config.low_precision().precision < Config.medium_precision().precision
        assert Config.high_precision().precision > Config.medium_precision().precision

    def test_evolve_copies(self):
        """Test evolve() leaves the original untouched."""
        from symkernel.config import Config

        base = Config()
        changed = base.evolve(simplify_level=7)
        assert changed.simplify_level == 7
        assert base.simplify_level == 2


class TestActiveConfig:

    def test_using_restores(self):
        """Test using() restores the previous config."""
        from symkernel.config import Config, get_config, using

        before = get_config()
        with using(Config.low_precision()) as active:
            assert get_config() is active
            assert get_config().precision == 30
        assert get_config() is before

    def test_using_restores_after_error(self):
        """Test using() restores the config when the block raises."""
        from symkernel.config import Config, get_config, using

        before = get_config()
        with pytest.raises(RuntimeError):
            with using(Config.high_precision()):
                raise RuntimeError("boom")
        assert get_config() is before

    def test_set_config_is_context_local(self):
        """Test set_config() only affects the current context."""
        from symkernel.config import Config, get_config, set_config

        before = get_config()

        def run():
            set_config(Config.high_precision())
            return get_config().precision

        assert contextvars.copy_context().run(run) == 300
        assert get_config() is before

    def test_simplify_level_default_is_used(self):
        """Test simplify() falls back to the configured level."""
        from symkernel import var, simplify
        from symkernel.arithmetic import Mul
        from symkernel.config import get_config, using
        from symkernel.numeric import Integer

        x = var('x')
        with using(get_config().evolve(simplify_level=0)):
            assert simplify(x * 3 * 2) == Mul(Mul(x, Integer(3)), Integer(2))

    def test_precision_controls_arithmetic(self):
        """Test the working precision follows the config."""
        from symkernel.config import Config, using
        from symkernel.numeric import Integer, sqrt

        with using(Config(precision=50)):
            short = sqrt(Integer(2))
        with using(Config(precision=200)):
            long = sqrt(Integer(2))
        assert short.approx_equals(long)
        assert short != long
