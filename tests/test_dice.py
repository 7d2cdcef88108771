"""
tests/test_dice.py — NdM Dice Roller Tests
===========================================

Covers the result range, the zero-operand shortcut, and both error kinds.
"""

from __future__ import annotations

import random

import pytest

from concierge.engine.dice import parse_dice, roll
from concierge.errors import RollError, RollErrorKind


class TestRollRange:
    def test_3d6_stays_in_range(self):
        """10,000 rolls of 3d6 cover [1, 18] and never leave it."""
        rng = random.Random(1234)
        seen = {roll("3d6", rng) for _ in range(10_000)}
        assert seen == set(range(1, 19))

    def test_default_rng(self):
        result = roll("1d20")
        assert 1 <= result <= 20

    def test_single_sided_single_die(self):
        assert roll("1d1") == 1

    def test_uses_injected_rng(self):
        class _Fixed:
            def __init__(self):
                self.calls = []

            def randint(self, a, b):
                self.calls.append((a, b))
                return b

        rng = _Fixed()
        assert roll("4d10", rng) == 40
        assert rng.calls == [(1, 40)]


class TestZeroOperands:
    @pytest.mark.parametrize("spec", ["0d6", "3d0", "0d0"])
    def test_zero_operand_yields_zero(self, spec):
        assert roll(spec) == 0

    def test_zero_operand_does_not_draw(self):
        class _Exploding:
            def randint(self, a, b):
                raise AssertionError("should not draw")

        assert roll("0d6", _Exploding()) == 0


class TestRollErrors:
    @pytest.mark.parametrize("spec", ["xd6", "3dx", "3", "3d6d2", "d6", "3d", "", "3D6", "3 d6", "1_0d6", "3d6\n", "3\nd6"])
    def test_invalid_format(self, spec):
        with pytest.raises(RollError) as excinfo:
            roll(spec)
        assert excinfo.value.kind is RollErrorKind.INVALID_FORMAT

    @pytest.mark.parametrize("spec", ["-1d6", "2d-4", "-1d-1"])
    def test_negative_operand(self, spec):
        with pytest.raises(RollError) as excinfo:
            roll(spec)
        assert excinfo.value.kind is RollErrorKind.NEGATIVE_OPERAND

    def test_roll_error_is_value_error(self):
        with pytest.raises(ValueError):
            roll("nope")


class TestParseDice:
    def test_returns_operands(self):
        assert parse_dice("2d8") == (2, 8)

    def test_explicit_plus_sign_accepted(self):
        assert parse_dice("+2d8") == (2, 8)
