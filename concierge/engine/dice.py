"""
concierge.engine.dice — ``NdM`` Dice Roller
============================================

Grammar::

    <count>d<sides>

``count`` and ``sides`` are base-10 integers separated by a single lowercase
``d``.  The result is one uniform draw from ``[1, count * sides]`` (not a sum
of individual dice).

Edge cases:
    - Anything that is not exactly two ``d``-separated integers raises
      ``RollError(INVALID_FORMAT)``.
    - A negative operand raises ``RollError(NEGATIVE_OPERAND)``.
    - A zero operand yields ``0`` without drawing.

The RNG is injectable for tests; by default the ``random`` module is used,
which is not cryptographically strong and does not need to be.
"""

from __future__ import annotations

import random
import re
from typing import Protocol

from concierge.errors import RollError, RollErrorKind

__all__ = ["parse_dice", "roll"]

_INT_RE = re.compile(r"[+-]?[0-9]+")


class _RandInt(Protocol):
    def randint(self, a: int, b: int) -> int: ...


def _parse_operand(token: str, spec: str) -> int:
    if not _INT_RE.fullmatch(token):
        raise RollError(RollErrorKind.INVALID_FORMAT, spec)
    return int(token)


def parse_dice(spec: str) -> tuple[int, int]:
    """Split *spec* into ``(count, sides)`` or raise :class:`RollError`."""
    parts = spec.split("d")
    if len(parts) != 2:
        raise RollError(RollErrorKind.INVALID_FORMAT, spec)

    count = _parse_operand(parts[0], spec)
    sides = _parse_operand(parts[1], spec)
    if count < 0 or sides < 0:
        raise RollError(RollErrorKind.NEGATIVE_OPERAND, spec)
    return count, sides


def roll(spec: str, rng: _RandInt | None = None) -> int:
    """Roll *spec* and return the result."""
    count, sides = parse_dice(spec)
    if count == 0 or sides == 0:
        return 0
    source = rng if rng is not None else random
    return source.randint(1, count * sides)
