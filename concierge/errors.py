"""
concierge.errors — Exception Taxonomy
======================================

Every error Concierge raises on purpose derives from
:class:`ConciergeError`.  Only :class:`LoadError` is fatal; it is raised
during start-up before the gateway connection is opened.
"""

from __future__ import annotations

import enum
from pathlib import Path

__all__ = [
    "ConciergeError",
    "LoadError",
    "RollError",
    "RollErrorKind",
    "UnsupportedOperation",
]


class ConciergeError(Exception):
    """Base class for Concierge errors."""


class LoadError(ConciergeError):
    """A required start-up resource could not be read or was unusable."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"failed to read {self.path}: {reason}")


class RollErrorKind(enum.Enum):
    INVALID_FORMAT = "invalid_format"
    NEGATIVE_OPERAND = "negative_operand"


class RollError(ConciergeError, ValueError):
    """A dice expression could not be rolled."""

    def __init__(self, kind: RollErrorKind, spec: str) -> None:
        self.kind = kind
        self.spec = spec
        super().__init__(f"{kind.value}: {spec!r}")


class UnsupportedOperation(ConciergeError, NotImplementedError):
    """Raised by placeholder operations that are defined but not built yet."""
