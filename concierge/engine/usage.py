"""
concierge.engine.usage — Usage Catalog
=======================================

Read-only mapping of command name → one-line usage text.  Enumeration order
is registration order, so ``render_all()`` output is stable: the same
catalog always renders the same text.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from concierge.engine.dispatcher import Command


class UsageCatalog(Mapping[str, str]):
    """Immutable, insertion-ordered usage lines."""

    def __init__(self, entries: Iterable[tuple[str, str]] = ()) -> None:
        lines: dict[str, str] = {}
        for name, usage in entries:
            if name in lines:
                raise ValueError(f"Duplicate usage entry for '{name}'")
            lines[name] = usage
        self._lines = MappingProxyType(lines)

    @classmethod
    def from_commands(cls, commands: Iterable[Command]) -> UsageCatalog:
        return cls((cmd.name, cmd.usage) for cmd in commands)

    def __getitem__(self, name: str) -> str:
        return self._lines[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def lookup(self, name: str) -> str | None:
        """Usage line for *name*, or ``None`` if the command is unknown."""
        return self._lines.get(name)

    def names(self) -> list[str]:
        return list(self._lines)

    def render_all(self) -> str:
        """Every usage line, newline-terminated, in registration order."""
        return "".join(f"{line}\n" for line in self._lines.values())
