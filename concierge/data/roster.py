"""
concierge.data.roster — Flat-File Roster Store
===============================================

**Why this file exists:**
Admins, assignable roles, and banned users are kept in plain text files,
one ``<friendly-name> <id>`` pair per line.  This module parses those files
into immutable :class:`Roster` objects once at start-up.

Parsing is best-effort: any non-empty line that does not split into exactly
two whitespace-separated tokens is skipped without raising.  A missing or
unreadable file is a :class:`~concierge.errors.LoadError`.

Usage::

    from concierge.data.roster import load_roster

    roles = load_roster("data/roles")
    roles.friendly_names()       # ["Gamer", "Artist"]
    roles.find_by_id("12345")    # RosterEntry(friendly_name="Gamer", id="12345")
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from concierge.errors import LoadError, UnsupportedOperation

__all__ = [
    "Roster",
    "RosterEntry",
    "load_roster",
    "parse_roster",
    "read_single_line",
    "write_roster",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RosterEntry:
    """One ``<friendly-name> <id>`` line."""

    friendly_name: str
    id: str


class Roster:
    """Ordered, read-only sequence of :class:`RosterEntry` (file order)."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[RosterEntry] = ()) -> None:
        self._entries: tuple[RosterEntry, ...] = tuple(entries)

    def __iter__(self) -> Iterator[RosterEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> RosterEntry:
        return self._entries[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Roster):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"Roster({list(self._entries)!r})"

    @property
    def entries(self) -> tuple[RosterEntry, ...]:
        return self._entries

    def friendly_names(self) -> list[str]:
        return [entry.friendly_name for entry in self._entries]

    def find_by_id(self, entry_id: str) -> RosterEntry | None:
        """Return the first entry whose id equals *entry_id* (linear scan)."""
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------
def parse_roster(text: str) -> Roster:
    """Parse roster *text* into a :class:`Roster`.

    Blank lines are ignored.  Lines that are not exactly two tokens are
    dropped (logged at DEBUG) rather than treated as errors.
    """
    entries: list[RosterEntry] = []
    for lineno, raw in enumerate(text.splitlines(), 1):
        line = raw.strip()
        if not line:
            continue
        tokens = line.split()
        if len(tokens) != 2:
            logger.debug("Skipping malformed roster line %d: %r", lineno, line)
            continue
        entries.append(RosterEntry(friendly_name=tokens[0], id=tokens[1]))
    return Roster(entries)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise LoadError(path, "file not found") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(path, str(exc)) from exc


def load_roster(path: str | Path) -> Roster:
    """Read the roster file at *path*.

    Raises
    ------
    LoadError
        If the file is missing or unreadable.  An empty file is fine and
        yields an empty roster.
    """
    roster_path = Path(path)
    roster = parse_roster(_read_text(roster_path))
    logger.debug("Loaded %d entries from %s", len(roster), roster_path)
    return roster


def read_single_line(path: str | Path) -> str:
    """Read a one-value resource (token, channel id, guild id).

    Surrounding whitespace, including the trailing newline most editors add,
    is stripped.  Anything left that still spans more than one line, or
    nothing left at all, is a :class:`LoadError`.
    """
    value_path = Path(path)
    value = _read_text(value_path).strip()
    if "\n" in value or "\r" in value:
        raise LoadError(value_path, "file contained more than 1 line")
    if not value:
        raise LoadError(value_path, "file was read but no value could be extracted")
    return value


def write_roster(path: str | Path, roster: Roster) -> None:
    """Persist *roster* back to *path*.

    Write-back of ban and role files is not supported yet; this always
    raises :class:`UnsupportedOperation` and never touches the filesystem.
    """
    raise UnsupportedOperation(
        f"writing {len(roster)} roster entries to {Path(path)} is not supported"
    )
