"""
concierge.engine.roles — Role Reporter
=======================================

Maps a member's role ids onto the assignable-role roster and renders
friendly names.  Self-assignment and removal are defined here as
placeholders: they report that the change is unsupported and never touch
the guild.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from concierge.data.roster import Roster

__all__ = [
    "RoleChange",
    "add_role",
    "format_role_names",
    "list_assignable",
    "my_roles",
    "remove_role",
]


@dataclass(frozen=True, slots=True)
class RoleChange:
    """Outcome of a role self-service request."""

    role: str
    supported: bool


def my_roles(user_role_ids: Iterable[str], assignable: Roster) -> list[str]:
    """Friendly names for the ids in *user_role_ids* that are assignable.

    Order follows *user_role_ids*; ids not in the roster are dropped.
    """
    names: list[str] = []
    for role_id in user_role_ids:
        entry = assignable.find_by_id(role_id)
        if entry is not None:
            names.append(entry.friendly_name)
    return names


def list_assignable(assignable: Roster) -> list[str]:
    return assignable.friendly_names()


def format_role_names(names: Iterable[str]) -> str:
    """Render names as a comma-separated list of inline-code spans."""
    return ", ".join(f"`{name}`" for name in names)


# TODO: grant the role once admin authorization and write-back exist.
def add_role(role: str, assignable: Roster) -> RoleChange:
    return RoleChange(role=role, supported=False)


def remove_role(role: str, assignable: Roster) -> RoleChange:
    return RoleChange(role=role, supported=False)
