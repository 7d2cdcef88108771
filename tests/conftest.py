"""
tests/conftest.py — Shared Test Fixtures
=========================================
"""

from __future__ import annotations

from pathlib import Path

import pytest

from concierge.data.roster import Roster, RosterEntry
from concierge.data.runtime import RuntimeContext
from concierge.engine.commands import build_dispatcher
from concierge.engine.dispatcher import Author, CommandDispatcher

CHANNEL_ID = "555000111"
GUILD_ID = "777000222"
BOT_ID = "900900900"


def write_data_dir(
    base: Path,
    *,
    token: str = "test-token\n",
    channel: str = f"{CHANNEL_ID}\n",
    guild: str = f"{GUILD_ID}\n",
    admins: str = "Admin1 12345\n",
    roles: str = "Gamer 111\nArtist 222\nCoder 333\n",
    bans: str = "",
    skip: tuple[str, ...] = (),
) -> Path:
    """Populate *base* with the six data files (minus any in *skip*)."""
    files = {
        "token": token,
        "channel": channel,
        "guild": guild,
        "admins": admins,
        "roles": roles,
        "bans": bans,
    }
    base.mkdir(parents=True, exist_ok=True)
    for name, content in files.items():
        if name not in skip:
            (base / name).write_text(content, encoding="utf-8")
    return base


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """A complete, valid data directory."""
    return write_data_dir(tmp_path / "data")


@pytest.fixture
def roles_roster() -> Roster:
    return Roster([
        RosterEntry("Gamer", "111"),
        RosterEntry("Artist", "222"),
        RosterEntry("Coder", "333"),
    ])


@pytest.fixture
def runtime(roles_roster: Roster) -> RuntimeContext:
    return RuntimeContext(
        channel_id=CHANNEL_ID,
        guild_id=GUILD_ID,
        admins=Roster([RosterEntry("Admin1", "12345")]),
        roles=roles_roster,
        token="test-token",
    )


@pytest.fixture
def dispatcher(runtime: RuntimeContext) -> CommandDispatcher:
    return build_dispatcher(runtime)


@pytest.fixture
def author() -> Author:
    return Author(id="42", mention="<@42>", role_ids=("222", "999", "111"))
