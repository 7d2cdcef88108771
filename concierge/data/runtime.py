"""
concierge.data.runtime — Immutable Start-up Context
====================================================

Everything Concierge reads from the data directory is bundled into a single
frozen :class:`RuntimeContext`.  It is built once by :func:`load_runtime`
before the bot connects, then handed to the dispatcher and the gateway.
Nothing in it changes for the life of the process.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from concierge.constants import (
    ADMINS_FILE,
    BANS_FILE,
    CHANNEL_FILE,
    GUILD_FILE,
    ROLES_FILE,
    TOKEN_FILE,
)
from concierge.data.roster import Roster, load_roster, read_single_line

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RuntimeContext:
    """Configuration scalars and rosters loaded from the data directory."""

    channel_id: str
    guild_id: str
    admins: Roster = field(default_factory=Roster)
    roles: Roster = field(default_factory=Roster)
    bans: Roster = field(default_factory=Roster)
    token: str = field(default="", repr=False)


def load_runtime(data_dir: str | Path) -> RuntimeContext:
    """Load every start-up resource from *data_dir*.

    Raises
    ------
    LoadError
        On the first resource that is missing, unreadable, or (for the
        single-line resources) empty or multi-line.
    """
    base = Path(data_dir)

    token = read_single_line(base / TOKEN_FILE)
    channel_id = read_single_line(base / CHANNEL_FILE)
    guild_id = read_single_line(base / GUILD_FILE)

    admins = load_roster(base / ADMINS_FILE)
    roles = load_roster(base / ROLES_FILE)
    bans = load_roster(base / BANS_FILE)

    logger.info("Channel read: %s", channel_id)
    logger.info("Guild read: %s", guild_id)
    logger.info(
        "Rosters read: %d admins, %d roles, %d bans",
        len(admins), len(roles), len(bans),
    )

    return RuntimeContext(
        channel_id=channel_id,
        guild_id=guild_id,
        admins=admins,
        roles=roles,
        bans=bans,
        token=token,
    )
