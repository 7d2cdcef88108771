"""
concierge.constants — Shared Constants
=======================================

Single source of truth for the command trigger and the data-file names.
Import from here instead of duplicating literals in loaders and cogs.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Command surface
# ---------------------------------------------------------------------------
TRIGGER = "!"
ARG_SEPARATOR = " "

# ---------------------------------------------------------------------------
# Data directory layout (one resource per file)
# ---------------------------------------------------------------------------
TOKEN_FILE = "token"
CHANNEL_FILE = "channel"
GUILD_FILE = "guild"
ADMINS_FILE = "admins"
ROLES_FILE = "roles"
BANS_FILE = "bans"

DEFAULT_DATA_DIR = "data"
DEFAULT_STATUS_TEXT = "!help"
DEFAULT_LOG_LEVEL = "INFO"
