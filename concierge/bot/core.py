"""
concierge.bot.core — Bot Instance & Cog Loader
===============================================

**Why this file exists:**
Defines :class:`ConciergeBot`, a ``commands.Bot`` subclass that:

1. Stores the shared config (``bot.cfg``), the start-up data
   (``bot.runtime``), the command router (``bot.dispatcher``) and the
   channel policy (``bot.channel_gateway``) so cogs reach them via ``self.bot.*``.
2. Loads every cog listed in :data:`EXTENSIONS`.
3. Implements the outbound half of the gateway (``self_id`` and
   ``send_text``) on top of discord.py.

Command parsing belongs to :class:`~concierge.engine.dispatcher.CommandDispatcher`;
discord.ext's own prefix handling is switched off in :meth:`on_message`.
"""

from __future__ import annotations

import logging

import discord
from discord.abc import Messageable
from discord.ext import commands

from concierge.bot.gateway import ChannelGateway
from concierge.config import ConciergeConfig
from concierge.constants import TRIGGER
from concierge.data.runtime import RuntimeContext
from concierge.engine.commands import build_dispatcher
from concierge.engine.dispatcher import CommandDispatcher

logger = logging.getLogger(__name__)

# Cog modules to load on startup.
EXTENSIONS: list[str] = [
    "concierge.bot.cogs.channel",
]


def _snowflake(value: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        return None


class ConciergeBot(commands.Bot):
    """Custom Bot subclass that carries project-wide state.

    Parameters
    ----------
    cfg:
        The parsed :class:`ConciergeConfig`.
    runtime:
        Token, channel, guild and rosters from the data directory.
    dispatcher:
        Optional pre-built router; defaults to the built-in commands.
    """

    def __init__(
        self,
        cfg: ConciergeConfig,
        runtime: RuntimeContext,
        dispatcher: CommandDispatcher | None = None,
    ) -> None:
        # MESSAGE_CONTENT (privileged) is needed to read command text.
        # GUILD_MEMBERS (privileged) keeps member roles cached for !listmyroles.
        intents = discord.Intents.default()
        intents.message_content = True
        intents.members = True
        intents.presences = False

        super().__init__(
            command_prefix=TRIGGER,
            intents=intents,
            help_command=None,
        )

        self.cfg = cfg
        self.runtime = runtime
        self.dispatcher = dispatcher or build_dispatcher(runtime)
        self.channel_gateway = ChannelGateway(runtime, self.dispatcher, self)

    # -----------------------------------------------------------------------
    # GatewaySession
    # -----------------------------------------------------------------------
    @property
    def self_id(self) -> str | None:
        return str(self.user.id) if self.user else None

    async def send_text(self, channel_id: str, text: str) -> bool:
        """Post *text* to *channel_id*.  Failures are logged, never raised."""
        snowflake = _snowflake(channel_id)
        if snowflake is None:
            logger.error("Cannot send to channel %r: not a valid id", channel_id)
            return False

        try:
            channel = self.get_channel(snowflake)
            if channel is None:
                channel = await self.fetch_channel(snowflake)
            if not isinstance(channel, Messageable):
                logger.error("Channel %s does not accept messages", channel_id)
                return False
            await channel.send(text)
        except (discord.HTTPException, discord.InvalidData) as exc:
            logger.warning("Failed to send message to channel %s: %s", channel_id, exc)
            return False
        return True

    # -----------------------------------------------------------------------
    # Lifecycle hooks
    # -----------------------------------------------------------------------
    async def setup_hook(self) -> None:
        """Load all cog extensions before connecting.

        A cog that fails to load is logged and skipped.
        """
        for ext in EXTENSIONS:
            try:
                await self.load_extension(ext)
                logger.info("Loaded extension: %s", ext)
            except Exception as exc:
                logger.error("Failed to load extension %s: %s", ext, exc)

    async def on_ready(self) -> None:
        """Fired when the bot has connected and the cache is populated."""
        assert self.user is not None  # guaranteed after on_ready
        logger.info("Logged in as %s (ID: %s)", self.user.name, self.user.id)

        await self.change_presence(
            activity=discord.Activity(
                type=discord.ActivityType.listening,
                name=self.cfg.status_text,
            )
        )

        guild_id = _snowflake(self.runtime.guild_id)
        if guild_id is None or self.get_guild(guild_id) is None:
            logger.warning("Guild %s not found — !listmyroles will report no roles", self.runtime.guild_id)

        channel_id = _snowflake(self.runtime.channel_id)
        if channel_id is None or self.get_channel(channel_id) is None:
            logger.warning("Monitored channel %s not visible to the bot", self.runtime.channel_id)

        logger.info("Bot is now running.  Press CTRL-C to exit.")

    async def on_message(self, message: discord.Message) -> None:
        """Intentionally empty: the Channel cog feeds messages to the gateway."""
        return None

    async def close(self) -> None:
        logger.info("Closing down…")
        await super().close()
