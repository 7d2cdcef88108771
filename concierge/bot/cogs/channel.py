"""
concierge.bot.cogs.channel — Inbound Message Capture
=====================================================

Listens for on_message events, normalizes them into
:class:`~concierge.bot.gateway.InboundMessage` and hands them to the
bot's :class:`~concierge.bot.gateway.ChannelGateway`.

Role ids for the author are resolved from the configured guild's member
cache (no REST call), and only for lines that look like commands.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from concierge.bot.gateway import InboundMessage
from concierge.constants import TRIGGER
from concierge.engine.dispatcher import Author

if TYPE_CHECKING:
    from concierge.bot.core import ConciergeBot

logger = logging.getLogger(__name__)


class Channel(commands.Cog, name="Channel"):
    """Feeds monitored-channel messages to the command dispatcher."""

    def __init__(self, bot: ConciergeBot) -> None:
        self.bot = bot

    def _resolve_member(self, message: discord.Message) -> discord.Member | None:
        guild_id = self.bot.runtime.guild_id
        author = message.author
        if isinstance(author, discord.Member) and str(author.guild.id) == guild_id:
            return author

        guild = self.bot.get_guild(int(guild_id)) if guild_id.isdigit() else None
        if guild is None:
            return None
        return guild.get_member(author.id)

    def _author_role_ids(self, message: discord.Message) -> tuple[str, ...]:
        member = self._resolve_member(message)
        if member is None:
            logger.warning(
                "Failed to get member %s from guild %s",
                message.author.id, self.bot.runtime.guild_id,
            )
            return ()
        return tuple(str(role.id) for role in member.roles)

    def build_inbound(self, message: discord.Message) -> InboundMessage:
        """Build an :class:`InboundMessage` from a Discord message."""
        role_ids: tuple[str, ...] = ()
        if message.content.startswith(TRIGGER):
            role_ids = self._author_role_ids(message)

        author_id = str(message.author.id)
        return InboundMessage(
            author_id=author_id,
            channel_id=str(message.channel.id),
            content=message.content,
            author=Author(
                id=author_id,
                mention=message.author.mention,
                role_ids=role_ids,
            ),
        )

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        try:
            await self.bot.channel_gateway.handle(self.build_inbound(message))
        except Exception:
            logger.exception(
                "Error processing message %s from user %s",
                message.id,
                message.author.id,
                extra={"event_type": "message", "user_id": message.author.id},
            )


async def setup(bot: ConciergeBot) -> None:
    await bot.add_cog(Channel(bot))
