"""
concierge.bot.gateway — Single-Channel Gateway Policy
======================================================

Sits between the Discord transport and the :class:`CommandDispatcher`.

Gates, in order:
1. Drop messages the bot wrote itself (anti-echo).
2. Drop messages outside the one monitored channel.
3. Dispatch the line; send any reply to the monitored channel.

The transport is reached only through the small :class:`GatewaySession`
protocol, so this module has no discord.py import and is tested with a fake
session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from concierge.data.runtime import RuntimeContext
from concierge.engine.dispatcher import Author, CommandDispatcher, CommandResult

logger = logging.getLogger(__name__)


class GatewaySession(Protocol):
    """What the gateway needs from the transport."""

    @property
    def self_id(self) -> str | None: ...

    async def send_text(self, channel_id: str, text: str) -> bool: ...


@dataclass(frozen=True, slots=True)
class InboundMessage:
    """A received chat message, stripped down to what the policy reads."""

    author_id: str
    channel_id: str
    content: str
    author: Author


def render_reply(result: CommandResult, author: Author) -> str:
    """Address *result* to the member who asked."""
    if not author.mention:
        return result.text
    return f"{author.mention} {result.text}"


class ChannelGateway:
    """Filters inbound messages and delivers command replies.

    Parameters
    ----------
    runtime:
        Start-up context; ``runtime.channel_id`` is the only channel watched
        and the only channel replied to.
    dispatcher:
        Command router.
    session:
        Transport implementing :class:`GatewaySession`.
    """

    def __init__(
        self,
        runtime: RuntimeContext,
        dispatcher: CommandDispatcher,
        session: GatewaySession,
    ) -> None:
        self.runtime = runtime
        self.dispatcher = dispatcher
        self.session = session

    def accepts(self, message: InboundMessage) -> bool:
        """Return True if *message* passes the echo and channel gates."""
        if message.author_id == self.session.self_id:
            return False

        if message.channel_id != self.runtime.channel_id:
            logger.debug(
                "Channel %s is not the monitored channel %s (%s: %s)",
                message.channel_id,
                self.runtime.channel_id,
                message.author_id,
                message.content,
            )
            return False
        return True

    async def handle(self, message: InboundMessage) -> bool:
        """Run one message through the gates and the dispatcher.

        Returns True if a reply was delivered.
        """
        if not self.accepts(message):
            return False

        logger.debug(
            "Message from %s in %s: %s",
            message.author_id, message.channel_id, message.content,
        )
        result = self.dispatcher.dispatch(message.content, message.author)
        if result is None:
            return False

        target = self.runtime.channel_id
        sent = await self.session.send_text(target, render_reply(result, message.author))
        if not sent:
            logger.warning(
                "Reply to '%s' from %s was not delivered to channel %s",
                result.command, message.author_id, target,
            )
        return sent
