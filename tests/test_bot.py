"""
tests/test_bot.py — Discord Binding Tests
==========================================

ConciergeBot's outbound ``send_text`` (success, cache miss, failures), the
``on_ready`` presence and warnings, and the Channel cog's message normalization.
No gateway connection is opened.
"""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, PropertyMock, patch

import discord
import pytest

from concierge.bot.cogs.channel import Channel
from concierge.bot.core import EXTENSIONS, ConciergeBot
from concierge.config import ConciergeConfig

from conftest import CHANNEL_ID, GUILD_ID


# Helper to run async tests without pytest-asyncio
def run_async(coro):
    """Run an async coroutine in a new event loop."""
    return asyncio.get_event_loop_policy().new_event_loop().run_until_complete(coro)


def _make_messageable(channel_id: int = int(CHANNEL_ID)) -> MagicMock:
    ch = MagicMock(spec=discord.TextChannel)
    ch.id = channel_id
    ch.send = AsyncMock()
    return ch


def _http_error(cls=discord.HTTPException) -> discord.HTTPException:
    return cls(MagicMock(status=500, reason="Server Error"), "boom")


@pytest.fixture
def bot(runtime):
    return ConciergeBot(cfg=ConciergeConfig(), runtime=runtime)


# ===========================================================================
# ConciergeBot
# ===========================================================================
class TestConciergeBot:
    def test_wires_gateway_to_runtime(self, bot, runtime):
        assert bot.channel_gateway.runtime is runtime
        assert bot.channel_gateway.session is bot
        assert list(bot.dispatcher.commands)[0] == "help"

    def test_intents(self, bot):
        assert bot.intents.message_content is True
        assert bot.intents.members is True

    def test_channel_cog_registered(self):
        assert "concierge.bot.cogs.channel" in EXTENSIONS

    def test_self_id_before_login(self, bot):
        assert bot.self_id is None

    def test_self_id_after_login(self, bot):
        with patch.object(
            ConciergeBot, "user", new_callable=PropertyMock,
            return_value=SimpleNamespace(id=900900900),
        ):
            assert bot.self_id == "900900900"


class TestSendText:
    def test_sends_to_cached_channel(self, bot):
        ch = _make_messageable()
        with patch.object(bot, "get_channel", return_value=ch) as get_channel:
            assert run_async(bot.send_text(CHANNEL_ID, "hello")) is True
        get_channel.assert_called_once_with(int(CHANNEL_ID))
        ch.send.assert_awaited_once_with("hello")

    def test_fetches_on_cache_miss(self, bot):
        ch = _make_messageable()
        with (
            patch.object(bot, "get_channel", return_value=None),
            patch.object(bot, "fetch_channel", AsyncMock(return_value=ch)),
        ):
            assert run_async(bot.send_text(CHANNEL_ID, "hello")) is True
        ch.send.assert_awaited_once_with("hello")

    def test_http_error_logged_not_raised(self, bot):
        ch = _make_messageable()
        ch.send.side_effect = _http_error()
        with patch.object(bot, "get_channel", return_value=ch):
            assert run_async(bot.send_text(CHANNEL_ID, "hello")) is False

    def test_forbidden_fetch(self, bot):
        with (
            patch.object(bot, "get_channel", return_value=None),
            patch.object(bot, "fetch_channel", AsyncMock(side_effect=_http_error(discord.Forbidden))),
        ):
            assert run_async(bot.send_text(CHANNEL_ID, "hello")) is False

    def test_invalid_channel_id(self, bot):
        assert run_async(bot.send_text("not-a-number", "hello")) is False

    def test_non_messageable_channel(self, bot):
        category = MagicMock(spec=discord.CategoryChannel)
        with patch.object(bot, "get_channel", return_value=category):
            assert run_async(bot.send_text(CHANNEL_ID, "hello")) is False


# ===========================================================================
# Channel cog
# ===========================================================================
def _make_member(*, user_id: int = 42, guild_id: int = int(GUILD_ID), role_ids=(111, 222)) -> MagicMock:
    member = MagicMock(spec=discord.Member)
    member.id = user_id
    member.mention = f"<@{user_id}>"
    member.guild = SimpleNamespace(id=guild_id)
    member.roles = [SimpleNamespace(id=r) for r in role_ids]
    return member


def _make_message(content: str, author, channel_id: int = int(CHANNEL_ID)) -> MagicMock:
    message = MagicMock(spec=discord.Message)
    message.id = 1
    message.content = content
    message.author = author
    message.channel = SimpleNamespace(id=channel_id)
    return message


def _make_cog_bot(runtime, guild=None) -> MagicMock:
    bot = MagicMock()
    bot.runtime = runtime
    bot.get_guild = MagicMock(return_value=guild)
    bot.channel_gateway.handle = AsyncMock(return_value=True)
    return bot


class TestChannelCog:
    def test_build_inbound_from_member(self, runtime):
        cog = Channel(_make_cog_bot(runtime))
        inbound = cog.build_inbound(_make_message("!listmyroles", _make_member()))

        assert inbound.author_id == "42"
        assert inbound.channel_id == CHANNEL_ID
        assert inbound.content == "!listmyroles"
        assert inbound.author.mention == "<@42>"
        assert inbound.author.role_ids == ("111", "222")

    def test_roles_resolved_from_configured_guild(self, runtime):
        guild_member = _make_member(role_ids=(333,))
        guild = MagicMock()
        guild.get_member.return_value = guild_member
        cog = Channel(_make_cog_bot(runtime, guild=guild))

        other_guild_member = _make_member(guild_id=1)
        inbound = cog.build_inbound(_make_message("!listmyroles", other_guild_member))

        guild.get_member.assert_called_once_with(42)
        assert inbound.author.role_ids == ("333",)

    def test_unknown_member_has_no_roles(self, runtime):
        cog = Channel(_make_cog_bot(runtime, guild=None))
        user = MagicMock(spec=discord.User)
        user.id = 42
        user.mention = "<@42>"
        inbound = cog.build_inbound(_make_message("!listmyroles", user))
        assert inbound.author.role_ids == ()

    def test_roles_skipped_for_plain_chat(self, runtime):
        bot = _make_cog_bot(runtime)
        cog = Channel(bot)
        inbound = cog.build_inbound(_make_message("hello", _make_member()))
        assert inbound.author.role_ids == ()
        bot.get_guild.assert_not_called()

    def test_on_message_forwards(self, runtime):
        bot = _make_cog_bot(runtime)
        cog = Channel(bot)
        run_async(cog.on_message(_make_message("!help", _make_member())))
        bot.channel_gateway.handle.assert_awaited_once()

    def test_on_message_swallows_and_logs_errors(self, runtime, caplog):
        bot = _make_cog_bot(runtime)
        bot.channel_gateway.handle.side_effect = RuntimeError("boom")
        cog = Channel(bot)

        run_async(cog.on_message(_make_message("!help", _make_member())))

        assert "Error processing message" in caplog.text


class TestOnReady:
    def test_presence_and_missing_guild_warning(self, bot, caplog):
        change_presence = AsyncMock()
        with (
            patch.object(
                ConciergeBot, "user", new_callable=PropertyMock,
                return_value=SimpleNamespace(name="concierge", id=900900900),
            ),
            patch.object(bot, "change_presence", change_presence),
            patch.object(bot, "get_guild", return_value=None),
            patch.object(bot, "get_channel", return_value=_make_messageable()),
        ):
            run_async(bot.on_ready())

        activity = change_presence.await_args.kwargs["activity"]
        assert activity.type is discord.ActivityType.listening
        assert activity.name == "!help"
        assert f"Guild {GUILD_ID} not found" in caplog.text
        assert "Monitored channel" not in caplog.text

    def test_missing_channel_warning(self, bot, caplog):
        with (
            patch.object(
                ConciergeBot, "user", new_callable=PropertyMock,
                return_value=SimpleNamespace(name="concierge", id=900900900),
            ),
            patch.object(bot, "change_presence", AsyncMock()),
            patch.object(bot, "get_guild", return_value=MagicMock()),
            patch.object(bot, "get_channel", return_value=None),
        ):
            run_async(bot.on_ready())

        assert f"Monitored channel {CHANNEL_ID} not visible" in caplog.text
        assert "not found" not in caplog.text
