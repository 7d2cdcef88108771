"""
concierge.bot.__main__ — Entry point for ``python -m concierge.bot``
====================================================================

Wiring:
1. Load .env (optional overrides).
2. Configure logging, load config.yaml (soft settings) and apply its level.
3. Load the data directory (token, channel, guild, rosters).  Any failure
   here exits with status 1 before connecting.
4. Create the ConciergeBot; the dispatcher is built from the rosters.
5. Connect and run until SIGINT/SIGTERM, then close the gateway connection.

Run with::

    python -m concierge.bot
"""

from __future__ import annotations

import asyncio
import logging
import signal
import sys

from dotenv import load_dotenv

from concierge.bot.core import ConciergeBot
from concierge.config import load_config
from concierge.constants import DEFAULT_LOG_LEVEL
from concierge.data.runtime import load_runtime
from concierge.errors import LoadError

logger = logging.getLogger("concierge")

LOG_FORMAT = "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s"


def _install_signal_handlers(bot: ConciergeBot) -> set[asyncio.Task]:
    """Close the bot on SIGINT/SIGTERM where the loop supports it.

    Returns the set holding pending close tasks; the loop keeps only weak
    references to tasks.
    """
    loop = asyncio.get_running_loop()
    pending: set[asyncio.Task] = set()

    def _request_close(signame: str) -> None:
        logger.info("Received %s", signame)
        task = loop.create_task(bot.close())
        pending.add(task)
        task.add_done_callback(pending.discard)

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _request_close, sig.name)
        except (NotImplementedError, RuntimeError):
            # Windows event loops; KeyboardInterrupt still covers Ctrl+C.
            pass
    return pending


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S")
    logging.getLogger().setLevel(level)


async def _run(bot: ConciergeBot, token: str) -> None:
    async with bot:
        _install_signal_handlers(bot)
        await bot.start(token)


def main() -> None:
    """Bootstrap and run the Concierge bot."""

    # 1. Environment variables.
    load_dotenv()

    # 2. Logging at the default level, then soft configuration.
    _configure_logging(DEFAULT_LOG_LEVEL)
    cfg = load_config()
    _configure_logging(cfg.log_level)
    logger.info("Starting up")

    # 3. Data files.
    try:
        runtime = load_runtime(cfg.data_dir)
    except LoadError as exc:
        logger.critical("Error reading data files: %s", exc)
        sys.exit(1)
    logger.info("Data files read from %s", cfg.data_dir)

    # 4. Bot.
    bot = ConciergeBot(cfg=cfg, runtime=runtime)

    # 5. Run (blocks until Ctrl+C or SIGTERM).
    logger.info("Connecting bot…")
    try:
        asyncio.run(_run(bot, runtime.token))
    except KeyboardInterrupt:
        logger.info("Shutting down gracefully…")


if __name__ == "__main__":
    main()
