"""
concierge.engine.dispatcher — Command Table & Router
=====================================================

**Why this file exists:**
Every chat line that reaches Concierge goes through
:meth:`CommandDispatcher.dispatch`.  The dispatcher owns parsing and lookup;
handlers own argument validation and the text of their reply.

Line handling::

    "!roll 3d6"  ──►  parse_line  ──►  ("roll", ("3d6",))
                                          │
                                   table lookup (exact, case-sensitive)
                                     │                      │
                                  found                 not found
                                     │                      │
                          command.execute(...)     full usage catalog
                                     │                      │
                                     └──────► CommandResult ◄┘

Parsing splits on single spaces and keeps empty tokens, so ``"!help  roll"``
(two spaces) carries the arguments ``("", "roll")``.  Handlers that check
their argument count see that as two arguments.

Handlers are plain synchronous objects that return a :class:`CommandResult`;
sending the text is the gateway's job.  The table is built once in the
constructor and never changes afterwards, so concurrent reads are safe.
"""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from concierge.constants import ARG_SEPARATOR, TRIGGER
from concierge.data.runtime import RuntimeContext
from concierge.engine.usage import UsageCatalog

__all__ = [
    "Author",
    "Command",
    "CommandContext",
    "CommandDispatcher",
    "CommandResult",
    "Invocation",
    "ResultStatus",
    "parse_line",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class Author:
    """The member who sent a command line."""

    id: str
    mention: str = ""
    role_ids: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Invocation:
    command: str
    args: tuple[str, ...]
    author: Author


class ResultStatus(enum.Enum):
    OK = "ok"
    USAGE = "usage"          # bad arguments; text is the command's usage line
    FALLBACK = "fallback"    # unknown command; text is the full catalog
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True, slots=True)
class CommandResult:
    """What a command wants said back in the channel."""

    command: str
    text: str
    status: ResultStatus = ResultStatus.OK


@dataclass(frozen=True, slots=True)
class CommandContext:
    """Read-only state handed to every handler."""

    runtime: RuntimeContext
    usage: UsageCatalog = field(default_factory=UsageCatalog)

    def usage_result(self, command: str) -> CommandResult:
        """The canned reply for a call with invalid arguments."""
        return CommandResult(
            command=command,
            text=self.usage.lookup(command) or "",
            status=ResultStatus.USAGE,
        )


# ---------------------------------------------------------------------------
# Command base class
# ---------------------------------------------------------------------------
class Command(ABC):
    """Base class for a ``!``-command.

    Subclasses provide ``name`` (the word after ``!``), ``usage`` (one line
    for the help catalog) and :meth:`execute`.
    """

    name: str
    usage: str

    @abstractmethod
    def execute(self, invocation: Invocation, ctx: CommandContext) -> CommandResult:
        """Validate ``invocation.args`` and build the reply."""
        ...


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------
def parse_line(content: str) -> tuple[str, tuple[str, ...]] | None:
    """Split a chat line into ``(command, args)``.

    Returns ``None`` when *content* does not start with the trigger.
    """
    if not content.startswith(TRIGGER):
        return None
    tokens = content.split(ARG_SEPARATOR)
    name = tokens[0].removeprefix(TRIGGER)
    return name, tuple(tokens[1:])


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------
class CommandDispatcher:
    """Routes chat lines to registered :class:`Command` handlers.

    Parameters
    ----------
    runtime:
        The start-up :class:`RuntimeContext` passed to every handler.
    commands:
        Handlers in catalog order.  Names must be unique.

    Raises
    ------
    ValueError
        If two commands share a name.
    """

    def __init__(self, runtime: RuntimeContext, commands: Iterable[Command]) -> None:
        table: dict[str, Command] = {}
        for command in commands:
            if command.name in table:
                raise ValueError(f"Command name collision: '{command.name}' is already registered")
            table[command.name] = command

        self._table: Mapping[str, Command] = MappingProxyType(table)
        self.ctx = CommandContext(
            runtime=runtime,
            usage=UsageCatalog.from_commands(table.values()),
        )

    @property
    def commands(self) -> Mapping[str, Command]:
        return self._table

    @property
    def usage(self) -> UsageCatalog:
        return self.ctx.usage

    def fallback(self, command: str) -> CommandResult:
        return CommandResult(
            command=command,
            text=self.usage.render_all(),
            status=ResultStatus.FALLBACK,
        )

    def dispatch(self, content: str, author: Author) -> CommandResult | None:
        """Handle one chat line.

        Returns ``None`` for lines without the trigger and for handlers that
        raised (the exception is logged, never propagated).
        """
        parsed = parse_line(content)
        if parsed is None:
            return None

        name, args = parsed
        logger.info("Command called '%s' with parameters %s", name, list(args))

        command = self._table.get(name)
        if command is None:
            logger.debug("Unknown command '%s'; sending usage catalog", name)
            return self.fallback(name)

        invocation = Invocation(command=name, args=args, author=author)
        try:
            return command.execute(invocation, self.ctx)
        except Exception:
            logger.exception(
                "Command '%s' failed for user %s",
                name,
                author.id,
                extra={"command": name, "user_id": author.id},
            )
            return None
