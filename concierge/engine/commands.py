"""
concierge.engine.commands — Built-in ``!`` Commands
====================================================

The six commands in the help catalog, in catalog order:

- ``!help (command)`` — full catalog, or one command's usage
- ``!roll <dice>`` — ``NdM`` dice roll
- ``!listmyroles`` — caller's assignable roles
- ``!addrole <role>`` — placeholder, reports unsupported
- ``!removerole <role>`` — placeholder, reports unsupported
- ``!listroles`` — every assignable role

Handlers never raise on bad input; they answer with their own usage line.
"""

from __future__ import annotations

import logging
from abc import abstractmethod

from concierge.data.runtime import RuntimeContext
from concierge.engine.dice import roll
from concierge.engine.dispatcher import (
    Command,
    CommandContext,
    CommandDispatcher,
    CommandResult,
    Invocation,
    ResultStatus,
)
from concierge.engine.roles import (
    RoleChange,
    add_role,
    format_role_names,
    list_assignable,
    my_roles,
    remove_role,
)
from concierge.errors import RollError

logger = logging.getLogger(__name__)


class HelpCommand(Command):
    name = "help"
    usage = "!help (command) - Print available commands or more details about a single command"

    def execute(self, invocation: Invocation, ctx: CommandContext) -> CommandResult:
        args = invocation.args
        if not args:
            return CommandResult(command=self.name, text=ctx.usage.render_all())

        if len(args) == 1:
            target = args[0]
            line = ctx.usage.lookup(target)
            if line is None:
                logger.debug("help: unknown command '%s'", target)
                return CommandResult(
                    command=self.name,
                    text=f"Unknown command: {target}\n{ctx.usage.render_all()}",
                )
            return CommandResult(command=self.name, text=line)

        logger.debug("help: bad call with %d parameters", len(args))
        return ctx.usage_result(self.name)


class RollCommand(Command):
    name = "roll"
    usage = "!roll <dice> - Rolls a specific dice. Format is xdx, where x is a positive number."

    def execute(self, invocation: Invocation, ctx: CommandContext) -> CommandResult:
        if len(invocation.args) != 1:
            logger.debug("roll: incorrect number of parameters %d", len(invocation.args))
            return ctx.usage_result(self.name)

        spec = invocation.args[0]
        try:
            result = roll(spec)
        except RollError as exc:
            logger.debug("roll: rejected %r (%s)", spec, exc.kind.value)
            return ctx.usage_result(self.name)

        return CommandResult(command=self.name, text=f"You rolled {spec}\nResult: {result}")


class ListMyRolesCommand(Command):
    name = "listmyroles"
    usage = "!listmyroles - Prints your current assigned roles."

    def execute(self, invocation: Invocation, ctx: CommandContext) -> CommandResult:
        if invocation.args:
            return ctx.usage_result(self.name)
        names = my_roles(invocation.author.role_ids, ctx.runtime.roles)
        return CommandResult(
            command=self.name,
            text=f"Your roles are: {format_role_names(names)}",
        )


class _RoleChangeCommand(Command):
    """Shared argument handling for the role self-service placeholders."""

    verb = ""

    @abstractmethod
    def _change(self, role: str, ctx: CommandContext) -> RoleChange:
        """Apply the change for *role* and report whether it is supported."""

    def execute(self, invocation: Invocation, ctx: CommandContext) -> CommandResult:
        if len(invocation.args) != 1:
            return ctx.usage_result(self.name)

        change = self._change(invocation.args[0], ctx)
        if not change.supported:
            logger.info("%s requested for role '%s' but is not supported yet", self.name, change.role)
            return CommandResult(
                command=self.name,
                text=f"Sorry, {self.verb} roles is not available yet.",
                status=ResultStatus.UNSUPPORTED,
            )
        return CommandResult(command=self.name, text=f"Done: `{change.role}`")


class AddRoleCommand(_RoleChangeCommand):
    name = "addrole"
    usage = "!addrole <role> - Adds the requested role to you."
    verb = "adding"

    def _change(self, role: str, ctx: CommandContext) -> RoleChange:
        return add_role(role, ctx.runtime.roles)


class RemoveRoleCommand(_RoleChangeCommand):
    name = "removerole"
    usage = "!removerole <role> - Removes the role from you."
    verb = "removing"

    def _change(self, role: str, ctx: CommandContext) -> RoleChange:
        return remove_role(role, ctx.runtime.roles)


class ListRolesCommand(Command):
    name = "listroles"
    usage = "!listroles - Lists roles you can assign to yourself."

    def execute(self, invocation: Invocation, ctx: CommandContext) -> CommandResult:
        if invocation.args:
            return ctx.usage_result(self.name)
        logger.debug("Listing the available roles")
        names = list_assignable(ctx.runtime.roles)
        return CommandResult(
            command=self.name,
            text=f"The following roles are available: {format_role_names(names)}",
        )


def default_commands() -> list[Command]:
    """The built-in commands, in help-catalog order."""
    return [
        HelpCommand(),
        RollCommand(),
        ListMyRolesCommand(),
        AddRoleCommand(),
        RemoveRoleCommand(),
        ListRolesCommand(),
    ]


def build_dispatcher(runtime: RuntimeContext) -> CommandDispatcher:
    return CommandDispatcher(runtime, default_commands())
