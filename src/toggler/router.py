"""
Command routing for Toggler.

For these examples `foo` is the name of a configured feature:

  Toggler get foo          Report whether foo is enabled
  Toggler set foo on       Force foo on (off/true/false/enabled/disabled work too)
  Toggler toggle foo       Turn foo on if it's off and off if it's on
  Toggler picker           Open the picker (also the default with no subcommand)

Feature names with spaces must be quoted: `Toggler toggle "Some feature"`.
"""

from enum import Enum
from typing import Callable, List, Optional

from toggler.actions import execute_feature_action, read_feature_state
from toggler.context import AppContext
from toggler.domain.errors import ActionExecutionError, ArgumentError, FeatureLookupError
from toggler.domain.features import Feature
from toggler.utils.parsers import STATE_MAP, parse_command, parse_state, quote_token

COMMAND_NAME = "Toggler"

SUBCOMMANDS: List[str] = ["get", "set", "toggle", "picker"]

FEATURE_SUBCOMMANDS = ("get", "set", "toggle")


class CommandOutcome(Enum):
    """Terminal state reached by handle_command."""

    PICKER = "picker"
    SUBCOMMAND_INVALID = "subcommand_invalid"
    NEEDS_FEATURE_NAME = "needs_feature_name"
    FEATURE_NOT_FOUND = "feature_not_found"
    NEEDS_STATUS = "needs_status"
    EXECUTED = "executed"
    ACTION_FAILED = "action_failed"

    @property
    def succeeded(self) -> bool:
        return self in (CommandOutcome.PICKER, CommandOutcome.EXECUTED)


def get_feature_or_error(ctx: AppContext, feature_name: str) -> Optional[Feature]:
    """
    Look a feature up by name, reporting an error if it isn't configured.

    A miss usually means a typo, either in the configuration or on the
    command line.
    """
    try:
        return ctx.registry.require(feature_name)
    except FeatureLookupError as e:
        ctx.notify(str(e), "error")
        return None


def _report(ctx: AppContext, error: ArgumentError) -> None:
    ctx.notify(str(error), "error")


def handle_command(
    ctx: AppContext, args: str, picker_callback: Callable[[], object]
) -> CommandOutcome:
    """
    Handle one `Toggler ...` invocation.

    Walks the command word by word: validate the subcommand, resolve the
    feature, then read or change its state. Every failure is reported through
    the host and ends the command; nothing is raised.

    Args:
        ctx: Application context
        args: Everything after the command name (e.g. `set "Some feature" on`)
        picker_callback: Opens the picker

    Returns:
        The outcome the command ended in
    """
    command = parse_command(f"{COMMAND_NAME} {args}")
    subcommand = command.subcommand

    if subcommand is not None and subcommand not in SUBCOMMANDS:
        _report(
            ctx,
            ArgumentError(
                f"Unknown subcommand: {subcommand}. Use: {', '.join(SUBCOMMANDS)}"
            ),
        )
        return CommandOutcome.SUBCOMMAND_INVALID

    # Picker takes no arguments, anything after the subcommand is ignored
    if subcommand is None or subcommand == "picker":
        picker_callback()
        return CommandOutcome.PICKER

    if not command.feature_name:
        _report(
            ctx, ArgumentError(f"{COMMAND_NAME} {subcommand} requires a feature name")
        )
        return CommandOutcome.NEEDS_FEATURE_NAME

    feature = get_feature_or_error(ctx, command.feature_name)
    if feature is None:
        return CommandOutcome.FEATURE_NOT_FOUND

    if subcommand in ("toggle", "get"):
        try:
            current_state = read_feature_state(ctx, feature)
        except ActionExecutionError as e:
            ctx.notify(str(e), "error")
            return CommandOutcome.ACTION_FAILED

        if subcommand == "get":
            status = "enabled" if current_state else "disabled"
            ctx.notify(f"{feature.name} is {status}")
            return CommandOutcome.EXECUTED

        result = execute_feature_action(ctx, feature, not current_state)
        return CommandOutcome.EXECUTED if result.ok else CommandOutcome.ACTION_FAILED

    target_state = parse_state(command.status)
    if target_state is None:
        _report(
            ctx,
            ArgumentError(
                f"{COMMAND_NAME} {subcommand} requires a desired status "
                f"({', '.join(STATE_MAP)})"
            ),
        )
        return CommandOutcome.NEEDS_STATUS

    result = execute_feature_action(ctx, feature, target_state)
    return CommandOutcome.EXECUTED if result.ok else CommandOutcome.ACTION_FAILED


def complete_command(
    ctx: AppContext, arg_lead: str, cmdline: str, cursor_pos: int
) -> List[str]:
    """
    Completion candidates for the next argument of a command line.

    Only the number of arguments already typed matters; candidates are not
    filtered by `arg_lead`.

    Args:
        ctx: Application context
        arg_lead: Leading portion of the argument being completed (unused)
        cmdline: Entire command line typed so far, command name included
        cursor_pos: Cursor position in the command line (unused)

    Returns:
        Subcommands, feature names (quoted when they contain spaces) or status words
    """
    command = parse_command(cmdline)

    if not command.subcommand:
        return list(SUBCOMMANDS)

    if command.subcommand in FEATURE_SUBCOMMANDS and not command.feature_name:
        return [quote_token(name) for name in ctx.registry.names()]

    if command.subcommand == "set" and command.feature_name and not command.status:
        return list(STATE_MAP)

    return []
