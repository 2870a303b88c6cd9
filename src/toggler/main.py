"""
Toggler - session wiring and interactive loop
"""

from typing import Callable

from loguru import logger
from prompt_toolkit import PromptSession

from toggler.completers import TogglerCompleter
from toggler.context import AppContext
from toggler.picker import FeaturePicker, PickerWidget
from toggler.router import CommandOutcome, handle_command

EXIT_COMMANDS = ("quit", "exit")


def make_picker_callback(
    ctx: AppContext, widget: PickerWidget | None = None
) -> Callable[[], None]:
    """Return a callback that opens the feature picker.

    Args:
        ctx: Application context
        widget: Picker widget (defaults to the Textual picker)
    """
    if widget is None:
        from toggler.ui.textual import TextualPickerWidget

        widget = TextualPickerWidget(ctx.config.highlights)

    return FeaturePicker(ctx, widget).open


def run_command(
    ctx: AppContext, args: str, widget: PickerWidget | None = None
) -> CommandOutcome:
    """Run a single `Toggler ...` command line (without the command name)."""
    outcome = handle_command(ctx, args, make_picker_callback(ctx, widget))
    logger.debug(f"Command '{args}' finished: {outcome.value}")
    return outcome


def interactive_mode(ctx: AppContext, widget: PickerWidget | None = None) -> None:
    """Run the interactive command loop.

    Each line is handled exactly like `:Toggler <line>`. Tab completes
    subcommands, feature names and status words.
    """
    picker_callback = make_picker_callback(ctx, widget)
    session: PromptSession = PromptSession(
        message="toggler> ",
        completer=TogglerCompleter(ctx),
        complete_while_typing=False,
    )

    while True:
        try:
            line = session.prompt()
        except KeyboardInterrupt:
            # Ctrl+C cancels the current line only
            continue
        except EOFError:
            break

        line = line.strip()
        if not line:
            continue
        if line in EXIT_COMMANDS:
            break

        outcome = handle_command(ctx, line, picker_callback)
        logger.debug(f"Command '{line}' finished: {outcome.value}")
