"""
prompt_toolkit completers for Toggler
Provides autocomplete for subcommands, feature names and status words
"""

from typing import Iterable

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

from toggler.context import AppContext
from toggler.router import COMMAND_NAME, complete_command


class TogglerCompleter(Completer):
    """
    Completer for the interactive prompt.

    The prompt takes the arguments only (`set "Some feature" on`), so the
    command name is prepended before asking the router for candidates.
    Candidates depend on the words *before* the one being typed and are then
    filtered by that partial word.
    """

    def __init__(self, ctx: AppContext):
        self.ctx = ctx

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterable[Completion]:
        """Generate completions for the argument under the cursor."""
        text = document.text_before_cursor
        word = _current_word(text)
        preceding = text[: len(text) - len(word)]

        cmdline = f"{COMMAND_NAME} {preceding}"
        candidates = complete_command(self.ctx, word, cmdline, len(cmdline))

        # A leading quote on the partial word is part of the candidate
        needle = word.lstrip("\"'").lower()
        for candidate in candidates:
            if candidate.lstrip("\"'").lower().startswith(needle):
                yield Completion(
                    candidate,
                    start_position=-len(word),
                    display=candidate,
                    display_meta=self._describe(candidate),
                )

    def _describe(self, candidate: str) -> str:
        feature = self.ctx.registry.lookup(candidate.strip("\"'"))
        if feature is None:
            return ""
        return feature.description


def _current_word(text: str) -> str:
    """
    Return the partial argument at the end of `text`.

    Inside an open quote the word runs back to that quote, so multi-word
    feature names complete as one argument.
    """
    quote_char = None
    start = 0
    for idx, char in enumerate(text):
        if quote_char is None:
            if char in ('"', "'"):
                quote_char = char
                start = idx
            elif char == " ":
                start = idx + 1
        elif char == quote_char:
            quote_char = None

    return text[start:]
