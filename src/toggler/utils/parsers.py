"""
Argument and command parsing utilities.

Turns a raw command line such as `:Toggler set "Some feature" on` into its
structured parts. Quoting is handled by a small two-state tokenizer; escaped
and nested quotes are not supported.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

QUOTE_CHARS = ('"', "'")

# Accepted status words. Matching is literal, so "On" or "TRUE" are rejected.
STATE_MAP: Dict[str, bool] = {
    "on": True,
    "enabled": True,
    "true": True,
    "off": False,
    "disabled": False,
    "false": False,
}


class _ScanState(Enum):
    UNQUOTED = "unquoted"
    QUOTED = "quoted"


@dataclass(frozen=True)
class ParsedCommand:
    """A command line split into its positional parts.

    Attributes:
        command: Invoking command name (`:Toggler set foo` -> "Toggler")
        subcommand: One of the known subcommands, or whatever the user typed
        feature_name: Name of a configured feature
        status: Desired target status as typed by the user
    """

    command: Optional[str] = None
    subcommand: Optional[str] = None
    feature_name: Optional[str] = None
    status: Optional[str] = None


def tokenize(arg_string: str) -> List[str]:
    """
    Split an argument string into tokens, respecting single and double quotes.

    Quote characters are never part of a token. Only the quote character that
    opened a quoted run closes it; an unmatched quote runs to end of input.
    Empty tokens (including `""`) are never produced.

    Args:
        arg_string: Arguments with the command name already removed

    Returns:
        List of tokens in input order

    Example:
        'set "Multi Word" on' -> ['set', 'Multi Word', 'on']
    """
    tokens: List[str] = []
    current: List[str] = []
    state = _ScanState.UNQUOTED
    quote_char: Optional[str] = None

    for char in arg_string:
        if state is _ScanState.UNQUOTED:
            if char in QUOTE_CHARS:
                state = _ScanState.QUOTED
                quote_char = char
            elif char == " ":
                if current:
                    tokens.append("".join(current))
                    current = []
            else:
                current.append(char)
        else:
            if char == quote_char:
                state = _ScanState.UNQUOTED
                quote_char = None
            else:
                current.append(char)

    if current:
        tokens.append("".join(current))

    return tokens


def parse_command(cmdline: str) -> ParsedCommand:
    """
    Parse a full command line into command, subcommand, feature and status.

    The first whitespace-separated word is the command (a leading `:` is
    dropped). The remaining words are re-joined with single spaces before
    tokenizing, so runs of whitespace inside quotes collapse to one space.

    Args:
        cmdline: Full command line (e.g. `:Toggler set foo on`)

    Returns:
        ParsedCommand with missing parts set to None
    """
    parts = cmdline.split()
    if not parts:
        return ParsedCommand()

    command = parts[0][1:] if parts[0].startswith(":") else parts[0]
    args = tokenize(" ".join(parts[1:]))

    return ParsedCommand(
        command=command or None,
        subcommand=args[0] if len(args) > 0 else None,
        feature_name=args[1] if len(args) > 1 else None,
        status=args[2] if len(args) > 2 else None,
    )


def parse_state(status: Optional[str]) -> Optional[bool]:
    """Map a status word to a boolean, or None when it isn't recognised."""
    if status is None:
        return None
    return STATE_MAP.get(status)


def quote_token(token: str) -> str:
    """
    Quote a token so that `tokenize` reads it back as a single token.

    Tokens without whitespace or quote characters are returned unchanged.
    Double quotes are used unless the token itself contains one. A token
    holding both kinds of quote is split into runs, each wrapped in the quote
    it doesn't contain; adjacent quoted runs tokenize back into one token.

    Example:
        a'b"  ->  "a'b"'"'
    """
    if not any(ch.isspace() or ch in QUOTE_CHARS for ch in token):
        return token

    runs: List[str] = []
    current: List[str] = []
    for char in token:
        if char in QUOTE_CHARS:
            other = "'" if char == '"' else '"'
            if other in current:
                runs.append("".join(current))
                current = []
        current.append(char)
    runs.append("".join(current))

    quoted = []
    for run in runs:
        quote = "'" if '"' in run else '"'
        quoted.append(f"{quote}{run}{quote}")
    return "".join(quoted)


__all__ = [
    "STATE_MAP",
    "ParsedCommand",
    "tokenize",
    "parse_command",
    "parse_state",
    "quote_token",
]
