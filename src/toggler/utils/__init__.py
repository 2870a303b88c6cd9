"""Cross-cutting utilities."""

from .parsers import STATE_MAP, ParsedCommand, parse_command, parse_state, quote_token, tokenize

__all__ = ["STATE_MAP", "ParsedCommand", "parse_command", "parse_state", "quote_token", "tokenize"]
