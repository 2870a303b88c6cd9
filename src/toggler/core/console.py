"""Centralized Rich Console management."""

from rich.console import Console

_console: Console | None = None
_error_console: Console | None = None


def get_console() -> Console:
    """Get or create the global Rich Console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def get_error_console() -> Console:
    """Get or create the Rich Console that writes to stderr."""
    global _error_console
    if _error_console is None:
        _error_console = Console(stderr=True)
    return _error_console


def safe_print(message: str, style: str | None = None, error: bool = False) -> None:
    """Print using Rich Console with optional styling.

    Args:
        message: The message to print
        style: Optional Rich style string (e.g., "bold red", "green")
        error: Write to stderr instead of stdout
    """
    console = get_error_console() if error else get_console()
    # Feature names may contain brackets, so markup is off
    if style:
        console.print(message, style=style, markup=False, highlight=False)
    else:
        console.print(message, markup=False, highlight=False)
