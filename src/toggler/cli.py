"""
Command-line interface for Toggler.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from loguru import logger

from toggler.context import AppContext
from toggler.core.config import TogglerConfig, get_log_file_path, load_config
from toggler.core.console import safe_print
from toggler.core.output import setup_loguru
from toggler.domain.errors import HostError
from toggler.host import create_host
from toggler.main import interactive_mode, run_command
from toggler.utils.parsers import quote_token

EPILOG = """
Examples:
  toggler                          Open the picker
  toggler get Spelling             Report whether Spelling is enabled
  toggler set "Line numbers" off   Force a multi-word feature off
  toggler toggle Spelling          Flip Spelling
  toggler -i                       Interactive prompt with tab completion
"""


def join_args(args: Sequence[str]) -> str:
    """Re-join shell arguments so each one survives tokenizing as one token."""
    return " ".join(quote_token(arg) for arg in args if arg)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toggler",
        description="Toggler - switch editor features on and off",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", type=Path, help="Path to config.toml")
    parser.add_argument(
        "--server", help="Neovim server address (socket path or host:port)"
    )
    parser.add_argument(
        "--host",
        choices=["auto", "nvim", "shell"],
        help="Host the features act upon (default: from config)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Override the configured log level",
    )
    parser.add_argument(
        "-i",
        "--interactive",
        action="store_true",
        help="Start an interactive prompt",
    )
    parser.add_argument(
        "args",
        nargs="*",
        help="[get|set|toggle|picker] [feature] [on|off|true|false|enabled|disabled]",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the toggler command.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = build_parser().parse_args(argv)

    # Log to the default file until the configured sink is known
    setup_loguru(get_log_file_path(TogglerConfig()))
    config = load_config(args.config)
    if args.log_level:
        config.logging.level = args.log_level

    setup_loguru(
        get_log_file_path(config),
        level=config.logging.level,
        max_file_size_mb=config.logging.max_file_size_mb,
        backup_count=config.logging.backup_count,
        console_output=config.logging.console_output,
    )

    try:
        host = create_host(config.host, kind=args.host, server=args.server)
    except HostError as e:
        logger.error(str(e))
        safe_print(str(e), style="red", error=True)
        return 1

    try:
        ctx = AppContext.create(config, host)

        if args.interactive:
            interactive_mode(ctx)
            return 0

        outcome = run_command(ctx, join_args(args.args))
        return 0 if outcome.succeeded else 1
    finally:
        host.close()


if __name__ == "__main__":
    sys.exit(main())
