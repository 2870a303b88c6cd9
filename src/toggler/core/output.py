"""
Unified output system using Loguru.
Every user-facing notification is written to the log file and forwarded to
the host, which decides how to display it.
"""

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from toggler.host import Host

LEVELS = ("debug", "info", "warning", "error")


def setup_loguru(
    log_file: Path,
    level: str = "INFO",
    max_file_size_mb: int = 10,
    backup_count: int = 5,
    console_output: bool = False,
) -> None:
    """
    Configure loguru for file logging, with optional stderr output.

    Args:
        log_file: Path to log file
        level: Minimum level for logging (DEBUG, INFO, WARNING, ERROR)
        max_file_size_mb: Size at which the log file is rotated
        backup_count: Number of rotated files to keep
        console_output: Also log to stderr
    """
    # Remove default handler
    logger.remove()

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        rotation=f"{max_file_size_mb} MB",
        retention=backup_count,
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}",
        enqueue=False,
    )

    if console_output:
        logger.add(sys.stderr, level=level, format="{level}: {message}")

    logger.info(f"Loguru initialized: {log_file} (level={level})")


def notify(host: "Host", message: str, level: str = "info") -> None:
    """
    Log a user-facing message and show it through the host.

    Args:
        host: Host used to display the message
        message: User-facing message
        level: Log level (debug, info, warning, error)
    """
    if level not in LEVELS:
        level = "info"

    log_func = getattr(logger, level)
    log_func(message)

    host.notify(message, level)
