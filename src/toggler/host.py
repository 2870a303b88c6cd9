"""
Host editor integration for Toggler.

Features act on a host: a running Neovim reached over its RPC socket, or the
plain shell when no editor is available. Both expose the same four primitives
used by the executor and the command handler.
"""

import os
import subprocess
from typing import Any, Optional

import pynvim
from loguru import logger

from toggler.core.config import HostConfig
from toggler.core.console import safe_print
from toggler.domain.errors import HostError

# vim.log.levels
NVIM_LOG_LEVELS = {
    "debug": 1,
    "info": 2,
    "warning": 3,
    "error": 4,
}

LEVEL_STYLES = {
    "debug": "cyan",
    "info": None,
    "warning": "yellow",
    "error": "red",
}


class Host:
    """Primitives a host must provide."""

    name = "host"

    def run_command(self, command: str) -> None:
        """Run a host command (the `:` prefix is already stripped)."""
        raise NotImplementedError

    def send_keys(self, keys: str) -> None:
        """Feed a key sequence into the host input stream."""
        raise NotImplementedError

    def notify(self, message: str, level: str = "info") -> None:
        """Show a message to the user."""
        raise NotImplementedError

    def evaluate(self, expression: str) -> bool:
        """Evaluate a getter expression and return its truthiness."""
        raise NotImplementedError

    def close(self) -> None:
        """Release any connection held by the host."""
        pass


class NvimHost(Host):
    """Host backed by a pynvim session."""

    name = "nvim"

    def __init__(self, nvim: Any):
        self.nvim = nvim

    @classmethod
    def attach(cls, address: str) -> "NvimHost":
        """
        Connect to a running Neovim.

        Args:
            address: Socket path (e.g. /tmp/nvim.sock) or host:port

        Raises:
            HostError: If the connection cannot be made
        """
        try:
            host, sep, port = address.rpartition(":")
            if sep and host and port.isdigit():
                nvim = pynvim.attach("tcp", address=host, port=int(port))
            else:
                nvim = pynvim.attach("socket", path=address)
        except (OSError, EOFError) as e:
            raise HostError(f"Cannot connect to Neovim at {address}: {e}") from e

        logger.debug(f"Attached to Neovim at {address}")
        return cls(nvim)

    def run_command(self, command: str) -> None:
        self.nvim.command(command)

    def send_keys(self, keys: str) -> None:
        keystrokes = self.nvim.replace_termcodes(keys, True, True, True)
        self.nvim.input(keystrokes)

    def notify(self, message: str, level: str = "info") -> None:
        self.nvim.api.notify(message, NVIM_LOG_LEVELS.get(level, 2), {})

    def evaluate(self, expression: str) -> bool:
        value = self.nvim.eval(expression)
        if isinstance(value, str):
            return value not in ("", "0")
        return bool(value)

    def close(self) -> None:
        self.nvim.close()


class ShellHost(Host):
    """
    Standalone host: `:` commands and getter expressions run in the shell.

    A getter expression is enabled when its command exits with status 0. Key
    sequences have nowhere to go and always fail.
    """

    name = "shell"

    def __init__(self, shell_timeout: Optional[float] = 30.0):
        self.shell_timeout = shell_timeout

    def run_command(self, command: str) -> None:
        try:
            subprocess.run(
                command,
                shell=True,
                check=True,
                capture_output=True,
                text=True,
                timeout=self.shell_timeout,
            )
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip() or f"exit status {e.returncode}"
            raise HostError(detail) from e
        except subprocess.TimeoutExpired as e:
            raise HostError(f"timed out after {e.timeout}s") from e

    def send_keys(self, keys: str) -> None:
        raise HostError("key sequences require an editor host (use --server)")

    def notify(self, message: str, level: str = "info") -> None:
        safe_print(message, style=LEVEL_STYLES.get(level), error=level == "error")

    def evaluate(self, expression: str) -> bool:
        try:
            result = subprocess.run(
                expression,
                shell=True,
                capture_output=True,
                timeout=self.shell_timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise HostError(f"'{expression}' timed out after {e.timeout}s") from e
        return result.returncode == 0


def create_host(
    config: HostConfig, kind: Optional[str] = None, server: Optional[str] = None
) -> Host:
    """
    Create the host described by the configuration.

    `auto` picks Neovim when a server address is configured or $NVIM is set
    (as it is in Neovim's terminal buffers), and the shell otherwise.

    Args:
        config: Host configuration
        kind: Override for config.kind (from the command line)
        server: Override for config.server (from the command line)

    Raises:
        HostError: If Neovim is requested without an address or cannot be reached
    """
    kind = kind or config.kind
    address = server or config.server or os.environ.get("NVIM")

    if kind == "shell" or (kind == "auto" and not address):
        return ShellHost()

    if not address:
        raise HostError("Neovim host requires a server address (--server or $NVIM)")

    return NvimHost.attach(address)
