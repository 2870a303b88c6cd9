"""Tests for host implementations."""

from unittest.mock import MagicMock, patch

import pytest

from toggler.core.config import HostConfig
from toggler.domain.errors import HostError
from toggler.host import NvimHost, ShellHost, create_host


class TestShellHost:
    """Shell host primitives."""

    def test_run_command_success(self):
        """A zero exit status is success."""
        ShellHost().run_command("true")

    def test_run_command_failure_carries_stderr(self):
        """stderr becomes the error message."""
        with pytest.raises(HostError, match="bad things"):
            ShellHost().run_command("echo 'bad things' >&2; exit 3")

    def test_run_command_failure_without_output(self):
        """The exit status is used when stderr is empty."""
        with pytest.raises(HostError, match="exit status 3"):
            ShellHost().run_command("exit 3")

    def test_evaluate_uses_exit_status(self):
        """Exit status 0 means enabled."""
        host = ShellHost()
        assert host.evaluate("true") is True
        assert host.evaluate("false") is False

    def test_send_keys_is_unsupported(self):
        """The shell can't take key sequences."""
        with pytest.raises(HostError):
            ShellHost().send_keys("<C-w>v")

    def test_notify_styles_by_level(self):
        """Errors go to stderr in red."""
        with patch("toggler.host.safe_print") as mock_print:
            host = ShellHost()
            host.notify("hello")
            host.notify("broken", "error")

        mock_print.assert_any_call("hello", style=None, error=False)
        mock_print.assert_any_call("broken", style="red", error=True)


class TestNvimHost:
    """Neovim host primitives over a mocked session."""

    @pytest.fixture
    def nvim(self):
        return MagicMock()

    def test_run_command(self, nvim):
        """Commands go to nvim.command."""
        NvimHost(nvim).run_command("set spell!")
        nvim.command.assert_called_once_with("set spell!")

    def test_send_keys_replaces_termcodes(self, nvim):
        """Keys are translated before input."""
        nvim.replace_termcodes.return_value = "\x17v"

        NvimHost(nvim).send_keys("<C-w>v")

        nvim.replace_termcodes.assert_called_once_with("<C-w>v", True, True, True)
        nvim.input.assert_called_once_with("\x17v")

    def test_notify_maps_levels(self, nvim):
        """Levels map to vim.log.levels."""
        host = NvimHost(nvim)
        host.notify("careful", "warning")
        host.notify("broken", "error")

        assert nvim.api.notify.call_args_list[0].args == ("careful", 3, {})
        assert nvim.api.notify.call_args_list[1].args == ("broken", 4, {})

    @pytest.mark.parametrize(
        "value,expected",
        [(1, True), (0, False), ("1", True), ("0", False), ("", False), ("yes", True)],
    )
    def test_evaluate_truthiness(self, nvim, value, expected):
        """Vim truthiness: 0 and empty strings are false."""
        nvim.eval.return_value = value
        assert NvimHost(nvim).evaluate("&spell") is expected

    def test_attach_socket(self):
        """A path attaches over a socket."""
        with patch("toggler.host.pynvim.attach") as mock_attach:
            NvimHost.attach("/tmp/nvim.sock")
        mock_attach.assert_called_once_with("socket", path="/tmp/nvim.sock")

    def test_attach_tcp(self):
        """host:port attaches over TCP."""
        with patch("toggler.host.pynvim.attach") as mock_attach:
            NvimHost.attach("127.0.0.1:6666")
        mock_attach.assert_called_once_with("tcp", address="127.0.0.1", port=6666)

    def test_attach_failure(self):
        """Connection failures become HostError."""
        with patch("toggler.host.pynvim.attach", side_effect=FileNotFoundError("no socket")):
            with pytest.raises(HostError, match="Cannot connect to Neovim at /tmp/x"):
                NvimHost.attach("/tmp/x")


class TestCreateHost:
    """Picking a host from config and the environment."""

    def test_auto_without_address_is_shell(self, monkeypatch):
        """auto falls back to the shell."""
        monkeypatch.delenv("NVIM", raising=False)
        assert isinstance(create_host(HostConfig()), ShellHost)

    def test_auto_uses_nvim_env(self, monkeypatch):
        """auto attaches to $NVIM when set."""
        monkeypatch.setenv("NVIM", "/run/nvim.sock")
        with patch.object(NvimHost, "attach") as mock_attach:
            create_host(HostConfig())
        mock_attach.assert_called_once_with("/run/nvim.sock")

    def test_command_line_overrides_config(self, monkeypatch):
        """Explicit kind and server beat the config."""
        monkeypatch.delenv("NVIM", raising=False)
        config = HostConfig(kind="shell", server="/from/config")
        with patch.object(NvimHost, "attach") as mock_attach:
            create_host(config, kind="nvim", server="/from/cli")
        mock_attach.assert_called_once_with("/from/cli")

    def test_shell_kind_ignores_address(self, monkeypatch):
        """shell never attaches."""
        monkeypatch.setenv("NVIM", "/run/nvim.sock")
        assert isinstance(create_host(HostConfig(kind="shell")), ShellHost)

    def test_nvim_without_address_fails(self, monkeypatch):
        """nvim needs an address."""
        monkeypatch.delenv("NVIM", raising=False)
        with pytest.raises(HostError, match="requires a server address"):
            create_host(HostConfig(kind="nvim"))
