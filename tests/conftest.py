"""Shared fixtures for Toggler tests."""

from typing import Callable, Dict, List, Optional, Tuple

import pytest

from toggler.context import AppContext
from toggler.core.config import TogglerConfig
from toggler.domain.features import Feature
from toggler.host import Host


class FakeHost(Host):
    """Host that records every primitive call instead of talking to an editor."""

    name = "fake"

    def __init__(self, expressions: Optional[Dict[str, bool]] = None):
        self.commands: List[str] = []
        self.keys: List[str] = []
        self.notifications: List[Tuple[str, str]] = []
        self.expressions = expressions or {}
        self.fail_commands = False

    def run_command(self, command: str) -> None:
        if self.fail_commands:
            raise RuntimeError(f"E492: Not an editor command: {command}")
        self.commands.append(command)

    def send_keys(self, keys: str) -> None:
        self.keys.append(keys)

    def notify(self, message: str, level: str = "info") -> None:
        self.notifications.append((message, level))

    def evaluate(self, expression: str) -> bool:
        if expression not in self.expressions:
            raise RuntimeError(f"E121: Undefined variable: {expression}")
        return self.expressions[expression]

    def errors(self) -> List[str]:
        return [message for message, level in self.notifications if level == "error"]

    def infos(self) -> List[str]:
        return [message for message, level in self.notifications if level == "info"]


class Switch:
    """A boolean feature backed by a Python attribute."""

    def __init__(self, enabled: bool = False):
        self.enabled = enabled
        self.calls: List[bool] = []

    def get(self) -> bool:
        return self.enabled

    def set(self, state: bool) -> None:
        self.calls.append(state)
        self.enabled = state


def make_ctx(features: List[Feature], host: Optional[Host] = None) -> AppContext:
    return AppContext.create(TogglerConfig(features=features), host or FakeHost())


@pytest.fixture
def host() -> FakeHost:
    return FakeHost(expressions={"&spell": False})


@pytest.fixture
def switch() -> Switch:
    return Switch(enabled=True)


@pytest.fixture
def features(switch: Switch) -> List[Feature]:
    """Three features, one per setter kind."""
    return [
        Feature.from_options(
            {
                "name": "Spelling",
                "description": "Show a red underline for spelling errors.",
                "get": "=&spell",
                "set": ":set spell!",
            }
        ),
        Feature.from_options(
            {
                "name": "Zen Mode",
                "description": "Hide everything but the buffer.",
                "get": switch.get,
                "set": switch.set,
            }
        ),
        Feature.from_options(
            {
                "name": "Split",
                "get": lambda: False,
                "set": "<C-w>v",
            }
        ),
    ]


@pytest.fixture
def ctx(features: List[Feature], host: FakeHost) -> AppContext:
    return make_ctx(features, host)


@pytest.fixture
def picker_calls() -> List[str]:
    return []


@pytest.fixture
def picker_callback(picker_calls: List[str]) -> Callable[[], None]:
    return lambda: picker_calls.append("opened")
