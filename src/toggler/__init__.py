"""
Toggler - switch editor features on and off from a picker or a command line.

Programmatic use:

    from toggler import AppContext, NvimHost, setup, handle_command

    config = setup({"features": [{"name": "Wrap", "get": "=&wrap", "set": ":set wrap!"}]})
    ctx = AppContext.create(config, NvimHost(nvim))
    handle_command(ctx, "toggle Wrap", picker_callback=lambda: None)
"""

from toggler.actions import ActionResult, execute_feature_action, read_feature_state
from toggler.context import AppContext
from toggler.core.config import TogglerConfig, load_config, setup
from toggler.domain import (
    ActionExecutionError,
    ArgumentError,
    CallbackAction,
    CommandAction,
    ConfigurationError,
    Feature,
    FeatureIcons,
    FeatureLookupError,
    FeatureRegistry,
    HostError,
    HostExpression,
    KeySequenceAction,
    TogglerError,
)
from toggler.host import Host, NvimHost, ShellHost, create_host
from toggler.picker import DisplayRow, FeaturePicker, PickerWidget
from toggler.router import CommandOutcome, complete_command, handle_command
from toggler.utils.parsers import ParsedCommand, parse_command

__version__ = "0.1.0"

__all__ = [
    "ActionResult",
    "execute_feature_action",
    "read_feature_state",
    "AppContext",
    "TogglerConfig",
    "load_config",
    "setup",
    "ActionExecutionError",
    "ArgumentError",
    "CallbackAction",
    "CommandAction",
    "ConfigurationError",
    "Feature",
    "FeatureIcons",
    "FeatureLookupError",
    "FeatureRegistry",
    "HostError",
    "HostExpression",
    "KeySequenceAction",
    "TogglerError",
    "Host",
    "NvimHost",
    "ShellHost",
    "create_host",
    "DisplayRow",
    "FeaturePicker",
    "PickerWidget",
    "CommandOutcome",
    "complete_command",
    "handle_command",
    "ParsedCommand",
    "parse_command",
]
