"""
Feature domain models.

A feature is a named on/off capability with a getter that reports its current
state and a setter action that changes it. Setter values are resolved once,
when the feature is built, into one of three action variants.
"""

import importlib
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Union

from toggler.domain.errors import ConfigurationError

COMMAND_PREFIX = ":"
EXPRESSION_PREFIX = "="


@dataclass(frozen=True)
class CommandAction:
    """Host command run as-is (e.g. `set spell!`). Expected to self-toggle."""

    command: str


@dataclass(frozen=True)
class KeySequenceAction:
    """Keystrokes fed to the host input stream (e.g. `<C-w>n`)."""

    keys: str


@dataclass(frozen=True)
class CallbackAction:
    """Python callable invoked with the desired state."""

    callback: Callable[[bool], Any]


FeatureAction = Union[CommandAction, KeySequenceAction, CallbackAction]


@dataclass(frozen=True)
class HostExpression:
    """Getter evaluated by the host (e.g. `&spell` in Neovim)."""

    expression: str


Getter = Union[Callable[[], Any], HostExpression]


@dataclass(frozen=True)
class FeatureIcons:
    """Per-feature icons that override the global ones."""

    enabled: Optional[str] = None
    disabled: Optional[str] = None


@dataclass(frozen=True)
class Feature:
    """A user-defined feature that can be toggled on or off.

    Attributes:
        name: Short unique name, used on the command line
        get: Callable returning the current state, or a HostExpression
        set: Resolved setter action
        description: User-friendly description shown in the picker
        icons: Optional per-feature icon overrides
    """

    name: str
    get: Getter
    set: FeatureAction
    description: str = ""
    icons: FeatureIcons = field(default_factory=FeatureIcons)

    @classmethod
    def from_options(cls, options: Dict[str, Any]) -> "Feature":
        """Build a feature from a configuration table.

        Accepts the TOML shapes (`"module:attr"` references, `"=expr"`
        getters, `{callback = "module:attr"}` setters) as well as plain
        Python callables.

        Raises:
            ConfigurationError: If a required field is missing or has the wrong type
        """
        if not isinstance(options, dict):
            raise ConfigurationError(
                f"Feature entry must be a table, got {type(options).__name__}"
            )

        name = options.get("name")
        if not isinstance(name, str) or not name:
            raise ConfigurationError(
                "Feature missing required 'name' field (must be a string)"
            )

        if "get" not in options:
            raise ConfigurationError(f"Feature '{name}' missing required 'get' function")
        if "set" not in options:
            raise ConfigurationError(f"Feature '{name}' missing required 'set' field")

        icons = options.get("icons") or {}
        if isinstance(icons, FeatureIcons):
            feature_icons = icons
        elif isinstance(icons, dict):
            feature_icons = FeatureIcons(
                enabled=icons.get("enabled"), disabled=icons.get("disabled")
            )
        else:
            raise ConfigurationError(f"Feature '{name}' icons must be a table")

        description = options.get("description") or ""
        if not isinstance(description, str):
            raise ConfigurationError(f"Feature '{name}' description must be a string")

        return cls(
            name=name,
            get=resolve_getter(name, options["get"]),
            set=resolve_action(name, options["set"]),
            description=description,
            icons=feature_icons,
        )


def import_reference(reference: str) -> Any:
    """
    Import an object from a `package.module:attribute` reference.

    Raises:
        ConfigurationError: If the reference is malformed or cannot be imported
    """
    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise ConfigurationError(
            f"Invalid reference '{reference}' (expected 'package.module:attribute')"
        )

    try:
        target = importlib.import_module(module_name)
        for attr in attr_path.split("."):
            target = getattr(target, attr)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"Cannot import '{reference}': {e}") from e

    return target


def resolve_getter(name: str, value: Any) -> Getter:
    """Resolve a configured getter into a callable or HostExpression."""
    if isinstance(value, HostExpression):
        return value
    if isinstance(value, str):
        if value.startswith(EXPRESSION_PREFIX):
            expression = value[len(EXPRESSION_PREFIX):].strip()
            if not expression:
                raise ConfigurationError(f"Feature '{name}' has an empty get expression")
            return HostExpression(expression)
        value = import_reference(value)
    if not callable(value):
        raise ConfigurationError(f"Feature '{name}' missing required 'get' function")
    return value


def resolve_action(name: str, value: Any) -> FeatureAction:
    """
    Resolve a configured setter into its action variant.

    A string starting with `:` is a host command, any other string is a key
    sequence, a callable is a callback. `{callback = "module:attr"}` is the
    TOML spelling of a callback.
    """
    if isinstance(value, (CommandAction, KeySequenceAction, CallbackAction)):
        return value
    if isinstance(value, str):
        if value.startswith(COMMAND_PREFIX):
            return CommandAction(value[len(COMMAND_PREFIX):])
        return KeySequenceAction(value)
    if isinstance(value, dict) and "callback" in value:
        reference = value["callback"]
        target = import_reference(reference) if isinstance(reference, str) else reference
        if not callable(target):
            raise ConfigurationError(f"Feature '{name}' set callback is not callable")
        return CallbackAction(target)
    if callable(value):
        return CallbackAction(value)
    raise ConfigurationError(
        f"Feature '{name}' set must be a string or function, got {type(value).__name__}"
    )


def validate_feature(feature: Any, evaluate: Callable[[str], bool]) -> Optional[str]:
    """
    Check that a feature is usable before it is displayed.

    Also calls the getter once, so a getter that raises is caught here rather
    than while building the picker rows.

    Args:
        feature: Feature to check
        evaluate: Host expression evaluator for HostExpression getters

    Returns:
        None if valid, otherwise a human-readable reason
    """
    name = getattr(feature, "name", None)
    if not isinstance(name, str) or not name:
        return "Feature missing required 'name' field (must be a string)"

    getter = getattr(feature, "get", None)
    if not isinstance(getter, HostExpression) and not callable(getter):
        return f"Feature '{name}' missing required 'get' function"

    try:
        if isinstance(getter, HostExpression):
            evaluate(getter.expression)
        else:
            getter()
    except Exception as e:
        return f"Feature '{name}' get function throws error: {e}"

    action = getattr(feature, "set", None)
    if action is None:
        return f"Feature '{name}' missing required 'set' field"
    if not isinstance(action, (CommandAction, KeySequenceAction, CallbackAction)):
        return (
            f"Feature '{name}' set must be a string or function, "
            f"got {type(action).__name__}"
        )

    return None
