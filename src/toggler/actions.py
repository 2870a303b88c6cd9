"""Feature action execution for Toggler.

Runs a feature's setter for a desired state and reads its getter. Failures are
reported through the host and returned as results, never raised, so a batch
of toggles keeps going when one of them breaks.
"""

from dataclasses import dataclass
from typing import Optional

from loguru import logger

from toggler.context import AppContext
from toggler.domain.errors import ActionExecutionError
from toggler.domain.features import (
    CallbackAction,
    CommandAction,
    Feature,
    HostExpression,
    KeySequenceAction,
)


@dataclass(frozen=True)
class ActionResult:
    """Outcome of applying a state to one feature."""

    feature_name: str
    state: bool
    ok: bool
    error: Optional[ActionExecutionError] = None


def _run_action(ctx: AppContext, feature: Feature, state: bool) -> None:
    """Dispatch on the setter variant, wrapping any failure."""
    action = feature.set

    if isinstance(action, CommandAction):
        try:
            ctx.host.run_command(action.command)
        except Exception as e:
            raise ActionExecutionError(
                feature.name, f"Failed to execute command '{action.command}': {e}"
            ) from e

    elif isinstance(action, KeySequenceAction):
        try:
            ctx.host.send_keys(action.keys)
        except Exception as e:
            raise ActionExecutionError(
                feature.name, f"Failed to execute keystrokes '{action.keys}': {e}"
            ) from e

    elif isinstance(action, CallbackAction):
        try:
            action.callback(state)
        except Exception as e:
            raise ActionExecutionError(
                feature.name, f"Failed to execute feature setter: {e}"
            ) from e

    else:
        raise ActionExecutionError(
            feature.name,
            f"Feature '{feature.name}' has an unsupported set action: {action!r}",
        )


def execute_feature_action(
    ctx: AppContext, feature: Feature, state: bool
) -> ActionResult:
    """
    Apply a desired state to a feature.

    Command and key-sequence setters don't receive the state; they are
    expected to toggle by themselves. Callback setters are called with it.

    Args:
        ctx: Application context
        feature: Feature to change
        state: Desired state

    Returns:
        ActionResult; on failure the error has already been reported
    """
    logger.debug(f"Setting '{feature.name}' to {state}")
    try:
        _run_action(ctx, feature, state)
    except ActionExecutionError as e:
        ctx.notify(str(e), "error")
        return ActionResult(feature.name, state, ok=False, error=e)

    return ActionResult(feature.name, state, ok=True)


def read_feature_state(ctx: AppContext, feature: Feature) -> bool:
    """
    Read the current state of a feature.

    Raises:
        ActionExecutionError: If the getter (or host expression) fails
    """
    getter = feature.get
    try:
        if isinstance(getter, HostExpression):
            return ctx.host.evaluate(getter.expression)
        return bool(getter())
    except Exception as e:
        raise ActionExecutionError(
            feature.name, f"Failed to read state of '{feature.name}': {e}"
        ) from e
