"""Domain layer: features, registry and error taxonomy."""

from .errors import (
    TogglerError,
    ConfigurationError,
    FeatureLookupError,
    ArgumentError,
    ActionExecutionError,
    HostError,
)
from .features import (
    Feature,
    FeatureAction,
    FeatureIcons,
    CommandAction,
    KeySequenceAction,
    CallbackAction,
    HostExpression,
    resolve_action,
    resolve_getter,
    validate_feature,
)
from .registry import FeatureRegistry

__all__ = [
    "TogglerError",
    "ConfigurationError",
    "FeatureLookupError",
    "ArgumentError",
    "ActionExecutionError",
    "HostError",
    "Feature",
    "FeatureAction",
    "FeatureIcons",
    "CommandAction",
    "KeySequenceAction",
    "CallbackAction",
    "HostExpression",
    "resolve_action",
    "resolve_getter",
    "validate_feature",
    "FeatureRegistry",
]
