"""Toggler exceptions for error handling."""


class TogglerError(Exception):
    """Base exception for Toggler operations."""

    pass


class ConfigurationError(TogglerError):
    """Raised when a feature definition is malformed."""

    pass


class FeatureLookupError(TogglerError):
    """Raised when no feature matches the requested name."""

    def __init__(self, feature_name: str, message: str = None):
        self.feature_name = feature_name
        super().__init__(message or f"Feature not found: {feature_name}")


class ArgumentError(TogglerError):
    """Raised when a command is missing a feature name or a valid status."""

    pass


class ActionExecutionError(TogglerError):
    """Raised when a feature's own getter or setter fails."""

    def __init__(self, feature_name: str, message: str):
        self.feature_name = feature_name
        super().__init__(message)


class HostError(TogglerError):
    """Raised when the host cannot perform a primitive."""

    pass
