"""
Configuration management for Toggler
"""

import copy
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

from toggler.domain.errors import ConfigurationError
from toggler.domain.features import Feature

HOST_KINDS = ("auto", "nvim", "shell")
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")
INVALID_FEATURE_PREFIX = "Toggler: Invalid feature configuration: "


@dataclass
class PickerWindowConfig:
    """Configuration for the picker window."""

    title: str = "Toggle Distractions"
    prompt: str = "❯ "


@dataclass
class IconsConfig:
    """Global icons, overridable per feature."""

    enabled: str = "[x]"
    disabled: str = "[ ]"


@dataclass
class HostConfig:
    """Configuration for the editor host the features act upon."""

    kind: str = "auto"  # auto, nvim or shell
    server: Optional[str] = None  # Neovim socket path or host:port


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/toggler/toggler.log)
    )
    max_file_size_mb: int = 10
    backup_count: int = 5
    console_output: bool = False  # Also log to stderr (for debugging)


def _default_highlights() -> Dict[str, str]:
    # Group name -> rich style
    return {
        "TogglerPickerIconOn": "green",
        "TogglerPickerNameOn": "bold",
        "TogglerPickerDescriptionOn": "dim",
        "TogglerPickerIconOff": "red",
        "TogglerPickerNameOff": "bold",
        "TogglerPickerDescriptionOff": "dim",
        "TogglerPickerIconOnSelected": "reverse",
        "TogglerPickerNameOnSelected": "bold reverse",
        "TogglerPickerDescriptionOnSelected": "reverse",
        "TogglerPickerIconOffSelected": "reverse",
        "TogglerPickerNameOffSelected": "bold reverse",
        "TogglerPickerDescriptionOffSelected": "reverse",
    }


@dataclass
class TogglerConfig:
    """Main configuration object.

    `errors` collects problems found while loading (rejected feature
    entries, unreadable file) so they can be reported once a host exists.
    """

    features: List[Feature] = field(default_factory=list)
    window: PickerWindowConfig = field(default_factory=PickerWindowConfig)
    icons: IconsConfig = field(default_factory=IconsConfig)
    highlights: Dict[str, str] = field(default_factory=_default_highlights)
    host: HostConfig = field(default_factory=HostConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    errors: List[str] = field(default_factory=list)


# Raw defaults merged under user options by setup(). You're really supposed to
# define your own features; Spelling is here as a minimal example.
DEFAULTS: Dict[str, Any] = {
    "features": [
        {
            "name": "Spelling",
            "description": "Show a red underline for spelling errors.",
            "get": "=&spell",
            "set": ":set spell!",
        },
    ],
    "window": {
        "title": "Toggle Distractions",
        "prompt": "❯ ",
    },
    "icons": {
        "enabled": "[x]",
        "disabled": "[ ]",
    },
    "highlights": _default_highlights(),
    "host": {
        "kind": "auto",
    },
    "logging": {
        "level": "INFO",
    },
}


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "toggler"
    return Path.home() / ".config" / "toggler"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "toggler"
    return Path.home() / ".local" / "share" / "toggler"


def get_log_file_path(config: TogglerConfig) -> Path:
    """Get the log file path, honouring a custom `logging.log_file`."""
    if config.logging.log_file:
        return Path(config.logging.log_file)
    return get_data_dir() / "toggler.log"


def get_config_path(explicit: Optional[Path] = None) -> Path:
    """Get the main configuration file path.

    Checks in the following order:
    1. Explicit path (from --config)
    2. toggler.toml in the current working directory
    3. XDG_CONFIG_HOME/toggler/config.toml (or ~/.config/toggler/config.toml)
    """
    if explicit is not None:
        return Path(explicit).expanduser()

    local_config = Path.cwd() / "toggler.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# Toggler Configuration

# Each [[features]] entry is one thing you can toggle.
#   get: "=<expression>"     evaluated by the host (Neovim expression, or a
#                            shell command that exits 0 when enabled)
#        "package.module:fn" Python callable returning True/False
#   set: ":<command>"        host command, expected to toggle by itself
#        "<keys>"            key sequence fed to the editor (e.g. "<C-w>n")
#        { callback = "package.module:fn" }  called with the desired state
[[features]]
name = "Spelling"
description = "Show a red underline for spelling errors."
get = "=&spell"
set = ":set spell!"

[window]
title = "Toggle Distractions"
prompt = "❯ "

[icons]
enabled = "[x]"
disabled = "[ ]"

[host]
# auto: use Neovim when a server address (or $NVIM) is available, else the shell
kind = "auto"
# server = "/tmp/nvim.sock"

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/toggler/toggler.log)
# log_file = "/path/to/custom/toggler.log"

# Also output logs to stderr (useful for debugging)
console_output = false
""".strip()


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge `override` over `base` without mutating either.

    Nested tables are merged key by key; any other value from `override`,
    lists included, replaces the one in `base`.
    """
    merged = copy.copy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def build_features(entries: Any) -> tuple[List[Feature], List[str]]:
    """
    Build features from raw entries, skipping the malformed ones.

    Returns:
        (features, errors) - valid features in order, and one message per rejected entry
    """
    features: List[Feature] = []
    errors: List[str] = []

    if not isinstance(entries, list):
        return features, [f"{INVALID_FEATURE_PREFIX}'features' must be a list of tables"]

    for entry in entries:
        if isinstance(entry, Feature):
            features.append(entry)
            continue
        try:
            features.append(Feature.from_options(entry))
        except ConfigurationError as e:
            logger.warning(f"Skipping invalid feature: {e}")
            errors.append(f"{INVALID_FEATURE_PREFIX}{e}")

    return features, errors


def _section(options: Dict[str, Any], name: str, errors: List[str]) -> Dict[str, Any]:
    """Return the `[name]` table, or {} (reported) when it isn't a table."""
    data = options.get(name, {})
    if isinstance(data, dict):
        return data
    errors.append(f"Toggler: Invalid [{name}] section (must be a table). Using defaults.")
    return {}


def _option(
    section: str,
    data: Dict[str, Any],
    key: str,
    default: Any,
    expected: type,
    errors: List[str],
) -> Any:
    """Return `data[key]` if it has the expected type, else report it and use `default`."""
    if key not in data:
        return default
    value = data[key]
    # bool is an int subclass but never a valid number here
    if isinstance(value, expected) and (expected is bool or not isinstance(value, bool)):
        return value
    errors.append(
        f"Toggler: Invalid {section}.{key} = {value!r} (must be {expected.__name__}). "
        f"Using {default!r}."
    )
    return default


def build_config(options: Dict[str, Any]) -> TogglerConfig:
    """Build a TogglerConfig from already-merged options.

    Malformed values never raise: each one is reported in `config.errors` and
    replaced by its default.
    """
    config = TogglerConfig()
    config.features, config.errors = build_features(options.get("features", []))
    errors = config.errors

    window_data = _section(options, "window", errors)
    defaults = PickerWindowConfig()
    config.window = PickerWindowConfig(
        title=_option("window", window_data, "title", defaults.title, str, errors),
        prompt=_option("window", window_data, "prompt", defaults.prompt, str, errors),
    )

    icons_data = _section(options, "icons", errors)
    default_icons = IconsConfig()
    config.icons = IconsConfig(
        enabled=_option("icons", icons_data, "enabled", default_icons.enabled, str, errors),
        disabled=_option("icons", icons_data, "disabled", default_icons.disabled, str, errors),
    )

    for group, style in _section(options, "highlights", errors).items():
        if isinstance(style, str):
            config.highlights[group] = style
        else:
            errors.append(
                f"Toggler: Invalid highlights.{group} = {style!r} (must be a style string)"
            )

    host_data = _section(options, "host", errors)
    kind = _option("host", host_data, "kind", "auto", str, errors)
    if kind not in HOST_KINDS:
        errors.append(f"Toggler: Invalid host kind '{kind}'. Use: {', '.join(HOST_KINDS)}")
        kind = "auto"
    config.host = HostConfig(
        kind=kind, server=_option("host", host_data, "server", None, str, errors)
    )

    logging_data = _section(options, "logging", errors)
    defaults_log = LoggingConfig()

    level = _option("logging", logging_data, "level", defaults_log.level, str, errors).upper()
    if level not in LOG_LEVELS:
        errors.append(f"Toggler: Invalid log level '{level}'. Use: {', '.join(LOG_LEVELS)}")
        level = defaults_log.level

    log_file = _option("logging", logging_data, "log_file", None, str, errors)
    if log_file:
        log_file = str(Path(log_file).expanduser())

    max_size = _option(
        "logging", logging_data, "max_file_size_mb", defaults_log.max_file_size_mb, int, errors
    )
    if max_size < 1:
        errors.append(f"Toggler: Invalid logging.max_file_size_mb = {max_size} (must be >= 1)")
        max_size = defaults_log.max_file_size_mb

    backup_count = _option(
        "logging", logging_data, "backup_count", defaults_log.backup_count, int, errors
    )
    if backup_count < 0:
        errors.append(f"Toggler: Invalid logging.backup_count = {backup_count} (must be >= 0)")
        backup_count = defaults_log.backup_count

    config.logging = LoggingConfig(
        level=level,
        log_file=log_file,
        max_file_size_mb=max_size,
        backup_count=backup_count,
        console_output=_option(
            "logging", logging_data, "console_output", defaults_log.console_output, bool, errors
        ),
    )

    return config


def setup(options: Optional[Dict[str, Any]] = None) -> TogglerConfig:
    """
    Merge user options over DEFAULTS and build the configuration.

    Args:
        options: User configuration (same shape as the TOML file)

    Returns:
        Built configuration
    """
    return build_config(deep_merge(DEFAULTS, options or {}))


def load_config(path: Optional[Path] = None) -> TogglerConfig:
    """Load configuration from file or create default.

    Environment variables override TOML values:
    - TOGGLER_SERVER
    """
    # Load .env file from config directory if it exists
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = get_config_path(path)

    if not config_path.exists():
        if path is not None:
            logger.warning(f"Configuration file not found: {config_path}")
            config = setup()
        else:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, "w", encoding="utf-8") as f:
                f.write(create_default_config())
            logger.info(f"Created default configuration at: {config_path}")
            config = setup()
    else:
        try:
            with open(config_path, "rb") as f:
                toml_data = tomllib.load(f)
            config = setup(toml_data)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.error(f"Error loading configuration from {config_path}: {e}")
            config = setup()
            config.errors.append(
                f"Toggler: Could not read {config_path}: {e}. Using default configuration."
            )

    server = os.environ.get("TOGGLER_SERVER")
    if server:
        config.host.server = server

    return config
