"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging and notifications (Loguru)
- Console management (Rich)
"""

# Configuration
from .config import (
    DEFAULTS,
    TogglerConfig,
    PickerWindowConfig,
    IconsConfig,
    HostConfig,
    LoggingConfig,
    setup,
    load_config,
    build_config,
    deep_merge,
    get_config_dir,
    get_config_path,
    get_data_dir,
    get_log_file_path,
    create_default_config,
)

# Output
from .output import setup_loguru, notify

# Console
from .console import get_console, safe_print

__all__ = [
    # Config
    "DEFAULTS",
    "TogglerConfig",
    "PickerWindowConfig",
    "IconsConfig",
    "HostConfig",
    "LoggingConfig",
    "setup",
    "load_config",
    "build_config",
    "deep_merge",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "get_log_file_path",
    "create_default_config",
    # Output
    "setup_loguru",
    "notify",
    # Console
    "get_console",
    "safe_print",
]
