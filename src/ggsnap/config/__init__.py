"""Configuration system for ggsnap.

This module provides discovery and parsing of ggsnap.conf, schema
definitions and the built-in default configuration.
"""

from .loader import (
    ConfigError,
    ConfigReadErr,
    config_search_paths,
    current_exe,
    find_config_file,
    get_config,
    load_config,
    parse_config,
    validate_config,
)
from .schema import (
    Config,
    General,
    MailFromMaster,
    Snapshot,
    default_config,
)

__all__ = [
    "Config",
    "General",
    "MailFromMaster",
    "Snapshot",
    "default_config",
    "get_config",
    "load_config",
    "parse_config",
    "find_config_file",
    "config_search_paths",
    "current_exe",
    "validate_config",
    "ConfigError",
    "ConfigReadErr",
]
