"""Shared CLI utilities and argument parsers."""

import argparse
import logging
from typing import Optional

from ..config import (
    Config,
    ConfigError,
    ConfigReadErr,
    default_config,
    get_config,
    load_config,
    validate_config,
)

logger = logging.getLogger(__name__)


def add_verbosity_args(parser: argparse.ArgumentParser) -> None:
    """Add verbosity-related arguments to a parser."""
    group = parser.add_argument_group("Output options")
    group.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    group.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-essential output",
    )
    group.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )


def get_log_level(args: argparse.Namespace) -> str:
    """Determine log level from parsed arguments.

    Args:
        args: Parsed command line arguments

    Returns:
        Log level string (DEBUG, INFO, WARNING, ERROR)
    """
    if getattr(args, "debug", False):
        return "DEBUG"
    elif getattr(args, "quiet", False):
        return "WARNING"
    elif getattr(args, "verbose", False):
        return "DEBUG"
    else:
        return "INFO"


def resolve_config(args: argparse.Namespace) -> Optional[Config]:
    """Load the configuration for a command, logging any failure.

    An explicit --config file is loaded directly, otherwise the standard
    locations are searched. With --allow-default, a missing config file
    falls back to the built-in defaults.

    Returns:
        Config, or None if it could not be loaded
    """
    explicit = getattr(args, "config", None)
    try:
        if explicit:
            config = load_config(explicit)
        else:
            config = get_config()
    except ConfigError as e:
        if e.kind is ConfigReadErr.CONFIG_NOT_FOUND and getattr(
            args, "allow_default", False
        ):
            logger.warning("%s", e.message)
            logger.warning("Using default configuration")
            config = default_config()
        else:
            logger.error("Configuration error: %s", e.message)
            return None

    for warning in validate_config(config):
        logger.warning("Config: %s", warning)

    return config
