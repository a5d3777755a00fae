"""Config command: Configuration management."""

import argparse
import logging

from ..__logger__ import create_logger
from ..config import (
    Config,
    ConfigError,
    config_search_paths,
    get_config,
    load_config,
    validate_config,
)
from ..config.loader import generate_example_config
from .common import get_log_level, resolve_config

logger = logging.getLogger(__name__)


def execute_config(args: argparse.Namespace) -> int:
    """Execute the config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    log_level = get_log_level(args)
    create_logger(log_level)

    action = getattr(args, "config_action", None)

    if action == "validate":
        return _validate_config(args)
    elif action == "show":
        return _show_config(args)
    elif action == "init":
        return _init_config(args)
    else:
        print("Usage: ggsnap config <validate|show|init>")
        return 1


def _validate_config(args: argparse.Namespace) -> int:
    """Validate configuration file."""
    explicit = getattr(args, "config", None)
    try:
        if explicit:
            print(f"Validating: {explicit}")
            config = load_config(explicit)
        else:
            print("Searched locations:")
            for path in config_search_paths():
                print(f"  {path}")
            config = get_config()
    except ConfigError as e:
        print(f"Configuration error: {e.message}")
        return 1

    warnings = validate_config(config)
    if warnings:
        print("")
        print("Warnings:")
        for warning in warnings:
            print(f"  - {warning}")

    print("")
    print("Configuration is valid.")
    _print_summary(config)

    return 0


def _show_config(args: argparse.Namespace) -> int:
    """Show the effective configuration."""
    config = resolve_config(args)
    if config is None:
        return 1
    _print_summary(config)
    return 0


def _print_summary(config: Config) -> None:
    snapshot = config.snapshot
    print(f"  gluster_bin: {config.general.gluster_bin}")
    print(f"  ggsnap_slave_bin: {config.general.ggsnap_slave_bin}")
    print(f"  Days with every snapshot: {snapshot.number_days_every_day}")
    print(f"  Months with two snapshots: {snapshot.number_months_with_two}")
    print(f"  Months in total: {snapshot.number_months_total}")
    if snapshot.replication_configured:
        print(
            f"  Replication: {snapshot.master_volume} -> "
            f"{snapshot.slave_user}@{snapshot.slave_hostname}:{snapshot.slave_volume}"
        )
    else:
        print("  Replication: not configured")
    mail = config.mail_from_master
    if mail is None:
        print("  Mail: not configured")
    else:
        state = "enabled" if mail.enable else "disabled"
        print(f"  Mail: {state}, to {', '.join(mail.to_addresses)}")


def _init_config(args: argparse.Namespace) -> int:
    """Generate example configuration."""
    content = generate_example_config()

    output = getattr(args, "output", None)
    if output:
        try:
            with open(output, "w") as f:
                f.write(content)
            print(f"Example configuration written to: {output}")
        except OSError as e:
            print(f"Error writing file: {e}")
            return 1
    else:
        print(content)

    return 0
