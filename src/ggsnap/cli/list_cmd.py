"""List command: Show gluster snapshots."""

import argparse
import logging

from ..__logger__ import create_logger
from ..gluster import GlusterCli, GlusterError
from .common import get_log_level, resolve_config

logger = logging.getLogger(__name__)


def execute_list(args: argparse.Namespace) -> int:
    """Execute the list command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    log_level = get_log_level(args)
    create_logger(log_level)

    config = resolve_config(args)
    if config is None:
        return 1

    try:
        names = GlusterCli(config.general.gluster_bin).list_snapshots()
    except GlusterError as e:
        logger.error("%s", e)
        return 1

    if not names:
        print("No snapshots present")
    for name in names:
        print(name)

    return 0
