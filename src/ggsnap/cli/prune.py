"""Prune command: Apply the retention policy."""

import argparse
import logging
import time

from ..__logger__ import create_logger
from ..core import remove_old_snapshots
from ..gluster import GlusterError
from .common import get_log_level, resolve_config

logger = logging.getLogger(__name__)


def execute_prune(args: argparse.Namespace) -> int:
    """Execute the prune command.

    Deletes gluster snapshots that fall outside the retention configured
    in the [snapshot] section.

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

    dry_run = getattr(args, "dry_run", False)
    if dry_run:
        logger.info("Dry run mode - showing what would be deleted")

    logger.info("Pruning snapshots at %s", time.ctime())

    try:
        result = remove_old_snapshots(config, dry_run=dry_run)
    except GlusterError as e:
        logger.error("%s", e)
        return 1

    logger.info("Finished at %s", time.ctime())

    if dry_run:
        logger.info(
            "Dry run: would delete %d, keep %d", len(result.deleted), len(result.kept)
        )
    else:
        logger.info(
            "Deleted %d snapshot(s), kept %d", len(result.deleted), len(result.kept)
        )

    if result.failed:
        logger.warning("Encountered %d error(s)", len(result.failed))
        return 1

    return 0
