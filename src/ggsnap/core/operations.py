# pyright: standard

"""ggsnap: ggsnap/core/operations.py
Prune gluster snapshots according to the configured retention.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..__logger__ import logger
from ..config import Config
from ..gluster import GlusterCli, GlusterError, parse_snapshot_list
from ..retention import RetentionPolicy, apply_retention, format_retention_summary


@dataclass
class PruneResult:
    """Outcome of a prune run.

    Attributes:
        listing: Raw output of 'gluster snapshot list'
        kept: Snapshots kept by the retention policy
        deleted: Snapshots deleted, or that would be deleted in a dry run
        failed: Snapshots whose deletion failed, with the error message
        dry_run: Whether deletions were skipped
    """

    listing: str
    kept: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    dry_run: bool = False

    @property
    def success(self) -> bool:
        return not self.failed


def select_volume_snapshots(names: list[str], volume: Optional[str]) -> list[str]:
    """Return the snapshots belonging to volume, or all if volume is None."""
    if volume is None:
        return list(names)
    prefix = f"{volume}_"
    return [n for n in names if n.startswith(prefix)]


def remove_old_snapshots(
    config: Config,
    dry_run: bool = False,
    now: Optional[datetime] = None,
    gluster: Optional[GlusterCli] = None,
) -> PruneResult:
    """Delete snapshots that fall outside the retention in [snapshot].

    Args:
        config: Resolved configuration
        dry_run: Only report what would be deleted
        now: Reference time for the retention, defaults to now
        gluster: Gateway to use, defaults to one for general.gluster_bin

    Returns:
        PruneResult describing kept and deleted snapshots

    Raises:
        GlusterError: If the snapshots cannot be listed
    """
    if gluster is None:
        gluster = GlusterCli(config.general.gluster_bin)

    listing = gluster.list_snapshots_raw()
    names = parse_snapshot_list(listing)
    logger.debug("gluster lists %d snapshot(s)", len(names))

    volume = config.snapshot.master_volume
    candidates = select_volume_snapshots(names, volume)
    if volume is not None and names and not candidates:
        logger.warning(
            "None of %d snapshot(s) is named %s_..., nothing to prune",
            len(names),
            volume,
        )
    elif volume is not None:
        logger.info(
            "%d of %d snapshot(s) belong to volume %s",
            len(candidates),
            len(names),
            volume,
        )

    policy = RetentionPolicy.from_config(config.snapshot)
    logger.info("Retention: %s", format_retention_summary(policy))

    to_keep, to_delete = apply_retention(candidates, policy, now=now)
    result = PruneResult(listing=listing, kept=to_keep, dry_run=dry_run)

    for name in to_delete:
        if dry_run:
            logger.info("Would delete: %s", name)
            result.deleted.append(name)
            continue
        try:
            gluster.delete_snapshot(name)
        except GlusterError as e:
            logger.error("Failed to delete %s: %s", name, e)
            result.failed[name] = str(e)
            continue
        logger.info("Deleted: %s", name)
        result.deleted.append(name)

    return result
