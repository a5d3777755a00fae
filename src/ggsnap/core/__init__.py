"""Core operations for ggsnap.

This module contains the snapshot pruning logic shared by the CLI commands.
"""

from .operations import PruneResult, remove_old_snapshots, select_volume_snapshots

__all__ = [
    "PruneResult",
    "remove_old_snapshots",
    "select_volume_snapshots",
]
