"""Time-based retention for gluster snapshots.

Gluster appends the creation time to snapshot names as
``_GMT-YYYY.MM.DD-HH.MM.SS``. Snapshots are kept in tiers:

- every snapshot younger than ``days_every_day`` days,
- after that, two per month (one from each half of the month) for the
  ``months_with_two`` most recent months,
- one per month up to ``months_total`` months,
- nothing older.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from .__logger__ import logger
from .config.schema import Snapshot

SNAPSHOT_TIME_RE = re.compile(
    r"_GMT-(\d{4})\.(\d{2})\.(\d{2})-(\d{2})\.(\d{2})\.(\d{2})$"
)


@dataclass(frozen=True)
class RetentionPolicy:
    """How many snapshots to keep, taken from the [snapshot] section."""

    days_every_day: int
    months_with_two: int
    months_total: int

    @classmethod
    def from_config(cls, snapshot: Snapshot) -> "RetentionPolicy":
        return cls(
            days_every_day=snapshot.number_days_every_day,
            months_with_two=snapshot.number_months_with_two,
            months_total=snapshot.number_months_total,
        )


def parse_snapshot_time(name: str) -> Optional[datetime]:
    """Extract the GMT creation time from a snapshot name.

    Returns:
        Timezone-aware datetime, or None if the name carries no valid time
    """
    match = SNAPSHOT_TIME_RE.search(name)
    if not match:
        return None
    try:
        return datetime(*(int(g) for g in match.groups()), tzinfo=timezone.utc)
    except ValueError:
        return None


def month_age(ts: datetime, now: datetime) -> int:
    """Number of calendar months between ts and now (0 = same month)."""
    return (now.year - ts.year) * 12 + now.month - ts.month


def apply_retention(
    names: Iterable[str],
    policy: RetentionPolicy,
    now: Optional[datetime] = None,
) -> tuple[list[str], list[str]]:
    """Split snapshot names into those to keep and those to delete.

    Args:
        names: Snapshot names as listed by gluster
        policy: Retention counters
        now: Reference time, defaults to the current UTC time

    Returns:
        Tuple of (names to keep, names to delete). Dated names are ordered
        newest first, names without a date lead the keep list.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    dated = []
    undated = []
    for name in names:
        ts = parse_snapshot_time(name)
        if ts is None:
            logger.warning("Could not parse date from: %r, keeping it", name)
            undated.append(name)
        else:
            dated.append((ts, name))

    # Newest first so the first snapshot seen in a bucket is the one kept
    dated.sort(reverse=True)

    daily_cutoff = now - timedelta(days=policy.days_every_day)
    keep = []
    delete = []
    seen_buckets = set()

    for ts, name in dated:
        if ts > daily_cutoff:
            keep.append(name)
            continue

        age = month_age(ts, now)
        if age >= policy.months_total:
            delete.append(name)
            continue

        if age < policy.months_with_two:
            bucket = (ts.year, ts.month, 0 if ts.day <= 15 else 1)
        else:
            bucket = (ts.year, ts.month)

        if bucket in seen_buckets:
            delete.append(name)
        else:
            seen_buckets.add(bucket)
            keep.append(name)

    return undated + keep, delete


def format_retention_summary(policy: RetentionPolicy) -> str:
    """Describe a retention policy in one line."""
    return (
        f"every snapshot for {policy.days_every_day} day(s), "
        f"two per month for {policy.months_with_two} month(s), "
        f"one per month up to {policy.months_total} month(s)"
    )
