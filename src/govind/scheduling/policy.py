"""Monday-overlap scheduling policy.

Governor proposals mostly go live on a Monday (UTC). Fetch windows are ranked
by how much of them overlaps a Monday so that, with limited concurrency,
the windows most likely to contain a proposal are examined first.

"Monday" is Monday 00:00:00 UTC up to (excluding) Tuesday 00:00:00 UTC. Two
Mondays are considered per range: the one of the ISO week containing the
range end, and the one a week before.
"""

from __future__ import annotations

from collections.abc import Generator
from datetime import datetime, timedelta, timezone

from govind.core.models import TimeRange

DAY = timedelta(days=1)
WEEK = timedelta(weeks=1)
_MS = timedelta(milliseconds=1)


def _to_ms(dt: datetime) -> int:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - datetime(1970, 1, 1, tzinfo=timezone.utc)) // _MS


def calculate_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> int:
    """Overlap of [start_a, end_a] and [start_b, end_b]; 0 when disjoint."""
    return max(0, min(end_a, end_b) - max(start_a, start_b))


def monday_start(dt: datetime) -> datetime:
    """00:00 UTC of the Monday of the ISO week containing `dt`."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    day = dt.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    return day - timedelta(days=day.weekday())


def monday_overlap(start: datetime, end: datetime) -> int:
    """Max overlap in milliseconds of [start, end] with the current or previous Monday."""
    current = monday_start(end)
    previous = current - WEEK

    s, e = _to_ms(start), _to_ms(end)
    with_current = calculate_overlap(s, e, _to_ms(current), _to_ms(current + DAY))
    with_previous = calculate_overlap(s, e, _to_ms(previous), _to_ms(previous + DAY))
    return max(with_current, with_previous)


def monday_overlap_comparator(a: TimeRange, b: TimeRange) -> int:
    """More Monday overlap ranks first (descending score)."""
    return monday_overlap(b.start, b.end) - monday_overlap(a.start, a.end)


def iter_time_ranges(
    start: datetime,
    end: datetime,
    step: timedelta,
) -> Generator[TimeRange, None, None]:
    """Yield contiguous [a, b] windows of length at most `step` covering [start, end]."""
    if step <= timedelta(0):
        raise ValueError("step must be positive")
    x = start
    while x < end:
        y = min(end, x + step)
        yield TimeRange(x, y)
        x = y
