"""Priority scheduling of fetch work.

This package provides:
- A comparator-driven binary-heap priority queue (PriorityQueue, EMPTY)
- The Monday-overlap ranking of time windows
- A bounded-concurrency dispatcher with retry and exponential backoff
"""

from govind.scheduling.dispatcher import AsyncDispatcher, DispatchStats, RunningTask
from govind.scheduling.policy import (
    calculate_overlap,
    iter_time_ranges,
    monday_overlap,
    monday_overlap_comparator,
    monday_start,
)
from govind.scheduling.queue import EMPTY, PriorityQueue, SequencedComparator

__all__ = [
    "AsyncDispatcher",
    "DispatchStats",
    "RunningTask",
    "calculate_overlap",
    "iter_time_ranges",
    "monday_overlap",
    "monday_overlap_comparator",
    "monday_start",
    "EMPTY",
    "PriorityQueue",
    "SequencedComparator",
]
