"""Orchestration of proposal indexing.

This package provides:
- Monday-priority dispatch of time ranges (run_indexer, index_time_ranges)
- Dataset-targeted fetches (fetch_proposal_events, query_proposal_by_event)
- Time -> block resolution (BlockClock)
"""

from govind.orchestration.blocks import BlockClock
from govind.orchestration.indexer import (
    build_queue,
    decode_proposal_logs,
    fetch_proposal_events,
    fetch_seed_logs,
    index_time_ranges,
    make_range_runner,
    query_proposal_by_event,
    run_indexer,
)

__all__ = [
    "BlockClock",
    "build_queue",
    "decode_proposal_logs",
    "fetch_proposal_events",
    "fetch_seed_logs",
    "index_time_ranges",
    "make_range_runner",
    "query_proposal_by_event",
    "run_indexer",
]
