"""Proposal indexing use cases: schedule -> dispatch -> fetch -> decode.

1) `run_indexer(...)`:
   - Generic: pushes time ranges onto a Monday-priority queue and drains it
     with the dispatcher through any task runner.
2) `index_time_ranges(...)`:
   - Wires a runner that turns each range into block numbers, fetches the
     governors' `ProposalCreated` logs and decodes them.
3) `fetch_proposal_events(...)` / `query_proposal_by_event(...)`:
   - Target the blocks named by the persisted proposal dataset.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any

from govind.clients.governor import get_logs
from govind.core.config import DispatcherConfig, IndexerConfig
from govind.core.constants import ARB1_CHAIN_ID, EVENT_SIGS
from govind.core.errors import DecodingError, UnsupportedChainError
from govind.core.interfaces import IRpcProvider, TimeRangeRunner
from govind.core.models import EventLog, ProposalCreatedEvent, ProposalLog, TimeRange
from govind.decoding.proposal import parse_proposal_created_data
from govind.orchestration.blocks import BlockClock
from govind.scheduling.dispatcher import AsyncDispatcher
from govind.scheduling.policy import iter_time_ranges, monday_overlap_comparator
from govind.scheduling.queue import Comparator, PriorityQueue, SequencedComparator
from govind.storage.proposals import ProposalSeed

log = logging.getLogger(__name__)

PROPOSAL_CREATED_T0 = EVENT_SIGS["ProposalCreated"]


# ---------------------------------------------------------------------------
# Decoding helpers
# ---------------------------------------------------------------------------


def decode_proposal_logs(logs: Iterable[EventLog]) -> list[ProposalLog]:
    """Decode every `ProposalCreated` log; logs with another topic0 are skipped."""
    out: list[ProposalLog] = []
    for ev in logs:
        if not ev.topics or ev.topics[0] != PROPOSAL_CREATED_T0:
            continue
        out.append(
            ProposalLog(
                event=parse_proposal_created_data(ev.data_hex),
                address=ev.address,
                block_number=ev.block_number,
                tx_hash=ev.tx_hash,
                log_index=ev.log_index,
            )
        )
    return out


def _ordered(logs: Iterable[ProposalLog]) -> list[ProposalLog]:
    return sorted(logs, key=lambda p: (p.block_number, p.log_index))


# ---------------------------------------------------------------------------
# Time-range scheduling
# ---------------------------------------------------------------------------


def build_queue(
    ranges: Iterable[TimeRange],
    comparator: Comparator[TimeRange] = monday_overlap_comparator,
) -> PriorityQueue[TimeRange]:
    """Priority queue of `ranges` ranked by `comparator`."""
    return PriorityQueue(comparator, ranges)


async def run_indexer(
    task_runner: TimeRangeRunner,
    ranges: Iterable[TimeRange],
    config: DispatcherConfig | None = None,
) -> list[Any]:
    """Dispatch every range through `task_runner`, Monday-heavy ranges first."""
    dispatcher = AsyncDispatcher(build_queue(ranges), task_runner, config)
    try:
        results = await dispatcher.run()
    except Exception:
        log.error("indexing failed after %d started task(s)", dispatcher.stats.started)
        raise
    log.info(
        "indexing complete: %d task(s), %d retries",
        dispatcher.stats.succeeded,
        dispatcher.stats.retried,
    )
    return results


def make_range_runner(
    provider: IRpcProvider,
    governors: Sequence[str],
    clock: BlockClock | None = None,
) -> TimeRangeRunner:
    """Task runner fetching and decoding governor proposals created within a time range."""
    clock = clock or BlockClock(provider)

    async def runner(time_range: TimeRange) -> list[ProposalLog]:
        start_block = await clock.block_at(time_range.start)
        end_block = await clock.block_at(time_range.end)
        out: list[ProposalLog] = []
        for governor in governors:
            logs = await get_logs(provider, start_block, end_block, governor, [PROPOSAL_CREATED_T0])
            out.extend(decode_proposal_logs(logs))
        log.debug("%s..%s: %d proposal(s)", time_range.start, time_range.end, len(out))
        return out

    return runner


async def index_time_ranges(
    provider: IRpcProvider,
    start: datetime,
    end: datetime,
    config: IndexerConfig,
) -> list[ProposalLog]:
    """Find every proposal created by `config.governors` between `start` and `end`."""
    ranges = list(iter_time_ranges(start, end, config.step))
    runner = make_range_runner(provider, config.governors)
    batches = await run_indexer(runner, ranges, config.dispatcher)
    # Adjacent ranges share their boundary block.
    unique = {(p.tx_hash, p.log_index): p for batch in batches for p in batch}
    return _ordered(unique.values())


# ---------------------------------------------------------------------------
# Dataset-targeted fetches
# ---------------------------------------------------------------------------


def _check_seed(seed: ProposalSeed) -> None:
    if seed.chainId != ARB1_CHAIN_ID:
        raise UnsupportedChainError(hex(seed.chainId))


async def fetch_seed_logs(provider: IRpcProvider, seed: ProposalSeed) -> list[ProposalLog]:
    """Fetch and decode the `ProposalCreated` logs at a seed's anchoring block."""
    _check_seed(seed)
    logs = await get_logs(provider, seed.l2Block, seed.l2Block, seed.governor, [PROPOSAL_CREATED_T0])
    return decode_proposal_logs(logs)


async def query_proposal_by_event(provider: IRpcProvider, seed: ProposalSeed) -> ProposalCreatedEvent:
    """Decode the first `ProposalCreated` log at the seed's block."""
    decoded = await fetch_seed_logs(provider, seed)
    if not decoded:
        raise DecodingError(f"no ProposalCreated log at block {seed.l2Block} for {seed.governor}")
    return decoded[0].event


async def fetch_proposal_events(
    provider: IRpcProvider,
    seeds: Sequence[ProposalSeed],
    config: DispatcherConfig | None = None,
) -> list[ProposalLog]:
    """Fetch every seed concurrently; results are ordered by (block, log index)."""
    # Seeds are validated up front: an unsupported chain is not worth retrying.
    for seed in seeds:
        _check_seed(seed)

    cmp: SequencedComparator[ProposalSeed] = SequencedComparator(lambda a, b: b.l2Block - a.l2Block)
    queue = PriorityQueue(cmp, (cmp.wrap(s) for s in seeds))

    async def runner(entry: tuple[int, ProposalSeed]) -> list[ProposalLog]:
        return await fetch_seed_logs(provider, entry[1])

    batches = await AsyncDispatcher(queue, runner, config).run()
    return _ordered(p for batch in batches for p in batch)
