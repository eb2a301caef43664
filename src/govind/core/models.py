"""Core data models.

This module defines:
- `EventLog`: raw log record as returned by `eth_getLogs`, minimally normalized.
- `ProposalCreatedEvent`: decoded governor `ProposalCreated` payload.
- `ProposalLog`: a decoded event together with the log metadata it came from.
- `TimeRange`: inclusive [start, end] window of UTC datetimes, the unit of fetch work.

Design notes
------------
- uint256 values are plain Python ints (arbitrary precision).
- Addresses keep the case they had on the wire; `0x` + 40 hex digits.
- All models are frozen: constructed once per decoded log, owned by the caller.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


# === RPC record ===


@dataclass(slots=True, frozen=True)
class EventLog:
    """Raw log as fetched from RPC, minimally normalized."""

    address: str  # lowercased 0x...
    topics: tuple[str, ...]  # lowercased 0x...
    data_hex: str  # "0x..."
    block_number: int
    tx_hash: str  # lowercased 0x...
    log_index: int

    @classmethod
    def from_rpc(cls, rl: Mapping[str, Any]) -> EventLog:
        """Build from one `eth_getLogs` result entry."""
        return cls(
            address=str(rl["address"]).lower(),
            topics=tuple(str(t).lower() for t in rl.get("topics", [])),
            data_hex=str(rl.get("data") or "0x"),
            block_number=int(rl["blockNumber"], 16),
            tx_hash=(rl.get("transactionHash") or "").lower(),
            log_index=int(rl.get("logIndex") or "0x0", 16),
        )


# === Decoded events ===


@dataclass(slots=True, frozen=True)
class ProposalCreatedEvent:
    """OpenZeppelin Governor `ProposalCreated` event data."""

    proposal_id: int
    proposer: str
    targets: tuple[str, ...]
    values: tuple[int, ...]
    signatures: tuple[str, ...]
    calldatas: tuple[str, ...]
    start_block: int
    end_block: int
    description: str

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly mapping; big ints are rendered as decimal strings."""
        return {
            "proposalId": str(self.proposal_id),
            "proposer": self.proposer,
            "targets": list(self.targets),
            "values": [str(v) for v in self.values],
            "signatures": list(self.signatures),
            "calldatas": list(self.calldatas),
            "startBlock": str(self.start_block),
            "endBlock": str(self.end_block),
            "description": self.description,
        }


@dataclass(slots=True, frozen=True)
class ProposalLog:
    """Decoded `ProposalCreated` plus the metadata of the log carrying it."""

    event: ProposalCreatedEvent
    address: str
    block_number: int
    tx_hash: str
    log_index: int


# === Scheduling unit ===


@dataclass(slots=True, frozen=True)
class TimeRange:
    """Inclusive [start, end] time window. Naive datetimes are taken as UTC."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start.tzinfo is None:
            object.__setattr__(self, "start", self.start.replace(tzinfo=timezone.utc))
        if self.end.tzinfo is None:
            object.__setattr__(self, "end", self.end.replace(tzinfo=timezone.utc))
        if self.start > self.end:
            raise ValueError("start must be <= end")

    def __iter__(self):
        # allows `start, end = time_range`
        yield self.start
        yield self.end
