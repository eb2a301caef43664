from __future__ import annotations

from .core.constants import EVENT_SIGS, FUNC_SIGS
from .core.models import ProposalCreatedEvent, TimeRange
from .decoding.proposal import parse_proposal_created_data
from .scheduling.dispatcher import AsyncDispatcher
from .scheduling.policy import monday_overlap_comparator
from .scheduling.queue import EMPTY, PriorityQueue

__all__ = [
    "parse_proposal_created_data",
    "ProposalCreatedEvent",
    "TimeRange",
    "PriorityQueue",
    "EMPTY",
    "AsyncDispatcher",
    "monday_overlap_comparator",
    "EVENT_SIGS",
    "FUNC_SIGS",
]
