"""Core data models, configurations, errors and constants.

This package provides:
- Data models (EventLog, ProposalCreatedEvent, ProposalLog, TimeRange)
- Configuration classes (DispatcherConfig, RpcConfig, IndexerConfig)
- The error taxonomy (ValidationError, DecodingError, TaskError, ...)
"""

from govind.core.config import DispatcherConfig, IndexerConfig, RpcConfig
from govind.core.errors import (
    DecodingError,
    GovindError,
    RpcError,
    TaskError,
    UnsupportedChainError,
    ValidationError,
)
from govind.core.models import EventLog, ProposalCreatedEvent, ProposalLog, TimeRange

__all__ = [
    "DispatcherConfig",
    "IndexerConfig",
    "RpcConfig",
    "DecodingError",
    "GovindError",
    "RpcError",
    "TaskError",
    "UnsupportedChainError",
    "ValidationError",
    "EventLog",
    "ProposalCreatedEvent",
    "ProposalLog",
    "TimeRange",
]
