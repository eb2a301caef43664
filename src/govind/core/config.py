from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

from govind.core.constants import CONTRACTS


@dataclass(frozen=True)
class DispatcherConfig:
    """Configuration for the priority dispatcher."""

    concurrency: int = 5
    max_retries: int = 3
    base_delay_ms: float = 100

    def __post_init__(self) -> None:
        if self.concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        if self.max_retries < 1:
            raise ValueError("max_retries must be >= 1")
        if self.base_delay_ms < 0:
            raise ValueError("base_delay_ms must be >= 0")


@dataclass(frozen=True)
class RpcConfig:
    """Configuration for the JSON-RPC transport."""

    rpc_url: str
    timeout_s: int = 20
    max_retries: int = 5
    base_delay_ms: float = 100
    max_connections: int = 64


@dataclass(frozen=True)
class IndexerConfig:
    """Configuration for a proposal indexing run (CLI)."""

    rpc_url: str
    step: timedelta = timedelta(hours=24)
    governors: tuple[str, ...] = (
        CONTRACTS["core-governor"]["arb1"],
        CONTRACTS["treasury-governor"]["arb1"],
    )
    dispatcher: DispatcherConfig = field(default_factory=DispatcherConfig)
