"""Map wall-clock times to block numbers by binary search over block timestamps."""

from __future__ import annotations

from datetime import datetime, timezone

from govind.core.interfaces import IRpcProvider


class BlockClock:
    """Resolve datetimes to block heights; block timestamps are cached per instance."""

    def __init__(self, provider: IRpcProvider) -> None:
        self._provider = provider
        self._timestamps: dict[int, int] = {}
        self._latest: int | None = None

    async def latest_block(self) -> int:
        if self._latest is None:
            self._latest = int(await self._provider.request("eth_blockNumber", []), 16)
        return self._latest

    async def block_timestamp(self, number: int) -> int:
        ts = self._timestamps.get(number)
        if ts is None:
            block = await self._provider.request("eth_getBlockByNumber", [hex(number), False])
            ts = int(block["timestamp"], 16)
            self._timestamps[number] = ts
        return ts

    async def block_at(self, when: datetime) -> int:
        """First block whose timestamp is >= `when` (the latest block if none is)."""
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        target = int(when.timestamp())

        lo, hi = 0, await self.latest_block()
        while lo < hi:
            mid = (lo + hi) // 2
            if await self.block_timestamp(mid) < target:
                lo = mid + 1
            else:
                hi = mid
        return lo
