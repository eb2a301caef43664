"""Lightweight JSON-RPC client for Ethereum-compatible nodes.

This module provides:
- `RpcProvider`: an async client with sane timeouts/connection limits and its
  own retry loop for transport failures
- `connect_rpc_provider`: build a provider and reject unsupported chains
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

import httpx

from govind.core.config import RpcConfig
from govind.core.constants import is_chain_supported
from govind.core.errors import RpcError

log = logging.getLogger(__name__)


class RpcProvider:
    """Minimal async JSON-RPC client.

    Parameters
    ----------
    url : str
        RPC endpoint URL.
    timeout_s : int
        Per-operation timeout in seconds (connect/read/write).
    max_retries : int
        Attempts per request before giving up on transport errors.
    base_delay_ms : float
        Backoff base; the n-th retry waits `2**n * base_delay_ms`.
    max_connections : int
        Maximum concurrent connections to keep in the pool.
    transport : httpx.AsyncBaseTransport | None
        Optional transport override (tests use `httpx.MockTransport`).
    """

    def __init__(
        self,
        url: str,
        *,
        timeout_s: int = 20,
        max_retries: int = 5,
        base_delay_ms: float = 100,
        max_connections: int = 64,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self._next_id = 0
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(
                connect=timeout_s,
                read=timeout_s,
                write=timeout_s,
                pool=max(30, timeout_s * 3),
            ),
            limits=httpx.Limits(
                max_connections=max_connections,
                max_keepalive_connections=max(1, max_connections // 2),
            ),
            http2=transport is None,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: RpcConfig, **kwargs: Any) -> RpcProvider:
        return cls(
            config.rpc_url,
            timeout_s=config.timeout_s,
            max_retries=config.max_retries,
            base_delay_ms=config.base_delay_ms,
            max_connections=config.max_connections,
            **kwargs,
        )

    async def _post(self, payload: dict[str, Any]) -> Any:
        r = await self.client.post(self.url, json=payload)
        r.raise_for_status()
        try:
            data = r.json()
        except ValueError as e:
            raise RpcError(f"invalid JSON-RPC response: {e}") from e
        if "error" in data:
            e = data["error"]
            if isinstance(e, dict):
                raise RpcError(str(e.get("message")), code=e.get("code"))
            raise RpcError(str(e))
        return data.get("result")

    async def request(self, method: str, params: Sequence[Any] | None = None) -> Any:
        """Issue one JSON-RPC call and return its `result`.

        Transport failures and non-2xx responses are retried; a JSON-RPC error
        object is raised immediately as `RpcError`.
        """
        self._next_id += 1
        payload = {"jsonrpc": "2.0", "id": self._next_id, "method": method, "params": list(params or [])}

        attempt = 0
        while True:
            try:
                return await self._post(payload)
            except httpx.HTTPError as e:
                attempt += 1
                if attempt >= self.max_retries:
                    log.error("max retries reached for %s: %s", method, e)
                    raise RpcError(f"{method} failed after {attempt} attempts: {e}") from e
                backoff_ms = 2**attempt * self.base_delay_ms
                log.warning("retrying %s (attempt %d) after %.0fms: %s", method, attempt, backoff_ms, e)
                await asyncio.sleep(backoff_ms / 1000)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()


async def connect_rpc_provider(config: RpcConfig, **kwargs: Any) -> RpcProvider | None:
    """Create a provider for `config.rpc_url`; None if the node's chain is not supported."""
    provider = RpcProvider.from_config(config, **kwargs)
    try:
        chain_id = int(await provider.request("eth_chainId"), 16)
    except BaseException:
        await provider.aclose()
        raise
    if not is_chain_supported(chain_id):
        log.warning("chain %s not supported", hex(chain_id))
        await provider.aclose()
        return None
    return provider
