from __future__ import annotations

import logging

from govind.core.config import RpcConfig
from govind.core.errors import GovindError
from govind.core.interfaces import IRpcProvider
from govind.clients.rpc import RpcProvider, connect_rpc_provider

log = logging.getLogger(__name__)


class ConnectionManager:
    """
    Owns the active RPC provider for a session.

    Callers create one manager and pass it (or the provider it holds) to the
    code that needs chain access; there is no module-level provider cache.
    """

    def __init__(self, provider: IRpcProvider | None = None) -> None:
        self._provider = provider

    @property
    def rpc_provider(self) -> IRpcProvider | None:
        return self._provider

    def set_rpc_provider(self, provider: IRpcProvider | None) -> None:
        self._provider = provider

    def require_rpc_provider(self) -> IRpcProvider:
        if self._provider is None:
            raise GovindError("no RPC provider connected")
        return self._provider

    async def connect(self, config: RpcConfig, **kwargs) -> IRpcProvider | None:
        """Connect to `config.rpc_url`, replacing (and closing) any current provider.

        Returns None, leaving the manager without a provider, if the chain is
        not supported.
        """
        await self.aclose()
        self._provider = await connect_rpc_provider(config, **kwargs)
        if self._provider is not None:
            log.info("connected to %s", config.rpc_url)
        return self._provider

    async def aclose(self) -> None:
        if isinstance(self._provider, RpcProvider):
            await self._provider.aclose()
        self._provider = None

    async def __aenter__(self) -> ConnectionManager:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
