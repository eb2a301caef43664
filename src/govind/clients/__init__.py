"""Chain access: JSON-RPC transport, connection ownership and governor queries."""

from govind.clients.connection import ConnectionManager
from govind.clients.rpc import RpcProvider, connect_rpc_provider

__all__ = ["ConnectionManager", "RpcProvider", "connect_rpc_provider"]
