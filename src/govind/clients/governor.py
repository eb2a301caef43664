"""Chain queries against the ARB token and the Arbitrum governors.

Every function takes an `IRpcProvider` explicitly. `eth_call` helpers return
the raw ABI-encoded hex output; interpreting it (proposal states, vote
weights) is left to the caller.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from govind.core.constants import CONTRACTS, FUNC_SIGS
from govind.core.interfaces import IRpcProvider
from govind.core.models import EventLog
from govind.decoding.abi import parse_offset, parse_utf8_string
from govind.decoding.encoding import (
    encode_func_sig_and_address_and_bytes32,
    encode_func_sig_and_bytes32,
    encode_func_sig_and_bytes32_and_address,
    uint256_to_bytes32,
)
from govind.decoding.reader import strip_0x

TREASURY_GOVERNOR = CONTRACTS["treasury-governor"]["arb1"]


def to_hex_block(x: int) -> str:
    """Return a 0x-prefixed hex block number."""
    return hex(x)


def _as_bytes32(value: int | str) -> str:
    """Accept a uint256 as int or an already padded 0x bytes32 string."""
    return uint256_to_bytes32(value) if isinstance(value, int) else value


async def get_chain_id(provider: IRpcProvider) -> int:
    return int(await provider.request("eth_chainId", []), 16)


async def get_latest_block(provider: IRpcProvider) -> dict[str, Any]:
    return await provider.request("eth_getBlockByNumber", ["latest", False])


async def get_logs(
    provider: IRpcProvider,
    start_block: int,
    end_block: int,
    address: str,
    topics: Sequence[str | None],
) -> list[EventLog]:
    """Fetch logs emitted by `address` matching `topics` within the inclusive block range."""
    params = [
        {
            "fromBlock": to_hex_block(start_block),
            "toBlock": to_hex_block(end_block),
            "address": address,
            "topics": list(topics),
        }
    ]
    result = await provider.request("eth_getLogs", params)
    return [EventLog.from_rpc(rl) for rl in result or []]


async def eth_call(provider: IRpcProvider, to: str, data: str, block: str = "latest") -> str:
    return await provider.request("eth_call", [{"to": to, "input": data}, block])


async def query_token_name(provider: IRpcProvider, token: str = CONTRACTS["arb-token"]["arb1"]) -> str:
    """Call `name()` and decode the returned ABI `string`."""
    output = strip_0x(await eth_call(provider, token, FUNC_SIGS["name()"]))
    return parse_utf8_string(output, parse_offset(output, 0))


async def query_proposal_state(
    provider: IRpcProvider,
    proposal_id: int | str,
    governor: str = TREASURY_GOVERNOR,
) -> str:
    data = encode_func_sig_and_bytes32(FUNC_SIGS["state(uint256 proposalId)"], _as_bytes32(proposal_id))
    return await eth_call(provider, governor, data)


async def query_has_voted(
    provider: IRpcProvider,
    proposal_id: int | str,
    account: str,
    governor: str = TREASURY_GOVERNOR,
) -> str:
    data = encode_func_sig_and_bytes32_and_address(
        FUNC_SIGS["hasVoted(uint256 proposalId, address account)"],
        _as_bytes32(proposal_id),
        account,
    )
    return await eth_call(provider, governor, data)


async def query_proposal_snapshot(
    provider: IRpcProvider,
    proposal_id: int | str,
    governor: str = TREASURY_GOVERNOR,
) -> str:
    data = encode_func_sig_and_bytes32(
        FUNC_SIGS["proposalSnapshot(uint256 proposalId)"],
        _as_bytes32(proposal_id),
    )
    return await eth_call(provider, governor, data)


async def query_get_votes(
    provider: IRpcProvider,
    account: str,
    block_number: int | str,
    governor: str = TREASURY_GOVERNOR,
) -> str:
    """Voting weight of `account` at `block_number` (int or 0x hex, any width)."""
    if isinstance(block_number, str):
        block_number = int(block_number, 16)
    data = encode_func_sig_and_address_and_bytes32(
        FUNC_SIGS["getVotes(address account, uint256 blockNumber)"],
        account,
        uint256_to_bytes32(block_number),
    )
    return await eth_call(provider, governor, data)


async def query_get_votes_latest(provider: IRpcProvider, account: str) -> str:
    """Votes at the L1 block preceding the latest one (Arbitrum blocks carry `l1BlockNumber`)."""
    block = await get_latest_block(provider)
    return await query_get_votes(provider, account, int(block["l1BlockNumber"], 16) - 1)


async def query_get_votes_by_proposal(provider: IRpcProvider, account: str, proposal_id: int | str) -> str:
    """Votes at the proposal's snapshot block."""
    snapshot = await query_proposal_snapshot(provider, proposal_id)
    return await query_get_votes(provider, account, snapshot)
