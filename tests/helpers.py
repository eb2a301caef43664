"""Reference encoders shared by the tests."""

from typing import Any

from eth_abi import encode

PROPOSAL_CREATED_TYPES = [
    "uint256",
    "address",
    "address[]",
    "uint256[]",
    "string[]",
    "bytes[]",
    "uint256",
    "uint256",
    "string",
]

PROPOSAL_CREATED_T0 = "0x7d84a6263ae0d98d3329bd7b46bb4e8d6f98cd35a7adb45c274c8b7fd5ebd5e0"


def encode_proposal_created(
    *,
    proposal_id: int = 1,
    proposer: str = "0x" + "aa" * 20,
    targets: list[str] | None = None,
    values: list[int] | None = None,
    signatures: list[str] | None = None,
    calldatas: list[bytes] | None = None,
    start_block: int = 100,
    end_block: int = 200,
    description: str = "test",
) -> str:
    """ABI encoding of ProposalCreated data, 0x-prefixed."""
    data = encode(
        PROPOSAL_CREATED_TYPES,
        [
            proposal_id,
            proposer,
            targets or [],
            values or [],
            signatures or [],
            calldatas or [],
            start_block,
            end_block,
            description,
        ],
    )
    return "0x" + data.hex()


def rpc_log(data_hex: str, *, block: int, address: str, log_index: int = 0, topic0: str = PROPOSAL_CREATED_T0) -> dict[str, Any]:
    """One eth_getLogs result entry."""
    return {
        "address": address,
        "topics": [topic0],
        "data": data_hex,
        "blockNumber": hex(block),
        "transactionHash": "0x" + format(block * 1000 + log_index, "064x"),
        "logIndex": hex(log_index),
    }


def word(value: int) -> str:
    return format(value, "064x")
