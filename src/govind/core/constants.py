"""Chains, contract addresses, function selectors and event topics.

Selectors and topics are kept as literals (0x-prefixed, lowercase); the
`function_selector` / `event_topic` helpers recompute them from the canonical
signature so the table can be checked.

Addresses: https://github.com/ArbitrumFoundation/docs (deployment-addresses.md)
Governor ABI: OpenZeppelin governance v4.7.3 / L2ArbitrumGovernor.sol
"""

from __future__ import annotations

from eth_utils import keccak

WORD_SIZE_IN_BYTES = 32

SUPPORTED_CHAINS: dict[str, int] = {
    "arb1": 0xA4B1,
    "eth-mainnet": 0x1,
}

ARB1_CHAIN_ID = SUPPORTED_CHAINS["arb1"]

CONTRACTS: dict[str, dict[str, str]] = {
    "arb-token": {
        "eth-mainnet": "0xB50721BCf8d664c30412Cfbc6cf7a15145234ad1",
        "arb1": "0x912CE59144191C1204E64559FE8253a0e49E6548",
    },
    "core-governor": {
        "arb1": "0xf07DeD9dC292157749B6Fd268E37DF6EA38395B9",
    },
    "treasury-governor": {
        "arb1": "0x789fC99093B09aD01C34DC7251D0C89ce743e5a4",
    },
}

FUNC_SIGS: dict[str, str] = {
    "name()": "0x06fdde03",
    "quorum(uint256 blockNumber)": "0xf8ce560a",
    "proposalDeadline(uint256 proposalId)": "0xc01f9e37",
    "proposalSnapshot(uint256 proposalId)": "0x2d63f693",
    "proposalVotes(uint256 proposalId)": "0x544ffc9c",
    "state(uint256 proposalId)": "0x3e4f49e6",
    "hasVoted(uint256 proposalId, address account)": "0x43859632",
    "getVotes(address account, uint256 blockNumber)": "0xeb9019d4",
}

PROPOSAL_CREATED_SIGNATURE = (
    "ProposalCreated(uint256,address,address[],uint256[],string[],bytes[],uint256,uint256,string)"
)

EVENT_SIGS: dict[str, str] = {
    "ProposalCreated": "0x7d84a6263ae0d98d3329bd7b46bb4e8d6f98cd35a7adb45c274c8b7fd5ebd5e0",
}


def is_chain_supported(chain_id: int) -> bool:
    """Return True if `chain_id` is one of the chains we index."""
    return chain_id in SUPPORTED_CHAINS.values()


def _canonical(signature: str) -> str:
    """Drop parameter names: "f(uint256 a, address b)" -> "f(uint256,address)"."""
    name, _, rest = signature.partition("(")
    params = [p.split()[0] for p in rest.rstrip(")").split(",") if p.strip()]
    return f"{name.strip()}({','.join(params)})"


def function_selector(signature: str) -> str:
    """4-byte selector for a (possibly named) function signature."""
    return "0x" + keccak(text=_canonical(signature))[:4].hex()


def event_topic(signature: str) -> str:
    """topic0 for a canonical event signature."""
    return "0x" + keccak(text=_canonical(signature)).hex()
