"""Governor `ProposalCreated` decoding.

Word layout of the data section:

    0  proposalId          uint256
    1  proposer            address
    2  -> targets          address[]
    3  -> values           uint256[]
    4  -> signatures       string[]
    5  -> calldatas        bytes[]
    6  startBlock          uint256
    7  endBlock            uint256
    8  -> description      string

(`->` marks an offset into the dynamic region, relative to the start of data.)
"""

from __future__ import annotations

from govind.core.models import ProposalCreatedEvent
from govind.decoding.abi import with_default
from govind.decoding.decoder import decode_data
from govind.decoding.specs import layout_from_signature

PROPOSAL_CREATED_LAYOUT = layout_from_signature(
    "ProposalCreated(uint256 proposalId, address proposer, address[] targets, uint256[] values, "
    "string[] signatures, bytes[] calldatas, uint256 startBlock, uint256 endBlock, string description)"
)

DEFAULT_SIGNATURE = ""
DEFAULT_CALLDATA = "0x"


def parse_proposal_created_data(data_hex: str) -> ProposalCreatedEvent:
    """Decode the data section of a `ProposalCreated` log.

    Empty entries in `signatures` / `calldatas` are filled with `""` / `"0x"`
    so both arrays always have their declared length.
    """
    v = decode_data(PROPOSAL_CREATED_LAYOUT, data_hex)
    return ProposalCreatedEvent(
        proposal_id=v["proposalId"],
        proposer=v["proposer"],
        targets=tuple(v["targets"]),
        values=tuple(v["values"]),
        signatures=tuple(with_default(v["signatures"], DEFAULT_SIGNATURE)),
        calldatas=tuple(with_default(v["calldatas"], DEFAULT_CALLDATA)),
        start_block=v["startBlock"],
        end_block=v["endBlock"],
        description=v["description"],
    )
