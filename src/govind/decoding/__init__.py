"""ABI decoding and call encoding.

This package provides:
- Byte reader over hex buffers (read_bytes, word_at, strip_0x)
- ABI primitives (uint256, address, offsets, strings, bytes, dynamic arrays)
- Outbound call encoders (selector + 32-byte words)
- Layout-driven event decoding and the ProposalCreated decoder
"""

from govind.decoding.abi import (
    MISSING,
    parse_address,
    parse_dynamic_array,
    parse_dynamic_array_of_dynamic,
    parse_dynamic_bytes,
    parse_offset,
    parse_uint256,
    parse_utf8_string,
    with_default,
)
from govind.decoding.decoder import decode_data
from govind.decoding.encoding import (
    decode_func_sig_and_bytes32,
    encode_func_sig_and_address_and_bytes32,
    encode_func_sig_and_bytes32,
    encode_func_sig_and_bytes32_and_address,
    uint256_to_bytes32,
)
from govind.decoding.proposal import PROPOSAL_CREATED_LAYOUT, parse_proposal_created_data
from govind.decoding.reader import read_bytes, strip_0x, word_at
from govind.decoding.specs import DataFieldSpec, EventLayout, layout_from_signature

__all__ = [
    "MISSING",
    "parse_address",
    "parse_dynamic_array",
    "parse_dynamic_array_of_dynamic",
    "parse_dynamic_bytes",
    "parse_offset",
    "parse_uint256",
    "parse_utf8_string",
    "with_default",
    "decode_data",
    "decode_func_sig_and_bytes32",
    "encode_func_sig_and_address_and_bytes32",
    "encode_func_sig_and_bytes32",
    "encode_func_sig_and_bytes32_and_address",
    "uint256_to_bytes32",
    "PROPOSAL_CREATED_LAYOUT",
    "parse_proposal_created_data",
    "read_bytes",
    "strip_0x",
    "word_at",
    "DataFieldSpec",
    "EventLayout",
    "layout_from_signature",
]
