"""Generic event data decoder driven by an `EventLayout`.

Decoding happens in two passes:

1) header: read one word per data field; static fields are the value,
   dynamic fields are an offset (relative to the start of the data buffer);
2) dynamic region: resolve each offset with the matching ABI parser.

Elements of `string[]` / `bytes[]` that decode as zero-length come back as
`MISSING`; choosing a default is left to the event-specific layer.
"""

from __future__ import annotations

from typing import Any

from govind.core.constants import WORD_SIZE_IN_BYTES
from govind.decoding.abi import (
    ElementParser,
    parse_address,
    parse_dynamic_array,
    parse_dynamic_array_of_dynamic,
    parse_dynamic_bytes,
    parse_offset,
    parse_uint256,
    parse_utf8_string,
)
from govind.decoding.reader import read_word, strip_0x
from govind.decoding.specs import DYNAMIC_TYPES, DataFieldSpec, EventLayout, element_type, is_array


def _parse_bool(hex_data: str, byte_offset: int) -> bool:
    return parse_uint256(hex_data, byte_offset) != 0


def _parse_bytes32(hex_data: str, byte_offset: int) -> str:
    return "0x" + read_word(hex_data, byte_offset)


def element_parser_for(abi_type: str) -> ElementParser[Any]:
    """Return the `(hex_data, byte_offset)` parser for a non-array ABI type."""
    if abi_type == "address":
        return parse_address
    if abi_type == "bool":
        return _parse_bool
    if abi_type == "bytes32":
        return _parse_bytes32
    if abi_type.startswith("uint"):
        return parse_uint256
    if abi_type == "string":
        return parse_utf8_string
    if abi_type == "bytes":
        return parse_dynamic_bytes
    raise ValueError(f"no parser for ABI type {abi_type}")


def decode_field(hex_data: str, field: DataFieldSpec) -> Any:
    """Decode one top-level field; `hex_data` is the whole unprefixed data buffer."""
    at = field.word_index * WORD_SIZE_IN_BYTES
    if not field.is_dynamic:
        return element_parser_for(field.type)(hex_data, at)

    offset = parse_offset(hex_data, at)
    if not is_array(field.type):
        return element_parser_for(field.type)(hex_data, offset)

    elem = element_type(field.type)
    parser = element_parser_for(elem)
    if elem in DYNAMIC_TYPES:
        return parse_dynamic_array_of_dynamic(hex_data, offset, parser)
    return parse_dynamic_array(hex_data, offset, parser)


def decode_data(layout: EventLayout, data_hex: str) -> dict[str, Any]:
    """Decode an event's data section into `{field name: value}` per `layout`."""
    hex_data = strip_0x(data_hex)
    # Fail on a short header before following any offset.
    if layout.data_fields:
        read_word(hex_data, (layout.header_words - 1) * WORD_SIZE_IN_BYTES)
    return {f.name: decode_field(hex_data, f) for f in layout.data_fields}
