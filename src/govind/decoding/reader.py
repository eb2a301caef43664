"""Byte reader: fixed-width and variable-length reads over a flat hex buffer.

Buffers are hex strings without the `0x` prefix (use `strip_0x` first).
Offsets and lengths are in bytes; byte `i` lives at hex chars `[2*i, 2*i + 2)`.
"""

from __future__ import annotations

import re

from govind.core.constants import WORD_SIZE_IN_BYTES
from govind.core.errors import DecodingError

_HEX = re.compile(r"[0-9a-fA-F]*")


def strip_0x(hex_data: str) -> str:
    """Drop an optional 0x prefix and check the buffer holds whole hex bytes."""
    h = hex_data[2:] if hex_data[:2].lower() == "0x" else hex_data
    if len(h) % 2:
        raise DecodingError(f"hex buffer has odd length {len(h)}")
    if not _HEX.fullmatch(h):
        raise DecodingError("hex buffer contains non-hex characters")
    return h


def byte_length(hex_data: str) -> int:
    """Number of bytes held by an unprefixed hex buffer."""
    return len(hex_data) // 2


def read_bytes(hex_data: str, byte_offset: int, length: int) -> str:
    """Return the hex for exactly `length` bytes starting at `byte_offset`.

    Raises DecodingError when the range does not lie within the buffer.
    """
    if byte_offset < 0 or length < 0:
        raise DecodingError(f"negative read: offset={byte_offset} length={length}")
    end = byte_offset + length
    if end > byte_length(hex_data):
        raise DecodingError(
            f"read of {length} bytes at offset {byte_offset} exceeds buffer of {byte_length(hex_data)} bytes"
        )
    out = hex_data[byte_offset * 2 : end * 2]
    if not _HEX.fullmatch(out):
        raise DecodingError(f"non-hex characters in {length} bytes at offset {byte_offset}")
    return out


def read_word(hex_data: str, byte_offset: int) -> str:
    """Return the 32-byte word starting at `byte_offset`."""
    return read_bytes(hex_data, byte_offset, WORD_SIZE_IN_BYTES)


def word_at(hex_data: str, i: int) -> str:
    """Return the i-th 32-byte word of the buffer."""
    return read_word(hex_data, i * WORD_SIZE_IN_BYTES)
