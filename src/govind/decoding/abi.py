"""ABI decoding primitives for the subset of types governor events use.

Static values (`uint256`, `address`) occupy one word in place. Dynamic values
(`string`, `bytes`, `T[]`) are stored elsewhere in the buffer and referenced by
an offset word. Two offset bases are in play:

- top-level fields: offsets are relative to the start of the data buffer;
- elements of an array of dynamic values: offsets are relative to the word
  right after the array's length word (`array_offset + 32`).

Every parser takes `(hex_data, byte_offset)` so they can be passed around as
element parsers. `hex_data` is unprefixed (see `reader.strip_0x`).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Final, TypeVar

from govind.core.constants import WORD_SIZE_IN_BYTES
from govind.core.errors import DecodingError
from govind.decoding.reader import byte_length, read_bytes, read_word

T = TypeVar("T")

ElementParser = Callable[[str, int], T]


class _Missing:
    """Marker for an array-of-dynamic element whose declared length is zero."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


# ---------- static scalars ----------


def parse_uint256(hex_data: str, byte_offset: int) -> int:
    """Read one word as a big-endian unsigned integer."""
    return int(read_word(hex_data, byte_offset), 16)


def parse_offset(hex_data: str, byte_offset: int) -> int:
    """Read one word as a byte displacement (same encoding as uint256)."""
    return parse_uint256(hex_data, byte_offset)


def parse_address(hex_data: str, byte_offset: int) -> str:
    """Read one word and return its rightmost 20 bytes as `0x` + 40 hex digits.

    The 12 leading bytes are not checked.
    """
    return "0x" + read_word(hex_data, byte_offset)[-40:]


def _as_index(value: int, what: str, hex_data: str) -> int:
    # A length or offset larger than the buffer can never be satisfied.
    if value > byte_length(hex_data):
        raise DecodingError(f"{what} {value} exceeds buffer of {byte_length(hex_data)} bytes")
    return value


# ---------- dynamic scalars ----------


def parse_dynamic_bytes(hex_data: str, byte_offset: int) -> str:
    """Read a length-prefixed byte string at `byte_offset`; returns `0x`-prefixed hex."""
    length = _as_index(parse_uint256(hex_data, byte_offset), "byte length", hex_data)
    return "0x" + read_bytes(hex_data, byte_offset + WORD_SIZE_IN_BYTES, length)


def parse_utf8_string(hex_data: str, byte_offset: int) -> str:
    """Read a length-prefixed string at `byte_offset` and decode it as strict UTF-8."""
    payload = bytes.fromhex(parse_dynamic_bytes(hex_data, byte_offset)[2:])
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodingError(f"invalid UTF-8 in string at offset {byte_offset}: {e}") from e


# ---------- arrays ----------


def parse_dynamic_array(
    hex_data: str,
    byte_offset: int,
    element_parser: ElementParser[T],
) -> list[T]:
    """Parse `T[]` for a static-size T: a length word then one word per element."""
    n = _as_index(parse_uint256(hex_data, byte_offset), "array length", hex_data)
    body = byte_offset + WORD_SIZE_IN_BYTES
    return [element_parser(hex_data, body + i * WORD_SIZE_IN_BYTES) for i in range(n)]


def parse_dynamic_array_of_dynamic(
    hex_data: str,
    byte_offset: int,
    element_parser: ElementParser[T],
) -> list[T | _Missing]:
    """Parse `T[]` for a dynamic T (`string[]`, `bytes[]`).

    The region at `byte_offset` is an array of offsets, each relative to
    `byte_offset + 32`. Every element is sliced out (length word + payload) and
    handed to `element_parser` at relative offset 0. Elements whose declared
    length is zero come back as `MISSING`.
    """
    offsets = parse_dynamic_array(hex_data, byte_offset, parse_offset)
    base = byte_offset + WORD_SIZE_IN_BYTES

    out: list[T | _Missing] = []
    for rel in offsets:
        elem_start = base + _as_index(rel, "element offset", hex_data)
        elem_length = _as_index(parse_uint256(hex_data, elem_start), "element length", hex_data)
        if elem_length == 0:
            out.append(MISSING)
            continue
        element_hex = read_bytes(hex_data, elem_start, WORD_SIZE_IN_BYTES + elem_length)
        out.append(element_parser(element_hex, 0))
    return out


def with_default(values: list[T | _Missing], default: T) -> list[T]:
    """Replace `MISSING` entries with `default`."""
    return [default if v is MISSING else v for v in values]  # type: ignore[misc]
