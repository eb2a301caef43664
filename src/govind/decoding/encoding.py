"""Outbound call encoding: 4-byte selector followed by 32-byte argument words.

Inputs are validated before anything is concatenated; a bad argument raises
`ValidationError` and no partial payload is produced.
"""

from __future__ import annotations

import string

from govind.core.errors import ValidationError

_HEX_DIGITS = frozenset(string.hexdigits)

SELECTOR_HEX_LEN = 10  # 0x + 4 bytes
BYTES32_HEX_LEN = 66  # 0x + 32 bytes
ADDRESS_HEX_LEN = 42  # 0x + 20 bytes


def _validate_hex(value: str, expected_len: int, what: str) -> None:
    if not isinstance(value, str):
        raise ValidationError(f"{what} must be a str, got {type(value).__name__}")
    if len(value) != expected_len:
        raise ValidationError(f"{what} wrong length: expected {expected_len} chars, got {len(value)}")
    if value[:2] != "0x":
        raise ValidationError(f"{what} missing 0x at start")
    if not _HEX_DIGITS.issuperset(value[2:]):
        raise ValidationError(f"{what} is not valid hex: {value!r}")


def validate_func_sig(func_sig: str) -> None:
    _validate_hex(func_sig, SELECTOR_HEX_LEN, "func sig")


def validate_bytes32(bytes32: str) -> None:
    _validate_hex(bytes32, BYTES32_HEX_LEN, "bytes32")


def validate_address(address: str) -> None:
    _validate_hex(address, ADDRESS_HEX_LEN, "address")


def pad_address(address: str) -> str:
    """Left-pad a 20-byte address to one 32-byte word (no 0x)."""
    return address[2:].rjust(64, "0")


def uint256_to_bytes32(value: int) -> str:
    """Format a non-negative int as a 0x-prefixed 32-byte word."""
    if value < 0 or value >= 1 << 256:
        raise ValidationError(f"value out of uint256 range: {value}")
    return "0x" + format(value, "064x")


def encode_func_sig_and_bytes32(func_sig: str, bytes32: str) -> str:
    validate_func_sig(func_sig)
    validate_bytes32(bytes32)

    return func_sig + bytes32[2:]


def encode_func_sig_and_bytes32_and_address(func_sig: str, bytes32: str, address: str) -> str:
    validate_func_sig(func_sig)
    validate_bytes32(bytes32)
    validate_address(address)

    return func_sig + bytes32[2:] + pad_address(address)


def encode_func_sig_and_address_and_bytes32(func_sig: str, address: str, bytes32: str) -> str:
    validate_func_sig(func_sig)
    validate_address(address)
    validate_bytes32(bytes32)

    return func_sig + pad_address(address) + bytes32[2:]


def decode_func_sig_and_bytes32(payload: str) -> tuple[str, str]:
    """Split a selector + one-word payload back into `(func_sig, bytes32)`."""
    _validate_hex(payload, SELECTOR_HEX_LEN + BYTES32_HEX_LEN - 2, "payload")
    return payload[:SELECTOR_HEX_LEN], "0x" + payload[SELECTOR_HEX_LEN:]
