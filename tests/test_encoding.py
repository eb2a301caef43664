import pytest

from govind.core.constants import FUNC_SIGS, function_selector
from govind.core.errors import ValidationError
from govind.decoding.encoding import (
    decode_func_sig_and_bytes32,
    encode_func_sig_and_address_and_bytes32,
    encode_func_sig_and_bytes32,
    encode_func_sig_and_bytes32_and_address,
    uint256_to_bytes32,
)

STATE = FUNC_SIGS["state(uint256 proposalId)"]
PROPOSAL_ID = uint256_to_bytes32(0xABCDEF)
ACCOUNT = "0xb80170a1bCEdC322bC448dE1e92B39076819fa3d"


def test_selector_and_bytes32():
    payload = encode_func_sig_and_bytes32(STATE, PROPOSAL_ID)
    assert payload == "0x3e4f49e6" + "0" * 58 + "abcdef"
    assert len(payload) == 10 + 64


def test_selector_bytes32_address():
    payload = encode_func_sig_and_bytes32_and_address("0x43859632", PROPOSAL_ID, ACCOUNT)
    assert payload == "0x43859632" + PROPOSAL_ID[2:] + "0" * 24 + ACCOUNT[2:]


def test_selector_address_bytes32():
    payload = encode_func_sig_and_address_and_bytes32("0xeb9019d4", ACCOUNT, PROPOSAL_ID)
    assert payload == "0xeb9019d4" + "0" * 24 + ACCOUNT[2:] + PROPOSAL_ID[2:]


@pytest.mark.parametrize(
    "selector,value",
    [
        (STATE, 0),
        ("0x2d63f693", 1),
        ("0xffffffff", 2**256 - 1),
    ],
)
def test_round_trip(selector, value):
    word = uint256_to_bytes32(value)
    assert decode_func_sig_and_bytes32(encode_func_sig_and_bytes32(selector, word)) == (selector, word)


@pytest.mark.parametrize(
    "func_sig,bytes32,match",
    [
        ("0x3e4f49e", PROPOSAL_ID, "func sig wrong length"),
        ("003e4f49e6", PROPOSAL_ID, "func sig missing 0x"),
        (STATE, PROPOSAL_ID[:-2], "bytes32 wrong length"),
        (STATE, "00" + PROPOSAL_ID[2:], "bytes32 missing 0x"),
        (STATE, "0x" + "zz" * 32, "not valid hex"),
    ],
)
def test_validation_errors(func_sig, bytes32, match):
    with pytest.raises(ValidationError, match=match):
        encode_func_sig_and_bytes32(func_sig, bytes32)


@pytest.mark.parametrize("address", [ACCOUNT[:-1], "00" + ACCOUNT[2:]])
def test_address_validation(address):
    with pytest.raises(ValidationError, match="address"):
        encode_func_sig_and_bytes32_and_address(STATE, PROPOSAL_ID, address)
    with pytest.raises(ValidationError, match="address"):
        encode_func_sig_and_address_and_bytes32(STATE, address, PROPOSAL_ID)


def test_uint256_out_of_range():
    with pytest.raises(ValidationError):
        uint256_to_bytes32(2**256)
    with pytest.raises(ValidationError):
        uint256_to_bytes32(-1)


@pytest.mark.parametrize("signature,selector", list(FUNC_SIGS.items()))
def test_func_sig_table_matches_keccak(signature, selector):
    assert function_selector(signature) == selector
