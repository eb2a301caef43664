import pytest

from govind.core.constants import EVENT_SIGS, PROPOSAL_CREATED_SIGNATURE, event_topic
from govind.core.errors import DecodingError, ValidationError
from govind.core.models import ProposalCreatedEvent
from govind.decoding.decoder import decode_data
from govind.decoding.proposal import PROPOSAL_CREATED_LAYOUT, parse_proposal_created_data
from govind.decoding.specs import DataFieldSpec, layout_from_signature
from helpers import encode_proposal_created, word

PROPOSER = "0x" + "aa" * 20


def _example_data() -> str:
    """proposalId=1, proposer=0xaa.., empty arrays, blocks 100/200, description "test"."""
    header = 9 * 32
    words = [
        word(1),
        "00" * 12 + "aa" * 20,
        word(header),        # targets
        word(header + 32),   # values
        word(header + 64),   # signatures
        word(header + 96),   # calldatas
        word(100),
        word(200),
        word(header + 128),  # description
    ]
    tail = [word(0)] * 4 + [word(4), "test".encode().hex().ljust(64, "0")]
    return "0x" + "".join(words + tail)


def test_handwritten_example():
    ev = parse_proposal_created_data(_example_data())
    assert ev == ProposalCreatedEvent(
        proposal_id=1,
        proposer=PROPOSER,
        targets=(),
        values=(),
        signatures=(),
        calldatas=(),
        start_block=100,
        end_block=200,
        description="test",
    )


def test_prefix_is_optional():
    assert parse_proposal_created_data(_example_data()[2:]) == parse_proposal_created_data(_example_data())


def test_matches_reference_encoder():
    targets = ["0x912ce59144191c1204e64559fe8253a0e49e6548", "0x" + "01" * 20]
    data = encode_proposal_created(
        proposal_id=2**255 + 12345,
        proposer="0xb80170a1bcedc322bc448de1e92b39076819fa3d",
        targets=targets,
        values=[0, 10**18],
        signatures=["transfer(address,uint256)", ""],
        calldatas=[b"\xa9\x05\x9c\xbb" + b"\x00" * 64, b""],
        start_block=17_000_000,
        end_block=17_050_000,
        description="# AIP-1\n\nFund the grants program 🚀",
    )

    ev = parse_proposal_created_data(data)

    assert ev.proposal_id == 2**255 + 12345
    assert ev.proposer == "0xb80170a1bcedc322bc448de1e92b39076819fa3d"
    assert ev.targets == tuple(targets)
    assert ev.values == (0, 10**18)
    assert ev.signatures == ("transfer(address,uint256)", "")
    assert ev.calldatas == ("0xa9059cbb" + "00" * 64, "0x")
    assert ev.start_block == 17_000_000
    assert ev.end_block == 17_050_000
    assert ev.description == "# AIP-1\n\nFund the grants program 🚀"


def test_empty_everything_from_reference_encoder():
    ev = parse_proposal_created_data(encode_proposal_created(description=""))
    assert ev.targets == ev.values == ev.signatures == ev.calldatas == ()
    assert ev.description == ""


def test_defaults_keep_declared_length():
    ev = parse_proposal_created_data(
        encode_proposal_created(
            targets=["0x" + "02" * 20] * 3,
            values=[1, 2, 3],
            signatures=["", "", ""],
            calldatas=[b"", b"", b""],
        )
    )
    assert ev.signatures == ("", "", "")
    assert ev.calldatas == ("0x", "0x", "0x")


def test_short_header_raises():
    with pytest.raises(DecodingError):
        parse_proposal_created_data("0x" + word(1) * 8)


def test_truncated_description_raises():
    data = encode_proposal_created(description="x" * 100)
    with pytest.raises(DecodingError):
        parse_proposal_created_data(data[:-64])


def test_layout_topic_matches_known_event():
    assert PROPOSAL_CREATED_LAYOUT.topic0 == EVENT_SIGS["ProposalCreated"]
    assert event_topic(PROPOSAL_CREATED_SIGNATURE) == EVENT_SIGS["ProposalCreated"]
    assert [f.word_index for f in PROPOSAL_CREATED_LAYOUT.data_fields] == list(range(9))
    assert [f.is_dynamic for f in PROPOSAL_CREATED_LAYOUT.data_fields] == [
        False, False, True, True, True, True, False, False, True,
    ]


def test_generic_layout_skips_indexed_params():
    layout = layout_from_signature("Voted(address indexed voter, uint256 weight, string reason, bool support)")
    assert [(f.name, f.word_index) for f in layout.data_fields] == [("weight", 0), ("reason", 1), ("support", 2)]

    from eth_abi import encode

    data = "0x" + encode(["uint256", "string", "bool"], [42, "because", True]).hex()
    assert decode_data(layout, data) == {"weight": 42, "reason": "because", "support": True}


def test_unsupported_field_type():
    with pytest.raises(ValidationError):
        DataFieldSpec("x", 0, "int24")
    with pytest.raises(ValidationError):
        DataFieldSpec("x", 0, "uint256[][]")
