import pytest
from eth_abi import encode

from govind.core.errors import DecodingError
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
from govind.decoding.reader import read_bytes, strip_0x, word_at
from helpers import word


class TestReader:
    def test_read_bytes_uses_byte_offsets(self):
        buf = "00112233445566"
        assert read_bytes(buf, 2, 3) == "223344"
        assert read_bytes(buf, 7, 0) == ""

    def test_read_past_end_raises(self):
        with pytest.raises(DecodingError):
            read_bytes("0011", 1, 2)

    def test_negative_offset_raises(self):
        with pytest.raises(DecodingError):
            read_bytes("0011", -1, 1)

    def test_strip_0x(self):
        assert strip_0x("0xABcd") == "ABcd"
        assert strip_0x("abcd") == "abcd"
        with pytest.raises(DecodingError):
            strip_0x("0xabc")

    def test_non_hex_characters_raise(self):
        with pytest.raises(DecodingError, match="non-hex"):
            strip_0x("0xzz" + "00" * 31)
        with pytest.raises(DecodingError, match="non-hex"):
            parse_uint256("zz" + "00" * 31, 0)
        with pytest.raises(DecodingError):
            parse_dynamic_bytes(word(2) + "gg00" + "00" * 30, 0)

    def test_word_at(self):
        buf = word(1) + word(2)
        assert int(word_at(buf, 1), 16) == 2


class TestStatic:
    def test_uint256_full_range(self):
        buf = word(2**256 - 1) + word(7)
        assert parse_uint256(buf, 0) == 2**256 - 1
        assert parse_uint256(buf, 32) == 7
        assert parse_offset(buf, 32) == 7

    def test_uint256_short_buffer(self):
        with pytest.raises(DecodingError):
            parse_uint256("00" * 31, 0)

    @pytest.mark.parametrize(
        "addr",
        [
            "0x0000000000000000000000000000000000000001",
            "0x912CE59144191C1204E64559FE8253a0e49E6548",
            "0xffffffffffffffffffffffffffffffffffffffff",
        ],
    )
    def test_address_shape(self, addr):
        buf = addr[2:].rjust(64, "0")
        out = parse_address(buf, 0)
        assert len(out) == 42
        assert out.startswith("0x")
        assert out.lower() == addr.lower()

    def test_address_preserves_case(self):
        buf = "00" * 12 + "AbCdEf" + "00" * 17
        assert parse_address(buf, 0) == "0xAbCdEf" + "00" * 17


class TestDynamic:
    def test_dynamic_bytes(self):
        buf = encode(["bytes"], [b"\x01\x02\x03"]).hex()
        # skip the head word (offset) to land on the length word
        assert parse_dynamic_bytes(buf, parse_offset(buf, 0)) == "0x010203"

    def test_utf8_string(self):
        buf = encode(["string"], ["héllo ✓"]).hex()
        assert parse_utf8_string(buf, parse_offset(buf, 0)) == "héllo ✓"

    def test_invalid_utf8_raises(self):
        buf = word(2) + "fffe" + "00" * 30
        with pytest.raises(DecodingError, match="UTF-8"):
            parse_utf8_string(buf, 0)

    def test_declared_length_past_end_raises(self):
        buf = word(64) + "00" * 32
        with pytest.raises(DecodingError):
            parse_dynamic_bytes(buf, 0)


class TestArrays:
    def test_static_array(self):
        buf = encode(["uint256[]"], [[5, 6, 7]]).hex()
        assert parse_dynamic_array(buf, parse_offset(buf, 0), parse_uint256) == [5, 6, 7]

    def test_empty_static_array(self):
        buf = encode(["address[]"], [[]]).hex()
        assert parse_dynamic_array(buf, parse_offset(buf, 0), parse_address) == []

    def test_array_of_strings_uses_local_offsets(self):
        # A leading uint256 shifts the array away from the buffer origin, so
        # element offsets only resolve if taken relative to the array body.
        buf = encode(["uint256", "string[]"], [9, ["a", "bc", "def" * 20]]).hex()
        out = parse_dynamic_array_of_dynamic(buf, parse_offset(buf, 32), parse_utf8_string)
        assert out == ["a", "bc", "def" * 20]

    def test_array_of_bytes(self):
        buf = encode(["bytes[]"], [[b"\xde\xad", b"\xbe\xef" * 40]]).hex()
        out = parse_dynamic_array_of_dynamic(buf, parse_offset(buf, 0), parse_dynamic_bytes)
        assert out == ["0xdead", "0x" + "beef" * 40]

    def test_zero_length_elements_are_missing(self):
        buf = encode(["string[]"], [["x", "", "y"]]).hex()
        out = parse_dynamic_array_of_dynamic(buf, parse_offset(buf, 0), parse_utf8_string)
        assert out == ["x", MISSING, "y"]
        assert with_default(out, "") == ["x", "", "y"]

    def test_missing_sentinel_is_falsy_singleton(self):
        assert not MISSING
        assert repr(MISSING) == "MISSING"
        assert type(MISSING)() is MISSING

    def test_truncated_element_raises(self):
        buf = encode(["bytes[]"], [[b"\x01" * 40]]).hex()
        with pytest.raises(DecodingError):
            parse_dynamic_array_of_dynamic(buf[:-64], parse_offset(buf, 0), parse_dynamic_bytes)

    def test_huge_array_length_raises(self):
        buf = word(2**200)
        with pytest.raises(DecodingError):
            parse_dynamic_array(buf, 0, parse_uint256)
