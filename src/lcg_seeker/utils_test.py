import pytest

from lcg_seeker.utils import (
    HexDecodeError,
    InvalidNeedle,
    UnknownImplementation,
    collect_needles,
    decode_hex,
    load_needles,
    parse_needles,
)


class TestHexDecoding:
    """Test suite for needle decoding"""

    def test_decode(self):
        assert decode_hex("000041a7") == b"\x00\x00\x41\xa7"
        assert decode_hex("0xDEAD") == b"\xde\xad"
        assert decode_hex(b"ff") == b"\xff"

    @pytest.mark.parametrize("token", ["abc", "zz", "12g4"])
    def test_malformed(self, token):
        with pytest.raises(HexDecodeError, match="Invalid hex value"):
            decode_hex(token)

    def test_empty(self):
        with pytest.raises(InvalidNeedle):
            decode_hex("")
        with pytest.raises(InvalidNeedle):
            decode_hex("0x")

    def test_parse_whitespace_separated(self):
        assert parse_needles("aa bb\n\tccdd\r\n") == [b"\xaa", b"\xbb", b"\xcc\xdd"]

    def test_parse_empty(self):
        assert parse_needles("  \n") == []

    def test_load_needles(self, tmp_path):
        path = tmp_path / "needles.txt"
        path.write_text("0102\n0304 \n")
        assert load_needles(str(path)) == [b"\x01\x02", b"\x03\x04"]

    def test_load_needles_malformed(self, tmp_path):
        path = tmp_path / "needles.txt"
        path.write_text("0102 xyz\n")
        with pytest.raises(HexDecodeError):
            load_needles(str(path))

    def test_collect_dedups(self, tmp_path):
        path = tmp_path / "needles.txt"
        path.write_text("aa bb")
        assert collect_needles(str(path), ["bb", "cc"]) == [b"\xaa", b"\xbb", b"\xcc"]
        assert collect_needles(None, []) == []


class TestErrors:
    """Test suite for the error taxonomy"""

    def test_unknown_implementation_message(self):
        err = UnknownImplementation("foo")
        assert str(err) == "Unknown implementation 'foo'"
        assert isinstance(err, KeyError)
