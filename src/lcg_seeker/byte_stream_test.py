import pytest

from lcg_seeker.byte_stream import byte_stream, value_bytes, width_bytes
from lcg_seeker.utils import InvalidWidth


class TestByteStream:
    """Test suite for the byte stream adapter"""

    @pytest.mark.parametrize("width, size", [(8, 1), (16, 2), (32, 4), (64, 8)])
    def test_width_bytes(self, width, size):
        assert width_bytes(width) == size

    @pytest.mark.parametrize("width", [0, 7, 12, 24, 128])
    def test_invalid_width(self, width):
        with pytest.raises(InvalidWidth, match="Invalid int size"):
            width_bytes(width)

    def test_invalid_width_fails_before_iteration(self):
        """Test a bad width is reported when the stream is built"""
        with pytest.raises(InvalidWidth):
            byte_stream(iter([1]), 12)

    def test_value_bytes_big_endian(self):
        assert value_bytes(0x41A7, 4) == b"\x00\x00\x41\xa7"
        assert value_bytes(0x0102030405060708, 8) == bytes(range(1, 9))

    def test_value_bytes_narrows(self):
        """Test values wider than the width keep only their low bytes"""
        assert value_bytes(16838, 1) == b"\xc6"
        assert value_bytes(0x123456, 2) == b"\x34\x56"

    def test_stream_concatenates(self):
        assert list(byte_stream([1, 2], 16)) == [0, 1, 0, 2]

    def test_stream_limit_is_lazy(self):
        """Test an infinite value source is bounded by the byte limit"""
        def forever():
            n = 0
            while True:
                n += 1
                yield n

        assert bytes(byte_stream(forever(), 32, limit=6)) == b"\x00\x00\x00\x01\x00\x00"
