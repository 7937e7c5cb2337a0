from itertools import chain, islice
from typing import Iterable, Iterator, Optional

from lcg_seeker.utils import InvalidWidth

WIDTHS = (8, 16, 32, 64)


def width_bytes(width: int) -> int:
    """Number of bytes per output value, validating the integer width."""
    if width not in WIDTHS:
        raise InvalidWidth(f"Invalid int size {width}, expected one of {', '.join(map(str, WIDTHS))}")
    return width // 8


def value_bytes(value: int, size: int) -> bytes:
    """Narrow to the low `size` bytes (two's complement) and encode big-endian."""
    return (value & ((1 << (size * 8)) - 1)).to_bytes(size, "big")


def byte_stream(values: Iterable[int], width: int, limit: Optional[int] = None) -> Iterator[int]:
    """
    Lazily turn generator output values into a stream of byte values.
    `limit` bounds the stream in bytes; without it the stream is as long as `values`.
    """
    size = width_bytes(width)
    stream = chain.from_iterable(value_bytes(value, size) for value in values)
    if limit is not None:
        stream = islice(stream, limit)
    return stream
