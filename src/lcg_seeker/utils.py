import re
from typing import Iterable, List, Optional

_WHITESPACE = re.compile(rb"\s+")


class LcgSeekerError(Exception):
    pass


class UnknownImplementation(LcgSeekerError, KeyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown implementation {self.name!r}"


class InvalidWidth(LcgSeekerError, ValueError):
    pass


class HexDecodeError(LcgSeekerError, ValueError):
    pass


class InvalidNeedle(LcgSeekerError, ValueError):
    pass


def decode_hex(token: str | bytes) -> bytes:
    """Decode one hex token into a non-empty needle."""
    if isinstance(token, bytes):
        try:
            token = token.decode("ascii")
        except UnicodeDecodeError as e:
            raise HexDecodeError(f"Non-ASCII hex token: {token!r}") from e

    text = token.strip()
    if text[:2].lower() == "0x":
        text = text[2:]
    if not text:
        raise InvalidNeedle("Needles must be non-empty")

    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise HexDecodeError(f"Invalid hex value {token!r}: {e}") from e


def parse_needles(data: str | bytes) -> List[bytes]:
    """Decode whitespace-separated hex tokens."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return [decode_hex(token) for token in _WHITESPACE.split(data) if token]


def load_needles(file_path: str) -> List[bytes]:
    """Load the needle list from a file of whitespace-separated hex tokens."""
    with open(file_path, "rb") as f:
        data = f.read()
    return parse_needles(data)


def collect_needles(needle_path: Optional[str], targets: Iterable[str]) -> List[bytes]:
    """Needles from the file first, then positional hex arguments. Duplicates are dropped."""
    needles: List[bytes] = []
    if needle_path:
        needles.extend(load_needles(needle_path))
    needles.extend(decode_hex(target) for target in targets)
    return list(dict.fromkeys(needles))


def pretty_bytes(data: bytes) -> str:
    return " ".join(f"{b:02x}" for b in data)
