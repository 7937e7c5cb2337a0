from dataclasses import dataclass
from itertools import islice
from typing import Iterable, Optional, Sequence

from lcg_seeker.utils import InvalidNeedle


@dataclass(frozen=True, slots=True)
class MatchResult:
    """
    Outcome of scanning one bounded stream.

    end_position is the 1-based count of stream bytes consumed when the scan stopped.
    passthrough holds the unmodified stream when there was nothing to search for.
    """

    needle: Optional[bytes]
    end_position: int
    passthrough: Optional[bytes] = None

    @property
    def matched(self) -> bool:
        return self.needle is not None

    @property
    def start_position(self) -> int:
        """0-based offset of the first matched byte."""
        if self.needle is None:
            return self.end_position
        return self.end_position - len(self.needle)


class MultiNeedleMatcher:
    """
    Find the earliest completion of any needle in a live byte stream.

    Each needle keeps a single counter of consecutively matched bytes. A mismatch
    restarts the counter at 1 when the byte equals the needle's first byte and at 0
    otherwise, so consumed bytes are never scanned again.
    """

    def __init__(self, needles: Iterable[bytes]):
        self.needles: Sequence[bytes] = tuple(bytes(needle) for needle in needles)
        for needle in self.needles:
            if not needle:
                raise InvalidNeedle("Needles must be non-empty")

    def __bool__(self) -> bool:
        return bool(self.needles)

    def scan(self, stream: Iterable[int], length: int) -> MatchResult:
        """Scan at most `length` bytes of `stream`."""
        if not self.needles:
            data = bytes(islice(stream, length))
            return MatchResult(needle=None, end_position=len(data), passthrough=data)

        needles = self.needles
        counts = [0] * len(needles)
        active = list(range(len(needles)))
        consumed = 0

        for i, r in enumerate(islice(stream, length)):
            consumed = i + 1
            remaining = length - i
            still_active = []
            for n in active:
                needle = needles[n]
                count = counts[n]
                if len(needle) - count - 1 >= remaining:
                    # Cannot complete before the stream ends.
                    continue
                if r == needle[count]:
                    count += 1
                elif r == needle[0]:
                    count = 1
                else:
                    count = 0
                if count == len(needle):
                    return MatchResult(needle=needle, end_position=consumed)
                counts[n] = count
                still_active.append(n)
            active = still_active
            if not active:
                break

        return MatchResult(needle=None, end_position=consumed)

