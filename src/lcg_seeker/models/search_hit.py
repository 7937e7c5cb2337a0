from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class SearchHit:
    """Where a needle was found in one seed's output."""

    implementation: str
    seed: int
    needle: bytes
    end_position: int
    width: int
    offset: int = 0

    @property
    def byte_range(self) -> Tuple[int, int]:
        """Half-open byte range in the stream surfaced after warm-up."""
        return self.end_position - len(self.needle), self.end_position

    @property
    def iteration_range(self) -> Tuple[int, int]:
        """Half-open range of generator steps whose output holds the match, warm-up included."""
        size = self.width // 8
        start, end = self.byte_range
        return self.offset + start // size, self.offset + -(-end // size)
