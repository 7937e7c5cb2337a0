from dataclasses import dataclass
from typing import Optional

from lcg_seeker.models.search_hit import SearchHit


@dataclass(frozen=True, slots=True)
class SearchSnapshot:
    """Minimal immutable snapshot of search progress."""

    state_version: int
    complete: bool
    implementation: str
    implementation_index: int
    implementation_count: int
    seeds_done: int
    seeds_total: int
    hit: Optional[SearchHit] = None
