import logging
import threading
from collections import deque
from concurrent.futures import ProcessPoolExecutor
from typing import BinaryIO, Callable, Iterator, Optional, Sequence, Tuple

from lcg_seeker.algorithm.lcg import Lcg
from lcg_seeker.algorithm.matcher import MatchResult, MultiNeedleMatcher
from lcg_seeker.byte_stream import byte_stream, width_bytes
from lcg_seeker.models.generator_config import GeneratorConfig
from lcg_seeker.models.search_hit import SearchHit
from lcg_seeker.state_queue import SingleSlotQueue
from lcg_seeker.state_snapshot import SearchSnapshot
from lcg_seeker.utils import pretty_bytes

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 4096

SeedChunk = Tuple[int, int]

PASSTHROUGH = MultiNeedleMatcher(())


def values_per_seed(count: int, width: int, needles: Sequence[bytes]) -> int:
    """
    Number of output values tested per seed.
    A zero count with needles means just enough values to cover the longest needle.
    """
    if count < 0:
        raise ValueError(f"Invalid count {count}")
    if count or not needles:
        return count
    size = width_bytes(width)
    return -(-max(len(needle) for needle in needles) // size)


def resolve_offset(config: GeneratorConfig, offset: Optional[int]) -> int:
    return config.default_offset if offset is None else offset


def seed_chunks(seed_from: int, seed_to: int, chunk_size: int) -> Iterator[SeedChunk]:
    """Split the inclusive seed range into inclusive chunks, ascending."""
    if chunk_size < 1:
        raise ValueError(f"Invalid chunk size {chunk_size}")
    first = seed_from
    while first <= seed_to:
        last = min(first + chunk_size - 1, seed_to)
        yield first, last
        first = last + 1


def run_trial(lcg: Lcg, matcher: MultiNeedleMatcher, seed: int, offset: int, width: int, length: int) -> MatchResult:
    """Reseed, skip the warm-up and scan the next `length` bytes."""
    lcg.seed(seed, offset)
    return matcher.scan(byte_stream(lcg, width), length)


def run_anchored_trial(
    lcg: Lcg, matchers: Sequence[MultiNeedleMatcher], seed: int, offset: int, width: int, length: int
) -> MatchResult:
    """
    Reseed and test whether some needle is a prefix of the surfaced stream.
    Each needle only sees as many bytes as it is long; matchers are ordered shortest first.
    """
    prefix = run_trial(lcg, PASSTHROUGH, seed, offset, width, length).passthrough
    for matcher in matchers:
        result = matcher.scan(iter(prefix), len(matcher.needles[0]))
        if result.matched:
            return result
    return MatchResult(needle=None, end_position=len(prefix))


def search_range(
    config: GeneratorConfig,
    seed_from: int,
    seed_to: int,
    width: int,
    count: int,
    offset: int,
    needles: Sequence[bytes],
    cancel: Optional[threading.Event] = None,
) -> Optional[SearchHit]:
    """
    Test every seed in [seed_from, seed_to] with one generator and return the first hit.
    A zero count anchors every needle at the first surfaced byte.
    Runs inside worker processes, so everything it takes must pickle.
    """
    lcg = Lcg(config)
    anchored = count == 0
    length = values_per_seed(count, width, needles) * width_bytes(width)
    if anchored:
        matchers = [MultiNeedleMatcher([needle]) for needle in sorted(needles, key=len)]
    else:
        matcher = MultiNeedleMatcher(needles)

    for seed in range(seed_from, seed_to + 1):
        if cancel is not None and cancel.is_set():
            return None
        if anchored:
            result = run_anchored_trial(lcg, matchers, seed, offset, width, length)
        else:
            result = run_trial(lcg, matcher, seed, offset, width, length)
        if result.matched:
            return SearchHit(
                implementation=config.name,
                seed=seed,
                needle=result.needle,
                end_position=result.end_position,
                width=width,
                offset=offset,
            )
    return None


def generate(
    configs: Sequence[GeneratorConfig],
    seed_from: int,
    seed_to: int,
    width: int,
    count: int,
    out: BinaryIO,
    offset: Optional[int] = None,
) -> int:
    """Write every seed's output bytes to `out` in seed order. Returns the number of bytes written."""
    length = count * width_bytes(width)
    written = 0

    for config in configs:
        lcg = Lcg(config)
        warmup = resolve_offset(config, offset)
        logger.info("Generating %s seeds %d..%d (offset %d)", config.name, seed_from, seed_to, warmup)
        for seed in range(seed_from, seed_to + 1):
            result = run_trial(lcg, PASSTHROUGH, seed, warmup, width, length)
            out.write(result.passthrough)
            written += len(result.passthrough)

    out.flush()
    return written


def _search_parallel(
    config: GeneratorConfig,
    chunks: Iterator[SeedChunk],
    args: tuple,
    workers: int,
    on_chunk: Callable[[int], None],
    cancel: threading.Event,
) -> Optional[SearchHit]:
    """Evaluate chunks in worker processes, consuming results in chunk order."""
    pending: deque = deque()

    with ProcessPoolExecutor(max_workers=workers) as executor:

        def submit(chunk: SeedChunk) -> None:
            logger.debug("Dispatching %s seeds %d..%d", config.name, *chunk)
            pending.append((chunk, executor.submit(search_range, config, chunk[0], chunk[1], *args)))

        try:
            for chunk in chunks:
                submit(chunk)
                if len(pending) >= workers * 2:
                    break

            while pending:
                (first, last), future = pending.popleft()
                hit = future.result()
                on_chunk(last - first + 1)
                if hit is not None or cancel.is_set():
                    return hit
                chunk = next(chunks, None)
                if chunk is not None:
                    submit(chunk)
        finally:
            for _, future in pending:
                future.cancel()

    return None


def search(
    configs: Sequence[GeneratorConfig],
    seed_from: int,
    seed_to: int,
    width: int,
    count: int,
    needles: Sequence[bytes],
    offset: Optional[int] = None,
    *,
    workers: int = 1,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    state_queue: Optional[SingleSlotQueue[SearchSnapshot]] = None,
    cancel: Optional[threading.Event] = None,
) -> Optional[SearchHit]:
    """
    Search every implementation's seed range for the first needle occurrence.
    Implementations are tried in order and seeds ascending; the first hit ends the whole run.
    """
    if not needles:
        raise ValueError("search needs at least one needle")
    if seed_from > seed_to:
        raise ValueError(f"Invalid seed range {seed_from}..{seed_to}")

    cancel = cancel or threading.Event()
    logger.debug("Needles: %s", ", ".join(pretty_bytes(needle) for needle in needles))
    seeds_per_impl = seed_to - seed_from + 1
    seeds_total = seeds_per_impl * len(configs)
    seeds_done = 0
    state_version = 0
    hit: Optional[SearchHit] = None
    config_name = ""
    config_index = 0

    def publish(complete: bool = False) -> None:
        nonlocal state_version
        if state_queue is None:
            return
        state_version += 1
        state_queue.publish(SearchSnapshot(
            state_version=state_version,
            complete=complete,
            implementation=config_name,
            implementation_index=config_index,
            implementation_count=len(configs),
            seeds_done=seeds_done,
            seeds_total=seeds_total,
            hit=hit,
        ))

    def on_chunk(seeds: int) -> None:
        nonlocal seeds_done
        seeds_done += seeds
        publish()

    try:
        for config_index, config in enumerate(configs, start=1):
            config_name = config.name
            warmup = resolve_offset(config, offset)
            logger.info(
                "Searching %s seeds %d..%d (offset %d, %d values of %d bits)",
                config.name, seed_from, seed_to, warmup, values_per_seed(count, width, needles), width,
            )
            publish()

            args = (width, count, warmup, tuple(needles))
            chunks = seed_chunks(seed_from, seed_to, chunk_size)
            if workers > 1:
                hit = _search_parallel(config, chunks, args, workers, on_chunk, cancel)
            else:
                for first, last in chunks:
                    hit = search_range(config, first, last, *args, cancel=cancel)
                    on_chunk(last - first + 1)
                    if hit is not None or cancel.is_set():
                        break

            if hit is not None:
                logger.info("Match in %s at seed %d", hit.implementation, hit.seed)
                return hit
            if cancel.is_set():
                logger.warning("Search cancelled during %s", config.name)
                return None
            logger.info("Exhausted %s without a match", config.name)

        return None
    finally:
        publish(complete=True)
        if state_queue is not None:
            state_queue.close()
