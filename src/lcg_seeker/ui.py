import logging
from typing import Iterable, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from lcg_seeker.models.generator_config import GeneratorConfig
from lcg_seeker.models.search_hit import SearchHit
from lcg_seeker.state_queue import SingleSlotQueue
from lcg_seeker.state_snapshot import SearchSnapshot

LOG_FORMAT = "%(message)s"
LOG_LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
}


def get_console() -> Console:
    """Diagnostics go to stderr; stdout carries results."""
    return Console(stderr=True)


def configure_logging(verbosity: int, console: Optional[Console] = None) -> None:
    level = LOG_LEVELS.get(verbosity, logging.DEBUG)
    handler = RichHandler(console=console or get_console(), show_path=False, rich_tracebacks=True)
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", handlers=[handler], force=True)


def get_progress(console: Console) -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(bar_width=30),
        TextColumn("{task.completed}/{task.total} seeds"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def describe(state: SearchSnapshot) -> str:
    return f"[{state.implementation_index}/{state.implementation_count}] {state.implementation}"


def progress_loop(state_queue: SingleSlotQueue[SearchSnapshot], console: Console) -> Optional[SearchSnapshot]:
    """Render search snapshots until the producer closes the queue. Returns the last one seen."""
    last = None
    with get_progress(console) as progress:
        task = progress.add_task("Waiting for first update…", total=None)
        while True:
            state = state_queue.get()
            if state is None:
                break
            last = state
            progress.update(task, description=describe(state), completed=state.seeds_done, total=state.seeds_total)
    return last


def format_hit(hit: SearchHit) -> str:
    byte_start, byte_end = hit.byte_range
    iter_start, iter_end = hit.iteration_range
    return (
        f"Found! impl={hit.implementation} seed={hit.seed} "
        f"bytes={byte_start}..{byte_end} iterations={iter_start}..{iter_end} "
        f"needle={hit.needle.hex()}"
    )


def catalog_table(configs: Iterable[GeneratorConfig]) -> Table:
    table = Table(title="LCG implementations")
    table.add_column("Name", style="bold")
    table.add_column("Modulus", justify="right")
    table.add_column("Multiplier", justify="right")
    table.add_column("Increment", justify="right")
    table.add_column("Bits", justify="center")
    table.add_column("Offset", justify="right")

    for config in configs:
        modulus = "2^64 (wrap)" if config.wraps else str(config.modulus)
        table.add_row(
            config.name,
            modulus,
            str(config.multiplier),
            str(config.increment),
            f"{config.msb}..{config.lsb}",
            str(config.default_offset),
        )
    return table
