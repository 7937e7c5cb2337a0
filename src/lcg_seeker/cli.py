import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Tuple

import click
from rich.console import Console

from lcg_seeker.byte_stream import width_bytes
from lcg_seeker.catalog import CATALOG, implementation_names, resolve_implementations
from lcg_seeker.driver import DEFAULT_CHUNK_SIZE, generate as generate_bytes, search as search_seeds
from lcg_seeker.state_queue import SingleSlotQueue
from lcg_seeker.state_snapshot import SearchSnapshot
from lcg_seeker.ui import catalog_table, configure_logging, format_hit, get_console, progress_loop
from lcg_seeker.utils import LcgSeekerError, collect_needles

ENVVAR_PREFIX = "LCG_SEEKER"
EXIT_NO_MATCH = 1
EXIT_INTERRUPTED = 130

SEED = click.IntRange(0, (1 << 64) - 1)


def seed_range_options(f):
    f = click.option("--offset", "-o", type=click.IntRange(min=0), default=None,
                     help="Warm-up steps to discard after seeding (default: per implementation)")(f)
    f = click.option("--size", "-t", "width", type=int, default=64, show_default=True,
                     help="Integer size in bits: 8, 16, 32 or 64")(f)
    f = click.option("--end", "-e", "seed_to", required=True, type=SEED, help="Last seed to use")(f)
    f = click.option("--start", "-s", "seed_from", required=True, type=SEED, help="First seed to use")(f)
    f = click.option("--impl", "-i", "implementations", required=True,
                     help="LCG implementation(s): a name, a comma-separated list, or 'all'")(f)
    return f


def resolve_common(implementations: str, seed_from: int, seed_to: int, width: int):
    """Validate everything up front so a bad argument never starts a partial run."""
    if seed_from > seed_to:
        raise click.UsageError(f"Invalid seed range {seed_from}..{seed_to}")
    try:
        configs = resolve_implementations(implementations)
        width_bytes(width)
    except LcgSeekerError as e:
        raise click.UsageError(str(e)) from e
    return configs


@click.group()
@click.option("--verbose", "-v", count=True, help="Increase log verbosity (-vv for debug)")
def cli(verbose: int):
    configure_logging(verbose)


@cli.command("list")
def list_implementations():
    """List the known LCG implementations."""
    Console().print(catalog_table(CATALOG[name] for name in implementation_names()))


@cli.command()
@seed_range_options
@click.option("--count", "-c", type=click.IntRange(min=1), required=True, help="Number of iterations per seed")
def generate(implementations: str, seed_from: int, seed_to: int, width: int, offset: Optional[int], count: int):
    """Write the raw big-endian output of every seed to stdout."""
    configs = resolve_common(implementations, seed_from, seed_to, width)
    out = click.get_binary_stream("stdout")
    generate_bytes(configs, seed_from, seed_to, width, count, out, offset=offset)


def run_search(progress: bool, **kwargs):
    """Run the search, drawing progress from a background search thread when asked."""
    if not progress:
        return search_seeds(**kwargs)

    state_queue: SingleSlotQueue[SearchSnapshot] = SingleSlotQueue()
    cancel = threading.Event()

    with ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(search_seeds, state_queue=state_queue, cancel=cancel, **kwargs)

        interrupted = False
        try:
            progress_loop(state_queue, get_console())
        except KeyboardInterrupt:
            interrupted = True
            cancel.set()
            state_queue.close()

        hit = future.result()

    if interrupted:
        # A cancelled search is not an exhausted one.
        click.echo("Aborted!", err=True)
        raise click.exceptions.Exit(EXIT_INTERRUPTED)
    return hit


@cli.command()
@seed_range_options
@click.option("--count", "-c", type=click.IntRange(min=0), default=0, show_default=True,
              help="Number of iterations per seed (0: just enough to cover the longest needle)")
@click.option("--needles", "-n", "needle_path", type=click.Path(exists=True, dir_okay=False),
              help="File of whitespace-separated hex needles")
@click.option("--workers", "-w", type=click.IntRange(min=1), default=1, show_default=True,
              help="Worker processes")
@click.option("--chunk-size", type=click.IntRange(min=1), default=DEFAULT_CHUNK_SIZE, show_default=True,
              help="Seeds per work unit")
@click.option("--progress/--no-progress", default=None, help="Show a progress bar (default: when stderr is a terminal)")
@click.argument("targets", nargs=-1)
def search(
    implementations: str,
    seed_from: int,
    seed_to: int,
    width: int,
    offset: Optional[int],
    count: int,
    needle_path: Optional[str],
    workers: int,
    chunk_size: int,
    progress: Optional[bool],
    targets: Tuple[str, ...],
):
    """Find the seed whose output contains one of the hex TARGETS."""
    configs = resolve_common(implementations, seed_from, seed_to, width)
    try:
        needles = collect_needles(needle_path, targets)
    except LcgSeekerError as e:
        raise click.UsageError(str(e)) from e
    if not needles:
        raise click.UsageError("No needles given; pass hex TARGETS or --needles (or use 'generate')")

    if progress is None:
        progress = get_console().is_terminal

    hit = run_search(
        progress,
        configs=configs,
        seed_from=seed_from,
        seed_to=seed_to,
        width=width,
        count=count,
        needles=needles,
        offset=offset,
        workers=workers,
        chunk_size=chunk_size,
    )

    if hit is None:
        click.echo("No match found.", err=True)
        raise click.exceptions.Exit(EXIT_NO_MATCH)

    click.echo(format_hit(hit))


if __name__ == "__main__":
    cli(auto_envvar_prefix=ENVVAR_PREFIX)
