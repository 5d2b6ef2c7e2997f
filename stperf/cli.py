"""Click-based CLI for the stperf profiler."""

import json
import os
import sys
import time
from functools import wraps
from pathlib import Path
from typing import Any

import click

from . import __version__
from .config import ProfilerConfig, load_config
from .errors import ProfilerError
from .format import FORMATS, get_format
from .perf_logging import LogCategory, get_category_logger, setup_logging
from .profiling.guard import measure
from .profiling.tracker import ScopeTracker

logger = get_category_logger(LogCategory.CLI)


def _use_color() -> bool:
    if "NO_COLOR" in os.environ:
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


def handle_errors(f: Any) -> Any:
    """Report ProfilerError as a formatted message and exit with its code."""

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except ProfilerError as e:
            click.echo(e.format(use_color=_use_color()), err=True)
            sys.exit(e.exit_code)

    return wrapper


def run_demo(tracker: ScopeTracker, loops: int, sleep_ms: float) -> None:
    """Record the documented example workload into ``tracker``.

    Every ``main`` iteration runs ``inner operations`` twice, each wrapping
    one ``processing`` call, followed by one direct ``processing`` call.
    """

    def process() -> None:
        with measure("processing", tracker):
            time.sleep(sleep_ms / 1000)

    for _ in range(loops):
        with measure("main", tracker):
            for _ in range(2):
                with measure("inner operations", tracker):
                    process()
            process()


@click.group()
@click.version_option(version=__version__, prog_name="stperf")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON configuration file path",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write DEBUG logs to this rotating file",
)
@click.pass_context
@handle_errors
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    config_file: Path | None,
    log_file: Path | None,
) -> None:
    """stperf - call-tree profiler for explicitly marked scopes."""
    config = load_config(config_file, log_file=log_file)
    setup_logging(
        level=config.log_level,
        quiet=quiet,
        verbose=verbose,
        log_file=config.log_file,
        log_format=config.log_format,
    )
    ctx.obj = config


@cli.command()
@click.option("--loops", default=2, show_default=True, type=click.IntRange(min=0), help="Iterations of the top-level scope")
@click.option("--sleep-ms", default=100.0, show_default=True, type=click.FloatRange(min=0), help="Duration of each processing step")
@click.option("--format", "format_name", type=click.Choice(list(FORMATS)), help="Report glyph preset")
@click.option("--decimals", type=click.IntRange(0, 9), help="Decimals on the ms/loop figure")
@click.option("--json", "as_json", is_flag=True, help="Print the recorded tree as JSON")
@click.pass_obj
@handle_errors
def demo(
    config: ProfilerConfig,
    loops: int,
    sleep_ms: float,
    format_name: str | None,
    decimals: int | None,
    as_json: bool,
) -> None:
    """Profile the built-in example workload and print the report."""
    tracker = ScopeTracker(config.model_copy(update={"enabled": True}))
    logger.debug(f"Running demo: {loops} loop(s), {sleep_ms}ms per step")
    run_demo(tracker, loops, sleep_ms)

    if as_json:
        click.echo(json.dumps(tracker.snapshot(), indent=2))
        return

    options = get_format(format_name) if format_name else None
    tracker.print_report(options, decimals)


@cli.command()
@click.pass_obj
@handle_errors
def formats(config: ProfilerConfig) -> None:
    """List report formats with a sample rendering."""
    tracker = ScopeTracker(config.model_copy(update={"enabled": True}))
    run_demo(tracker, loops=1, sleep_ms=0)
    for name, options in FORMATS.items():
        marker = " (configured)" if name == config.format else ""
        click.echo(f"{name}{marker}")
        click.echo(tracker.render_report(options, decimals=0))


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
