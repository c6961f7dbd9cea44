"""STRATA CLI entry point.

The top-level ``strata`` group (built on Click-Extra) owns logging setup:
console verbosity, the on-disk flight recorder and per-logger levels. The
actual work happens in subcommands:

- ``strata chain``: compose namespaces and print the property-source chain;
- ``strata get``: print resolved values and the source that supplied each.

``--version`` reports `strata.__version__`.

Examples
    $ strata --version
    $ strata -v chain -n application --config-dir ./config
    $ strata --no-flight-recorder get -n application server.port
"""

import logging
from collections.abc import Callable
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from strata import __version__
from strata.logging import (
    LoggingSettings,
    configure_logging,
    console_level,
    log_startup,
)

from .compose import chain as chain_command
from .compose import get as get_command
from .helpers.log_level_parser import parse_log_level

logger = logging.getLogger(__name__)


HELP = """Inspect how STRATA layers configuration namespaces.

    Namespaces are composed into a single lookup chain in which earlier
    sources win. Use the subcommands to see that chain for a set of
    namespaces, and which namespace answers for a given key.
    """

DEFAULT_LOG_PATH = (
    Path(user_log_dir("strata", appauthor=False, ensure_exists=True)) / "latest.log"
)


_LOGGING_OPTIONS = (
    click.option(
        "--verbose",
        "-v",
        "verbose_count",
        count=True,
        default=0,
        help="Show more on the console: -v for INFO, -vv for DEBUG.",
    ),
    click.option(
        "--quiet",
        "-q",
        "quiet_count",
        count=True,
        default=0,
        help="Show less on the console: -q for ERROR only, -qq for CRITICAL only.",
    ),
    click.option(
        "--debug/--no-debug",
        default=False,
        help="Developer output: DEBUG level with timestamps and source locations.",
    ),
    click.option(
        "--log-path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=DEFAULT_LOG_PATH,
        envvar="STRATA_LOG_PATH",
        show_default=True,
        show_envvar=True,
        help="File the flight recorder writes to.",
    ),
    click.option(
        "--flight-recorder-capacity",
        type=int,
        default=2000,
        hidden=True,
        envvar="STRATA_FLIGHT_RECORDER_CAPACITY",
        show_envvar=True,
        help="Number of records the flight recorder keeps in memory.",
    ),
    click.option(
        "--flight-recorder/--no-flight-recorder",
        "flight_recorder",
        default=True,
        show_envvar=True,
        help=(
            "Keep recent log records at DEBUG in memory, whatever -v/-q say, and "
            "write them to --log-path as soon as a WARNING or worse is logged."
        ),
    ),
    click.option(
        "--force-flush/--no-force-flush",
        "force_flush",
        default=False,
        show_default=True,
        show_envvar=True,
        help="Also write the flight recorder's buffer on a clean exit.",
    ),
    click.option(
        "-L",
        "--logger-level",
        "logger_levels",
        multiple=True,
        callback=parse_log_level,
        default=("click_extra=WARNING",),
        show_default=True,
        show_envvar=True,
        help=(
            "Minimum level for one logger, as NAME=LEVEL "
            "(e.g. -L strata.composition=DEBUG). Applies to the console and the "
            "flight recorder alike. Repeatable."
        ),
    ),
)


def logging_options(fn: Callable) -> Callable:
    """Attach the logging options of the top-level group."""
    for option in reversed(_LOGGING_OPTIONS):
        fn = option(fn)
    return fn


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@logging_options
@clickx.pass_context
def strata(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush: bool,
    logger_levels: dict[str, int],
) -> None:
    """Configure logging, then hand over to the subcommand."""
    settings = LoggingSettings(
        level=console_level(verbose_count, quiet_count),
        debug=debug,
        color=ctx.color is not False,
        log_path=log_path,
        flight_recorder=flight_recorder,
        flight_capacity=flight_recorder_capacity,
        force_flush=force_flush,
        logger_levels=logger_levels,
    )
    handlers = configure_logging(settings)
    log_startup(logger, app_version=__version__, settings=settings, handlers=handlers)

    # flushes the flight recorder (if asked) and closes the log file
    ctx.call_on_close(logging.shutdown)


strata.add_command(chain_command)
strata.add_command(get_command)
