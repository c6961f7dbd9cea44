"""Logging helpers used by the STRATA CLI and the bootstrap phase.

Three pieces live here:

- console output through Rich, with third-party records tagged by origin;
- the "flight recorder", an in-memory ring of DEBUG records written to a file
  when something goes wrong (or on exit, if asked);
- a deferred buffer that holds STRATA's own records while configuration is
  composed eagerly, before anyone has configured logging, and replays them
  once the normal startup path runs.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
import threading
from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError, version
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "strata"

BASE_CONSOLE_LEVEL = logging.WARNING
LEVEL_STEP = 10  # distance between adjacent stdlib levels

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]

CONSOLE_FORMAT = "%(prefix)s %(message)s"
DEBUG_CONSOLE_FORMAT = "%(asctime)s %(name)s: %(message)s"
RECORDER_FORMAT = (
    "[%(asctime)s] [%(process)d:%(threadName)s] "
    "%(levelname)s %(name)s:%(lineno)d: %(message)s"
)

STARTUP_PACKAGES = (
    ("Click", "click"),
    ("Click-Extra", "click-extra"),
    ("Rich", "rich"),
)


class ThirdPartyPrefixFilter(logging.Filter):
    """Tag records from outside the project with their top-level package.

    ``click_extra.colorize`` becomes ``[click_extra]``; STRATA's own records
    get an empty tag. Never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(PROJECT_PREFIX):
            record.prefix = ""
        else:
            record.prefix = f"[{record.name.partition('.')[0]}]"
        return True


@dataclass(frozen=True, slots=True)
class LoggingSettings:
    """Everything the CLI decides about logging before a command runs.

    Attributes:
        level: Console threshold (see `console_level`).
        debug: Developer mode; console shows DEBUG with paths and timestamps.
        color: Whether the console may use ANSI colors.
        log_path: Flight-recorder destination.
        flight_recorder: Whether the flight recorder is attached at all.
        flight_capacity: Number of records the recorder keeps in memory.
        force_flush: Write the recorder's buffer on exit even if nothing failed.
        logger_levels: Per-logger minimum levels, applied to every handler.
    """

    level: int = BASE_CONSOLE_LEVEL
    debug: bool = False
    color: bool = True
    log_path: Path | None = None
    flight_recorder: bool = True
    flight_capacity: int = 2000
    force_flush: bool = False
    logger_levels: dict[str, int] = field(default_factory=dict)


def console_level(verbose: int = 0, quiet: int = 0) -> int:
    """Map ``-v``/``-q`` counts onto a level, clamped to DEBUG..CRITICAL."""
    level = BASE_CONSOLE_LEVEL - LEVEL_STEP * verbose + LEVEL_STEP * quiet
    return max(logging.DEBUG, min(logging.CRITICAL, level))


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr console handler.

    Args:
        level: Minimum level shown. Ignored in `debug_mode`, which shows everything.
        debug_mode: Add timestamps, logger names and clickable source paths.
        color: Passed through to Rich; matches click-extra's ``--color`` switch.

    Returns:
        RichHandler: Ready to attach to the root logger.
    """
    color_system: ColorSystem | None = "auto" if color else None
    handler = RichHandler(
        level=logging.DEBUG if debug_mode else level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    if debug_mode:
        handler.setFormatter(logging.Formatter(fmt=DEBUG_CONSOLE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT))
        handler.addFilter(ThirdPartyPrefixFilter())
    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build the flight recorder: a memory buffer in front of a log file.

    The file is truncated on open. Up to `capacity` records are held; the
    whole buffer is written out when a record at `flush_level` or above
    arrives, and on close when `flush_on_close` is set.

    Returns:
        MemoryHandler: The buffer, targeting a DEBUG-level FileHandler.
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(RECORDER_FORMAT))
    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def configure_logging(settings: LoggingSettings) -> list[logging.Handler]:
    """Install the console handler and, if enabled, the flight recorder.

    The root logger is opened up to DEBUG so each handler does its own
    filtering; `settings.logger_levels` then narrows individual loggers.
    Replaces whatever handlers the root logger had.

    Returns:
        list[logging.Handler]: The installed handlers, console first.
    """
    handlers: list[logging.Handler] = [
        config_console_handler(
            level=settings.level, debug_mode=settings.debug, color=settings.color
        )
    ]
    if settings.flight_recorder and settings.log_path is not None:
        handlers.append(
            config_flight_recorder(
                path=settings.log_path,
                capacity=settings.flight_capacity,
                flush_on_close=settings.force_flush,
            )
        )
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, level in settings.logger_levels.items():
        logging.getLogger(name).setLevel(level)
    return handlers


# --------------------------------------------------------------------------- #
# Deferred logging (bootstrap eager-load)
# --------------------------------------------------------------------------- #


class DeferredLogBuffer(MemoryHandler):
    """Unbounded in-memory buffer that never flushes on its own.

    Records are held until `replay_deferred_logs()` drains them back through
    the normal logging tree.
    """

    def __init__(self) -> None:
        super().__init__(capacity=0, flushOnClose=False)

    def shouldFlush(self, record: logging.LogRecord) -> bool:
        return False

    def drain(self) -> list[logging.LogRecord]:
        """Remove and return every buffered record, oldest first."""
        self.acquire()
        try:
            records = list(self.buffer)
            self.buffer.clear()
        finally:
            self.release()
        return records


_deferred_lock = threading.Lock()
_deferred: tuple[DeferredLogBuffer, bool, int] | None = None


def enable_deferred_logging() -> None:
    """Start buffering records emitted under the ``strata`` logger.

    While enabled, the ``strata`` logger stops propagating and captures every
    level, so nothing reaches half-configured handlers (or Python's last-resort
    stderr handler). Calling this twice is a no-op.
    """
    global _deferred  # pylint: disable=global-statement
    with _deferred_lock:
        if _deferred is not None:
            return
        project_logger = logging.getLogger(PROJECT_PREFIX)
        buffer = DeferredLogBuffer()
        _deferred = (buffer, project_logger.propagate, project_logger.level)
        project_logger.addHandler(buffer)
        project_logger.propagate = False
        project_logger.setLevel(logging.DEBUG)


def deferred_logging_enabled() -> bool:
    """Return True while records are being buffered."""
    return _deferred is not None


def replay_deferred_logs() -> int:
    """Stop buffering and replay the buffered records through their loggers.

    Each record is handed to the logger that created it, so handlers, filters
    and levels configured after the fact apply as if it had been emitted now.

    Returns:
        int: The number of replayed records (0 when deferral was not enabled).
    """
    global _deferred  # pylint: disable=global-statement
    with _deferred_lock:
        if _deferred is None:
            return 0
        buffer, propagate, level = _deferred
        _deferred = None
        project_logger = logging.getLogger(PROJECT_PREFIX)
        project_logger.removeHandler(buffer)
        project_logger.propagate = propagate
        project_logger.setLevel(level)

    records = buffer.drain()
    for record in records:
        target = logging.getLogger(record.name)
        if target.isEnabledFor(record.levelno):
            target.handle(record)
    buffer.close()
    return len(records)


# --------------------------------------------------------------------------- #
# Startup banner
# --------------------------------------------------------------------------- #


def _package_version(name: str) -> str:
    try:
        return version(name)
    except PackageNotFoundError:  # pragma: no cover
        return "<not installed>"


def log_startup(
    logger: Logger,
    *,
    app_version: str,
    settings: LoggingSettings,
    handlers: list[logging.Handler],
) -> None:
    """Log a one-line INFO banner, then DEBUG diagnostics for bug reports.

    The diagnostics cover the interpreter, platform, process, the Click and
    Rich versions, the installed handlers, the flight-recorder setup and any
    per-logger overrides. With the flight recorder on they always reach the
    log file, whatever the console verbosity.
    """
    logger.info(
        "STRATA %s, console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(settings.level),
        "ON" if settings.flight_recorder else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    for label, package in STARTUP_PACKAGES:
        logger.debug("%s: %s", label, _package_version(package))
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if settings.flight_recorder:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            settings.log_path or "<none>",
            settings.flight_capacity,
            settings.force_flush,
        )
    overrides = {
        name: logging.getLevelName(lvl) for name, lvl in settings.logger_levels.items()
    }
    logger.debug("Per-logger overrides: %s", overrides or "<none>")
