"""Fixtures for end-to-end CLI tests.

`log-demo` is a throwaway command that logs a fixed sequence of records on a
STRATA logger and on a vendor logger; `registered_log_demo` hangs it off the
`strata` group for one test. `config_dir` holds a few namespace files for the
inspection commands.
"""

import json
import logging
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from strata.entrypoints.cli.main import strata

# pylint: disable=redefined-outer-name

DEMO_LOGGER = "strata.demo"
VENDOR_LOGGER = "vendor.lib"


@click.command()
def log_demo():
    """Log one record per level, a few vendor records, then a trailing DEBUG."""
    ours = logging.getLogger(DEMO_LOGGER)
    vendor = logging.getLogger(VENDOR_LOGGER)
    for level in (
        logging.DEBUG,
        logging.INFO,
        logging.WARNING,
        logging.ERROR,
        logging.CRITICAL,
    ):
        ours.log(level, "demo: %s record", logging.getLevelName(level).lower())
    vendor.debug("vendor: debug record")
    vendor.info("vendor: info record")
    vendor.warning("vendor: warning record")
    ours.debug("demo: trailing debug record")


def _unregister(group: click.Group, name: str) -> None:
    """Drop `name` from the group and from click-extra's help sections."""
    group.commands.pop(name, None)
    sections = list(getattr(group, "_sections", []))
    if (default := getattr(group, "_default_section", None)) is not None:
        sections.append(default)
    for section in sections:
        getattr(section, "commands", {}).pop(name, None)


@pytest.fixture(autouse=True)
def restore_logging_state():
    """Undo the root-logger and per-logger levels a CLI invocation installs."""
    root = logging.getLogger()
    root_handlers, root_level = list(root.handlers), root.level
    levels = {
        name: logger.level
        for name, logger in logging.root.manager.loggerDict.items()
        if isinstance(logger, logging.Logger)
    }
    yield
    root.handlers[:] = root_handlers
    root.setLevel(root_level)
    for name, logger in list(logging.root.manager.loggerDict.items()):
        if isinstance(logger, logging.Logger):
            logger.setLevel(levels.get(name, logging.NOTSET))


@pytest.fixture
def registered_log_demo():
    strata.add_command(log_demo, name="log-demo")
    yield
    _unregister(strata, "log-demo")


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test from inside a fresh temporary working directory."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """A directory of namespace files.

    - application: timeout=30, server.port=8080
    - db:          timeout=5,  db.url=jdbc://primary
    - infra:       timeout=1,  region=eu-west
    """
    namespaces = {
        "application": {"timeout": 30, "server.port": 8080},
        "db": {"timeout": 5, "db.url": "jdbc://primary"},
        "infra": {"timeout": 1, "region": "eu-west"},
    }
    for name, values in namespaces.items():
        (tmp_path / f"{name}.json").write_text(json.dumps(values), encoding="utf-8")
    return tmp_path


@pytest.fixture
def base_args(tmp_path: Path) -> list[str]:
    """Top-level options that keep the flight recorder out of the user's log dir."""
    return ["--log-path", str(tmp_path / "strata.log")]
