"""End-to-end tests for the logging options of the top-level `strata` group.

Every test drives the `log-demo` command and then looks at what reached the
console or the flight-recorder file.
"""

import re
from pathlib import Path

import pytest
from click.testing import Result

from strata import __version__
from strata.entrypoints.cli.main import strata

# pylint: disable=redefined-outer-name, unused-argument

pytestmark = [pytest.mark.e2e]

LOG_FILE = Path("strata.log")
VENDOR_LOGGER = "vendor.lib"


def found(pattern: str, text: str) -> bool:
    return re.search(pattern, text, re.MULTILINE) is not None


@pytest.fixture
def run_demo(registered_log_demo, runner, fs):
    """Invoke ``strata [options] log-demo`` with the recorder writing to LOG_FILE.

    A ``--log-path`` among `options` replaces the default one.
    """

    def run(*options: str, env: dict[str, str] | None = None) -> Result:
        result = runner.invoke(
            strata, ["--log-path", str(LOG_FILE), *options, "log-demo"], env=env
        )
        assert result.exit_code == 0, result.output
        return result

    return run


def recorded() -> str:
    return LOG_FILE.read_text(encoding="utf-8")


class TestGroup:
    """Options click-extra contributes, and the command list."""

    @staticmethod
    def test_version(runner, fs):
        result = runner.invoke(strata, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    @staticmethod
    def test_help_lists_subcommands(runner, fs):
        result = runner.invoke(strata, ["--help"])
        assert result.exit_code == 0
        assert found(r"\bchain\b", result.output)
        assert found(r"\bget\b", result.output)

    @staticmethod
    def test_bad_logger_level_is_a_usage_error(registered_log_demo, runner, fs):
        result = runner.invoke(strata, ["-L", "strata=LOUD", "log-demo"])
        assert result.exit_code == 2
        assert "Invalid log level" in result.output


class TestConsole:
    """What the console shows for a given verbosity."""

    @staticmethod
    @pytest.mark.parametrize(
        ("options", "shown", "hidden"),
        [
            ((), "WARNING", "INFO"),
            (("-v",), "INFO", "DEBUG"),
            (("-vv",), "DEBUG", None),
            (("-q",), "ERROR", "WARNING"),
            (("-qq",), "CRITICAL", "ERROR"),
        ],
    )
    def test_verbosity(run_demo, options, shown, hidden):
        output = run_demo(*options).output
        assert found(shown, output)
        if hidden is not None:
            assert not found(hidden, output)

    @staticmethod
    def test_logger_level_narrows_one_logger(run_demo):
        output = run_demo("-vv", "-L", f"{VENDOR_LOGGER}=INFO").output
        assert "vendor: debug record" not in output
        assert "vendor: info record" in output
        assert "demo: debug record" in output

    @staticmethod
    def test_vendor_records_are_tagged(run_demo):
        assert "[vendor]" in run_demo().output

    @staticmethod
    def test_debug_mode_shows_source_location(run_demo):
        assert found(r"conftest\.py:\d+\b", run_demo("--debug").output)


class TestFlightRecorder:
    """The DEBUG ring buffer and when it reaches the log file."""

    @staticmethod
    def test_written_up_to_the_last_warning(run_demo):
        run_demo("-L", f"{VENDOR_LOGGER}=INFO")
        content = recorded()

        assert "demo: debug record" in content
        assert "demo: critical record" in content
        assert "vendor: info record" in content
        assert "vendor: debug record" not in content
        # the trailing DEBUG comes after the last WARNING and stays buffered
        assert "demo: trailing debug record" not in content

    @staticmethod
    def test_force_flush_writes_the_tail(run_demo):
        run_demo("--force-flush")
        assert "demo: trailing debug record" in recorded()

    @staticmethod
    def test_switched_off(run_demo):
        run_demo("--log-path", "off.log", "--no-flight-recorder")
        assert not Path("off.log").exists()

    @staticmethod
    def test_capacity_from_environment(run_demo):
        run_demo("--force-flush", env={"STRATA_FLIGHT_RECORDER_CAPACITY": "5"})
        assert "capacity=5," in recorded()

    @staticmethod
    def test_startup_diagnostics(run_demo):
        run_demo("--flight-recorder", "--force-flush")
        content = recorded()

        assert found(
            r"STRATA \d+\.\d+\.\d+, console=WARNING, flight-recorder=ON", content
        )
        assert found(r"Python: \d+\.\d+\.\d+", content)
        assert found(r"Click: \d+\.\d+", content)
        assert found(r"Rich: \d+\.\d+", content)
        assert found(r"Handlers: \['RichHandler', 'MemoryHandler'\]", content)
        assert found(
            r"Flight recorder: path=strata\.log, capacity=2000, flush_on_close=True",
            content,
        )
        assert "Per-logger overrides: {'click_extra': 'WARNING'}" in content
