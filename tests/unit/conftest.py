"""Default marks and shared fixtures for tests under `tests/unit/`."""

from pathlib import Path

import pytest

from .fakes import FakeContainer

# pylint: disable=unused-argument, redefined-outer-name

UNIT_ROOT = Path(__file__).parent.resolve()


def _is_unit_test(item: pytest.Item) -> bool:
    return UNIT_ROOT in item.path.resolve().parents


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark every item collected below `tests/unit/` as `unit` unless already marked."""
    for item in items:
        if _is_unit_test(item) and item.get_closest_marker("unit") is None:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def fake_container(make_environment) -> FakeContainer:
    """A `FakeContainer` over an empty standard environment."""
    return FakeContainer(make_environment())
