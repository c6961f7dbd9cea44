"""Global pytest fixtures for STRATA."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping

import pytest

from strata.adapters.memory_config import InMemoryConfigService
from strata.composition import CompositionContext
from strata.environment import Environment, standard_environment
from strata.logging import replay_deferred_logs

# pylint: disable=redefined-outer-name


@pytest.fixture(autouse=True)
def no_leaked_deferred_logging() -> Iterator[None]:
    """Make sure no test leaves the `strata` logger in buffering mode."""
    yield
    replay_deferred_logs()


@pytest.fixture
def config_service() -> InMemoryConfigService:
    """A lenient in-memory service seeded with a few namespaces."""
    return InMemoryConfigService(
        {
            "application": {"timeout": "30", "server.port": "8080"},
            "db": {"db.url": "jdbc://primary", "timeout": "5"},
            "infra": {"region": "eu-west", "timeout": "1"},
        }
    )


@pytest.fixture
def context(config_service: InMemoryConfigService) -> CompositionContext:
    """A fresh composition context over `config_service`."""
    return CompositionContext(config_service)


@pytest.fixture
def make_environment() -> Callable[..., Environment]:
    """Factory for a standard environment with explicit properties and no real env vars.

    Example:
        ```py
        env = make_environment({"strata.bootstrap.enabled": "true"})
        ```
    """

    def _make(
        system_properties: Mapping[str, object] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> Environment:
        return standard_environment(system_properties, environ or {})

    return _make
