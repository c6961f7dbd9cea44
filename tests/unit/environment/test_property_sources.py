"""Unit tests for property sources and the ordered source chain."""

import pytest

from strata.environment import (
    MapPropertySource,
    PropertySourceNotFound,
    PropertySources,
    SystemEnvironmentPropertySource,
)
from strata.environment.property_sources import move_to_front


def source(name: str, **values) -> MapPropertySource:
    return MapPropertySource(name, values)


# --- MapPropertySource ---


def test_map_source_stringifies_values():
    s = MapPropertySource("m", {"n": 3, "none": None})
    assert s.get_property("n") == "3"
    assert s.get_property("none") is None
    assert s.contains_property("none")
    assert s.property_names() == ["n", "none"]


# --- SystemEnvironmentPropertySource ---


@pytest.mark.parametrize(
    "key", ["strata.bootstrap.enabled", "strata-bootstrap-enabled", "STRATA_BOOTSTRAP_ENABLED"]
)
def test_environment_lookup_is_relaxed(key):
    s = SystemEnvironmentPropertySource(source={"STRATA_BOOTSTRAP_ENABLED": "true"})
    assert s.get_property(key) == "true"
    assert s.contains_property(key)


def test_environment_exact_key_wins():
    s = SystemEnvironmentPropertySource(source={"a.b": "exact", "A_B": "relaxed"})
    assert s.get_property("a.b") == "exact"


def test_environment_missing_key():
    s = SystemEnvironmentPropertySource(source={})
    assert s.get_property("x") is None
    assert not s.contains_property("x")


def test_environment_defaults_to_process_environment(monkeypatch):
    monkeypatch.setenv("STRATA_TEST_VALUE", "42")
    assert SystemEnvironmentPropertySource().get_property("strata.test.value") == "42"


# --- PropertySources ---


def test_add_first_and_last():
    sources = PropertySources([source("b")])
    sources.add_first(source("a"))
    sources.add_last(source("c"))
    assert sources.names() == ["a", "b", "c"]


def test_adding_same_name_replaces():
    sources = PropertySources([source("a", x=1), source("b")])
    sources.add_last(source("a", x=2))
    assert sources.names() == ["b", "a"]
    assert sources.get("a").get_property("x") == "2"


def test_add_relative():
    sources = PropertySources([source("a"), source("c")])
    sources.add_after("a", source("b"))
    sources.add_before("a", source("z"))
    assert sources.names() == ["z", "a", "b", "c"]


def test_add_relative_to_missing_source_raises():
    sources = PropertySources([source("a")])
    with pytest.raises(PropertySourceNotFound) as excinfo:
        sources.add_after("missing", source("b"))
    assert excinfo.value.name == "missing"
    assert sources.names() == ["a"]


def test_remove():
    a = source("a")
    sources = PropertySources([a, source("b")])
    assert sources.remove("a") is a
    assert sources.remove("a") is None
    assert sources.names() == ["b"]


def test_contains_and_len():
    sources = PropertySources([source("a")])
    assert "a" in sources
    assert "b" not in sources
    assert 3 not in sources
    assert len(sources) == 1


def test_update_returns_new_chain_and_keeps_old_snapshot():
    sources = PropertySources([source("a")])
    before = sources.snapshot()
    after = sources.update(lambda chain: (*chain, source("b")))
    assert [s.name for s in after] == ["a", "b"]
    assert [s.name for s in before] == ["a"]


def test_move_to_front():
    chain = (source("a"), source("b"), source("c"))
    assert [s.name for s in move_to_front(chain, "c")] == ["c", "a", "b"]
    assert move_to_front(chain, "a") is chain
    assert move_to_front(chain, "missing") is chain
