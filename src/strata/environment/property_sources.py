"""Ordered, mutable chain of property sources.

The chain is stored as an immutable tuple that is swapped under a lock, so
readers always observe a consistent snapshot while writers (typically the
single startup thread) reorder it. Structural edits are expressed as pure
functions over tuples; `update()` applies one atomically.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .property_source import PropertySource

Chain = tuple["PropertySource", ...]


class PropertySourceNotFound(LookupError):
    """Raised when a relative insertion names a source that is not in the chain."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Property source '{name}' does not exist")
        self.name = name


# --------------------------------------------------------------------------- #
# Pure chain operations
# --------------------------------------------------------------------------- #


def index_of(chain: Chain, name: str) -> int:
    """Return the position of the source called `name`, or -1."""
    for i, source in enumerate(chain):
        if source.name == name:
            return i
    return -1


def without(chain: Chain, name: str) -> Chain:
    """Return `chain` minus any source called `name`."""
    return tuple(s for s in chain if s.name != name)


def add_first(chain: Chain, source: PropertySource) -> Chain:
    """Return `chain` with `source` at the front (replacing a same-named source)."""
    return (source, *without(chain, source.name))


def add_last(chain: Chain, source: PropertySource) -> Chain:
    """Return `chain` with `source` at the back (replacing a same-named source)."""
    return (*without(chain, source.name), source)


def add_after(chain: Chain, relative: str, source: PropertySource) -> Chain:
    """Return `chain` with `source` immediately after the source called `relative`.

    Raises:
        PropertySourceNotFound: If `relative` is not in the chain.
    """
    rest = without(chain, source.name)
    if (i := index_of(rest, relative)) < 0:
        raise PropertySourceNotFound(relative)
    return (*rest[: i + 1], source, *rest[i + 1 :])


def add_before(chain: Chain, relative: str, source: PropertySource) -> Chain:
    """Return `chain` with `source` immediately before the source called `relative`.

    Raises:
        PropertySourceNotFound: If `relative` is not in the chain.
    """
    rest = without(chain, source.name)
    if (i := index_of(rest, relative)) < 0:
        raise PropertySourceNotFound(relative)
    return (*rest[:i], source, *rest[i:])


def move_to_front(chain: Chain, name: str) -> Chain:
    """Return `chain` with the source called `name` moved to the front.

    The chain is returned unchanged when `name` is absent or already first.
    """
    if (i := index_of(chain, name)) <= 0:
        return chain
    return (chain[i], *chain[:i], *chain[i + 1 :])


# --------------------------------------------------------------------------- #
# Mutable holder
# --------------------------------------------------------------------------- #


class PropertySources:
    """Thread-safe holder for an ordered chain of property sources."""

    def __init__(self, sources: Chain | list[PropertySource] = ()) -> None:
        self._lock = threading.Lock()
        self._chain: Chain = tuple(sources)

    def snapshot(self) -> Chain:
        """Return the current chain."""
        return self._chain

    def update(self, fn: Callable[[Chain], Chain]) -> Chain:
        """Atomically replace the chain with `fn(chain)` and return the new chain."""
        with self._lock:
            self._chain = tuple(fn(self._chain))
            return self._chain

    def contains(self, name: str) -> bool:
        return index_of(self._chain, name) >= 0

    def get(self, name: str) -> PropertySource | None:
        chain = self._chain
        i = index_of(chain, name)
        return chain[i] if i >= 0 else None

    def names(self) -> list[str]:
        return [s.name for s in self._chain]

    def add_first(self, source: PropertySource) -> None:
        self.update(lambda chain: add_first(chain, source))

    def add_last(self, source: PropertySource) -> None:
        self.update(lambda chain: add_last(chain, source))

    def add_after(self, relative: str, source: PropertySource) -> None:
        self.update(lambda chain: add_after(chain, relative, source))

    def add_before(self, relative: str, source: PropertySource) -> None:
        self.update(lambda chain: add_before(chain, relative, source))

    def remove(self, name: str) -> PropertySource | None:
        """Remove and return the source called `name`, if present."""
        removed = self.get(name)
        self.update(lambda chain: without(chain, name))
        return removed

    def __iter__(self) -> Iterator[PropertySource]:
        return iter(self._chain)

    def __len__(self) -> int:
        return len(self._chain)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.contains(name)
