"""Namespace-backed property sources and composites.

`ConfigPropertySource` adapts one remote `Config` handle to the
`PropertySource` contract. `CompositePropertySource` chains several of them so
they behave as a single lookup unit: the first source defining a key wins.
`CachedCompositePropertySource` additionally memoises the union of property
names until a source is added or any member reports a remote change.

`ConfigPropertySourceFactory` creates adapters and remembers every adapter it
ever handed out so the live-update wire can enumerate them later.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from strata.environment.property_source import PropertySource

if TYPE_CHECKING:
    from strata.interfaces.config_service import (
        Config,
        ConfigChangeEvent,
        ConfigChangeListener,
    )

logger = logging.getLogger(__name__)


class ConfigPropertySource(PropertySource):
    """Property source view over a single namespace's `Config`.

    The adapter is named after its namespace. Change listeners attached
    through it are forwarded to the underlying config exactly once each.
    """

    def __init__(self, namespace: str, config: Config) -> None:
        super().__init__(namespace)
        self.config = config
        self._lock = threading.Lock()
        self._listeners: list[ConfigChangeListener] = []

    @property
    def namespace(self) -> str:
        return self.name

    def get_property(self, key: str) -> str | None:
        return self.config.get_property(key, None)

    def property_names(self) -> list[str]:
        return sorted(self.config.property_names())

    def add_change_listener(self, listener: ConfigChangeListener) -> bool:
        """Subscribe `listener` to the namespace's remote changes.

        Returns:
            bool: False if this listener was already attached through this adapter.
        """
        with self._lock:
            if listener in self._listeners:
                return False
            self._listeners.append(listener)
        self.config.add_change_listener(listener)
        return True

    def has_listener(self, listener: ConfigChangeListener) -> bool:
        with self._lock:
            return listener in self._listeners


class CompositePropertySource(PropertySource):
    """Ordered group of property sources answering as one.

    Lookup order is insertion order; `add_first_property_source` prepends.
    """

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self._sources: list[PropertySource] = []

    def add_property_source(self, source: PropertySource) -> None:
        self._sources.append(source)

    def add_first_property_source(self, source: PropertySource) -> None:
        self._sources = [s for s in self._sources if s is not source]
        self._sources.insert(0, source)

    @property
    def property_sources(self) -> list[PropertySource]:
        return list(self._sources)

    def get_property(self, key: str) -> str | None:
        for source in self._sources:
            if (value := source.get_property(key)) is not None:
                return value
        return None

    def contains_property(self, key: str) -> bool:
        return any(source.contains_property(key) for source in self._sources)

    def find_source(self, key: str) -> PropertySource | None:
        """Return the member source that answers for `key`, if any."""
        for source in self._sources:
            if source.contains_property(key):
                return source
        return None

    def property_names(self) -> list[str]:
        names: dict[str, None] = {}
        for source in self._sources:
            names.update(dict.fromkeys(source.property_names()))
        return list(names)

    def __len__(self) -> int:
        return len(self._sources)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"sources={[s.name for s in self._sources]!r})"
        )


class CachedCompositePropertySource(CompositePropertySource):
    """Composite that caches its property names.

    The cache is dropped whenever a source is added and whenever a member
    `ConfigPropertySource` reports a remote change.
    """

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self._names_lock = threading.Lock()
        self._names: list[str] | None = None

    def property_names(self) -> list[str]:
        with self._names_lock:
            if self._names is None:
                self._names = super().property_names()
            return list(self._names)

    def add_property_source(self, source: PropertySource) -> None:
        super().add_property_source(source)
        self._track(source)

    def add_first_property_source(self, source: PropertySource) -> None:
        super().add_first_property_source(source)
        self._track(source)

    def on_change(self, change_event: ConfigChangeEvent) -> None:
        """Drop the name cache; registered as a change listener on members."""
        logger.debug(
            "Invalidating property-name cache of %s after change in %s",
            self.name,
            change_event.namespace,
        )
        self._invalidate()

    def _track(self, source: PropertySource) -> None:
        if isinstance(source, ConfigPropertySource):
            source.add_change_listener(self.on_change)
        self._invalidate()

    def _invalidate(self) -> None:
        with self._names_lock:
            self._names = None


class ConfigPropertySourceFactory:
    """Creates `ConfigPropertySource` adapters and tracks every one created.

    Asking twice for the same namespace backed by the same `Config` handle
    returns the existing adapter, so a namespace shared by the bootstrap and
    main composites is wired for live updates only once.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sources: list[ConfigPropertySource] = []

    def get_config_property_source(
        self, namespace: str, config: Config
    ) -> ConfigPropertySource:
        with self._lock:
            for source in self._sources:
                if source.namespace == namespace and source.config is config:
                    return source
            source = ConfigPropertySource(namespace, config)
            self._sources.append(source)
        logger.debug("Created property source for namespace %s", namespace)
        return source

    def get_all_config_property_sources(self) -> list[ConfigPropertySource]:
        with self._lock:
            return list(self._sources)
