"""In-memory config client for STRATA.

Implements the `ConfigService` / `Config` ports without any transport: values
live in process memory and are changed through `set_property`,
`delete_property` or `replace`. Every change is diffed into a
`ConfigChangeEvent` and delivered synchronously to the subscribed listeners
on the caller's thread, which stands in for the remote client's delivery
thread.

Namespaces can be seeded from a directory of ``<namespace>.json`` files
(flat objects of string keys), which is what the CLI uses.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable, Mapping
from pathlib import Path

from strata.interfaces.config_service import (
    Config,
    ConfigChange,
    ConfigChangeEvent,
    ConfigChangeListener,
    ConfigService,
    PropertyChangeType,
)

logger = logging.getLogger(__name__)

NAMESPACE_FILE_SUFFIX = ".json"  # pragma: no mutate


class NamespaceNotFoundError(LookupError):
    """Raised by a strict service when a namespace has no backing values."""

    def __init__(self, namespace: str) -> None:
        super().__init__(f"Namespace '{namespace}' not found")
        self.namespace = namespace


class InMemoryConfig(Config):
    """Thread-safe, in-memory `Config` for a single namespace.

    Listeners are de-duplicated by equality and invoked outside the property
    lock, in subscription order. Notifications for this namespace are
    delivered one at a time, in the order the changes were applied. A listener
    that raises is logged and the remaining listeners still run; the first
    failure then propagates to the caller of the mutation.
    """

    def __init__(self, namespace: str, properties: Mapping[str, object] | None = None):
        self.namespace = namespace
        self._lock = threading.Lock()
        self._delivery_lock = threading.RLock()
        self._properties: dict[str, str] = {
            k: _to_str(v) for k, v in (properties or {}).items()
        }
        self._listeners: list[ConfigChangeListener] = []

    # --- Config port ---

    def get_property(self, key: str, default: str | None = None) -> str | None:
        with self._lock:
            return self._properties.get(key, default)

    def property_names(self) -> set[str]:
        with self._lock:
            return set(self._properties)

    def add_change_listener(self, listener: ConfigChangeListener) -> None:
        with self._lock:
            if listener in self._listeners:
                return
            self._listeners.append(listener)

    # --- Mutation (test / CLI helpers) ---

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def set_property(self, key: str, value: object) -> ConfigChangeEvent | None:
        """Set one property and notify listeners if it actually changed."""
        return self._update(lambda old: {**old, key: _to_str(value)})

    def delete_property(self, key: str) -> ConfigChangeEvent | None:
        """Delete one property and notify listeners if it existed."""
        return self._update(lambda old: {k: v for k, v in old.items() if k != key})

    def replace(self, properties: Mapping[str, object]) -> ConfigChangeEvent | None:
        """Replace all properties, notifying listeners with the computed diff.

        Returns:
            The delivered event, or None when nothing changed.
        """
        new = {k: _to_str(v) for k, v in properties.items()}
        return self._update(lambda old: new)

    def _update(
        self, fn: Callable[[dict[str, str]], dict[str, str]]
    ) -> ConfigChangeEvent | None:
        # delivery lock keeps per-namespace notifications in commit order
        with self._delivery_lock:
            with self._lock:
                old = self._properties
                new = fn(old)
                changes = _diff(self.namespace, old, new)
                self._properties = new
                listeners = list(self._listeners)

            if not changes:
                return None

            event = ConfigChangeEvent.from_changes(self.namespace, changes)
            logger.debug(
                "Namespace %s changed keys %s; notifying %d listener(s)",
                self.namespace,
                sorted(event.changed_keys),
                len(listeners),
            )
            self._notify(listeners, event)
            return event

    def _notify(
        self, listeners: list[ConfigChangeListener], event: ConfigChangeEvent
    ) -> None:
        """Call every listener; a failing one does not starve the rest.

        The first failure is re-raised once all listeners have run.
        """
        first_error: Exception | None = None
        for listener in listeners:
            try:
                listener(event)
            except Exception as e:  # pylint: disable=broad-except
                logger.exception(
                    "Change listener %r failed for namespace %s",
                    listener,
                    self.namespace,
                )
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error

    def __repr__(self) -> str:
        return f"InMemoryConfig(namespace={self.namespace!r})"


def _to_str(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _diff(
    namespace: str, old: Mapping[str, str], new: Mapping[str, str]
) -> list[ConfigChange]:
    changes: list[ConfigChange] = []
    for key, value in new.items():
        if key not in old:
            changes.append(
                ConfigChange(namespace, key, None, value, PropertyChangeType.ADDED)
            )
        elif old[key] != value:
            changes.append(
                ConfigChange(namespace, key, old[key], value, PropertyChangeType.MODIFIED)
            )
    for key, value in old.items():
        if key not in new:
            changes.append(
                ConfigChange(namespace, key, value, None, PropertyChangeType.DELETED)
            )
    return changes


class InMemoryConfigService(ConfigService):
    """In-memory `ConfigService` caching one `InMemoryConfig` per namespace.

    Args:
        namespaces: Initial values keyed by namespace.
        strict: When True, unknown namespaces raise `NamespaceNotFoundError`;
            otherwise they resolve to an empty config, mirroring a client that
            tolerates namespaces with no published values.
    """

    def __init__(
        self,
        namespaces: Mapping[str, Mapping[str, object]] | None = None,
        strict: bool = False,
    ) -> None:
        self._lock = threading.Lock()
        self._strict = strict
        self._configs: dict[str, InMemoryConfig] = {
            name: InMemoryConfig(name, values)
            for name, values in (namespaces or {}).items()
        }
        self.fetch_count = 0

    def get_config(self, namespace: str) -> InMemoryConfig:
        with self._lock:
            self.fetch_count += 1
            if (config := self._configs.get(namespace)) is None:
                if self._strict:
                    raise NamespaceNotFoundError(namespace)
                config = self._configs[namespace] = InMemoryConfig(namespace)
            return config

    def namespaces(self) -> list[str]:
        with self._lock:
            return list(self._configs)

    @classmethod
    def from_mapping(
        cls, namespaces: Mapping[str, Mapping[str, object]], strict: bool = False
    ) -> InMemoryConfigService:
        return cls(namespaces, strict=strict)

    @classmethod
    def from_directory(cls, path: Path, strict: bool = True) -> InMemoryConfigService:
        """Seed namespaces from ``<path>/<namespace>.json`` files.

        Raises:
            NotADirectoryError: If `path` is not a directory.
            ValueError: If a file does not hold a flat JSON object.
        """
        if not path.is_dir():
            raise NotADirectoryError(str(path))
        namespaces: dict[str, dict[str, object]] = {}
        for file in sorted(path.glob(f"*{NAMESPACE_FILE_SUFFIX}")):
            data = json.loads(file.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError(f"{file} must contain a JSON object")
            if any(isinstance(v, (dict, list)) for v in data.values()):
                raise ValueError(f"{file} must contain a flat JSON object")
            namespaces[file.stem] = data
            logger.debug("Loaded namespace %s from %s", file.stem, file)
        return cls(namespaces, strict=strict)
