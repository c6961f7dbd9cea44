"""Property source definitions.

A property source is a named, read-only view over a set of key/value pairs.
An `Environment` consults an ordered chain of property sources; the first
source that knows a key wins.
"""

import abc
import os
import re
from collections.abc import Mapping

SYSTEM_PROPERTIES_PROPERTY_SOURCE_NAME = "systemProperties"
SYSTEM_ENVIRONMENT_PROPERTY_SOURCE_NAME = "systemEnvironment"


class PropertySource(abc.ABC):
    """Abstract base class for a named source of properties."""

    def __init__(self, name: str) -> None:
        self.name = name

    @abc.abstractmethod
    def get_property(self, key: str) -> str | None:
        """Return the value for `key`, or None if this source does not define it."""

    @abc.abstractmethod
    def property_names(self) -> list[str]:
        """Return the keys known to this source, in a stable order."""

    def contains_property(self, key: str) -> bool:
        """Return True if this source defines `key`."""
        return self.get_property(key) is not None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class MapPropertySource(PropertySource):
    """Property source backed by a plain mapping."""

    def __init__(self, name: str, source: Mapping[str, object]) -> None:
        super().__init__(name)
        self.source = source

    def get_property(self, key: str) -> str | None:
        value = self.source.get(key)
        return None if value is None else str(value)

    def contains_property(self, key: str) -> bool:
        return key in self.source

    def property_names(self) -> list[str]:
        return list(self.source)


class SystemEnvironmentPropertySource(MapPropertySource):
    """Property source over process environment variables.

    Lookups are relaxed so that dotted/dashed keys match the usual shell
    spelling: ``strata.bootstrap.enabled`` also finds ``STRATA_BOOTSTRAP_ENABLED``.
    """

    def __init__(
        self,
        name: str = SYSTEM_ENVIRONMENT_PROPERTY_SOURCE_NAME,
        source: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(name, os.environ if source is None else source)

    def get_property(self, key: str) -> str | None:
        if (actual := self._resolve_key(key)) is None:
            return None
        return super().get_property(actual)

    def contains_property(self, key: str) -> bool:
        return self._resolve_key(key) is not None

    def _resolve_key(self, key: str) -> str | None:
        for candidate in _relaxed_candidates(key):
            if candidate in self.source:
                return candidate
        return None


def _relaxed_candidates(key: str) -> list[str]:
    underscored = re.sub(r"[.\-]", "_", key)
    candidates = [key, underscored, key.upper(), underscored.upper()]
    # keep order, drop duplicates
    return list(dict.fromkeys(candidates))
