"""Remote config client interface definitions.

The composition engine never talks to a configuration server directly. It
consumes a `ConfigService` that hands out one `Config` handle per namespace,
and subscribes to changes through `Config.add_change_listener`. Retry,
caching, long-polling and persistence all live behind this boundary.
"""

import abc
import enum
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


class PropertyChangeType(enum.Enum):
    """Kind of change observed for a single property."""

    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"


@dataclass(frozen=True, slots=True)
class ConfigChange:
    """A single property change within a namespace.

    Attributes:
        namespace (str): The namespace the property belongs to.
        property_name (str): The key whose value changed.
        old_value (str | None): The value before the change (None when added).
        new_value (str | None): The value after the change (None when deleted).
        change_type (PropertyChangeType): Whether the key was added, modified or deleted.
    """

    namespace: str
    property_name: str
    old_value: str | None
    new_value: str | None
    change_type: PropertyChangeType


@dataclass(frozen=True, slots=True)
class ConfigChangeEvent:
    """One change notification delivered by the remote config client.

    A notification covers a single namespace and may carry several property
    changes, keyed by property name.
    """

    namespace: str
    changes: Mapping[str, ConfigChange] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_changes(
        cls, namespace: str, changes: Iterable[ConfigChange]
    ) -> "ConfigChangeEvent":
        """Build an event from an iterable of changes, preserving their order."""
        return cls(
            namespace=namespace,
            changes=MappingProxyType({c.property_name: c for c in changes}),
        )

    @property
    def changed_keys(self) -> frozenset[str]:
        """Return the set of property names touched by this notification."""
        return frozenset(self.changes)

    def is_changed(self, key: str) -> bool:
        """Return True if `key` was touched by this notification."""
        return key in self.changes

    def get_change(self, key: str) -> ConfigChange | None:
        """Return the change recorded for `key`, if any."""
        return self.changes.get(key)


ConfigChangeListener = Callable[[ConfigChangeEvent], None]


class Config(abc.ABC):
    """Handle on the current values of a single remote namespace."""

    @abc.abstractmethod
    def get_property(self, key: str, default: str | None = None) -> str | None:
        """Return the current value for `key`, or `default` if it is not set."""

    @abc.abstractmethod
    def property_names(self) -> set[str]:
        """Return the set of keys currently defined in the namespace."""

    @abc.abstractmethod
    def add_change_listener(self, listener: ConfigChangeListener) -> None:
        """Subscribe `listener` to future change notifications.

        Notifications may be delivered on any thread owned by the client.
        Within one namespace they are delivered in the order the client
        observed them.
        """


class ConfigService(abc.ABC):
    """Contract for the remote config client."""

    @abc.abstractmethod
    def get_config(self, namespace: str) -> Config:
        """Return the `Config` handle for `namespace`.

        Implementations may cache handles. Any failure (network, auth, missing
        namespace) is raised to the caller unchanged.
        """
