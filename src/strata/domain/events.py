"""Events"""

from dataclasses import dataclass

from strata.interfaces.config_service import ConfigChangeEvent


@dataclass(frozen=True, slots=True)
class Event:
    """Base class for all container-wide events."""


@dataclass(frozen=True, slots=True)
class RemoteConfigChanged(Event):
    """Event indicating that a remote namespace reported changed properties.

    Published exactly once per remote notification, on whatever thread the
    remote config client delivered the notification.
    """

    change_event: ConfigChangeEvent

    @property
    def namespace(self) -> str:
        return self.change_event.namespace

    @property
    def changed_keys(self) -> frozenset[str]:
        return self.change_event.changed_keys
