"""Live-update wire.

Subscribes one listener per namespace adapter. The listener adapts each remote
`ConfigChangeEvent` into a container-wide `RemoteConfigChanged` event and
hands it to `publish` exactly once.

Threading: notifications arrive on the remote client's own threads, possibly
concurrently for different namespaces. The listener keeps no state and holds
no lock while calling `publish`, so ordering is whatever the client delivers:
ordered within a namespace, unordered across namespaces.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from strata.domain.events import RemoteConfigChanged

if TYPE_CHECKING:
    from strata.interfaces.config_service import ConfigChangeEvent

    from .property_sources import ConfigPropertySource

logger = logging.getLogger(__name__)

Publish = Callable[[RemoteConfigChanged], None]


class ChangeEventPublisher:
    """Change listener that republishes remote notifications."""

    def __init__(self, publish: Publish) -> None:
        self._publish = publish

    def __call__(self, change_event: ConfigChangeEvent) -> None:
        logger.debug(
            "Publishing change of %s in namespace %s",
            sorted(change_event.changed_keys),
            change_event.namespace,
        )
        self._publish(RemoteConfigChanged(change_event))


class LiveUpdateWire:
    """Attaches a single `ChangeEventPublisher` to namespace adapters.

    Args:
        publish: Callback receiving each `RemoteConfigChanged`; must be safe to
            call from several threads at once.
    """

    def __init__(self, publish: Publish) -> None:
        self.listener = ChangeEventPublisher(publish)

    def wire(self, adapters: Iterable[ConfigPropertySource]) -> int:
        """Attach the listener to every adapter not yet wired by this wire.

        Listeners are never detached.

        Returns:
            int: The number of adapters newly wired.
        """
        wired = 0
        for adapter in adapters:
            if adapter.add_change_listener(self.listener):
                wired += 1
                logger.debug("Wired live updates for namespace %s", adapter.namespace)
        return wired
