"""Main composition pass, run when a container initializes.

`PropertySourcesProcessor.on_container_init` builds the main composite from
the declared namespaces, splices it into the container's environment and then
wires every namespace adapter for live updates. Both steps are idempotent:
the composite is skipped when a source with its name is already in the chain,
and wiring runs at most once per container identity.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from strata.config import ClientSettings

from .builder import CompositeBuilder
from .constants import PROPERTY_SOURCE_NAME
from .splice import insert_composite
from .wire import LiveUpdateWire

if TYPE_CHECKING:
    from strata.domain.events import RemoteConfigChanged
    from strata.environment import Environment

    from .context import CompositionContext
    from .property_sources import CompositePropertySource

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods


class Container(Protocol):
    """What the processor needs from a container: an environment and a publisher."""

    environment: Environment

    def publish(self, event: RemoteConfigChanged) -> None: ...


class PropertySourcesProcessor:
    """Composes declared namespaces into a container's environment.

    Args:
        context: Shared registry, adapter factory, guard and config service.
    """

    def __init__(self, context: CompositionContext) -> None:
        self.context = context
        self.builder = CompositeBuilder(
            context.registry, context.config_service, context.factory
        )

    def on_container_init(self, container: Container) -> None:
        """Compose, splice and wire for `container` (each at most once)."""
        settings = ClientSettings.from_environment(container.environment)
        self.initialize_property_sources(container.environment, settings)
        self.initialize_auto_update(container)

    def initialize_property_sources(
        self, environment: Environment, settings: ClientSettings | None = None
    ) -> CompositePropertySource | None:
        """Build the main composite and splice it into `environment`.

        Returns:
            The spliced composite, or None if one was already installed.
        """
        sources = environment.property_sources
        if sources.contains(PROPERTY_SOURCE_NAME):
            logger.debug("%s already initialized", PROPERTY_SOURCE_NAME)
            return None

        settings = settings or ClientSettings.from_environment(environment)
        composite = self.builder.build(
            PROPERTY_SOURCE_NAME, cached=settings.property_names_cache_enabled
        )
        chain = sources.update(
            lambda chain: insert_composite(
                composite,
                chain,
                override_system_properties=settings.override_system_properties,
            )
        )
        logger.debug("Property source chain is now %s", [s.name for s in chain])
        return composite

    def initialize_auto_update(self, container: Container) -> bool:
        """Wire every adapter created so far to `container.publish`.

        Returns:
            bool: False if this container had already been wired.
        """
        if not self.context.guard.try_acquire(container):
            logger.debug("Live updates already wired for %r", container)
            return False
        adapters = self.context.factory.get_all_config_property_sources()
        wired = LiveUpdateWire(container.publish).wire(adapters)
        logger.info("Live updates wired for %d namespace(s)", wired)
        return True
