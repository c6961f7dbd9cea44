"""Composite builder.

Turns the pending namespace declarations into one ordered composite:
ascending priority first, declaration order within a priority. Each namespace
is fetched from the config service and wrapped through the shared factory.
The registry is drained once the pass completes, so building again without
new declarations yields an empty composite.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from .property_sources import CachedCompositePropertySource, CompositePropertySource

if TYPE_CHECKING:
    from strata.interfaces.config_service import ConfigService

    from .property_sources import ConfigPropertySourceFactory
    from .registry import NamespaceRegistry

logger = logging.getLogger(__name__)


def new_composite(name: str, cached: bool = False) -> CompositePropertySource:
    """Create an empty composite, with a property-name cache if `cached`."""
    if cached:
        return CachedCompositePropertySource(name)
    return CompositePropertySource(name)


def compose_namespaces(
    name: str,
    namespaces: Iterable[str],
    *,
    config_service: ConfigService,
    factory: ConfigPropertySourceFactory,
    cached: bool = False,
) -> CompositePropertySource:
    """Build a composite from `namespaces` in the given order.

    A namespace that appears more than once is only added at its first
    (highest-precedence) position. Errors raised by the config service
    propagate unchanged.
    """
    composite = new_composite(name, cached)
    seen: set[str] = set()
    for namespace in namespaces:
        if namespace in seen:
            logger.debug(
                "Namespace %s already present in %s; skipping", namespace, name
            )
            continue
        seen.add(namespace)
        config = config_service.get_config(namespace)
        composite.add_property_source(
            factory.get_config_property_source(namespace, config)
        )
    return composite


class CompositeBuilder:
    """Builds composites from a `NamespaceRegistry`.

    Args:
        registry: Source of pending declarations (drained by `build`).
        config_service: Remote config client used to fetch each namespace.
        factory: Shared adapter factory (tracks adapters for live updates).
    """

    def __init__(
        self,
        registry: NamespaceRegistry,
        config_service: ConfigService,
        factory: ConfigPropertySourceFactory,
    ) -> None:
        self.registry = registry
        self.config_service = config_service
        self.factory = factory

    def build(self, name: str, cached: bool = False) -> CompositePropertySource:
        """Compose every pending declaration into a composite called `name`.

        The consumed declarations are drained only after every namespace has
        been fetched; a fetch failure leaves them in place and propagates.
        """
        registrations = self.registry.registrations()
        composite = compose_namespaces(
            name,
            (r.namespace for r in registrations),
            config_service=self.config_service,
            factory=self.factory,
            cached=cached,
        )
        self.registry.discard(registrations)
        logger.info(
            "Composed %s from namespaces %s",
            name,
            [s.name for s in composite.property_sources],
        )
        return composite
