"""Namespace composition and live-update engine.

Declarations accumulate in a `NamespaceRegistry`; when a container initializes,
`PropertySourcesProcessor` builds them into one ordered composite, splices it
into the container's environment and wires every namespace for live updates.
`BootstrapPhaseInitializer` runs the same composition earlier, from flags.
"""

from .bootstrap_phase import BootstrapPhaseInitializer
from .builder import CompositeBuilder, compose_namespaces
from .constants import (
    BOOTSTRAP_PROPERTY_SOURCE_NAME,
    HIGHEST_PRECEDENCE,
    LOWEST_PRECEDENCE,
    PROPERTY_SOURCE_NAME,
)
from .context import CompositionContext
from .declarations import enable_config, resolve_namespaces
from .guard import InitializationGuard
from .processor import Container, PropertySourcesProcessor
from .property_sources import (
    CachedCompositePropertySource,
    CompositePropertySource,
    ConfigPropertySource,
    ConfigPropertySourceFactory,
)
from .registry import NamespaceRegistration, NamespaceRegistry
from .splice import ensure_bootstrap_precedence, insert_composite
from .wire import ChangeEventPublisher, LiveUpdateWire

__all__ = [
    "BOOTSTRAP_PROPERTY_SOURCE_NAME",
    "BootstrapPhaseInitializer",
    "CachedCompositePropertySource",
    "ChangeEventPublisher",
    "CompositeBuilder",
    "CompositePropertySource",
    "CompositionContext",
    "ConfigPropertySource",
    "ConfigPropertySourceFactory",
    "Container",
    "HIGHEST_PRECEDENCE",
    "InitializationGuard",
    "LOWEST_PRECEDENCE",
    "LiveUpdateWire",
    "NamespaceRegistration",
    "NamespaceRegistry",
    "PROPERTY_SOURCE_NAME",
    "PropertySourcesProcessor",
    "compose_namespaces",
    "enable_config",
    "ensure_bootstrap_precedence",
    "insert_composite",
    "resolve_namespaces",
]
