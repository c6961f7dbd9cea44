"""Composition context: the shared state of one initialization path."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .constants import LOWEST_PRECEDENCE
from .declarations import enable_config
from .guard import InitializationGuard
from .property_sources import ConfigPropertySourceFactory
from .registry import NamespaceRegistry

if TYPE_CHECKING:
    from strata.environment import Environment
    from strata.interfaces.config_service import ConfigService


@dataclass
class CompositionContext:
    """State shared by the main and bootstrap composition passes.

    Constructed explicitly by the container's initialization path and passed
    by reference. Pass the same `guard` to several contexts to share
    "already wired" state between them.

    Attributes:
        config_service: Remote config client.
        registry: Pending namespace declarations.
        factory: Creates and tracks namespace adapters.
        guard: Containers already wired for live updates.
    """

    config_service: ConfigService
    registry: NamespaceRegistry = field(default_factory=NamespaceRegistry)
    factory: ConfigPropertySourceFactory = field(
        default_factory=ConfigPropertySourceFactory
    )
    guard: InitializationGuard = field(default_factory=InitializationGuard)

    def enable_config(
        self,
        namespaces: Iterable[str],
        order: int = LOWEST_PRECEDENCE,
        environment: Environment | None = None,
    ) -> bool:
        """Declare namespaces on this context's registry (see `enable_config`)."""
        return enable_config(self.registry, namespaces, order, environment)
