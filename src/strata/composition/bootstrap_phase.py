"""Bootstrap phase: compose configuration before normal container startup.

Enable with ``strata.bootstrap.enabled=true``. The namespaces come from
``strata.bootstrap.namespaces`` (comma-separated, default ``application``) and
are composed into ``StrataBootstrapPropertySources``, which the main pass later
detects and keeps ahead of its own composite.

Two triggers exist:

- `initialize(environment)`, called when the container initializes;
- `post_process_environment(environment)`, called even earlier, before the
  logging system is configured. It only acts when
  ``strata.bootstrap.eager-load.enabled=true``; records logged by STRATA in
  that window are buffered and replayed by the next `initialize` call.

Whichever trigger runs first does the work; the other finds the composite
already in place.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from strata import config
from strata.config import ClientSettings
from strata.logging import enable_deferred_logging, replay_deferred_logs

from .builder import compose_namespaces
from .constants import BOOTSTRAP_PROPERTY_SOURCE_NAME
from .splice import ensure_bootstrap_precedence, insert_composite

if TYPE_CHECKING:
    from strata.environment import Environment

    from .context import CompositionContext
    from .property_sources import CompositePropertySource

logger = logging.getLogger(__name__)


class BootstrapPhaseInitializer:
    """Composes the bootstrap namespaces into an environment.

    Args:
        context: Shared adapter factory and config service. The bootstrap phase
            reads its namespaces from flags, not from the registry.
    """

    def __init__(self, context: CompositionContext) -> None:
        self.context = context

    def initialize(self, environment: Environment) -> CompositePropertySource | None:
        """Run the bootstrap composition if ``strata.bootstrap.enabled`` is set.

        Returns:
            The spliced composite, or None if disabled or already installed.
        """
        if not environment.get_bool(
            config.BOOTSTRAP_ENABLED, config.DEFAULT_BOOTSTRAP_ENABLED
        ):
            logger.debug(
                "Bootstrap config is not enabled for %r, see property: ${%s}",
                environment,
                config.BOOTSTRAP_ENABLED,
            )
            return None
        logger.debug("Bootstrap config is enabled for %r", environment)
        return self.compose(environment)

    def post_process_environment(
        self, environment: Environment
    ) -> CompositePropertySource | None:
        """Eager trigger, meant to run before logging is configured.

        Returns:
            The spliced composite, or None if eager loading or bootstrap is off.
        """
        if not environment.get_bool(
            config.BOOTSTRAP_EAGER_LOAD_ENABLED,
            config.DEFAULT_BOOTSTRAP_EAGER_LOAD_ENABLED,
        ):
            return None
        if not environment.get_bool(
            config.BOOTSTRAP_ENABLED, config.DEFAULT_BOOTSTRAP_ENABLED
        ):
            return None
        enable_deferred_logging()
        try:
            return self.compose(environment)
        except Exception:
            # nothing will call initialize() after a failed eager load
            replay_deferred_logs()
            raise

    def compose(self, environment: Environment) -> CompositePropertySource | None:
        """Build and splice the bootstrap composite unless it is already present."""
        settings = ClientSettings.from_environment(environment)
        sources = environment.property_sources

        if sources.contains(BOOTSTRAP_PROPERTY_SOURCE_NAME):
            replayed = replay_deferred_logs()
            if replayed:
                logger.debug("Replayed %d deferred log record(s)", replayed)
            if settings.override_system_properties:
                sources.update(ensure_bootstrap_precedence)
            return None

        namespaces = environment.get_list(
            config.BOOTSTRAP_NAMESPACES, config.DEFAULT_NAMESPACE
        )
        logger.debug("Bootstrap namespaces: %s", namespaces)

        composite = compose_namespaces(
            BOOTSTRAP_PROPERTY_SOURCE_NAME,
            namespaces,
            config_service=self.context.config_service,
            factory=self.context.factory,
            cached=settings.property_names_cache_enabled,
        )
        sources.update(
            lambda chain: insert_composite(
                composite,
                chain,
                override_system_properties=settings.override_system_properties,
            )
        )
        logger.info(
            "Bootstrap composed %s from namespaces %s",
            BOOTSTRAP_PROPERTY_SOURCE_NAME,
            [s.name for s in composite.property_sources],
        )
        return composite
