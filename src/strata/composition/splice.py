"""Splice policy: where a composite goes in an existing property-source chain.

Rules, checked in order:

1. A source with the composite's name is already present: leave the chain as is.
2. The bootstrap composite is present (and is not the one being inserted):
   re-pin it to the front when override mode is on, then insert the new
   composite right after it.
3. Override mode is off and ``systemEnvironment`` is present: insert right
   after it, so process properties and environment variables win.
4. Otherwise insert at the front.

All functions here are pure: they take a chain tuple and return a new one.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from strata.environment.property_source import SYSTEM_ENVIRONMENT_PROPERTY_SOURCE_NAME
from strata.environment.property_sources import (
    add_after,
    add_first,
    index_of,
    move_to_front,
)

from .constants import BOOTSTRAP_PROPERTY_SOURCE_NAME

if TYPE_CHECKING:
    from strata.environment.property_source import PropertySource
    from strata.environment.property_sources import Chain

logger = logging.getLogger(__name__)


def ensure_bootstrap_precedence(
    chain: Chain, bootstrap_name: str = BOOTSTRAP_PROPERTY_SOURCE_NAME
) -> Chain:
    """Return `chain` with the bootstrap composite at the front, if present.

    Wrapping layers may insert sources ahead of it after the bootstrap phase.
    """
    if index_of(chain, bootstrap_name) > 0:
        logger.debug("Re-pinning %s to the front of the chain", bootstrap_name)
    return move_to_front(chain, bootstrap_name)


def insert_composite(
    composite: PropertySource,
    chain: Chain,
    *,
    override_system_properties: bool,
    bootstrap_name: str = BOOTSTRAP_PROPERTY_SOURCE_NAME,
) -> Chain:
    """Return `chain` with `composite` spliced in according to the module rules."""
    if index_of(chain, composite.name) >= 0:
        logger.debug("%s already in chain; leaving it unchanged", composite.name)
        return chain

    if composite.name != bootstrap_name and index_of(chain, bootstrap_name) >= 0:
        if override_system_properties:
            chain = ensure_bootstrap_precedence(chain, bootstrap_name)
        return add_after(chain, bootstrap_name, composite)

    if (
        not override_system_properties
        and index_of(chain, SYSTEM_ENVIRONMENT_PROPERTY_SOURCE_NAME) >= 0
    ):
        return add_after(chain, SYSTEM_ENVIRONMENT_PROPERTY_SOURCE_NAME, composite)

    return add_first(chain, composite)
