"""Namespace declarations.

Application code declares the namespaces it wants composed with
`enable_config`. Placeholders in namespace names (``"${app.ns}"``) are
resolved here, before they reach the registry:

- With an `Environment`, every placeholder must resolve; an unresolvable one
  raises `InvalidConfigReferenceError` and aborts startup.
- Without one, names are registered verbatim and a single warning is logged
  if any of them looks like a placeholder.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from strata.domain.errors import (
    InvalidConfigReferenceError,
    UnresolvablePlaceholderError,
)
from strata.environment.environment import PLACEHOLDER_PREFIX

from .constants import LOWEST_PRECEDENCE

if TYPE_CHECKING:
    from strata.environment import Environment

    from .registry import NamespaceRegistry

logger = logging.getLogger(__name__)


def resolve_namespaces(
    namespaces: Iterable[str], environment: Environment | None
) -> list[str]:
    """Resolve placeholders in `namespaces` against `environment`.

    Raises:
        InvalidConfigReferenceError: If `environment` is given and a placeholder
            cannot be resolved.
    """
    names = list(namespaces)
    if environment is None:
        for namespace in names:
            if PLACEHOLDER_PREFIX in namespace:
                logger.warning(
                    "Namespace placeholder %s cannot be resolved without an "
                    "environment; using it verbatim.",
                    namespace,
                )
                break
        return names

    resolved: list[str] = []
    for namespace in names:
        try:
            resolved.append(environment.resolve_required_placeholders(namespace))
        except UnresolvablePlaceholderError as e:
            raise InvalidConfigReferenceError(namespace, e.placeholder) from e
    return resolved


def enable_config(
    registry: NamespaceRegistry,
    namespaces: Iterable[str],
    order: int = LOWEST_PRECEDENCE,
    environment: Environment | None = None,
) -> bool:
    """Declare `namespaces` for composition with priority `order`.

    Returns:
        bool: True if the registry gained at least one new declaration.
    """
    return registry.register(resolve_namespaces(namespaces, environment), order)
