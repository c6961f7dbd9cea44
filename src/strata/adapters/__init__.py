"""Adapters (infrastructure) for STRATA.

Provide concrete implementations of the remote config client port (e.g., the
in-memory config service used by tests and the CLI).

Dependency rule: may import `strata.domain` and `strata.interfaces`; the domain
must not import this package.
"""

from .memory_config import InMemoryConfig, InMemoryConfigService, NamespaceNotFoundError

__all__ = ["InMemoryConfig", "InMemoryConfigService", "NamespaceNotFoundError"]
