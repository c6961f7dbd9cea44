"""Interfaces (application boundary) for STRATA.

Defines framework-free contracts for the remote config client consumed by the
composition engine, together with the small change DTOs it delivers.

Dependency rule: this package is independent; do not import from any
`strata.*` modules. It may be imported by `strata.composition`,
`strata.adapters`, and `strata.bootstrap`.
"""

from .config_service import (
    Config,
    ConfigChange,
    ConfigChangeEvent,
    ConfigChangeListener,
    ConfigService,
    PropertyChangeType,
)

__all__ = [
    "Config",
    "ConfigChange",
    "ConfigChangeEvent",
    "ConfigChangeListener",
    "ConfigService",
    "PropertyChangeType",
]
