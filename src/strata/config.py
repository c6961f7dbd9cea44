"""Configuration utilities for STRATA.

This module centralizes the flag keys the composition engine reads from the
ambient environment, their defaults, and a couple of small helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from strata.environment import Environment

CONFIG_DIR_ENV_VAR = "STRATA_CONFIG_DIR"  # pragma: no mutate

# --- Flag keys ---
BOOTSTRAP_ENABLED = "strata.bootstrap.enabled"  # pragma: no mutate
BOOTSTRAP_NAMESPACES = "strata.bootstrap.namespaces"  # pragma: no mutate
BOOTSTRAP_EAGER_LOAD_ENABLED = "strata.bootstrap.eager-load.enabled"  # pragma: no mutate
OVERRIDE_SYSTEM_PROPERTIES = "strata.override-system-properties"  # pragma: no mutate
PROPERTY_NAMES_CACHE_ENABLED = "strata.property-names-cache.enabled"  # pragma: no mutate

# --- Defaults ---
DEFAULT_NAMESPACE = "application"
DEFAULT_BOOTSTRAP_ENABLED = False
DEFAULT_BOOTSTRAP_EAGER_LOAD_ENABLED = False
DEFAULT_OVERRIDE_SYSTEM_PROPERTIES = True
DEFAULT_PROPERTY_NAMES_CACHE_ENABLED = False


class ConfigDirNotSetError(Exception):
    """Raised when the STRATA_CONFIG_DIR environment variable is not set."""


def get_config_dir() -> Path:
    """Get the local namespace directory from the environment.

    Returns:
        The value of the `STRATA_CONFIG_DIR` environment variable as a Path.

    Raises:
        ConfigDirNotSetError: If `STRATA_CONFIG_DIR` is not set.
    """
    if not (path := os.environ.get(CONFIG_DIR_ENV_VAR)):
        raise ConfigDirNotSetError
    return Path(path)


@dataclass(frozen=True, slots=True)
class ClientSettings:
    """Client-wide switches that shape how composites are built and spliced.

    Attributes:
        override_system_properties: When True, remote values outrank process
            properties and environment variables. When False, the composite is
            placed after the ``systemEnvironment`` source.
        property_names_cache_enabled: When True, composites cache the union of
            their property names until a source is added or a remote change arrives.
    """

    override_system_properties: bool = DEFAULT_OVERRIDE_SYSTEM_PROPERTIES
    property_names_cache_enabled: bool = DEFAULT_PROPERTY_NAMES_CACHE_ENABLED

    @classmethod
    def from_environment(cls, environment: Environment) -> ClientSettings:
        """Read the settings from `environment`, falling back to defaults."""
        return cls(
            override_system_properties=environment.get_bool(
                OVERRIDE_SYSTEM_PROPERTIES, DEFAULT_OVERRIDE_SYSTEM_PROPERTIES
            ),
            property_names_cache_enabled=environment.get_bool(
                PROPERTY_NAMES_CACHE_ENABLED, DEFAULT_PROPERTY_NAMES_CACHE_ENABLED
            ),
        )
