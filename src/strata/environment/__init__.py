"""STRATA environment package.

Models the target environment the composition engine splices into: named
property sources, the ordered chain holding them, and the `Environment`
facade used for flag lookups and placeholder resolution.
"""

from .environment import Environment, standard_environment
from .property_source import (
    SYSTEM_ENVIRONMENT_PROPERTY_SOURCE_NAME,
    SYSTEM_PROPERTIES_PROPERTY_SOURCE_NAME,
    MapPropertySource,
    PropertySource,
    SystemEnvironmentPropertySource,
)
from .property_sources import PropertySourceNotFound, PropertySources

__all__ = [
    "Environment",
    "MapPropertySource",
    "PropertySource",
    "PropertySourceNotFound",
    "PropertySources",
    "SYSTEM_ENVIRONMENT_PROPERTY_SOURCE_NAME",
    "SYSTEM_PROPERTIES_PROPERTY_SOURCE_NAME",
    "SystemEnvironmentPropertySource",
    "standard_environment",
]
