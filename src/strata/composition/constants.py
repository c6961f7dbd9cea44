"""Well-known names used by the composition engine."""

#: Name of the composite built from namespaces declared in application code.
PROPERTY_SOURCE_NAME = "StrataPropertySources"  # pragma: no mutate

#: Name of the composite built during the bootstrap phase.
BOOTSTRAP_PROPERTY_SOURCE_NAME = "StrataBootstrapPropertySources"  # pragma: no mutate

#: Order given to declarations that do not specify one (lowest precedence).
LOWEST_PRECEDENCE = 2**31 - 1

#: Highest possible precedence for a declaration.
HIGHEST_PRECEDENCE = -(2**31)
