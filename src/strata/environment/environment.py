"""Environment: ordered property lookup plus placeholder resolution.

Placeholders use the ``${key}`` / ``${key:default}`` syntax. Defaults may
themselves contain placeholders, and resolved values are resolved again so a
property may refer to another property.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from strata.domain.errors import (
    CircularPlaceholderError,
    InvalidFlagValueError,
    UnresolvablePlaceholderError,
)

from .property_source import (
    SYSTEM_ENVIRONMENT_PROPERTY_SOURCE_NAME,
    SYSTEM_PROPERTIES_PROPERTY_SOURCE_NAME,
    MapPropertySource,
    PropertySource,
    SystemEnvironmentPropertySource,
)
from .property_sources import PropertySources

logger = logging.getLogger(__name__)

PLACEHOLDER_PREFIX = "${"  # pragma: no mutate
PLACEHOLDER_SUFFIX = "}"  # pragma: no mutate
VALUE_SEPARATOR = ":"  # pragma: no mutate

TRUE_LITERALS = frozenset({"true", "yes", "on", "1"})
FALSE_LITERALS = frozenset({"false", "no", "off", "0"})


class Environment:
    """An ordered chain of property sources with typed accessors.

    Args:
        property_sources: The chain to consult. Defaults to an empty chain.
    """

    def __init__(self, property_sources: PropertySources | None = None) -> None:
        self.property_sources = (
            property_sources if property_sources is not None else PropertySources()
        )

    # --- Lookups ---

    def get_property(self, key: str, default: str | None = None) -> str | None:
        """Return the value of `key` from the first source defining it.

        Placeholders inside the found value are resolved leniently.
        """
        if (source := self.find_source(key)) is None:
            return default
        value = source.get_property(key)
        if value is None:
            return default
        return self.resolve_placeholders(value)

    def find_source(self, key: str) -> PropertySource | None:
        """Return the first source in the chain that defines `key`."""
        for source in self.property_sources:
            if source.contains_property(key):
                return source
        return None

    def contains_property(self, key: str) -> bool:
        return self.find_source(key) is not None

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Return `key` parsed as a boolean flag.

        Raises:
            InvalidFlagValueError: If the value is not a recognised boolean literal.
        """
        if (value := self.get_property(key)) is None:
            return default
        normalized = value.strip().lower()
        if normalized in TRUE_LITERALS:
            return True
        if normalized in FALSE_LITERALS:
            return False
        raise InvalidFlagValueError(key, value)

    def get_list(self, key: str, default: str = "") -> list[str]:
        """Return `key` split on commas, trimmed, with empty items dropped."""
        value = self.get_property(key, default) or ""
        return [item.strip() for item in value.split(",") if item.strip()]

    # --- Placeholders ---

    def resolve_placeholders(self, text: str) -> str:
        """Resolve placeholders in `text`, leaving unresolvable ones untouched."""
        return self._resolve(text, strict=False, visiting=set())

    def resolve_required_placeholders(self, text: str) -> str:
        """Resolve placeholders in `text`.

        Raises:
            UnresolvablePlaceholderError: If a placeholder has no value and no default.
        """
        return self._resolve(text, strict=True, visiting=set())

    def _resolve(self, text: str, *, strict: bool, visiting: set[str]) -> str:
        out: list[str] = []
        pos = 0
        while (start := text.find(PLACEHOLDER_PREFIX, pos)) >= 0:
            end = _find_placeholder_end(text, start)
            if end < 0:
                break
            out.append(text[pos:start])
            inner = text[start + len(PLACEHOLDER_PREFIX) : end]
            out.append(self._resolve_one(inner, text, strict=strict, visiting=visiting))
            pos = end + len(PLACEHOLDER_SUFFIX)
        out.append(text[pos:])
        return "".join(out)

    def _resolve_one(
        self, inner: str, text: str, *, strict: bool, visiting: set[str]
    ) -> str:
        key = self._resolve(inner, strict=strict, visiting=visiting)
        default: str | None = None
        if VALUE_SEPARATOR in key and (source := self.find_source(key)) is None:
            key, default = key.split(VALUE_SEPARATOR, 1)

        if key in visiting:
            raise CircularPlaceholderError(key, text)

        source = self.find_source(key)
        raw = source.get_property(key) if source is not None else None
        if raw is not None:
            visiting.add(key)
            try:
                return self._resolve(raw, strict=strict, visiting=visiting)
            finally:
                visiting.discard(key)
        if default is not None:
            return default
        if strict:
            raise UnresolvablePlaceholderError(key, text)
        return f"{PLACEHOLDER_PREFIX}{inner}{PLACEHOLDER_SUFFIX}"

    def __repr__(self) -> str:
        return f"Environment(property_sources={self.property_sources.names()!r})"


def _find_placeholder_end(text: str, start: int) -> int:
    depth = 0
    i = start + len(PLACEHOLDER_PREFIX)
    while i < len(text):
        if text.startswith(PLACEHOLDER_PREFIX, i):
            depth += 1
            i += len(PLACEHOLDER_PREFIX)
        elif text.startswith(PLACEHOLDER_SUFFIX, i):
            if depth == 0:
                return i
            depth -= 1
            i += len(PLACEHOLDER_SUFFIX)
        else:
            i += 1
    return -1


def standard_environment(
    system_properties: Mapping[str, object] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Environment:
    """Build the default environment: ``[systemProperties, systemEnvironment]``.

    Args:
        system_properties: Explicit process-level properties (e.g. CLI ``-D`` values).
        environ: Environment variables; defaults to ``os.environ``.
    """
    sources = PropertySources(
        [
            MapPropertySource(
                SYSTEM_PROPERTIES_PROPERTY_SOURCE_NAME, dict(system_properties or {})
            ),
            SystemEnvironmentPropertySource(
                SYSTEM_ENVIRONMENT_PROPERTY_SOURCE_NAME, environ
            ),
        ]
    )
    logger.debug("Built standard environment with sources %s", sources.names())
    return Environment(sources)
