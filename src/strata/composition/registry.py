"""Namespace registry.

Accumulates ``(priority, namespace)`` declarations made from independent call
sites until the composite builder drains them. Declarations are grouped by
priority; inside a group they keep the order in which they were first
registered. Registering an identical pair twice is a no-op.
"""

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, order=True)
class NamespaceRegistration:
    """A single namespace declaration.

    Lower `priority` means higher lookup precedence.
    """

    priority: int
    namespace: str


class NamespaceRegistry:
    """Thread-safe, write-many / drain-once store of namespace declarations."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        # priority -> insertion-ordered set of namespaces
        self._buckets: dict[int, dict[str, None]] = {}

    def register(self, namespaces: Iterable[str], priority: int) -> bool:
        """Record every namespace under `priority`.

        Args:
            namespaces: Namespace names, in declaration order.
            priority: Lower values are looked up first.

        Returns:
            bool: True if at least one new ``(priority, namespace)`` pair was added.
        """
        names = list(namespaces)
        added = False
        with self._lock:
            bucket = self._buckets.setdefault(priority, {})
            for namespace in names:
                if namespace not in bucket:
                    bucket[namespace] = None
                    added = True
            if not bucket:
                del self._buckets[priority]
        logger.debug(
            "Registered namespaces %s with priority %d (new=%s)", names, priority, added
        )
        return added

    def registrations(self) -> list[NamespaceRegistration]:
        """Return the pending declarations in build order without draining them."""
        with self._lock:
            return self._ordered()

    def drain(self) -> list[NamespaceRegistration]:
        """Return the pending declarations in build order and clear the registry."""
        with self._lock:
            ordered = self._ordered()
            self._buckets.clear()
        return ordered

    def discard(self, registrations: Iterable[NamespaceRegistration]) -> None:
        """Remove exactly `registrations`, keeping anything declared since."""
        with self._lock:
            for registration in registrations:
                bucket = self._buckets.get(registration.priority)
                if bucket is None:
                    continue
                bucket.pop(registration.namespace, None)
                if not bucket:
                    del self._buckets[registration.priority]

    def clear(self) -> None:
        with self._lock:
            self._buckets.clear()

    def _ordered(self) -> list[NamespaceRegistration]:
        return [
            NamespaceRegistration(priority, namespace)
            for priority in sorted(self._buckets)
            for namespace in self._buckets[priority]
        ]

    def __len__(self) -> int:
        with self._lock:
            return sum(len(bucket) for bucket in self._buckets.values())
