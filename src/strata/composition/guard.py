"""Per-container idempotency guard."""

import threading
from collections.abc import Hashable


class InitializationGuard:
    """Lock-protected set of container identities that have been processed.

    A single guard may be shared by several composition contexts so that
    "already wired" state is visible across them.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._seen: set[Hashable] = set()

    def try_acquire(self, container: Hashable) -> bool:
        """Record `container`; return True only for the first caller."""
        with self._lock:
            if container in self._seen:
                return False
            self._seen.add(container)
            return True

    def is_acquired(self, container: Hashable) -> bool:
        with self._lock:
            return container in self._seen

    def reset(self) -> None:
        with self._lock:
            self._seen.clear()
