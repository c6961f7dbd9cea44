"""Message bus implementation for publishing container-wide events."""

import logging
import threading
from collections.abc import Callable, Mapping, Sequence

from strata.domain.events import Event

logger = logging.getLogger(__name__)

EventHandler = Callable[[Event], None]


class MessageBus:
    """A simple, thread-safe message bus for events.

    The bus routes each published event to every handler subscribed to its
    exact type, in subscription order. It may be called concurrently from the
    remote config client's delivery threads: the handler table is copied on
    write and read without holding the lock while handlers run.

    Args:
        event_handlers: Initial mapping of event types to their handlers.
            Handlers are callables that accept a single event argument;
            additional dependencies should be injected via closures.
    """

    def __init__(
        self,
        event_handlers: Mapping[type[Event], Sequence[EventHandler]] | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._event_handlers: dict[type[Event], tuple[EventHandler, ...]] = {
            event_type: tuple(handlers)
            for event_type, handlers in (event_handlers or {}).items()
        }

    def subscribe(self, event_type: type[Event], handler: EventHandler) -> None:
        """Add `handler` for `event_type`."""
        with self._lock:
            table = dict(self._event_handlers)
            table[event_type] = (*table.get(event_type, ()), handler)
            self._event_handlers = table

    def handlers_for(self, event_type: type[Event]) -> tuple[EventHandler, ...]:
        return self._event_handlers.get(event_type, ())

    def publish(self, event: Event) -> None:
        """Dispatch `event` to every handler subscribed to its type.

        Args:
            event: The event to publish.

        Raises:
            Exception: If a handler raises; later handlers are not called.
        """
        handlers = self._event_handlers.get(type(event), ())
        if not handlers:
            logger.debug("No handlers subscribed to %s", type(event).__name__)
            return
        for handler in handlers:
            handler_name = self._get_handler_name(handler)
            logger.debug("Handling event %s with handler %s", event, handler_name)
            try:
                handler(event)
            except Exception:  # pylint: disable=broad-except
                logger.exception(
                    "Exception handling event %s with handler %s", event, handler_name
                )
                raise

    @staticmethod
    def _get_handler_name(fn: Callable[..., None]) -> str:
        if hasattr(fn, "__name__"):
            return fn.__name__
        if hasattr(fn, "func") and hasattr(fn.func, "__name__"):
            return fn.func.__name__
        return repr(fn)
