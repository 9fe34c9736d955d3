"""In-process event emitter supporting sync and async handlers."""

import inspect
import typing as t
from collections import defaultdict

from .base import BaseEmitter

if t.TYPE_CHECKING:
    import loguru


class EventEmitter(BaseEmitter):
    """Dispatches events to subscribed handlers in registration order.

    Handler failures are logged and isolated: one failing handler never
    prevents the others from running, and never propagates to the emitter.
    """

    def __init__(self, logger: "loguru.Logger") -> None:
        self._logger = logger
        self._handlers: dict[str, list[t.Callable]] = defaultdict(list)

    def on(self, event_type: str, handler: t.Callable) -> None:
        self._handlers[event_type].append(handler)

    def off(self, event_type: str, handler: t.Callable) -> None:
        try:
            self._handlers[event_type].remove(handler)
        except ValueError:
            self._logger.warning(f"Handler {handler} not found for event {event_type}")

    async def emit(self, event_type: str, event_data: t.Any) -> None:
        # Copy so handlers may unsubscribe while being dispatched
        for handler in list(self._handlers.get(event_type, [])):
            if inspect.iscoroutinefunction(handler):
                try:
                    await handler(event_data)
                except Exception as e:
                    self._logger.opt(exception=e).error(
                        f"Async handler {handler} failed for event {event_type}"
                    )
            else:
                try:
                    handler(event_data)
                except Exception:
                    self._logger.exception(
                        f"Handler {handler} failed for event {event_type}"
                    )
