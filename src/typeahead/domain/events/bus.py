"""Event bus used to deliver the typeahead outputs to listeners.

The component publishes its outputs (model changes, selections, create-new
requests) and candidate refreshes on an ``EventBus``. Hosts and widgets
subscribe without holding a reference to the component internals.

Event Handler Contract:
    Handlers MUST be synchronous. The engine runs on a single event loop and
    publishes from inside fetch completions; a handler that needs async work
    schedules it with ``asyncio.create_task()``.
"""

import asyncio
from typing import Callable, Type, TypeVar

from typeahead.logger import get_logger

from .types import Event

logger = get_logger("events.bus")

T = TypeVar("T", bound=Event)

EventHandler = Callable[[Event], None]


class EventBus:
    """Publish/subscribe registry keyed by event type.

    Example:
        ```python
        bus = EventBus()
        bus.subscribe(OptionSelected, lambda event: print(event.option))
        bus.publish(OptionSelected(option={"name": "Apple"}))
        ```

    Not thread-safe: all calls are expected on the same event loop.
    """

    def __init__(self) -> None:
        self._handlers: dict[Type[Event], list[EventHandler]] = {}

    def subscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> Callable[[], None]:
        """
        Subscribe ``handler`` to events of ``event_type``.

        Args:
            event_type: The event class to listen for
            handler: Synchronous callable receiving the event instance

        Returns:
            A zero-argument callable that removes the subscription

        Raises:
            TypeError: If handler is a coroutine function
        """
        if asyncio.iscoroutinefunction(handler):
            raise TypeError(
                f"Event handlers must be synchronous functions. "
                f"Handler {getattr(handler, '__name__', handler)!r} is a coroutine function; "
                f"schedule async work with asyncio.create_task() instead."
            )

        handlers = self._handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.debug(f"Subscribed handler for {event_type.__name__}")
        else:
            logger.debug(f"Handler already subscribed for {event_type.__name__}, skipping")

        return lambda: self.unsubscribe(event_type, handler)

    def unsubscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """Remove a subscription; unknown handlers are ignored."""
        handlers = self._handlers.get(event_type)
        if not handlers:
            return
        try:
            handlers.remove(handler)
            logger.debug(f"Unsubscribed handler for {event_type.__name__}")
        except ValueError:
            logger.debug(f"Handler not found in subscriptions for {event_type.__name__}")

    def publish(self, event: Event) -> None:
        """
        Deliver ``event`` to its subscribers in subscription order.

        A failing handler is logged and does not prevent the remaining
        handlers from running.
        """
        event_type = type(event)
        handlers = list(self._handlers.get(event_type, []))

        if not handlers:
            logger.debug(f"No handlers subscribed for {event_type.__name__}")
            return

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.opt(exception=e).error(f"Error in event handler for {event_type.__name__}: {e}")

    def has_subscribers(self, event_type: Type[Event]) -> bool:
        return bool(self._handlers.get(event_type))

    def clear(self) -> None:
        """Drop every subscription."""
        self._handlers.clear()
        logger.debug("Event bus cleared")
