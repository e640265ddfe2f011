"""
In-process event bus backed by blinker signals.

Each domain event class gets its own signal inside a namespace owned by
the bus instance, so separate buses (one per container, one per test)
never see each other's listeners.
"""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

import structlog
from blinker import Namespace, Signal

from deckpractice.domain.common.domain_event import DomainEvent

logger = structlog.get_logger(__name__)

E = TypeVar("E", bound=DomainEvent)


class BlinkerEventBus:
    """
    Synchronous publish/subscribe over blinker.

    publish() returns only after every listener for the event's type has
    run. Each listener runs in its own failure boundary: an exception is
    logged and the remaining listeners still run.
    """

    def __init__(self) -> None:
        self._signals = Namespace()
        self._receivers: dict[tuple[type[DomainEvent], Callable[..., None]], Callable[..., None]] = {}

    def _signal_for(self, event_type: type[DomainEvent]) -> Signal:
        return self._signals.signal(f"{event_type.__module__}.{event_type.__qualname__}")

    def subscribe(self, event_type: type[E], listener: Callable[[E], None]) -> None:
        """
        Register a listener for one event type.

        Subscribing the same listener twice for a type has no effect.
        """
        key = (event_type, listener)
        if key in self._receivers:
            return

        @functools.wraps(listener)
        def receiver(sender: Any, event: E) -> None:
            listener(event)

        self._receivers[key] = receiver
        # Strong reference: bound methods of caches must stay connected
        self._signal_for(event_type).connect(receiver, weak=False)
        logger.debug(
            "event_listener_subscribed",
            event_type=event_type.__name__,
            listener=getattr(listener, "__qualname__", repr(listener)),
        )

    def unsubscribe(self, event_type: type[E], listener: Callable[[E], None]) -> None:
        receiver = self._receivers.pop((event_type, listener), None)
        if receiver is not None:
            self._signal_for(event_type).disconnect(receiver)

    def publish(self, event: DomainEvent) -> None:
        """
        Deliver an event to every listener of its exact type.

        Listener failures are logged with the event payload and never
        reach the publisher.
        """
        signal = self._signal_for(type(event))
        receivers = list(signal.receivers_for(self))

        for receiver in receivers:
            try:
                receiver(self, event=event)
            except Exception:
                logger.exception(
                    "event_listener_failed",
                    domain_event=event.to_dict(),
                    listener=getattr(receiver, "__qualname__", repr(receiver)),
                )

        logger.debug("event_published", event_type=event.event_type, listeners=len(receivers))
