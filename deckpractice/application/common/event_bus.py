"""
Event bus port.

The event bus carries domain events from the services that perform writes
to the read models (caches) that depend on them. Publishers never know who
is listening.

Example:
    bus.subscribe(ProgressChangedEvent, known_cards_cache.on_progress_changed)
    bus.publish(ProgressChangedEvent(deck_id=DeckId(7)))
"""

from collections.abc import Callable
from typing import Protocol, TypeVar

from deckpractice.domain.common.domain_event import DomainEvent

E = TypeVar("E", bound=DomainEvent)

EventListener = Callable[[E], None]


class EventBusProtocol(Protocol):
    """
    Synchronous, in-process publish/subscribe.

    Implementations must:
    - Run every listener registered for the event's type before publish returns
    - Run listeners on the publisher's thread
    - Isolate listeners: a failing listener neither stops the others
      nor propagates to the publisher
    """

    def publish(self, event: DomainEvent) -> None: ...

    def subscribe(self, event_type: type[E], listener: EventListener[E]) -> None: ...

    def unsubscribe(self, event_type: type[E], listener: EventListener[E]) -> None: ...
