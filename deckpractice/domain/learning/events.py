"""
Domain events for the learning module.

Caches and other read models subscribe to these events instead of being
called directly by the services that perform writes.
"""

from dataclasses import dataclass
from enum import Enum

from deckpractice.domain.common.domain_event import DomainEvent
from deckpractice.domain.common.value_objects import DeckId, FlashcardId, UserId


class ProgressChangeType(str, Enum):
    """Type of progress change."""

    # Single card status changed (known/unknown toggle)
    CARD_STATUS_CHANGED = "CARD_STATUS_CHANGED"
    # All progress reset for entire deck
    DECK_RESET = "DECK_RESET"


class DeckModificationType(str, Enum):
    """Type of structural deck change."""

    CREATED = "CREATED"
    UPDATED = "UPDATED"
    DELETED = "DELETED"


@dataclass(frozen=True)
class ProgressChangedEvent(DomainEvent):
    """
    A card's known/unknown status changed, or a deck's progress was cleared.

    Published by StatsService after the write reached the known-card store.
    """

    deck_id: DeckId
    change_type: ProgressChangeType = ProgressChangeType.CARD_STATUS_CHANGED
    card_id: FlashcardId | None = None


@dataclass(frozen=True)
class DeckModifiedEvent(DomainEvent):
    """A deck was created, updated or deleted."""

    user_id: UserId
    deck_id: DeckId
    type: DeckModificationType
