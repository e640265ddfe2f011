"""In-memory repository for Deck entities."""

import threading

import structlog

from deckpractice.application.common.event_bus import EventBusProtocol
from deckpractice.domain.common.value_objects import DeckId, UserId
from deckpractice.domain.learning.entities.deck import Deck
from deckpractice.domain.learning.events import DeckModificationType, DeckModifiedEvent

logger = structlog.get_logger(__name__)


class InMemoryDeckRepository:
    """
    Repository for Deck entities kept in process memory.

    When an event bus is given, every save and delete publishes a
    DeckModifiedEvent after the change is stored.
    """

    def __init__(self, event_bus: EventBusProtocol | None = None) -> None:
        self.event_bus = event_bus
        self._decks: dict[DeckId, Deck] = {}
        self._lock = threading.Lock()

    def find_by_id(self, deck_id: DeckId) -> Deck | None:
        with self._lock:
            return self._decks.get(deck_id)

    def find_by_user(self, user_id: UserId) -> list[Deck]:
        """
        Get all decks of a user.

        Returns:
            List of deck entities ordered by ID
        """
        with self._lock:
            decks = [deck for deck in self._decks.values() if deck.user_id == user_id]
        return sorted(decks, key=lambda deck: deck.id.value)

    def save(self, deck: Deck) -> Deck:
        """
        Save a deck entity (create or update).

        Args:
            deck: The deck entity to save

        Returns:
            The saved deck
        """
        with self._lock:
            created = deck.id not in self._decks
            self._decks[deck.id] = deck

        self._publish(
            deck.user_id,
            deck.id,
            DeckModificationType.CREATED if created else DeckModificationType.UPDATED,
        )
        return deck

    def delete(self, deck_id: DeckId) -> bool:
        """
        Delete a deck.

        Returns:
            True if deleted, False if not found
        """
        with self._lock:
            deck = self._decks.pop(deck_id, None)

        if deck is None:
            return False

        self._publish(deck.user_id, deck_id, DeckModificationType.DELETED)
        return True

    def _publish(self, user_id: UserId, deck_id: DeckId, type: DeckModificationType) -> None:
        logger.debug("deck_modified", deck_id=deck_id.value, type=type.value)
        if self.event_bus is not None:
            self.event_bus.publish(DeckModifiedEvent(user_id=user_id, deck_id=deck_id, type=type))
