"""In-memory repository for Flashcard entities."""

import threading
from collections.abc import Set

from deckpractice.application.common.event_bus import EventBusProtocol
from deckpractice.application.learning.protocols import DeckRepositoryProtocol
from deckpractice.domain.common.value_objects import DeckId, FlashcardId
from deckpractice.domain.learning.entities.flashcard import Flashcard
from deckpractice.domain.learning.events import DeckModificationType, DeckModifiedEvent
from deckpractice.domain.learning.value_objects import FilterOption


def _matches(card: Flashcard, needle: str) -> bool:
    haystacks = (card.front, card.back, card.example or "")
    return any(needle in text.lower() for text in haystacks)


class InMemoryCardRepository:
    """
    Repository for Flashcard entities kept in process memory.

    Cards of a deck are returned in insertion order. Adding or removing a
    card changes the deck's counts, so with an event bus every write
    publishes DeckModifiedEvent(UPDATED) for the card's deck. The deck
    repository supplies the owner carried on the event.
    """

    def __init__(
        self,
        deck_repository: DeckRepositoryProtocol | None = None,
        event_bus: EventBusProtocol | None = None,
    ) -> None:
        self.deck_repository = deck_repository
        self.event_bus = event_bus
        self._cards: dict[FlashcardId, Flashcard] = {}
        self._lock = threading.Lock()

    def find_by_id(self, card_id: FlashcardId) -> Flashcard | None:
        with self._lock:
            return self._cards.get(card_id)

    def find_by_deck(self, deck_id: DeckId) -> list[Flashcard]:
        with self._lock:
            return [card for card in self._cards.values() if card.deck_id == deck_id]

    def count_by_deck(self, deck_id: DeckId) -> int:
        return len(self.find_by_deck(deck_id))

    def count_with_filter(
        self,
        deck_id: DeckId,
        search_text: str,
        filter_option: FilterOption,
        known_ids: Set[FlashcardId],
    ) -> int:
        needle = search_text.strip().lower()
        count = 0
        for card in self.find_by_deck(deck_id):
            if needle and not _matches(card, needle):
                continue
            if filter_option is FilterOption.KNOWN_ONLY and card.id not in known_ids:
                continue
            if filter_option is FilterOption.UNKNOWN_ONLY and card.id in known_ids:
                continue
            count += 1
        return count

    def save(self, card: Flashcard) -> Flashcard:
        """
        Save a flashcard entity (create or update).

        Args:
            card: The flashcard to save

        Returns:
            The saved flashcard
        """
        with self._lock:
            self._cards[card.id] = card
        self._publish(card.deck_id)
        return card

    def save_all(self, cards: list[Flashcard]) -> list[Flashcard]:
        for card in cards:
            self.save(card)
        return cards

    def delete(self, card_id: FlashcardId) -> bool:
        """
        Delete a flashcard.

        Returns:
            True if deleted, False if not found
        """
        with self._lock:
            card = self._cards.pop(card_id, None)
        if card is None:
            return False
        self._publish(card.deck_id)
        return True

    def _publish(self, deck_id: DeckId) -> None:
        if self.event_bus is None or self.deck_repository is None:
            return
        deck = self.deck_repository.find_by_id(deck_id)
        if deck is None:
            return
        self.event_bus.publish(
            DeckModifiedEvent(
                user_id=deck.user_id, deck_id=deck_id, type=DeckModificationType.UPDATED
            )
        )
