"""Protocol for Flashcard read access in learning context."""

from collections.abc import Set
from typing import Protocol

from deckpractice.domain.common.value_objects import DeckId, FlashcardId
from deckpractice.domain.learning.entities.flashcard import Flashcard
from deckpractice.domain.learning.value_objects import FilterOption


class CardRepositoryProtocol(Protocol):
    """Protocol for Flashcard read operations used by the practice engine."""

    def find_by_deck(self, deck_id: DeckId) -> list[Flashcard]:
        """
        Get all flashcards of a deck.

        Args:
            deck_id: The deck ID

        Returns:
            List of flashcard entities in the deck's source order
        """
        ...

    def count_with_filter(
        self,
        deck_id: DeckId,
        search_text: str,
        filter_option: FilterOption,
        known_ids: Set[FlashcardId],
    ) -> int:
        """
        Count flashcards of a deck matching a search and known-status filter.

        Args:
            deck_id: The deck ID
            search_text: Case-insensitive substring matched against front, back
                and example; empty matches every card
            filter_option: Known-status filter
            known_ids: Ids currently known in the deck

        Returns:
            Number of matching flashcards
        """
        ...
