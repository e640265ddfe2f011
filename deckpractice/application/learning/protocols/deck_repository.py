"""Protocol for Deck read access in learning context."""

from typing import Protocol

from deckpractice.domain.common.value_objects import DeckId
from deckpractice.domain.learning.entities.deck import Deck


class DeckRepositoryProtocol(Protocol):
    """Protocol for Deck lookups."""

    def find_by_id(self, deck_id: DeckId) -> Deck | None:
        """
        Find a deck by ID.

        Args:
            deck_id: The deck ID

        Returns:
            Deck entity if found, None otherwise
        """
        ...
