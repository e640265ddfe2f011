"""Protocol for the known-card store."""

from collections.abc import Iterable
from typing import Protocol

from deckpractice.domain.common.value_objects import DeckId, FlashcardId


class KnownCardRepositoryProtocol(Protocol):
    """Protocol for persisting which cards of a deck are known."""

    def mark_known(self, deck_id: DeckId, card_id: FlashcardId) -> None:
        """Record the card as known. Marking an already known card is a no-op."""
        ...

    def mark_unknown(self, deck_id: DeckId, card_id: FlashcardId) -> None:
        """Remove the known record of a card, if any."""
        ...

    def is_known(self, deck_id: DeckId, card_id: FlashcardId) -> bool:
        """Check a single card without loading the whole known set."""
        ...

    def clear_known(self, deck_id: DeckId) -> int:
        """
        Remove every known record of a deck.

        Returns:
            Number of records removed
        """
        ...

    def list_known_ids(self, deck_id: DeckId) -> frozenset[FlashcardId]:
        """Get the ids of all known cards of a deck."""
        ...

    def list_known_ids_batch(
        self, deck_ids: Iterable[DeckId]
    ) -> dict[DeckId, frozenset[FlashcardId]]:
        """
        Get known card ids for several decks in one call.

        Returns:
            Mapping with an entry for every requested deck
        """
        ...
