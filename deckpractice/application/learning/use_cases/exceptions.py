"""Exceptions for learning use cases."""

from deckpractice.domain.common.exceptions import EntityNotFoundError


class DeckNotFoundError(EntityNotFoundError):
    """Deck not found error."""

    def __init__(self, deck_id: int) -> None:
        self.deck_id = deck_id
        super().__init__("Deck", deck_id)
