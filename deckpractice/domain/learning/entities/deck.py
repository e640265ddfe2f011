"""
Deck entity.
"""

from dataclasses import dataclass

from deckpractice.domain.common.entity import Entity
from deckpractice.domain.common.exceptions import DomainError
from deckpractice.domain.common.value_objects import DeckId, UserId


@dataclass(eq=False)
class Deck(Entity[DeckId]):
    """Named collection of flashcards owned by a user."""

    id: DeckId
    user_id: UserId
    title: str
    description: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.title or not self.title.strip():
            raise DomainError("Deck title cannot be empty")
