"""
Flashcard entity for practice sessions.
"""

from dataclasses import dataclass

from deckpractice.domain.common.entity import Entity
from deckpractice.domain.common.exceptions import DomainError
from deckpractice.domain.common.value_objects import DeckId, FlashcardId
from deckpractice.domain.learning.value_objects import PracticeDirection


@dataclass(eq=False)
class Flashcard(Entity[FlashcardId]):
    """
    Front/back study card belonging to a deck.

    Business Rules:
    - Front and back text cannot be empty
    - Flashcard must be associated with a deck
    - Example text and image are optional
    """

    id: FlashcardId
    deck_id: DeckId
    front: str
    back: str
    example: str | None = None
    image_url: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.front or not self.front.strip():
            raise DomainError("Front text cannot be empty")
        if not self.back or not self.back.strip():
            raise DomainError("Back text cannot be empty")

    def question(self, direction: PracticeDirection) -> str:
        """Side shown before the answer is revealed."""
        if direction is PracticeDirection.BACK_TO_FRONT:
            return self.back
        return self.front

    def answer(self, direction: PracticeDirection) -> str:
        """Side shown once the answer is revealed."""
        if direction is PracticeDirection.BACK_TO_FRONT:
            return self.front
        return self.back
