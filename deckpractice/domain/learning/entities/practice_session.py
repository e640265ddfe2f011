"""
PracticeSession entity.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from deckpractice.domain.common.exceptions import InvariantViolationError, ValidationError
from deckpractice.domain.common.value_objects import DeckId, FlashcardId
from deckpractice.domain.learning.entities.flashcard import Flashcard
from deckpractice.domain.learning.value_objects import PracticeDirection, PracticeOrder


@dataclass(eq=False)
class PracticeSession:
    """
    State of a single review run over a fixed queue of cards.

    The session lives only for the duration of the run; only the daily
    statistics and the known-card records written along the way survive it.

    Business Rules:
    - The queue holds distinct cards of the session's deck
    - 0 <= index <= len(cards); index == len(cards) means complete
    - The answer can only be showing while the session is not complete
    - Advancing the cursor always hides the answer and clears the question timer
    """

    deck_id: DeckId
    cards: tuple[Flashcard, ...]
    session_start: datetime
    direction: PracticeDirection = PracticeDirection.FRONT_TO_BACK
    order: PracticeOrder = PracticeOrder.SEQUENTIAL

    index: int = 0
    showing_answer: bool = False
    viewed: int = 0
    correct: int = 0
    hard: int = 0

    # Timing
    card_show_time: datetime | None = None
    total_answer_delay_ms: int = 0

    # Outcomes in the order they were recorded
    known_card_ids_delta: list[FlashcardId] = field(default_factory=list)
    failed_card_ids: list[FlashcardId] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate invariants."""
        seen: set[FlashcardId] = set()
        for card in self.cards:
            if card.deck_id != self.deck_id:
                raise InvariantViolationError(
                    "PracticeSession", f"card {card.id} does not belong to deck {self.deck_id}"
                )
            if card.id in seen:
                raise InvariantViolationError("PracticeSession", f"card {card.id} is queued twice")
            seen.add(card.id)
        if not 0 <= self.index <= len(self.cards):
            raise InvariantViolationError("PracticeSession", "index out of range")

    @property
    def total(self) -> int:
        return len(self.cards)

    @property
    def is_complete(self) -> bool:
        return self.index >= len(self.cards)

    @property
    def current_card(self) -> Flashcard | None:
        if self.is_complete:
            return None
        return self.cards[self.index]

    def begin_question(self, now: datetime) -> None:
        """Hide the answer and start timing the current card."""
        if self.is_complete:
            return
        self.showing_answer = False
        self.card_show_time = now

    def reveal_answer(self, now: datetime) -> int:
        """
        Show the answer for the current card.

        The delay since the question started is accumulated once per
        question; revealing an already revealed card changes nothing.

        Returns:
            Milliseconds added to the total answer delay
        """
        if self.is_complete or self.showing_answer:
            return 0

        delay_ms = 0
        if self.card_show_time is not None:
            elapsed = now - self.card_show_time
            # Clock may step backwards
            delay_ms = max(0, int(elapsed.total_seconds() * 1000))
            self.total_answer_delay_ms += delay_ms

        self.showing_answer = True
        return delay_ms

    def record_known(self) -> Flashcard | None:
        """Count the current card as correct and advance."""
        card = self.current_card
        if card is None:
            return None
        self.viewed += 1
        self.correct += 1
        self.known_card_ids_delta.append(card.id)
        self._advance()
        return card

    def record_hard(self) -> Flashcard | None:
        """Count the current card as hard and advance."""
        card = self.current_card
        if card is None:
            return None
        self.viewed += 1
        self.hard += 1
        self.failed_card_ids.append(card.id)
        self._advance()
        return card

    def _advance(self) -> None:
        self.index += 1
        self.showing_answer = False
        self.card_show_time = None

    @classmethod
    def create(
        cls,
        deck_id: DeckId,
        cards: Sequence[Flashcard],
        session_start: datetime,
        direction: PracticeDirection = PracticeDirection.FRONT_TO_BACK,
        order: PracticeOrder = PracticeOrder.SEQUENTIAL,
    ) -> "PracticeSession":
        """
        Factory method for a new practice session.

        An empty card list is allowed and yields a session that is
        complete from the start.

        Args:
            deck_id: Deck being practiced
            cards: Queue of cards, already ordered and limited
            session_start: When the run started
            direction: Which side is the question
            order: How the queue was ordered

        Returns:
            New PracticeSession instance
        """
        if not isinstance(deck_id, DeckId):
            raise ValidationError("Deck id is required", field="deck_id", value=deck_id)
        return cls(
            deck_id=deck_id,
            cards=tuple(cards),
            session_start=session_start,
            direction=direction,
            order=order,
        )
