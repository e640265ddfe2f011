"""Application service for practice session preparation."""

import random as random_module
from collections.abc import Sequence

import structlog

from deckpractice.application.common.clock import Clock, utc_now
from deckpractice.application.learning.protocols import (
    CardRepositoryProtocol,
    DeckRepositoryProtocol,
    PracticeSettingsProtocol,
)
from deckpractice.application.learning.services.stats_service import StatsService
from deckpractice.application.learning.use_cases.dtos.practice_dtos import (
    SessionCompletionMetrics,
)
from deckpractice.application.learning.use_cases.dtos.stats_dtos import (
    DailyStatsRecord,
    SessionStats,
)
from deckpractice.domain.common.exceptions import ValidationError
from deckpractice.domain.common.value_objects import DeckId, FlashcardId
from deckpractice.domain.learning.entities.deck import Deck
from deckpractice.domain.learning.entities.flashcard import Flashcard
from deckpractice.domain.learning.entities.practice_session import PracticeSession
from deckpractice.domain.learning.value_objects import PracticeDirection, PracticeOrder

logger = structlog.get_logger(__name__)


def _require_positive_count(count: int) -> int:
    if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
        raise ValidationError(f"Count must be positive, got: {count}", field="count", value=count)
    return count


class PracticeSessionService:
    """
    Prepares practice sessions and records them once finished.

    Resolves the per-user defaults, selects the cards that are not yet
    known and builds the session queue.
    """

    def __init__(
        self,
        deck_repository: DeckRepositoryProtocol,
        card_repository: CardRepositoryProtocol,
        stats_service: StatsService,
        practice_settings: PracticeSettingsProtocol,
        clock: Clock = utc_now,
        rng: random_module.Random | None = None,
    ) -> None:
        self.deck_repository = deck_repository
        self.card_repository = card_repository
        self.stats_service = stats_service
        self.practice_settings = practice_settings
        self.clock = clock
        self.rng = rng or random_module.Random()

    def load_deck(self, deck_id: int) -> Deck | None:
        """
        Load a deck by its ID.

        Raises:
            ValidationError: If deck_id is not positive
        """
        return self.deck_repository.find_by_id(DeckId(deck_id))

    def get_not_known_cards(self, deck_id: int) -> list[Flashcard]:
        """
        Get the cards of a deck that are not marked as known.

        Args:
            deck_id: ID of the deck

        Returns:
            Not-known cards in the deck's source order (may be empty)

        Raises:
            ValidationError: If deck_id is not positive
        """
        deck_id_vo = DeckId(deck_id)
        cards = self.card_repository.find_by_deck(deck_id_vo)
        known = self.stats_service.get_known_card_ids(deck_id)
        return [card for card in cards if card.id not in known]

    def resolve_default_count(self, deck_id: int) -> int:
        """
        Number of cards a session gets when the caller does not choose.

        Returns:
            The number of not-known cards clamped to [1, configured default]
        """
        return self.resolve_default_count_for(self.get_not_known_cards(deck_id))

    def resolve_default_count_for(self, not_known_cards: Sequence[Flashcard]) -> int:
        """Same as resolve_default_count, for cards the caller already loaded."""
        configured = max(1, self.practice_settings.default_count())
        return max(1, min(len(not_known_cards), configured))

    def is_random(self) -> bool:
        return self.practice_settings.default_random_order()

    def default_direction(self) -> PracticeDirection:
        return self.practice_settings.default_direction() or PracticeDirection.FRONT_TO_BACK

    def prepare_session(self, deck_id: int, count: int, random: bool) -> list[Flashcard]:
        """
        Select and order the cards for a session.

        Returns:
            At most count not-known cards, shuffled when random is set
        """
        _require_positive_count(count)
        return self._order_and_limit(self.get_not_known_cards(deck_id), count, random)

    def start_session(
        self,
        deck_id: int,
        count: int | None = None,
        random: bool | None = None,
        direction: PracticeDirection | None = None,
    ) -> PracticeSession:
        """
        Start a new practice session.

        Options left as None are taken from the practice settings. A deck
        without not-known cards yields a session that is already complete.

        Args:
            deck_id: ID of the deck to practice
            count: Maximum number of cards in the session
            random: Whether to shuffle the queue
            direction: Which side of each card is the question

        Returns:
            New PracticeSession ready for its first question

        Raises:
            ValidationError: If deck_id or count is not positive
        """
        deck_id_vo = DeckId(deck_id)
        if count is not None:
            _require_positive_count(count)
        if random is None:
            random = self.is_random()
        if direction is None:
            direction = self.default_direction()

        not_known = self.get_not_known_cards(deck_id)
        if count is None:
            count = self.resolve_default_count_for(not_known)
        cards = self._order_and_limit(not_known, count, random)

        session = PracticeSession.create(
            deck_id=deck_id_vo,
            cards=cards,
            session_start=self.clock(),
            direction=direction,
            order=PracticeOrder.RANDOM if random else PracticeOrder.SEQUENTIAL,
        )
        logger.info(
            "practice_session_started",
            deck_id=deck_id,
            cards=len(cards),
            available=len(not_known),
            random=random,
            direction=direction.value,
        )
        return session

    def start_session_with_cards(
        self,
        deck_id: int,
        preloaded_cards: Sequence[Flashcard],
        count: int,
        random: bool,
    ) -> PracticeSession:
        """Start a session from not-known cards the caller already loaded."""
        deck_id_vo = DeckId(deck_id)
        _require_positive_count(count)
        cards = self._order_and_limit(list(preloaded_cards), count, random)
        return PracticeSession.create(
            deck_id=deck_id_vo,
            cards=cards,
            session_start=self.clock(),
            direction=self.default_direction(),
            order=PracticeOrder.RANDOM if random else PracticeOrder.SEQUENTIAL,
        )

    def get_failed_cards(
        self, deck_id: int, failed_card_ids: Sequence[FlashcardId]
    ) -> list[Flashcard]:
        """Cards marked hard in a session that are still not known."""
        if not failed_card_ids:
            return []
        failed = set(failed_card_ids)
        return [card for card in self.get_not_known_cards(deck_id) if card.id in failed]

    def start_repeat_session(self, deck_id: int, failed_cards: Sequence[Flashcard]) -> PracticeSession:
        """Start a shuffled session over the cards failed in a previous run."""
        cards = list(failed_cards)
        self.rng.shuffle(cards)
        return PracticeSession.create(
            deck_id=DeckId(deck_id),
            cards=cards,
            session_start=self.clock(),
            direction=self.default_direction(),
            order=PracticeOrder.RANDOM,
        )

    def record_session(
        self,
        deck_id: DeckId,
        viewed: int,
        correct: int,
        hard: int,
        session_duration_ms: int,
        total_answer_delay_ms: int,
        known_card_ids_delta: Sequence[FlashcardId] = (),
    ) -> DailyStatsRecord:
        """Add a finished session's totals to today's statistics."""
        stats = SessionStats(
            deck_id=deck_id,
            viewed=viewed,
            correct=correct,
            hard=hard,
            session_duration_ms=session_duration_ms,
            total_answer_delay_ms=total_answer_delay_ms,
            known_card_ids_delta=tuple(known_card_ids_delta),
        )
        return self.stats_service.record_session(stats)

    def reset_deck_progress(self, deck_id: int) -> int:
        """Clear every known card of the deck."""
        return self.stats_service.reset_deck_progress(deck_id)

    def calculate_completion_metrics(self, session: PracticeSession) -> SessionCompletionMetrics:
        """Summarize a finished session: size, minutes spent and average answer time."""
        total_cards = session.total if session.cards else session.viewed
        elapsed_seconds = (self.clock() - session.session_start).total_seconds()
        session_minutes = max(1, int(elapsed_seconds // 60))
        denominator = max(1, session.viewed)
        avg_seconds = max(1, round(session.total_answer_delay_ms / denominator / 1000.0))
        return SessionCompletionMetrics(
            total_cards=total_cards,
            session_minutes=session_minutes,
            avg_seconds=avg_seconds,
        )

    def _order_and_limit(self, cards: list[Flashcard], count: int, random: bool) -> list[Flashcard]:
        if random:
            self.rng.shuffle(cards)
        return cards[:count]
