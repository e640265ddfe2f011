"""Facade used by the presentation layer to run practice sessions."""

from deckpractice.application.learning.services.practice_session_manager import (
    PracticeSessionManager,
)
from deckpractice.application.learning.services.practice_session_service import (
    PracticeSessionService,
)
from deckpractice.application.learning.use_cases.dtos.practice_dtos import (
    Progress,
    SessionCompletionMetrics,
)
from deckpractice.application.learning.use_cases.dtos.stats_dtos import DailyStatsRecord
from deckpractice.domain.learning.entities.deck import Deck
from deckpractice.domain.learning.entities.flashcard import Flashcard
from deckpractice.domain.learning.entities.practice_session import PracticeSession
from deckpractice.domain.learning.value_objects import PracticeDirection


class PracticePresenter:
    """Coordinates session preparation and the session state machine."""

    def __init__(
        self,
        session_service: PracticeSessionService,
        session_manager: PracticeSessionManager,
    ) -> None:
        self.session_service = session_service
        self.session_manager = session_manager

    def load_deck(self, deck_id: int) -> Deck | None:
        return self.session_service.load_deck(deck_id)

    def get_not_known_cards(self, deck_id: int) -> list[Flashcard]:
        return self.session_service.get_not_known_cards(deck_id)

    def resolve_default_count(self, deck_id: int) -> int:
        return self.session_service.resolve_default_count(deck_id)

    def is_random(self) -> bool:
        return self.session_service.is_random()

    def start_session(
        self,
        deck_id: int,
        count: int | None = None,
        random: bool | None = None,
        direction: PracticeDirection | None = None,
    ) -> PracticeSession:
        return self.session_service.start_session(deck_id, count, random, direction)

    def is_complete(self, session: PracticeSession) -> bool:
        return self.session_manager.is_complete(session)

    def current_card(self, session: PracticeSession) -> Flashcard | None:
        return self.session_manager.current_card(session)

    def start_question(self, session: PracticeSession) -> None:
        self.session_manager.start_question(session)

    def reveal(self, session: PracticeSession) -> None:
        self.session_manager.reveal(session)

    def mark_know(self, session: PracticeSession) -> None:
        self.session_manager.mark_know(session)

    def mark_hard(self, session: PracticeSession) -> None:
        self.session_manager.mark_hard(session)

    def progress(self, session: PracticeSession) -> Progress:
        return self.session_manager.progress(session)

    def record_and_persist(self, session: PracticeSession) -> DailyStatsRecord | None:
        return self.session_manager.record_and_persist(session, self.session_service)

    def completion_metrics(self, session: PracticeSession) -> SessionCompletionMetrics:
        return self.session_service.calculate_completion_metrics(session)

    def start_repeat_session(self, session: PracticeSession) -> PracticeSession | None:
        """
        Start a new run over the cards failed in a finished session.

        Returns:
            The repeat session, or None when no failed card is still unknown
        """
        failed = self.session_service.get_failed_cards(
            session.deck_id.value, session.failed_card_ids
        )
        if not failed:
            return None
        return self.session_service.start_repeat_session(session.deck_id.value, failed)

    def reset_deck_progress(self, deck_id: int) -> int:
        return self.session_service.reset_deck_progress(deck_id)
