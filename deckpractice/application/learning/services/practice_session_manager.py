"""State machine for an active practice session."""

from typing import TYPE_CHECKING

import structlog

from deckpractice.application.common.clock import Clock, utc_now
from deckpractice.application.learning.services.stats_service import StatsService
from deckpractice.application.learning.use_cases.dtos.practice_dtos import Progress
from deckpractice.application.learning.use_cases.dtos.stats_dtos import DailyStatsRecord
from deckpractice.domain.learning.entities.flashcard import Flashcard
from deckpractice.domain.learning.entities.practice_session import PracticeSession

if TYPE_CHECKING:
    from deckpractice.application.learning.services.practice_session_service import (
        PracticeSessionService,
    )

logger = structlog.get_logger(__name__)


class PracticeSessionManager:
    """
    Drives a PracticeSession through its states.

    QuestionPending --reveal--> AnswerRevealed --mark_know/mark_hard--> next
    QuestionPending, or Complete once the cursor reaches the end of the queue.

    Writes that outlive the session (known-card records, daily statistics)
    happen before the in-memory session is touched, so a failed write leaves
    the session exactly as it was.
    """

    def __init__(self, stats_service: StatsService, clock: Clock = utc_now) -> None:
        self.stats_service = stats_service
        self.clock = clock

    def is_complete(self, session: PracticeSession) -> bool:
        return session.is_complete

    def current_card(self, session: PracticeSession) -> Flashcard | None:
        """The card under the cursor, or None once the session is complete."""
        return session.current_card

    def start_question(self, session: PracticeSession) -> None:
        """Hide the answer and start the answer timer for the current card."""
        session.begin_question(self.clock())

    def reveal(self, session: PracticeSession) -> None:
        """
        Show the answer for the current card.

        The time since start_question is added to the session's answer
        delay once per question; repeated reveals are ignored.
        """
        session.reveal_answer(self.clock())

    def mark_know(self, session: PracticeSession) -> None:
        """
        Record the current card as known and advance.

        The card is persisted as known first, which publishes a progress
        event for the deck.
        """
        card = session.current_card
        if card is None:
            return

        self.stats_service.set_card_known(session.deck_id.value, card.id.value, True)
        session.record_known()

        logger.debug(
            "card_marked_known",
            deck_id=session.deck_id.value,
            card_id=card.id.value,
            index=session.index,
        )

    def mark_hard(self, session: PracticeSession) -> None:
        """Record the current card as hard and advance. The card's status is unchanged."""
        card = session.record_hard()
        if card is None:
            return

        logger.debug(
            "card_marked_hard",
            deck_id=session.deck_id.value,
            card_id=card.id.value,
            index=session.index,
        )

    def progress(self, session: PracticeSession) -> Progress:
        """
        Calculate the session's progress without changing it.

        Returns:
            Progress snapshot for the current cursor position
        """
        total = session.total
        current = max(1, min(session.index + 1, total)) if total > 0 else 0
        percent = round(current * 100.0 / total) if total > 0 else 0
        return Progress(
            current=current,
            total=total,
            viewed=session.viewed,
            correct=session.correct,
            hard=session.hard,
            percent=percent,
        )

    def record_and_persist(
        self, session: PracticeSession, session_service: "PracticeSessionService"
    ) -> DailyStatsRecord | None:
        """
        Add the session's totals to today's statistics for its deck.

        Args:
            session: The finished (or abandoned) session
            session_service: Service that owns statistics recording

        Returns:
            Today's record after the addition, or None when nothing was viewed
        """
        if session.viewed <= 0:
            logger.warning("practice_session_not_recorded", deck_id=session.deck_id.value, viewed=0)
            return None

        elapsed = self.clock() - session.session_start
        duration_ms = max(0, int(elapsed.total_seconds() * 1000))

        return session_service.record_session(
            deck_id=session.deck_id,
            viewed=session.viewed,
            correct=session.correct,
            hard=session.hard,
            session_duration_ms=duration_ms,
            total_answer_delay_ms=session.total_answer_delay_ms,
            known_card_ids_delta=session.known_card_ids_delta,
        )
