"""DTOs for practice statistics."""

from dataclasses import dataclass, replace
from datetime import date

from deckpractice.domain.common.exceptions import ValidationError
from deckpractice.domain.common.value_objects import DeckId, FlashcardId


@dataclass(frozen=True)
class SessionStats:
    """
    Totals of one finished practice run.

    Business Rules:
    - At least one card was viewed
    - Correct, hard, duration and answer delay are non-negative
    """

    deck_id: DeckId
    viewed: int
    correct: int
    hard: int
    session_duration_ms: int
    total_answer_delay_ms: int
    known_card_ids_delta: tuple[FlashcardId, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.viewed <= 0:
            raise ValidationError(
                f"Viewed count must be positive, got: {self.viewed}",
                field="viewed",
                value=self.viewed,
            )
        for name in ("correct", "hard", "session_duration_ms", "total_answer_delay_ms"):
            value = getattr(self, name)
            if value < 0:
                raise ValidationError(
                    f"{name} cannot be negative, got: {value}", field=name, value=value
                )


@dataclass(frozen=True)
class DailyStatsRecord:
    """Accumulated practice totals of one deck on one day."""

    day: date
    sessions: int = 0
    viewed: int = 0
    correct: int = 0
    hard: int = 0
    total_duration_ms: int = 0
    total_answer_delay_ms: int = 0

    def add_session(self, stats: SessionStats) -> "DailyStatsRecord":
        """Return a copy with one more session's totals added."""
        return replace(
            self,
            sessions=self.sessions + 1,
            viewed=self.viewed + stats.viewed,
            correct=self.correct + stats.correct,
            hard=self.hard + stats.hard,
            total_duration_ms=self.total_duration_ms + stats.session_duration_ms,
            total_answer_delay_ms=self.total_answer_delay_ms + stats.total_answer_delay_ms,
        )


@dataclass(frozen=True)
class DeckAggregate:
    """All-time and today's totals for a deck."""

    sessions_all: int = 0
    viewed_all: int = 0
    correct_all: int = 0
    hard_all: int = 0
    sessions_today: int = 0
    viewed_today: int = 0
    correct_today: int = 0
    hard_today: int = 0
