import pytest

from deckpractice.application.learning.use_cases.dtos import SessionStats
from deckpractice.domain.common.exceptions import ValidationError
from deckpractice.domain.common.value_objects import DeckId


class TestSessionStats:
    def test_requires_viewed_cards(self) -> None:
        with pytest.raises(ValidationError, match="Viewed count must be positive"):
            SessionStats(
                deck_id=DeckId(1),
                viewed=0,
                correct=0,
                hard=0,
                session_duration_ms=0,
                total_answer_delay_ms=0,
            )

    def test_rejects_negative_duration(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            SessionStats(
                deck_id=DeckId(1),
                viewed=1,
                correct=1,
                hard=0,
                session_duration_ms=-5,
                total_answer_delay_ms=0,
            )

        assert exc_info.value.field == "session_duration_ms"
