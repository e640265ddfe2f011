"""Protocol for the per-deck, per-day statistics store."""

from collections.abc import Iterable
from datetime import date
from typing import Protocol

from deckpractice.application.learning.use_cases.dtos.stats_dtos import (
    DailyStatsRecord,
    DeckAggregate,
    SessionStats,
)
from deckpractice.domain.common.value_objects import DeckId


class DailyStatsRepositoryProtocol(Protocol):
    """Protocol for daily statistics accumulation."""

    def upsert(self, deck_id: DeckId, day: date, stats: SessionStats) -> DailyStatsRecord:
        """
        Add one session's totals to the deck's record for a day.

        Creates the record when the day has none yet.

        Returns:
            The day's record after the addition
        """
        ...

    def find_daily(self, deck_id: DeckId) -> list[DailyStatsRecord]:
        """Get the deck's daily records ordered by date ascending."""
        ...

    def aggregates_for_decks(
        self, deck_ids: Iterable[DeckId], today: date
    ) -> dict[DeckId, DeckAggregate]:
        """
        Sum all-time and today's totals for several decks.

        Returns:
            Mapping with an entry for every requested deck
        """
        ...
