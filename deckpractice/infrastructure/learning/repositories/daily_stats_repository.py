"""In-memory store of per-deck daily practice statistics."""

import threading
from collections.abc import Iterable
from datetime import date

from deckpractice.application.learning.use_cases.dtos.stats_dtos import (
    DailyStatsRecord,
    DeckAggregate,
    SessionStats,
)
from deckpractice.domain.common.value_objects import DeckId


class InMemoryDailyStatsRepository:
    """
    Daily statistics keyed by (deck, day).

    upsert adds under a lock, so sessions finishing concurrently on the same
    deck and day are all counted.
    """

    def __init__(self) -> None:
        self._records: dict[tuple[DeckId, date], DailyStatsRecord] = {}
        self._lock = threading.Lock()

    def upsert(self, deck_id: DeckId, day: date, stats: SessionStats) -> DailyStatsRecord:
        key = (deck_id, day)
        with self._lock:
            current = self._records.get(key) or DailyStatsRecord(day=day)
            updated = current.add_session(stats)
            self._records[key] = updated
        return updated

    def find_daily(self, deck_id: DeckId) -> list[DailyStatsRecord]:
        with self._lock:
            records = [record for (owner, _), record in self._records.items() if owner == deck_id]
        return sorted(records, key=lambda record: record.day)

    def aggregates_for_decks(
        self, deck_ids: Iterable[DeckId], today: date
    ) -> dict[DeckId, DeckAggregate]:
        wanted = set(deck_ids)
        totals: dict[DeckId, dict[str, int]] = {deck_id: {} for deck_id in wanted}

        with self._lock:
            records = list(self._records.items())

        for (deck_id, day), record in records:
            if deck_id not in wanted:
                continue
            suffixes = ("all", "today") if day == today else ("all",)
            for suffix in suffixes:
                bucket = totals[deck_id]
                for name in ("sessions", "viewed", "correct", "hard"):
                    field_name = f"{name}_{suffix}"
                    bucket[field_name] = bucket.get(field_name, 0) + getattr(record, name)

        return {deck_id: DeckAggregate(**bucket) for deck_id, bucket in totals.items()}
