"""Tests for PaginationCountCache."""

from datetime import UTC, datetime, timedelta

import pytest

from deckpractice.domain.common.value_objects import DeckId, FlashcardId, UserId
from deckpractice.domain.learning.events import (
    DeckModificationType,
    DeckModifiedEvent,
    ProgressChangedEvent,
)
from deckpractice.domain.learning.value_objects import FilterOption
from deckpractice.infrastructure.common.event_bus import BlinkerEventBus
from deckpractice.infrastructure.learning.caches import PaginationCountCache


class CountingSupplier:
    def __init__(self, value: int = 5) -> None:
        self.value = value
        self.calls = 0

    def __call__(self) -> int:
        self.calls += 1
        return self.value


class TestPaginationCountCache:
    @pytest.fixture
    def now(self) -> list[datetime]:
        return [datetime(2024, 5, 1, tzinfo=UTC)]

    @pytest.fixture
    def bus(self) -> BlinkerEventBus:
        return BlinkerEventBus()

    @pytest.fixture
    def cache(self, bus: BlinkerEventBus, now: list[datetime]) -> PaginationCountCache:
        return PaginationCountCache(event_bus=bus, ttl_seconds=30, clock=lambda: now[0])

    def test_identical_calls_within_ttl_hit(self, cache: PaginationCountCache) -> None:
        supplier = CountingSupplier()

        first = cache.get_count(DeckId(1), "cat", FilterOption.ALL, supplier)
        second = cache.get_count(DeckId(1), "cat", FilterOption.ALL, supplier)

        assert first == second == 5
        assert supplier.calls == 1

    def test_blank_and_missing_search_share_a_key(self, cache: PaginationCountCache) -> None:
        supplier = CountingSupplier()

        cache.get_count(DeckId(1), None, FilterOption.ALL, supplier)
        cache.get_count(DeckId(1), "   ", FilterOption.ALL, supplier)
        cache.get_count(DeckId(1), "", FilterOption.ALL, supplier)

        assert supplier.calls == 1

    def test_search_text_is_stripped(self, cache: PaginationCountCache) -> None:
        supplier = CountingSupplier()

        cache.get_count(DeckId(1), " cat ", FilterOption.ALL, supplier)
        cache.get_count(DeckId(1), "cat", FilterOption.ALL, supplier)

        assert supplier.calls == 1

    def test_filters_are_separate_keys(self, cache: PaginationCountCache) -> None:
        supplier = CountingSupplier()

        cache.get_count(DeckId(1), None, FilterOption.ALL, supplier)
        cache.get_count(DeckId(1), None, FilterOption.KNOWN_ONLY, supplier)

        assert supplier.calls == 2

    def test_expired_entry_is_recomputed(
        self, cache: PaginationCountCache, now: list[datetime]
    ) -> None:
        supplier = CountingSupplier()
        cache.get_count(DeckId(1), None, FilterOption.ALL, supplier)

        now[0] += timedelta(seconds=30)
        cache.get_count(DeckId(1), None, FilterOption.ALL, supplier)

        assert supplier.calls == 2

    def test_supplier_failure_is_not_cached(self, cache: PaginationCountCache) -> None:
        def failing() -> int:
            raise RuntimeError("count query failed")

        with pytest.raises(RuntimeError, match="count query failed"):
            cache.get_count(DeckId(1), None, FilterOption.ALL, failing)

        assert not cache.contains(DeckId(1), None, FilterOption.ALL)
        assert cache.get_count(DeckId(1), None, FilterOption.ALL, CountingSupplier(3)) == 3

    def test_progress_event_evicts_every_entry_of_the_deck(
        self, cache: PaginationCountCache, bus: BlinkerEventBus
    ) -> None:
        supplier = CountingSupplier()
        for search in (None, "cat", "dog"):
            for filter_option in FilterOption:
                cache.get_count(DeckId(1), search, filter_option, supplier)
        cache.get_count(DeckId(2), None, FilterOption.ALL, supplier)

        bus.publish(ProgressChangedEvent(deck_id=DeckId(1), card_id=FlashcardId(4)))

        assert cache.entries_for(DeckId(1)) == 0
        assert cache.entries_for(DeckId(2)) == 1

    def test_event_for_another_deck_during_a_miss_keeps_the_result(
        self, cache: PaginationCountCache, bus: BlinkerEventBus
    ) -> None:
        calls = 0

        def count_while_deck_two_changes() -> int:
            nonlocal calls
            calls += 1
            bus.publish(ProgressChangedEvent(deck_id=DeckId(2)))
            return 4

        cache.get_count(DeckId(1), None, FilterOption.ALL, count_while_deck_two_changes)
        cache.get_count(DeckId(1), None, FilterOption.ALL, count_while_deck_two_changes)

        assert calls == 1

    def test_event_for_the_same_deck_during_a_miss_drops_the_result(
        self, cache: PaginationCountCache, bus: BlinkerEventBus
    ) -> None:
        def count_while_deck_one_changes() -> int:
            bus.publish(ProgressChangedEvent(deck_id=DeckId(1)))
            return 4

        assert cache.get_count(DeckId(1), None, FilterOption.ALL, count_while_deck_one_changes) == 4
        assert not cache.contains(DeckId(1), None, FilterOption.ALL)

    def test_deck_modified_event_evicts_the_deck(
        self, cache: PaginationCountCache, bus: BlinkerEventBus
    ) -> None:
        cache.get_count(DeckId(1), None, FilterOption.ALL, CountingSupplier())

        bus.publish(
            DeckModifiedEvent(
                user_id=UserId(1), deck_id=DeckId(1), type=DeckModificationType.DELETED
            )
        )

        assert not cache.contains(DeckId(1), None, FilterOption.ALL)

    def test_stats(self, cache: PaginationCountCache) -> None:
        supplier = CountingSupplier()
        cache.get_count(DeckId(1), None, FilterOption.ALL, supplier)
        cache.get_count(DeckId(1), None, FilterOption.ALL, supplier)
        cache.get_count(DeckId(1), None, FilterOption.ALL, supplier)

        stats = cache.stats()

        assert stats.hits == 2
        assert stats.misses == 1
        assert stats.size == 1
        assert stats.hit_rate == pytest.approx(2 / 3)

    def test_hit_rate_without_lookups(self, cache: PaginationCountCache) -> None:
        assert cache.stats().hit_rate == 0.0

    def test_max_size_bounds_entries(self, now: list[datetime]) -> None:
        cache = PaginationCountCache(max_size=2, clock=lambda: now[0])
        supplier = CountingSupplier()

        for deck_id in (1, 2, 3):
            cache.get_count(DeckId(deck_id), None, FilterOption.ALL, supplier)

        assert cache.stats().size == 2
        assert not cache.contains(DeckId(1), None, FilterOption.ALL)

    def test_clear(self, cache: PaginationCountCache) -> None:
        cache.get_count(DeckId(1), None, FilterOption.ALL, CountingSupplier())

        cache.clear()

        assert cache.stats().size == 0
