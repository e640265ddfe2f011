"""Tests for the in-memory learning stores."""

from datetime import date

from deckpractice.application.learning.use_cases.dtos import SessionStats
from deckpractice.domain.common.value_objects import DeckId, FlashcardId, UserId
from deckpractice.domain.learning.entities.deck import Deck
from deckpractice.domain.learning.entities.flashcard import Flashcard
from deckpractice.domain.learning.events import DeckModificationType, DeckModifiedEvent
from deckpractice.domain.learning.value_objects import FilterOption
from deckpractice.infrastructure.common.event_bus import BlinkerEventBus
from deckpractice.infrastructure.learning.repositories import (
    InMemoryCardRepository,
    InMemoryDailyStatsRepository,
    InMemoryDeckRepository,
    InMemoryKnownCardRepository,
)


def _stats(deck_id: int = 1, viewed: int = 2, correct: int = 1, hard: int = 1) -> SessionStats:
    return SessionStats(
        deck_id=DeckId(deck_id),
        viewed=viewed,
        correct=correct,
        hard=hard,
        session_duration_ms=60_000,
        total_answer_delay_ms=3_000,
    )


class TestInMemoryDeckRepository:
    def test_save_publishes_created_then_updated(self) -> None:
        bus = BlinkerEventBus()
        events: list[DeckModifiedEvent] = []
        bus.subscribe(DeckModifiedEvent, events.append)
        repository = InMemoryDeckRepository(event_bus=bus)
        deck = Deck(id=DeckId(1), user_id=UserId(2), title="Verbs")

        repository.save(deck)
        repository.save(deck)

        assert [event.type for event in events] == [
            DeckModificationType.CREATED,
            DeckModificationType.UPDATED,
        ]
        assert repository.find_by_id(DeckId(1)) == deck

    def test_delete(self) -> None:
        repository = InMemoryDeckRepository()
        repository.save(Deck(id=DeckId(1), user_id=UserId(2), title="Verbs"))

        assert repository.delete(DeckId(1)) is True
        assert repository.delete(DeckId(1)) is False
        assert repository.find_by_id(DeckId(1)) is None

    def test_find_by_user(self) -> None:
        repository = InMemoryDeckRepository()
        repository.save(Deck(id=DeckId(2), user_id=UserId(1), title="B"))
        repository.save(Deck(id=DeckId(1), user_id=UserId(1), title="A"))
        repository.save(Deck(id=DeckId(3), user_id=UserId(9), title="C"))

        assert [deck.id for deck in repository.find_by_user(UserId(1))] == [DeckId(1), DeckId(2)]


class TestInMemoryCardRepository:
    def _repository(self) -> InMemoryCardRepository:
        repository = InMemoryCardRepository()
        repository.save_all(
            [
                Flashcard(id=FlashcardId(1), deck_id=DeckId(1), front="Cat", back="Gato"),
                Flashcard(
                    id=FlashcardId(2),
                    deck_id=DeckId(1),
                    front="Dog",
                    back="Perro",
                    example="The dog chased the cat",
                ),
                Flashcard(id=FlashcardId(3), deck_id=DeckId(1), front="Bird", back="Pajaro"),
                Flashcard(id=FlashcardId(4), deck_id=DeckId(2), front="Cat", back="Chat"),
            ]
        )
        return repository

    def test_find_by_deck_keeps_insertion_order(self) -> None:
        cards = self._repository().find_by_deck(DeckId(1))

        assert [card.id.value for card in cards] == [1, 2, 3]

    def test_count_with_search_is_case_insensitive(self) -> None:
        repository = self._repository()

        assert repository.count_with_filter(DeckId(1), "CAT", FilterOption.ALL, frozenset()) == 2

    def test_count_with_known_filters(self) -> None:
        repository = self._repository()
        known = frozenset({FlashcardId(1)})

        assert repository.count_with_filter(DeckId(1), "", FilterOption.KNOWN_ONLY, known) == 1
        assert repository.count_with_filter(DeckId(1), "", FilterOption.UNKNOWN_ONLY, known) == 2
        assert repository.count_with_filter(DeckId(1), "", FilterOption.ALL, known) == 3

    def test_card_write_publishes_deck_updated(self) -> None:
        bus = BlinkerEventBus()
        events: list[DeckModifiedEvent] = []
        bus.subscribe(DeckModifiedEvent, events.append)
        decks = InMemoryDeckRepository()
        decks.save(Deck(id=DeckId(1), user_id=UserId(5), title="Animals"))
        repository = InMemoryCardRepository(deck_repository=decks, event_bus=bus)

        repository.save(Flashcard(id=FlashcardId(1), deck_id=DeckId(1), front="a", back="b"))
        repository.delete(FlashcardId(1))

        assert len(events) == 2
        assert all(event.type is DeckModificationType.UPDATED for event in events)
        assert events[0].user_id == UserId(5)


class TestInMemoryKnownCardRepository:
    def test_mark_and_clear(self) -> None:
        repository = InMemoryKnownCardRepository()
        repository.mark_known(DeckId(1), FlashcardId(1))
        repository.mark_known(DeckId(1), FlashcardId(1))
        repository.mark_known(DeckId(1), FlashcardId(2))

        assert repository.is_known(DeckId(1), FlashcardId(1))
        assert repository.clear_known(DeckId(1)) == 2
        assert repository.list_known_ids(DeckId(1)) == frozenset()

    def test_mark_unknown(self) -> None:
        repository = InMemoryKnownCardRepository()
        repository.mark_known(DeckId(1), FlashcardId(1))

        repository.mark_unknown(DeckId(1), FlashcardId(1))
        repository.mark_unknown(DeckId(2), FlashcardId(1))

        assert not repository.is_known(DeckId(1), FlashcardId(1))

    def test_batch_has_entry_for_every_deck(self) -> None:
        repository = InMemoryKnownCardRepository()
        repository.mark_known(DeckId(1), FlashcardId(1))

        result = repository.list_known_ids_batch([DeckId(1), DeckId(2)])

        assert result == {DeckId(1): frozenset({FlashcardId(1)}), DeckId(2): frozenset()}


class TestInMemoryDailyStatsRepository:
    def test_upsert_accumulates_sessions(self) -> None:
        repository = InMemoryDailyStatsRepository()
        day = date(2024, 5, 1)

        repository.upsert(DeckId(1), day, _stats())
        record = repository.upsert(DeckId(1), day, _stats(viewed=3, correct=3, hard=0))

        assert record.sessions == 2
        assert record.viewed == 5
        assert record.correct == 4
        assert record.hard == 1
        assert record.total_duration_ms == 120_000
        assert record.total_answer_delay_ms == 6_000

    def test_find_daily_orders_by_day(self) -> None:
        repository = InMemoryDailyStatsRepository()
        repository.upsert(DeckId(1), date(2024, 5, 2), _stats())
        repository.upsert(DeckId(1), date(2024, 5, 1), _stats())

        days = [record.day for record in repository.find_daily(DeckId(1))]

        assert days == [date(2024, 5, 1), date(2024, 5, 2)]

    def test_aggregates(self) -> None:
        repository = InMemoryDailyStatsRepository()
        today = date(2024, 5, 2)
        repository.upsert(DeckId(1), date(2024, 5, 1), _stats(viewed=4, correct=3, hard=1))
        repository.upsert(DeckId(1), today, _stats(viewed=2, correct=1, hard=1))

        aggregates = repository.aggregates_for_decks([DeckId(1), DeckId(2)], today)

        assert aggregates[DeckId(1)].sessions_all == 2
        assert aggregates[DeckId(1)].viewed_all == 6
        assert aggregates[DeckId(1)].viewed_today == 2
        assert aggregates[DeckId(1)].correct_today == 1
        assert aggregates[DeckId(2)].sessions_all == 0
