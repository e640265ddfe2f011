"""Pytest configuration and fixtures."""

import random

import pytest

from deckpractice.application.learning.services.card_query_service import CardQueryService
from deckpractice.application.learning.services.practice_session_manager import (
    PracticeSessionManager,
)
from deckpractice.application.learning.services.practice_session_service import (
    PracticeSessionService,
)
from deckpractice.application.learning.services.practice_settings_service import (
    PracticeSettingsService,
)
from deckpractice.application.learning.services.stats_service import StatsService
from deckpractice.application.learning.use_cases.practice_presenter import PracticePresenter
from deckpractice.domain.common.value_objects import DeckId, FlashcardId, UserId
from deckpractice.domain.learning.entities.deck import Deck
from deckpractice.domain.learning.entities.flashcard import Flashcard
from deckpractice.infrastructure.common.event_bus import BlinkerEventBus
from deckpractice.infrastructure.learning.caches import KnownCardsCache, PaginationCountCache
from deckpractice.infrastructure.learning.repositories import (
    InMemoryCardRepository,
    InMemoryDailyStatsRepository,
    InMemoryDeckRepository,
    InMemoryKnownCardRepository,
)
from tests.fakes import FakeClock

DECK_ID = 1
USER_ID = 7


def make_card(card_id: int, deck_id: int = DECK_ID, front: str | None = None) -> Flashcard:
    return Flashcard(
        id=FlashcardId(card_id),
        deck_id=DeckId(deck_id),
        front=front or f"front {card_id}",
        back=f"back {card_id}",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def event_bus() -> BlinkerEventBus:
    return BlinkerEventBus()


@pytest.fixture
def deck_repository(event_bus: BlinkerEventBus) -> InMemoryDeckRepository:
    return InMemoryDeckRepository(event_bus=event_bus)


@pytest.fixture
def card_repository(
    deck_repository: InMemoryDeckRepository, event_bus: BlinkerEventBus
) -> InMemoryCardRepository:
    return InMemoryCardRepository(deck_repository=deck_repository, event_bus=event_bus)


@pytest.fixture
def known_card_repository() -> InMemoryKnownCardRepository:
    return InMemoryKnownCardRepository()


@pytest.fixture
def daily_stats_repository() -> InMemoryDailyStatsRepository:
    return InMemoryDailyStatsRepository()


@pytest.fixture
def deck(
    deck_repository: InMemoryDeckRepository, card_repository: InMemoryCardRepository
) -> Deck:
    """Deck 1 with cards A, B and C (ids 1, 2, 3) in that order."""
    deck = deck_repository.save(Deck(id=DeckId(DECK_ID), user_id=UserId(USER_ID), title="Spanish"))
    card_repository.save_all(
        [make_card(1, front="A"), make_card(2, front="B"), make_card(3, front="C")]
    )
    return deck


@pytest.fixture
def known_cards_cache(
    known_card_repository: InMemoryKnownCardRepository,
    event_bus: BlinkerEventBus,
    clock: FakeClock,
) -> KnownCardsCache:
    return KnownCardsCache(known_card_repository, event_bus=event_bus, clock=clock)


@pytest.fixture
def pagination_count_cache(event_bus: BlinkerEventBus, clock: FakeClock) -> PaginationCountCache:
    return PaginationCountCache(event_bus=event_bus, clock=clock)


@pytest.fixture
def practice_settings() -> PracticeSettingsService:
    return PracticeSettingsService(default_count=10, default_random_order=False)


@pytest.fixture
def stats_service(
    known_card_repository: InMemoryKnownCardRepository,
    daily_stats_repository: InMemoryDailyStatsRepository,
    deck_repository: InMemoryDeckRepository,
    known_cards_cache: KnownCardsCache,
    event_bus: BlinkerEventBus,
    clock: FakeClock,
) -> StatsService:
    return StatsService(
        known_card_repository=known_card_repository,
        daily_stats_repository=daily_stats_repository,
        deck_repository=deck_repository,
        known_cards_cache=known_cards_cache,
        event_bus=event_bus,
        clock=clock,
    )


@pytest.fixture
def card_query_service(
    card_repository: InMemoryCardRepository,
    stats_service: StatsService,
    pagination_count_cache: PaginationCountCache,
) -> CardQueryService:
    return CardQueryService(card_repository, stats_service, pagination_count_cache)


@pytest.fixture
def session_service(
    deck_repository: InMemoryDeckRepository,
    card_repository: InMemoryCardRepository,
    stats_service: StatsService,
    practice_settings: PracticeSettingsService,
    clock: FakeClock,
) -> PracticeSessionService:
    return PracticeSessionService(
        deck_repository=deck_repository,
        card_repository=card_repository,
        stats_service=stats_service,
        practice_settings=practice_settings,
        clock=clock,
        rng=random.Random(1234),
    )


@pytest.fixture
def session_manager(stats_service: StatsService, clock: FakeClock) -> PracticeSessionManager:
    return PracticeSessionManager(stats_service, clock=clock)


@pytest.fixture
def presenter(
    session_service: PracticeSessionService, session_manager: PracticeSessionManager
) -> PracticePresenter:
    return PracticePresenter(session_service, session_manager)
