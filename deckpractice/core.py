from dependency_injector import containers, providers

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
from deckpractice.config import configure_logging, get_settings
from deckpractice.infrastructure.common.event_bus import BlinkerEventBus
from deckpractice.infrastructure.learning.caches import KnownCardsCache, PaginationCountCache
from deckpractice.infrastructure.learning.repositories import (
    InMemoryCardRepository,
    InMemoryDailyStatsRepository,
    InMemoryDeckRepository,
    InMemoryKnownCardRepository,
)


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    settings = providers.Singleton(get_settings)
    logging_setup = providers.Resource(configure_logging, settings=settings)

    # Shared for the life of the process: listeners subscribe once
    event_bus = providers.Singleton(BlinkerEventBus)

    # Stores (override with real adapters)
    deck_repository = providers.Singleton(InMemoryDeckRepository, event_bus=event_bus)
    card_repository = providers.Singleton(
        InMemoryCardRepository, deck_repository=deck_repository, event_bus=event_bus
    )
    known_card_repository = providers.Singleton(InMemoryKnownCardRepository)
    daily_stats_repository = providers.Singleton(InMemoryDailyStatsRepository)

    # Caches
    known_cards_cache = providers.Singleton(
        KnownCardsCache,
        known_card_repository=known_card_repository,
        event_bus=event_bus,
        ttl_seconds=settings.provided.KNOWN_CARDS_CACHE_TTL_SECONDS,
    )
    pagination_count_cache = providers.Singleton(
        PaginationCountCache,
        event_bus=event_bus,
        ttl_seconds=settings.provided.PAGINATION_COUNT_CACHE_TTL_SECONDS,
        max_size=settings.provided.PAGINATION_COUNT_CACHE_MAX_SIZE,
    )

    practice_settings = providers.Singleton(
        PracticeSettingsService,
        default_count=settings.provided.PRACTICE_DEFAULT_COUNT,
        default_random_order=settings.provided.PRACTICE_DEFAULT_RANDOM_ORDER,
        default_direction=settings.provided.PRACTICE_DEFAULT_DIRECTION,
    )

    # Learning module, application services
    stats_service = providers.Factory(
        StatsService,
        known_card_repository=known_card_repository,
        daily_stats_repository=daily_stats_repository,
        deck_repository=deck_repository,
        known_cards_cache=known_cards_cache,
        event_bus=event_bus,
    )
    card_query_service = providers.Factory(
        CardQueryService,
        card_repository=card_repository,
        stats_service=stats_service,
        pagination_count_cache=pagination_count_cache,
    )
    practice_session_service = providers.Factory(
        PracticeSessionService,
        deck_repository=deck_repository,
        card_repository=card_repository,
        stats_service=stats_service,
        practice_settings=practice_settings,
    )
    practice_session_manager = providers.Factory(
        PracticeSessionManager,
        stats_service=stats_service,
    )
    practice_presenter = providers.Factory(
        PracticePresenter,
        session_service=practice_session_service,
        session_manager=practice_session_manager,
    )


# Initialize container
container = Container()


def bootstrap(app_container: Container = container) -> Container:
    """
    Prepare a container for serving practice sessions.

    Configures logging, then builds both caches so their listeners are
    subscribed before the first write is published.
    """
    app_container.init_resources()
    app_container.known_cards_cache()
    app_container.pagination_count_cache()
    return app_container
