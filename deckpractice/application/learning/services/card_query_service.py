"""Application service for cached card counts."""

from deckpractice.application.learning.protocols import (
    CardRepositoryProtocol,
    PaginationCountCacheProtocol,
)
from deckpractice.application.learning.services.stats_service import StatsService
from deckpractice.domain.common.value_objects import DeckId
from deckpractice.domain.learning.value_objects import FilterOption


class CardQueryService:
    """Read path for card counts used by paginated listings."""

    def __init__(
        self,
        card_repository: CardRepositoryProtocol,
        stats_service: StatsService,
        pagination_count_cache: PaginationCountCacheProtocol,
    ) -> None:
        self.card_repository = card_repository
        self.stats_service = stats_service
        self.pagination_count_cache = pagination_count_cache

    def count_cards_with_filter(
        self,
        deck_id: int,
        search_text: str | None = None,
        filter_option: FilterOption = FilterOption.ALL,
    ) -> int:
        """
        Count a deck's cards matching a search and known-status filter.

        Results are served from the pagination count cache; the query only
        runs on a miss.

        Args:
            deck_id: ID of the deck
            search_text: Optional search text; blank means no search
            filter_option: Known-status filter

        Returns:
            Number of matching cards
        """
        deck_id_vo = DeckId(deck_id)
        normalized = (search_text or "").strip()

        def supplier() -> int:
            known_ids = (
                self.stats_service.get_known_card_ids(deck_id)
                if filter_option is not FilterOption.ALL
                else frozenset()
            )
            return self.card_repository.count_with_filter(
                deck_id_vo, normalized, filter_option, known_ids
            )

        return self.pagination_count_cache.get_count(
            deck_id_vo, normalized, filter_option, supplier
        )
