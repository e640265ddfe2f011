"""Protocols for the read caches used by the learning services."""

from collections.abc import Callable, Iterable
from typing import Protocol

from deckpractice.domain.common.value_objects import DeckId, FlashcardId
from deckpractice.domain.learning.value_objects import FilterOption


class KnownCardsCacheProtocol(Protocol):
    """Cached view of the known-card store."""

    def get_known_card_ids(self, deck_id: DeckId) -> frozenset[FlashcardId]: ...

    def get_known_card_ids_batch(
        self, deck_ids: Iterable[DeckId]
    ) -> dict[DeckId, frozenset[FlashcardId]]: ...

    def invalidate(self, deck_id: DeckId) -> None: ...


class PaginationCountCacheProtocol(Protocol):
    """Cached results of card count queries."""

    def get_count(
        self,
        deck_id: DeckId,
        search_text: str | None,
        filter_option: FilterOption,
        supplier: Callable[[], int],
    ) -> int: ...

    def invalidate(self, deck_id: DeckId) -> None: ...
