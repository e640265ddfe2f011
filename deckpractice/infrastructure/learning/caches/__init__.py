"""Event-driven read caches for the learning module."""

from .known_cards_cache import CachedKnownCards, KnownCardsCache
from .pagination_count_cache import CachedCount, CacheStats, CountKey, PaginationCountCache

__all__ = [
    "CacheStats",
    "CachedCount",
    "CachedKnownCards",
    "CountKey",
    "KnownCardsCache",
    "PaginationCountCache",
]
