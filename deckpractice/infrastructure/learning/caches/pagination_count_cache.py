"""Cache for pagination count queries."""

import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

import structlog

from deckpractice.application.common.clock import Clock, utc_now
from deckpractice.application.common.event_bus import EventBusProtocol
from deckpractice.domain.common.value_objects import DeckId
from deckpractice.domain.learning.events import DeckModifiedEvent, ProgressChangedEvent
from deckpractice.domain.learning.value_objects import FilterOption
from deckpractice.infrastructure.common.concurrent_store import ConcurrentStore

logger = structlog.get_logger(__name__)

DEFAULT_TTL_SECONDS = 30
DEFAULT_MAX_SIZE = 500


def normalize_search(search_text: str | None) -> str:
    """Blank and missing search text are the same key."""
    return (search_text or "").strip()


@dataclass(frozen=True)
class CountKey:
    deck_id: DeckId
    search_text: str
    filter_option: FilterOption


@dataclass(frozen=True)
class CachedCount:
    count: int
    cached_at: datetime

    def is_valid(self, now: datetime, ttl: timedelta) -> bool:
        return now - self.cached_at < ttl


@dataclass(frozen=True)
class CacheStats:
    """Counters for monitoring cache effectiveness."""

    hits: int
    misses: int
    size: int

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class PaginationCountCache:
    """
    TTL cache of card count results keyed by (deck, search text, filter).

    Any ProgressChangedEvent or DeckModifiedEvent evicts every entry of the
    event's deck, whatever its search text or filter: a status change moves
    KNOWN_ONLY and UNKNOWN_ONLY counts across all search variants, so
    nothing finer grained is safe. The TTL bounds staleness for writes that
    bypass the event bus.
    """

    def __init__(
        self,
        event_bus: EventBusProtocol | None = None,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_size: int = DEFAULT_MAX_SIZE,
        clock: Clock = utc_now,
    ) -> None:
        self.ttl = timedelta(seconds=ttl_seconds)
        self.clock = clock
        self._store: ConcurrentStore[CountKey, CachedCount] = ConcurrentStore(max_size=max_size)
        self._counter_lock = threading.Lock()
        self._hits = 0
        self._misses = 0

        if event_bus is not None:
            event_bus.subscribe(ProgressChangedEvent, self.on_progress_changed)
            event_bus.subscribe(DeckModifiedEvent, self.on_deck_modified)

    def get_count(
        self,
        deck_id: DeckId,
        search_text: str | None,
        filter_option: FilterOption,
        supplier: Callable[[], int],
    ) -> int:
        """
        Get a cached count or run the supplier on a miss.

        Args:
            deck_id: The deck ID
            search_text: Search text; None and blank are equivalent
            filter_option: Known-status filter
            supplier: Runs the real count query; its exceptions propagate
                and nothing is cached for the key

        Returns:
            Number of cards matching the criteria
        """
        key = CountKey(deck_id, normalize_search(search_text), filter_option)
        computed = False

        def load(_: CountKey) -> CachedCount:
            nonlocal computed
            computed = True
            return CachedCount(count=supplier(), cached_at=self.clock())

        entry = self._store.get_or_compute(
            key, load, lambda cached: cached.is_valid(self.clock(), self.ttl)
        )

        with self._counter_lock:
            if computed:
                self._misses += 1
            else:
                self._hits += 1

        logger.debug(
            "count_cache_miss" if computed else "count_cache_hit",
            deck_id=deck_id.value,
            filter=filter_option.value,
            search=key.search_text,
            count=entry.count,
        )
        return entry.count

    def invalidate(self, deck_id: DeckId) -> int:
        """
        Remove every entry of a deck.

        Returns:
            Number of entries removed
        """
        removed = self._store.remove_if(lambda key: key.deck_id == deck_id)
        if removed:
            logger.debug("count_cache_invalidated", deck_id=deck_id.value, removed=removed)
        return removed

    def clear(self) -> None:
        self._store.clear()

    def contains(self, deck_id: DeckId, search_text: str | None, filter_option: FilterOption) -> bool:
        """Whether a fresh entry exists for the key."""
        entry = self._store.get(CountKey(deck_id, normalize_search(search_text), filter_option))
        return entry is not None and entry.is_valid(self.clock(), self.ttl)

    def entries_for(self, deck_id: DeckId) -> int:
        return sum(1 for key in self._store.keys() if key.deck_id == deck_id)

    def stats(self) -> CacheStats:
        with self._counter_lock:
            return CacheStats(hits=self._hits, misses=self._misses, size=len(self._store))

    def on_progress_changed(self, event: ProgressChangedEvent) -> None:
        self.invalidate(event.deck_id)

    def on_deck_modified(self, event: DeckModifiedEvent) -> None:
        removed = self.invalidate(event.deck_id)
        logger.debug(
            "count_cache_deck_modified",
            deck_id=event.deck_id.value,
            modification=event.type.value,
            removed=removed,
        )
