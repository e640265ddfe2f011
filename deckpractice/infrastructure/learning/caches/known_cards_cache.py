"""Cache of known card ids per deck."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta

import structlog

from deckpractice.application.common.clock import Clock, utc_now
from deckpractice.application.common.event_bus import EventBusProtocol
from deckpractice.application.learning.protocols import KnownCardRepositoryProtocol
from deckpractice.domain.common.value_objects import DeckId, FlashcardId
from deckpractice.domain.learning.events import ProgressChangedEvent
from deckpractice.infrastructure.common.concurrent_store import ConcurrentStore

logger = structlog.get_logger(__name__)

DEFAULT_TTL_SECONDS = 300


@dataclass(frozen=True)
class CachedKnownCards:
    card_ids: frozenset[FlashcardId]
    cached_at: datetime

    def is_valid(self, now: datetime, ttl: timedelta) -> bool:
        return now - self.cached_at < ttl


class KnownCardsCache:
    """
    Known card ids per deck, loaded lazily from the known-card store.

    Entries are evicted when a ProgressChangedEvent for their deck is
    published (either change type). The TTL is only a backstop for writes
    that bypass the event bus.
    """

    def __init__(
        self,
        known_card_repository: KnownCardRepositoryProtocol,
        event_bus: EventBusProtocol | None = None,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Clock = utc_now,
    ) -> None:
        self.known_card_repository = known_card_repository
        self.ttl = timedelta(seconds=ttl_seconds)
        self.clock = clock
        self._store: ConcurrentStore[DeckId, CachedKnownCards] = ConcurrentStore()

        if event_bus is not None:
            event_bus.subscribe(ProgressChangedEvent, self.on_progress_changed)

    def _is_fresh(self, entry: CachedKnownCards) -> bool:
        return entry.is_valid(self.clock(), self.ttl)

    def get_known_card_ids(self, deck_id: DeckId) -> frozenset[FlashcardId]:
        """
        Get the known card ids of a deck, loading them on a miss.

        Args:
            deck_id: The deck ID

        Returns:
            Immutable set of known card ids
        """

        def load(key: DeckId) -> CachedKnownCards:
            logger.debug("known_cards_cache_miss", deck_id=key.value)
            card_ids = frozenset(self.known_card_repository.list_known_ids(key))
            return CachedKnownCards(card_ids=card_ids, cached_at=self.clock())

        return self._store.get_or_compute(deck_id, load, self._is_fresh).card_ids

    def get_known_card_ids_batch(
        self, deck_ids: Iterable[DeckId]
    ) -> dict[DeckId, frozenset[FlashcardId]]:
        """
        Get known card ids for several decks.

        Cached decks are served from the cache; the rest are loaded from the
        store in a single batch call.
        """
        result: dict[DeckId, frozenset[FlashcardId]] = {}
        missing: list[DeckId] = []

        for deck_id in dict.fromkeys(deck_ids):
            entry = self._store.get(deck_id)
            if entry is not None and self._is_fresh(entry):
                result[deck_id] = entry.card_ids
            else:
                missing.append(deck_id)

        if missing:
            with self._store.guarded_put(missing) as put:
                loaded = self.known_card_repository.list_known_ids_batch(missing)
                now = self.clock()
                for deck_id in missing:
                    card_ids = frozenset(loaded.get(deck_id, frozenset()))
                    put(deck_id, CachedKnownCards(card_ids, now))
                    result[deck_id] = card_ids

        logger.debug(
            "known_cards_batch_loaded",
            cached=len(result) - len(missing),
            loaded=len(missing),
        )
        return result

    def invalidate(self, deck_id: DeckId) -> None:
        if self._store.remove(deck_id) is not None:
            logger.debug("known_cards_cache_invalidated", deck_id=deck_id.value)

    def clear(self) -> None:
        self._store.clear()

    def on_progress_changed(self, event: ProgressChangedEvent) -> None:
        """Evict the deck whose progress changed."""
        self.invalidate(event.deck_id)
