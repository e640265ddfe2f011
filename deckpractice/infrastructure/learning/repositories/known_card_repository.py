"""In-memory known-card store."""

import threading
from collections.abc import Iterable

from deckpractice.domain.common.value_objects import DeckId, FlashcardId


class InMemoryKnownCardRepository:
    """Known card ids per deck, kept in process memory."""

    def __init__(self) -> None:
        self._known: dict[DeckId, set[FlashcardId]] = {}
        self._lock = threading.Lock()

    def mark_known(self, deck_id: DeckId, card_id: FlashcardId) -> None:
        with self._lock:
            self._known.setdefault(deck_id, set()).add(card_id)

    def mark_unknown(self, deck_id: DeckId, card_id: FlashcardId) -> None:
        with self._lock:
            known = self._known.get(deck_id)
            if known is not None:
                known.discard(card_id)

    def is_known(self, deck_id: DeckId, card_id: FlashcardId) -> bool:
        with self._lock:
            return card_id in self._known.get(deck_id, ())

    def clear_known(self, deck_id: DeckId) -> int:
        with self._lock:
            return len(self._known.pop(deck_id, ()))

    def list_known_ids(self, deck_id: DeckId) -> frozenset[FlashcardId]:
        with self._lock:
            return frozenset(self._known.get(deck_id, ()))

    def list_known_ids_batch(
        self, deck_ids: Iterable[DeckId]
    ) -> dict[DeckId, frozenset[FlashcardId]]:
        with self._lock:
            return {deck_id: frozenset(self._known.get(deck_id, ())) for deck_id in deck_ids}
