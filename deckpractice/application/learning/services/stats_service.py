"""Application service for known-card status and practice statistics."""

from collections.abc import Iterable

import structlog

from deckpractice.application.common.clock import Clock, utc_now
from deckpractice.application.common.event_bus import EventBusProtocol
from deckpractice.application.learning.protocols import (
    DailyStatsRepositoryProtocol,
    DeckRepositoryProtocol,
    KnownCardRepositoryProtocol,
    KnownCardsCacheProtocol,
)
from deckpractice.application.learning.use_cases.dtos.stats_dtos import (
    DailyStatsRecord,
    DeckAggregate,
    SessionStats,
)
from deckpractice.application.learning.use_cases.exceptions import DeckNotFoundError
from deckpractice.domain.common.value_objects import DeckId, FlashcardId
from deckpractice.domain.learning.events import ProgressChangedEvent, ProgressChangeType

logger = structlog.get_logger(__name__)
audit_logger = structlog.get_logger("deckpractice.audit")


class StatsService:
    """
    Write path for card progress and daily statistics.

    Every change to a card's known status goes through this service, which
    publishes a ProgressChangedEvent once the store has been updated. Caches
    listen for that event; this service never evicts them itself.
    """

    def __init__(
        self,
        known_card_repository: KnownCardRepositoryProtocol,
        daily_stats_repository: DailyStatsRepositoryProtocol,
        deck_repository: DeckRepositoryProtocol,
        known_cards_cache: KnownCardsCacheProtocol,
        event_bus: EventBusProtocol,
        clock: Clock = utc_now,
    ) -> None:
        self.known_card_repository = known_card_repository
        self.daily_stats_repository = daily_stats_repository
        self.deck_repository = deck_repository
        self.known_cards_cache = known_cards_cache
        self.event_bus = event_bus
        self.clock = clock

    def record_session(self, stats: SessionStats) -> DailyStatsRecord:
        """
        Add a finished session's totals to today's record for its deck.

        Args:
            stats: Validated totals of the session

        Returns:
            Today's record after the addition
        """
        today = self.clock().date()
        record = self.daily_stats_repository.upsert(stats.deck_id, today, stats)

        logger.info(
            "practice_session_recorded",
            deck_id=stats.deck_id.value,
            viewed=stats.viewed,
            correct=stats.correct,
            hard=stats.hard,
            duration_ms=stats.session_duration_ms,
            known_delta=len(stats.known_card_ids_delta),
        )
        return record

    def get_known_card_ids(self, deck_id: int) -> frozenset[FlashcardId]:
        """Get the known card ids of a deck through the known-cards cache."""
        return self.known_cards_cache.get_known_card_ids(DeckId(deck_id))

    def get_known_card_ids_batch(
        self, deck_ids: Iterable[int]
    ) -> dict[DeckId, frozenset[FlashcardId]]:
        """Get known card ids for several decks, loading only the uncached ones."""
        deck_id_vos = [DeckId(deck_id) for deck_id in deck_ids]
        if not deck_id_vos:
            return {}
        return self.known_cards_cache.get_known_card_ids_batch(deck_id_vos)

    def is_card_known(self, deck_id: int, card_id: int) -> bool:
        return FlashcardId(card_id) in self.get_known_card_ids(deck_id)

    def set_card_known(self, deck_id: int, card_id: int, known: bool) -> None:
        """
        Mark a card as known or unknown.

        Args:
            deck_id: ID of the deck containing the card
            card_id: ID of the card
            known: True to mark as known, False to mark as unknown
        """
        deck_id_vo = DeckId(deck_id)
        card_id_vo = FlashcardId(card_id)

        if known:
            self.known_card_repository.mark_known(deck_id_vo, card_id_vo)
        else:
            self.known_card_repository.mark_unknown(deck_id_vo, card_id_vo)

        self.event_bus.publish(
            ProgressChangedEvent(
                deck_id=deck_id_vo,
                change_type=ProgressChangeType.CARD_STATUS_CHANGED,
                card_id=card_id_vo,
            )
        )
        logger.info("card_status_changed", deck_id=deck_id, card_id=card_id, known=known)

    def toggle_card_known(self, deck_id: int, card_id: int) -> bool:
        """
        Flip a card's known status.

        Returns:
            The card's new status
        """
        currently_known = self.known_card_repository.is_known(DeckId(deck_id), FlashcardId(card_id))
        self.set_card_known(deck_id, card_id, not currently_known)
        return not currently_known

    def reset_deck_progress(self, deck_id: int) -> int:
        """
        Clear every known card of a deck.

        Args:
            deck_id: ID of the deck to reset

        Returns:
            Number of known cards cleared

        Raises:
            DeckNotFoundError: If the deck does not exist
        """
        deck_id_vo = DeckId(deck_id)
        deck = self.deck_repository.find_by_id(deck_id_vo)
        if deck is None:
            raise DeckNotFoundError(deck_id)

        cleared = self.known_card_repository.clear_known(deck_id_vo)

        self.event_bus.publish(
            ProgressChangedEvent(deck_id=deck_id_vo, change_type=ProgressChangeType.DECK_RESET)
        )

        audit_logger.warning(
            "deck_progress_reset",
            deck_id=deck_id,
            title=deck.title,
            user_id=deck.user_id.value,
            cleared_cards=cleared,
        )
        return cleared

    def get_deck_progress_percent(self, deck_id: int, deck_size: int) -> int:
        """Share of the deck's cards that are known, as a percentage in [0, 100]."""
        if deck_size <= 0:
            return 0
        known = len(self.get_known_card_ids(deck_id))
        percent = round(100.0 * known / deck_size)
        return max(0, min(100, percent))

    def get_daily_stats(self, deck_id: int) -> list[DailyStatsRecord]:
        return self.daily_stats_repository.find_daily(DeckId(deck_id))

    def get_deck_aggregates(self, deck_ids: Iterable[int]) -> dict[DeckId, DeckAggregate]:
        """Get all-time and today's totals for several decks."""
        deck_id_vos = [DeckId(deck_id) for deck_id in deck_ids]
        if not deck_id_vos:
            return {}
        return self.daily_stats_repository.aggregates_for_decks(deck_id_vos, self.clock().date())
