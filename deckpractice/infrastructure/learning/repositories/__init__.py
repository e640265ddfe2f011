"""In-memory adapters for the learning module ports."""

from .card_repository import InMemoryCardRepository
from .daily_stats_repository import InMemoryDailyStatsRepository
from .deck_repository import InMemoryDeckRepository
from .known_card_repository import InMemoryKnownCardRepository

__all__ = [
    "InMemoryCardRepository",
    "InMemoryDailyStatsRepository",
    "InMemoryDeckRepository",
    "InMemoryKnownCardRepository",
]
