"""Ports consumed by the learning application services."""

from .card_repository import CardRepositoryProtocol
from .caches import KnownCardsCacheProtocol, PaginationCountCacheProtocol
from .daily_stats_repository import DailyStatsRepositoryProtocol
from .deck_repository import DeckRepositoryProtocol
from .known_card_repository import KnownCardRepositoryProtocol
from .practice_settings import PracticeSettingsProtocol

__all__ = [
    "CardRepositoryProtocol",
    "DailyStatsRepositoryProtocol",
    "DeckRepositoryProtocol",
    "KnownCardRepositoryProtocol",
    "KnownCardsCacheProtocol",
    "PaginationCountCacheProtocol",
    "PracticeSettingsProtocol",
]
