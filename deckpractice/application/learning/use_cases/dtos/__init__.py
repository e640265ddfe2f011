"""DTOs for learning use cases."""

from deckpractice.application.learning.use_cases.dtos.practice_dtos import (
    Progress,
    SessionCompletionMetrics,
)
from deckpractice.application.learning.use_cases.dtos.stats_dtos import (
    DailyStatsRecord,
    DeckAggregate,
    SessionStats,
)

__all__ = [
    "DailyStatsRecord",
    "DeckAggregate",
    "Progress",
    "SessionCompletionMetrics",
    "SessionStats",
]
