"""DTOs for practice session use cases."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Progress:
    """
    Snapshot of a practice session's progress.

    Attributes:
        current: 1-based position of the card on screen, clamped to [1, total]
            (0 for an empty session)
        total: Number of cards in the session queue
        viewed: Number of outcomes recorded so far
        correct: Number of cards marked known
        hard: Number of cards marked hard
        percent: Position as a rounded percentage of total
    """

    current: int
    total: int
    viewed: int
    correct: int
    hard: int
    percent: int


@dataclass(frozen=True)
class SessionCompletionMetrics:
    """Summary shown when a session finishes."""

    total_cards: int
    session_minutes: int
    avg_seconds: int
