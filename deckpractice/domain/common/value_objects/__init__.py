"""Common value objects shared across all domain modules."""

from .ids import DeckId, FlashcardId, UserId

__all__ = [
    "DeckId",
    "FlashcardId",
    "UserId",
]
