"""Learning module domain layer."""

from .entities import Deck, Flashcard, PracticeSession
from .events import (
    DeckModificationType,
    DeckModifiedEvent,
    ProgressChangedEvent,
    ProgressChangeType,
)
from .value_objects import FilterOption, PracticeDirection, PracticeOrder

__all__ = [
    "Deck",
    "DeckModificationType",
    "DeckModifiedEvent",
    "FilterOption",
    "Flashcard",
    "PracticeDirection",
    "PracticeOrder",
    "PracticeSession",
    "ProgressChangeType",
    "ProgressChangedEvent",
]
