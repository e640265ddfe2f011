from .deck import Deck
from .flashcard import Flashcard
from .practice_session import PracticeSession

__all__ = ["Deck", "Flashcard", "PracticeSession"]
