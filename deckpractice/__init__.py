"""deckpractice: flashcard practice session engine with event-driven caches."""

__version__ = "0.1.0"
