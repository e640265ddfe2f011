"""
Domain layer.

The domain layer contains the core business logic of the practice engine.
It has no dependencies on external frameworks or infrastructure.

This layer contains:
- Entities: Objects with identity and lifecycle (Flashcard, Deck, PracticeSession)
- Value Objects: Immutable objects defined by attributes (ids, enums)
- Domain Events: Notifications that progress or decks changed
"""
