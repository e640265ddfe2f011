"""
Infrastructure layer.

The infrastructure layer contains implementations of ports defined
in the application layer:

- Event bus (blinker signals)
- Caches for known cards and pagination counts
- In-memory stores for cards, decks, known cards and daily stats

This layer depends on domain and application layers,
but they do not depend on it.
"""
