"""
Application layer.

The application layer orchestrates domain objects and defines the boundaries
of the practice engine. It contains the services that drive a practice run
and the ports (protocols) for everything the engine consumes.

This layer contains:
- Services: Session state machine, session preparation, statistics
- Use Cases: The presenter facade used by the presentation layer
- DTOs: Progress snapshots and session statistics
- Ports: Protocols for card, deck, known-card and stats stores
"""
