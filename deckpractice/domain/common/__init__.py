"""
Domain common module.

Contains base classes for domain modeling:
- Entity: Objects with identity and lifecycle
- DomainEvent: Notifications of significant domain occurrences
"""

from .domain_event import DomainEvent
from .entity import Entity, EntityId
from .exceptions import (
    DomainError,
    EntityNotFoundError,
    InvariantViolationError,
    ValidationError,
)

__all__ = [
    "DomainError",
    "DomainEvent",
    "Entity",
    "EntityId",
    "EntityNotFoundError",
    "InvariantViolationError",
    "ValidationError",
]
