"""
Base class for Entities.

Entities are objects that have a distinct identity that runs through time
and different states. Two entities are equal if they have the same identity,
regardless of their attributes.

Example:
    @dataclass
    class Deck(Entity[DeckId]):
        id: DeckId
        user_id: UserId
        title: str
"""

from abc import ABC
from dataclasses import dataclass
from typing import Generic, TypeVar

from .exceptions import ValidationError


@dataclass(frozen=True)
class EntityId:
    """
    Base class for strongly-typed entity identifiers.

    Entity IDs are value objects that wrap a positive integer.
    They provide type safety to prevent mixing up IDs of different entities.

    Example:
        deck_id = DeckId(42)
        card_id = FlashcardId(42)
        # These are different types, preventing accidental mixing
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"{self.__class__.__name__} must be an integer",
                field=self.__class__.__name__,
                value=self.value,
            )
        if self.value <= 0:
            raise ValidationError(
                f"{self.__class__.__name__} must be positive, got: {self.value}",
                field=self.__class__.__name__,
                value=self.value,
            )

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def to_primitive(self) -> int:
        """Convert to primitive for serialization."""
        return self.value


IdType = TypeVar("IdType", bound=EntityId)


class Entity(ABC, Generic[IdType]):
    """
    Base class for Entities in the domain model.

    Entities are:
    - Defined by identity (not attributes)
    - Mutable (state can change over time)
    - Have lifecycle (created, modified, deleted)

    Subclasses must have an 'id' attribute of type IdType.
    """

    id: IdType

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id})"
