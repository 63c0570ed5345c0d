"""
Base class for Entities.

Entities carry an identity that outlives their attribute changes. Two
entities are equal when their ids are equal.

Example:
    @dataclass
    class Generation(Entity[GenerationId]):
        id: GenerationId
        model: str
"""

from abc import ABC
from dataclasses import dataclass
from typing import Generic, Self, TypeVar

from .value_object import ValueObject


@dataclass(frozen=True)
class EntityId(ValueObject):
    """
    Base class for strongly-typed integer identifiers.

    Keeps ids of different entities from being mixed up:

        FlashcardId(7) != GenerationId(7)
    """

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"{self.__class__.__name__} must be non-negative")

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def generate(cls) -> Self:
        """Placeholder id; the database assigns the real one."""
        return cls(0)

    @property
    def is_persisted(self) -> bool:
        return self.value != 0

    def to_primitive(self) -> int:
        return self.value


IdType = TypeVar("IdType", bound=EntityId)


class Entity(ABC, Generic[IdType]):
    """
    Base class for entities in the domain model.

    Subclasses must declare an `id` attribute of type IdType.
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
