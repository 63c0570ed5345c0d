from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class UserId(EntityId):
    """Strongly-typed user identifier."""


@dataclass(frozen=True)
class FlashcardId(EntityId):
    """Strongly-typed flashcard identifier."""


@dataclass(frozen=True)
class GenerationId(EntityId):
    """Strongly-typed generation identifier."""


@dataclass(frozen=True)
class GenerationErrorLogId(EntityId):
    """Strongly-typed generation error log identifier."""
