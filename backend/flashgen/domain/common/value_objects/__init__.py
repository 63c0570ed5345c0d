"""Common value objects shared across all domain modules."""

from .content_hash import ContentHash
from .ids import FlashcardId, GenerationErrorLogId, GenerationId, UserId

__all__ = [
    "ContentHash",
    "FlashcardId",
    "GenerationErrorLogId",
    "GenerationId",
    "UserId",
]
