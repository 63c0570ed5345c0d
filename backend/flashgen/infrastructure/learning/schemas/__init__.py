"""Learning context schemas."""

from flashgen.infrastructure.learning.schemas.flashcard_schemas import (
    Flashcard,
    FlashcardCreate,
    FlashcardDeleteResponse,
    FlashcardsCreateRequest,
    FlashcardsCreateResponse,
    FlashcardsListResponse,
    FlashcardUpdateRequest,
    PaginationInfo,
)

__all__ = [
    "Flashcard",
    "FlashcardCreate",
    "FlashcardDeleteResponse",
    "FlashcardUpdateRequest",
    "FlashcardsCreateRequest",
    "FlashcardsCreateResponse",
    "FlashcardsListResponse",
    "PaginationInfo",
]
