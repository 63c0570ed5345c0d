"""Pydantic schemas for the generation API."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from flashgen.domain.learning.value_objects import FlashcardSource
from flashgen.infrastructure.learning.schemas import Flashcard, PaginationInfo

SOURCE_TEXT_MIN_LENGTH = 1000
SOURCE_TEXT_MAX_LENGTH = 10000


class GenerateFlashcardsRequest(BaseModel):
    """Schema for asking the model for flashcard proposals."""

    source_text: str = Field(..., description="Text to learn from, 1000-10000 characters")

    @field_validator("source_text")
    @classmethod
    def check_length(cls, value: str) -> str:
        if len(value) < SOURCE_TEXT_MIN_LENGTH:
            raise ValueError(
                f"Source text must be at least {SOURCE_TEXT_MIN_LENGTH} characters long"
            )
        if len(value) > SOURCE_TEXT_MAX_LENGTH:
            raise ValueError(f"Source text cannot exceed {SOURCE_TEXT_MAX_LENGTH} characters")
        return value


class FlashcardProposal(BaseModel):
    """Schema for one proposal awaiting review."""

    front: str
    back: str
    source: FlashcardSource = FlashcardSource.AI_FULL


class GenerateFlashcardsResponse(BaseModel):
    """Schema for the result of a generation."""

    generation_id: int
    generated_count: int
    flashcards_proposals: list[FlashcardProposal]


class Generation(BaseModel):
    """Schema for a stored generation."""

    id: int
    user_id: int
    model: str
    source_text_hash: str
    source_text_length: int
    generated_count: int
    generation_duration: int = Field(..., description="Duration in milliseconds")
    created_at: datetime | None = None
    updated_at: datetime | None = None


class GenerationDetail(Generation):
    """Schema for a generation with the flashcards saved from it."""

    flashcards: list[Flashcard] = Field(default_factory=list)


class GenerationsListResponse(BaseModel):
    data: list[Generation]
    pagination: PaginationInfo


class GenerationErrorLog(BaseModel):
    """Schema for a failed generation attempt."""

    id: int
    user_id: int
    error_code: str
    error_message: str
    model: str
    source_text_hash: str
    source_text_length: int
    created_at: datetime | None = None


class GenerationErrorLogsListResponse(BaseModel):
    data: list[GenerationErrorLog]
    pagination: PaginationInfo
