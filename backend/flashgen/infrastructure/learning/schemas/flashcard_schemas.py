"""Pydantic schemas for Flashcard API request/response validation."""

from datetime import datetime
from typing import Annotated, Self

from pydantic import AfterValidator, BaseModel, Field, PositiveInt, model_validator

from flashgen.application.learning.use_cases.dtos import FlashcardChanges
from flashgen.domain.learning.entities.flashcard import (
    BACK_MAX_LENGTH,
    BACK_MIN_LENGTH,
    FRONT_MAX_LENGTH,
    FRONT_MIN_LENGTH,
)
from flashgen.domain.learning.services import FlashcardBatchPolicy, FlashcardDraft
from flashgen.domain.learning.value_objects import FlashcardSource


def _check_front(value: str) -> str:
    if len(value) < FRONT_MIN_LENGTH:
        raise ValueError(f"Front text must be at least {FRONT_MIN_LENGTH} characters")
    if len(value) > FRONT_MAX_LENGTH:
        raise ValueError(f"Front text cannot exceed {FRONT_MAX_LENGTH} characters")
    return value


def _check_back(value: str) -> str:
    if len(value) < BACK_MIN_LENGTH:
        raise ValueError(f"Back text must be at least {BACK_MIN_LENGTH} characters")
    if len(value) > BACK_MAX_LENGTH:
        raise ValueError(f"Back text cannot exceed {BACK_MAX_LENGTH} characters")
    return value


FrontText = Annotated[str, AfterValidator(_check_front)]
BackText = Annotated[str, AfterValidator(_check_back)]


class FlashcardCreate(BaseModel):
    """Schema for one flashcard in a batch."""

    front: FrontText = Field(..., description="Question side, 3-200 characters")
    back: BackText = Field(..., description="Answer side, 3-500 characters")
    source: FlashcardSource = Field(..., description="Where the card came from")
    generation_id: PositiveInt | None = Field(
        None, description="Generation the card was proposed by, null for manual cards"
    )

    def to_draft(self) -> FlashcardDraft:
        return FlashcardDraft(
            front=self.front,
            back=self.back,
            source=self.source,
            generation_id=self.generation_id,
        )


class FlashcardsCreateRequest(BaseModel):
    """Schema for creating up to 50 flashcards at once."""

    flashcards: list[FlashcardCreate] = Field(..., description="Flashcards sharing one source")

    @model_validator(mode="after")
    def check_batch(self) -> Self:
        violation = FlashcardBatchPolicy.find_violation(self.to_drafts())
        if violation:
            raise ValueError(violation)
        return self

    def to_drafts(self) -> list[FlashcardDraft]:
        return [flashcard.to_draft() for flashcard in self.flashcards]


class FlashcardUpdateRequest(BaseModel):
    """Schema for a partial flashcard update; at least one field is required."""

    front: FrontText | None = Field(None, description="New question side")
    back: BackText | None = Field(None, description="New answer side")
    source: FlashcardSource | None = Field(None, description="New source tag")
    generation_id: PositiveInt | None = Field(
        None, description="New generation link; null removes the link"
    )

    @model_validator(mode="after")
    def check_not_empty(self) -> Self:
        if not self.to_changes():
            raise ValueError("At least one field must be provided")
        return self

    def to_changes(self) -> FlashcardChanges:
        """Fields the client actually sent; an explicit null only counts for generation_id."""
        changes = FlashcardChanges()
        if self.front is not None:
            changes["front"] = self.front
        if self.back is not None:
            changes["back"] = self.back
        if self.source is not None:
            changes["source"] = self.source
        if "generation_id" in self.model_fields_set:
            changes["generation_id"] = self.generation_id
        return changes


class Flashcard(BaseModel):
    """Schema for a stored flashcard."""

    id: int
    front: str
    back: str
    source: FlashcardSource
    generation_id: int | None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class FlashcardsCreateResponse(BaseModel):
    """Schema for the flashcards created by a batch."""

    flashcards: list[Flashcard] = Field(..., description="Created flashcards in request order")


class PaginationInfo(BaseModel):
    page: int
    limit: int
    total: int


class FlashcardsListResponse(BaseModel):
    """Schema for one page of flashcards."""

    data: list[Flashcard] = Field(..., description="Flashcards, newest first")
    pagination: PaginationInfo


class FlashcardDeleteResponse(BaseModel):
    """Schema for flashcard deletion response."""

    success: bool = Field(..., description="Whether the deletion was successful")
    message: str = Field(..., description="Response message")
