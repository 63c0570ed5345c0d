"""Generation context schemas."""

from flashgen.infrastructure.generation.schemas.generation_schemas import (
    FlashcardProposal,
    GenerateFlashcardsRequest,
    GenerateFlashcardsResponse,
    Generation,
    GenerationDetail,
    GenerationErrorLog,
    GenerationErrorLogsListResponse,
    GenerationsListResponse,
)

__all__ = [
    "FlashcardProposal",
    "GenerateFlashcardsRequest",
    "GenerateFlashcardsResponse",
    "Generation",
    "GenerationDetail",
    "GenerationErrorLog",
    "GenerationErrorLogsListResponse",
    "GenerationsListResponse",
]
