"""API routes for AI flashcard generation."""

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from flashgen.application.common.pagination import DEFAULT_PAGE_SIZE, Pagination
from flashgen.application.generation.use_cases.generation_query_use_case import (
    GenerationQueryUseCase,
)
from flashgen.application.generation.use_cases.generation_use_case import GenerationUseCase
from flashgen.config import Settings, get_settings
from flashgen.core import container
from flashgen.dependencies import require_ai_enabled
from flashgen.domain.common.exceptions import DomainError
from flashgen.domain.generation.entities import Generation as GenerationEntity
from flashgen.exceptions import FlashgenError, GenerationTimeoutError
from flashgen.infrastructure.common.di import inject_use_case
from flashgen.infrastructure.common.schemas import ErrorResponse
from flashgen.infrastructure.generation.schemas import (
    FlashcardProposal,
    GenerateFlashcardsRequest,
    GenerateFlashcardsResponse,
    Generation,
    GenerationDetail,
    GenerationsListResponse,
)
from flashgen.infrastructure.identity.dependencies import CurrentUser
from flashgen.infrastructure.learning.routers.flashcards import to_flashcard_schema
from flashgen.infrastructure.learning.schemas import PaginationInfo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/generations", tags=["generations"])


def to_generation_schema(entity: GenerationEntity) -> Generation:
    return Generation(
        id=entity.id.value,
        user_id=entity.user_id.value,
        model=entity.model,
        source_text_hash=entity.source_text_hash.value,
        source_text_length=entity.source_text_length,
        generated_count=entity.generated_count,
        generation_duration=entity.generation_duration,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )


@router.post(
    "",
    response_model=GenerateFlashcardsResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_ai_enabled)],
    responses={
        status.HTTP_410_GONE: {"model": ErrorResponse},
        status.HTTP_504_GATEWAY_TIMEOUT: {"model": ErrorResponse},
    },
)
async def generate_flashcards(
    request: GenerateFlashcardsRequest,
    current_user: CurrentUser,
    settings: Annotated[Settings, Depends(get_settings)],
    use_case: GenerationUseCase = Depends(inject_use_case(container.generation_use_case)),
) -> GenerateFlashcardsResponse:
    """
    Ask the model for flashcard proposals from a text.

    The proposals are not stored; the client reviews them and saves the
    chosen ones through POST /flashcards. Answers 504 when generation takes
    longer than GENERATION_TIMEOUT_SECONDS.
    """
    try:
        outcome = await asyncio.wait_for(
            use_case.generate_flashcards(request.source_text, current_user.id.value),
            timeout=settings.GENERATION_TIMEOUT_SECONDS,
        )
        return GenerateFlashcardsResponse(
            generation_id=outcome.generation_id,
            generated_count=outcome.generated_count,
            flashcards_proposals=[
                FlashcardProposal(front=p.front, back=p.back, source=p.source)
                for p in outcome.proposals
            ],
        )
    except TimeoutError as e:
        logger.warning(
            f"Generation for user {current_user.id.value} timed out "
            f"after {settings.GENERATION_TIMEOUT_SECONDS}s"
        )
        raise GenerationTimeoutError(settings.GENERATION_TIMEOUT_SECONDS) from e
    except (FlashgenError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to generate flashcards: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get("", response_model=GenerationsListResponse, status_code=status.HTTP_200_OK)
def list_generations(
    current_user: CurrentUser,
    page: Annotated[int, Query(description="Page number, starting at 1")] = 1,
    limit: Annotated[int, Query(description="Page size, at most 50")] = DEFAULT_PAGE_SIZE,
    use_case: GenerationQueryUseCase = Depends(
        inject_use_case(container.generation_query_use_case)
    ),
) -> GenerationsListResponse:
    """Get one page of the current user's generations, newest first."""
    try:
        result = use_case.list_generations(
            user_id=current_user.id.value, pagination=Pagination.clamped(page, limit)
        )
        return GenerationsListResponse(
            data=[to_generation_schema(generation) for generation in result.items],
            pagination=PaginationInfo(
                page=result.page, limit=result.page_size, total=result.total
            ),
        )
    except (FlashgenError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to list generations: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get("/{generation_id}", response_model=GenerationDetail, status_code=status.HTTP_200_OK)
def get_generation(
    generation_id: int,
    current_user: CurrentUser,
    use_case: GenerationQueryUseCase = Depends(
        inject_use_case(container.generation_query_use_case)
    ),
) -> GenerationDetail:
    """Get a generation with the flashcards that were saved from it."""
    try:
        detail = use_case.get_generation(generation_id, current_user.id.value)
        return GenerationDetail(
            **to_generation_schema(detail.generation).model_dump(),
            flashcards=[to_flashcard_schema(flashcard) for flashcard in detail.flashcards],
        )
    except (FlashgenError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to get generation {generation_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
