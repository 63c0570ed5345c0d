"""API routes for flashcard management."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from flashgen.application.common.pagination import DEFAULT_PAGE_SIZE, Pagination
from flashgen.application.learning.use_cases.flashcard_use_case import FlashcardUseCase
from flashgen.core import container
from flashgen.domain.common.exceptions import DomainError
from flashgen.domain.learning.entities.flashcard import Flashcard as FlashcardEntity
from flashgen.exceptions import FlashgenError
from flashgen.infrastructure.common.di import inject_use_case
from flashgen.infrastructure.identity.dependencies import CurrentUser
from flashgen.infrastructure.learning.schemas import (
    Flashcard,
    FlashcardDeleteResponse,
    FlashcardsCreateRequest,
    FlashcardsCreateResponse,
    FlashcardsListResponse,
    FlashcardUpdateRequest,
    PaginationInfo,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/flashcards", tags=["flashcards"])

FlashcardUseCaseDep = Annotated[
    FlashcardUseCase, Depends(inject_use_case(container.flashcard_use_case))
]


def to_flashcard_schema(entity: FlashcardEntity) -> Flashcard:
    return Flashcard(
        id=entity.id.value,
        front=entity.front,
        back=entity.back,
        source=entity.source,
        generation_id=entity.generation_id.value if entity.generation_id else None,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )


@router.get("", response_model=FlashcardsListResponse, status_code=status.HTTP_200_OK)
def list_flashcards(
    current_user: CurrentUser,
    use_case: FlashcardUseCaseDep,
    page: Annotated[int, Query(description="Page number, starting at 1")] = 1,
    limit: Annotated[int, Query(description="Page size, at most 50")] = DEFAULT_PAGE_SIZE,
) -> FlashcardsListResponse:
    """
    Get one page of the current user's flashcards, newest first.

    Out of range page and limit values are pulled into range.
    """
    try:
        result = use_case.list_flashcards(
            user_id=current_user.id.value, pagination=Pagination.clamped(page, limit)
        )
        return FlashcardsListResponse(
            data=[to_flashcard_schema(flashcard) for flashcard in result.items],
            pagination=PaginationInfo(
                page=result.page, limit=result.page_size, total=result.total
            ),
        )
    except (FlashgenError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to list flashcards: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("", response_model=FlashcardsCreateResponse, status_code=status.HTTP_201_CREATED)
def create_flashcards(
    request: FlashcardsCreateRequest,
    current_user: CurrentUser,
    use_case: FlashcardUseCaseDep,
) -> FlashcardsCreateResponse:
    """
    Create up to 50 flashcards in one all-or-nothing call.

    AI flashcards must all point at the same generation, owned by the
    current user.
    """
    try:
        flashcards = use_case.create_flashcards(
            drafts=request.to_drafts(), user_id=current_user.id.value
        )
        return FlashcardsCreateResponse(
            flashcards=[to_flashcard_schema(flashcard) for flashcard in flashcards]
        )
    except (FlashgenError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to create flashcards: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get("/{flashcard_id}", response_model=Flashcard, status_code=status.HTTP_200_OK)
def get_flashcard(
    flashcard_id: int,
    current_user: CurrentUser,
    use_case: FlashcardUseCaseDep,
) -> Flashcard:
    """Get a single flashcard of the current user."""
    try:
        flashcard = use_case.get_flashcard(
            flashcard_id=flashcard_id, user_id=current_user.id.value
        )
        return to_flashcard_schema(flashcard)
    except (FlashgenError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to get flashcard {flashcard_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.put("/{flashcard_id}", response_model=Flashcard, status_code=status.HTTP_200_OK)
def update_flashcard(
    flashcard_id: int,
    request: FlashcardUpdateRequest,
    current_user: CurrentUser,
    use_case: FlashcardUseCaseDep,
) -> Flashcard:
    """
    Update a flashcard's text, source or generation link.

    Args:
        flashcard_id: ID of the flashcard to update
        request: Fields to change
        use_case: FlashcardUseCase injected via dependency container

    Returns:
        Updated flashcard
    """
    try:
        flashcard = use_case.update_flashcard(
            flashcard_id=flashcard_id,
            user_id=current_user.id.value,
            changes=request.to_changes(),
        )
        return to_flashcard_schema(flashcard)
    except (FlashgenError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to update flashcard {flashcard_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.delete(
    "/{flashcard_id}",
    response_model=FlashcardDeleteResponse,
    status_code=status.HTTP_200_OK,
)
def delete_flashcard(
    flashcard_id: int,
    current_user: CurrentUser,
    use_case: FlashcardUseCaseDep,
) -> FlashcardDeleteResponse:
    """Delete a flashcard of the current user."""
    try:
        use_case.delete_flashcard(flashcard_id=flashcard_id, user_id=current_user.id.value)
        return FlashcardDeleteResponse(
            success=True,
            message="Flashcard deleted successfully",
        )
    except (FlashgenError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to delete flashcard {flashcard_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
