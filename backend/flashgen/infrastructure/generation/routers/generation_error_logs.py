"""API routes for failed generation attempts."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from flashgen.application.common.pagination import DEFAULT_PAGE_SIZE, Pagination
from flashgen.application.generation.use_cases.generation_query_use_case import (
    GenerationQueryUseCase,
)
from flashgen.core import container
from flashgen.domain.common.exceptions import DomainError
from flashgen.exceptions import FlashgenError
from flashgen.infrastructure.common.di import inject_use_case
from flashgen.infrastructure.generation.schemas import (
    GenerationErrorLog,
    GenerationErrorLogsListResponse,
)
from flashgen.infrastructure.identity.dependencies import CurrentUser
from flashgen.infrastructure.learning.schemas import PaginationInfo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/generation-error-logs", tags=["generations"])


@router.get("", response_model=GenerationErrorLogsListResponse, status_code=status.HTTP_200_OK)
def list_generation_error_logs(
    current_user: CurrentUser,
    page: Annotated[int, Query(description="Page number, starting at 1")] = 1,
    limit: Annotated[int, Query(description="Page size, at most 50")] = DEFAULT_PAGE_SIZE,
    use_case: GenerationQueryUseCase = Depends(
        inject_use_case(container.generation_query_use_case)
    ),
) -> GenerationErrorLogsListResponse:
    """Get one page of the current user's failed generations, newest first."""
    try:
        result = use_case.list_error_logs(
            user_id=current_user.id.value, pagination=Pagination.clamped(page, limit)
        )
        return GenerationErrorLogsListResponse(
            data=[
                GenerationErrorLog(
                    id=log.id.value,
                    user_id=log.user_id.value,
                    error_code=log.error_code,
                    error_message=log.error_message,
                    model=log.model,
                    source_text_hash=log.source_text_hash.value,
                    source_text_length=log.source_text_length,
                    created_at=log.created_at,
                )
                for log in result.items
            ],
            pagination=PaginationInfo(
                page=result.page, limit=result.page_size, total=result.total
            ),
        )
    except (FlashgenError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to list generation error logs: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
