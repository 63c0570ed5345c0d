from typing import Annotated

from fastapi import APIRouter, Depends

from flashgen.config import Settings, get_settings
from flashgen.feature_flags import get_feature_flags
from flashgen.infrastructure.common.schemas import AppSettingsResponse

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("")
async def get_app_settings(
    settings: Annotated[Settings, Depends(get_settings)],
) -> AppSettingsResponse:
    """
    Get public application settings.

    Tells clients whether AI generation and sign up are available and
    whether review starts with every proposal accepted. This endpoint
    doesn't require authentication.
    """
    return AppSettingsResponse(
        feature_flags=get_feature_flags(),
        proposals_start_accepted=settings.PROPOSALS_START_ACCEPTED,
    )
