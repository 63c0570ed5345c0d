"""Common response wrapper schemas for API responses."""

from pydantic import BaseModel, Field

from flashgen.feature_flags import FeatureFlags


class SuccessResponse(BaseModel):
    """Generic success response wrapper."""

    success: bool
    message: str


class ErrorResponse(BaseModel):
    """Body of every error answer."""

    error: str
    details: object | None = None


class AppSettingsResponse(BaseModel):
    """Public application settings."""

    feature_flags: FeatureFlags
    proposals_start_accepted: bool = Field(
        default=False, description="Whether generated proposals open already accepted"
    )
