"""Common infrastructure schemas."""

from flashgen.infrastructure.common.schemas.response_wrappers import (
    AppSettingsResponse,
    ErrorResponse,
    SuccessResponse,
)

__all__ = [
    "AppSettingsResponse",
    "ErrorResponse",
    "SuccessResponse",
]
