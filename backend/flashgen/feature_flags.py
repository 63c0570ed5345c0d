"""Feature toggles derived from configuration."""

from typing import Literal

from pydantic import BaseModel, Field

from flashgen.config import get_settings


class FeatureFlags(BaseModel):
    """All feature flags exposed to clients."""

    ai: bool = Field(..., description="Whether AI flashcard generation is available")
    user_registrations: bool = Field(..., description="Whether new accounts can be created")


FeatureFlagKey = Literal["ai", "user_registrations"]


def get_feature_flags() -> FeatureFlags:
    """Build the flags from the current settings."""
    settings = get_settings()

    return FeatureFlags(
        ai=settings.ai_enabled,
        user_registrations=settings.ALLOW_USER_REGISTRATIONS,
    )


def get_feature_flag(key: FeatureFlagKey) -> bool:
    return getattr(get_feature_flags(), key)


def is_user_registrations_enabled() -> bool:
    return get_feature_flag("user_registrations")
