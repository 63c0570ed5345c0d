"""FastAPI dependencies shared by several routers."""

from typing import Annotated

from fastapi import Depends, HTTPException, status

from flashgen.config import Settings, get_settings


def require_ai_enabled(settings: Annotated[Settings, Depends(get_settings)]) -> None:
    """
    Reject the request with 410 Gone when no OpenRouter key is configured.

    Usage:
        @router.post("", dependencies=[Depends(require_ai_enabled)])
        async def my_endpoint(): ...

    Route-level dependencies run before the endpoint's own parameters, so
    the gateway is never built without a key.
    """
    if not settings.ai_enabled:
        raise HTTPException(
            status_code=status.HTTP_410_GONE,
            detail="AI features are not enabled on this server",
        )
