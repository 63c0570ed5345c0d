import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from starlette import status

from flashgen.application.identity.use_cases.authentication_use_case import (
    AuthenticationUseCase,
)
from flashgen.application.identity.use_cases.register_user_use_case import RegisterUserUseCase
from flashgen.config import Settings, get_settings
from flashgen.core import container
from flashgen.domain.common.exceptions import DomainError
from flashgen.exceptions import FlashgenError
from flashgen.infrastructure.common.di import inject_use_case
from flashgen.infrastructure.common.rate_limit import limiter
from flashgen.infrastructure.common.schemas import SuccessResponse
from flashgen.infrastructure.identity.dependencies import ACCESS_TOKEN_COOKIE
from flashgen.infrastructure.identity.schemas import (
    AuthData,
    AuthRequest,
    AuthResponse,
    RegisterData,
    RegisterRequest,
    RegisterResponse,
)
from flashgen.infrastructure.identity.services.token_service import AccessToken

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


def set_access_cookie(response: Response, token: AccessToken, settings: Settings) -> None:
    """Set the access token as an httpOnly cookie."""
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=token.access_token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        path="/",
        max_age=token.expires_in,
    )


@router.post("")
@limiter.limit("5/minute")  # type: ignore[misc]
async def authenticate(
    request: Request,
    response: Response,
    auth_data: AuthRequest,
    settings: Annotated[Settings, Depends(get_settings)],
    auth_use_case: AuthenticationUseCase = Depends(
        inject_use_case(container.authentication_use_case)
    ),
    register_use_case: RegisterUserUseCase = Depends(
        inject_use_case(container.register_user_use_case)
    ),
) -> AuthResponse:
    """
    Sign in or create an account, depending on `mode`.

    Returns the user ID and an access token, which is also set as a cookie.
    """
    try:
        if auth_data.mode == "register":
            user, token = register_use_case.register_user(auth_data.email, auth_data.password)
            message = "Registration successful"
        else:
            user, token = auth_use_case.sign_in(auth_data.email, auth_data.password)
            message = "Authentication successful"

        set_access_cookie(response, token, settings)
        return AuthResponse(
            data=AuthData(user_id=user.id.value, token=token.access_token),
            message=message,
        )
    except (FlashgenError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to authenticate: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("/register")
@limiter.limit("5/minute")  # type: ignore[misc]
async def register(
    request: Request,
    response: Response,
    register_data: RegisterRequest,
    settings: Annotated[Settings, Depends(get_settings)],
    use_case: RegisterUserUseCase = Depends(inject_use_case(container.register_user_use_case)),
) -> RegisterResponse:
    """
    Register a new user account.

    Accounts are usable right away, so no confirmation step is needed.
    """
    try:
        user, token = use_case.register_user(register_data.email, register_data.password)
        set_access_cookie(response, token, settings)
        return RegisterResponse(
            data=RegisterData(user_id=user.id.value, email=user.email),
            message="Registration successful",
        )
    except (FlashgenError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to register user: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("/logout")
async def logout(
    response: Response, settings: Annotated[Settings, Depends(get_settings)]
) -> SuccessResponse:
    """
    Log out by clearing the access token cookie.

    The token itself stays valid until it expires.
    """
    response.delete_cookie(
        key=ACCESS_TOKEN_COOKIE,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        path="/",
    )
    return SuccessResponse(success=True, message="Logout successful")
