"""FastAPI dependencies for identity and authentication."""

from typing import Annotated

from fastapi import Cookie, Depends
from fastapi.security import OAuth2PasswordBearer

from flashgen.core import container
from flashgen.database import DatabaseSession
from flashgen.domain.identity.entities.user import User
from flashgen.domain.identity.exceptions import InvalidCredentialsError
from flashgen.exceptions import CredentialsException

ACCESS_TOKEN_COOKIE = "access_token"  # noqa: S105

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth", auto_error=False)


async def get_current_user(
    db: DatabaseSession,
    bearer_token: Annotated[str | None, Depends(oauth2_scheme)] = None,
    access_token: Annotated[str | None, Cookie()] = None,
) -> User:
    """
    Get the current authenticated user.

    The token is taken from the Authorization header, falling back to the
    access_token cookie set at sign in.

    Raises:
        CredentialsException: If no token is sent, it is invalid or the user is gone
    """
    token = bearer_token or access_token
    if not token:
        raise CredentialsException

    container.db.override(db)
    try:
        use_case = container.authentication_use_case()
    finally:
        container.db.reset_override()

    try:
        return use_case.get_user_from_token(token)
    except InvalidCredentialsError:
        raise CredentialsException from None


CurrentUser = Annotated[User, Depends(get_current_user)]
