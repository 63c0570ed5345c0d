"""Token creation and verification service."""

from datetime import UTC, datetime, timedelta

import jwt
from jwt import InvalidTokenError
from pydantic import BaseModel

ALGORITHM = "HS256"


class AccessToken(BaseModel):
    """DTO for an issued access token."""

    access_token: str
    token_type: str
    expires_in: int


class TokenService:
    """Issues and verifies HS256 JWT access tokens."""

    def __init__(self, secret_key: str, expire_minutes: int) -> None:
        if not secret_key:
            raise ValueError("SECRET_KEY must be configured to issue tokens")
        self.secret_key = secret_key
        self.expire_minutes = expire_minutes

    def create_access_token(self, user_id: int) -> AccessToken:
        """Create an access token for a user."""
        expire = datetime.now(UTC) + timedelta(minutes=self.expire_minutes)
        to_encode = {"sub": str(user_id), "exp": expire, "type": "access"}
        return AccessToken(
            access_token=jwt.encode(to_encode, self.secret_key, algorithm=ALGORITHM),
            token_type="bearer",  # noqa: S106
            expires_in=self.expire_minutes * 60,
        )

    def verify_access_token(self, token: str) -> int | None:
        """Verify an access token and return the user_id if valid."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[ALGORITHM])
            if payload.get("type") != "access":
                return None
            user_id = payload.get("sub")
            if user_id is None:
                return None
            return int(user_id)
        except (InvalidTokenError, ValueError):
            return None
