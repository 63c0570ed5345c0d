"""Identity context schemas."""

from flashgen.infrastructure.identity.schemas.auth_schemas import (
    AuthData,
    AuthRequest,
    AuthResponse,
    RegisterData,
    RegisterRequest,
    RegisterResponse,
)

__all__ = [
    "AuthData",
    "AuthRequest",
    "AuthResponse",
    "RegisterData",
    "RegisterRequest",
    "RegisterResponse",
]
