"""Pydantic schemas for the authentication API."""

from typing import Annotated, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 100


def _check_password(value: str) -> str:
    if len(value) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    if len(value) > PASSWORD_MAX_LENGTH:
        raise ValueError(f"Password cannot exceed {PASSWORD_MAX_LENGTH} characters")
    return value


Password = Annotated[str, AfterValidator(_check_password)]


class RegisterRequest(BaseModel):
    """Schema for creating an account."""

    email: EmailStr = Field(..., description="Email address used to sign in")
    password: Password = Field(..., description="Plain text password, 6-100 characters")


class AuthRequest(RegisterRequest):
    """Schema for signing in or signing up through one endpoint."""

    mode: Literal["login", "register"] = Field(..., description="Sign in or create an account")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuthData(CamelModel):
    user_id: int
    token: str


class AuthResponse(BaseModel):
    """Schema for a successful sign in."""

    success: bool = True
    data: AuthData
    message: str


class RegisterData(CamelModel):
    user_id: int
    email: str
    needs_confirmation: bool = False


class RegisterResponse(BaseModel):
    """Schema for a successful registration."""

    success: bool = True
    data: RegisterData
    message: str
