"""Custom exception hierarchy for the flashgen application.

Every error carries a kind, an HTTP-style status hint, a message and
optional details. The exception handlers in `flashgen.main` turn the
status hint into the response status.
"""

from enum import StrEnum

from fastapi import HTTPException
from starlette import status


class ErrorKind(StrEnum):
    """Discriminant of FlashgenError subclasses."""

    VALIDATION = "validation"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    UPSTREAM_GATEWAY = "upstream_gateway"
    TIMEOUT = "timeout"
    PERSISTENCE = "persistence"
    INTERNAL = "internal"


class GatewayErrorKind(StrEnum):
    """Why a call to the LLM gateway failed."""

    SCHEMA_REJECTED = "schema_rejected"
    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"
    INVALID_RESPONSE = "invalid_response"


class FlashgenError(Exception):
    """Base exception for all flashgen errors."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: object | None = None,
    ) -> None:
        """Initialize exception with message, status hint and optional details."""
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

    def to_response(self) -> dict[str, object]:
        """JSON body sent to API clients."""
        body: dict[str, object] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(FlashgenError):
    """Request data violates a rule."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, details: object | None = None) -> None:
        """Initialize with message and 400 status code."""
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST, details=details)


class AuthorizationError(FlashgenError):
    """Resource exists but belongs to another user."""

    kind = ErrorKind.AUTHORIZATION

    def __init__(self, message: str, details: object | None = None) -> None:
        """Initialize with message and 403 status code."""
        super().__init__(message, status_code=status.HTTP_403_FORBIDDEN, details=details)


class NotFoundError(FlashgenError):
    """Resource not found error."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=status.HTTP_404_NOT_FOUND)


class FlashcardNotFoundError(NotFoundError):
    """Flashcard not found error."""

    def __init__(self, flashcard_id: int) -> None:
        """Initialize with flashcard ID."""
        self.flashcard_id = flashcard_id
        super().__init__(f"Flashcard with ID {flashcard_id} not found")


class GenerationNotFoundError(NotFoundError):
    """Generation not found error."""

    def __init__(self, generation_id: int) -> None:
        """Initialize with generation ID."""
        self.generation_id = generation_id
        super().__init__(f"Generation with ID {generation_id} not found")


class GenerationAccessDeniedError(AuthorizationError):
    """Generation belongs to another user."""

    def __init__(self, generation_id: int) -> None:
        """Initialize with generation ID."""
        self.generation_id = generation_id
        super().__init__(f"Generation with ID {generation_id} does not belong to this user")


class UpstreamGatewayError(FlashgenError):
    """The LLM gateway failed or answered with something unusable."""

    kind = ErrorKind.UPSTREAM_GATEWAY

    def __init__(
        self,
        message: str,
        error_kind: GatewayErrorKind,
        *,
        upstream_status: int | None = None,
        body: str | None = None,
    ) -> None:
        """Initialize with the gateway failure kind and the upstream answer, if any."""
        self.error_kind = error_kind
        self.upstream_status = upstream_status
        self.body = body
        details: dict[str, object] = {"error_kind": error_kind.value}
        if upstream_status is not None:
            details["upstream_status"] = upstream_status
        super().__init__(
            message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, details=details
        )


class GatewayConfigurationError(FlashgenError):
    """The LLM gateway cannot be constructed from the given configuration."""


class GenerationTimeoutError(FlashgenError):
    """Generation took longer than the allotted time."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, timeout_seconds: float) -> None:
        """Initialize with the timeout that was exceeded."""
        self.timeout_seconds = timeout_seconds
        super().__init__(
            "Generation timed out",
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            details="The operation took too long to complete. "
            "Please try again with a shorter text.",
        )


class PersistenceError(FlashgenError):
    """The data store rejected a read or write."""

    kind = ErrorKind.PERSISTENCE

    def __init__(self, message: str, reason: str | None = None) -> None:
        """Initialize with message and the store's own explanation as detail."""
        self.reason = reason
        super().__init__(
            message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"reason": reason} if reason else None,
        )


CredentialsException = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)
