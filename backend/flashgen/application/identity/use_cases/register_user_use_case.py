"""Use case for user registration."""

import structlog

from flashgen.application.identity.protocols import (
    PasswordServiceProtocol,
    TokenServiceProtocol,
    UserRepositoryProtocol,
)
from flashgen.domain.identity.entities.user import User
from flashgen.domain.identity.exceptions import EmailAlreadyExistsError, RegistrationDisabledError
from flashgen.feature_flags import is_user_registrations_enabled
from flashgen.infrastructure.identity.services.token_service import AccessToken

logger = structlog.get_logger(__name__)


class RegisterUserUseCase:
    """Use case for user registration operations."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        password_service: PasswordServiceProtocol,
        token_service: TokenServiceProtocol,
    ) -> None:
        """Initialize use case with dependencies."""
        self.user_repository = user_repository
        self.password_service = password_service
        self.token_service = token_service

    def register_user(self, email: str, password: str) -> tuple[User, AccessToken]:
        """
        Register a new user account.

        Args:
            email: User's email address
            password: User's plain text password (will be hashed)

        Returns:
            Tuple of (created user, access token for immediate sign in)

        Raises:
            RegistrationDisabledError: If registration is disabled via feature flag
            EmailAlreadyExistsError: If email is already registered
        """
        if not is_user_registrations_enabled():
            raise RegistrationDisabledError

        if self.user_repository.find_by_email(email) is not None:
            raise EmailAlreadyExistsError(email)

        hashed_password = self.password_service.hash_password(password)

        user = User.create(email=email, hashed_password=hashed_password)
        user = self.user_repository.save(user)
        token = self.token_service.create_access_token(user.id.value)

        logger.info("user_registered", user_id=user.id.value)

        return user, token
