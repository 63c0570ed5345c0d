from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from flashgen.application.generation.use_cases.generation_query_use_case import (
    GenerationQueryUseCase,
)
from flashgen.application.generation.use_cases.generation_use_case import GenerationUseCase
from flashgen.application.identity.use_cases.authentication_use_case import (
    AuthenticationUseCase,
)
from flashgen.application.identity.use_cases.register_user_use_case import RegisterUserUseCase
from flashgen.application.learning.use_cases.flashcard_use_case import FlashcardUseCase
from flashgen.config import get_settings
from flashgen.domain.learning.services import FlashcardBatchPolicy
from flashgen.infrastructure.ai.openrouter_client import OpenRouterClient, OpenRouterConfig
from flashgen.infrastructure.generation.repositories.generation_repository import (
    GenerationErrorLogRepository,
    GenerationRepository,
)
from flashgen.infrastructure.identity.repositories.user_repository import UserRepository
from flashgen.infrastructure.identity.services.password_service import PasswordService
from flashgen.infrastructure.identity.services.token_service import TokenService
from flashgen.infrastructure.learning.repositories.flashcard_repository import (
    FlashcardRepository,
)


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    settings = providers.Callable(get_settings)

    # Repositories
    user_repository = providers.Factory(UserRepository, db=db)
    flashcard_repository = providers.Factory(FlashcardRepository, db=db)
    generation_repository = providers.Factory(GenerationRepository, db=db)
    generation_error_log_repository = providers.Factory(GenerationErrorLogRepository, db=db)

    # Identity services
    password_service = providers.Singleton(
        PasswordService, pepper=settings.provided.PASSWORD_PEPPER
    )
    token_service = providers.Singleton(
        TokenService,
        secret_key=settings.provided.SECRET_KEY,
        expire_minutes=settings.provided.ACCESS_TOKEN_EXPIRE_MINUTES,
    )

    # LLM gateway
    openrouter_config = providers.Factory(OpenRouterConfig.from_settings, settings=settings)
    llm_gateway = providers.Factory(OpenRouterClient, config=openrouter_config)

    # Domain services (pure domain logic, no db)
    flashcard_batch_policy = providers.Factory(FlashcardBatchPolicy)

    # Learning module use cases
    flashcard_use_case = providers.Factory(
        FlashcardUseCase,
        flashcard_repository=flashcard_repository,
        generation_repository=generation_repository,
        batch_policy=flashcard_batch_policy,
    )

    # Generation module use cases
    generation_use_case = providers.Factory(
        GenerationUseCase,
        generation_repository=generation_repository,
        error_log_repository=generation_error_log_repository,
        llm_gateway=llm_gateway,
        model_name=settings.provided.OPENROUTER_DEFAULT_MODEL,
    )

    generation_query_use_case = providers.Factory(
        GenerationQueryUseCase,
        generation_repository=generation_repository,
        error_log_repository=generation_error_log_repository,
        flashcard_repository=flashcard_repository,
    )

    # Identity use cases
    authentication_use_case = providers.Factory(
        AuthenticationUseCase,
        user_repository=user_repository,
        password_service=password_service,
        token_service=token_service,
    )

    register_user_use_case = providers.Factory(
        RegisterUserUseCase,
        user_repository=user_repository,
        password_service=password_service,
        token_service=token_service,
    )


# Initialize container
container = Container()
