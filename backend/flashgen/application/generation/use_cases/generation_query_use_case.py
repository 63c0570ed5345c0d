"""Use case for reading generation history."""

from flashgen.application.common.pagination import PaginatedResult, Pagination
from flashgen.application.generation.protocols import (
    GenerationErrorLogRepositoryProtocol,
    GenerationRepositoryProtocol,
)
from flashgen.application.generation.use_cases.dtos import GenerationDetail
from flashgen.application.learning.protocols.flashcard_repository import (
    FlashcardRepositoryProtocol,
)
from flashgen.domain.common.value_objects import GenerationId, UserId
from flashgen.domain.generation.entities import Generation, GenerationErrorLog
from flashgen.exceptions import GenerationNotFoundError


class GenerationQueryUseCase:
    """Read-only access to a user's generations and failed attempts."""

    def __init__(
        self,
        generation_repository: GenerationRepositoryProtocol,
        error_log_repository: GenerationErrorLogRepositoryProtocol,
        flashcard_repository: FlashcardRepositoryProtocol,
    ) -> None:
        self.generation_repository = generation_repository
        self.error_log_repository = error_log_repository
        self.flashcard_repository = flashcard_repository

    def get_generation(self, generation_id: int, user_id: int) -> GenerationDetail:
        """
        Get a generation with the flashcards saved from it.

        Raises:
            GenerationNotFoundError: If the generation does not exist or is not the user's
        """
        user_id_vo = UserId(user_id)
        generation = self.generation_repository.find_by_id(GenerationId(generation_id))
        if generation is None or not generation.is_owned_by(user_id_vo):
            raise GenerationNotFoundError(generation_id)

        flashcards = self.flashcard_repository.find_by_generation(generation.id, user_id_vo)
        return GenerationDetail(generation=generation, flashcards=flashcards)

    def list_generations(
        self, user_id: int, pagination: Pagination
    ) -> PaginatedResult[Generation]:
        items, total = self.generation_repository.find_page(UserId(user_id), pagination)
        return PaginatedResult(items=items, total=total, pagination=pagination)

    def list_error_logs(
        self, user_id: int, pagination: Pagination
    ) -> PaginatedResult[GenerationErrorLog]:
        items, total = self.error_log_repository.find_page(UserId(user_id), pagination)
        return PaginatedResult(items=items, total=total, pagination=pagination)
