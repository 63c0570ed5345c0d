"""Use case for flashcard operations."""

import structlog

from flashgen.application.common.pagination import PaginatedResult, Pagination
from flashgen.application.generation.protocols import GenerationRepositoryProtocol
from flashgen.application.learning.protocols.flashcard_repository import (
    FlashcardRepositoryProtocol,
)
from flashgen.application.learning.use_cases.dtos import FlashcardChanges
from flashgen.domain.common.value_objects.ids import FlashcardId, GenerationId, UserId
from flashgen.domain.learning.entities.flashcard import Flashcard
from flashgen.domain.learning.services import FlashcardBatchPolicy, FlashcardDraft
from flashgen.exceptions import (
    FlashcardNotFoundError,
    GenerationAccessDeniedError,
    GenerationNotFoundError,
    ValidationError,
)

logger = structlog.get_logger(__name__)


class FlashcardUseCase:
    """Use case for flashcard CRUD operations."""

    def __init__(
        self,
        flashcard_repository: FlashcardRepositoryProtocol,
        generation_repository: GenerationRepositoryProtocol,
        batch_policy: FlashcardBatchPolicy | None = None,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.flashcard_repository = flashcard_repository
        self.generation_repository = generation_repository
        self.batch_policy = batch_policy or FlashcardBatchPolicy()

    def create_flashcards(self, drafts: list[FlashcardDraft], user_id: int) -> list[Flashcard]:
        """
        Create a batch of flashcards.

        Args:
            drafts: Flashcards to create, all with the same source
            user_id: ID of the user

        Returns:
            Created flashcard domain entities

        Raises:
            ValidationError: If the batch is empty or inconsistent
            GenerationNotFoundError: If the batch's generation does not exist
            GenerationAccessDeniedError: If the batch's generation belongs to someone else
        """
        if not drafts:
            raise ValidationError("No flashcards to create")

        violation = self.batch_policy.find_violation(drafts)
        if violation:
            raise ValidationError(violation)

        user_id_vo = UserId(user_id)
        generation_id = self.batch_policy.shared_generation_id(drafts)
        if generation_id is not None:
            self._ensure_generation_access(generation_id, user_id_vo)

        flashcards = [
            Flashcard.create(
                user_id=user_id_vo,
                front=draft.front,
                back=draft.back,
                source=draft.source,
                generation_id=GenerationId(generation_id) if generation_id is not None else None,
            )
            for draft in drafts
        ]
        flashcards = self.flashcard_repository.save_all(flashcards)

        logger.info(
            "created_flashcards",
            count=len(flashcards),
            source=drafts[0].source.value,
            generation_id=generation_id,
            user_id=user_id,
        )
        return flashcards

    def list_flashcards(self, user_id: int, pagination: Pagination) -> PaginatedResult[Flashcard]:
        """
        Get one page of the user's flashcards, newest first.

        A page past the end is empty but still reports the total.
        """
        items, total = self.flashcard_repository.find_page(UserId(user_id), pagination)
        return PaginatedResult(items=items, total=total, pagination=pagination)

    def get_flashcard(self, flashcard_id: int, user_id: int) -> Flashcard:
        """
        Get a single flashcard.

        Raises:
            FlashcardNotFoundError: If the flashcard does not exist or is not the user's
        """
        flashcard = self.flashcard_repository.find_by_id(
            FlashcardId(flashcard_id), UserId(user_id)
        )
        if not flashcard:
            raise FlashcardNotFoundError(flashcard_id)
        return flashcard

    def update_flashcard(
        self, flashcard_id: int, user_id: int, changes: FlashcardChanges
    ) -> Flashcard:
        """
        Apply a partial update to a flashcard.

        Args:
            flashcard_id: ID of the flashcard to update
            user_id: ID of the user
            changes: Fields to change

        Returns:
            Updated flashcard domain entity

        Raises:
            ValidationError: If no field is given
            FlashcardNotFoundError: If flashcard is not found
            GenerationNotFoundError: If the new generation does not exist
            GenerationAccessDeniedError: If the new generation belongs to someone else
        """
        if not changes:
            raise ValidationError("At least one field must be provided")

        flashcard = self.get_flashcard(flashcard_id, user_id)

        new_generation_id = changes.get("generation_id")
        if new_generation_id is not None:
            self._ensure_generation_access(new_generation_id, UserId(user_id))

        flashcard.update_content(front=changes.get("front"), back=changes.get("back"))

        if "source" in changes or "generation_id" in changes:
            if "generation_id" in changes:
                generation_id = (
                    GenerationId(new_generation_id) if new_generation_id is not None else None
                )
            else:
                generation_id = flashcard.generation_id
            flashcard.update_origin(changes.get("source", flashcard.source), generation_id)

        flashcard = self.flashcard_repository.save(flashcard)

        logger.info("updated_flashcard", flashcard_id=flashcard_id, fields=sorted(changes))
        return flashcard

    def delete_flashcard(self, flashcard_id: int, user_id: int) -> None:
        """
        Delete a flashcard.

        Raises:
            FlashcardNotFoundError: If flashcard is not found
        """
        flashcard = self.get_flashcard(flashcard_id, user_id)

        deleted = self.flashcard_repository.delete(flashcard.id, flashcard.user_id)
        if not deleted:
            raise FlashcardNotFoundError(flashcard_id)

        logger.info("deleted_flashcard", flashcard_id=flashcard_id)

    def _ensure_generation_access(self, generation_id: int, user_id: UserId) -> None:
        generation = self.generation_repository.find_by_id(GenerationId(generation_id))
        if generation is None:
            raise GenerationNotFoundError(generation_id)
        if not generation.is_owned_by(user_id):
            raise GenerationAccessDeniedError(generation_id)
