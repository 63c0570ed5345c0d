"""Protocol for Flashcard repository in learning context."""

from typing import Protocol

from flashgen.application.common.pagination import Pagination
from flashgen.domain.common.value_objects.ids import FlashcardId, GenerationId, UserId
from flashgen.domain.learning.entities.flashcard import Flashcard


class FlashcardRepositoryProtocol(Protocol):
    """Protocol for Flashcard repository operations in learning context."""

    def find_by_id(self, flashcard_id: FlashcardId, user_id: UserId) -> Flashcard | None:
        """
        Find a flashcard by ID with user ownership check.

        Args:
            flashcard_id: The flashcard ID
            user_id: The user ID for ownership verification

        Returns:
            Flashcard entity if found and owned by user, None otherwise
        """
        ...

    def find_page(self, user_id: UserId, pagination: Pagination) -> tuple[list[Flashcard], int]:
        """
        Get one page of a user's flashcards.

        Args:
            user_id: Owner of the flashcards
            pagination: Page number and size

        Returns:
            Tuple of (flashcards newest first, total count for the user)
        """
        ...

    def find_by_generation(self, generation_id: GenerationId, user_id: UserId) -> list[Flashcard]:
        """Get the flashcards stored from one generation, newest first."""
        ...

    def save(self, flashcard: Flashcard) -> Flashcard:
        """
        Save a flashcard entity (create or update).

        Returns:
            Saved flashcard entity with database-generated values
        """
        ...

    def save_all(self, flashcards: list[Flashcard]) -> list[Flashcard]:
        """
        Insert new flashcards in a single transaction.

        Either every flashcard is stored or none is.

        Returns:
            Stored flashcards in input order
        """
        ...

    def delete(self, flashcard_id: FlashcardId, user_id: UserId) -> bool:
        """
        Delete a flashcard.

        Returns:
            True if deleted, False if not found
        """
        ...
