"""Protocols for generation and generation error log repositories."""

from typing import Protocol

from flashgen.application.common.pagination import Pagination
from flashgen.domain.common.value_objects.ids import GenerationId, UserId
from flashgen.domain.generation.entities import Generation, GenerationErrorLog


class GenerationRepositoryProtocol(Protocol):
    """Protocol for Generation repository operations."""

    def find_by_id(self, generation_id: GenerationId) -> Generation | None:
        """
        Find a generation by ID regardless of owner.

        Callers compare the owner themselves, which lets them tell a
        missing generation apart from someone else's.

        Args:
            generation_id: The generation ID

        Returns:
            Generation entity if found, None otherwise
        """
        ...

    def find_page(self, user_id: UserId, pagination: Pagination) -> tuple[list[Generation], int]:
        """Get one page of a user's generations, newest first, with the total count."""
        ...

    def save(self, generation: Generation) -> Generation:
        """
        Save a generation entity (create or update).

        Returns:
            Saved generation with database-generated values
        """
        ...


class GenerationErrorLogRepositoryProtocol(Protocol):
    """Protocol for GenerationErrorLog repository operations."""

    def save(self, error_log: GenerationErrorLog) -> GenerationErrorLog: ...

    def find_page(
        self, user_id: UserId, pagination: Pagination
    ) -> tuple[list[GenerationErrorLog], int]: ...
