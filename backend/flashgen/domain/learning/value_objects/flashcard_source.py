"""Origin tag of a flashcard."""

from enum import StrEnum


class FlashcardSource(StrEnum):
    """
    Where a flashcard came from.

    AI sources always point at the generation that produced them.
    """

    MANUAL = "manual"
    AI_FULL = "ai-full"
    AI_EDITED = "ai-edited"

    @property
    def is_ai(self) -> bool:
        return self is not FlashcardSource.MANUAL
