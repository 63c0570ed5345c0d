"""DTOs for flashcard use cases."""

from typing import TypedDict

from flashgen.domain.learning.value_objects import FlashcardSource


class FlashcardChanges(TypedDict, total=False):
    """
    Partial update of a flashcard.

    A missing key leaves the field alone; `generation_id: None` clears the
    link.
    """

    front: str
    back: str
    source: FlashcardSource
    generation_id: int | None
