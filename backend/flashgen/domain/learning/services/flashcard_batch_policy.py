"""Consistency rules for creating many flashcards in one call."""

from collections.abc import Sequence
from dataclasses import dataclass

from flashgen.domain.learning.value_objects import FlashcardSource

MAX_BATCH_SIZE = 50


@dataclass(frozen=True)
class FlashcardDraft:
    """A flashcard that has not been stored yet."""

    front: str
    back: str
    source: FlashcardSource
    generation_id: int | None = None


class FlashcardBatchPolicy:
    """
    Stateless domain service deciding whether drafts may be stored together.

    A batch has exactly one source. Manual batches carry no generation id;
    AI batches all carry the same generation id.
    """

    @staticmethod
    def find_violation(drafts: Sequence[FlashcardDraft]) -> str | None:
        """
        Return a description of the first broken rule, or None.

        Args:
            drafts: Drafts in the batch

        Returns:
            Human readable reason, None when the batch is consistent
        """
        if not drafts:
            return "No flashcards to create"
        if len(drafts) > MAX_BATCH_SIZE:
            return f"Cannot create more than {MAX_BATCH_SIZE} flashcards at once"

        sources = {draft.source for draft in drafts}
        if len(sources) > 1:
            return "All flashcards in a batch must have the same source"

        source = drafts[0].source
        generation_ids = {draft.generation_id for draft in drafts}
        if source is FlashcardSource.MANUAL:
            if generation_ids != {None}:
                return "Manual flashcards cannot reference a generation"
            return None

        if None in generation_ids:
            return "AI flashcards must reference a generation"
        if len(generation_ids) > 1:
            return "All AI flashcards in a batch must share one generation"
        return None

    @staticmethod
    def shared_generation_id(drafts: Sequence[FlashcardDraft]) -> int | None:
        """Generation id of a consistent AI batch, None for manual batches."""
        if not drafts or drafts[0].source is FlashcardSource.MANUAL:
            return None
        return drafts[0].generation_id
