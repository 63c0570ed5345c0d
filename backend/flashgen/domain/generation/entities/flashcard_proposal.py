from dataclasses import dataclass

from flashgen.domain.learning.value_objects import FlashcardSource


@dataclass(frozen=True)
class FlashcardProposal:
    """Question/answer pair suggested by the model; not stored until reviewed."""

    front: str
    back: str
    source: FlashcardSource = FlashcardSource.AI_FULL
