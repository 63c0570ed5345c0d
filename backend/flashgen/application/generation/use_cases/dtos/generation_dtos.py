"""DTOs for generation use cases."""

from dataclasses import dataclass, field

from flashgen.domain.generation.entities import FlashcardProposal, Generation
from flashgen.domain.learning.entities.flashcard import Flashcard


@dataclass
class GenerationOutcome:
    """Result of a successful generation; proposals are not stored yet."""

    generation_id: int
    generated_count: int
    proposals: list[FlashcardProposal] = field(default_factory=list)


@dataclass
class GenerationDetail:
    """A generation together with the flashcards saved from it."""

    generation: Generation
    flashcards: list[Flashcard]
