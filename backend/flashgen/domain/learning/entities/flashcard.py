"""
Flashcard entity.
"""

from dataclasses import dataclass
from datetime import datetime

from flashgen.domain.common.entity import Entity
from flashgen.domain.common.exceptions import InvariantViolationError, ValidationError
from flashgen.domain.common.value_objects import FlashcardId, GenerationId, UserId
from flashgen.domain.learning.value_objects import FlashcardSource

FRONT_MIN_LENGTH = 3
FRONT_MAX_LENGTH = 200
BACK_MIN_LENGTH = 3
BACK_MAX_LENGTH = 500


def validate_front(front: str) -> None:
    """
    Check the question side of a card.

    Raises:
        ValidationError: If the text is outside FRONT_MIN_LENGTH..FRONT_MAX_LENGTH
    """
    if not FRONT_MIN_LENGTH <= len(front) <= FRONT_MAX_LENGTH:
        raise ValidationError(
            f"Front must be between {FRONT_MIN_LENGTH} and {FRONT_MAX_LENGTH} characters",
            field="front",
            value=front,
        )


def validate_back(back: str) -> None:
    """
    Check the answer side of a card.

    Raises:
        ValidationError: If the text is outside BACK_MIN_LENGTH..BACK_MAX_LENGTH
    """
    if not BACK_MIN_LENGTH <= len(back) <= BACK_MAX_LENGTH:
        raise ValidationError(
            f"Back must be between {BACK_MIN_LENGTH} and {BACK_MAX_LENGTH} characters",
            field="back",
            value=back,
        )


@dataclass(eq=False)
class Flashcard(Entity[FlashcardId]):
    """
    A question/answer card owned by one user.

    Business Rules:
    - Front is 3-200 characters, back is 3-500 characters
    - A manual card never references a generation
    - An AI card references the generation that produced it; the link may
      only disappear when the generation itself is deleted
    """

    id: FlashcardId
    user_id: UserId
    front: str
    back: str
    source: FlashcardSource
    generation_id: GenerationId | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        validate_front(self.front)
        validate_back(self.back)
        if self.source is FlashcardSource.MANUAL and self.generation_id is not None:
            raise InvariantViolationError("Flashcard", "manual flashcards have no generation")

    def is_owned_by(self, user_id: UserId) -> bool:
        return self.user_id == user_id

    def update_content(self, front: str | None = None, back: str | None = None) -> None:
        """
        Replace the front and/or back text.

        Raises:
            ValidationError: If the new text violates the length limits
        """
        if front is not None:
            validate_front(front)
            self.front = front
        if back is not None:
            validate_back(back)
            self.back = back

    def update_origin(self, source: FlashcardSource, generation_id: GenerationId | None) -> None:
        """
        Change the source tag and generation link together.

        Args:
            source: New source tag
            generation_id: Generation the card belongs to, None for manual cards

        Raises:
            ValidationError: If the pair breaks the source/generation rule
        """
        if source is FlashcardSource.MANUAL and generation_id is not None:
            raise ValidationError(
                "Manual flashcards cannot reference a generation", field="generation_id"
            )
        if source.is_ai and generation_id is None:
            raise ValidationError(
                "AI flashcards must reference a generation", field="generation_id"
            )
        self.source = source
        self.generation_id = generation_id

    @classmethod
    def create(
        cls,
        user_id: UserId,
        front: str,
        back: str,
        source: FlashcardSource,
        generation_id: GenerationId | None = None,
    ) -> "Flashcard":
        """Create a new flashcard (ID will be 0 until persisted)."""
        if source.is_ai and generation_id is None:
            raise ValidationError(
                "AI flashcards must reference a generation", field="generation_id"
            )
        return cls(
            id=FlashcardId.generate(),
            user_id=user_id,
            front=front,
            back=back,
            source=source,
            generation_id=generation_id,
        )

    @classmethod
    def create_with_id(
        cls,
        id: FlashcardId,
        user_id: UserId,
        front: str,
        back: str,
        source: FlashcardSource,
        generation_id: GenerationId | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Flashcard":
        """Reconstitute a flashcard from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            front=front,
            back=back,
            source=source,
            generation_id=generation_id,
            created_at=created_at,
            updated_at=updated_at,
        )
