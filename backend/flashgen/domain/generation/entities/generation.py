"""
Generation entity: one attempt at turning source text into flashcards.
"""

from dataclasses import dataclass
from datetime import datetime

from flashgen.domain.common.entity import Entity
from flashgen.domain.common.exceptions import ValidationError
from flashgen.domain.common.value_objects import ContentHash, GenerationId, UserId


@dataclass(eq=False)
class Generation(Entity[GenerationId]):
    """
    Audit record of a generation attempt.

    Stores a fingerprint of the source text, never the text itself. Counts
    start at zero and are filled in once the model has answered.
    """

    id: GenerationId
    user_id: UserId
    model: str
    source_text_hash: ContentHash
    source_text_length: int
    generated_count: int = 0
    generation_duration: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.model:
            raise ValidationError("Model cannot be empty", field="model")
        if self.source_text_length < 0:
            raise ValidationError(
                "Source text length cannot be negative",
                field="source_text_length",
                value=self.source_text_length,
            )

    def is_owned_by(self, user_id: UserId) -> bool:
        return self.user_id == user_id

    def record_outcome(self, generated_count: int, duration_ms: int) -> None:
        """
        Store how many proposals were produced and how long it took.

        Args:
            generated_count: Number of proposals returned to the user
            duration_ms: Wall-clock duration in milliseconds

        Raises:
            ValidationError: If either value is negative
        """
        if generated_count < 0:
            raise ValidationError("Generated count cannot be negative", field="generated_count")
        if duration_ms < 0:
            raise ValidationError("Duration cannot be negative", field="generation_duration")
        self.generated_count = generated_count
        self.generation_duration = duration_ms

    @classmethod
    def create(
        cls,
        user_id: UserId,
        model: str,
        source_text_hash: ContentHash,
        source_text_length: int,
    ) -> "Generation":
        """Start a generation for a fingerprinted text (ID will be 0 until persisted)."""
        return cls(
            id=GenerationId.generate(),
            user_id=user_id,
            model=model,
            source_text_hash=source_text_hash,
            source_text_length=source_text_length,
        )

    @classmethod
    def create_with_id(
        cls,
        id: GenerationId,
        user_id: UserId,
        model: str,
        source_text_hash: ContentHash,
        source_text_length: int,
        generated_count: int,
        generation_duration: int,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Generation":
        """Reconstitute a generation from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            model=model,
            source_text_hash=source_text_hash,
            source_text_length=source_text_length,
            generated_count=generated_count,
            generation_duration=generation_duration,
            created_at=created_at,
            updated_at=updated_at,
        )
