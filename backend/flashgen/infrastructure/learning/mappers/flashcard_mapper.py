"""Mapper for Flashcard ORM ↔ Domain conversion."""

from flashgen.domain.common.value_objects import FlashcardId, GenerationId, UserId
from flashgen.domain.learning.entities.flashcard import Flashcard
from flashgen.domain.learning.value_objects import FlashcardSource
from flashgen.models import Flashcard as FlashcardORM


class FlashcardMapper:
    """Mapper for Flashcard ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: FlashcardORM) -> Flashcard:
        """Convert ORM model to domain entity."""
        return Flashcard.create_with_id(
            id=FlashcardId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            front=orm_model.front,
            back=orm_model.back,
            source=FlashcardSource(orm_model.source),
            generation_id=(
                GenerationId(orm_model.generation_id)
                if orm_model.generation_id is not None
                else None
            ),
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
        )

    def to_orm(
        self, domain_entity: Flashcard, orm_model: FlashcardORM | None = None
    ) -> FlashcardORM:
        """Convert domain entity to ORM model, updating orm_model in place when given."""
        generation_id = domain_entity.generation_id.value if domain_entity.generation_id else None

        if orm_model:
            orm_model.front = domain_entity.front
            orm_model.back = domain_entity.back
            orm_model.source = domain_entity.source.value
            orm_model.generation_id = generation_id
            return orm_model

        return FlashcardORM(
            id=domain_entity.id.value if domain_entity.id.is_persisted else None,
            user_id=domain_entity.user_id.value,
            front=domain_entity.front,
            back=domain_entity.back,
            source=domain_entity.source.value,
            generation_id=generation_id,
        )
