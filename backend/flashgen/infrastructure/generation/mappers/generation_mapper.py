"""Mappers for Generation and GenerationErrorLog ORM ↔ Domain conversion."""

from flashgen.domain.common.value_objects import (
    ContentHash,
    GenerationErrorLogId,
    GenerationId,
    UserId,
)
from flashgen.domain.generation.entities import Generation, GenerationErrorLog
from flashgen.models import Generation as GenerationORM
from flashgen.models import GenerationErrorLog as GenerationErrorLogORM


class GenerationMapper:
    """Mapper for Generation ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: GenerationORM) -> Generation:
        return Generation.create_with_id(
            id=GenerationId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            model=orm_model.model,
            source_text_hash=ContentHash(orm_model.source_text_hash),
            source_text_length=orm_model.source_text_length,
            generated_count=orm_model.generated_count,
            generation_duration=orm_model.generation_duration,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
        )

    def to_orm(
        self, domain_entity: Generation, orm_model: GenerationORM | None = None
    ) -> GenerationORM:
        """Convert domain entity to ORM model; only the outcome changes on update."""
        if orm_model:
            orm_model.generated_count = domain_entity.generated_count
            orm_model.generation_duration = domain_entity.generation_duration
            return orm_model

        return GenerationORM(
            id=domain_entity.id.value if domain_entity.id.is_persisted else None,
            user_id=domain_entity.user_id.value,
            model=domain_entity.model,
            source_text_hash=domain_entity.source_text_hash.value,
            source_text_length=domain_entity.source_text_length,
            generated_count=domain_entity.generated_count,
            generation_duration=domain_entity.generation_duration,
        )


class GenerationErrorLogMapper:
    """Mapper for GenerationErrorLog ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: GenerationErrorLogORM) -> GenerationErrorLog:
        return GenerationErrorLog.create_with_id(
            id=GenerationErrorLogId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            error_code=orm_model.error_code,
            error_message=orm_model.error_message,
            model=orm_model.model,
            source_text_hash=ContentHash(orm_model.source_text_hash),
            source_text_length=orm_model.source_text_length,
            created_at=orm_model.created_at,
        )

    def to_orm(self, domain_entity: GenerationErrorLog) -> GenerationErrorLogORM:
        return GenerationErrorLogORM(
            user_id=domain_entity.user_id.value,
            error_code=domain_entity.error_code,
            error_message=domain_entity.error_message,
            model=domain_entity.model,
            source_text_hash=domain_entity.source_text_hash.value,
            source_text_length=domain_entity.source_text_length,
        )
