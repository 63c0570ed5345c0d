"""Repositories for Generation and GenerationErrorLog domain entities."""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from flashgen.application.common.pagination import Pagination
from flashgen.domain.common.value_objects.ids import GenerationId, UserId
from flashgen.domain.generation.entities import Generation, GenerationErrorLog
from flashgen.infrastructure.common.persistence import store_errors
from flashgen.infrastructure.generation.mappers.generation_mapper import (
    GenerationErrorLogMapper,
    GenerationMapper,
)
from flashgen.models import Generation as GenerationORM
from flashgen.models import GenerationErrorLog as GenerationErrorLogORM


class GenerationRepository:
    """Repository for Generation domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = GenerationMapper()

    def find_by_id(self, generation_id: GenerationId) -> Generation | None:
        """Find a generation by ID, whoever owns it."""
        with store_errors(self.db, "fetch generation"):
            orm_model = self.db.get(GenerationORM, generation_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_page(self, user_id: UserId, pagination: Pagination) -> tuple[list[Generation], int]:
        stmt = (
            select(GenerationORM)
            .where(GenerationORM.user_id == user_id.value)
            .order_by(GenerationORM.created_at.desc(), GenerationORM.id.desc())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        count_stmt = select(func.count(GenerationORM.id)).where(
            GenerationORM.user_id == user_id.value
        )
        with store_errors(self.db, "fetch generations"):
            orm_models = self.db.execute(stmt).scalars().all()
            total = self.db.execute(count_stmt).scalar() or 0
        return [self.mapper.to_domain(orm) for orm in orm_models], total

    def save(self, generation: Generation) -> Generation:
        """
        Save a generation entity (create or update).

        Returns:
            Saved generation with database-generated values
        """
        if not generation.id.is_persisted:
            with store_errors(self.db, "create generation record"):
                orm_model = self.mapper.to_orm(generation)
                self.db.add(orm_model)
                self.db.commit()
                self.db.refresh(orm_model)
            return self.mapper.to_domain(orm_model)

        with store_errors(self.db, "update generation record"):
            orm_model = self.db.get(GenerationORM, generation.id.value)
            if not orm_model:
                raise ValueError(f"Generation {generation.id.value} not found")
            self.mapper.to_orm(generation, orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)


class GenerationErrorLogRepository:
    """Repository for GenerationErrorLog domain entities. Entries are never updated."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = GenerationErrorLogMapper()

    def save(self, error_log: GenerationErrorLog) -> GenerationErrorLog:
        with store_errors(self.db, "log generation error"):
            orm_model = self.mapper.to_orm(error_log)
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def find_page(
        self, user_id: UserId, pagination: Pagination
    ) -> tuple[list[GenerationErrorLog], int]:
        stmt = (
            select(GenerationErrorLogORM)
            .where(GenerationErrorLogORM.user_id == user_id.value)
            .order_by(GenerationErrorLogORM.created_at.desc(), GenerationErrorLogORM.id.desc())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        count_stmt = select(func.count(GenerationErrorLogORM.id)).where(
            GenerationErrorLogORM.user_id == user_id.value
        )
        with store_errors(self.db, "fetch generation error logs"):
            orm_models = self.db.execute(stmt).scalars().all()
            total = self.db.execute(count_stmt).scalar() or 0
        return [self.mapper.to_domain(orm) for orm in orm_models], total
