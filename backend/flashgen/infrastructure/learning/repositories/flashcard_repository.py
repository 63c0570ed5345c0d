"""Repository for Flashcard domain entities."""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from flashgen.application.common.pagination import Pagination
from flashgen.domain.common.value_objects.ids import FlashcardId, GenerationId, UserId
from flashgen.domain.learning.entities.flashcard import Flashcard
from flashgen.infrastructure.common.persistence import store_errors
from flashgen.infrastructure.learning.mappers.flashcard_mapper import FlashcardMapper
from flashgen.models import Flashcard as FlashcardORM


class FlashcardRepository:
    """Repository for Flashcard domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = FlashcardMapper()

    def find_by_id(self, flashcard_id: FlashcardId, user_id: UserId) -> Flashcard | None:
        """
        Find a flashcard by ID with user ownership check.

        Args:
            flashcard_id: The flashcard ID
            user_id: The user ID for ownership verification

        Returns:
            Flashcard entity if found and owned by user, None otherwise
        """
        stmt = select(FlashcardORM).where(
            FlashcardORM.id == flashcard_id.value,
            FlashcardORM.user_id == user_id.value,
        )
        with store_errors(self.db, "fetch flashcard"):
            orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_page(self, user_id: UserId, pagination: Pagination) -> tuple[list[Flashcard], int]:
        """
        Get one page of a user's flashcards.

        Returns:
            Tuple of (flashcards ordered by created_at DESC, total count)
        """
        stmt = (
            select(FlashcardORM)
            .where(FlashcardORM.user_id == user_id.value)
            .order_by(FlashcardORM.created_at.desc(), FlashcardORM.id.desc())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        count_stmt = select(func.count(FlashcardORM.id)).where(
            FlashcardORM.user_id == user_id.value
        )
        with store_errors(self.db, "fetch flashcards"):
            orm_models = self.db.execute(stmt).scalars().all()
            total = self.db.execute(count_stmt).scalar() or 0
        return [self.mapper.to_domain(orm) for orm in orm_models], total

    def find_by_generation(self, generation_id: GenerationId, user_id: UserId) -> list[Flashcard]:
        """Get the flashcards saved from a generation, newest first."""
        stmt = (
            select(FlashcardORM)
            .where(
                FlashcardORM.generation_id == generation_id.value,
                FlashcardORM.user_id == user_id.value,
            )
            .order_by(FlashcardORM.created_at.desc(), FlashcardORM.id.desc())
        )
        with store_errors(self.db, "fetch flashcards"):
            orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def save(self, flashcard: Flashcard) -> Flashcard:
        """
        Save a flashcard entity (create or update).

        Args:
            flashcard: The flashcard entity to save

        Returns:
            Saved flashcard entity with database-generated values
        """
        if not flashcard.id.is_persisted:
            return self.save_all([flashcard])[0]

        with store_errors(self.db, "update flashcard"):
            orm_model = self.db.get(FlashcardORM, flashcard.id.value)
            if not orm_model:
                raise ValueError(f"Flashcard {flashcard.id.value} not found")
            self.mapper.to_orm(flashcard, orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def save_all(self, flashcards: list[Flashcard]) -> list[Flashcard]:
        """
        Insert new flashcards with a single commit.

        Returns:
            Stored flashcards in input order
        """
        orm_models = [self.mapper.to_orm(flashcard) for flashcard in flashcards]
        with store_errors(self.db, "create flashcards"):
            self.db.add_all(orm_models)
            self.db.commit()
            for orm_model in orm_models:
                self.db.refresh(orm_model)
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def delete(self, flashcard_id: FlashcardId, user_id: UserId) -> bool:
        """
        Delete a flashcard.

        Returns:
            True if deleted, False if not found
        """
        stmt = select(FlashcardORM).where(
            FlashcardORM.id == flashcard_id.value,
            FlashcardORM.user_id == user_id.value,
        )
        with store_errors(self.db, "delete flashcard"):
            flashcard_orm = self.db.execute(stmt).scalar_one_or_none()
            if not flashcard_orm:
                return False
            self.db.delete(flashcard_orm)
            self.db.commit()
        return True
