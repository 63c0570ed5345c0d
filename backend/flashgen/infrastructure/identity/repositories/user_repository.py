"""Repository for User domain entities."""

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from flashgen.domain.common.value_objects.ids import UserId
from flashgen.domain.identity.entities.user import User
from flashgen.domain.identity.exceptions import EmailAlreadyExistsError
from flashgen.infrastructure.common.persistence import store_errors
from flashgen.infrastructure.identity.mappers.user_mapper import UserMapper
from flashgen.models import User as UserORM

logger = structlog.get_logger(__name__)


class UserRepository:
    """Repository for User domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = UserMapper()

    def find_by_id(self, user_id: UserId) -> User | None:
        """Find a user by ID."""
        stmt = select(UserORM).where(UserORM.id == user_id.value)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_email(self, email: str) -> User | None:
        """Find a user by email."""
        stmt = select(UserORM).where(UserORM.email == email)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, user: User) -> User:
        """
        Insert a new user.

        Args:
            user: The user entity to save

        Returns:
            Saved user entity with database-generated values

        Raises:
            EmailAlreadyExistsError: If email is already registered
        """
        if user.id.is_persisted:
            raise ValueError(f"User {user.id.value} is already stored")

        orm_model = self.mapper.to_orm(user)
        with store_errors(self.db, "create user"):
            self.db.add(orm_model)
            try:
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                # Unique constraint on users.email
                if "email" in str(e.orig).lower():
                    raise EmailAlreadyExistsError(user.email) from e
                raise
            self.db.refresh(orm_model)

        logger.info("created_user", user_id=orm_model.id)
        return self.mapper.to_domain(orm_model)
