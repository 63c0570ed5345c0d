"""Translation of SQLAlchemy failures into PersistenceError."""

from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from flashgen.exceptions import PersistenceError

logger = structlog.get_logger(__name__)


@contextmanager
def store_errors(db: Session, action: str) -> Iterator[None]:
    """
    Roll back and raise PersistenceError when the store rejects an operation.

    Only the driver's message is kept as detail; the connection URL never
    leaves this function.

    Usage:
        with store_errors(self.db, "create flashcards"):
            self.db.add_all(rows)
            self.db.commit()
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        reason = str(getattr(e, "orig", None) or e.__class__.__name__)
        logger.error("persistence_failed", action=action, reason=reason)
        raise PersistenceError(f"Failed to {action}", reason=reason) from e
