import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core import errors

logger = logging.getLogger(__name__)


class Repository:
    def __init__(self, db: Session):
        self.db = db

    def _commit(self, *, conflict_message: str = "This entry already exists.") -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning("Uniqueness violation: %s", exc.orig)
            raise errors.ConflictError(conflict_message) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Database commit failed: %s", exc)
            raise errors.StorageError("The database rejected the change.", details=str(exc)) from exc

    def _execute(self, stmt):
        try:
            return self.db.execute(stmt)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Database query failed: %s", exc)
            raise errors.StorageError("The database query failed.", details=str(exc)) from exc
