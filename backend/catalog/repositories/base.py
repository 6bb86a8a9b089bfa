"""Base repository with shared get-by-ID and conflict-tolerant insert patterns.

Subclasses specify model_class, id_column, and not_found_error; the base
provides lookup, delete-all (for replace-wholesale imports), and an insert
that reports a unique-constraint conflict instead of poisoning the session.
"""

import uuid
from typing import TypeVar, Generic, Type

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, Query

from ..database import Base
from ..exceptions import NotFoundError

ModelT = TypeVar("ModelT", bound=Base)


def new_id() -> str:
    """Surrogate primary key for catalog rows."""
    return str(uuid.uuid4())


class BaseRepository(Generic[ModelT]):
    """Shared repository logic for SQLAlchemy models.

    Class variables to set in subclasses:
        model_class:     The SQLAlchemy model (e.g., Folder)
        id_column:       Name of the primary-key column (default "id")
        not_found_error: Exception class to raise from get_by_id
    """

    model_class: Type[ModelT]
    id_column: str = "id"
    not_found_error: Type[NotFoundError] = NotFoundError

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self) -> Query:
        return self.db.query(self.model_class)

    def get_by_id(self, entity_id: str) -> ModelT:
        """Get entity by primary key. Raises not_found_error if missing."""
        col = getattr(self.model_class, self.id_column)
        entity = self._base_query().filter(col == entity_id).first()
        if not entity:
            raise self.not_found_error(entity_id)
        return entity

    def delete_all(self) -> int:
        """Delete every row of this table inside the caller's transaction."""
        return self.db.query(self.model_class).delete(synchronize_session=False)

    def _insert_or_conflict(self, entity: ModelT) -> bool:
        """Insert *entity* under a savepoint.

        Returns False (and rolls back only the savepoint) when a unique
        constraint rejects the row; the surrounding transaction stays usable.
        """
        savepoint = self.db.begin_nested()
        try:
            self.db.add(entity)
            self.db.flush()
        except IntegrityError:
            savepoint.rollback()
            return False
        savepoint.commit()
        return True
