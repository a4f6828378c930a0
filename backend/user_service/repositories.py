"""Repository encapsulating database operations on `users`.

Every method touches at most one row (plus the paging count). Commits
happen here; SQLAlchemy failures are rolled back and re-raised as
service errors so callers never see driver exceptions.
"""

import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from . import models
from .errors import DuplicateError, StorageError

logger = logging.getLogger("user_service.repositories")


class UserRepository:
    """CRUD operations for `User` objects."""
    def __init__(self, session: Session):
        self.session = session

    def _commit(self, action: str):
        try:
            self.session.commit()
        except IntegrityError as e:
            # the only constraint on users is the unique username
            self.session.rollback()
            logger.warning("%s rejected by unique constraint: %s", action, e.orig)
            raise DuplicateError() from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("%s failed", action)
            raise StorageError(f"{action} failed") from e

    def create(self, user: models.User) -> models.User:
        """Persist a new user and return the managed instance with its id."""
        self.session.add(user)
        self._commit("Insert")
        self.session.refresh(user)
        return user

    def get(self, user_id: int) -> Optional[models.User]:
        """Get a `User` by primary key."""
        return self.session.get(models.User, user_id)

    def get_by_username(self, username: str) -> Optional[models.User]:
        """Return a `User` by username or `None` if not found."""
        stmt = select(models.User).where(models.User.username == username)
        return self.session.exec(stmt).first()

    def exists_by_username(self, username: str, exclude_id: Optional[int] = None) -> bool:
        """Return True if another row already uses `username`."""
        stmt = select(models.User.id).where(models.User.username == username)
        if exclude_id is not None:
            stmt = stmt.where(models.User.id != exclude_id)
        return self.session.exec(stmt).first() is not None

    def count(self) -> int:
        stmt = select(func.count()).select_from(models.User)
        return self.session.exec(stmt).one()

    def list_page(self, offset: int, limit: int) -> List[models.User]:
        """Return up to `limit` users, newest id first, skipping `offset` rows."""
        stmt = select(models.User).order_by(models.User.id.desc()).offset(offset).limit(limit)
        return list(self.session.exec(stmt).all())

    def save(self, user: models.User) -> models.User:
        """Write back changes made to a loaded user."""
        self.session.add(user)
        self._commit("Update")
        self.session.refresh(user)
        return user

    def delete(self, user: models.User):
        self.session.delete(user)
        self._commit("Delete")
