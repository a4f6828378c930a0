"""Business logic for the user directory.

`UserService` is the single validation core shared by both transport
shapes. It trims input, rejects blank fields, enforces username
uniqueness and raises `ServiceError` subclasses; the route modules only
translate results and errors into their response format.
"""

import logging
from typing import List, Optional, Tuple

from sqlmodel import Session

from . import models, repositories
from .errors import BlankFieldError, DuplicateError, MalformedInputError, NotFoundError
from .schemas import Paging

logger = logging.getLogger("user_service.services")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_INT64 = 2**63 - 1
MIN_INT64 = -(2**63)


def trim(value: Optional[str]) -> str:
    """Strip surrounding whitespace; `None` counts as empty."""
    return (value or "").strip()


def require(field: str, value: Optional[str]) -> str:
    """Return the trimmed value or raise `BlankFieldError` for `field`."""
    cleaned = trim(value)
    if not cleaned:
        raise BlankFieldError(field)
    return cleaned


def parse_id(raw) -> int:
    """Parse a path identifier, rejecting non-integers and values outside BIGINT."""
    try:
        value = int(str(raw).strip())
    except ValueError:
        raise MalformedInputError(f"invalid user id: {raw!r}")
    if not MIN_INT64 <= value <= MAX_INT64:
        raise MalformedInputError(f"invalid user id: {raw!r} is out of range")
    return value


class UserService:
    """Create, read, list, update and delete users."""
    def __init__(self, session: Session, default_page: int = DEFAULT_PAGE, default_limit: int = DEFAULT_LIMIT):
        self.session = session
        self.repo = repositories.UserRepository(session)
        self.default_page = default_page
        self.default_limit = default_limit

    def _validated(self, username, name, phone) -> Tuple[str, str, str]:
        # checked in this order so the first blank field wins
        return require("username", username), require("name", name), require("phone", phone)

    def create(self, username: Optional[str], name: Optional[str], phone: Optional[str]) -> models.User:
        """Validate and insert a new user.

        The existence check is only a fast path; the unique constraint on
        `users.username` decides when two creates race.
        """
        username, name, phone = self._validated(username, name, phone)
        if self.repo.exists_by_username(username):
            logger.warning("duplicate username on create: %s", username)
            raise DuplicateError()
        user = self.repo.create(models.User(username=username, name=name, phone=phone))
        logger.info("created user id=%s username=%s", user.id, user.username)
        return user

    def get(self, user_id: int) -> models.User:
        user = self.repo.get(user_id)
        if user is None:
            raise NotFoundError(f"User not found: id {user_id}")
        return user

    def get_by_username(self, username: Optional[str]) -> models.User:
        username = require("username", username)
        user = self.repo.get_by_username(username)
        if user is None:
            raise NotFoundError(f"User not found: {username}")
        return user

    def list(self, page: Optional[int] = None, limit: Optional[int] = None) -> Tuple[List[models.User], Paging]:
        """Return one page of users (newest first) and the paging block.

        Non-positive or missing `page`/`limit` fall back to the defaults;
        values whose offset would not fit a BIGINT are malformed input.
        """
        if (page or 0) > MAX_INT64 or (limit or 0) > MAX_INT64:
            raise MalformedInputError("page and limit must fit a 64-bit integer")
        paging = Paging(
            page=page if page and page > 0 else self.default_page,
            limit=limit if limit and limit > 0 else self.default_limit,
        )
        if paging.offset > MAX_INT64:
            raise MalformedInputError(f"page {paging.page} is out of range for limit {paging.limit}")
        paging.total = self.repo.count()
        users = self.repo.list_page(paging.offset, paging.limit)
        return users, paging

    def update(self, user_id: int, username: Optional[str], name: Optional[str], phone: Optional[str]) -> models.User:
        """Overwrite every field of the user with `user_id`.

        Incoming values are validated before the row is loaded, so nothing
        is written when a field is blank.
        """
        username, name, phone = self._validated(username, name, phone)
        user = self.get(user_id)
        if username != user.username and self.repo.exists_by_username(username, exclude_id=user.id):
            logger.warning("duplicate username on update of id=%s: %s", user_id, username)
            raise DuplicateError()
        user.username, user.name, user.phone = username, name, phone
        user = self.repo.save(user)
        logger.info("updated user id=%s", user.id)
        return user

    def update_by_username(self, username: Optional[str], name: Optional[str], phone: Optional[str]) -> models.User:
        """Overwrite name and phone of the user identified by `username`."""
        username, name, phone = self._validated(username, name, phone)
        user = self.repo.get_by_username(username)
        if user is None:
            raise NotFoundError(f"User not found: {username}")
        user.name, user.phone = name, phone
        user = self.repo.save(user)
        logger.info("updated user username=%s", username)
        return user

    def delete(self, user_id: int):
        user = self.get(user_id)
        self.repo.delete(user)
        logger.info("deleted user id=%s", user_id)

    def delete_by_username(self, username: Optional[str]):
        user = self.get_by_username(username)
        username = user.username
        self.repo.delete(user)
        logger.info("deleted user username=%s", username)
