"""SQLModel data models.

A single table backs the service: `users`.
"""

from typing import Optional
from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """A directory entry.

    Fields:
    - `username`: unique handle, stored trimmed
    - `name`: display name
    - `phone`: free-form phone number
    """
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(index=True, nullable=False, unique=True)
    name: str = Field(nullable=False)
    phone: str = Field(nullable=False)
