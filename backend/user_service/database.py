"""Database engine and helpers.

The `Database` object owns the SQLModel/SQLAlchemy engine. One instance is
built by the application factory and stored on `app.state`; request
handlers receive a `Session` through the `get_session` dependency instead of
reaching for a module-level engine.
"""

from typing import Iterator

from fastapi import Request
from sqlmodel import SQLModel, create_engine, Session

from . import models  # noqa: F401  registers the users table on the metadata


class Database:
    """Holds the engine and the connection pool behind it."""

    def __init__(self, url: str, echo: bool = False):
        connect_args = {}
        if url.startswith("sqlite"):
            # FastAPI runs sync endpoints in a threadpool
            connect_args["check_same_thread"] = False
        self.engine = create_engine(url, echo=echo, connect_args=connect_args)

    def create_all(self):
        """Create missing tables from SQLModel metadata.

        Deployments that manage schema with plain SQL can use
        `run_migrations.py` instead; both produce the same `users` table.
        """
        SQLModel.metadata.create_all(self.engine)

    def session(self) -> Session:
        return Session(self.engine)

    def dispose(self):
        self.engine.dispose()


def get_session(request: Request) -> Iterator[Session]:
    """Yield a database `Session` for FastAPI dependency injection.

    The session is closed when the request scope finishes.
    """
    db: Database = request.app.state.db
    with db.session() as session:
        yield session
