import pytest
from fastapi.testclient import TestClient

from user_service.config import Settings
from user_service.database import Database
from user_service.main import create_app


@pytest.fixture
def db(tmp_path):
    """A fresh SQLite database file per test."""
    database = Database(f"sqlite:///{tmp_path / 'users.db'}")
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def session(db):
    with db.session() as s:
        yield s


@pytest.fixture
def make_client(monkeypatch, tmp_path):
    """Build a TestClient for the given API style against a temp database."""
    clients = []

    def _make(style: str = "rest", **env) -> TestClient:
        monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / f'{style}.db'}")
        monkeypatch.setenv("API_STYLE", style)
        for key, value in env.items():
            monkeypatch.setenv(key, str(value))
        client = TestClient(create_app(Settings()))
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    return make_client("rest")


@pytest.fixture
def envelope_client(make_client):
    return make_client("envelope")
