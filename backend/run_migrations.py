"""Simple migration runner for SQLite using the SQL files in migrations/"""
import os
from pathlib import Path
import sqlite3
from typing import Optional

BASE = Path(__file__).parent
MIGRATIONS = sorted((BASE / "migrations").glob("*.sql"))


def sqlite_path(url: str) -> Path:
    """Return the file path behind a `sqlite:///...` URL."""
    prefix = "sqlite:///"
    if not url.startswith(prefix):
        raise SystemExit(f"run_migrations only handles SQLite URLs, got {url!r}")
    return Path(url[len(prefix):])


def run(db_path: Optional[Path] = None):
    """Execute SQL migration files against the local SQLite database.

    The function applies every `migrations/*.sql` file in lexical
    order. Each file is idempotent, so re-running is safe.
    """
    if db_path is None:
        db_path = sqlite_path(os.getenv("DATABASE_URL", f"sqlite:///{BASE / 'users.db'}"))
    print("Using database:", db_path)
    conn = sqlite3.connect(db_path)
    cur = conn.cursor()
    for m in MIGRATIONS:
        print("Applying:", m.name)
        sql = m.read_text(encoding="utf-8")
        cur.executescript(sql)
    conn.commit()
    conn.close()
    print("Migrations applied.")


if __name__ == '__main__':
    run()
