"""Application settings and validation."""

import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent
API_STYLES = ("rest", "envelope")


class Settings:
    DATABASE_URL: str
    DB_ECHO: bool
    API_STYLE: str
    DEFAULT_PAGE: int
    DEFAULT_LIMIT: int
    LOG_LEVEL: str
    ALLOW_DEV_CORS: bool
    HOST: str
    PORT: int

    def __init__(self):
        self.DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE / 'users.db'}")
        self.DB_ECHO = os.getenv("DB_ECHO", "false").lower() == "true"
        self.API_STYLE = os.getenv("API_STYLE", "rest").lower()
        self.DEFAULT_PAGE = int(os.getenv("DEFAULT_PAGE", "1"))
        self.DEFAULT_LIMIT = int(os.getenv("DEFAULT_LIMIT", "10"))
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self.HOST = os.getenv("HOST", "127.0.0.1")
        self.PORT = int(os.getenv("PORT", "8080"))
        self._validate()

    def _validate(self):
        if self.API_STYLE not in API_STYLES:
            raise RuntimeError(f"API_STYLE must be one of {', '.join(API_STYLES)}, got {self.API_STYLE!r}")
        if self.DEFAULT_PAGE <= 0 or self.DEFAULT_LIMIT <= 0:
            raise RuntimeError("DEFAULT_PAGE and DEFAULT_LIMIT must be positive")


settings = Settings()
