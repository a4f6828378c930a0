"""FastAPI dependency implementations."""

from fastapi import Depends, Request
from sqlmodel import Session

from .config import Settings
from .database import get_session
from .services import UserService


def get_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_user_service(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> UserService:
    """Build a request-scoped `UserService` over the request's session."""
    return UserService(session, default_page=settings.DEFAULT_PAGE, default_limit=settings.DEFAULT_LIMIT)
