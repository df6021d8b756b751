"""
API dependencies for dependency injection
"""

from typing import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.config import Settings
from services.menu_service import MenuService
from services.preferences_service import PreferencesService


def get_settings(request: Request) -> Settings:
    """Settings the application was started with"""
    return request.app.state.settings


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    The session factory is created once at startup and kept on ``app.state``.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_menu_service(
    db: Session = Depends(get_db), settings: Settings = Depends(get_settings)
) -> MenuService:
    return MenuService(db, settings)


def get_preferences_service(
    db: Session = Depends(get_db), settings: Settings = Depends(get_settings)
) -> PreferencesService:
    return PreferencesService(db, settings)
