"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    create_db_engine,
    make_session_factory,
    init_database,
)
from domain.models.menu import Menu, MenuAssignment
from domain.models.recipe import Recipe, RecipeVersion, CookSession
from domain.models.preference import Preference

__all__ = [
    # Database
    "Base",
    "create_db_engine",
    "make_session_factory",
    "init_database",
    # Menu models
    "Menu",
    "MenuAssignment",
    # Recipe library models
    "Recipe",
    "RecipeVersion",
    "CookSession",
    # Preferences
    "Preference",
]
