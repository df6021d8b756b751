"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.menu_repository import MenuRepository, MenuAssignmentRepository
from repositories.recipe_time_repository import (
    RecipeTimeRepository,
    AuthoredTimes,
    ObservedAverages,
)
from repositories.preference_repository import PreferenceRepository

__all__ = [
    "BaseRepository",
    "MenuRepository",
    "MenuAssignmentRepository",
    "RecipeTimeRepository",
    "AuthoredTimes",
    "ObservedAverages",
    "PreferenceRepository",
]
