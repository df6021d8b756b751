"""
Read-only access to recipe titles, authored durations and cook-session averages.
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session

from domain.models import CookSession, Recipe, RecipeVersion


@dataclass(frozen=True)
class AuthoredTimes:
    """Prep/cook minutes written on the current recipe version"""

    title: str
    prep_minutes: Optional[int]
    cook_minutes: Optional[int]


@dataclass(frozen=True)
class ObservedAverages:
    """Mean actual prep/cook minutes across logged cook sessions"""

    prep_minutes: Optional[float]
    cook_minutes: Optional[float]

    @property
    def has_data(self) -> bool:
        return self.prep_minutes is not None or self.cook_minutes is not None


class RecipeTimeRepository:
    """
    Recipe time source for the planner.
    Reads the current recipe version and the cook_sessions history.
    """

    def __init__(self, db: Session):
        self.db: Session = db

    def _current_version(self, recipe_id: str) -> Optional[RecipeVersion]:
        return (
            self.db.query(RecipeVersion)
            .join(
                Recipe,
                and_(
                    Recipe.id == RecipeVersion.recipe_id,
                    Recipe.current_version == RecipeVersion.version,
                ),
            )
            .filter(Recipe.id == recipe_id)
            .first()
        )

    def get_authored_times(self, recipe_id: str) -> Optional[AuthoredTimes]:
        """Authored durations, or None when the recipe does not exist"""
        version = self._current_version(recipe_id)
        if version is None:
            return None
        return AuthoredTimes(
            title=version.title,
            prep_minutes=version.prep_time_minutes,
            cook_minutes=version.cook_time_minutes,
        )

    def get_observed_averages(self, recipe_id: str) -> ObservedAverages:
        """Averages over sessions that logged at least one actual duration"""
        row = (
            self.db.query(
                func.avg(CookSession.actual_prep_minutes),
                func.avg(CookSession.actual_cook_minutes),
            )
            .filter(
                CookSession.recipe_id == recipe_id,
                or_(
                    CookSession.actual_prep_minutes.isnot(None),
                    CookSession.actual_cook_minutes.isnot(None),
                ),
            )
            .one()
        )
        avg_prep, avg_cook = row
        return ObservedAverages(
            prep_minutes=float(avg_prep) if avg_prep is not None else None,
            cook_minutes=float(avg_cook) if avg_cook is not None else None,
        )

    def get_title(self, recipe_id: str) -> Optional[str]:
        version = self._current_version(recipe_id)
        return version.title if version else None
