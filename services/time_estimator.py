from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from domain.models import MenuAssignment
from domain.planning import (
    AuthoredEstimate,
    DailyTimeEstimate,
    MenuTimeEstimate,
    RecipeTimeEstimate,
    StatisticalEstimate,
)
from repositories import RecipeTimeRepository

logger = logging.getLogger("menuplanner.estimates")


class TimeEstimator:
    """
    Prep/cook duration estimates per recipe, per menu and per day.

    Observed averages from cook sessions win over authored values, half by half.
    """

    def __init__(self, db: Session):
        self.recipe_times = RecipeTimeRepository(db)

    def get_recipe_time_estimate(self, recipe_id: str) -> Optional[RecipeTimeEstimate]:
        authored = self.recipe_times.get_authored_times(recipe_id)
        if authored is None:
            logger.debug("No recipe %s, no time estimate", recipe_id)
            return None

        averages = self.recipe_times.get_observed_averages(recipe_id)
        if averages.has_data:
            prep = (
                _round_minutes(averages.prep_minutes)
                if averages.prep_minutes is not None
                else authored.prep_minutes or 0
            )
            cook = (
                _round_minutes(averages.cook_minutes)
                if averages.cook_minutes is not None
                else authored.cook_minutes or 0
            )
            return StatisticalEstimate(recipe_id=recipe_id, prep_minutes=prep, cook_minutes=cook)

        return AuthoredEstimate(
            recipe_id=recipe_id,
            prep_minutes=authored.prep_minutes or 0,
            cook_minutes=authored.cook_minutes or 0,
        )

    def get_menu_time_estimate(
        self, menu_id: str, assignments: Iterable[MenuAssignment]
    ) -> MenuTimeEstimate:
        """One estimate per distinct recipe; repeats are not double-counted."""
        result = MenuTimeEstimate(menu_id=menu_id)
        seen = set()
        for assignment in assignments:
            if assignment.recipe_id in seen:
                continue
            seen.add(assignment.recipe_id)
            estimate = self.get_recipe_time_estimate(assignment.recipe_id)
            if estimate is not None:
                result.recipe_estimates.append(estimate)
        return result

    def get_daily_time_estimates(
        self, assignments: Iterable[MenuAssignment]
    ) -> List[DailyTimeEstimate]:
        """Per-date totals, each occurrence counted; ascending by date."""
        cache: Dict[str, Optional[RecipeTimeEstimate]] = {}
        by_day: Dict[str, DailyTimeEstimate] = {}
        for assignment in assignments:
            key = assignment.date.isoformat()
            day = by_day.setdefault(key, DailyTimeEstimate(date=assignment.date))
            if assignment.recipe_id not in cache:
                cache[assignment.recipe_id] = self.get_recipe_time_estimate(assignment.recipe_id)
            estimate = cache[assignment.recipe_id]
            if estimate is not None:
                day.add(estimate)
        return [by_day[key] for key in sorted(by_day)]


def _round_minutes(value: float) -> int:
    # half-up; averages are never negative
    return int(value + 0.5)
