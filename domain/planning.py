"""
Planning value objects computed on demand and never persisted.

A recipe time estimate is one of two variants: ``StatisticalEstimate`` when at
least one averaged duration came from logged cook sessions, or
``AuthoredEstimate`` when both halves come from the recipe itself. Callers
branch on the concrete type (or on ``source``) instead of a nullable tag.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import ClassVar, List, Optional, Union

from domain.enums import EstimateSource
from domain.models import MenuAssignment


@dataclass(frozen=True)
class _TimeEstimate:
    recipe_id: str
    prep_minutes: int
    cook_minutes: int

    source: ClassVar[EstimateSource]

    @property
    def total_minutes(self) -> int:
        return self.prep_minutes + self.cook_minutes


@dataclass(frozen=True)
class StatisticalEstimate(_TimeEstimate):
    """Estimate using averaged actual durations from cook history"""

    source: ClassVar[EstimateSource] = EstimateSource.STATISTICAL


@dataclass(frozen=True)
class AuthoredEstimate(_TimeEstimate):
    """Estimate using the durations written on the recipe"""

    source: ClassVar[EstimateSource] = EstimateSource.RECIPE


RecipeTimeEstimate = Union[StatisticalEstimate, AuthoredEstimate]


@dataclass
class MenuTimeEstimate:
    """Totals across the distinct recipes of a menu"""

    menu_id: str
    recipe_estimates: List[RecipeTimeEstimate] = field(default_factory=list)

    @property
    def total_prep_minutes(self) -> int:
        return sum(e.prep_minutes for e in self.recipe_estimates)

    @property
    def total_cook_minutes(self) -> int:
        return sum(e.cook_minutes for e in self.recipe_estimates)

    @property
    def total_minutes(self) -> int:
        return self.total_prep_minutes + self.total_cook_minutes


@dataclass
class DailyTimeEstimate:
    """Accumulated prep/cook minutes for one calendar date"""

    date: date
    total_prep_minutes: int = 0
    total_cook_minutes: int = 0

    @property
    def total_minutes(self) -> int:
        return self.total_prep_minutes + self.total_cook_minutes

    def add(self, estimate: RecipeTimeEstimate) -> None:
        self.total_prep_minutes += estimate.prep_minutes
        self.total_cook_minutes += estimate.cook_minutes


@dataclass
class AvailableLeftover:
    """An original cook whose leftovers are usable on some reference date"""

    assignment: MenuAssignment
    recipe_title: Optional[str]
    days_until_expiry: int

    @property
    def recipe_id(self) -> str:
        return self.assignment.recipe_id

    @property
    def expiry_date(self) -> date:
        return self.assignment.leftover_expiry_date

    @property
    def is_expiring_soon(self) -> bool:
        return self.days_until_expiry <= 1
