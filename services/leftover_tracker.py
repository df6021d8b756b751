"""
Leftover Tracker - expiry windows and original/reuse classification.

An original cook (``is_leftover`` false) owns a freshness window
``[cook_date, leftover_expiry_date]``. A reuse (``is_leftover`` true) points at
exactly one original through ``leftover_from_assignment_id`` and carries a copy
of that original's cook date and expiry.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError
from domain.models import MenuAssignment
from domain.planning import AvailableLeftover
from repositories import MenuAssignmentRepository, RecipeTimeRepository

logger = logging.getLogger("menuplanner.leftovers")

DEFAULT_LEFTOVER_DURATION_DAYS = 3


def calculate_leftover_date(
    cook_date: date, duration_days: int = DEFAULT_LEFTOVER_DURATION_DAYS
) -> date:
    """Last day leftovers from a cook on ``cook_date`` are usable."""
    return cook_date + timedelta(days=duration_days)


class LeftoverTracker:
    def __init__(self, db: Session):
        self.db: Session = db
        self.assignments = MenuAssignmentRepository(db)
        self.recipe_times = RecipeTimeRepository(db)

    calculate_leftover_date = staticmethod(calculate_leftover_date)

    # ---------- classification ----------

    def resolve_origin(self, source: MenuAssignment) -> MenuAssignment:
        """
        Follow a reuse back to the original cook it draws from.

        Reuses always point at an original, so at most one hop is needed.

        Raises:
            NotFoundError: the reuse points at an assignment that no longer exists
        """
        if not source.is_leftover or not source.leftover_from_assignment_id:
            return source
        origin = self.assignments.get_by_id(source.leftover_from_assignment_id)
        if origin is None:
            logger.warning(
                "Assignment %s references missing origin %s",
                source.id,
                source.leftover_from_assignment_id,
            )
            raise NotFoundError(
                f"Original cook not found for leftover {source.id}: "
                f"{source.leftover_from_assignment_id}",
                code="SOURCE_ASSIGNMENT_NOT_FOUND",
            )
        return origin

    def link_to_origin(self, assignment: MenuAssignment, origin: MenuAssignment) -> None:
        """Turn an assignment into a reuse of ``origin``, copying its freshness window."""
        assignment.is_leftover = True
        assignment.leftover_from_assignment_id = origin.id
        assignment.recipe_id = origin.recipe_id
        assignment.cook_date = origin.cook_date
        assignment.leftover_expiry_date = origin.leftover_expiry_date

    def mark_fresh(
        self, assignment: MenuAssignment, cook_date: date, duration_days: int
    ) -> None:
        """Treat an assignment as an original cook on ``cook_date``."""
        assignment.is_leftover = False
        assignment.leftover_from_assignment_id = None
        assignment.cook_date = cook_date
        assignment.leftover_expiry_date = calculate_leftover_date(cook_date, duration_days)

    def sync_dependents(self, origin: MenuAssignment) -> int:
        """Copy the origin's recipe, cook date and expiry onto every reuse of it."""
        dependents = self.assignments.get_leftovers_of(origin.id)
        for dependent in dependents:
            if dependent.id == origin.id:
                continue
            self.link_to_origin(dependent, origin)
        if dependents:
            logger.debug("Synchronised %d leftovers of %s", len(dependents), origin.id)
        return len(dependents)

    def repoint_dependents(self, former_origin: MenuAssignment, new_origin: MenuAssignment) -> int:
        """Move every reuse of ``former_origin`` onto ``new_origin``."""
        dependents = self.assignments.get_leftovers_of(former_origin.id)
        for dependent in dependents:
            self.link_to_origin(dependent, new_origin)
        return len(dependents)

    def detach_dependents(
        self,
        origin: MenuAssignment,
        duration_days: int,
        outside_menu_id: Optional[str] = None,
    ) -> int:
        """
        Recompute every reuse of ``origin`` as a fresh cook on its own planned date.

        With ``outside_menu_id``, reuses planned in that menu are left alone.
        """
        dependents = [
            d
            for d in self.assignments.get_leftovers_of(origin.id)
            if outside_menu_id is None or d.menu_id != outside_menu_id
        ]
        for dependent in dependents:
            self.mark_fresh(dependent, dependent.date, duration_days)
        if dependents:
            logger.info(
                "Detached %d leftovers from removed assignment %s", len(dependents), origin.id
            )
        return len(dependents)

    # ---------- queries ----------

    def _to_available(self, assignment: MenuAssignment, reference: date) -> AvailableLeftover:
        return AvailableLeftover(
            assignment=assignment,
            recipe_title=self.recipe_times.get_title(assignment.recipe_id),
            days_until_expiry=(assignment.leftover_expiry_date - reference).days,
        )

    def get_available_leftovers(self, menu_id: str, target_date: date) -> List[AvailableLeftover]:
        """
        Original cooks whose leftovers can be eaten on ``target_date``.

        Only assignments with ``cook_date <= target_date <= expiry`` qualify.
        Sorted soonest-expiring first.
        """
        available = [
            self._to_available(a, target_date)
            for a in self.assignments.get_original_cooks(menu_id)
            if a.cook_date <= target_date <= a.leftover_expiry_date
        ]
        available.sort(key=lambda lo: lo.expiry_date)
        return available

    def get_expiring_leftovers(
        self, menu_id: str, within_days: int = 1, today: Optional[date] = None
    ) -> List[AvailableLeftover]:
        """Original cooks expiring within ``within_days`` of today, already-expired excluded."""
        today = today or date.today()
        expiring: List[AvailableLeftover] = []
        for assignment in self.assignments.get_original_cooks(menu_id):
            if assignment.leftover_expiry_date < today:
                continue
            leftover = self._to_available(assignment, today)
            if leftover.days_until_expiry > within_days:
                continue
            expiring.append(leftover)
        expiring.sort(key=lambda lo: lo.expiry_date)
        return expiring
