"""
Assignment Service - lifecycle of recipes planned into a menu.

Every operation validates its menu and assignment references, stages changes
through the repositories and commits once. Any failure rolls the session back
and re-raises unchanged.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from app.config import Settings
from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import MealSlot
from domain.models import Menu, MenuAssignment
from domain.schemas.menu_schemas import AssignmentCreate
from repositories import MenuAssignmentRepository, MenuRepository
from services.leftover_tracker import LeftoverTracker
from services.preferences_service import PreferencesService

logger = logging.getLogger("menuplanner.assignments")


class AssignmentService:
    def __init__(
        self,
        db: Session,
        tracker: Optional[LeftoverTracker] = None,
        preferences: Optional[PreferencesService] = None,
        settings: Optional[Settings] = None,
    ):
        self.db: Session = db
        self.menus = MenuRepository(db)
        self.assignments = MenuAssignmentRepository(db)
        self.tracker = tracker or LeftoverTracker(db)
        self.preferences = preferences or PreferencesService(db, settings)

    # ---------- lookups ----------

    def _require_menu(self, menu_id: str) -> Menu:
        menu = self.menus.get_by_id(menu_id)
        if menu is None:
            raise NotFoundError(f"Menu not found: {menu_id}", code="MENU_NOT_FOUND")
        return menu

    def _require_assignment(self, menu_id: str, assignment_id: str) -> MenuAssignment:
        assignment = self.assignments.get_by_id(assignment_id)
        if assignment is None:
            raise NotFoundError(
                f"Assignment not found: {assignment_id}", code="ASSIGNMENT_NOT_FOUND"
            )
        if assignment.menu_id != menu_id:
            raise NotFoundError(
                f"Assignment {assignment_id} does not belong to menu {menu_id}",
                code="ASSIGNMENT_NOT_FOUND",
            )
        return assignment

    def _require_source(self, source_assignment_id: str) -> MenuAssignment:
        source = self.assignments.get_by_id(source_assignment_id)
        if source is None:
            raise NotFoundError(
                f"Source assignment not found: {source_assignment_id}",
                code="SOURCE_ASSIGNMENT_NOT_FOUND",
            )
        return source

    @staticmethod
    def _require_in_range(menu: Menu, day: date, field: str = "date") -> None:
        if not menu.contains(day):
            raise ServiceValidationError(
                f"Assignment date {day} must be within menu date range "
                f"{menu.start_date}..{menu.end_date}",
                details={"field": field, "start_date": str(menu.start_date), "end_date": str(menu.end_date)},
            )

    def get_assignment(self, assignment_id: str) -> Optional[MenuAssignment]:
        return self.assignments.get_by_id(assignment_id)

    # ---------- lifecycle ----------

    def assign_recipe(self, menu_id: str, data: AssignmentCreate) -> MenuAssignment:
        """
        Plan a recipe on a date and meal slot.

        Reuses (``is_leftover`` with a source) take the cook date and expiry of
        the original cook they draw from, ignoring ``cook_date``. Fresh cooks
        default ``cook_date`` to the planned date and expire
        ``leftover_duration_days`` later (the stored default when omitted).

        Raises:
            NotFoundError: menu or source assignment missing
            ServiceValidationError: date outside the menu range, or a reuse without a source
        """
        menu = self._require_menu(menu_id)
        self._require_in_range(menu, data.date)

        servings = data.servings if data.servings is not None else self.preferences.get_default_servings()
        assignment = MenuAssignment(
            menu_id=menu.id,
            recipe_id=data.recipe_id,
            date=data.date,
            meal_slot=MealSlot(data.meal_slot).value,
            servings=servings,
        )

        if data.is_leftover:
            if not data.leftover_from_assignment_id:
                raise ServiceValidationError(
                    "Leftover assignments require a source assignment",
                    details={"field": "leftover_from_assignment_id"},
                )
            origin = self.tracker.resolve_origin(self._require_source(data.leftover_from_assignment_id))
            if origin.recipe_id != data.recipe_id:
                logger.warning(
                    "Leftover of %s planned with recipe %s; using origin recipe %s",
                    origin.id,
                    data.recipe_id,
                    origin.recipe_id,
                )
            self.tracker.link_to_origin(assignment, origin)
        else:
            if data.leftover_from_assignment_id:
                logger.debug("Ignoring leftover source on a fresh cook for menu %s", menu_id)
            duration = (
                data.leftover_duration_days
                if data.leftover_duration_days is not None
                else self.preferences.get_default_leftover_duration_days()
            )
            self.tracker.mark_fresh(assignment, data.cook_date or data.date, duration)

        try:
            self.assignments.add(assignment)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Assigned recipe %s to menu %s on %s (%s, leftover=%s)",
            assignment.recipe_id,
            menu_id,
            assignment.date,
            assignment.meal_slot,
            assignment.is_leftover,
        )
        return assignment

    def assign_leftover(
        self,
        menu_id: str,
        source_assignment_id: str,
        day: date,
        meal_slot: MealSlot,
        servings: Optional[int] = None,
    ) -> MenuAssignment:
        """Plan a meal that eats the leftovers of an existing assignment."""
        source = self._require_source(source_assignment_id)
        return self.assign_recipe(
            menu_id,
            AssignmentCreate(
                recipe_id=source.recipe_id,
                date=day,
                meal_slot=meal_slot,
                servings=servings if servings is not None else source.servings,
                cook_date=source.cook_date,
                leftover_from_assignment_id=source.id,
                is_leftover=True,
            ),
        )

    def remove_assignment(self, menu_id: str, assignment_id: str) -> None:
        """Delete an assignment; reuses of a removed original become fresh cooks."""
        assignment = self._require_assignment(menu_id, assignment_id)
        try:
            if not assignment.is_leftover:
                self.tracker.detach_dependents(
                    assignment, self.preferences.get_default_leftover_duration_days()
                )
            self.assignments.delete(assignment)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Removed assignment %s from menu %s", assignment_id, menu_id)

    def move_assignment(
        self,
        menu_id: str,
        assignment_id: str,
        new_date: date,
        new_meal_slot: Optional[MealSlot] = None,
        new_cook_date: Optional[date] = None,
    ) -> MenuAssignment:
        """
        Move an assignment to another date/slot and recompute it as a fresh cook.

        Reuses that point at the moved assignment follow its new cook date and
        expiry.
        """
        menu = self._require_menu(menu_id)
        assignment = self._require_assignment(menu_id, assignment_id)
        self._require_in_range(menu, new_date)

        if assignment.is_leftover:
            # TODO: confirm with product whether moving a reuse should keep its
            # leftover link (or move the whole chain); today it becomes an original.
            logger.info(
                "Moving leftover %s breaks its link to %s",
                assignment.id,
                assignment.leftover_from_assignment_id,
            )

        try:
            assignment.date = new_date
            if new_meal_slot is not None:
                assignment.meal_slot = MealSlot(new_meal_slot).value
            self.tracker.mark_fresh(
                assignment,
                new_cook_date or new_date,
                self.preferences.get_default_leftover_duration_days(),
            )
            self.assignments.save(assignment)
            self.tracker.sync_dependents(assignment)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Moved assignment %s to %s (%s), cook %s, expires %s",
            assignment.id,
            assignment.date,
            assignment.meal_slot,
            assignment.cook_date,
            assignment.leftover_expiry_date,
        )
        return assignment

    def mark_as_leftover(
        self, menu_id: str, assignment_id: str, source_assignment_id: str
    ) -> MenuAssignment:
        """Convert an assignment in place into a reuse of another assignment's cook."""
        self._require_menu(menu_id)
        assignment = self._require_assignment(menu_id, assignment_id)
        origin = self.tracker.resolve_origin(self._require_source(source_assignment_id))
        if origin.id == assignment.id:
            raise ServiceValidationError(
                "An assignment cannot be a leftover of itself",
                details={"assignment_id": assignment_id, "source_assignment_id": source_assignment_id},
            )

        try:
            moved = self.tracker.repoint_dependents(assignment, origin)
            self.tracker.link_to_origin(assignment, origin)
            self.assignments.save(assignment)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Marked assignment %s as leftover of %s (%d reuses re-pointed)",
            assignment.id,
            origin.id,
            moved,
        )
        return assignment
