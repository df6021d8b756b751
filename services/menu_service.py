"""
Menu Service - facade for menu planning.

Validates menu date ranges, owns menu CRUD, and composes the assignment
lifecycle, the leftover tracker and the time estimator behind one object.
The caller supplies the session (and optionally settings); nothing here reads
process-wide state.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from app.config import Settings
from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import MealSlot
from domain.models import Menu, MenuAssignment
from domain.planning import (
    AvailableLeftover,
    DailyTimeEstimate,
    MenuTimeEstimate,
    RecipeTimeEstimate,
)
from domain.schemas.menu_schemas import AssignmentCreate, MenuUpdate
from repositories import MenuAssignmentRepository, MenuRepository
from services.assignment_service import AssignmentService
from services.leftover_tracker import LeftoverTracker, calculate_leftover_date
from services.preferences_service import PreferencesService
from services.time_estimator import TimeEstimator

logger = logging.getLogger("menuplanner.menus")


def _validate_range(start_date: date, end_date: date) -> None:
    if start_date > end_date:
        raise ServiceValidationError(
            "Start date must be before or equal to end date",
            details={"start_date": str(start_date), "end_date": str(end_date)},
        )


def _validate_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ServiceValidationError("Menu name must not be empty", details={"field": "name"})
    return cleaned


class MenuService:
    def __init__(self, db: Session, settings: Optional[Settings] = None):
        self.db: Session = db
        self.settings = settings or Settings()
        self.menus = MenuRepository(db)
        self.assignments = MenuAssignmentRepository(db)
        self.preferences = PreferencesService(db, self.settings)
        self.leftovers = LeftoverTracker(db)
        self.estimator = TimeEstimator(db)
        self.assignment_service = AssignmentService(
            db, tracker=self.leftovers, preferences=self.preferences
        )

    def _require_menu(self, menu_id: str) -> Menu:
        menu = self.menus.get_by_id(menu_id)
        if menu is None:
            raise NotFoundError(f"Menu not found: {menu_id}", code="MENU_NOT_FOUND")
        return menu

    # ---------- menus ----------

    def create_menu(self, name: str, start_date: date, end_date: date) -> Menu:
        """Create a menu over the inclusive range ``start_date..end_date``."""
        _validate_range(start_date, end_date)
        menu = Menu(name=_validate_name(name), start_date=start_date, end_date=end_date)
        try:
            self.menus.add(menu)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Created menu %s '%s' %s..%s", menu.id, menu.name, start_date, end_date)
        return menu

    def get_menu(self, menu_id: str) -> Optional[Menu]:
        return self.menus.get_by_id(menu_id)

    def get_all_menus(self) -> List[Menu]:
        return self.menus.list_all()

    def menu_exists(self, menu_id: str) -> bool:
        return self.menus.exists(menu_id)

    def update_menu(self, menu_id: str, updates: MenuUpdate) -> Menu:
        """Merge the provided fields over the stored menu and re-validate its range."""
        menu = self._require_menu(menu_id)

        new_name = _validate_name(updates.name) if updates.name is not None else menu.name
        new_start = updates.start_date if updates.start_date is not None else menu.start_date
        new_end = updates.end_date if updates.end_date is not None else menu.end_date
        _validate_range(new_start, new_end)

        try:
            menu.name = new_name
            menu.start_date = new_start
            menu.end_date = new_end
            self.menus.save(menu)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Updated menu %s", menu_id)
        return menu

    def delete_menu(self, menu_id: str) -> None:
        """
        Remove every assignment of the menu, then the menu, in one transaction.

        Reuses in other menus that draw from this menu's cooks become fresh cooks.
        """
        menu = self._require_menu(menu_id)
        try:
            duration = self.preferences.get_default_leftover_duration_days()
            for original in self.assignments.get_original_cooks(menu_id):
                self.leftovers.detach_dependents(original, duration, outside_menu_id=menu_id)
            removed = self.assignments.delete_by_menu_id(menu_id)
            self.db.expire(menu, ["assignments"])
            self.menus.delete(menu)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Deleted menu %s with %d assignments", menu_id, removed)

    def get_current_menu(self, today: Optional[date] = None) -> Optional[Menu]:
        """
        Menu to show by default.

        A menu containing today wins, then the nearest upcoming one, then the
        most recently ended one.
        """
        today = today or date.today()
        return (
            self.menus.find_containing(today)
            or self.menus.find_next_upcoming(today)
            or self.menus.find_most_recently_ended()
        )

    # ---------- assignments ----------

    def get_assignment(self, assignment_id: str) -> Optional[MenuAssignment]:
        return self.assignments.get_by_id(assignment_id)

    def get_assignments(
        self, menu_id: str, start: Optional[date] = None, end: Optional[date] = None
    ) -> List[MenuAssignment]:
        """Assignments of a menu ordered by date then slot, optionally within a date window."""
        menu = self._require_menu(menu_id)
        if start is None and end is None:
            return self.assignments.get_by_menu_id(menu_id)
        return self.assignments.get_in_range(
            menu_id, start or menu.start_date, end or menu.end_date
        )

    def assign_recipe(self, menu_id: str, data: AssignmentCreate) -> MenuAssignment:
        return self.assignment_service.assign_recipe(menu_id, data)

    def assign_leftover(
        self,
        menu_id: str,
        source_assignment_id: str,
        day: date,
        meal_slot: MealSlot,
        servings: Optional[int] = None,
    ) -> MenuAssignment:
        return self.assignment_service.assign_leftover(
            menu_id, source_assignment_id, day, meal_slot, servings
        )

    def mark_as_leftover(
        self, menu_id: str, assignment_id: str, source_assignment_id: str
    ) -> MenuAssignment:
        return self.assignment_service.mark_as_leftover(menu_id, assignment_id, source_assignment_id)

    def move_assignment(
        self,
        menu_id: str,
        assignment_id: str,
        new_date: date,
        new_meal_slot: Optional[MealSlot] = None,
        new_cook_date: Optional[date] = None,
    ) -> MenuAssignment:
        return self.assignment_service.move_assignment(
            menu_id, assignment_id, new_date, new_meal_slot, new_cook_date
        )

    def remove_assignment(self, menu_id: str, assignment_id: str) -> None:
        self.assignment_service.remove_assignment(menu_id, assignment_id)

    # ---------- leftovers ----------

    calculate_leftover_date = staticmethod(calculate_leftover_date)

    def get_available_leftovers(self, menu_id: str, target_date: date) -> List[AvailableLeftover]:
        self._require_menu(menu_id)
        return self.leftovers.get_available_leftovers(menu_id, target_date)

    def get_expiring_leftovers(
        self, menu_id: str, within_days: int = 1, today: Optional[date] = None
    ) -> List[AvailableLeftover]:
        self._require_menu(menu_id)
        return self.leftovers.get_expiring_leftovers(menu_id, within_days, today)

    # ---------- time estimates ----------

    def get_recipe_time_estimate(self, recipe_id: str) -> Optional[RecipeTimeEstimate]:
        return self.estimator.get_recipe_time_estimate(recipe_id)

    def get_menu_time_estimate(self, menu_id: str) -> MenuTimeEstimate:
        self._require_menu(menu_id)
        return self.estimator.get_menu_time_estimate(
            menu_id, self.assignments.get_by_menu_id(menu_id)
        )

    def get_daily_time_estimates(self, menu_id: str) -> List[DailyTimeEstimate]:
        self._require_menu(menu_id)
        return self.estimator.get_daily_time_estimates(self.assignments.get_by_menu_id(menu_id))
