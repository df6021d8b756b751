"""
Menu Repository - Data access layer for menus and their assignments
"""

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Menu, MenuAssignment
from domain.models.menu import assignment_ordering


class MenuRepository(BaseRepository[Menu]):
    """Repository for menu data access"""

    def __init__(self, db: Session):
        super().__init__(db, Menu)

    def list_all(self) -> List[Menu]:
        """All menus, most recent start date first"""
        return self.db.query(Menu).order_by(Menu.start_date.desc()).all()

    def find_containing(self, day: date) -> Optional[Menu]:
        """Menu whose range contains the day; the latest-starting one wins"""
        return (
            self.db.query(Menu)
            .filter(Menu.start_date <= day, Menu.end_date >= day)
            .order_by(Menu.start_date.desc())
            .first()
        )

    def find_next_upcoming(self, day: date) -> Optional[Menu]:
        """Nearest menu starting after the day"""
        return (
            self.db.query(Menu)
            .filter(Menu.start_date > day)
            .order_by(Menu.start_date.asc())
            .first()
        )

    def find_most_recently_ended(self) -> Optional[Menu]:
        return self.db.query(Menu).order_by(Menu.end_date.desc()).first()


class MenuAssignmentRepository(BaseRepository[MenuAssignment]):
    """Repository for menu assignment data access"""

    def __init__(self, db: Session):
        super().__init__(db, MenuAssignment)

    def get_by_menu_id(self, menu_id: str) -> List[MenuAssignment]:
        """Assignments of a menu ordered by date then meal slot"""
        return (
            self.db.query(MenuAssignment)
            .filter(MenuAssignment.menu_id == menu_id)
            .order_by(*assignment_ordering())
            .all()
        )

    def get_in_range(self, menu_id: str, start: date, end: date) -> List[MenuAssignment]:
        """Assignments of a menu planned between start and end inclusive"""
        return (
            self.db.query(MenuAssignment)
            .filter(
                MenuAssignment.menu_id == menu_id,
                MenuAssignment.date >= start,
                MenuAssignment.date <= end,
            )
            .order_by(*assignment_ordering())
            .all()
        )

    def get_original_cooks(self, menu_id: str) -> List[MenuAssignment]:
        """Non-leftover assignments of a menu that carry an expiry date"""
        return (
            self.db.query(MenuAssignment)
            .filter(
                MenuAssignment.menu_id == menu_id,
                MenuAssignment.is_leftover.is_(False),
                MenuAssignment.leftover_expiry_date.isnot(None),
            )
            .order_by(*assignment_ordering())
            .all()
        )

    def get_leftovers_of(self, source_assignment_id: str) -> List[MenuAssignment]:
        """Assignments that reuse the given original cook"""
        return (
            self.db.query(MenuAssignment)
            .filter(MenuAssignment.leftover_from_assignment_id == source_assignment_id)
            .order_by(*assignment_ordering())
            .all()
        )

    def delete_by_menu_id(self, menu_id: str) -> int:
        """Delete every assignment of a menu; returns the number removed"""
        assignments = self.get_by_menu_id(menu_id)
        # Drop back-references first so rows can go in any order
        for assignment in assignments:
            assignment.leftover_from_assignment_id = None
        self.db.flush()
        for assignment in assignments:
            self.db.delete(assignment)
        self.db.flush()
        return len(assignments)
