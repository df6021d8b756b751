"""
Menu planning models.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    TIMESTAMP,
    case,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.enums import MEAL_SLOT_ORDER
from domain.models.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class Menu(Base):
    """Named planning window with an inclusive date range"""

    __tablename__ = "menus"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(Text, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    assignments = relationship(
        "MenuAssignment",
        back_populates="menu",
        cascade="all, delete-orphan",
        order_by=lambda: assignment_ordering(),
    )

    def contains(self, day) -> bool:
        return self.start_date <= day <= self.end_date

    def __repr__(self) -> str:
        return f"<Menu {self.id} {self.name!r} {self.start_date}..{self.end_date}>"


class MenuAssignment(Base):
    """One recipe planned for one date and meal slot within a menu"""

    __tablename__ = "menu_assignments"

    id = Column(String(36), primary_key=True, default=_new_id)
    menu_id = Column(
        String(36), ForeignKey("menus.id", ondelete="CASCADE"), nullable=False
    )
    recipe_id = Column(String(36), nullable=False)
    date = Column(Date, nullable=False)
    meal_slot = Column(Text, nullable=False)  # breakfast, lunch, dinner, snack
    servings = Column(Integer, nullable=False, default=4)
    cook_date = Column(Date, nullable=False)
    leftover_expiry_date = Column(Date, nullable=True)
    leftover_from_assignment_id = Column(
        String(36), ForeignKey("menu_assignments.id"), nullable=True
    )
    is_leftover = Column(Boolean, nullable=False, default=False)

    menu = relationship("Menu", back_populates="assignments")

    __table_args__ = (
        Index("idx_menu_assignments_menu", "menu_id"),
        Index("idx_menu_assignments_date", "date"),
    )

    def __repr__(self) -> str:
        kind = "leftover" if self.is_leftover else "cook"
        return f"<MenuAssignment {self.id} {self.recipe_id} {self.date} {self.meal_slot} {kind}>"


def assignment_ordering():
    """Order assignments by date, then by slot position within the day."""
    slot_position = case(
        MEAL_SLOT_ORDER, value=MenuAssignment.meal_slot, else_=len(MEAL_SLOT_ORDER)
    )
    return [MenuAssignment.date, slot_position]
