"""
Recipe and cook-history tables.

These belong to the recipe library; the planner only reads them to resolve
titles and prep/cook durations.
"""

from sqlalchemy import (
    Column,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    TIMESTAMP,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


class Recipe(Base):
    """Recipe identity; content lives in versions"""

    __tablename__ = "recipes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    current_version = Column(Integer, nullable=False, default=1)
    archived_at = Column(TIMESTAMP(timezone=True), nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    versions = relationship(
        "RecipeVersion", back_populates="recipe", cascade="all, delete-orphan"
    )


class RecipeVersion(Base):
    """A saved revision of a recipe"""

    __tablename__ = "recipe_versions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    recipe_id = Column(String(36), ForeignKey("recipes.id"), nullable=False)
    version = Column(Integer, nullable=False)
    title = Column(Text, nullable=False)
    prep_time_minutes = Column(Integer, nullable=True)
    cook_time_minutes = Column(Integer, nullable=True)
    servings = Column(Integer, nullable=False, default=4)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    recipe = relationship("Recipe", back_populates="versions")

    __table_args__ = (UniqueConstraint("recipe_id", "version"),)


class CookSession(Base):
    """Log of one time a recipe was actually cooked"""

    __tablename__ = "cook_sessions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    recipe_id = Column(String(36), ForeignKey("recipes.id"), nullable=False)
    date = Column(Date, nullable=False)
    actual_prep_minutes = Column(Integer, nullable=True)
    actual_cook_minutes = Column(Integer, nullable=True)
    servings_made = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)

    __table_args__ = (Index("idx_cook_sessions_recipe", "recipe_id"),)
