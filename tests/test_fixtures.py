"""
Shared test fixtures and utilities for the menu planner test suite.

Every test gets its own in-memory SQLite database, so services run against a
real SQLAlchemy session without any external server.
"""

from datetime import date, timedelta
from typing import Generator, Optional

import pytest
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from app.config import Settings
from domain.enums import MealSlot
from domain.models import (
    CookSession,
    Recipe,
    RecipeVersion,
    create_db_engine,
    init_database,
    make_session_factory,
)
from domain.schemas.menu_schemas import AssignmentCreate

# A Monday-to-Sunday planning week
MONDAY = date(2025, 3, 3)
TUESDAY = MONDAY + timedelta(days=1)
WEDNESDAY = MONDAY + timedelta(days=2)
THURSDAY = MONDAY + timedelta(days=3)
FRIDAY = MONDAY + timedelta(days=4)
SATURDAY = MONDAY + timedelta(days=5)
SUNDAY = MONDAY + timedelta(days=6)


def make_settings(**overrides) -> Settings:
    values = {"environment": "testing", "database_url": "sqlite://"}
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def planner_settings() -> Settings:
    return make_settings()


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture(scope="function")
def db_session(session_factory) -> Generator[Session, None, None]:
    """
    Database session on a fresh in-memory database.

    Yields:
        Session: SQLAlchemy database session
    """
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(session_factory, planner_settings):
    """TestClient whose requests share the test database"""
    from fastapi.testclient import TestClient
    from main import create_app

    app = create_app(planner_settings)
    app.state.session_factory = session_factory
    return TestClient(app)


def make_recipe(
    db: Session,
    title: str = "Chili",
    prep_minutes: Optional[int] = 20,
    cook_minutes: Optional[int] = 60,
    servings: int = 4,
) -> Recipe:
    """
    Create a recipe with one current version.

    Example:
        >>> chili = make_recipe(db)  # 20 min prep, 60 min cook
        >>> soup = make_recipe(db, "Lentil Soup", prep_minutes=15, cook_minutes=None)
    """
    recipe = Recipe(current_version=1)
    db.add(recipe)
    db.flush()
    db.add(
        RecipeVersion(
            recipe_id=recipe.id,
            version=1,
            title=title,
            prep_time_minutes=prep_minutes,
            cook_time_minutes=cook_minutes,
            servings=servings,
        )
    )
    db.commit()
    return recipe


def log_cook_session(
    db: Session,
    recipe_id: str,
    prep_minutes: Optional[int] = None,
    cook_minutes: Optional[int] = None,
    cooked_on: date = MONDAY,
) -> CookSession:
    """Record one actual cook of a recipe"""
    cook = CookSession(
        recipe_id=recipe_id,
        date=cooked_on,
        actual_prep_minutes=prep_minutes,
        actual_cook_minutes=cook_minutes,
    )
    db.add(cook)
    db.commit()
    return cook


def plan(
    recipe_id: str,
    day: date,
    slot: MealSlot = MealSlot.DINNER,
    **kwargs,
) -> AssignmentCreate:
    """Shorthand for an AssignmentCreate payload"""
    return AssignmentCreate(recipe_id=recipe_id, date=day, meal_slot=slot, **kwargs)
