"""
Tests for recipe, menu and daily time estimates.
"""

import pytest

from test_fixtures import (
    MONDAY,
    TUESDAY,
    WEDNESDAY,
    SUNDAY,
    log_cook_session,
    make_recipe,
    plan,
)
from app.exceptions import NotFoundError
from domain.enums import EstimateSource, MealSlot
from domain.models import RecipeVersion
from domain.planning import AuthoredEstimate, StatisticalEstimate
from services.menu_service import MenuService
from services.time_estimator import TimeEstimator


@pytest.fixture
def estimator(db_session):
    return TimeEstimator(db_session)


@pytest.fixture
def service(db_session):
    return MenuService(db_session)


# =============================================================================
# RECIPE ESTIMATES
# =============================================================================


def test_estimate_from_authored_times(db_session, estimator):
    chili = make_recipe(db_session, "Chili", prep_minutes=20, cook_minutes=60)

    estimate = estimator.get_recipe_time_estimate(chili.id)

    assert isinstance(estimate, AuthoredEstimate)
    assert estimate.source == EstimateSource.RECIPE
    assert estimate.prep_minutes == 20
    assert estimate.cook_minutes == 60
    assert estimate.total_minutes == 80


def test_missing_authored_values_count_as_zero(db_session, estimator):
    salad = make_recipe(db_session, "Salad", prep_minutes=10, cook_minutes=None)

    estimate = estimator.get_recipe_time_estimate(salad.id)

    assert estimate.cook_minutes == 0
    assert estimate.total_minutes == 10


def test_unknown_recipe_has_no_estimate(estimator):
    assert estimator.get_recipe_time_estimate("missing") is None


def test_averages_replace_authored_times(db_session, estimator):
    chili = make_recipe(db_session, "Chili", prep_minutes=20, cook_minutes=60)
    log_cook_session(db_session, chili.id, prep_minutes=30, cook_minutes=50)
    log_cook_session(db_session, chili.id, prep_minutes=20, cook_minutes=40)

    estimate = estimator.get_recipe_time_estimate(chili.id)

    assert isinstance(estimate, StatisticalEstimate)
    assert estimate.source == EstimateSource.STATISTICAL
    assert estimate.prep_minutes == 25
    assert estimate.cook_minutes == 45


def test_each_half_falls_back_independently(db_session, estimator):
    chili = make_recipe(db_session, "Chili", prep_minutes=20, cook_minutes=60)
    log_cook_session(db_session, chili.id, cook_minutes=45)

    estimate = estimator.get_recipe_time_estimate(chili.id)

    assert estimate.source == EstimateSource.STATISTICAL
    assert estimate.prep_minutes == 20
    assert estimate.cook_minutes == 45


def test_sessions_without_durations_are_ignored(db_session, estimator):
    chili = make_recipe(db_session, "Chili", prep_minutes=20, cook_minutes=60)
    log_cook_session(db_session, chili.id)

    estimate = estimator.get_recipe_time_estimate(chili.id)

    assert estimate.source == EstimateSource.RECIPE
    assert estimate.total_minutes == 80


@pytest.mark.parametrize(
    "prep_values, expected",
    [
        ([10, 11], 11),  # 10.5 rounds up
        ([10, 10, 11], 10),  # 10.33
        ([10, 11, 11], 11),  # 10.67
    ],
)
def test_averages_round_to_nearest_minute(db_session, estimator, prep_values, expected):
    chili = make_recipe(db_session, "Chili")
    for minutes in prep_values:
        log_cook_session(db_session, chili.id, prep_minutes=minutes)

    assert estimator.get_recipe_time_estimate(chili.id).prep_minutes == expected


def test_estimate_uses_current_recipe_version(db_session, estimator):
    chili = make_recipe(db_session, "Chili", prep_minutes=20, cook_minutes=60)
    db_session.add(
        RecipeVersion(
            recipe_id=chili.id,
            version=2,
            title="Quick Chili",
            prep_time_minutes=10,
            cook_time_minutes=30,
            servings=4,
        )
    )
    chili.current_version = 2
    db_session.commit()

    estimate = estimator.get_recipe_time_estimate(chili.id)

    assert (estimate.prep_minutes, estimate.cook_minutes) == (10, 30)


def test_sessions_of_other_recipes_do_not_leak(db_session, estimator):
    chili = make_recipe(db_session, "Chili", prep_minutes=20, cook_minutes=60)
    tacos = make_recipe(db_session, "Tacos", prep_minutes=15, cook_minutes=15)
    log_cook_session(db_session, tacos.id, prep_minutes=5, cook_minutes=5)

    assert estimator.get_recipe_time_estimate(chili.id).source == EstimateSource.RECIPE


# =============================================================================
# MENU AND DAILY ESTIMATES
# =============================================================================


@pytest.fixture
def planned_week(db_session, service):
    """
    Chili on Monday, reused Wednesday; Tacos on Tuesday and Monday lunch.
    """
    chili = make_recipe(db_session, "Chili", prep_minutes=20, cook_minutes=60)
    tacos = make_recipe(db_session, "Tacos", prep_minutes=15, cook_minutes=15)
    menu = service.create_menu("Week 10", MONDAY, SUNDAY)

    monday_dinner = service.assign_recipe(menu.id, plan(chili.id, MONDAY))
    service.assign_recipe(menu.id, plan(tacos.id, MONDAY, MealSlot.LUNCH))
    service.assign_recipe(menu.id, plan(tacos.id, TUESDAY))
    service.assign_leftover(menu.id, monday_dinner.id, WEDNESDAY, MealSlot.DINNER)
    return menu


def test_menu_estimate_counts_each_recipe_once(service, planned_week):
    estimate = service.get_menu_time_estimate(planned_week.id)

    assert estimate.menu_id == planned_week.id
    assert len(estimate.recipe_estimates) == 2
    assert estimate.total_prep_minutes == 35
    assert estimate.total_cook_minutes == 75
    assert estimate.total_minutes == 110


def test_menu_estimate_skips_unknown_recipes(service):
    menu = service.create_menu("Week 10", MONDAY, SUNDAY)
    service.assign_recipe(menu.id, plan("no-such-recipe", MONDAY))

    estimate = service.get_menu_time_estimate(menu.id)

    assert estimate.recipe_estimates == []
    assert estimate.total_minutes == 0


def test_empty_menu_estimate_is_zero(service):
    menu = service.create_menu("Week 10", MONDAY, SUNDAY)
    assert service.get_menu_time_estimate(menu.id).total_minutes == 0
    assert service.get_daily_time_estimates(menu.id) == []


def test_daily_estimates_count_every_occurrence(service, planned_week):
    daily = service.get_daily_time_estimates(planned_week.id)

    assert [d.date for d in daily] == [MONDAY, TUESDAY, WEDNESDAY]
    assert [(d.total_prep_minutes, d.total_cook_minutes) for d in daily] == [
        (35, 75),
        (15, 15),
        (20, 60),
    ]
    assert daily[0].total_minutes == 110


def test_estimates_for_unknown_menu_raise_not_found(service):
    with pytest.raises(NotFoundError):
        service.get_menu_time_estimate("missing")
    with pytest.raises(NotFoundError):
        service.get_daily_time_estimates("missing")


def test_service_recipe_estimate_delegates(db_session, service):
    chili = make_recipe(db_session, "Chili", prep_minutes=20, cook_minutes=60)
    assert service.get_recipe_time_estimate(chili.id).total_minutes == 80
    assert service.get_recipe_time_estimate("missing") is None
