"""
Domain enums for the menu planner.
Contains all enumeration types used across the domain models.
"""

import enum


class MealSlot(str, enum.Enum):
    """Meal slot an assignment occupies on its date"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


# Position of each slot within a day, used for ordering assignments
MEAL_SLOT_ORDER = {
    MealSlot.BREAKFAST.value: 0,
    MealSlot.LUNCH.value: 1,
    MealSlot.DINNER.value: 2,
    MealSlot.SNACK.value: 3,
}


class EstimateSource(str, enum.Enum):
    """Where a recipe time estimate came from"""

    STATISTICAL = "statistical"
    RECIPE = "recipe"
