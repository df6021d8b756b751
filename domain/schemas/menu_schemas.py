from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field

from domain.enums import EstimateSource, MealSlot


class MenuCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    start_date: dt.date
    end_date: dt.date


class MenuUpdate(BaseModel):
    """Partial update; omitted fields keep their stored value"""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None


class AssignmentCreate(BaseModel):
    """Input for planning a recipe on a date and meal slot"""

    recipe_id: str = Field(..., min_length=1)
    date: dt.date
    meal_slot: MealSlot
    servings: Optional[int] = Field(None, gt=0, description="Defaults to the servings preference")
    cook_date: Optional[dt.date] = Field(
        None, description="Date the food is prepared; defaults to the planned date"
    )
    leftover_from_assignment_id: Optional[str] = Field(
        None, description="Original cook this meal reuses (requires is_leftover)"
    )
    is_leftover: bool = False
    leftover_duration_days: Optional[int] = Field(
        None, ge=0, description="Overrides the default leftover duration for fresh cooks"
    )


class LeftoverAssignRequest(BaseModel):
    source_assignment_id: str
    date: dt.date
    meal_slot: MealSlot
    servings: Optional[int] = Field(None, gt=0)


class AssignmentMoveRequest(BaseModel):
    date: dt.date
    meal_slot: Optional[MealSlot] = None
    cook_date: Optional[dt.date] = None


class MarkLeftoverRequest(BaseModel):
    source_assignment_id: str


class AssignmentResponse(BaseModel):
    id: str
    menu_id: str
    recipe_id: str
    date: dt.date
    meal_slot: MealSlot
    servings: int
    cook_date: dt.date
    leftover_expiry_date: Optional[dt.date] = None
    leftover_from_assignment_id: Optional[str] = None
    is_leftover: bool

    model_config = {"from_attributes": True}


class MenuResponse(BaseModel):
    id: str
    name: str
    start_date: dt.date
    end_date: dt.date
    created_at: Optional[dt.datetime] = None
    assignments: List[AssignmentResponse] = []

    model_config = {"from_attributes": True}


class AvailableLeftoverResponse(BaseModel):
    assignment: AssignmentResponse
    recipe_id: str
    recipe_title: Optional[str] = None
    expiry_date: dt.date
    days_until_expiry: int
    is_expiring_soon: bool

    model_config = {"from_attributes": True}


class RecipeTimeEstimateResponse(BaseModel):
    recipe_id: str
    prep_minutes: int
    cook_minutes: int
    total_minutes: int
    source: EstimateSource

    model_config = {"from_attributes": True}


class MenuTimeEstimateResponse(BaseModel):
    menu_id: str
    total_prep_minutes: int
    total_cook_minutes: int
    total_minutes: int
    recipe_estimates: List[RecipeTimeEstimateResponse]

    model_config = {"from_attributes": True}


class DailyTimeEstimateResponse(BaseModel):
    date: dt.date
    total_prep_minutes: int
    total_cook_minutes: int
    total_minutes: int

    model_config = {"from_attributes": True}
