"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.menu_schemas import (
    MenuCreate,
    MenuUpdate,
    MenuResponse,
    AssignmentCreate,
    AssignmentResponse,
    AssignmentMoveRequest,
    LeftoverAssignRequest,
    MarkLeftoverRequest,
    AvailableLeftoverResponse,
    RecipeTimeEstimateResponse,
    MenuTimeEstimateResponse,
    DailyTimeEstimateResponse,
)
from domain.schemas.preference_schemas import PreferencesResponse, PreferencesUpdate

__all__ = [
    # Menu schemas
    "MenuCreate",
    "MenuUpdate",
    "MenuResponse",
    # Assignment schemas
    "AssignmentCreate",
    "AssignmentResponse",
    "AssignmentMoveRequest",
    "LeftoverAssignRequest",
    "MarkLeftoverRequest",
    # Planning query schemas
    "AvailableLeftoverResponse",
    "RecipeTimeEstimateResponse",
    "MenuTimeEstimateResponse",
    "DailyTimeEstimateResponse",
    # Preference schemas
    "PreferencesResponse",
    "PreferencesUpdate",
]
