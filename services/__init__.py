"""Services package - Business logic layer"""

from services.menu_service import MenuService
from services.assignment_service import AssignmentService
from services.leftover_tracker import LeftoverTracker, calculate_leftover_date
from services.time_estimator import TimeEstimator
from services.preferences_service import PreferencesService

__all__ = [
    "MenuService",
    "AssignmentService",
    "LeftoverTracker",
    "calculate_leftover_date",
    "TimeEstimator",
    "PreferencesService",
]
