"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and foundational application code.
"""

from app.config import Settings, settings
from app.exceptions import (
    ServiceValidationError,
    ValidationError,
    NotFoundError,
)

__all__ = [
    "Settings",
    "settings",
    "ServiceValidationError",
    "ValidationError",
    "NotFoundError",
]
