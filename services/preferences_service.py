"""
Preferences Service - planning defaults that outlive a session.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.config import Settings
from app.exceptions import ServiceValidationError
from domain.schemas.preference_schemas import PreferencesResponse, PreferencesUpdate
from repositories import PreferenceRepository

logger = logging.getLogger("menuplanner.preferences")

LEFTOVER_DURATION_KEY = "defaultLeftoverDurationDays"
SERVINGS_KEY = "defaultServings"


class PreferencesService:
    """
    Stored preferences override the configured defaults.
    Values that cannot be parsed fall back to the configured defaults.
    """

    def __init__(self, db: Session, settings: Optional[Settings] = None):
        self.db: Session = db
        self.settings = settings or Settings()
        self.repo = PreferenceRepository(db)

    def _get_int(self, key: str, default: int, minimum: int) -> int:
        raw = self.repo.get_value(key)
        if raw is None:
            return default
        try:
            value = int(raw)
        except ValueError:
            logger.warning("Ignoring unparsable preference %s=%r", key, raw)
            return default
        return value if value >= minimum else default

    def get_default_leftover_duration_days(self) -> int:
        return self._get_int(
            LEFTOVER_DURATION_KEY, self.settings.default_leftover_duration_days, minimum=0
        )

    def get_default_servings(self) -> int:
        return self._get_int(SERVINGS_KEY, self.settings.default_servings, minimum=1)

    def set_default_leftover_duration_days(self, days: int) -> None:
        if days < 0:
            raise ServiceValidationError("Default leftover duration must be non-negative")
        self.repo.set_value(LEFTOVER_DURATION_KEY, str(days))
        self.db.commit()
        logger.info("Default leftover duration set to %d days", days)

    def set_default_servings(self, servings: int) -> None:
        if servings <= 0:
            raise ServiceValidationError("Default servings must be a positive number")
        self.repo.set_value(SERVINGS_KEY, str(servings))
        self.db.commit()
        logger.info("Default servings set to %d", servings)

    def get_preferences(self) -> PreferencesResponse:
        return PreferencesResponse(
            default_leftover_duration_days=self.get_default_leftover_duration_days(),
            default_servings=self.get_default_servings(),
        )

    def update_preferences(self, updates: PreferencesUpdate) -> PreferencesResponse:
        """Apply the provided fields in one transaction"""
        if updates.default_leftover_duration_days is not None and updates.default_leftover_duration_days < 0:
            raise ServiceValidationError("Default leftover duration must be non-negative")
        if updates.default_servings is not None and updates.default_servings <= 0:
            raise ServiceValidationError("Default servings must be a positive number")

        try:
            if updates.default_leftover_duration_days is not None:
                self.repo.set_value(LEFTOVER_DURATION_KEY, str(updates.default_leftover_duration_days))
            if updates.default_servings is not None:
                self.repo.set_value(SERVINGS_KEY, str(updates.default_servings))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return self.get_preferences()

    def reset_to_defaults(self) -> PreferencesResponse:
        self.repo.clear()
        self.db.commit()
        logger.info("Preferences reset to defaults")
        return self.get_preferences()
