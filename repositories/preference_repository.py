"""
Preference Repository - key/value preference storage
"""

from typing import Optional

from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Preference


class PreferenceRepository(BaseRepository[Preference]):
    """Repository for stored preferences"""

    def __init__(self, db: Session):
        super().__init__(db, Preference)

    def get_value(self, key: str) -> Optional[str]:
        pref = self.get_by_id(key)
        return pref.value if pref else None

    def set_value(self, key: str, value: str) -> Preference:
        pref = self.get_by_id(key)
        if pref is None:
            return self.add(Preference(key=key, value=value))
        pref.value = value
        return self.save(pref)

    def clear(self) -> int:
        removed = self.db.query(Preference).delete()
        self.db.flush()
        return removed
