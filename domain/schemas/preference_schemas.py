from typing import Optional

from pydantic import BaseModel, Field


class PreferencesResponse(BaseModel):
    default_leftover_duration_days: int
    default_servings: int


class PreferencesUpdate(BaseModel):
    default_leftover_duration_days: Optional[int] = Field(None, ge=0)
    default_servings: Optional[int] = Field(None, gt=0)
