"""Planning preference routes"""

from fastapi import APIRouter, Depends

from api.dependencies import get_preferences_service
from domain.schemas.preference_schemas import PreferencesResponse, PreferencesUpdate
from services.preferences_service import PreferencesService

router = APIRouter(prefix="/preferences", tags=["Preferences"])


@router.get("", response_model=PreferencesResponse)
def get_preferences(service: PreferencesService = Depends(get_preferences_service)):
    return service.get_preferences()


@router.put("", response_model=PreferencesResponse)
def update_preferences(
    body: PreferencesUpdate, service: PreferencesService = Depends(get_preferences_service)
):
    """Change planning defaults; existing assignments keep their computed expiry"""
    return service.update_preferences(body)


@router.delete("", response_model=PreferencesResponse)
def reset_preferences(service: PreferencesService = Depends(get_preferences_service)):
    return service.reset_to_defaults()
