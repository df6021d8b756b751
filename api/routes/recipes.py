"""Recipe time estimate routes"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_menu_service
from domain.schemas.menu_schemas import RecipeTimeEstimateResponse
from services.menu_service import MenuService

router = APIRouter(prefix="/recipes", tags=["Recipes"])
logger = logging.getLogger("menuplanner.api.recipes")


@router.get("/{recipe_id}/time-estimate", response_model=RecipeTimeEstimateResponse)
def get_recipe_time_estimate(recipe_id: str, service: MenuService = Depends(get_menu_service)):
    """
    Prep/cook estimate for one recipe.

    Averages from logged cook sessions are preferred (source "statistical");
    without any history the authored times are used (source "recipe").
    """
    estimate = service.get_recipe_time_estimate(recipe_id)
    if estimate is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Recipe not found: {recipe_id}"
        )
    return RecipeTimeEstimateResponse.model_validate(estimate)
