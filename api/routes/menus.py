"""Menu planning routes: menus, assignments, leftovers and time estimates"""

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies import get_menu_service
from domain.schemas.menu_schemas import (
    AssignmentCreate,
    AssignmentMoveRequest,
    AssignmentResponse,
    AvailableLeftoverResponse,
    DailyTimeEstimateResponse,
    LeftoverAssignRequest,
    MarkLeftoverRequest,
    MenuCreate,
    MenuResponse,
    MenuTimeEstimateResponse,
    MenuUpdate,
)
from services.menu_service import MenuService

router = APIRouter(prefix="/menus", tags=["Menus"])
logger = logging.getLogger("menuplanner.api.menus")


@router.post("", response_model=MenuResponse, status_code=status.HTTP_201_CREATED)
def create_menu(body: MenuCreate, service: MenuService = Depends(get_menu_service)):
    """Create a menu over an inclusive date range"""
    menu = service.create_menu(body.name, body.start_date, body.end_date)
    return MenuResponse.model_validate(menu)


@router.get("", response_model=List[MenuResponse])
def list_menus(service: MenuService = Depends(get_menu_service)):
    """All menus, most recent start date first"""
    return [MenuResponse.model_validate(m) for m in service.get_all_menus()]


@router.get("/current", response_model=MenuResponse)
def get_current_menu(
    today: Optional[date] = Query(None, description="Reference date, defaults to today"),
    service: MenuService = Depends(get_menu_service),
):
    """
    Menu to show by default.

    Returns the menu containing today, else the next upcoming menu, else the
    most recently ended one.
    """
    menu = service.get_current_menu(today)
    if menu is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No menus exist yet")
    return MenuResponse.model_validate(menu)


@router.get("/{menu_id}", response_model=MenuResponse)
def get_menu(menu_id: str, service: MenuService = Depends(get_menu_service)):
    menu = service.get_menu(menu_id)
    if menu is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Menu not found: {menu_id}"
        )
    return MenuResponse.model_validate(menu)


@router.patch("/{menu_id}", response_model=MenuResponse)
def update_menu(
    menu_id: str, body: MenuUpdate, service: MenuService = Depends(get_menu_service)
):
    """Rename a menu or change its date range"""
    return MenuResponse.model_validate(service.update_menu(menu_id, body))


@router.delete("/{menu_id}")
def delete_menu(menu_id: str, service: MenuService = Depends(get_menu_service)):
    """Delete a menu together with all of its assignments"""
    service.delete_menu(menu_id)
    return {"status": "ok", "removed": menu_id}


# ---------- assignments ----------


@router.get("/{menu_id}/assignments", response_model=List[AssignmentResponse])
def list_assignments(
    menu_id: str,
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    service: MenuService = Depends(get_menu_service),
):
    """Assignments ordered by date then meal slot, optionally limited to a window"""
    return [
        AssignmentResponse.model_validate(a)
        for a in service.get_assignments(menu_id, start, end)
    ]


@router.post(
    "/{menu_id}/assignments",
    response_model=AssignmentResponse,
    status_code=status.HTTP_201_CREATED,
)
def assign_recipe(
    menu_id: str, body: AssignmentCreate, service: MenuService = Depends(get_menu_service)
):
    """
    Plan a recipe on a date and meal slot.

    For a fresh cook the leftover expiry is cook date + leftover duration.
    With is_leftover and a source id, the cook date and expiry are copied
    from the original cook.
    """
    assignment = service.assign_recipe(menu_id, body)
    return AssignmentResponse.model_validate(assignment)


@router.post(
    "/{menu_id}/leftovers",
    response_model=AssignmentResponse,
    status_code=status.HTTP_201_CREATED,
)
def assign_leftover(
    menu_id: str, body: LeftoverAssignRequest, service: MenuService = Depends(get_menu_service)
):
    """Plan a meal that eats leftovers of an existing assignment"""
    assignment = service.assign_leftover(
        menu_id, body.source_assignment_id, body.date, body.meal_slot, body.servings
    )
    return AssignmentResponse.model_validate(assignment)


@router.patch("/{menu_id}/assignments/{assignment_id}/move", response_model=AssignmentResponse)
def move_assignment(
    menu_id: str,
    assignment_id: str,
    body: AssignmentMoveRequest,
    service: MenuService = Depends(get_menu_service),
):
    """Move an assignment; its cook date and expiry are recomputed as a fresh cook"""
    assignment = service.move_assignment(
        menu_id, assignment_id, body.date, body.meal_slot, body.cook_date
    )
    return AssignmentResponse.model_validate(assignment)


@router.post(
    "/{menu_id}/assignments/{assignment_id}/mark-leftover",
    response_model=AssignmentResponse,
)
def mark_as_leftover(
    menu_id: str,
    assignment_id: str,
    body: MarkLeftoverRequest,
    service: MenuService = Depends(get_menu_service),
):
    assignment = service.mark_as_leftover(menu_id, assignment_id, body.source_assignment_id)
    return AssignmentResponse.model_validate(assignment)


@router.delete("/{menu_id}/assignments/{assignment_id}")
def remove_assignment(
    menu_id: str, assignment_id: str, service: MenuService = Depends(get_menu_service)
):
    service.remove_assignment(menu_id, assignment_id)
    return {"status": "ok", "removed": assignment_id}


# ---------- leftovers ----------


@router.get("/{menu_id}/leftovers/available", response_model=List[AvailableLeftoverResponse])
def get_available_leftovers(
    menu_id: str,
    target_date: date = Query(..., description="Date the leftovers would be eaten"),
    service: MenuService = Depends(get_menu_service),
):
    """
    Leftovers that can be eaten on target_date.

    Only original cooks with cook_date <= target_date <= expiry are listed,
    soonest-expiring first.
    """
    leftovers = service.get_available_leftovers(menu_id, target_date)
    return [AvailableLeftoverResponse.model_validate(lo) for lo in leftovers]


@router.get("/{menu_id}/leftovers/expiring", response_model=List[AvailableLeftoverResponse])
def get_expiring_leftovers(
    menu_id: str,
    within_days: int = Query(default=1, ge=0, le=30),
    service: MenuService = Depends(get_menu_service),
):
    """Leftovers expiring within the given number of days from today"""
    leftovers = service.get_expiring_leftovers(menu_id, within_days)
    return [AvailableLeftoverResponse.model_validate(lo) for lo in leftovers]


# ---------- time estimates ----------


@router.get("/{menu_id}/time-estimate", response_model=MenuTimeEstimateResponse)
def get_menu_time_estimate(menu_id: str, service: MenuService = Depends(get_menu_service)):
    """Prep/cook totals across the distinct recipes of a menu"""
    return MenuTimeEstimateResponse.model_validate(service.get_menu_time_estimate(menu_id))


@router.get("/{menu_id}/time-estimate/daily", response_model=List[DailyTimeEstimateResponse])
def get_daily_time_estimates(menu_id: str, service: MenuService = Depends(get_menu_service)):
    """Prep/cook totals per planned date, counting every occurrence"""
    return [
        DailyTimeEstimateResponse.model_validate(d)
        for d in service.get_daily_time_estimates(menu_id)
    ]
