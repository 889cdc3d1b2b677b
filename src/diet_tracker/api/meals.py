"""Meal logging and summary endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from diet_tracker.api.deps import current_user
from diet_tracker.api.schemas import MealCreate, MealItemIn, MealUpdate
from diet_tracker.api.serializers import (
    daily_report_payload,
    meal_payload,
    meal_type_report_payload,
    micronutrient_payload,
)
from diet_tracker.domain.meals import MealItemInput
from diet_tracker.domain.users import User

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(prefix="/api/meals", tags=["meals"])


def _item_inputs(items: list[MealItemIn]) -> list[MealItemInput]:
    return [
        MealItemInput(
            food_id=item.food_id, amount=item.amount, unit=item.unit, note=item.note
        )
        for item in items
    ]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_meal(
    payload: MealCreate, request: Request, user: User = Depends(current_user)
) -> dict[str, object]:
    """Log a meal, freezing the nutrition of each item."""
    container: AppContainer = request.app.state.container
    meal = container.meal_service.create_meal(
        user.id,
        payload.meal_type,
        _item_inputs(payload.items),
        date=payload.date,
        name=payload.name,
        notes=payload.notes,
        is_template=payload.is_template,
        is_favorite=payload.is_favorite,
    )
    return meal_payload(meal)


@router.get("")
async def list_meals(  # noqa: PLR0913
    request: Request,
    start_date: date | None = None,
    end_date: date | None = None,
    meal_type: str | None = None,
    is_template: bool | None = None,
    page: int = 1,
    limit: int = 10,
    user: User = Depends(current_user),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    result = container.meal_service.list_meals(
        user.id,
        start=start_date,
        end=end_date,
        meal_type=meal_type,
        is_template=is_template,
        page=page,
        limit=limit,
    )
    return {
        "meals": [meal_payload(meal) for meal in result.meals],
        "page": result.page,
        "pages": result.pages,
        "total": result.total,
    }


@router.get("/summary/daily")
async def daily_summary(
    request: Request,
    start_date: date | None = None,
    end_date: date | None = None,
    user: User = Depends(current_user),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    report = container.summary_service.daily(user.id, start_date, end_date)
    return daily_report_payload(report)


@router.get("/summary/meal-types")
async def meal_type_summary(
    request: Request,
    start_date: date | None = None,
    end_date: date | None = None,
    user: User = Depends(current_user),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    report = container.summary_service.meal_types(user.id, start_date, end_date)
    return meal_type_report_payload(report)


@router.get("/summary/micronutrients")
async def micronutrient_summary(
    request: Request,
    start_date: date | None = None,
    end_date: date | None = None,
    user: User = Depends(current_user),
) -> dict[str, object]:
    """Return vitamin, mineral, lipid and electrolyte intake versus RDA."""
    container: AppContainer = request.app.state.container
    report = container.summary_service.micronutrients(user.id, start_date, end_date)
    return micronutrient_payload(report)


@router.get("/{meal_id}")
async def get_meal(
    meal_id: UUID, request: Request, user: User = Depends(current_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return meal_payload(container.meal_service.get_meal(user.id, meal_id))


@router.put("/{meal_id}")
async def update_meal(
    meal_id: UUID,
    payload: MealUpdate,
    request: Request,
    user: User = Depends(current_user),
) -> dict[str, object]:
    """Update a meal; a supplied item list replaces all items."""
    container: AppContainer = request.app.state.container
    changes: dict[str, object] = payload.model_dump(exclude_unset=True)
    if payload.items is not None:
        changes["items"] = _item_inputs(payload.items)
    meal = container.meal_service.update_meal(user.id, meal_id, changes)
    return meal_payload(meal)


@router.delete("/{meal_id}")
async def delete_meal(
    meal_id: UUID, request: Request, user: User = Depends(current_user)
) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    container.meal_service.delete_meal(user.id, meal_id)
    return {"message": "Meal removed"}
