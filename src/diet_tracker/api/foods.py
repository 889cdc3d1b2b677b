"""Food catalog endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from diet_tracker.api.deps import current_user, require_admin
from diet_tracker.api.schemas import FoodCreate, FoodUpdate, NutritionRequest
from diet_tracker.api.serializers import food_payload, lookup_payload
from diet_tracker.domain.foods import FoodQuery, ServingRequest
from diet_tracker.domain.users import User

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(
    prefix="/api/foods", tags=["foods"], dependencies=[Depends(current_user)]
)


@router.get("")
async def list_foods(  # noqa: PLR0913
    request: Request,
    search: str | None = None,
    category: str | None = None,
    suitable_for: str | None = None,
    not_suitable_for: str | None = None,
    is_common: bool | None = None,
    is_verified: bool | None = None,
    page: int = 1,
    limit: int = 20,
) -> dict[str, object]:
    """Return a filtered page of catalog foods."""
    container: AppContainer = request.app.state.container
    result = container.food_service.list_foods(
        FoodQuery(
            search=search,
            category=category,
            suitable_for=suitable_for,
            not_suitable_for=not_suitable_for,
            is_common=is_common,
            is_verified=is_verified,
        ),
        page,
        limit,
    )
    return {
        "food_items": [food_payload(food) for food in result.items],
        "page": result.page,
        "pages": result.pages,
        "total": result.total,
    }


@router.get("/categories")
async def categories(request: Request) -> list[str]:
    container: AppContainer = request.app.state.container
    return container.food_service.list_categories()


@router.get("/search/{query}")
async def search_foods(
    query: str, request: Request, limit: int = 10
) -> list[dict[str, object]]:
    container: AppContainer = request.app.state.container
    return [food_payload(food) for food in container.food_service.search(query, limit)]


@router.get("/category/{category}")
async def foods_by_category(
    category: str, request: Request, limit: int = 50
) -> list[dict[str, object]]:
    container: AppContainer = request.app.state.container
    foods = container.food_service.list_by_category(category, limit)
    return [food_payload(food) for food in foods]


@router.post("/nutrition")
async def nutrition_for_foods(
    payload: NutritionRequest, request: Request
) -> dict[str, object]:
    """Return scaled nutrition for several servings plus their total."""
    container: AppContainer = request.app.state.container
    lookup = container.food_service.nutrition_for_foods(
        [
            ServingRequest(food_id=item.food_id, amount=item.amount, unit=item.unit)
            for item in payload.foods
        ]
    )
    return lookup_payload(lookup)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_food(
    payload: FoodCreate, request: Request, admin: User = Depends(require_admin)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    food = container.food_service.create_food(payload.model_dump(), admin.id)
    return food_payload(food)


@router.get("/{food_id}")
async def get_food(food_id: UUID, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return food_payload(container.food_service.get_food(food_id))


@router.put("/{food_id}")
async def update_food(
    food_id: UUID,
    payload: FoodUpdate,
    request: Request,
    admin: User = Depends(require_admin),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    food = container.food_service.update_food(
        food_id, payload.model_dump(exclude_unset=True), admin.id
    )
    return food_payload(food)


@router.delete("/{food_id}", dependencies=[Depends(require_admin)])
async def delete_food(food_id: UUID, request: Request) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    container.food_service.delete_food(food_id)
    return {"message": "Food item removed"}
