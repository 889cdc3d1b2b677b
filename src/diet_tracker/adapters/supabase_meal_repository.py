"""Supabase repository for logged meals."""

from dataclasses import dataclass, replace
from datetime import datetime
from uuid import UUID

from supabase import Client

from diet_tracker.adapters.supabase_food_repository import food_from_row
from diet_tracker.adapters.supabase_rows import (
    parse_datetime,
    response_total,
    to_iso,
)
from diet_tracker.domain.foods import FoodItem
from diet_tracker.domain.meals import Meal, MealItem, MealQuery
from diet_tracker.domain.nutrition import NutritionProfile
from diet_tracker.services.meals import MealRepository

_TABLE = "meals"
_FOODS_TABLE = "food_items"


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals; items live in a JSON column."""

    client: Client

    def find_by_id(self, meal_id: UUID) -> Meal | None:
        """Return a meal with its referenced foods loaded."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return self._with_foods([meal_from_row(response.data[0])])[0]

    def find_by_user_and_date_range(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[Meal]:
        """Return the user's meals in the range with their foods loaded."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=True)
            .execute()
        )
        return self._with_foods([meal_from_row(row) for row in response.data or []])

    def query(
        self, user_id: UUID, filters: MealQuery, offset: int, limit: int
    ) -> tuple[list[Meal], int]:
        request = (
            self.client.table(_TABLE)
            .select("*", count="exact")
            .eq("user_id", str(user_id))
        )
        if filters.start is not None:
            request = request.gte("date", filters.start.isoformat())
        if filters.end is not None:
            request = request.lte("date", filters.end.isoformat())
        if filters.meal_type:
            request = request.eq("meal_type", filters.meal_type)
        if filters.is_template is not None:
            request = request.eq("is_template", filters.is_template)
        response = (
            request.order("date", desc=True)
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        rows = response.data or []
        meals = self._with_foods([meal_from_row(row) for row in rows])
        return meals, response_total(response, rows)

    def save(self, meal: Meal) -> Meal:
        """Upsert the meal row; loaded foods on items are kept on the result."""
        response = self.client.table(_TABLE).upsert(meal_to_row(meal)).execute()
        if not response.data:
            raise RuntimeError("Failed to save meal")
        stored = meal_from_row(response.data[0])
        foods = {item.food_id: item.food for item in meal.items if item.food}
        return _attach(stored, foods)

    def delete(self, meal_id: UUID) -> None:
        self.client.table(_TABLE).delete().eq("id", str(meal_id)).execute()

    def _with_foods(self, meals: list[Meal]) -> list[Meal]:
        food_ids = sorted({str(item.food_id) for meal in meals for item in meal.items})
        if not food_ids:
            return meals
        response = (
            self.client.table(_FOODS_TABLE).select("*").in_("id", food_ids).execute()
        )
        foods = {food.id: food for food in map(food_from_row, response.data or [])}
        return [_attach(meal, foods) for meal in meals]


def _attach(meal: Meal, foods: dict[UUID, FoodItem]) -> Meal:
    items = tuple(replace(item, food=foods.get(item.food_id)) for item in meal.items)
    return replace(meal, items=items)


def meal_to_row(meal: Meal) -> dict[str, object]:
    return {
        "id": str(meal.id),
        "user_id": str(meal.user_id),
        "name": meal.name,
        "meal_type": meal.meal_type,
        "date": to_iso(meal.date),
        "items": [
            {
                "food_id": str(item.food_id),
                "name": item.name,
                "amount": item.amount,
                "unit": item.unit,
                "nutrition": item.nutrition.to_dict(),
                "note": item.note,
            }
            for item in meal.items
        ],
        "total_nutrition": meal.total_nutrition.to_dict(),
        "notes": meal.notes,
        "is_favorite": meal.is_favorite,
        "is_template": meal.is_template,
        "image_url": meal.image_url,
        "created_at": to_iso(meal.created_at),
    }


def meal_from_row(row: dict[str, object]) -> Meal:
    return Meal(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        meal_type=str(row.get("meal_type") or "other"),
        date=parse_datetime(row.get("date")),
        items=tuple(_parse_item(item) for item in row.get("items") or []),
        total_nutrition=NutritionProfile.from_dict(row.get("total_nutrition")),
        name=row.get("name"),
        notes=row.get("notes"),
        is_favorite=bool(row.get("is_favorite", False)),
        is_template=bool(row.get("is_template", False)),
        image_url=row.get("image_url"),
        created_at=parse_datetime(row.get("created_at")),
    )


def _parse_item(row: dict[str, object]) -> MealItem:
    return MealItem(
        food_id=UUID(str(row["food_id"])),
        name=str(row.get("name", "")),
        amount=float(row.get("amount", 0.0)),
        unit=str(row.get("unit") or "g"),
        nutrition=NutritionProfile.from_dict(row.get("nutrition")),
        note=row.get("note"),
    )
