"""Supabase repository for the food catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from diet_tracker.adapters.supabase_rows import (
    parse_datetime,
    parse_uuid,
    response_total,
    to_iso,
    to_str,
)
from diet_tracker.domain.foods import FoodItem, FoodQuery, ServingSize, Suitability
from diet_tracker.domain.nutrition import NutritionProfile
from diet_tracker.services.foods import FoodRepository

_TABLE = "food_items"


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase implementation for catalog foods."""

    client: Client

    def find_by_id(self, food_id: UUID) -> FoodItem | None:
        """Return a food by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return food_from_row(response.data[0])

    def find_by_name(self, name: str) -> FoodItem | None:
        response = (
            self.client.table(_TABLE).select("*").eq("name", name).limit(1).execute()
        )
        if not response.data:
            return None
        return food_from_row(response.data[0])

    def save(self, food: FoodItem) -> FoodItem:
        """Upsert the food row and return the stored version."""
        response = self.client.table(_TABLE).upsert(food_to_row(food)).execute()
        if not response.data:
            raise RuntimeError("Failed to save food item")
        return food_from_row(response.data[0])

    def delete(self, food_id: UUID) -> None:
        self.client.table(_TABLE).delete().eq("id", str(food_id)).execute()

    def query(
        self, filters: FoodQuery, offset: int, limit: int
    ) -> tuple[list[FoodItem], int]:
        """Return a page of foods matching the filters, sorted by name."""
        request = self.client.table(_TABLE).select("*", count="exact")
        if filters.search:
            request = request.ilike("name", f"%{filters.search}%")
        if filters.category:
            request = request.eq("category", filters.category)
        if filters.suitable_for:
            request = request.contains(
                "suitable_for", [{"condition": filters.suitable_for}]
            )
        if filters.not_suitable_for:
            request = request.contains(
                "not_suitable_for", [{"condition": filters.not_suitable_for}]
            )
        if filters.is_common is not None:
            request = request.eq("is_common", filters.is_common)
        if filters.is_verified is not None:
            request = request.eq("is_verified", filters.is_verified)
        response = (
            request.order("name", desc=False)
            .range(offset, offset + limit - 1)
            .execute()
        )
        rows = response.data or []
        return [food_from_row(row) for row in rows], response_total(response, rows)

    def search_by_name(self, text: str, limit: int) -> list[FoodItem]:
        response = (
            self.client.table(_TABLE)
            .select("*")
            .ilike("name", f"%{text}%")
            .order("name", desc=False)
            .limit(limit)
            .execute()
        )
        return [food_from_row(row) for row in response.data or []]

    def list_categories(self) -> list[str]:
        """Return the distinct categories present in the catalog."""
        response = self.client.table(_TABLE).select("category").execute()
        return sorted({str(row["category"]) for row in response.data or []})

    def list_by_category(self, category: str, limit: int) -> list[FoodItem]:
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("category", category)
            .order("name", desc=False)
            .limit(limit)
            .execute()
        )
        return [food_from_row(row) for row in response.data or []]


def food_to_row(food: FoodItem) -> dict[str, object]:
    return {
        "id": str(food.id),
        "name": food.name,
        "description": food.description,
        "category": food.category,
        "serving_size": {
            "amount": food.serving_size.amount,
            "unit": food.serving_size.unit,
            "description": food.serving_size.description,
        },
        "nutrition": food.nutrition.to_dict(),
        "suitable_for": [_suitability_row(entry) for entry in food.suitable_for],
        "not_suitable_for": [
            _suitability_row(entry) for entry in food.not_suitable_for
        ],
        "is_common": food.is_common,
        "is_verified": food.is_verified,
        "added_by": to_str(food.added_by),
        "last_updated_by": to_str(food.last_updated_by),
        "created_at": to_iso(food.created_at),
        "updated_at": to_iso(food.updated_at),
    }


def food_from_row(row: dict[str, object]) -> FoodItem:
    serving = row.get("serving_size") or {}
    return FoodItem(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        description=row.get("description"),
        category=str(row.get("category") or "other"),
        serving_size=ServingSize(
            amount=float(serving.get("amount", 0.0)),
            unit=str(serving.get("unit") or "g"),
            description=serving.get("description"),
        ),
        nutrition=NutritionProfile.from_dict(row.get("nutrition")),
        suitable_for=_parse_suitability(row.get("suitable_for")),
        not_suitable_for=_parse_suitability(row.get("not_suitable_for")),
        is_common=bool(row.get("is_common", False)),
        is_verified=bool(row.get("is_verified", False)),
        added_by=parse_uuid(row.get("added_by")),
        last_updated_by=parse_uuid(row.get("last_updated_by")),
        created_at=parse_datetime(row.get("created_at")),
        updated_at=parse_datetime(row.get("updated_at")),
    )


def _suitability_row(entry: Suitability) -> dict[str, object]:
    return {"condition": entry.condition, "note": entry.note}


def _parse_suitability(value: object) -> tuple[Suitability, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(
        Suitability(condition=str(entry["condition"]), note=entry.get("note"))
        for entry in value
        if isinstance(entry, dict) and entry.get("condition")
    )
