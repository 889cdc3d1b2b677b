"""Food catalog management and serving lookups."""

import logging
import math
from dataclasses import dataclass, fields, is_dataclass, replace
from datetime import UTC, datetime
from enum import StrEnum
from typing import Protocol
from uuid import UUID, uuid4

from diet_tracker.domain.foods import (
    DietTag,
    FoodCategory,
    FoodItem,
    FoodPage,
    FoodQuery,
    NutritionLookup,
    ServingNutrition,
    ServingRequest,
    ServingSize,
    ServingUnit,
    Suitability,
)
from diet_tracker.domain.nutrition import NutritionProfile
from diet_tracker.errors import NotFoundError, ValidationError
from diet_tracker.services.aggregation import sum_profiles
from diet_tracker.services.pagination import clamp_limit, clamp_page, page_count
from diet_tracker.services.scaling import nutrition_for_serving

_logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
CATEGORY_LIMIT = 50
SEARCH_LIMIT = 10

_EDITABLE_FIELDS = frozenset(
    {
        "name",
        "description",
        "category",
        "serving_size",
        "nutrition",
        "suitable_for",
        "not_suitable_for",
        "is_common",
        "is_verified",
    }
)


class FoodRepository(Protocol):
    """Persistence interface for the food catalog."""

    def find_by_id(self, food_id: UUID) -> FoodItem | None:
        """Return a food by id, if present."""

    def find_by_name(self, name: str) -> FoodItem | None:
        """Return the food with exactly this name, if present."""

    def save(self, food: FoodItem) -> FoodItem:
        """Insert or replace the food and return the stored record."""

    def delete(self, food_id: UUID) -> None:
        """Delete the food."""

    def query(
        self, filters: FoodQuery, offset: int, limit: int
    ) -> tuple[list[FoodItem], int]:
        """Return a page of foods sorted by name and the total match count."""

    def search_by_name(self, text: str, limit: int) -> list[FoodItem]:
        """Return foods whose name contains the text, case-insensitively."""

    def list_categories(self) -> list[str]:
        """Return the distinct categories in use."""

    def list_by_category(self, category: str, limit: int) -> list[FoodItem]:
        """Return foods in a category sorted by name."""


@dataclass
class FoodCatalogService:
    """Application service for the shared food catalog."""

    repository: FoodRepository

    def create_food(self, payload: dict[str, object], admin_id: UUID) -> FoodItem:
        """Create a catalog entry; names must be unique."""
        unknown = set(payload) - _EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown food fields: {sorted(unknown)}")
        name = str(payload.get("name") or "").strip()
        if not name:
            raise ValidationError("Name is required", field="name")
        if self.repository.find_by_name(name) is not None:
            raise ValidationError(
                "Food item with this name already exists", field="name"
            )
        if "serving_size" not in payload:
            raise ValidationError("Serving size is required", field="serving_size")
        now = datetime.now(tz=UTC)
        food = _apply_payload(
            FoodItem(
                id=uuid4(),
                name=name,
                category=FoodCategory.OTHER.value,
                serving_size=ServingSize(amount=100, unit=ServingUnit.GRAM.value),
                nutrition=NutritionProfile(),
                added_by=admin_id,
                last_updated_by=admin_id,
                created_at=now,
                updated_at=now,
            ),
            payload,
        )
        saved = self.repository.save(food)
        _logger.info("Created food item: food_id=%s", saved.id)
        return saved

    def update_food(
        self, food_id: UUID, payload: dict[str, object], admin_id: UUID
    ) -> FoodItem:
        """Replace the supplied fields of a catalog entry."""
        unknown = set(payload) - _EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown food fields: {sorted(unknown)}")
        food = self.get_food(food_id)
        if "name" in payload:
            name = str(payload.get("name") or "").strip()
            existing = self.repository.find_by_name(name)
            if existing is not None and existing.id != food.id:
                raise ValidationError(
                    "Food item with this name already exists", field="name"
                )
        updated = replace(
            _apply_payload(food, payload),
            last_updated_by=admin_id,
            updated_at=datetime.now(tz=UTC),
        )
        return self.repository.save(updated)

    def delete_food(self, food_id: UUID) -> None:
        self.get_food(food_id)
        # Logged meals keep their frozen snapshots.
        self.repository.delete(food_id)
        _logger.info("Deleted food item: food_id=%s", food_id)

    def get_food(self, food_id: UUID) -> FoodItem:
        food = self.repository.find_by_id(food_id)
        if food is None:
            raise NotFoundError("Food item", food_id)
        return food

    def list_foods(
        self, filters: FoodQuery, page: int | None = None, limit: int | None = None
    ) -> FoodPage:
        """Return a filtered page of foods.

        When a search matches nothing under the filters, the page falls back to
        a plain name search.
        """
        page_number = clamp_page(page)
        page_size = clamp_limit(limit, default=DEFAULT_PAGE_SIZE)
        items, total = self.repository.query(
            filters, (page_number - 1) * page_size, page_size
        )
        if not items and filters.search:
            items = self.repository.search_by_name(filters.search, page_size)
        return FoodPage(
            items=items,
            page=page_number,
            pages=page_count(total, page_size),
            total=total,
        )

    def list_categories(self) -> list[str]:
        return self.repository.list_categories()

    def list_by_category(
        self, category: str, limit: int = CATEGORY_LIMIT
    ) -> list[FoodItem]:
        return self.repository.list_by_category(category, max(limit, 1))

    def search(self, text: str, limit: int = SEARCH_LIMIT) -> list[FoodItem]:
        cleaned = text.strip()
        if not cleaned:
            return []
        return self.repository.search_by_name(cleaned, max(limit, 1))

    def nutrition_for_foods(self, requests: list[ServingRequest]) -> NutritionLookup:
        """Scale each requested serving and sum the results."""
        items: list[ServingNutrition] = []
        for request in requests:
            food = self.get_food(request.food_id)
            items.append(
                ServingNutrition(
                    food_id=food.id,
                    name=food.name,
                    amount=request.amount,
                    unit=request.unit,
                    nutrition=nutrition_for_serving(food, request.amount, request.unit),
                )
            )
        return NutritionLookup(
            items=items, total=sum_profiles(item.nutrition for item in items)
        )


def _apply_payload(food: FoodItem, payload: dict[str, object]) -> FoodItem:
    changes: dict[str, object] = {}
    if "name" in payload:
        changes["name"] = str(payload["name"] or "").strip()
    if "description" in payload:
        changes["description"] = payload["description"]
    if "category" in payload:
        changes["category"] = _choice(FoodCategory, payload["category"], "category")
    if "serving_size" in payload:
        changes["serving_size"] = _serving_size(payload["serving_size"])
    if "nutrition" in payload:
        changes["nutrition"] = _nutrition(payload["nutrition"])
    for key in ("suitable_for", "not_suitable_for"):
        if key in payload:
            changes[key] = _suitability(payload[key], key)
    for key in ("is_common", "is_verified"):
        if key in payload:
            changes[key] = bool(payload[key])
    return replace(food, **changes)


def _choice(enum: type[StrEnum], value: object, name: str) -> str:
    try:
        return enum(str(value)).value
    except ValueError as exc:
        raise ValidationError(f"Invalid {name}: {value}", field=name) from exc


def _serving_size(value: object) -> ServingSize:
    if not isinstance(value, dict):
        raise ValidationError("Invalid serving size", field="serving_size")
    amount = value.get("amount")
    if isinstance(amount, bool) or not isinstance(amount, int | float) or amount <= 0:
        raise ValidationError(
            "Serving size amount must be positive", field="serving_size.amount"
        )
    return ServingSize(
        amount=float(amount),
        unit=_choice(ServingUnit, value.get("unit"), "serving_size.unit"),
        description=value.get("description"),
    )


def _nutrition(value: object) -> NutritionProfile:
    if not isinstance(value, dict):
        raise ValidationError("Invalid nutrition", field="nutrition")
    _check_leaves(NutritionProfile, value, "nutrition")
    profile = NutritionProfile.from_dict(value)
    if profile.is_negative():
        raise ValidationError(
            "Nutrition values cannot be negative", field="nutrition"
        )
    return profile


def _check_leaves(group: type, data: dict[str, object], path: str) -> None:
    for item in fields(group):
        raw = data.get(item.name)
        name = f"{path}.{item.name}"
        if isinstance(item.default_factory, type) and is_dataclass(
            item.default_factory
        ):
            if raw is None:
                continue
            if not isinstance(raw, dict):
                raise ValidationError(f"Invalid {name}", field=name)
            _check_leaves(item.default_factory, raw, name)
        elif raw is not None and not _is_finite_number(raw):
            raise ValidationError(f"{name} must be a finite number", field=name)


def _is_finite_number(value: object) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return False
    return isinstance(value, int | float) and math.isfinite(value)


def _suitability(value: object, name: str) -> tuple[Suitability, ...]:
    if not isinstance(value, list | tuple):
        raise ValidationError(f"{name} must be a list", field=name)
    entries = []
    for entry in value:
        if not isinstance(entry, dict):
            raise ValidationError(f"Invalid {name} entry", field=name)
        entries.append(
            Suitability(
                condition=_choice(DietTag, entry.get("condition"), name),
                note=entry.get("note"),
            )
        )
    return tuple(entries)
