"""Domain models for meal logging."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from diet_tracker.domain.foods import FoodItem
from diet_tracker.domain.nutrition import NutritionProfile


class MealType(StrEnum):
    """Meal slots a user can log."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"
    OTHER = "other"


@dataclass(frozen=True)
class MealItem:
    """A logged amount of a catalog food with its frozen nutrition snapshot."""

    food_id: UUID
    name: str
    amount: float
    unit: str
    nutrition: NutritionProfile
    note: str | None = None
    # Populated by repositories that load the referenced food; never persisted.
    food: FoodItem | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Meal:
    """A logged meal with its items and summed nutrition."""

    id: UUID
    user_id: UUID
    meal_type: str
    date: datetime | None
    items: tuple[MealItem, ...] = ()
    total_nutrition: NutritionProfile = field(default_factory=NutritionProfile)
    name: str | None = None
    notes: str | None = None
    is_favorite: bool = False
    is_template: bool = False
    image_url: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class MealItemInput:
    """Requested item for a new or replaced meal."""

    food_id: UUID
    amount: float
    unit: str
    note: str | None = None


@dataclass(frozen=True)
class MealQuery:
    """Filters for listing a user's meals."""

    start: datetime | None = None
    end: datetime | None = None
    meal_type: str | None = None
    is_template: bool | None = None


@dataclass(frozen=True)
class MealPage:
    """A page of meals."""

    meals: list[Meal]
    page: int
    pages: int
    total: int
