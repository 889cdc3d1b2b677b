"""Meal logging service."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID, uuid4

from diet_tracker.domain.meals import (
    Meal,
    MealItem,
    MealItemInput,
    MealPage,
    MealQuery,
    MealType,
)
from diet_tracker.errors import NotFoundError, ValidationError
from diet_tracker.services.aggregation import end_of_day, start_of_day, total_for_items
from diet_tracker.services.micronutrients import FoodLookup
from diet_tracker.services.pagination import clamp_limit, clamp_page, page_count
from diet_tracker.services.scaling import nutrition_for_serving

_logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MIN_ITEM_AMOUNT = 0.1
MAX_MEAL_NAME_LENGTH = 50
MAX_MEAL_NOTES_LENGTH = 500
MAX_ITEM_NOTE_LENGTH = 200

_UPDATABLE_FIELDS = frozenset(
    {"name", "meal_type", "items", "date", "notes", "is_template", "is_favorite"}
)


class MealRepository(Protocol):
    """Persistence interface for logged meals."""

    def find_by_id(self, meal_id: UUID) -> Meal | None:
        """Return a meal by id, if present."""

    def find_by_user_and_date_range(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[Meal]:
        """Return a user's meals dated within the inclusive range."""

    def query(
        self, user_id: UUID, filters: MealQuery, offset: int, limit: int
    ) -> tuple[list[Meal], int]:
        """Return a page of meals, newest first, and the total match count."""

    def save(self, meal: Meal) -> Meal:
        """Insert or replace the meal and return the stored record."""

    def delete(self, meal_id: UUID) -> None:
        """Delete the meal."""


@dataclass
class MealService:
    """Creates and edits meals, freezing item nutrition at save time."""

    repository: MealRepository
    foods: FoodLookup

    def create_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        meal_type: str,
        items: list[MealItemInput],
        *,
        date: datetime | None = None,
        name: str | None = None,
        notes: str | None = None,
        is_template: bool = False,
        is_favorite: bool = False,
    ) -> Meal:
        """Resolve items against the catalog and persist the meal."""
        resolved = self._resolve_items(items)
        meal = Meal(
            id=uuid4(),
            user_id=user_id,
            meal_type=_meal_type(meal_type),
            date=_as_utc(date) if date else datetime.now(tz=UTC),
            items=resolved,
            total_nutrition=total_for_items(resolved),
            name=_limited(name, MAX_MEAL_NAME_LENGTH, "name"),
            notes=_limited(notes, MAX_MEAL_NOTES_LENGTH, "notes"),
            is_favorite=is_favorite,
            is_template=is_template,
            created_at=datetime.now(tz=UTC),
        )
        saved = self.repository.save(meal)
        _logger.info(
            "Saved meal: meal_id=%s user_id=%s items=%s",
            saved.id,
            user_id,
            len(saved.items),
        )
        return saved

    def list_meals(  # noqa: PLR0913
        self,
        user_id: UUID,
        *,
        start: date | None = None,
        end: date | None = None,
        meal_type: str | None = None,
        is_template: bool | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> MealPage:
        """Return a page of the user's meals, newest first."""
        page_number = clamp_page(page)
        page_size = clamp_limit(limit, default=DEFAULT_PAGE_SIZE)
        filters = MealQuery(
            start=start_of_day(start) if start else None,
            end=end_of_day(end) if end else None,
            meal_type=_meal_type(meal_type) if meal_type else None,
            is_template=is_template,
        )
        meals, total = self.repository.query(
            user_id, filters, (page_number - 1) * page_size, page_size
        )
        return MealPage(
            meals=meals,
            page=page_number,
            pages=page_count(total, page_size),
            total=total,
        )

    def get_meal(self, user_id: UUID, meal_id: UUID) -> Meal:
        """Return one of the user's meals."""
        meal = self.repository.find_by_id(meal_id)
        if meal is None or meal.user_id != user_id:
            raise NotFoundError("Meal", meal_id)
        return meal

    def update_meal(
        self, user_id: UUID, meal_id: UUID, changes: dict[str, object]
    ) -> Meal:
        """Apply the supplied fields; a new item list replaces every item."""
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown meal fields: {sorted(unknown)}")
        meal = self.get_meal(user_id, meal_id)
        updates: dict[str, object] = {}
        if "items" in changes:
            resolved = self._resolve_items(list(changes["items"] or []))
            updates["items"] = resolved
            updates["total_nutrition"] = total_for_items(resolved)
        if "meal_type" in changes:
            updates["meal_type"] = _meal_type(changes["meal_type"])
        if "date" in changes and changes["date"] is not None:
            updates["date"] = _as_utc(changes["date"])
        if "name" in changes:
            updates["name"] = _limited(changes["name"], MAX_MEAL_NAME_LENGTH, "name")
        if "notes" in changes:
            updates["notes"] = _limited(
                changes["notes"], MAX_MEAL_NOTES_LENGTH, "notes"
            )
        for key in ("is_template", "is_favorite"):
            if key in changes and changes[key] is not None:
                updates[key] = bool(changes[key])
        return self.repository.save(replace(meal, **updates))

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> None:
        meal = self.get_meal(user_id, meal_id)
        self.repository.delete(meal.id)

    def _resolve_items(self, items: list[MealItemInput]) -> tuple[MealItem, ...]:
        resolved: list[MealItem] = []
        for item in items:
            if item.amount < MIN_ITEM_AMOUNT:
                raise ValidationError(
                    "Amount must be greater than 0", field="items.amount"
                )
            food = self.foods.find_by_id(item.food_id)
            if food is None:
                raise NotFoundError("Food item", item.food_id)
            resolved.append(
                MealItem(
                    food_id=food.id,
                    name=food.name,
                    amount=item.amount,
                    unit=item.unit,
                    nutrition=nutrition_for_serving(food, item.amount, item.unit),
                    note=_limited(item.note, MAX_ITEM_NOTE_LENGTH, "items.note"),
                    food=food,
                )
            )
        return tuple(resolved)


def _meal_type(value: object) -> str:
    try:
        return MealType(str(value)).value
    except ValueError as exc:
        raise ValidationError(
            f"Invalid meal type: {value}", field="meal_type"
        ) from exc


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _limited(value: object, max_length: int, field_name: str) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    if len(text) > max_length:
        raise ValidationError(
            f"{field_name} cannot be more than {max_length} characters",
            field=field_name,
        )
    return text
