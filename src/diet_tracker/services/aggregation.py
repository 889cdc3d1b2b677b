"""Summing nutrition profiles into meal, day and meal-type totals."""

from collections.abc import Iterable
from dataclasses import fields, is_dataclass, replace
from datetime import UTC, date, datetime, time
from functools import reduce
from typing import TypeVar

from diet_tracker.domain.meals import Meal, MealItem, MealType
from diet_tracker.domain.nutrition import NutritionProfile
from diet_tracker.domain.summaries import DailySummary, MealTypeBreakdown

_T = TypeVar("_T")


def sum_profiles(profiles: Iterable[NutritionProfile]) -> NutritionProfile:
    """Return the elementwise sum of the profiles (zeros for no input)."""
    return reduce(_add, profiles, NutritionProfile())


def total_for_items(items: Iterable[MealItem]) -> NutritionProfile:
    """Return the meal total for a full item list."""
    return sum_profiles(item.nutrition for item in items)


def meal_day(value: datetime) -> date:
    """Return the calendar day a meal is filed under (UTC for aware values)."""
    if value.tzinfo is not None:
        return value.astimezone(UTC).date()
    return value.date()


def summarize_daily(meals: Iterable[Meal]) -> list[DailySummary]:
    """Group dated meals by day and sum their stored totals, newest day first."""
    grouped: dict[date, list[Meal]] = {}
    for meal in meals:
        if meal.date is None:
            continue
        grouped.setdefault(meal_day(meal.date), []).append(meal)
    return [
        DailySummary(
            day=day,
            nutrition=sum_profiles(meal.total_nutrition for meal in day_meals),
            meals=day_meals,
        )
        for day, day_meals in sorted(grouped.items(), reverse=True)
    ]


def breakdown_by_meal_type(meals: Iterable[Meal]) -> list[MealTypeBreakdown]:
    """Group meals by meal type, summing totals and counting meals."""
    grouped: dict[str, list[Meal]] = {}
    for meal in meals:
        grouped.setdefault(meal.meal_type, []).append(meal)
    order = {meal_type.value: index for index, meal_type in enumerate(MealType)}
    return [
        MealTypeBreakdown(
            meal_type=meal_type,
            nutrition=sum_profiles(meal.total_nutrition for meal in type_meals),
            meal_count=len(type_meals),
        )
        for meal_type, type_meals in sorted(
            grouped.items(), key=lambda entry: order.get(entry[0], len(order))
        )
    ]


def _add(left: _T, right: _T) -> _T:
    if is_dataclass(left):
        summed = {
            item.name: _add(getattr(left, item.name), getattr(right, item.name))
            for item in fields(left)
        }
        return replace(left, **summed)
    return (left or 0.0) + (right or 0.0)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=UTC)


def end_of_day(day: date) -> datetime:
    """Return the last representable instant of the UTC day."""
    return datetime.combine(day, time.max, tzinfo=UTC)
