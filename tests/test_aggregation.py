"""Tests for nutrition totals and summaries."""

from dataclasses import replace
from datetime import UTC, date, datetime, timedelta, timezone
from uuid import uuid4

from diet_tracker.domain.meals import Meal, MealItem
from diet_tracker.domain.nutrition import FatProfile, NutritionProfile
from diet_tracker.services.aggregation import (
    breakdown_by_meal_type,
    end_of_day,
    meal_day,
    start_of_day,
    sum_profiles,
    summarize_daily,
    total_for_items,
)


def _meal(
    meal_type: str, when: datetime, calories: float, protein: float = 0
) -> Meal:
    return Meal(
        id=uuid4(),
        user_id=uuid4(),
        meal_type=meal_type,
        date=when,
        total_nutrition=NutritionProfile(calories=calories, protein=protein),
    )


def test_sum_of_nothing_is_all_zeros() -> None:
    assert sum_profiles([]) == NutritionProfile()


def test_sum_adds_nested_values() -> None:
    first = NutritionProfile(calories=100, fat=FatProfile(total=3, saturated=1))
    second = NutritionProfile(calories=50.5, fat=FatProfile(total=2))

    total = sum_profiles([first, second])

    assert total.calories == 150.5
    assert total.fat == FatProfile(total=5, saturated=1)


def test_total_for_items_uses_item_snapshots() -> None:
    items = [
        MealItem(
            food_id=uuid4(),
            name="Oats",
            amount=50,
            unit="g",
            nutrition=NutritionProfile(calories=194.5),
        ),
        MealItem(
            food_id=uuid4(),
            name="Milk",
            amount=200,
            unit="ml",
            nutrition=NutritionProfile(calories=122),
        ),
    ]

    assert total_for_items(items).calories == 316.5


def test_meal_day_uses_utc_for_aware_values() -> None:
    late_evening = datetime(2024, 3, 1, 23, 30, tzinfo=timezone(timedelta(hours=-5)))

    assert meal_day(late_evening) == date(2024, 3, 2)
    assert meal_day(datetime(2024, 3, 1, 23, 30)) == date(2024, 3, 1)


def test_daily_summary_groups_by_day_newest_first() -> None:
    meals = [
        _meal("breakfast", datetime(2024, 3, 1, 8, tzinfo=UTC), 300, 10),
        _meal("dinner", datetime(2024, 3, 2, 19, tzinfo=UTC), 700, 35),
        _meal("lunch", datetime(2024, 3, 1, 13, tzinfo=UTC), 500, 20),
    ]

    days = summarize_daily(meals)

    assert [day.day for day in days] == [date(2024, 3, 2), date(2024, 3, 1)]
    assert days[1].total_calories == 800
    assert days[1].total_protein == 30
    assert len(days[1].meals) == 2


def test_breakdown_follows_meal_type_order() -> None:
    when = datetime(2024, 3, 1, 12, tzinfo=UTC)
    meals = [
        _meal("snack", when, 150),
        _meal("breakfast", when, 300),
        _meal("snack", when, 100),
    ]

    breakdown = breakdown_by_meal_type(meals)

    assert [entry.meal_type for entry in breakdown] == ["breakfast", "snack"]
    assert breakdown[1].meal_count == 2
    assert breakdown[1].total_calories == 250


def test_day_bounds_cover_the_whole_utc_day() -> None:
    start = start_of_day(date(2024, 3, 1))
    end = end_of_day(date(2024, 3, 1))

    assert start == datetime(2024, 3, 1, tzinfo=UTC)
    assert end.date() == date(2024, 3, 1)
    assert end.microsecond == 999999


def test_daily_summary_skips_meals_without_a_date() -> None:
    meals = [
        _meal("lunch", datetime(2024, 3, 1, 13, tzinfo=UTC), 500),
        replace(_meal("snack", datetime(2024, 3, 1, 16, tzinfo=UTC), 90), date=None),
    ]

    days = summarize_daily(meals)

    assert [day.day for day in days] == [date(2024, 3, 1)]
    assert days[0].total_calories == 500


def test_sum_is_commutative_and_associative() -> None:
    first = NutritionProfile(calories=120.25, fat=FatProfile(total=3.5, trans=0.1))
    second = NutritionProfile(calories=80, protein=6.5, sodium=140)
    third = NutritionProfile(protein=1.25, fat=FatProfile(saturated=2))

    forward = sum_profiles([first, second, third])

    assert sum_profiles([third, first, second]) == forward
    assert sum_profiles([sum_profiles([first, second]), third]) == forward
    assert sum_profiles([first, sum_profiles([second, third])]) == forward
