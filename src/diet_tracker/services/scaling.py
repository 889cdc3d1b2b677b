"""Serving-size scaling for nutrition profiles."""

from dataclasses import fields, is_dataclass, replace
from typing import TypeVar

from diet_tracker.domain.foods import FoodItem
from diet_tracker.domain.nutrition import NutritionProfile
from diet_tracker.domain.rounding import round_half_up
from diet_tracker.errors import InvalidServingSize

_T = TypeVar("_T")


def scale_nutrition(
    profile: NutritionProfile,
    reference_amount: float,
    reference_unit: str,
    requested_amount: float,
    requested_unit: str,
) -> NutritionProfile:
    """Scale a profile from its reference serving to the requested amount.

    Units are not converted: the ratio is taken from the amounts alone even
    when the units differ (100 g scaled to "1 cup" gives ratio 0.01). Stored
    meal snapshots depend on this ratio, so it is kept as is.
    """
    if reference_amount <= 0:
        raise InvalidServingSize(reference_amount)
    if requested_amount == reference_amount and requested_unit == reference_unit:
        return profile
    ratio = requested_amount / reference_amount
    return _scale(profile, ratio)


def nutrition_for_serving(food: FoodItem, amount: float, unit: str) -> NutritionProfile:
    """Return a catalog food's nutrition scaled to the requested amount."""
    return scale_nutrition(
        food.nutrition, food.serving_size.amount, food.serving_size.unit, amount, unit
    )


def _scale(value: _T, ratio: float) -> _T:
    if is_dataclass(value):
        scaled = {
            item.name: _scale(getattr(value, item.name), ratio)
            for item in fields(value)
        }
        return replace(value, **scaled)
    return round_half_up(value * ratio, 2)
