"""Micronutrient intake analysis against recommended daily amounts."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from diet_tracker.domain.foods import FoodItem
from diet_tracker.domain.meals import Meal, MealItem
from diet_tracker.domain.nutrients import DEFAULT_NUTRIENT_TABLES, NutrientTables
from diet_tracker.domain.rounding import round_half_up
from diet_tracker.domain.summaries import MicronutrientReport, NutrientRecord
from diet_tracker.errors import InvalidServingSize
from diet_tracker.services.aggregation import meal_day
from diet_tracker.services.scaling import nutrition_for_serving

_logger = logging.getLogger(__name__)


class FoodLookup(Protocol):
    """Read access to catalog foods."""

    def find_by_id(self, food_id: UUID) -> FoodItem | None:
        """Return a food by id, if present."""


@dataclass
class MicronutrientAnalyzer:
    """Sums vitamins, minerals, lipids and electrolytes over a set of meals."""

    foods: FoodLookup
    tables: NutrientTables = DEFAULT_NUTRIENT_TABLES

    def analyze(
        self,
        meals: list[Meal],
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> MicronutrientReport:
        """Build the intake report for the given meals."""
        totals = self._empty_totals()
        tracked: set[date] = set()
        food_cache: dict[UUID, FoodItem | None] = {}

        for meal in meals:
            if meal.date is not None:
                tracked.add(meal_day(meal.date))
            for item in meal.items:
                nutrition = self._effective_nutrition(item, food_cache)
                if nutrition is None:
                    continue
                self._accumulate(totals, nutrition)

        days_tracked = len(tracked) or 1
        summary = [
            self._record(group, key, value, days_tracked)
            for group, values in totals.items()
            for key, value in values.items()
        ]
        return MicronutrientReport(
            start=start,
            end=end,
            tracked_days=len(tracked),
            totals=totals,
            summary=summary,
            deficiencies=[entry for entry in summary if self._is_deficient(entry)],
            excesses=[entry for entry in summary if self._is_excess(entry)],
        )

    def _empty_totals(self) -> dict[str, dict[str, float]]:
        lipids = dict.fromkeys((*self.tables.lipid_keys, "cholesterol"), 0.0)
        lipids["total"] = 0.0
        return {
            "vitamins": dict.fromkeys(self.tables.vitamin_keys, 0.0),
            "minerals": dict.fromkeys(self.tables.mineral_keys, 0.0),
            "lipids": lipids,
            "electrolytes": dict.fromkeys(self.tables.electrolyte_keys, 0.0),
        }

    def _effective_nutrition(
        self, item: MealItem, food_cache: dict[UUID, FoodItem | None]
    ) -> dict[str, object] | None:
        snapshot = item.nutrition.to_dict()
        if self._has_micros(snapshot):
            return snapshot

        food = item.food
        if food is None:
            if item.food_id not in food_cache:
                food_cache[item.food_id] = self.foods.find_by_id(item.food_id)
            food = food_cache[item.food_id]
        if food is None:
            return None

        try:
            scaled = nutrition_for_serving(food, item.amount, item.unit)
        except InvalidServingSize:
            _logger.warning(
                "Skipping meal item with unusable serving size: food_id=%s",
                item.food_id,
            )
            return None
        return scaled.to_dict()

    def _has_micros(self, nutrition: dict[str, object]) -> bool:
        vitamins = _group(nutrition, "vitamins")
        minerals = _group(nutrition, "minerals")
        fat = _group(nutrition, "fat")
        return (
            any(vitamins.get(key) for key in self.tables.vitamin_keys)
            or any(minerals.get(key) for key in self.tables.mineral_keys)
            or any(nutrition.get(key) for key in self.tables.electrolyte_keys)
            or bool(nutrition.get("cholesterol"))
            or any(fat.get(key) for key in self.tables.lipid_keys)
        )

    def _accumulate(
        self, totals: dict[str, dict[str, float]], nutrition: dict[str, object]
    ) -> None:
        vitamins = _group(nutrition, "vitamins")
        minerals = _group(nutrition, "minerals")
        fat = _group(nutrition, "fat")
        for key in self.tables.vitamin_keys:
            totals["vitamins"][key] += _number(vitamins.get(key))
        for key in self.tables.mineral_keys:
            totals["minerals"][key] += _number(minerals.get(key))
        for key in self.tables.lipid_keys:
            totals["lipids"][key] += _number(fat.get(key))
        totals["lipids"]["total"] += _number(fat.get("total"))
        totals["lipids"]["cholesterol"] += _number(nutrition.get("cholesterol"))
        for key in self.tables.electrolyte_keys:
            totals["electrolytes"][key] += _number(nutrition.get(key))

    def _record(
        self, group: str, key: str, total: float, days_tracked: int
    ) -> NutrientRecord:
        rda = self.tables.rda.get(group, {}).get(key)
        per_day = total / days_tracked
        percentage = None
        if rda is not None and rda.amount:
            percentage = round_half_up(per_day / rda.amount * 100, 1)
        return NutrientRecord(
            group=group,
            nutrient=key,
            total=round_half_up(total, 2),
            per_day=round_half_up(per_day, 2),
            rda=rda,
            percentage=percentage,
        )

    def _is_deficient(self, record: NutrientRecord) -> bool:
        if record.percentage is None:
            return False
        if (
            record.group in self.tables.deficiency_groups
            or record.nutrient in self.tables.deficiency_keys
        ):
            return record.percentage < self.tables.deficiency_threshold
        return False

    def _is_excess(self, record: NutrientRecord) -> bool:
        if record.percentage is None:
            return False
        if record.nutrient in self.tables.upper_limit_keys:
            return record.percentage > self.tables.upper_limit_threshold
        return record.percentage > self.tables.excess_threshold


def _group(nutrition: dict[str, object], name: str) -> dict[str, object]:
    value = nutrition.get(name)
    return value if isinstance(value, dict) else {}


def _number(value: object) -> float:
    if isinstance(value, int | float) and not isinstance(value, bool):
        return float(value)
    return 0.0
