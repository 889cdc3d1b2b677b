"""Domain models for nutrition summaries."""

from dataclasses import dataclass
from datetime import date, datetime

from diet_tracker.domain.meals import Meal
from diet_tracker.domain.nutrients import Rda
from diet_tracker.domain.nutrition import NutritionProfile


@dataclass(frozen=True)
class DailySummary:
    """Summed meal totals for one calendar day."""

    day: date
    nutrition: NutritionProfile
    meals: list[Meal]

    @property
    def total_calories(self) -> float:
        return self.nutrition.calories

    @property
    def total_protein(self) -> float:
        return self.nutrition.protein

    @property
    def total_carbs(self) -> float:
        return self.nutrition.carbs.total

    @property
    def total_fat(self) -> float:
        return self.nutrition.fat.total


@dataclass(frozen=True)
class MealTypeBreakdown:
    """Summed meal totals for one meal type."""

    meal_type: str
    nutrition: NutritionProfile
    meal_count: int

    @property
    def total_calories(self) -> float:
        return self.nutrition.calories

    @property
    def total_protein(self) -> float:
        return self.nutrition.protein

    @property
    def total_carbs(self) -> float:
        return self.nutrition.carbs.total

    @property
    def total_fat(self) -> float:
        return self.nutrition.fat.total


@dataclass(frozen=True)
class DateRange:
    """Inclusive range a summary was computed for."""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class DailySummaryReport:
    range: DateRange
    days: list[DailySummary]


@dataclass(frozen=True)
class MealTypeReport:
    range: DateRange
    breakdown: list[MealTypeBreakdown]


@dataclass(frozen=True)
class NutrientRecord:
    """Intake of one nutrient over the analysed range."""

    group: str
    nutrient: str
    total: float
    per_day: float
    rda: Rda | None
    percentage: float | None


@dataclass(frozen=True)
class MicronutrientReport:
    """Micronutrient intake versus RDA with deficiency/excess flags."""

    start: datetime | None
    end: datetime | None
    tracked_days: int
    totals: dict[str, dict[str, float]]
    summary: list[NutrientRecord]
    deficiencies: list[NutrientRecord]
    excesses: list[NutrientRecord]
