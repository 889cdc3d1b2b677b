"""Nutrition summaries over a user's logged meals."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from uuid import UUID

from diet_tracker.domain.summaries import (
    DailySummaryReport,
    DateRange,
    MealTypeReport,
    MicronutrientReport,
)
from diet_tracker.services.aggregation import (
    breakdown_by_meal_type,
    end_of_day,
    start_of_day,
    summarize_daily,
)
from diet_tracker.services.meals import MealRepository
from diet_tracker.services.micronutrients import MicronutrientAnalyzer

DAILY_WINDOW_DAYS = 7
MEAL_TYPE_WINDOW_DAYS = 30
MICRONUTRIENT_WINDOW_DAYS = 30


def _today() -> date:
    return datetime.now(tz=UTC).date()


@dataclass
class SummaryService:
    """Builds daily, meal-type and micronutrient reports."""

    repository: MealRepository
    analyzer: MicronutrientAnalyzer
    today: Callable[[], date] = field(default=_today)

    def daily(
        self, user_id: UUID, start: date | None = None, end: date | None = None
    ) -> DailySummaryReport:
        """Per-day totals, by default for the last week."""
        window = self._window(start, end, DAILY_WINDOW_DAYS)
        meals = self.repository.find_by_user_and_date_range(
            user_id, window.start, window.end
        )
        return DailySummaryReport(range=window, days=summarize_daily(meals))

    def meal_types(
        self, user_id: UUID, start: date | None = None, end: date | None = None
    ) -> MealTypeReport:
        """Per-meal-type totals, by default for the last 30 days."""
        window = self._window(start, end, MEAL_TYPE_WINDOW_DAYS)
        meals = self.repository.find_by_user_and_date_range(
            user_id, window.start, window.end
        )
        return MealTypeReport(range=window, breakdown=breakdown_by_meal_type(meals))

    def micronutrients(
        self, user_id: UUID, start: date | None = None, end: date | None = None
    ) -> MicronutrientReport:
        """Micronutrient report, by default for the 30 days ending today."""
        end_day = end or self.today()
        start_day = start or end_day - timedelta(days=MICRONUTRIENT_WINDOW_DAYS - 1)
        window = DateRange(start=start_of_day(start_day), end=end_of_day(end_day))
        meals = self.repository.find_by_user_and_date_range(
            user_id, window.start, window.end
        )
        return self.analyzer.analyze(meals, window.start, window.end)

    def _window(self, start: date | None, end: date | None, days: int) -> DateRange:
        today = self.today()
        start_day = start or today - timedelta(days=days)
        end_day = end or today
        return DateRange(start=start_of_day(start_day), end=end_of_day(end_day))
