"""Convert domain objects into JSON-ready dicts."""

from dataclasses import asdict

from diet_tracker.domain.foods import FoodItem, NutritionLookup
from diet_tracker.domain.meals import Meal, MealItem
from diet_tracker.domain.summaries import (
    DailySummaryReport,
    MealTypeReport,
    MicronutrientReport,
    NutrientRecord,
)
from diet_tracker.domain.users import User, UserProfile


def user_payload(user: User) -> dict[str, object]:
    """Public fields of a user; the password hash never leaves the service."""
    data = asdict(user)
    data.pop("password_hash")
    data["health_conditions"] = list(user.health_conditions)
    return data


def profile_payload(profile: UserProfile) -> dict[str, object]:
    metrics = profile.metrics
    return {
        **user_payload(profile.user),
        "bmi": metrics.bmi,
        "bmi_category": metrics.bmi_category,
        "daily_calories": metrics.daily_calories,
        "macros": asdict(metrics.macros) if metrics.macros else None,
    }


def food_payload(food: FoodItem) -> dict[str, object]:
    data = asdict(food)
    data["suitable_for"] = [asdict(entry) for entry in food.suitable_for]
    data["not_suitable_for"] = [asdict(entry) for entry in food.not_suitable_for]
    return data


def lookup_payload(lookup: NutritionLookup) -> dict[str, object]:
    return {
        "items": [
            {
                "food_id": item.food_id,
                "name": item.name,
                "amount": item.amount,
                "unit": item.unit,
                "nutrition": item.nutrition.to_dict(),
            }
            for item in lookup.items
        ],
        "total": lookup.total.to_dict(),
    }


def meal_item_payload(item: MealItem) -> dict[str, object]:
    return {
        "food_id": item.food_id,
        "name": item.name,
        "amount": item.amount,
        "unit": item.unit,
        "nutrition": item.nutrition.to_dict(),
        "note": item.note,
        "food": food_payload(item.food) if item.food else None,
    }


def meal_payload(meal: Meal) -> dict[str, object]:
    return {
        "id": meal.id,
        "user_id": meal.user_id,
        "name": meal.name,
        "meal_type": meal.meal_type,
        "date": meal.date,
        "items": [meal_item_payload(item) for item in meal.items],
        "total_nutrition": meal.total_nutrition.to_dict(),
        "notes": meal.notes,
        "is_favorite": meal.is_favorite,
        "is_template": meal.is_template,
        "image_url": meal.image_url,
        "created_at": meal.created_at,
    }


def daily_report_payload(report: DailySummaryReport) -> dict[str, object]:
    return {
        "start": report.range.start,
        "end": report.range.end,
        "days": [
            {
                "date": day.day,
                "total_calories": day.total_calories,
                "total_protein": day.total_protein,
                "total_carbs": day.total_carbs,
                "total_fat": day.total_fat,
                "nutrition": day.nutrition.to_dict(),
                "meals": [meal_payload(meal) for meal in day.meals],
            }
            for day in report.days
        ],
    }


def meal_type_report_payload(report: MealTypeReport) -> dict[str, object]:
    return {
        "start": report.range.start,
        "end": report.range.end,
        "breakdown": [
            {
                "meal_type": entry.meal_type,
                "total_calories": entry.total_calories,
                "total_protein": entry.total_protein,
                "total_carbs": entry.total_carbs,
                "total_fat": entry.total_fat,
                "meal_count": entry.meal_count,
            }
            for entry in report.breakdown
        ],
    }


def _record_payload(record: NutrientRecord) -> dict[str, object]:
    return {
        "group": record.group,
        "nutrient": record.nutrient,
        "total": record.total,
        "per_day": record.per_day,
        "rda": asdict(record.rda) if record.rda else None,
        "percentage": record.percentage,
    }


def micronutrient_payload(report: MicronutrientReport) -> dict[str, object]:
    return {
        "range": {"start": report.start, "end": report.end},
        "tracked_days": report.tracked_days,
        "totals": report.totals,
        "summary": [_record_payload(record) for record in report.summary],
        "deficiencies": [_record_payload(record) for record in report.deficiencies],
        "excesses": [_record_payload(record) for record in report.excesses],
    }
