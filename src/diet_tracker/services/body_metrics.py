"""BMI, daily calorie and macro goal calculations."""

from dataclasses import replace

from diet_tracker.domain.rounding import round_half_up, round_to_int
from diet_tracker.domain.users import BodyMetrics, MacroGoals, User

KG_PER_LB = 0.453592
METRES_PER_FOOT = 0.3048
CM_PER_FOOT = 30.48
MIN_DAILY_CALORIES = 1200

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}

GOAL_CALORIE_ADJUSTMENTS: dict[str, int] = {
    "weight_loss": -500,
    "weight_gain": 500,
    "muscle_building": 250,
}

# (protein grams per kg, share of calories from fat)
MACRO_SPLITS: dict[str, tuple[float, float]] = {
    "weight_loss": (2.2, 0.25),
    "muscle_building": (2.2, 0.25),
    "weight_gain": (1.8, 0.30),
}
DEFAULT_MACRO_SPLIT = (1.6, 0.25)

GOAL_INPUT_FIELDS: frozenset[str] = frozenset(
    {"weight", "height", "age", "gender", "activity_level", "fitness_goal"}
)


def weight_in_kg(user: User) -> float | None:
    if user.weight is None:
        return None
    if user.weight.unit == "kg":
        return user.weight.value
    return user.weight.value * KG_PER_LB


def calculate_bmi(user: User) -> float | None:
    """Return BMI rounded to one decimal, or None without weight and height."""
    if user.weight is None or user.height is None:
        return None
    if user.height.unit == "cm":
        height_m = user.height.value / 100
    else:
        height_m = user.height.value * METRES_PER_FOOT
    if height_m <= 0:
        return None
    kg = weight_in_kg(user)
    return round_half_up(kg / (height_m * height_m), 1)


def bmi_category(bmi: float | None) -> str | None:
    """Return the WHO category label for a BMI value."""
    if bmi is None:
        return None
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal weight"
    if bmi < 30:
        return "Overweight"
    return "Obese"


def calculate_bmr(user: User) -> float | None:
    """Return the Mifflin-St Jeor basal metabolic rate."""
    if user.weight is None or user.height is None or not user.age or not user.gender:
        return None
    kg = weight_in_kg(user)
    if user.height.unit == "cm":
        height_cm = user.height.value
    else:
        height_cm = user.height.value * CM_PER_FOOT
    base = 10 * kg + 6.25 * height_cm - 5 * user.age
    # Every gender other than "male" uses the female constant.
    if user.gender == "male":
        return base + 5
    return base - 161


def calculate_daily_calories(user: User) -> int | None:
    """Return the goal-adjusted TDEE, floored at 1200 kcal."""
    if not user.activity_level or user.activity_level not in ACTIVITY_MULTIPLIERS:
        return None
    bmr = calculate_bmr(user)
    if bmr is None:
        return None
    tdee = bmr * ACTIVITY_MULTIPLIERS[user.activity_level]
    tdee += GOAL_CALORIE_ADJUSTMENTS.get(user.fitness_goal or "", 0)
    return round_to_int(max(tdee, MIN_DAILY_CALORIES))


def calculate_macros(user: User, calories: int | None = None) -> MacroGoals | None:
    """Split calories into protein, fat and carb grams for the user's goal.

    Calories default to the stored daily goal, then to a fresh calculation.
    """
    resolved = calories or user.daily_calorie_goal or calculate_daily_calories(user)
    kg = weight_in_kg(user)
    if not resolved or kg is None:
        return None
    protein_per_kg, fat_share = MACRO_SPLITS.get(
        user.fitness_goal or "", DEFAULT_MACRO_SPLIT
    )
    protein = round_to_int(kg * protein_per_kg)
    fat_calories = round_to_int(resolved * fat_share)
    fat = round_to_int(fat_calories / 9)
    carbs = round_to_int((resolved - protein * 4 - fat_calories) / 4)
    return MacroGoals(protein=protein, carbs=carbs, fat=fat)


def calculate_metrics(user: User) -> BodyMetrics:
    """Return every derived metric for a profile view."""
    bmi = calculate_bmi(user)
    return BodyMetrics(
        bmi=bmi,
        bmi_category=bmi_category(bmi),
        daily_calories=calculate_daily_calories(user),
        macros=calculate_macros(user),
    )


def recompute_goals(user: User) -> User:
    """Return the user with daily goals refreshed from their current inputs.

    Goals are left untouched when the inputs are incomplete.
    """
    calories = calculate_daily_calories(user)
    if calories is None:
        return user
    updated = replace(user, daily_calorie_goal=calories)
    macros = calculate_macros(updated, calories)
    if macros is None:
        return updated
    return replace(
        updated,
        daily_protein_goal=macros.protein,
        daily_carbs_goal=macros.carbs,
        daily_fat_goal=macros.fat,
    )


def goal_inputs_changed(changed_fields: set[str]) -> bool:
    """Return True when any field that feeds the goals was modified."""
    return bool(changed_fields & GOAL_INPUT_FIELDS)
