"""User domain models."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class Gender(StrEnum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    PREFER_NOT_TO_SAY = "prefer_not_to_say"


class ActivityLevel(StrEnum):
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class FitnessGoal(StrEnum):
    WEIGHT_LOSS = "weight_loss"
    WEIGHT_GAIN = "weight_gain"
    MUSCLE_BUILDING = "muscle_building"
    MAINTENANCE = "maintenance"


class HealthCondition(StrEnum):
    DIABETES = "diabetes"
    HIGH_BLOOD_PRESSURE = "high_blood_pressure"
    HIGH_CHOLESTEROL = "high_cholesterol"
    OBESITY = "obesity"
    PCOS_PCOD = "pcos_pcod"
    THYROID_DISORDERS = "thyroid_disorders"
    HEART_DISEASE = "heart_disease"
    KIDNEY_ISSUES = "kidney_issues"
    PREGNANCY_NURSING = "pregnancy_nursing"
    CELIAC_GLUTEN_FREE = "celiac_gluten_free"
    LACTOSE_INTOLERANCE = "lactose_intolerance"
    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"


@dataclass(frozen=True)
class Measurement:
    """A body measurement with its unit (kg/lbs or cm/ft)."""

    value: float
    unit: str


@dataclass(frozen=True)
class Location:
    """Free-text user location."""

    area: str | None = None
    landmark: str | None = None
    state: str | None = None
    district: str | None = None


@dataclass(frozen=True)
class User:
    """Represents a registered user and their stored anthropometrics."""

    id: UUID
    name: str
    email: str
    password_hash: str
    age: int | None = None
    gender: str | None = None
    weight: Measurement | None = None
    height: Measurement | None = None
    activity_level: str | None = None
    fitness_goal: str | None = None
    health_conditions: tuple[str, ...] = ()
    location: Location | None = None
    daily_calorie_goal: int | None = None
    daily_protein_goal: int | None = None
    daily_carbs_goal: int | None = None
    daily_fat_goal: int | None = None
    is_admin: bool = False
    last_login: datetime | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class MacroGoals:
    """Daily macronutrient targets in grams."""

    protein: int
    carbs: int
    fat: int


@dataclass(frozen=True)
class BodyMetrics:
    """Derived metrics shown alongside a profile."""

    bmi: float | None
    bmi_category: str | None
    daily_calories: int | None
    macros: MacroGoals | None


@dataclass(frozen=True)
class UserProfile:
    """A user together with derived metrics."""

    user: User
    metrics: BodyMetrics


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful register or login."""

    user: User
    token: str


@dataclass(frozen=True)
class UserPage:
    """A page of user profiles for the admin listing."""

    users: list[UserProfile]
    page: int
    pages: int
    total: int
