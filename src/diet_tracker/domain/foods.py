"""Domain models for the food catalog."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from diet_tracker.domain.nutrition import NutritionProfile


class FoodCategory(StrEnum):
    """Catalog categories."""

    GRAINS = "grains"
    PROTEINS = "proteins"
    VEGETABLES = "vegetables"
    FRUITS = "fruits"
    DAIRY = "dairy"
    FATS = "fats"
    SWEETS = "sweets"
    BEVERAGES = "beverages"
    OTHER = "other"


class ServingUnit(StrEnum):
    """Units a reference serving can be expressed in."""

    GRAM = "g"
    MILLILITRE = "ml"
    TEASPOON = "tsp"
    TABLESPOON = "tbsp"
    CUP = "cup"
    PIECE = "piece"
    SLICE = "slice"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class DietTag(StrEnum):
    """Conditions and diets a food can be marked suitable or unsuitable for."""

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
    KETO = "keto"
    PALEO = "paleo"
    MEDITERRANEAN = "mediterranean"
    LOW_FODMAP = "low_fodmap"


@dataclass(frozen=True)
class ServingSize:
    """Reference serving the nutrition profile is expressed for."""

    amount: float
    unit: str
    description: str | None = None


@dataclass(frozen=True)
class Suitability:
    """A condition tag with an optional free-text note."""

    condition: str
    note: str | None = None


@dataclass(frozen=True)
class FoodItem:
    """A catalog food with its nutrition per reference serving."""

    id: UUID
    name: str
    category: str
    serving_size: ServingSize
    nutrition: NutritionProfile
    description: str | None = None
    suitable_for: tuple[Suitability, ...] = ()
    not_suitable_for: tuple[Suitability, ...] = ()
    is_common: bool = False
    is_verified: bool = False
    added_by: UUID | None = None
    last_updated_by: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_suitable_for(self, condition: str) -> bool:
        """Return True when marked suitable and not marked unsuitable."""
        if any(entry.condition == condition for entry in self.not_suitable_for):
            return False
        return any(entry.condition == condition for entry in self.suitable_for)


@dataclass(frozen=True)
class FoodQuery:
    """Filters for listing catalog foods."""

    search: str | None = None
    category: str | None = None
    suitable_for: str | None = None
    not_suitable_for: str | None = None
    is_common: bool | None = None
    is_verified: bool | None = None


@dataclass(frozen=True)
class FoodPage:
    """A page of catalog foods."""

    items: list[FoodItem]
    page: int
    pages: int
    total: int


@dataclass(frozen=True)
class ServingRequest:
    """An amount of a catalog food to compute nutrition for."""

    food_id: UUID
    amount: float
    unit: str


@dataclass(frozen=True)
class ServingNutrition:
    """Scaled nutrition for one requested serving."""

    food_id: UUID
    name: str
    amount: float
    unit: str
    nutrition: NutritionProfile


@dataclass(frozen=True)
class NutritionLookup:
    """Scaled nutrition for several servings plus their sum."""

    items: list[ServingNutrition] = field(default_factory=list)
    total: NutritionProfile = field(default_factory=NutritionProfile)
