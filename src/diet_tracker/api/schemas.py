"""Pydantic request models for the HTTP API."""

from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from diet_tracker.domain.foods import FoodCategory, ServingUnit
from diet_tracker.domain.meals import MealType


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    email: str
    password: str = Field(min_length=6)


class LoginRequest(BaseModel):
    email: str
    password: str


class MeasurementIn(BaseModel):
    """Partial weight or height; omitted keys keep their stored value."""

    value: float | None = None
    unit: str | None = None


class LocationIn(BaseModel):
    area: str | None = None
    landmark: str | None = None
    state: str | None = None
    district: str | None = None


class ProfileUpdate(BaseModel):
    """Profile changes; unknown keys are passed through and rejected later."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    email: str | None = None
    password: str | None = None
    age: int | None = None
    gender: str | None = None
    weight: MeasurementIn | None = None
    height: MeasurementIn | None = None
    activity_level: str | None = None
    fitness_goal: str | None = None
    health_conditions: list[str] | None = None
    location: LocationIn | None = None

    def changes(self) -> dict[str, object]:
        """Return only the fields the client actually sent."""
        changes = self.model_dump(exclude_unset=True)
        changes.update(self.model_extra or {})
        return changes


class ServingSizeIn(BaseModel):
    amount: float = Field(gt=0)
    unit: ServingUnit
    description: str | None = None


class SuitabilityIn(BaseModel):
    condition: str
    note: str | None = None


class FoodCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None
    category: FoodCategory
    serving_size: ServingSizeIn
    nutrition: dict[str, Any]
    suitable_for: list[SuitabilityIn] = Field(default_factory=list)
    not_suitable_for: list[SuitabilityIn] = Field(default_factory=list)
    is_common: bool = False
    is_verified: bool = False


class FoodUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    category: FoodCategory | None = None
    serving_size: ServingSizeIn | None = None
    nutrition: dict[str, Any] | None = None
    suitable_for: list[SuitabilityIn] | None = None
    not_suitable_for: list[SuitabilityIn] | None = None
    is_common: bool | None = None
    is_verified: bool | None = None


class ServingIn(BaseModel):
    food_id: UUID
    amount: float = Field(gt=0)
    unit: str


class NutritionRequest(BaseModel):
    foods: list[ServingIn] = Field(min_length=1)


class MealItemIn(BaseModel):
    food_id: UUID
    amount: float = Field(ge=0.1)
    unit: str
    note: str | None = Field(default=None, max_length=200)


class MealCreate(BaseModel):
    name: str | None = Field(default=None, max_length=50)
    meal_type: MealType
    items: list[MealItemIn] = Field(min_length=1)
    date: datetime | None = None
    notes: str | None = Field(default=None, max_length=500)
    is_template: bool = False
    is_favorite: bool = False


class MealUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=50)
    meal_type: MealType | None = None
    items: list[MealItemIn] | None = Field(default=None, min_length=1)
    date: datetime | None = None
    notes: str | None = Field(default=None, max_length=500)
    is_template: bool | None = None
    is_favorite: bool | None = None


class ChatMessageIn(BaseModel):
    role: Literal["user", "assistant"] = "user"
    content: str = Field(min_length=1, max_length=1000)


class ChatRequest(BaseModel):
    prompt: str | None = None
    messages: list[ChatMessageIn] | None = None
    system_prompt: str | None = Field(default=None, max_length=1000)
