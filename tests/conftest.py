"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID, uuid4

import pytest

from diet_tracker.config import Settings
from diet_tracker.containers import AppContainer
from diet_tracker.domain.chat import ChatMessage
from diet_tracker.domain.foods import FoodItem, FoodQuery, ServingSize
from diet_tracker.domain.meals import Meal, MealQuery
from diet_tracker.domain.nutrition import NutritionProfile
from diet_tracker.domain.users import User
from diet_tracker.services.chat import ChatClient, ChatService
from diet_tracker.services.foods import FoodCatalogService, FoodRepository
from diet_tracker.services.meals import MealRepository, MealService
from diet_tracker.services.micronutrients import MicronutrientAnalyzer
from diet_tracker.services.recommendations import AdviceRules, RecommendationEngine
from diet_tracker.services.security import PasswordHasher, TokenService
from diet_tracker.services.summaries import SummaryService
from diet_tracker.services.users import UserRepository, UserService


def make_food(  # noqa: PLR0913
    name: str = "Oats",
    nutrition: dict[str, object] | None = None,
    *,
    amount: float = 100,
    unit: str = "g",
    category: str = "grains",
    food_id: UUID | None = None,
) -> FoodItem:
    """Build a catalog food with the nutrition given per reference serving."""
    return FoodItem(
        id=food_id or uuid4(),
        name=name,
        category=category,
        serving_size=ServingSize(amount=amount, unit=unit),
        nutrition=NutritionProfile.from_dict(
            nutrition
            if nutrition is not None
            else {"calories": 389, "protein": 16.9, "carbs": {"total": 66.3}}
        ),
    )


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food catalog for tests."""

    foods: dict[UUID, FoodItem] = field(default_factory=dict)
    lookups: list[UUID] = field(default_factory=list)

    def add(self, food: FoodItem) -> FoodItem:
        self.foods[food.id] = food
        return food

    def find_by_id(self, food_id: UUID) -> FoodItem | None:
        self.lookups.append(food_id)
        return self.foods.get(food_id)

    def find_by_name(self, name: str) -> FoodItem | None:
        for food in self.foods.values():
            if food.name == name:
                return food
        return None

    def save(self, food: FoodItem) -> FoodItem:
        self.foods[food.id] = food
        return food

    def delete(self, food_id: UUID) -> None:
        self.foods.pop(food_id, None)

    def query(
        self, filters: FoodQuery, offset: int, limit: int
    ) -> tuple[list[FoodItem], int]:
        matches = [
            food
            for food in sorted(self.foods.values(), key=lambda food: food.name)
            if _matches(food, filters)
        ]
        return matches[offset : offset + limit], len(matches)

    def search_by_name(self, text: str, limit: int) -> list[FoodItem]:
        needle = text.lower()
        matches = [
            food
            for food in sorted(self.foods.values(), key=lambda food: food.name)
            if needle in food.name.lower()
        ]
        return matches[:limit]

    def list_categories(self) -> list[str]:
        return sorted({food.category for food in self.foods.values()})

    def list_by_category(self, category: str, limit: int) -> list[FoodItem]:
        matches = sorted(
            (food for food in self.foods.values() if food.category == category),
            key=lambda food: food.name,
        )
        return matches[:limit]


def _matches(food: FoodItem, filters: FoodQuery) -> bool:  # noqa: PLR0911
    if filters.search and filters.search.lower() not in food.name.lower():
        return False
    if filters.category and food.category != filters.category:
        return False
    if filters.suitable_for and not any(
        entry.condition == filters.suitable_for for entry in food.suitable_for
    ):
        return False
    if filters.not_suitable_for and not any(
        entry.condition == filters.not_suitable_for for entry in food.not_suitable_for
    ):
        return False
    if filters.is_common is not None and food.is_common != filters.is_common:
        return False
    if filters.is_verified is not None and food.is_verified != filters.is_verified:
        return False
    return True


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, Meal] = field(default_factory=dict)

    def find_by_id(self, meal_id: UUID) -> Meal | None:
        return self.meals.get(meal_id)

    def find_by_user_and_date_range(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[Meal]:
        return [
            meal
            for meal in self.meals.values()
            if meal.user_id == user_id and start <= meal.date <= end
        ]

    def query(
        self, user_id: UUID, filters: MealQuery, offset: int, limit: int
    ) -> tuple[list[Meal], int]:
        matches = [
            meal
            for meal in self.meals.values()
            if meal.user_id == user_id
            and (filters.start is None or meal.date >= filters.start)
            and (filters.end is None or meal.date <= filters.end)
            and (filters.meal_type is None or meal.meal_type == filters.meal_type)
            and (
                filters.is_template is None or meal.is_template == filters.is_template
            )
        ]
        matches.sort(key=lambda meal: (meal.date, meal.created_at), reverse=True)
        return matches[offset : offset + limit], len(matches)

    def save(self, meal: Meal) -> Meal:
        self.meals[meal.id] = meal
        return meal

    def delete(self, meal_id: UUID) -> None:
        self.meals.pop(meal_id, None)


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, User] = field(default_factory=dict)

    def find_by_id(self, user_id: UUID) -> User | None:
        return self.users.get(user_id)

    def find_by_email(self, email: str) -> User | None:
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    def save(self, user: User) -> User:
        self.users[user.id] = user
        return user

    def delete(self, user_id: UUID) -> None:
        self.users.pop(user_id, None)

    def list_logged_in(
        self, search: str | None, offset: int, limit: int
    ) -> tuple[list[User], int]:
        needle = (search or "").lower()
        matches = [
            user
            for user in self.users.values()
            if user.last_login is not None
            and (needle in user.name.lower() or needle in user.email)
        ]
        matches.sort(key=lambda user: user.last_login, reverse=True)
        return matches[offset : offset + limit], len(matches)


@dataclass
class FakeChatClient(ChatClient):
    """Fake chat client that records calls."""

    reply: str = "Eat more vegetables."
    calls: list[tuple[str, list[ChatMessage], str | None]] = field(
        default_factory=list
    )
    closed: bool = False

    async def complete(
        self,
        prompt: str,
        messages: list[ChatMessage],
        system_prompt: str | None,
    ) -> str:
        self.calls.append((prompt, messages, system_prompt))
        return self.reply

    async def close(self) -> None:
        self.closed = True


def make_user(**changes: object) -> User:
    user = User(
        id=uuid4(),
        name="Asha",
        email="asha@example.com",
        password_hash="",
    )
    return replace(user, **changes)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        jwt_secret="test-secret",
        admin_email="admin@example.com",
        groq_api_key=None,
        huggingface_api_key=None,
    )


@pytest.fixture
def food_repository() -> InMemoryFoodRepository:
    return InMemoryFoodRepository()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def chat_client() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def recommender() -> RecommendationEngine:
    return RecommendationEngine(AdviceRules.load())


@pytest.fixture
def user_service(
    settings: Settings,
    user_repository: InMemoryUserRepository,
    recommender: RecommendationEngine,
) -> UserService:
    return UserService(
        repository=user_repository,
        hasher=PasswordHasher(),
        tokens=TokenService(secret=settings.jwt_secret),
        recommender=recommender,
        admin_email=settings.admin_email,
    )


@pytest.fixture
def food_service(food_repository: InMemoryFoodRepository) -> FoodCatalogService:
    return FoodCatalogService(food_repository)


@pytest.fixture
def meal_service(
    meal_repository: InMemoryMealRepository,
    food_repository: InMemoryFoodRepository,
) -> MealService:
    return MealService(repository=meal_repository, foods=food_repository)


@pytest.fixture
def summary_service(
    meal_repository: InMemoryMealRepository,
    food_repository: InMemoryFoodRepository,
) -> SummaryService:
    return SummaryService(
        repository=meal_repository,
        analyzer=MicronutrientAnalyzer(food_repository),
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    user_service: UserService,
    food_service: FoodCatalogService,
    meal_service: MealService,
    summary_service: SummaryService,
    chat_client: FakeChatClient,
) -> AppContainer:
    async def close_resources() -> None:
        await chat_client.close()

    return AppContainer(
        settings=settings,
        user_service=user_service,
        food_service=food_service,
        meal_service=meal_service,
        summary_service=summary_service,
        chat_service=ChatService(chat_client),
        close_resources=close_resources,
    )
