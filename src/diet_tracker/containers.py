"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from diet_tracker.adapters.groq_chat_client import GroqChatClient
from diet_tracker.adapters.huggingface_client import HttpxHuggingFaceClient
from diet_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from diet_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from diet_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from diet_tracker.config import Settings
from diet_tracker.services.chat import ChatClient, ChatService
from diet_tracker.services.foods import FoodCatalogService
from diet_tracker.services.meals import MealService
from diet_tracker.services.micronutrients import MicronutrientAnalyzer
from diet_tracker.services.recommendations import AdviceRules, RecommendationEngine
from diet_tracker.services.security import PasswordHasher, TokenService
from diet_tracker.services.summaries import SummaryService
from diet_tracker.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    food_service: FoodCatalogService
    meal_service: MealService
    summary_service: SummaryService
    chat_service: ChatService
    close_resources: Callable[[], Awaitable[None]]


def build_chat_client(settings: Settings) -> ChatClient | None:
    """Return the Groq client when keyed, else Hugging Face, else nothing."""
    if settings.groq_api_key:
        return GroqChatClient.create(
            api_key=settings.groq_api_key,
            model=settings.groq_model,
            base_url=settings.groq_base_url,
        )
    if settings.huggingface_api_key:
        return HttpxHuggingFaceClient.create(
            api_key=settings.huggingface_api_key,
            model=settings.huggingface_model,
        )
    return None


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_repository = SupabaseFoodRepository(supabase_client)
    meal_repository = SupabaseMealRepository(supabase_client)
    user_repository = SupabaseUserRepository(supabase_client)

    user_service = UserService(
        repository=user_repository,
        hasher=PasswordHasher(),
        tokens=TokenService(
            secret=resolved_settings.jwt_secret,
            expire_days=resolved_settings.jwt_expire_days,
        ),
        recommender=RecommendationEngine(AdviceRules.load()),
        admin_email=resolved_settings.admin_email,
    )
    food_service = FoodCatalogService(food_repository)
    meal_service = MealService(repository=meal_repository, foods=food_repository)
    summary_service = SummaryService(
        repository=meal_repository,
        analyzer=MicronutrientAnalyzer(food_repository),
    )
    chat_client = build_chat_client(resolved_settings)
    chat_service = ChatService(chat_client)

    async def close_resources() -> None:
        if chat_client is not None:
            await chat_client.close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        food_service=food_service,
        meal_service=meal_service,
        summary_service=summary_service,
        chat_service=chat_service,
        close_resources=close_resources,
    )
