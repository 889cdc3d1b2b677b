"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from diet_tracker.api.auth import router as auth_router
from diet_tracker.api.chat import router as chat_router
from diet_tracker.api.error_handlers import register_error_handlers
from diet_tracker.api.foods import router as foods_router
from diet_tracker.api.meals import router as meals_router
from diet_tracker.api.users import router as users_router
from diet_tracker.app_logging import configure_logging
from diet_tracker.config import parse_cors_origins
from diet_tracker.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Diet tracker API starting: environment=%s",
            app.state.container.settings.environment,
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Diet Tracker API", lifespan=lifespan)
    app.state.container = container

    origins = parse_cors_origins(container.settings.cors_origins)
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=origins != ["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_error_handlers(app)
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(foods_router)
    app.include_router(meals_router)
    app.include_router(chat_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
