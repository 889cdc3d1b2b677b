"""Profile, recommendation and admin user-listing endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from diet_tracker.api.deps import current_user, require_admin
from diet_tracker.api.schemas import ProfileUpdate
from diet_tracker.api.serializers import profile_payload
from diet_tracker.domain.users import User

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", dependencies=[Depends(require_admin)])
async def list_users(
    request: Request,
    search: str | None = None,
    page: int = 1,
    limit: int = 20,
) -> dict[str, object]:
    """Return users who have logged in, most recent first."""
    container: AppContainer = request.app.state.container
    result = container.user_service.list_users(search, page, limit)
    return {
        "users": [profile_payload(profile) for profile in result.users],
        "total": result.total,
        "page": result.page,
        "pages": result.pages,
    }


@router.get("/me")
async def get_me(
    request: Request, user: User = Depends(current_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return profile_payload(container.user_service.get_profile(user.id))


@router.put("/me")
async def update_me(
    payload: ProfileUpdate, request: Request, user: User = Depends(current_user)
) -> dict[str, object]:
    """Update profile fields; credentials are changed through /api/auth/me."""
    container: AppContainer = request.app.state.container
    profile = container.user_service.update_profile(user.id, payload.changes())
    return profile_payload(profile)


@router.get("/recommendations")
async def recommendations(
    request: Request, user: User = Depends(current_user)
) -> dict[str, list[str]]:
    container: AppContainer = request.app.state.container
    return asdict(container.user_service.recommendations(user.id))


@router.get("/health-conditions", dependencies=[Depends(current_user)])
async def health_conditions(request: Request) -> list[dict[str, str]]:
    container: AppContainer = request.app.state.container
    return [asdict(label) for label in container.user_service.health_conditions()]
