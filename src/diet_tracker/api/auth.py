"""Registration, login and own-account endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status

from diet_tracker.api.deps import current_user
from diet_tracker.api.schemas import LoginRequest, ProfileUpdate, RegisterRequest
from diet_tracker.api.serializers import profile_payload, user_payload
from diet_tracker.domain.users import AuthResult, User

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_payload(result: AuthResult) -> dict[str, object]:
    return {**user_payload(result.user), "token": result.token}


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, request: Request) -> dict[str, object]:
    """Create an account and return it with a bearer token."""
    container: AppContainer = request.app.state.container
    result = container.user_service.register(
        payload.name, payload.email, payload.password
    )
    return _auth_payload(result)


@router.post("/login")
async def login(payload: LoginRequest, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return _auth_payload(container.user_service.login(payload.email, payload.password))


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
    """Update the profile, including email and password."""
    container: AppContainer = request.app.state.container
    profile = container.user_service.update_profile(
        user.id, payload.changes(), allow_credentials=True
    )
    return profile_payload(profile)


@router.delete("/me")
async def delete_me(
    request: Request, user: User = Depends(current_user)
) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    container.user_service.delete_account(user.id)
    return {"message": "User removed"}


@router.post("/refresh-token")
async def refresh_token(
    request: Request, user: User = Depends(current_user)
) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    return {"token": container.user_service.refresh_token(user.id)}
