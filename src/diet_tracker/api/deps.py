"""Request dependencies for container access and bearer auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from diet_tracker.domain.users import User
from diet_tracker.errors import AuthenticationError, PermissionDeniedError

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

_bearer = HTTPBearer(auto_error=False)


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


async def current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> User:
    """Resolve the bearer token to a stored user."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authorized, no token")
    container = get_container(request)
    return container.user_service.authenticate(credentials.credentials)


async def require_admin(user: User = Depends(current_user)) -> User:
    """Ensure the caller is an administrator."""
    if not user.is_admin:
        raise PermissionDeniedError("Not authorized as an admin")
    return user
