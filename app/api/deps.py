"""Shared dependencies for API routes."""

from typing import Optional

from fastapi import Request

from app.core.exceptions import NotAuthenticatedError
from app.schemas.auth import CurrentUser


def get_optional_user(request: Request) -> Optional[CurrentUser]:
    """Identity established by the authentication middleware for this request, if any."""
    return getattr(request.state, "user", None)


def get_current_user(request: Request) -> CurrentUser:
    """Require an authenticated identity."""
    user = get_optional_user(request)
    if user is None:
        raise NotAuthenticatedError()
    return user
