from fastapi import FastAPI, Request, Response
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Callable, Optional
import logging

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import extract_username, validate_token
from app.db.session import SessionLocal
from app.schemas.auth import CurrentUser
from app.services.auth_service import load_user_by_username

logger = logging.getLogger(__name__)

def public_paths() -> tuple:
    """Exact paths that skip authentication entirely."""
    return (
        f"{settings.API_PREFIX}/auth/login",
        f"{settings.API_PREFIX}/auth/register",
        f"{settings.API_PREFIX}/openapi.json",
        "/docs",
        "/redoc",
    )

# Paths under these prefixes skip authentication too
PUBLIC_PATH_PREFIXES = ("/docs/", "/redoc/")

def is_public_path(path: str) -> bool:
    return path in public_paths() or path.startswith(PUBLIC_PATH_PREFIXES)

class JWTAuthenticationMiddleware(BaseHTTPMiddleware):
    """
    Establishes the request identity from the JWT cookie.

    The outcome is stored on request.state.user: a CurrentUser when the
    token is valid and still matches a stored account, None otherwise.
    This middleware never rejects a request; routes that need an identity
    enforce it through the get_current_user dependency.
    """

    def __init__(self, app, session_factory: Callable[[], Session] = SessionLocal):
        super().__init__(app)
        self.session_factory = session_factory

    def _load_user(self, username: str) -> Optional[CurrentUser]:
        db = self.session_factory()
        try:
            user = load_user_by_username(db, username)
            return CurrentUser.model_validate(user) if user is not None else None
        finally:
            db.close()

    async def _authenticate(self, request: Request) -> Optional[CurrentUser]:
        token = request.cookies.get(settings.JWT_COOKIE_NAME)
        if not token or not validate_token(token):
            return None

        username = extract_username(token)
        if username is None or request.state.user is not None:
            return request.state.user

        user = await run_in_threadpool(self._load_user, username)
        if user is not None and validate_token(token, user):
            logger.debug(f"Set authentication for user: {username}")
            return user
        return None

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request.state.user = None

        if is_public_path(request.url.path):
            return await call_next(request)

        try:
            request.state.user = await self._authenticate(request)
        except Exception as e:
            logger.error(f"Cannot set user authentication: {e}")
            request.state.user = None

        return await call_next(request)

def add_middleware(app: FastAPI) -> None:
    """Add all middleware to the FastAPI application."""
    app.add_middleware(JWTAuthenticationMiddleware)
