import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_optional_user
from app.core.config import settings
from app.core.security import create_access_token
from app.db.session import get_db
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    VerifyResponse,
)
from app.services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter()

def _set_jwt_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.JWT_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        path="/",
        httponly=True,
        secure=settings.JWT_COOKIE_SECURE,
    )

def _clear_jwt_cookie(response: Response) -> None:
    response.set_cookie(
        key=settings.JWT_COOKIE_NAME,
        value="",
        max_age=0,
        path="/",
        httponly=True,
        secure=settings.JWT_COOKIE_SECURE,
    )

@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> RegisterResponse:
    """
    Create a new account with the default USER role.

    Fails with 409 when the username or the email is already taken.
    """
    logger.info(f"Registration request for username: {payload.username}")
    user = auth_service.register(db, payload.username, payload.password, payload.email)
    return RegisterResponse(
        message="User registered successfully",
        user_id=user.id,
        username=user.username,
    )

@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, response: Response, db: Session = Depends(get_db)) -> LoginResponse:
    """
    Check credentials and hand out a JWT in an HTTP-only cookie.

    Unknown users and wrong passwords get the same 401 response.
    """
    logger.info(f"Login request for username: {payload.username}")
    user = auth_service.authenticate(db, payload.username, payload.password)
    _set_jwt_cookie(response, create_access_token(user))
    return LoginResponse(
        message="Login successful",
        user_id=user.id,
        username=user.username,
        role=user.role,
    )

@router.post("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    """Expire the JWT cookie."""
    logger.info("Logout request")
    _clear_jwt_cookie(response)
    return MessageResponse(message="Logout successful")

@router.get("/verify", response_model=VerifyResponse)
def verify(current_user: Optional[CurrentUser] = Depends(get_optional_user)) -> VerifyResponse:
    """Report whether the request carries a valid identity. Never fails with 401."""
    if current_user is None:
        logger.debug("Authentication validation failed")
        return VerifyResponse(authenticated=False)

    logger.debug(f"User authenticated: {current_user.username}")
    return VerifyResponse(
        authenticated=True,
        user_id=current_user.id,
        username=current_user.username,
        role=current_user.role,
    )
