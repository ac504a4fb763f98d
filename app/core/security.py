from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import bcrypt
from jose import jwt
from jose.exceptions import JOSEError
from pydantic import BaseModel

from app.core.config import settings

REQUIRED_CLAIMS = ("sub", "iat", "exp")

class TokenPayload(BaseModel):
    """Model representing JWT token payload."""
    sub: Optional[str] = None
    iat: Optional[int] = None
    exp: Optional[int] = None
    role: Optional[str] = None

def create_access_token(user: Any, expires_delta: Optional[timedelta] = None) -> str:
    """
    Issue a signed token asserting the user's username and role.

    The token expires ACCESS_TOKEN_EXPIRE_MINUTES after issuance unless
    an explicit expires_delta is given.
    """
    issued_at = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    role = getattr(user, "role", None)
    to_encode = {
        "sub": user.username,
        "role": getattr(role, "value", role),
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

def decode_token(token: Optional[str]) -> Optional[TokenPayload]:
    """Verify signature and expiry; return None for anything that does not check out."""
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except (JOSEError, ValueError, TypeError):
        return None
    if any(payload.get(claim) is None for claim in REQUIRED_CLAIMS):
        return None
    try:
        return TokenPayload(**payload)
    except ValueError:
        return None

def validate_token(token: Optional[str], user: Any = None) -> bool:
    """
    Return True iff the token is well formed, correctly signed and unexpired.

    When a user is passed, the token subject must also equal the user's
    current username. Never raises.
    """
    payload = decode_token(token)
    if payload is None:
        return False
    if user is None:
        return True
    return payload.sub == getattr(user, "username", None)

def extract_username(token: Optional[str]) -> Optional[str]:
    """Return the token subject, or None if the token cannot be parsed."""
    payload = decode_token(token)
    return payload.sub if payload else None

def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False
