"""
Account registration and credential checks.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import AlreadyExistsError, AuthenticationFailedError
from app.core.security import hash_password, verify_password
from app.db.session import transaction
from app.models.user import User, UserRole
from app.repositories import users as user_repository

logger = logging.getLogger(__name__)

def register(db: Session, username: str, password: str, email: str) -> User:
    """Create an account with the default role. Username is checked before email."""
    logger.info(f"Attempting to register user: {username}")

    try:
        with transaction(db):
            if user_repository.exists_by_username(db, username):
                raise AlreadyExistsError(f"Username already exists: {username}")
            if user_repository.exists_by_email(db, email):
                raise AlreadyExistsError(f"Email already exists: {email}")

            user = user_repository.save(db, User(
                username=username,
                password_hash=hash_password(password),
                email=email,
                role=UserRole.USER,
            ))
    except IntegrityError:
        # A concurrent registration won; the rolled-back session sees its row
        logger.warning(f"Unique constraint violated registering user: {username}")
        if user_repository.get_by_username(db, username) is not None:
            raise AlreadyExistsError(f"Username already exists: {username}") from None
        raise AlreadyExistsError(f"Email already exists: {email}") from None

    db.refresh(user)
    logger.info(f"Successfully registered user: {user.username}")
    return user

def authenticate(db: Session, username: str, password: str) -> User:
    """
    Return the user whose credentials match.

    Unknown usernames and wrong passwords raise the same
    AuthenticationFailedError so callers cannot tell them apart.
    """
    logger.info(f"Attempting to login user: {username}")

    user = user_repository.get_by_username(db, username)
    if user is None or not verify_password(password, user.password_hash):
        logger.warning(f"Failed login attempt for user: {username}")
        raise AuthenticationFailedError()

    logger.info(f"Successfully logged in user: {user.username}")
    return user

def load_user_by_username(db: Session, username: str):
    """Identity-store lookup used by the authentication middleware."""
    return user_repository.get_by_username(db, username)
