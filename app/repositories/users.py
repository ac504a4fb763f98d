"""Data access for the users table."""

from typing import Optional

from sqlalchemy.orm import Session

from app.models.user import User


def get_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def exists_by_username(db: Session, username: str) -> bool:
    return db.query(User.id).filter(User.username == username).first() is not None


def exists_by_email(db: Session, email: str) -> bool:
    return db.query(User.id).filter(User.email == email).first() is not None


def save(db: Session, user: User) -> User:
    db.add(user)
    db.flush()
    return user
