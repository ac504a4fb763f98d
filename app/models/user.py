"""
SQLAlchemy model for the users table.
"""

import enum

from sqlalchemy import Column, String, Enum

from app.db.session import Base
from app.db.base_model import BaseModel

class UserRole(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"

class User(Base, BaseModel):
    """
    An account that can sign in to the API.
    Independent of the Owner records of the insurance domain.
    """
    __tablename__ = "users"

    username = Column(String(50), nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    role = Column(Enum(UserRole, name="user_role"), nullable=False, default=UserRole.USER)

    def __repr__(self):
        return f"<User {self.username}>"
