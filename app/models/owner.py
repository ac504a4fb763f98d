"""
SQLAlchemy model for the owner table.
"""

from sqlalchemy import Column, String

from app.db.session import Base
from app.db.base_model import BaseModel

class Owner(Base, BaseModel):
    """
    A person owning zero or more cars.
    Cars are looked up by owner_id; no collection relationship is mapped so
    that deletes never cascade implicitly.
    """
    __tablename__ = "owner"

    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)

    def __repr__(self):
        return f"<Owner {self.id} {self.email}>"
