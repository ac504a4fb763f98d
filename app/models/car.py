"""
SQLAlchemy model for the car table.
"""

from sqlalchemy import Column, String, Integer, ForeignKey
from sqlalchemy.orm import relationship

from app.db.session import Base
from app.db.base_model import BaseModel

class Car(Base, BaseModel):
    """
    A vehicle identified by its VIN, always belonging to exactly one owner.
    """
    __tablename__ = "car"

    vin = Column(String(32), nullable=False, unique=True, index=True)
    make = Column(String, nullable=False)
    model = Column(String, nullable=False)
    year_of_manufacture = Column(Integer, nullable=False)
    owner_id = Column(Integer, ForeignKey("owner.id"), nullable=False, index=True)

    owner = relationship("Owner", lazy="joined")

    def __repr__(self):
        return f"<Car {self.id} {self.vin}>"
