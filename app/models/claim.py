"""
SQLAlchemy model for the claim table.
"""

from sqlalchemy import Column, String, Integer, Date, Numeric, ForeignKey
from sqlalchemy.orm import relationship

from app.db.session import Base
from app.db.base_model import BaseModel

class Claim(Base, BaseModel):
    """
    An insurance claim filed against a car.
    created_at is assigned on insert and never updated.
    """
    __tablename__ = "claim"

    car_id = Column(Integer, ForeignKey("car.id"), nullable=False, index=True)
    claim_date = Column(Date, nullable=False)
    description = Column(String(1000), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)

    car = relationship("Car")

    def __repr__(self):
        return f"<Claim {self.id} for car {self.car_id}>"
