"""
SQLAlchemy model for the insurancepolicy table.
"""

from sqlalchemy import Column, String, Integer, Date, ForeignKey
from sqlalchemy.orm import relationship

from app.db.session import Base
from app.db.base_model import BaseModel

class InsurancePolicy(Base, BaseModel):
    """
    A continuous coverage interval [start_date, end_date], both ends inclusive.

    end_date stays nullable for legacy rows; such rows never cover any date
    and are repaired by the fix-open-ended maintenance operation.
    """
    __tablename__ = "insurancepolicy"

    car_id = Column(Integer, ForeignKey("car.id"), nullable=False, index=True)
    provider = Column(String, nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True, index=True)

    car = relationship("Car")

    def __repr__(self):
        return f"<InsurancePolicy {self.id} for car {self.car_id}>"
