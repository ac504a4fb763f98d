import datetime
from enum import Enum
from typing import List
from pydantic import BaseModel, Field

class HistoryEventType(str, Enum):
    INSURANCE_POLICY = "INSURANCE_POLICY"
    CLAIM = "CLAIM"

class HistoryEvent(BaseModel):
    """One entry of a car's timeline."""
    type: HistoryEventType = Field(..., description="Event source")
    date: datetime.date = Field(..., description="Day the event happened, primary sort key")
    description: str = Field(..., description="Human-readable description")
    timestamp: datetime.datetime = Field(..., description="Fine-grained time, breaks ties within a day")

class CarHistoryResponse(BaseModel):
    """Chronological history of a car."""
    car_id: int = Field(..., description="Car ID")
    vin: str = Field(..., description="Vehicle Identification Number")
    make: str = Field(..., description="Vehicle manufacturer")
    model: str = Field(..., description="Vehicle model")
    year_of_manufacture: int = Field(..., description="Manufacturing year")
    events: List[HistoryEvent] = Field(default_factory=list, description="Events, oldest first")
