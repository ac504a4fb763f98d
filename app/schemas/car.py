from typing import Optional
from pydantic import BaseModel, Field

from app.schemas.owner import OwnerResponse

class CarCreate(BaseModel):
    """Schema for registering a car."""
    vin: str = Field(..., min_length=5, max_length=32, description="Vehicle Identification Number")
    make: str = Field(..., min_length=1, description="Vehicle manufacturer (e.g., 'Dacia')")
    model: str = Field(..., min_length=1, description="Vehicle model (e.g., 'Logan')")
    year_of_manufacture: int = Field(..., ge=1900, le=2030, description="Manufacturing year")
    owner_id: int = Field(..., description="ID of the owning owner")

    model_config = {
        "str_strip_whitespace": True,
        "json_schema_extra": {
            "example": {
                "vin": "VIN123456789",
                "make": "Dacia",
                "model": "Logan",
                "year_of_manufacture": 2018,
                "owner_id": 1
            }
        }
    }

class CarUpdate(BaseModel):
    """
    Schema for a partial car update.
    A field that is omitted or null leaves the stored value unchanged.
    Any successful update removes all insurance policies of the car.
    """
    vin: Optional[str] = Field(None, min_length=5, max_length=32, description="New VIN")
    make: Optional[str] = Field(None, min_length=1, description="New manufacturer")
    model: Optional[str] = Field(None, min_length=1, description="New model")
    year_of_manufacture: Optional[int] = Field(None, ge=1900, le=2030, description="New manufacturing year")
    owner_id: Optional[int] = Field(None, description="ID of the new owner")

    model_config = {"str_strip_whitespace": True}

class CarResponse(BaseModel):
    """Schema for returning a car together with its owner."""
    id: int = Field(..., description="Car ID")
    vin: str = Field(..., description="Vehicle Identification Number")
    make: str = Field(..., description="Vehicle manufacturer")
    model: str = Field(..., description="Vehicle model")
    year_of_manufacture: int = Field(..., description="Manufacturing year")
    owner: Optional[OwnerResponse] = Field(None, description="Owning owner")

    model_config = {"from_attributes": True}

class InsuranceValidityResponse(BaseModel):
    """Result of an insurance validity check."""
    car_id: int = Field(..., description="Car ID")
    date: str = Field(..., description="Date that was checked (YYYY-MM-DD)")
    valid: bool = Field(..., description="Whether any policy covers the date")
