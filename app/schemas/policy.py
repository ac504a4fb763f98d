from datetime import date
from typing import Optional
from pydantic import BaseModel, Field

class InsurancePolicyCreate(BaseModel):
    """Schema for creating an insurance policy."""
    car_id: int = Field(..., description="ID of the insured car")
    provider: Optional[str] = Field(None, description="Insurance provider name")
    start_date: date = Field(..., description="First covered day")
    end_date: date = Field(..., description="Last covered day")

    model_config = {
        "json_schema_extra": {
            "example": {
                "car_id": 1,
                "provider": "State Farm",
                "start_date": "2024-01-01",
                "end_date": "2024-12-31"
            }
        }
    }

class InsurancePolicyUpdate(BaseModel):
    """
    Schema for updating an insurance policy.
    car_id and provider are optional (null leaves them unchanged); both dates are required.
    """
    car_id: Optional[int] = Field(None, description="ID of the car to move the policy to")
    provider: Optional[str] = Field(None, description="Insurance provider name")
    start_date: date = Field(..., description="First covered day")
    end_date: date = Field(..., description="Last covered day")

class InsurancePolicyResponse(BaseModel):
    """Schema for returning an insurance policy."""
    id: int = Field(..., description="Policy ID")
    car_id: int = Field(..., description="ID of the insured car")
    provider: Optional[str] = Field(None, description="Insurance provider name")
    start_date: date = Field(..., description="First covered day")
    end_date: Optional[date] = Field(None, description="Last covered day")

    model_config = {"from_attributes": True}
