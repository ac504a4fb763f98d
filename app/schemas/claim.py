from datetime import date, datetime
from decimal import Decimal
from pydantic import BaseModel, Field

class ClaimCreate(BaseModel):
    """Schema for filing a claim against a car."""
    claim_date: date = Field(..., description="Date of the incident")
    description: str = Field(..., min_length=1, max_length=1000, description="What happened")
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, description="Claimed amount")

    model_config = {
        "str_strip_whitespace": True,
        "json_schema_extra": {
            "example": {
                "claim_date": "2024-03-15",
                "description": "Rear bumper damage",
                "amount": "1500.00"
            }
        }
    }

class ClaimResponse(BaseModel):
    """Schema for returning a claim."""
    id: int = Field(..., description="Claim ID")
    car_id: int = Field(..., description="ID of the car")
    claim_date: date = Field(..., description="Date of the incident")
    description: str = Field(..., description="What happened")
    amount: Decimal = Field(..., description="Claimed amount")
    created_at: datetime = Field(..., description="When the claim was recorded")

    model_config = {"from_attributes": True}
