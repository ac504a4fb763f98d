from typing import Optional
from pydantic import BaseModel, EmailStr, Field

class OwnerCreate(BaseModel):
    """Schema for creating an owner."""
    name: str = Field(..., min_length=1, description="Owner display name")
    email: EmailStr = Field(..., description="Owner email, unique across owners")

    model_config = {"str_strip_whitespace": True}

class OwnerUpdate(BaseModel):
    """
    Schema for a partial owner update.
    A field that is omitted or null leaves the stored value unchanged.
    """
    name: Optional[str] = Field(None, min_length=1, description="New display name")
    email: Optional[EmailStr] = Field(None, description="New email, must not belong to another owner")

    model_config = {"str_strip_whitespace": True}

class OwnerResponse(BaseModel):
    """Schema for returning an owner."""
    id: int = Field(..., description="Owner ID")
    name: str = Field(..., description="Owner display name")
    email: str = Field(..., description="Owner email")

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "example": {"id": 1, "name": "Ana Pop", "email": "ana.pop@example.com"}
        }
    }
