from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from app.models.user import UserRole

class RegisterRequest(BaseModel):
    """Schema for creating an account."""
    username: str = Field(..., min_length=3, max_length=50, description="Unique login name")
    password: str = Field(..., min_length=6, max_length=100, description="Plain-text password")
    email: EmailStr = Field(..., description="Unique email address")

class LoginRequest(BaseModel):
    """Schema for signing in."""
    username: str = Field(..., min_length=1, description="Login name")
    password: str = Field(..., min_length=1, description="Plain-text password")

class CurrentUser(BaseModel):
    """The identity established for a request by the authentication middleware."""
    id: int
    username: str
    email: str
    role: UserRole

    model_config = {"from_attributes": True}

class RegisterResponse(BaseModel):
    message: str
    user_id: int
    username: str

class LoginResponse(BaseModel):
    message: str
    user_id: int
    username: str
    role: UserRole

class MessageResponse(BaseModel):
    message: str

class VerifyResponse(BaseModel):
    """Authentication status of the calling request."""
    authenticated: bool
    user_id: Optional[int] = None
    username: Optional[str] = None
    role: Optional[UserRole] = None
