from datetime import datetime
from pydantic import BaseModel, Field

class ErrorResponse(BaseModel):
    """Body returned for every failed request."""
    status: int = Field(..., description="HTTP status code")
    error: str = Field(..., description="Short error category")
    message: str = Field(..., description="Human-readable message")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="When the error occurred")
