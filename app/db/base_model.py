from datetime import datetime
from sqlalchemy import Column, DateTime, Integer

class BaseModel:
    """Columns shared by all database models."""

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
