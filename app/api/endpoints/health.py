import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter()

def _database_reachable(db: Session) -> bool:
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check could not reach the database: {e}")
        return False
    return True

@router.get("/")
def health_check(db: Session = Depends(get_db)):
    """Public diagnostic endpoint reporting whether the insurance database answers."""
    database_online = _database_reachable(db)
    return {
        "status": "healthy" if database_online else "unhealthy",
        "api": "online",
        "database": "online" if database_online else "offline",
    }
