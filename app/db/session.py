from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings

db_url = settings.SQLALCHEMY_DATABASE_URI

if db_url.startswith("sqlite"):
    # Single shared connection so an in-memory database survives across sessions and threads
    engine = create_engine(
        db_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    engine = create_engine(
        db_url,
        pool_pre_ping=True  # Test connections for liveness when checked out from pool
    )

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for declarative class definitions
Base = declarative_base()

# Dependency to get database session
def get_db():
    """
    Dependency for FastAPI endpoints that need a database session.
    Creates a new session for each request and closes it when done.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Commit the session when the block succeeds, roll it back on any error.
    Multi-step writes placed in one block are applied all-or-nothing.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
