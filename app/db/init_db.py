import logging
from sqlalchemy.exc import SQLAlchemyError

from app.db.session import Base, engine
# Register every model on Base.metadata before creating tables
import app.models  # noqa: F401

logger = logging.getLogger(__name__)

def init_db():
    """
    Initialize the database by creating all service tables.
    Existing tables are left untouched.
    """
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        for table in Base.metadata.sorted_tables:
            logger.info(f"Table {table.name} is ready")
        logger.info("Service tables created successfully")
    except SQLAlchemyError as e:
        logger.error(f"Error creating database tables: {e}")
        raise
