import logging
from moodhome.core.config import settings
from moodhome.core.logging import configure_logging
from moodhome.db.session import Database

logger = logging.getLogger(__name__)

def init_db(url: str | None = None) -> Database:
    """Initialize database tables"""
    database = Database(url or settings.DATABASE_URL)
    try:
        database.create_all()
    except Exception as e:
        logger.error("Failed to initialize database: %s", e)
        raise
    return database

if __name__ == "__main__":
    configure_logging()
    init_db().dispose()
