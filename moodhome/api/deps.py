import logging
import time
from typing import Iterator

from fastapi import Depends, Request
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from moodhome.core.errors import StoreUnavailable
from moodhome.db.feed import ChangeFeed
from moodhome.db.session import Database

logger = logging.getLogger(__name__)

MAX_RETRIES = 3
RETRY_DELAY = 0.5  # seconds, doubled after each failed attempt


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_feed(database: Database = Depends(get_database)) -> ChangeFeed:
    return database.feed


def get_db(database: Database = Depends(get_database)) -> Iterator[Session]:
    """
    Dependency that provides a database session. Opening the connection is
    retried with exponential backoff; after the last attempt the request
    fails with StoreUnavailable and nothing has been written.
    """
    delay = RETRY_DELAY
    for attempt in range(MAX_RETRIES):
        session = database.session_factory()
        try:
            session.connection()
            break
        except OperationalError as e:
            session.close()
            if attempt < MAX_RETRIES - 1:
                logger.warning("Database connection issue, attempt %s/%s. Retrying in %ss... Error: %s",
                               attempt + 1, MAX_RETRIES, delay, e)
                time.sleep(delay)
                delay *= 2
                continue
            logger.error("Database connection failed after %s attempts: %s", MAX_RETRIES, e)
            raise StoreUnavailable(f"database unavailable after {MAX_RETRIES} attempts") from e
    try:
        yield session
    finally:
        session.close()
