import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from moodhome.db.feed import ChangeFeed
from moodhome.db.models import Base

logger = logging.getLogger(__name__)


def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Engine for the configured URL. SQLite gets thread-sharing enabled since
    FastAPI runs sync dependencies on a worker pool; in-memory SQLite also
    pins a single connection so every session sees the same database.
    """
    kwargs: dict = {"echo": echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
        kwargs["pool_recycle"] = 1800
    return create_engine(url, **kwargs)


class Database:
    """
    Store handle owned by the process entry point (``create_app``) and handed
    to whatever needs persistence. Holds the engine, the session factory and
    the change feed wired to that factory.
    """

    def __init__(self, url: str, *, engine: Optional[Engine] = None, echo: bool = False) -> None:
        self.url = url
        self.engine = engine or build_engine(url, echo=echo)
        self.session_factory = sessionmaker(self.engine, expire_on_commit=False, class_=Session)
        self.feed = ChangeFeed()
        self.feed.attach(self.session_factory)

    def create_all(self) -> None:
        Base.metadata.create_all(self.engine)
        logger.info("Database tables initialized successfully")

    def drop_all(self) -> None:
        Base.metadata.drop_all(self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        with self.session_factory() as s:
            yield s

    def ping(self) -> bool:
        """
        Connectivity check that returns True/False without raising.
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error("Database connection test failed: %s", e)
            return False

    def dispose(self) -> None:
        self.engine.dispose()
