import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from social_api.core.config import Settings
from social_api.db.base import Base

logger = logging.getLogger(__name__)


class Database:
    """
    Owns the engine and session factory for one configured store.

    Built once at application startup and disposed on shutdown.
    """

    def __init__(self, settings: Settings):
        url = settings.DATABASE_URL

        connect_args = {}
        engine_kwargs = {"future": True, "pool_pre_ping": True}
        if url.startswith("sqlite"):
            # Handlers run in the threadpool, so the connection crosses threads
            connect_args["check_same_thread"] = False
        else:
            engine_kwargs.update(pool_size=5, max_overflow=10)

        self.engine = create_engine(url, connect_args=connect_args, **engine_kwargs)
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )

    def create_all(self) -> None:
        # Register the document tables on Base.metadata
        import social_api.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Collections ready: %s", ", ".join(Base.metadata.tables))

    def dispose(self) -> None:
        self.engine.dispose()
