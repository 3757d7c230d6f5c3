"""Database configuration and session management."""

import logging
from collections.abc import Generator
from typing import Any

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from rencontre_repas.errors import StoreUnavailable

logger = logging.getLogger(__name__)

Base: Any = declarative_base()


class Database:
    """Owns the engine and session factory for the process lifetime.

    Created once at startup, attached to the application, and closed on
    shutdown. A failed ``connect()`` is logged but not raised: the server keeps
    running and every request that needs the store fails with
    ``StoreUnavailable`` until the process is restarted.
    """

    def __init__(self, url: str, **engine_kwargs: Any):
        self.url = url
        self.engine_kwargs = engine_kwargs
        self.engine: Engine | None = None
        self._session_factory: sessionmaker | None = None

    @property
    def is_connected(self) -> bool:
        return self._session_factory is not None

    def connect(self) -> bool:
        """Create the engine, check connectivity and create missing tables."""
        # Import models so they are registered with Base.metadata
        from rencontre_repas import models  # noqa: F401

        kwargs = dict(self.engine_kwargs)
        if self.url.startswith("sqlite"):
            kwargs.setdefault("connect_args", {"check_same_thread": False})
        else:
            kwargs.setdefault("pool_pre_ping", True)
            kwargs.setdefault("pool_size", 5)
            kwargs.setdefault("max_overflow", 10)

        try:
            engine = create_engine(self.url, **kwargs)
            Base.metadata.create_all(bind=engine)
        except SQLAlchemyError as e:
            logger.error(f"Failed to connect to database {self._safe_url()}: {e}")
            return False

        self.engine = engine
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        logger.info(f"Connected to database {self._safe_url()}")
        return True

    def session(self) -> Session:
        """Open a new session; raises StoreUnavailable when not connected."""
        if self._session_factory is None:
            raise StoreUnavailable("Database is not connected")
        return self._session_factory()

    def close(self) -> None:
        """Dispose of the connection pool."""
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Database connection closed")
        self.engine = None
        self._session_factory = None

    def _safe_url(self) -> str:
        try:
            return make_url(self.url).render_as_string(hide_password=True)
        except SQLAlchemyError:
            return "<invalid url>"


def get_db(request: Request) -> Generator[Session | None, None, None]:
    """Dependency that provides a database session.

    Yields ``None`` when the database never connected so the store can report
    ``StoreUnavailable`` inside the signup flow.
    """
    database: Database = request.app.state.database
    if not database.is_connected:
        yield None
        return
    db = database.session()
    try:
        yield db
    finally:
        db.close()
