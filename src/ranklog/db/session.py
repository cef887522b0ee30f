"""Database handle.

A Database is opened once at process start, passed explicitly to the
components that need it, and closed at shutdown. There is no module-level
connection.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ranklog.core.errors import StoreUnavailable
from ranklog.db.schema import Base

logger = logging.getLogger(__name__)

# Default database location
DEFAULT_DATABASE_URL = "sqlite:///data/ranklog.db"


def create_db_engine(url: str = DEFAULT_DATABASE_URL) -> Engine:
    """Create SQLAlchemy engine for a database URL.

    In-memory SQLite uses StaticPool so every session sees the same
    database; file databases use the default pool, one connection per
    thread. Both pass check_same_thread=False.

    Args:
        url: SQLAlchemy database URL.

    Returns:
        SQLAlchemy engine instance.
    """
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return create_engine(url, echo=False, pool_pre_ping=True)

    database = parsed.database
    connect_args = {"check_same_thread": False}
    if not database or database == ":memory:":
        return create_engine(
            url, echo=False, connect_args=connect_args, poolclass=StaticPool
        )

    # Create parent directories for file databases
    Path(database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, echo=False, connect_args=connect_args)


class Database:
    """Explicit handle over an engine and its session factory.

    Sessions are serialized through one lock, so transactions from different
    threads never interleave on a shared SQLite connection.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._lock = threading.RLock()
        self._factory = sessionmaker(bind=engine, expire_on_commit=False)

    @classmethod
    def open(cls, url: str = DEFAULT_DATABASE_URL) -> "Database":
        """Open a database handle and make sure the schema exists."""
        database = cls(create_db_engine(url))
        database.init_schema()
        logger.info(f"Opened database {make_url(url).render_as_string(hide_password=True)}")
        return database

    def init_schema(self) -> None:
        """Create tables that do not exist yet."""
        try:
            Base.metadata.create_all(self.engine)
        except OperationalError as e:
            raise StoreUnavailable(f"Could not initialize schema: {e}") from e

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Context manager for sessions with automatic cleanup.

        Holds the handle's lock for the whole transaction. Commits on
        successful exit, rolls back on exception, and always closes the
        session. Connectivity failures are raised as
        StoreUnavailable.

        Yields:
            SQLAlchemy Session instance.

        Example:
            with database.session() as session:
                session.add(record)
        """
        with self._lock:
            session = self._factory()
            try:
                yield session
                session.commit()
            except OperationalError as e:
                session.rollback()
                raise StoreUnavailable(str(e)) from e
            except Exception:
                session.rollback()
                raise
            finally:
                session.close()

    def close(self) -> None:
        """Dispose of the engine's connections."""
        self.engine.dispose()
