"""
Database Connection Management.

SQLAlchemy engine plus session factory, created lazily on first use
and shared by the whole process. Works against PostgreSQL, MySQL or
a local SQLite file.
"""
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from src.core.config import get_settings
from src.core.logging_config import get_logger

logger = get_logger(__name__)


def _engine_options(db_url: str) -> dict:
    """Pool options per backend; SQLite has no server-side pool."""
    if db_url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection so every session sees the same in-memory DB
            options["poolclass"] = StaticPool
        return options

    # pool_pre_ping: Test connections before using (handles stale connections)
    return {
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
    }


class DatabaseConnection:
    """
    Manages database connections and session lifecycle.

    Example:
        >>> db = DatabaseConnection()
        >>> with db.get_session() as session:
        ...     session.query(Staff).count()
    """

    def __init__(self, connection_url: Optional[str] = None):
        """
        Initialize database engine with connection pooling.

        Args:
            connection_url: Optional connection URL. If not provided, uses settings.
        """
        self.settings = get_settings()

        db_url = connection_url or self.settings.database_url

        self.engine = create_engine(
            db_url,
            echo=False,  # Set True to log all SQL (very verbose)
            **_engine_options(db_url),
        )

        # expire_on_commit=False lets callers read rows after the session closes
        self._session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

        logger.info(f"Database connection initialized: {db_url.split('@')[-1] if '@' in db_url else db_url}")

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """
        Get a database session with automatic cleanup.

        Transactions are rolled back on error, committed on success.

        Yields:
            SQLAlchemy Session object
        """
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Database error, rolling back: {e}")
            raise
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def check_connection(self) -> bool:
        """
        Test database connectivity.

        Returns:
            True if connection is healthy, False otherwise.
        """
        try:
            with self.get_session() as session:
                session.execute(text("SELECT 1"))
            logger.debug("Database connection check: OK")
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database connection check failed: {e}")
            return False

    def close(self):
        """Close all connections in the pool."""
        self.engine.dispose()
        logger.info("Database connections closed")


# Module-level instance (singleton pattern)
_db_connection: Optional[DatabaseConnection] = None


def get_database() -> DatabaseConnection:
    """
    Get or create the database connection instance.

    Lazy initialization prevents connecting before app startup.

    Returns:
        DatabaseConnection singleton instance
    """
    global _db_connection
    if _db_connection is None:
        _db_connection = DatabaseConnection()
    return _db_connection


def set_database(connection: Optional[DatabaseConnection]) -> None:
    """Replace the process-wide connection (None drops it)."""
    global _db_connection
    if _db_connection is not None and _db_connection is not connection:
        _db_connection.close()
    _db_connection = connection
