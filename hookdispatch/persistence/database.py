"""Engine and session management for the build request store."""

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from hookdispatch.logging import get_logger
from hookdispatch.utils.redaction import redact_credentials

from .exceptions import DatabaseConnectionError

logger = get_logger(__name__, component="database")

_engine: Engine | None = None
_session_factory: sessionmaker | None = None


def init_database(database_url: str) -> None:
    """Open the build request store and create missing tables.

    SQLite file URLs get their parent directory created. An in-memory SQLite
    database is held on a single shared connection so every thread sees the
    same tables.

    Args:
        database_url: SQLAlchemy URL (e.g. "sqlite:///./data/hookdispatch.db")

    Raises:
        DatabaseConnectionError: If the URL is invalid or the database is unreachable
    """
    global _engine, _session_factory

    if not database_url or not isinstance(database_url, str):
        raise DatabaseConnectionError("Database URL must be a non-empty string")

    safe_url = redact_credentials(database_url)
    try:
        url = make_url(database_url)
    except ArgumentError as e:
        raise DatabaseConnectionError(f"Invalid database URL {safe_url}: {e}") from e

    logger.info(
        "Opening build request store",
        extra={"event": "database.initializing", "database_url": safe_url},
    )

    try:
        engine = _build_engine(url)
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))

        from .schema import create_schema

        create_schema(engine)
    except (OSError, SQLAlchemyError) as e:
        logger.error(
            f"Could not open build request store: {e}",
            extra={"event": "database.init_failed", "database_url": safe_url},
        )
        raise DatabaseConnectionError(f"Failed to initialize database {safe_url}: {e}") from e

    _engine = engine
    _session_factory = sessionmaker(bind=engine, autoflush=True, expire_on_commit=False)
    logger.info(
        "Build request store ready",
        extra={"event": "database.initialised", "database_url": safe_url},
    )


def _build_engine(url: URL) -> Engine:
    if url.get_backend_name() != "sqlite":
        return create_engine(url, pool_pre_ping=True)

    kwargs: Dict[str, Any] = {
        # Concurrent dispatches may record requests from several threads.
        "connect_args": {"check_same_thread": False, "timeout": 30},
    }
    in_memory = url.database in (None, "", ":memory:")
    if in_memory:
        kwargs["poolclass"] = StaticPool
    else:
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(url, **kwargs)
    if not in_memory:
        event.listen(engine, "connect", _enable_wal)
    return engine


def _enable_wal(dbapi_conn, connection_record) -> None:
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Yield a session that commits when the block exits cleanly.

    Any exception rolls the session back and is re-raised.

    Raises:
        DatabaseConnectionError: If init_database() has not been called

    Example:
        >>> with get_session() as session:
        ...     BuildRequestRepository(session).add(request)
    """
    if _session_factory is None:
        raise DatabaseConnectionError("Database not initialized; call init_database() first")

    session = _session_factory()
    try:
        yield session
        session.commit()
    except Exception as e:
        session.rollback()
        logger.warning(
            f"Rolled back build request session: {e}",
            extra={"event": "database.session.rolled_back", "error_type": type(e).__name__},
        )
        raise
    finally:
        session.close()


def get_engine() -> Engine:
    if _engine is None:
        raise DatabaseConnectionError("Database not initialized; call init_database() first")
    return _engine


def close_database() -> None:
    """Dispose of the engine, if any. Safe to call repeatedly."""
    global _engine, _session_factory

    engine, _engine, _session_factory = _engine, None, None
    if engine is not None:
        logger.info("Closing build request store", extra={"event": "database.closed"})
        engine.dispose()
