"""Persistence layer for recorded build requests.

Public API:
    # Database initialization and session management
    - init_database(database_url: str) -> None
    - get_session() -> ContextManager[Session]
    - close_database() -> None
    - get_engine() -> Engine

    # Repository classes
    - BuildRequestRepository: insert and query build/poll requests

    # Exceptions
    - PersistenceError, DatabaseConnectionError, DataIntegrityError

Example usage:
    >>> init_database("sqlite:///./data/hookdispatch.db")
    >>> with get_session() as session:
    ...     recent = BuildRequestRepository(session).list_recent()
"""

from .database import close_database, get_engine, get_session, init_database
from .exceptions import DatabaseConnectionError, DataIntegrityError, PersistenceError
from .repositories import BuildRequestRepository

__all__ = [
    "init_database",
    "get_session",
    "close_database",
    "get_engine",
    "BuildRequestRepository",
    "PersistenceError",
    "DatabaseConnectionError",
    "DataIntegrityError",
]
