"""Persistence layer exceptions.

All persistence exceptions inherit from PersistenceError so callers can catch
them with a single except clause.
"""


class PersistenceError(Exception):
    """Base exception for all persistence layer errors."""

    pass


class DatabaseConnectionError(PersistenceError):
    """Raised when database connection or initialization fails.

    Examples:
    - Empty or malformed database URL
    - Database file not writable
    - Session requested before init_database()
    """

    pass


class DataIntegrityError(PersistenceError):
    """Raised when a constraint is violated (e.g. duplicate request id)."""

    pass
