"""Database exceptions."""


class PersistenceError(Exception):
    """Raised when a storage read or write fails."""

    pass
