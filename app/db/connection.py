"""Async database connection manager supporting Turso (libSQL) and local SQLite."""

from pathlib import Path

import libsql_experimental as libsql
import structlog

from app.core.config import settings

logger = structlog.get_logger(__name__)


class Database:
    """Async database connection manager supporting Turso and local SQLite."""

    def __init__(self):
        """Initialize database manager."""
        self._connection: libsql.Connection | None = None

    async def connect(self) -> None:
        """Initialize the database connection."""
        if settings.use_turso:
            # Connect to Turso cloud database
            self._connection = libsql.connect(
                database=settings.turso_database_url,
                auth_token=settings.turso_auth_token,
            )
            url = settings.turso_database_url
            logger.info(
                "database_connected",
                type="turso",
                url=url[:50] + "..." if len(url) > 50 else url,
            )
        else:
            # Connect to local SQLite file
            db_path = settings.database_path
            db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = libsql.connect(database=str(db_path))
            logger.info("database_connected", type="sqlite", path=str(db_path))

        # Cascading deletes of videos rely on foreign keys
        self._connection.execute("PRAGMA foreign_keys = ON")

    async def disconnect(self) -> None:
        """Close the database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None
            logger.info("database_disconnected")

    @property
    def connection(self) -> libsql.Connection:
        """Get the current database connection."""
        if not self._connection:
            raise RuntimeError("Database not connected")
        return self._connection

    @property
    def is_connected(self) -> bool:
        """Check if the database is connected."""
        return self._connection is not None

    async def init_schema(self, schema_path: str | Path | None = None) -> None:
        """Initialize database schema from SQL file."""
        if schema_path is None:
            schema_path = Path(__file__).parent / "schema.sql"

        with open(schema_path) as f:
            schema = f.read()

        if not self._connection:
            raise RuntimeError("Database not connected")

        # Execute each statement separately (libsql doesn't have executescript)
        for statement in schema.split(";"):
            statement = statement.strip()
            if statement:
                self._connection.execute(statement)
        self._connection.commit()

        logger.info("database_schema_initialized")


# Application database instance, handed to repositories by the API dependencies
db = Database()
