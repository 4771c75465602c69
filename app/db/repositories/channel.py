"""Channel repository for database operations."""

from typing import Any

import libsql_experimental as libsql
import structlog

from app.db.exceptions import PersistenceError
from app.db.repositories.common import fetch_all, fetch_one, utc_now_iso
from app.models.channel import ChannelCreate

logger = structlog.get_logger(__name__)


class ChannelRepository:
    """Repository for channel CRUD operations."""

    def __init__(self, connection: libsql.Connection):
        """Initialize with database connection."""
        self.conn = connection

    async def upsert(self, channel: ChannelCreate) -> dict[str, Any]:
        """Insert a channel or overwrite the one with the same channel ID.

        Returns:
            The stored channel row
        """
        now = utc_now_iso()
        try:
            self.conn.execute(
                """
                INSERT INTO channels (
                    channel_id, url, title, description, thumbnail_url,
                    subscriber_count, video_count, user_id, created_at, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(channel_id) DO UPDATE SET
                    url = excluded.url,
                    title = excluded.title,
                    description = excluded.description,
                    thumbnail_url = excluded.thumbnail_url,
                    subscriber_count = excluded.subscriber_count,
                    video_count = excluded.video_count,
                    user_id = excluded.user_id,
                    updated_at = excluded.updated_at
                """,
                (
                    channel.channel_id,
                    channel.url,
                    channel.title,
                    channel.description,
                    channel.thumbnail_url,
                    channel.subscriber_count,
                    channel.video_count,
                    channel.user_id,
                    now,
                    now,
                ),
            )
            self.conn.commit()
        except Exception as e:
            self.conn.rollback()
            raise PersistenceError(f"Failed to save channel {channel.channel_id}: {e}") from e

        logger.info("channel_upserted", channel_id=channel.channel_id)
        row = await self.get_by_channel_id(channel.channel_id)
        if row is None:
            raise PersistenceError(f"Channel missing after save: {channel.channel_id}")
        return row

    async def get_by_channel_id(self, channel_id: str) -> dict[str, Any] | None:
        """Get a channel by its YouTube channel ID."""
        return fetch_one(
            self.conn,
            "SELECT * FROM channels WHERE channel_id = ?",
            (channel_id,),
        )

    async def get_by_id(self, id: int) -> dict[str, Any] | None:
        """Get a channel by its database ID."""
        return fetch_one(self.conn, "SELECT * FROM channels WHERE id = ?", (id,))

    async def list_all(self) -> list[dict[str, Any]]:
        """List all channels, most recently updated first."""
        return fetch_all(self.conn, "SELECT * FROM channels ORDER BY updated_at DESC")

    async def delete(self, id: int) -> bool:
        """Delete a channel together with its videos and video stubs.

        Returns:
            True if a channel was deleted
        """
        if await self.get_by_id(id) is None:
            return False

        try:
            self.conn.execute("DELETE FROM videos WHERE channel_id = ?", (id,))
            self.conn.execute("DELETE FROM video_list WHERE channel_id = ?", (id,))
            self.conn.execute("DELETE FROM channels WHERE id = ?", (id,))
            self.conn.commit()
        except Exception as e:
            self.conn.rollback()
            raise PersistenceError(f"Failed to delete channel {id}: {e}") from e

        logger.info("channel_deleted", id=id)
        return True
