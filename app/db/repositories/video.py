"""Video repository for database operations."""

import json
from typing import Any

import libsql_experimental as libsql
import structlog

from app.db.exceptions import PersistenceError
from app.db.repositories.common import fetch_all, fetch_one, fetch_scalar, utc_now_iso
from app.models.video import VideoCreate, VideoStub

logger = structlog.get_logger(__name__)


def _decode(row: dict[str, Any]) -> dict[str, Any]:
    row["tags"] = json.loads(row["tags"]) if row.get("tags") else []
    return row


class VideoRepository:
    """Repository for video and video stub operations."""

    def __init__(self, connection: libsql.Connection):
        """Initialize with database connection."""
        self.conn = connection

    async def upsert_many(self, channel_id: int, videos: list[VideoCreate]) -> int:
        """Insert or update videos by video ID in a single write.

        Args:
            channel_id: Internal ID of the owning channel
            videos: Videos to store

        Returns:
            Number of videos written

        Raises:
            PersistenceError: If the write fails (nothing from this call is kept)
        """
        if not videos:
            return 0

        now = utc_now_iso()
        rows = [
            (
                video.video_id,
                channel_id,
                video.title,
                video.description,
                video.published_at.isoformat() if video.published_at else None,
                video.thumbnail_url,
                video.duration,
                video.view_count,
                video.like_count,
                video.comment_count,
                json.dumps(video.tags),
                now,
                now,
            )
            for video in videos
        ]

        try:
            self.conn.executemany(
                """
                INSERT INTO videos (
                    video_id, channel_id, title, description, published_at,
                    thumbnail_url, duration, view_count, like_count,
                    comment_count, tags, created_at, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(video_id) DO UPDATE SET
                    channel_id = excluded.channel_id,
                    title = excluded.title,
                    description = excluded.description,
                    published_at = excluded.published_at,
                    thumbnail_url = excluded.thumbnail_url,
                    duration = excluded.duration,
                    view_count = excluded.view_count,
                    like_count = excluded.like_count,
                    comment_count = excluded.comment_count,
                    tags = excluded.tags,
                    updated_at = excluded.updated_at
                """,
                rows,
            )
            self.conn.commit()
        except Exception as e:
            self.conn.rollback()
            raise PersistenceError(f"Failed to save videos: {e}") from e

        return len(rows)

    async def upsert_stubs(self, channel_id: int, stubs: list[VideoStub]) -> int:
        """Insert or update lightweight video entries by video ID."""
        if not stubs:
            return 0

        try:
            self.conn.executemany(
                """
                INSERT INTO video_list (video_id, channel_id, title, thumbnail_url)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(video_id) DO UPDATE SET
                    channel_id = excluded.channel_id,
                    title = excluded.title,
                    thumbnail_url = excluded.thumbnail_url
                """,
                [(stub.video_id, channel_id, stub.title, stub.thumbnail_url) for stub in stubs],
            )
            self.conn.commit()
        except Exception as e:
            self.conn.rollback()
            raise PersistenceError(f"Failed to save video list: {e}") from e

        logger.info("video_stubs_upserted", channel_id=channel_id, count=len(stubs))
        return len(stubs)

    async def get_by_video_id(self, video_id: str) -> dict[str, Any] | None:
        """Get a video by its YouTube video ID."""
        row = fetch_one(self.conn, "SELECT * FROM videos WHERE video_id = ?", (video_id,))
        return _decode(row) if row else None

    async def list_by_channel(self, channel_id: int) -> list[dict[str, Any]]:
        """List every video of a channel, most recently published first."""
        rows = fetch_all(
            self.conn,
            """
            SELECT * FROM videos
            WHERE channel_id = ?
            ORDER BY published_at DESC
            """,
            (channel_id,),
        )
        return [_decode(row) for row in rows]

    async def list_stubs_by_channel(self, channel_id: int) -> list[dict[str, Any]]:
        """List the lightweight video entries of a channel in fetch order."""
        return fetch_all(
            self.conn,
            "SELECT * FROM video_list WHERE channel_id = ? ORDER BY id",
            (channel_id,),
        )

    async def count_by_channel(self, channel_id: int) -> int:
        """Count videos for a channel."""
        return fetch_scalar(
            self.conn,
            "SELECT COUNT(*) FROM videos WHERE channel_id = ?",
            (channel_id,),
            default=0,
        )

    async def delete_by_channel(self, channel_id: int) -> None:
        """Delete every video of a channel."""
        try:
            self.conn.execute("DELETE FROM videos WHERE channel_id = ?", (channel_id,))
            self.conn.commit()
        except Exception as e:
            self.conn.rollback()
            raise PersistenceError(f"Failed to delete videos for channel {channel_id}: {e}") from e

        logger.info("channel_videos_deleted", channel_id=channel_id)
