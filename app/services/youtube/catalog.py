"""Channel metadata and upload catalog fetching from the YouTube Data API."""

from typing import Any

import structlog

from app.core.config import settings
from app.models.channel import ChannelCreate
from app.models.video import VideoCreate, VideoStub
from app.services.youtube.client import YouTubeClient
from app.services.youtube.duration import parse_duration
from app.services.youtube.exceptions import (
    ChannelNotFoundError,
    MetadataExtractionError,
    YouTubeAPIError,
)

logger = structlog.get_logger(__name__)

CHANNEL_URL = "https://www.youtube.com/channel/{channel_id}"


def best_thumbnail(thumbnails: dict[str, Any] | None) -> str | None:
    """Pick the high resolution thumbnail, falling back to the default one."""
    if not thumbnails:
        return None
    for size in ("high", "default"):
        if size in thumbnails and thumbnails[size].get("url"):
            return thumbnails[size]["url"]
    return None


def _to_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def video_from_api(item: dict[str, Any]) -> VideoCreate:
    """Map a ``videos.list`` item (snippet, contentDetails, statistics) to a video."""
    snippet = item.get("snippet") or {}
    content = item.get("contentDetails") or {}
    stats = item.get("statistics") or {}

    # likeCount is absent when the uploader hides likes
    like_count = _to_int(stats["likeCount"]) if "likeCount" in stats else None

    return VideoCreate(
        video_id=item["id"],
        title=snippet.get("title", ""),
        description=snippet.get("description"),
        published_at=snippet.get("publishedAt"),
        thumbnail_url=best_thumbnail(snippet.get("thumbnails")),
        duration=parse_duration(content.get("duration")),
        view_count=_to_int(stats.get("viewCount")),
        like_count=like_count,
        comment_count=_to_int(stats.get("commentCount")),
        tags=snippet.get("tags") or [],
    )


class CatalogFetcher:
    """Walks a channel's uploads playlist in basic or detailed mode.

    Both modes preserve the playlist's own ordering (most recent first) and
    fetch pages sequentially, since each page token comes from the previous
    response. Any API failure aborts the whole fetch.
    """

    def __init__(self, client: YouTubeClient, page_size: int | None = None):
        self.client = client
        self.page_size = page_size or settings.youtube_page_size

    async def fetch_channel_info(self, channel_id: str) -> ChannelCreate:
        """Fetch channel metadata.

        Raises:
            ChannelNotFoundError: If the API returns no channel
            MetadataExtractionError: If the API call fails
        """
        try:
            response = await self.client.list_channels(
                part="snippet,statistics",
                id=channel_id,
            )
        except YouTubeAPIError as e:
            raise MetadataExtractionError(f"Failed to get channel info: {e}") from e

        items = response.get("items") or []
        if not items:
            raise ChannelNotFoundError(f"Channel not found: {channel_id}")

        snippet = items[0].get("snippet") or {}
        stats = items[0].get("statistics") or {}

        channel = ChannelCreate(
            channel_id=channel_id,
            url=CHANNEL_URL.format(channel_id=channel_id),
            title=snippet.get("title", ""),
            description=snippet.get("description"),
            thumbnail_url=best_thumbnail(snippet.get("thumbnails")),
            subscriber_count=_to_int(stats.get("subscriberCount")),
            video_count=_to_int(stats.get("videoCount")),
        )
        logger.info("channel_info_fetched", channel_id=channel_id, title=channel.title)
        return channel

    async def get_uploads_playlist_id(self, channel_id: str) -> str:
        """Look up the ID of the channel's uploads playlist."""
        try:
            response = await self.client.list_channels(part="contentDetails", id=channel_id)
        except YouTubeAPIError as e:
            raise MetadataExtractionError(f"Failed to get channel videos: {e}") from e

        items = response.get("items") or []
        if not items:
            raise ChannelNotFoundError(f"Channel not found: {channel_id}")

        playlist_id = (
            (items[0].get("contentDetails") or {})
            .get("relatedPlaylists", {})
            .get("uploads")
        )
        if not playlist_id:
            raise MetadataExtractionError(f"Channel has no uploads playlist: {channel_id}")
        return playlist_id

    async def fetch_basic_list(self, channel_id: str) -> list[VideoStub]:
        """Fetch id, title and thumbnail for every upload of a channel.

        Walks every page until the API stops returning a page token.
        """
        playlist_id = await self.get_uploads_playlist_id(channel_id)

        stubs: list[VideoStub] = []
        page_token: str | None = None

        while True:
            try:
                response = await self.client.list_playlist_items(
                    part="snippet",
                    playlistId=playlist_id,
                    maxResults=self.page_size,
                    pageToken=page_token,
                )
            except YouTubeAPIError as e:
                raise MetadataExtractionError(f"Failed to get video list: {e}") from e

            for item in response.get("items") or []:
                snippet = item.get("snippet") or {}
                video_id = (snippet.get("resourceId") or {}).get("videoId")
                if not video_id:
                    continue
                stubs.append(
                    VideoStub(
                        video_id=video_id,
                        title=snippet.get("title", ""),
                        thumbnail_url=best_thumbnail(snippet.get("thumbnails")) or "",
                    )
                )

            logger.debug("basic_list_page_fetched", channel_id=channel_id, count=len(stubs))

            page_token = response.get("nextPageToken")
            if not page_token:
                break

        logger.info("basic_list_fetched", channel_id=channel_id, count=len(stubs))
        return stubs

    async def fetch_detailed_videos(
        self,
        channel_id: str,
        max_videos: int | None = None,
    ) -> list[VideoCreate]:
        """Fetch fully detailed records for the most recent uploads.

        Args:
            channel_id: Canonical channel ID
            max_videos: Maximum number of videos (default: safety cap)

        Returns:
            At most ``max_videos`` videos in playlist order
        """
        if max_videos is None:
            max_videos = settings.fetch_safety_cap

        playlist_id = await self.get_uploads_playlist_id(channel_id)

        videos: list[VideoCreate] = []
        page_token: str | None = None

        while len(videos) < max_videos:
            remaining = max_videos - len(videos)
            try:
                response = await self.client.list_playlist_items(
                    part="contentDetails",
                    playlistId=playlist_id,
                    maxResults=min(self.page_size, remaining),
                    pageToken=page_token,
                )
                video_ids = []
                for item in response.get("items") or []:
                    video_id = (item.get("contentDetails") or {}).get("videoId")
                    if video_id:
                        video_ids.append(video_id)
                if not video_ids:
                    break

                details = await self.client.list_videos(
                    part="snippet,contentDetails,statistics",
                    id=",".join(video_ids),
                )
            except YouTubeAPIError as e:
                raise MetadataExtractionError(f"Failed to get channel videos: {e}") from e

            by_id = {item["id"]: item for item in details.get("items") or [] if item.get("id")}
            # Unavailable (private, deleted) videos have no details and are skipped
            page = [video_from_api(by_id[video_id]) for video_id in video_ids if video_id in by_id]
            videos.extend(page[:remaining])

            logger.info("detailed_videos_fetched", channel_id=channel_id, count=len(videos))

            page_token = response.get("nextPageToken")
            if not page_token:
                break

        return videos
