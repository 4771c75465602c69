"""Ingestion orchestrator - coordinates channel resolution, catalog fetch and storage."""

from typing import Any

import structlog

from app.core.config import settings
from app.db.repositories.channel import ChannelRepository
from app.db.repositories.video import VideoRepository
from app.models.channel import Channel
from app.models.ingestion import ChannelCatalog, IngestionResult
from app.models.video import Video, VideoCreate
from app.services.ingestion.exceptions import ChannelRecordNotFoundError
from app.services.youtube.catalog import CatalogFetcher
from app.services.youtube.client import YouTubeClient
from app.services.youtube.resolver import ChannelResolver

logger = structlog.get_logger(__name__)

ALREADY_EXISTS_MESSAGE = "Channel already exists. Use refresh to update data."


class IngestionOrchestrator:
    """Orchestrates channel ingestion and refresh.

    Each step is awaited in turn: resolution, channel metadata, the basic
    pass, the detailed pass, and then the batched video writes. A failing
    batch stops the run but batches written before it stay committed.
    """

    def __init__(
        self,
        channel_repo: ChannelRepository,
        video_repo: VideoRepository,
        resolver: ChannelResolver,
        catalog: CatalogFetcher,
        max_videos: int | None = None,
        batch_size: int | None = None,
    ):
        """Initialize the orchestrator with its collaborators."""
        self.channel_repo = channel_repo
        self.video_repo = video_repo
        self.resolver = resolver
        self.catalog = catalog
        self.max_videos = max_videos or settings.detailed_max_videos
        self.batch_size = batch_size or settings.upsert_batch_size

    async def ingest_channel(
        self,
        channel_url: str,
        user_id: str | None = None,
    ) -> IngestionResult:
        """Ingest a channel that is not stored yet.

        Args:
            channel_url: Channel URL, handle or ID
            user_id: Optional owning user

        Returns:
            Summary of the ingestion, flagged ``already_exists`` when the
            channel was stored before (no videos are fetched in that case)
        """
        logger.info("channel_ingest_started", channel_url=channel_url)

        channel_id = await self.resolver.resolve(channel_url)

        existing = await self.channel_repo.get_by_channel_id(channel_id)
        if existing:
            logger.info("channel_already_exists", channel_id=channel_id, title=existing["title"])
            return IngestionResult(
                channel=Channel.model_validate(existing),
                already_exists=True,
                message=ALREADY_EXISTS_MESSAGE,
            )

        channel_info = await self.catalog.fetch_channel_info(channel_id)
        channel_info.user_id = user_id
        saved = await self.channel_repo.upsert(channel_info)

        # Full catalog skeleton first so every upload is listed quickly
        stubs = await self.catalog.fetch_basic_list(channel_id)
        stub_count = await self.video_repo.upsert_stubs(saved["id"], stubs)

        videos = await self.catalog.fetch_detailed_videos(channel_id, self.max_videos)
        video_count = await self._save_in_batches(saved["id"], videos)

        summary = {
            "channel_id": channel_id,
            "title": saved["title"],
            "stub_count": stub_count,
            "video_count": video_count,
        }
        logger.info("channel_ingest_completed", **summary)

        return IngestionResult(
            channel=Channel.model_validate(saved),
            video_count=video_count,
            stub_count=stub_count,
            message=f"Successfully fetched {video_count} videos from {saved['title']}",
        )

    async def refresh_channel(self, id: int) -> IngestionResult:
        """Overwrite a stored channel and replace all of its videos.

        Args:
            id: Internal channel ID

        Raises:
            ChannelRecordNotFoundError: If no channel has this ID
        """
        channel = await self.channel_repo.get_by_id(id)
        if not channel:
            raise ChannelRecordNotFoundError("Channel not found in database")

        logger.info("channel_refresh_started", id=id, channel_id=channel["channel_id"])

        channel_info = await self.catalog.fetch_channel_info(channel["channel_id"])
        channel_info.user_id = channel["user_id"]
        saved = await self.channel_repo.upsert(channel_info)

        await self.video_repo.delete_by_channel(id)

        videos = await self.catalog.fetch_detailed_videos(channel["channel_id"], self.max_videos)
        video_count = await self._save_in_batches(id, videos)

        logger.info("channel_refresh_completed", id=id, video_count=video_count)

        return IngestionResult(
            channel=Channel.model_validate(saved),
            video_count=video_count,
            message=f"Refreshed {video_count} videos from {saved['title']}",
        )

    async def _save_in_batches(self, channel_id: int, videos: list[VideoCreate]) -> int:
        saved = 0
        for start in range(0, len(videos), self.batch_size):
            batch = videos[start:start + self.batch_size]
            saved += await self.video_repo.upsert_many(channel_id, batch)
            try:
                logger.info(
                    "video_batch_saved",
                    channel_id=channel_id,
                    start=start,
                    end=start + len(batch),
                )
            except Exception:
                # Progress logging must not abort persisted work
                pass
        return saved

    async def list_channels(self) -> list[Channel]:
        """List every stored channel."""
        rows = await self.channel_repo.list_all()
        return [Channel.model_validate(row) for row in rows]

    async def get_channel(self, id: int) -> Channel:
        """Get a stored channel by internal ID."""
        row = await self.channel_repo.get_by_id(id)
        if not row:
            raise ChannelRecordNotFoundError(f"Channel not found: {id}")
        return Channel.model_validate(row)

    async def delete_channel(self, id: int) -> None:
        """Delete a stored channel with its videos."""
        if not await self.channel_repo.delete(id):
            raise ChannelRecordNotFoundError(f"Channel not found: {id}")

    async def get_catalog(self, id: int) -> ChannelCatalog:
        """Load a channel with every stored video."""
        channel = await self.get_channel(id)
        rows = await self.video_repo.list_by_channel(id)
        total = await self.video_repo.count_by_channel(id)
        return ChannelCatalog(
            channel=channel,
            videos=[Video.model_validate(row) for row in rows],
            total_videos=total,
        )

    async def list_video_stubs(self, id: int) -> list[dict[str, Any]]:
        """List the lightweight video entries of a stored channel."""
        await self.get_channel(id)
        return await self.video_repo.list_stubs_by_channel(id)


def build_orchestrator(connection: Any, client: YouTubeClient) -> IngestionOrchestrator:
    """Wire an orchestrator to a database connection and a YouTube client."""
    return IngestionOrchestrator(
        channel_repo=ChannelRepository(connection),
        video_repo=VideoRepository(connection),
        resolver=ChannelResolver(client),
        catalog=CatalogFetcher(client),
    )
