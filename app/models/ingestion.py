"""Pydantic models for ingestion results."""

from pydantic import BaseModel

from app.models.channel import Channel
from app.models.video import Video


class IngestionResult(BaseModel):
    """Outcome of an ingest or refresh run."""

    channel: Channel
    video_count: int = 0
    stub_count: int = 0
    already_exists: bool = False
    message: str


class ChannelCatalog(BaseModel):
    """A channel with every stored video."""

    channel: Channel
    videos: list[Video]
    total_videos: int
