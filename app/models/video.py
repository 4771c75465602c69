"""Pydantic models for videos."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class VideoStub(BaseModel):
    """Lightweight video entry from the basic catalog pass."""

    video_id: str = Field(..., description="YouTube video ID")
    title: str
    thumbnail_url: str = ""


class VideoBase(BaseModel):
    """Base video schema."""

    video_id: str = Field(..., description="YouTube video ID")
    title: str = Field(..., description="Video title")
    description: Optional[str] = None
    published_at: Optional[datetime] = None
    thumbnail_url: Optional[str] = None
    duration: Optional[str] = Field(default=None, description="Display duration, M:SS or H:MM:SS")
    view_count: int = 0
    like_count: Optional[int] = None
    comment_count: int = 0
    tags: list[str] = Field(default_factory=list)


class VideoCreate(VideoBase):
    """Schema for creating a video from API data."""

    pass


class Video(VideoBase):
    """Full video schema with database fields."""

    id: int
    channel_id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class VideoPage(BaseModel):
    """One page of a filtered and sorted video list."""

    videos: list[Video]
    page: int
    page_size: int
    total_pages: int
    total_filtered: int
    total_videos: int
