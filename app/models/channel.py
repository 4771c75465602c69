"""Pydantic models for channels."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ChannelBase(BaseModel):
    """Base channel schema."""

    channel_id: str = Field(..., description="YouTube channel ID")
    url: str = Field(..., description="Channel URL")
    title: str = Field(..., description="Channel display name")
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    subscriber_count: int = 0
    video_count: int = 0


class ChannelCreate(ChannelBase):
    """Schema for creating or overwriting a channel."""

    user_id: Optional[str] = None


class Channel(ChannelBase):
    """Full channel schema with database fields."""

    id: int
    user_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ChannelFetchRequest(BaseModel):
    """Request to ingest a channel for the first time."""

    channel_url: str = Field(..., description="YouTube channel URL, handle or ID")
    user_id: Optional[str] = Field(default=None, description="Owning user")


class ChannelRefreshRequest(BaseModel):
    """Request to refresh a stored channel."""

    channel_id: int = Field(..., description="Internal channel ID")
