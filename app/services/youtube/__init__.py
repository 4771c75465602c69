"""YouTube Data API access: resolution, catalog fetching and duration parsing."""

from app.services.youtube.catalog import CatalogFetcher
from app.services.youtube.client import YouTubeClient
from app.services.youtube.duration import parse_duration
from app.services.youtube.resolver import ChannelResolver, extract_channel_token

__all__ = [
    "CatalogFetcher",
    "ChannelResolver",
    "YouTubeClient",
    "extract_channel_token",
    "parse_duration",
]
