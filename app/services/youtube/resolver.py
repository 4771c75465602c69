"""Resolve channel URLs and handles to canonical YouTube channel IDs."""

import re
from urllib.parse import urlparse

import structlog

from app.services.youtube.client import YouTubeClient
from app.services.youtube.exceptions import (
    ChannelNotFoundError,
    ChannelResolutionError,
    InvalidChannelInputError,
    YouTubeAPIError,
)

logger = structlog.get_logger(__name__)

# Canonical channel IDs are "UC" followed by 22 URL-safe characters
CHANNEL_ID_RE = re.compile(r"^UC[\w-]{22}$")


def is_channel_id(value: str) -> bool:
    """Check whether a token already has the canonical channel ID shape."""
    return bool(CHANNEL_ID_RE.match(value))


def extract_channel_token(value: str) -> str | None:
    """Pull the channel ID, handle or custom name out of a URL.

    Supports ``/channel/<id>``, ``/@handle``, ``/c/<name>`` and
    ``/user/<name>``. Anything that is not an http(s) URL is returned
    trimmed, without a leading ``@``. A URL of any other shape yields ``None``.
    """
    value = value.strip()
    if not value:
        return None

    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        # Bare handles may be given with or without the leading "@"
        return value[1:] if value.startswith("@") and len(value) > 1 else value

    segments = [segment for segment in parsed.path.split("/") if segment]
    if not segments:
        return None

    first = segments[0]
    if first == "channel" and len(segments) > 1:
        return segments[1]
    if first.startswith("@") and len(first) > 1:
        return first[1:]
    if first in ("c", "user") and len(segments) > 1:
        return segments[1]

    return None


class ChannelResolver:
    """Turns user input into a canonical channel ID, calling the API only when needed."""

    def __init__(self, client: YouTubeClient):
        self.client = client

    async def resolve(self, value: str) -> str:
        """Resolve a channel URL, handle or ID.

        Args:
            value: Channel URL (``/channel/``, ``/@``, ``/c/``, ``/user/``) or bare token

        Returns:
            Canonical channel ID

        Raises:
            InvalidChannelInputError: If the input is empty or an unsupported URL
            ChannelNotFoundError: If neither lookup finds a channel
            ChannelResolutionError: If a remote lookup fails
        """
        if not value or not value.strip():
            raise InvalidChannelInputError("Channel URL is required")

        token = extract_channel_token(value)
        if not token:
            raise InvalidChannelInputError(f"Invalid YouTube channel URL: {value}")

        if is_channel_id(token):
            return token

        try:
            channel_id = await self._lookup_handle(token)
            if channel_id is None:
                channel_id = await self._search_channel(token)
        except YouTubeAPIError as e:
            raise ChannelResolutionError(f"Failed to resolve channel: {e}") from e

        if channel_id is None:
            raise ChannelNotFoundError(f"Channel not found: {token}")

        logger.info("channel_resolved", token=token, channel_id=channel_id)
        return channel_id

    async def _lookup_handle(self, handle: str) -> str | None:
        response = await self.client.list_channels(part="id", forHandle=handle, maxResults=1)
        items = response.get("items") or []
        if len(items) == 1:
            return items[0].get("id")
        return None

    async def _search_channel(self, query: str) -> str | None:
        response = await self.client.search(part="id", q=query, type="channel", maxResults=1)
        for item in response.get("items") or []:
            channel_id = (item.get("id") or {}).get("channelId")
            if channel_id:
                return channel_id
        return None
