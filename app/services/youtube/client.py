"""Thin async wrapper around the YouTube Data API v3 client."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import httplib2
import structlog
from googleapiclient.discovery import Resource, build
from googleapiclient.errors import HttpError

from app.core.config import settings
from app.services.youtube.exceptions import YouTubeAPIError, YouTubeConfigError

logger = structlog.get_logger(__name__)

# Thread pool for running googleapiclient requests (which are synchronous)
_executor = ThreadPoolExecutor(max_workers=2)


class YouTubeClient:
    """Async access to the channels, search, playlistItems and videos endpoints.

    Every call is executed on a worker thread and awaited, so callers issue
    requests strictly one after another.
    """

    def __init__(self, api_key: str | None = None, service: Resource | None = None):
        """Initialize with an API key, or with a prebuilt API resource.

        The API resource is built on the first request, so a missing key
        only fails calls that actually reach YouTube.

        Args:
            api_key: YouTube Data API key (defaults to settings)
            service: Existing discovery resource, mainly for tests
        """
        self._api_key = api_key
        self._service = service

    @property
    def service(self) -> Resource:
        """Get the API resource, building it on first use.

        Raises:
            YouTubeConfigError: If no API key is configured
        """
        if self._service is None:
            api_key = self._api_key or settings.youtube_api_key
            if not api_key:
                raise YouTubeConfigError("YOUTUBE_DATA_V3_API_KEY is not set")
            self._service = build(
                "youtube",
                "v3",
                developerKey=api_key,
                http=httplib2.Http(timeout=settings.youtube_request_timeout_seconds),
                cache_discovery=False,
            )
        return self._service

    async def list_channels(self, **params: Any) -> dict[str, Any]:
        """Call ``channels.list``."""
        return await self._execute("channels.list", self.service.channels().list(**params))

    async def search(self, **params: Any) -> dict[str, Any]:
        """Call ``search.list``."""
        return await self._execute("search.list", self.service.search().list(**params))

    async def list_playlist_items(self, **params: Any) -> dict[str, Any]:
        """Call ``playlistItems.list``."""
        return await self._execute(
            "playlistItems.list",
            self.service.playlistItems().list(**params),
        )

    async def list_videos(self, **params: Any) -> dict[str, Any]:
        """Call ``videos.list``."""
        return await self._execute("videos.list", self.service.videos().list(**params))

    async def _execute(self, operation: str, request: Any) -> dict[str, Any]:
        loop = asyncio.get_running_loop()
        try:
            response = await loop.run_in_executor(_executor, request.execute)
        except HttpError as e:
            status = e.resp.status if e.resp is not None else None
            reason = getattr(e, "reason", None) or str(e)
            logger.warning("youtube_api_error", operation=operation, status=status, reason=reason)
            raise YouTubeAPIError(f"{operation} failed: {reason}", status=status) from e
        except (httplib2.HttpLib2Error, OSError) as e:
            logger.warning("youtube_api_unreachable", operation=operation, error=str(e))
            raise YouTubeAPIError(f"{operation} failed: {e}") from e

        logger.debug("youtube_api_call", operation=operation)
        return response or {}
