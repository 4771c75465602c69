"""YouTube channel catalog API routes."""

from functools import lru_cache
from typing import Any
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi.responses import StreamingResponse

import libsql_experimental as libsql
import structlog

from app.db.connection import db
from app.db.exceptions import PersistenceError
from app.models.channel import Channel, ChannelFetchRequest, ChannelRefreshRequest
from app.models.ingestion import ChannelCatalog, IngestionResult
from app.models.video import VideoPage
from app.services.catalog import (
    SortKey,
    SortOrder,
    VideoListView,
    VideoType,
    export_filename,
    export_videos_csv,
)
from app.services.ingestion.exceptions import ChannelRecordNotFoundError
from app.services.ingestion.orchestrator import IngestionOrchestrator, build_orchestrator
from app.services.youtube.client import YouTubeClient
from app.services.youtube.exceptions import (
    ChannelNotFoundError,
    InvalidChannelInputError,
    YouTubeConfigError,
    YouTubeError,
)

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/youtube", tags=["youtube"])


def get_connection() -> libsql.Connection:
    """Get the application database connection."""
    return db.connection


@lru_cache
def get_youtube_client() -> YouTubeClient:
    """Get a YouTube client, built once per process."""
    return YouTubeClient()


def get_orchestrator(
    connection: libsql.Connection = Depends(get_connection),
    client: YouTubeClient = Depends(get_youtube_client),
) -> IngestionOrchestrator:
    """Get an orchestrator wired to the database and the YouTube API."""
    return build_orchestrator(connection, client)


def _http_error(e: Exception) -> HTTPException:
    """Map a service error to an HTTP error response."""
    if isinstance(e, InvalidChannelInputError):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(e, (ChannelNotFoundError, ChannelRecordNotFoundError)):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(e, YouTubeConfigError):
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif isinstance(e, YouTubeError):
        code = status.HTTP_502_BAD_GATEWAY
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=code, detail=str(e))


@router.post("/fetch", response_model=IngestionResult)
async def fetch_channel(
    request: ChannelFetchRequest,
    orchestrator: IngestionOrchestrator = Depends(get_orchestrator),
) -> IngestionResult:
    """Ingest a YouTube channel.

    Stores the channel, the full list of uploads and detailed records for
    the most recent videos. Channels that are already stored are returned
    unchanged; use refresh to update them.
    """
    try:
        return await orchestrator.ingest_channel(request.channel_url, user_id=request.user_id)
    except (YouTubeError, PersistenceError) as e:
        logger.error("channel_fetch_failed", channel_url=request.channel_url, error=str(e))
        raise _http_error(e) from e


@router.put("/fetch", response_model=IngestionResult)
async def refresh_channel(
    request: ChannelRefreshRequest,
    orchestrator: IngestionOrchestrator = Depends(get_orchestrator),
) -> IngestionResult:
    """Refresh a stored channel, replacing all of its videos."""
    try:
        return await orchestrator.refresh_channel(request.channel_id)
    except (YouTubeError, PersistenceError, ChannelRecordNotFoundError) as e:
        logger.error("channel_refresh_failed", id=request.channel_id, error=str(e))
        raise _http_error(e) from e


@router.get("/channels", response_model=list[Channel])
async def list_channels(
    orchestrator: IngestionOrchestrator = Depends(get_orchestrator),
) -> list[Channel]:
    """List stored channels."""
    try:
        return await orchestrator.list_channels()
    except PersistenceError as e:
        logger.error("channel_list_failed", error=str(e))
        raise _http_error(e) from e


@router.get("/channels/{id}", response_model=Channel)
async def get_channel(
    id: int,
    orchestrator: IngestionOrchestrator = Depends(get_orchestrator),
) -> Channel:
    """Get a stored channel."""
    try:
        return await orchestrator.get_channel(id)
    except (ChannelRecordNotFoundError, PersistenceError) as e:
        raise _http_error(e) from e


@router.delete("/channels/{id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_channel(
    id: int,
    orchestrator: IngestionOrchestrator = Depends(get_orchestrator),
) -> Response:
    """Delete a stored channel and its videos."""
    try:
        await orchestrator.delete_channel(id)
    except (ChannelRecordNotFoundError, PersistenceError) as e:
        raise _http_error(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


async def _build_view(
    orchestrator: IngestionOrchestrator,
    id: int,
    q: str,
    video_type: VideoType,
    sort: SortKey,
    order: SortOrder,
) -> tuple[ChannelCatalog, VideoListView]:
    try:
        catalog = await orchestrator.get_catalog(id)
    except (ChannelRecordNotFoundError, PersistenceError) as e:
        raise _http_error(e) from e

    view = VideoListView(
        catalog.videos,
        query=q,
        video_type=video_type,
        sort_key=sort,
        sort_order=order,
    )
    return catalog, view


@router.get("/channels/{id}/videos", response_model=VideoPage)
async def list_videos(
    id: int,
    q: str = Query(default="", description="Search titles or tags"),
    video_type: VideoType = Query(default=VideoType.ALL),
    sort: SortKey = Query(default=SortKey.VIEW_COUNT),
    order: SortOrder = Query(default=SortOrder.DESC),
    page: int = Query(default=0, ge=0),
    page_size: int | None = Query(default=None, ge=1, le=500),
    orchestrator: IngestionOrchestrator = Depends(get_orchestrator),
) -> VideoPage:
    """Get one page of a channel's filtered and sorted videos."""
    catalog, view = await _build_view(orchestrator, id, q, video_type, sort, order)
    if page_size:
        view.page_size = page_size
    view.page = page

    current = view.current_page()
    return VideoPage(
        videos=current.items,
        page=view.page,
        page_size=view.page_size,
        total_pages=current.total_pages,
        total_filtered=current.total_filtered,
        total_videos=catalog.total_videos,
    )


@router.get("/channels/{id}/video-list")
async def list_video_stubs(
    id: int,
    orchestrator: IngestionOrchestrator = Depends(get_orchestrator),
) -> list[dict[str, Any]]:
    """Get the id, title and thumbnail of every upload of a channel."""
    try:
        return await orchestrator.list_video_stubs(id)
    except (ChannelRecordNotFoundError, PersistenceError) as e:
        raise _http_error(e) from e


@router.get("/channels/{id}/export")
async def export_videos(
    id: int,
    q: str = Query(default=""),
    video_type: VideoType = Query(default=VideoType.ALL),
    sort: SortKey = Query(default=SortKey.VIEW_COUNT),
    order: SortOrder = Query(default=SortOrder.DESC),
    orchestrator: IngestionOrchestrator = Depends(get_orchestrator),
) -> StreamingResponse:
    """Export a channel's filtered and sorted videos as CSV."""
    catalog, view = await _build_view(orchestrator, id, q, video_type, sort, order)

    output = export_videos_csv(view.filtered())
    filename = export_filename(catalog.channel.title)
    return StreamingResponse(
        output,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )
