"""In-memory stand-in for the YouTube Data API client."""

from typing import Any

from app.services.youtube.exceptions import YouTubeAPIError

CHANNEL_ID = "UC" + "a" * 22
OTHER_CHANNEL_ID = "UC" + "b" * 22


def make_video_item(
    video_id: str,
    title: str | None = None,
    duration: str = "PT4M13S",
    views: int = 100,
    likes: int | None = 10,
    comments: int = 1,
    published_at: str = "2024-01-01T00:00:00Z",
    tags: list[str] | None = None,
) -> dict[str, Any]:
    """Build a ``videos.list`` item."""
    statistics = {"viewCount": str(views), "commentCount": str(comments)}
    if likes is not None:
        statistics["likeCount"] = str(likes)
    return {
        "id": video_id,
        "snippet": {
            "title": title or f"Video {video_id}",
            "description": f"About {video_id}",
            "publishedAt": published_at,
            "thumbnails": {
                "default": {"url": f"https://i.ytimg.com/vi/{video_id}/default.jpg"},
                "high": {"url": f"https://i.ytimg.com/vi/{video_id}/hqdefault.jpg"},
            },
            "tags": tags or [],
        },
        "contentDetails": {"duration": duration},
        "statistics": statistics,
    }


def make_uploads(count: int, prefix: str = "vid") -> list[dict[str, Any]]:
    """Build ``count`` uploads, most recent first."""
    return [
        make_video_item(
            f"{prefix}{i:05d}",
            views=1000 - i,
            published_at="2024-01-01T00:00:00Z" if i % 2 else "2024-02-01T00:00:00Z",
        )
        for i in range(count)
    ]


class FakeYouTubeClient:
    """Mimics the async ``YouTubeClient`` over in-memory channels and uploads."""

    def __init__(self):
        self.channels: dict[str, dict[str, Any]] = {}
        self.uploads: dict[str, list[dict[str, Any]]] = {}
        self.handles: dict[str, list[str]] = {}
        self.search_results: dict[str, list[str]] = {}
        self.fail_operations: set[str] = set()
        self.unavailable: set[str] = set()
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def add_channel(
        self,
        channel_id: str = CHANNEL_ID,
        title: str = "Test Channel",
        uploads: list[dict[str, Any]] | None = None,
        subscribers: int = 1234,
    ) -> None:
        self.channels[channel_id] = {
            "id": channel_id,
            "snippet": {
                "title": title,
                "description": f"{title} description",
                "thumbnails": {"high": {"url": f"https://yt3.ggpht.com/{channel_id}.jpg"}},
            },
            "statistics": {
                "subscriberCount": str(subscribers),
                "videoCount": str(len(uploads or [])),
            },
            "contentDetails": {"relatedPlaylists": {"uploads": "UU" + channel_id[2:]}},
        }
        self.uploads[channel_id] = uploads or []

    def calls_to(self, operation: str) -> list[dict[str, Any]]:
        return [params for name, params in self.calls if name == operation]

    def _record(self, operation: str, params: dict[str, Any]) -> None:
        self.calls.append((operation, params))
        if operation in self.fail_operations:
            raise YouTubeAPIError(f"{operation} failed: quotaExceeded", status=403)

    async def list_channels(self, **params: Any) -> dict[str, Any]:
        self._record("channels.list", params)
        if "forHandle" in params:
            ids = self.handles.get(params["forHandle"], [])
            return {"items": [{"id": channel_id} for channel_id in ids]}
        channel = self.channels.get(params.get("id"))
        return {"items": [channel]} if channel else {"pageInfo": {"totalResults": 0}}

    async def search(self, **params: Any) -> dict[str, Any]:
        self._record("search.list", params)
        ids = self.search_results.get(params["q"], [])
        return {"items": [{"id": {"kind": "youtube#channel", "channelId": i}} for i in ids]}

    async def list_playlist_items(self, **params: Any) -> dict[str, Any]:
        self._record("playlistItems.list", params)
        channel_id = "UC" + params["playlistId"][2:]
        uploads = self.uploads.get(channel_id, [])

        start = int(params.get("pageToken") or 0)
        end = start + params["maxResults"]
        items = [
            {
                "snippet": {
                    "title": video["snippet"]["title"],
                    "thumbnails": video["snippet"]["thumbnails"],
                    "resourceId": {"kind": "youtube#video", "videoId": video["id"]},
                },
                "contentDetails": {"videoId": video["id"]},
            }
            for video in uploads[start:end]
        ]
        response: dict[str, Any] = {"items": items}
        if end < len(uploads):
            response["nextPageToken"] = str(end)
        return response

    async def list_videos(self, **params: Any) -> dict[str, Any]:
        self._record("videos.list", params)
        wanted = set(params["id"].split(","))
        found = [
            video
            for uploads in self.uploads.values()
            for video in uploads
            if video["id"] in wanted and video["id"] not in self.unavailable
        ]
        # The API does not guarantee the order of returned items
        return {"items": list(reversed(found))}
