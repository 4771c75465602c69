"""Filtering, sorting and paging of a channel's in-memory video list."""

from enum import Enum
from functools import cmp_to_key
from math import ceil
from typing import Callable, NamedTuple

from app.core.config import settings
from app.models.video import VideoBase

SHORTS_MAX_SECONDS = 60


class VideoType(str, Enum):
    """Duration based video classification filter."""

    ALL = "all"
    SHORTS = "shorts"
    LONG_FORM = "long-form"


class SortKey(str, Enum):
    """Available sort orders for a video list."""

    VIEW_COUNT = "view_count"
    LIKE_COUNT = "like_count"
    PUBLISHED_AT = "published_at"
    TITLE = "title"
    DATE_VIEWS = "date_views"
    DATE_LIKES = "date_likes"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


def is_short(duration: str | None) -> bool:
    """Check whether a display duration belongs to a short-form video.

    Only ``M:SS`` durations with zero minutes and at most 60 seconds qualify.
    Missing, ``H:MM:SS`` or unparseable durations are long-form.
    """
    if not duration:
        return False

    parts = duration.split(":")
    if len(parts) != 2:
        return False

    try:
        minutes, seconds = int(parts[0]), int(parts[1])
    except ValueError:
        return False

    return minutes == 0 and seconds <= SHORTS_MAX_SECONDS


def matches_type(video: VideoBase, video_type: VideoType) -> bool:
    """Check a video against a type filter."""
    if video_type == VideoType.SHORTS:
        return is_short(video.duration)
    if video_type == VideoType.LONG_FORM:
        return not is_short(video.duration)
    return True


def matches_query(video: VideoBase, query: str) -> bool:
    """Case-insensitive substring match on the title or any tag."""
    if not query:
        return True
    query = query.lower()
    if query in video.title.lower():
        return True
    return any(query in tag.lower() for tag in video.tags or [])


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def _published(video: VideoBase) -> float:
    return video.published_at.timestamp() if video.published_at else 0.0


def _by_views(a: VideoBase, b: VideoBase) -> int:
    return _cmp(a.view_count or 0, b.view_count or 0)


def _by_likes(a: VideoBase, b: VideoBase) -> int:
    return _cmp(a.like_count or 0, b.like_count or 0)


def _by_date(a: VideoBase, b: VideoBase) -> int:
    return _cmp(_published(a), _published(b))


def _by_title(a: VideoBase, b: VideoBase) -> int:
    return _cmp(a.title.lower(), b.title.lower())


def _then_date(primary: Callable[[VideoBase, VideoBase], int]) -> Callable[[VideoBase, VideoBase], int]:
    def compare(a: VideoBase, b: VideoBase) -> int:
        return primary(a, b) or _by_date(a, b)

    return compare


# Ascending comparators; descending order negates the whole comparison
COMPARATORS: dict[SortKey, Callable[[VideoBase, VideoBase], int]] = {
    SortKey.VIEW_COUNT: _by_views,
    SortKey.LIKE_COUNT: _by_likes,
    SortKey.PUBLISHED_AT: _by_date,
    SortKey.TITLE: _by_title,
    SortKey.DATE_VIEWS: _then_date(_by_views),
    SortKey.DATE_LIKES: _then_date(_by_likes),
}


def sort_videos(
    videos: list[VideoBase],
    sort_key: SortKey = SortKey.VIEW_COUNT,
    sort_order: SortOrder = SortOrder.DESC,
) -> list[VideoBase]:
    """Return the videos sorted by the given key and direction."""
    compare = COMPARATORS[sort_key]
    if sort_order == SortOrder.DESC:
        return sorted(videos, key=cmp_to_key(lambda a, b: compare(b, a)))
    return sorted(videos, key=cmp_to_key(compare))


class ListPage(NamedTuple):
    """One page of a filtered list, with the totals it was cut from."""

    items: list[VideoBase]
    total_filtered: int
    total_pages: int


class VideoListView:
    """Derives the filtered, sorted and paged list shown for a channel.

    Changing the page size always returns to the first page.
    """

    def __init__(
        self,
        videos: list[VideoBase],
        query: str = "",
        video_type: VideoType = VideoType.ALL,
        sort_key: SortKey = SortKey.VIEW_COUNT,
        sort_order: SortOrder = SortOrder.DESC,
        page_size: int | None = None,
        page: int = 0,
    ):
        self.videos = videos
        self.query = query
        self.video_type = video_type
        self.sort_key = sort_key
        self.sort_order = sort_order
        self._page_size = page_size or settings.default_page_size
        self.page = page

    @property
    def page_size(self) -> int:
        return self._page_size

    @page_size.setter
    def page_size(self, value: int) -> None:
        if value < 1:
            raise ValueError("page_size must be positive")
        if value != self._page_size:
            self.page = 0
        self._page_size = value

    def filtered(self) -> list[VideoBase]:
        """All videos passing the type and text filters, in sort order."""
        selected = [
            video
            for video in self.videos
            if matches_type(video, self.video_type) and matches_query(video, self.query)
        ]
        return sort_videos(selected, self.sort_key, self.sort_order)

    def current_page(self) -> ListPage:
        """Filter and sort once, then cut out the current page."""
        filtered = self.filtered()
        start = self.page * self._page_size
        return ListPage(
            items=filtered[start:start + self._page_size],
            total_filtered=len(filtered),
            total_pages=ceil(len(filtered) / self._page_size),
        )

    @property
    def total_pages(self) -> int:
        return self.current_page().total_pages

    def page_items(self) -> list[VideoBase]:
        """The slice of the filtered list for the current page."""
        return self.current_page().items
