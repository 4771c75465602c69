"""CSV export of video lists."""

import csv
from datetime import date
from io import StringIO

from app.models.video import VideoBase

CSV_HEADERS = ["Title", "Video URL", "Thumbnail URL", "Views", "Tags"]
WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


def export_videos_csv(videos: list[VideoBase]) -> StringIO:
    """Write the videos as CSV, one row per video in the given order."""
    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_HEADERS)

    for video in videos:
        writer.writerow([
            video.title or "",
            WATCH_URL.format(video_id=video.video_id),
            video.thumbnail_url or "",
            video.view_count or 0,
            ", ".join(video.tags or []),
        ])

    output.seek(0)
    return output


def export_filename(channel_title: str | None, today: date | None = None) -> str:
    """Build ``<channel title>_videos_<YYYY-MM-DD>.csv``."""
    today = today or date.today()
    title = (channel_title or "channel").replace("/", "_").replace("\\", "_").replace('"', "")
    return f"{title}_videos_{today.isoformat()}.csv"
