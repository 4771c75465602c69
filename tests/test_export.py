"""Tests for CSV export."""

import csv
from datetime import date

from app.models.video import VideoBase
from app.services.catalog.export import CSV_HEADERS, export_filename, export_videos_csv


def test_export_rows_follow_given_order() -> None:
    videos = [
        VideoBase(
            video_id="abc123",
            title='Say "hello", world',
            thumbnail_url="https://i.ytimg.com/vi/abc123/hqdefault.jpg",
            view_count=1500,
            tags=["greeting", "intro"],
        ),
        VideoBase(video_id="def456", title="Second", view_count=7),
    ]

    output = export_videos_csv(videos)
    text = output.getvalue()
    rows = list(csv.reader(output))

    assert '"Say ""hello"", world"' in text
    assert rows[0] == CSV_HEADERS
    assert len(rows) == len(videos) + 1
    assert rows[1] == [
        'Say "hello", world',
        "https://www.youtube.com/watch?v=abc123",
        "https://i.ytimg.com/vi/abc123/hqdefault.jpg",
        "1500",
        "greeting, intro",
    ]
    assert rows[2] == ["Second", "https://www.youtube.com/watch?v=def456", "", "7", ""]


def test_export_empty_list_has_only_headers() -> None:
    rows = list(csv.reader(export_videos_csv([])))

    assert rows == [CSV_HEADERS]


def test_export_filename() -> None:
    today = date(2024, 3, 9)

    assert export_filename("Cooking Daily", today) == "Cooking Daily_videos_2024-03-09.csv"
    assert export_filename("AC/DC", today) == "AC_DC_videos_2024-03-09.csv"
    assert export_filename(None, today) == "channel_videos_2024-03-09.csv"
