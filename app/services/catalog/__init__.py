"""Video list view-model and CSV export."""

from app.services.catalog.export import export_filename, export_videos_csv
from app.services.catalog.view import SortKey, SortOrder, VideoListView, VideoType

__all__ = [
    "SortKey",
    "SortOrder",
    "VideoListView",
    "VideoType",
    "export_filename",
    "export_videos_csv",
]
