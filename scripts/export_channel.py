#!/usr/bin/env python3
"""Export a stored channel's videos to CSV.

Usage:
    python scripts/export_channel.py 3 --video-type shorts --sort date_views
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.logging import setup_logging, get_logger
from app.db.connection import db
from app.db.repositories.channel import ChannelRepository
from app.db.repositories.video import VideoRepository
from app.models.video import Video
from app.services.catalog import (
    SortKey,
    SortOrder,
    VideoListView,
    VideoType,
    export_filename,
    export_videos_csv,
)

setup_logging()
logger = get_logger(__name__)


async def main(args: argparse.Namespace) -> int:
    """Write the CSV file and return an exit code."""
    try:
        await db.connect()

        channel = await ChannelRepository(db.connection).get_by_id(args.channel_id)
        if not channel:
            print(f"Channel not found: {args.channel_id}")
            return 1

        rows = await VideoRepository(db.connection).list_by_channel(args.channel_id)
        view = VideoListView(
            [Video.model_validate(row) for row in rows],
            query=args.query,
            video_type=VideoType(args.video_type),
            sort_key=SortKey(args.sort),
            sort_order=SortOrder(args.order),
        )
        videos = view.filtered()

        output_dir = Path(args.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / export_filename(channel["title"])
        path.write_text(export_videos_csv(videos).getvalue(), encoding="utf-8")

        logger.info("channel_exported", id=args.channel_id, rows=len(videos), path=str(path))
        print(f"Exported {len(videos)} videos to {path}")
        return 0
    finally:
        await db.disconnect()


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Export a channel's videos to CSV",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("channel_id", type=int, help="Internal channel ID")
    parser.add_argument("--query", default="", help="Filter titles or tags")
    parser.add_argument("--video-type", choices=[t.value for t in VideoType], default="all")
    parser.add_argument("--sort", choices=[k.value for k in SortKey], default="view_count")
    parser.add_argument("--order", choices=[o.value for o in SortOrder], default="desc")
    parser.add_argument("--output-dir", default=".", help="Directory for the CSV file")
    return parser.parse_args()


if __name__ == "__main__":
    sys.exit(asyncio.run(main(parse_args())))
