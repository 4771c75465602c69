#!/usr/bin/env python3
"""CLI script for first-time channel ingestion.

Usage:
    python scripts/ingest_channel.py https://www.youtube.com/@SomeChannel
    python scripts/ingest_channel.py UCxxxxxxxxxxxxxxxxxxxxxx --user-id 42
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import settings
from app.core.logging import setup_logging, get_logger
from app.db.connection import db
from app.services.ingestion.orchestrator import build_orchestrator
from app.services.youtube.client import YouTubeClient

setup_logging()
logger = get_logger(__name__)


async def main(channel_url: str, user_id: str | None) -> int:
    """Run the ingestion and return an exit code."""
    logger.info("starting_ingestion", channel_url=channel_url, max_videos=settings.detailed_max_videos)

    try:
        await db.connect()
        await db.init_schema()

        orchestrator = build_orchestrator(db.connection, YouTubeClient())
        result = await orchestrator.ingest_channel(channel_url, user_id=user_id)

        print("\n" + "=" * 50)
        print("INGESTION COMPLETE" if not result.already_exists else "CHANNEL ALREADY STORED")
        print("=" * 50)
        print(f"Channel:        {result.channel.title} (id {result.channel.id})")
        print(f"Uploads listed: {result.stub_count}")
        print(f"Videos stored:  {result.video_count}")
        print(result.message)
        print("=" * 50)
        return 0

    except Exception as e:
        logger.error("ingestion_failed", error=str(e))
        print(f"\nError: {e}")
        return 1
    finally:
        await db.disconnect()


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Ingest a YouTube channel and its video catalog",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "channel_url",
        help="YouTube channel URL, handle or ID (e.g., https://www.youtube.com/@SomeChannel)",
    )
    parser.add_argument(
        "--user-id",
        default=None,
        help="Owning user ID to store with the channel",
    )
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    sys.exit(asyncio.run(main(channel_url=args.channel_url, user_id=args.user_id)))
