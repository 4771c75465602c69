#!/usr/bin/env python3
"""Refresh stored channels, replacing their videos with the most recent uploads.

Usage:
    # One channel by internal ID
    python scripts/refresh_channel.py 3

    # Every stored channel (e.g. from cron)
    python scripts/refresh_channel.py --all
"""

import argparse
import asyncio
import sys
from datetime import datetime, UTC
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.logging import setup_logging, get_logger
from app.db.connection import db
from app.services.ingestion.orchestrator import build_orchestrator
from app.services.youtube.client import YouTubeClient

setup_logging()
logger = get_logger(__name__)


async def main(channel_ids: list[int], refresh_all: bool) -> int:
    """Run the refresh and return an exit code.

    Returns:
        0 = success
        1 = partial failure (some channels failed)
        2 = complete failure
    """
    start_time = datetime.now(UTC)

    try:
        await db.connect()
        await db.init_schema()

        orchestrator = build_orchestrator(db.connection, YouTubeClient())
        if refresh_all:
            channel_ids = [channel.id for channel in await orchestrator.list_channels()]

        if not channel_ids:
            print("No channels to refresh")
            return 0

        refreshed = 0
        failed = 0
        for channel_id in channel_ids:
            try:
                result = await orchestrator.refresh_channel(channel_id)
                print(f"  {result.channel.title}: {result.video_count} videos")
                refreshed += 1
            except Exception as e:
                logger.error("channel_refresh_failed", id=channel_id, error=str(e))
                print(f"  channel {channel_id}: FAILED ({e})")
                failed += 1

        duration = (datetime.now(UTC) - start_time).total_seconds()
        logger.info(
            "refresh_completed",
            refreshed=refreshed,
            failed=failed,
            duration_seconds=round(duration, 1),
        )

        if failed:
            return 2 if refreshed == 0 else 1
        return 0

    except Exception as e:
        logger.error("refresh_failed", error=str(e))
        print(f"\nERROR: {e}")
        return 2
    finally:
        await db.disconnect()


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Refresh stored YouTube channels")
    parser.add_argument("channel_ids", nargs="*", type=int, help="Internal channel IDs")
    parser.add_argument("--all", action="store_true", help="Refresh every stored channel")
    args = parser.parse_args()
    if not args.channel_ids and not args.all:
        parser.error("give at least one channel ID or --all")
    return args


if __name__ == "__main__":
    args = parse_args()
    sys.exit(asyncio.run(main(channel_ids=args.channel_ids, refresh_all=args.all)))
