#!/usr/bin/env python3
"""Create the channels, videos and video_list tables.

Safe to run repeatedly; existing catalogs are left untouched.

Usage:
    python scripts/init_db.py
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import settings
from app.core.logging import setup_logging, get_logger
from app.db.connection import db
from app.db.repositories.channel import ChannelRepository

setup_logging()
logger = get_logger(__name__)


async def main() -> int:
    """Apply the schema and report how many channels are stored."""
    target = "turso" if settings.use_turso else str(settings.database_path)
    logger.info("catalog_schema_init_started", target=target)

    try:
        await db.connect()
        await db.init_schema()
        channels = await ChannelRepository(db.connection).list_all()
    except Exception as e:
        logger.error("catalog_schema_init_failed", target=target, error=str(e))
        print(f"ERROR: {e}")
        return 1
    finally:
        await db.disconnect()

    logger.info("catalog_schema_init_completed", target=target, channels=len(channels))
    print(f"Catalog database ready at {target} ({len(channels)} channels stored)")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
