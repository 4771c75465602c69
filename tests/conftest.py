"""Pytest configuration and fixtures."""

from pathlib import Path
from typing import AsyncIterator
from unittest.mock import patch

import pytest
import pytest_asyncio

from app.db.connection import Database
from app.db.repositories.channel import ChannelRepository
from app.db.repositories.video import VideoRepository
from app.services.ingestion.orchestrator import IngestionOrchestrator
from app.services.youtube.catalog import CatalogFetcher
from app.services.youtube.resolver import ChannelResolver
from tests.fakes import FakeYouTubeClient


@pytest_asyncio.fixture
async def test_db(tmp_path: Path) -> AsyncIterator[Database]:
    """Create a test database with temporary path."""
    db_path = tmp_path / "test.db"

    # Mock settings to use the temp database
    with patch("app.db.connection.settings") as mock_settings:
        mock_settings.use_turso = False
        mock_settings.database_path = db_path

        db = Database()
        await db.connect()
        await db.init_schema()

        yield db

        await db.disconnect()


@pytest.fixture
def fake_youtube() -> FakeYouTubeClient:
    """A fake YouTube client with no channels."""
    return FakeYouTubeClient()


@pytest.fixture
def channel_repo(test_db: Database) -> ChannelRepository:
    return ChannelRepository(test_db.connection)


@pytest.fixture
def video_repo(test_db: Database) -> VideoRepository:
    return VideoRepository(test_db.connection)


@pytest.fixture
def orchestrator(
    channel_repo: ChannelRepository,
    video_repo: VideoRepository,
    fake_youtube: FakeYouTubeClient,
) -> IngestionOrchestrator:
    """An orchestrator over the test database and the fake YouTube client."""
    return IngestionOrchestrator(
        channel_repo=channel_repo,
        video_repo=video_repo,
        resolver=ChannelResolver(fake_youtube),
        catalog=CatalogFetcher(fake_youtube, page_size=50),
        max_videos=500,
        batch_size=100,
    )
