"""Tests for database repositories."""

from datetime import datetime, UTC

import pytest

from app.db.connection import Database
from app.db.exceptions import PersistenceError
from app.db.repositories.channel import ChannelRepository
from app.db.repositories.video import VideoRepository
from app.models.channel import ChannelCreate
from app.models.video import VideoCreate, VideoStub

CHANNEL_ID = "UC123456789012345678901x"


def make_channel(**overrides) -> ChannelCreate:
    data = {
        "channel_id": CHANNEL_ID,
        "url": f"https://www.youtube.com/channel/{CHANNEL_ID}",
        "title": "Test Channel",
        "description": "A test channel",
        "subscriber_count": 100,
        "video_count": 3,
    }
    data.update(overrides)
    return ChannelCreate(**data)


def make_video(video_id: str, **overrides) -> VideoCreate:
    data = {
        "video_id": video_id,
        "title": f"Video {video_id}",
        "published_at": datetime(2024, 1, 1, tzinfo=UTC),
        "duration": "4:13",
        "view_count": 1000,
        "like_count": 50,
        "comment_count": 5,
        "tags": ["news"],
    }
    data.update(overrides)
    return VideoCreate(**data)


@pytest.mark.asyncio
async def test_channel_upsert_and_get(channel_repo: ChannelRepository) -> None:
    """Test creating and retrieving a channel."""
    saved = await channel_repo.upsert(make_channel(user_id="user-1"))

    assert saved["id"] > 0
    channel = await channel_repo.get_by_channel_id(CHANNEL_ID)
    assert channel is not None
    assert channel["title"] == "Test Channel"
    assert channel["user_id"] == "user-1"
    assert (await channel_repo.get_by_id(saved["id"]))["channel_id"] == CHANNEL_ID


@pytest.mark.asyncio
async def test_channel_upsert_overwrites_in_place(channel_repo: ChannelRepository) -> None:
    """Upserting the same channel ID never creates a second row."""
    first = await channel_repo.upsert(make_channel())
    second = await channel_repo.upsert(
        make_channel(title="Renamed", description=None, subscriber_count=999)
    )

    assert second["id"] == first["id"]
    assert second["title"] == "Renamed"
    assert second["description"] is None
    assert second["subscriber_count"] == 999
    assert len(await channel_repo.list_all()) == 1


@pytest.mark.asyncio
async def test_video_upsert_many_and_list(
    channel_repo: ChannelRepository,
    video_repo: VideoRepository,
) -> None:
    """Test storing videos and reading them back newest first."""
    channel = await channel_repo.upsert(make_channel())
    await video_repo.upsert_many(
        channel["id"],
        [
            make_video("older", published_at=datetime(2023, 5, 1, tzinfo=UTC)),
            make_video("newer", published_at=datetime(2024, 5, 1, tzinfo=UTC), like_count=None),
        ],
    )

    videos = await video_repo.list_by_channel(channel["id"])
    assert [video["video_id"] for video in videos] == ["newer", "older"]
    assert videos[0]["like_count"] is None
    assert videos[0]["tags"] == ["news"]
    assert await video_repo.count_by_channel(channel["id"]) == 2


@pytest.mark.asyncio
async def test_video_upsert_is_keyed_by_video_id(
    channel_repo: ChannelRepository,
    video_repo: VideoRepository,
) -> None:
    channel = await channel_repo.upsert(make_channel())
    await video_repo.upsert_many(channel["id"], [make_video("abcdefghijk")])
    await video_repo.upsert_many(
        channel["id"],
        [make_video("abcdefghijk", title="Updated", view_count=2000, tags=[])],
    )

    assert await video_repo.count_by_channel(channel["id"]) == 1
    video = await video_repo.get_by_video_id("abcdefghijk")
    assert video["title"] == "Updated"
    assert video["view_count"] == 2000
    assert video["tags"] == []


@pytest.mark.asyncio
async def test_video_stubs_upsert(
    channel_repo: ChannelRepository,
    video_repo: VideoRepository,
) -> None:
    channel = await channel_repo.upsert(make_channel())
    stubs = [VideoStub(video_id=f"stub{i}", title=f"Stub {i}") for i in range(3)]

    await video_repo.upsert_stubs(channel["id"], stubs)
    await video_repo.upsert_stubs(channel["id"], stubs[:1])

    rows = await video_repo.list_stubs_by_channel(channel["id"])
    assert [row["video_id"] for row in rows] == ["stub0", "stub1", "stub2"]


@pytest.mark.asyncio
async def test_delete_by_channel(
    channel_repo: ChannelRepository,
    video_repo: VideoRepository,
) -> None:
    channel = await channel_repo.upsert(make_channel())
    await video_repo.upsert_many(channel["id"], [make_video("a"), make_video("b")])

    await video_repo.delete_by_channel(channel["id"])

    assert await video_repo.count_by_channel(channel["id"]) == 0
    assert await channel_repo.get_by_id(channel["id"]) is not None


@pytest.mark.asyncio
async def test_channel_delete_removes_videos(
    channel_repo: ChannelRepository,
    video_repo: VideoRepository,
) -> None:
    channel = await channel_repo.upsert(make_channel())
    await video_repo.upsert_many(channel["id"], [make_video("a")])
    await video_repo.upsert_stubs(channel["id"], [VideoStub(video_id="a", title="A")])

    assert await channel_repo.delete(channel["id"]) is True
    assert await channel_repo.delete(channel["id"]) is False

    assert await channel_repo.get_by_id(channel["id"]) is None
    assert await video_repo.get_by_video_id("a") is None
    assert await video_repo.list_stubs_by_channel(channel["id"]) == []


@pytest.mark.asyncio
async def test_read_failures_raise_persistence_error(
    test_db: Database,
    channel_repo: ChannelRepository,
    video_repo: VideoRepository,
) -> None:
    for table in ("video_list", "videos", "channels"):
        test_db.connection.execute(f"DROP TABLE {table}")
    test_db.connection.commit()

    with pytest.raises(PersistenceError, match="no such table"):
        await channel_repo.get_by_channel_id(CHANNEL_ID)
    with pytest.raises(PersistenceError):
        await channel_repo.list_all()
    with pytest.raises(PersistenceError):
        await video_repo.list_by_channel(1)
    with pytest.raises(PersistenceError):
        await video_repo.count_by_channel(1)
