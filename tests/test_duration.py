"""Tests for ISO-8601 duration formatting."""

import pytest

from app.services.youtube.duration import parse_duration


@pytest.mark.parametrize(
    ("iso_duration", "expected"),
    [
        ("PT1H2M3S", "1:02:03"),
        ("PT5M", "5:00"),
        ("PT45S", "0:45"),
        ("PT0S", "0:00"),
        ("PT1H", "1:00:00"),
        ("PT12M7S", "12:07"),
        ("PT2H0M59S", "2:00:59"),
    ],
)
def test_parse_duration(iso_duration: str, expected: str) -> None:
    assert parse_duration(iso_duration) == expected


@pytest.mark.parametrize("malformed", ["", None, "garbage", "1:02:03", "P1D", "PT5X"])
def test_parse_duration_malformed_falls_back(malformed: str | None) -> None:
    """Malformed durations are displayed as 0:00 instead of raising."""
    assert parse_duration(malformed) == "0:00"
