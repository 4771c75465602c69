"""ISO-8601 duration formatting for video lengths."""

import re

_DURATION_RE = re.compile(r"^PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?$")

FALLBACK_DURATION = "0:00"


def parse_duration(iso_duration: str | None) -> str:
    """Convert a ``PT#H#M#S`` duration into ``H:MM:SS`` or ``M:SS``.

    Malformed or missing input yields ``0:00``.
    """
    if not iso_duration:
        return FALLBACK_DURATION

    match = _DURATION_RE.match(iso_duration.strip())
    if not match:
        return FALLBACK_DURATION

    hours, minutes, seconds = (int(part or 0) for part in match.groups())

    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"
