"""YouTube service exceptions."""


class YouTubeError(Exception):
    """Base exception for YouTube service errors."""

    pass


class InvalidChannelInputError(YouTubeError):
    """Raised when the channel URL or handle is empty or unusable."""

    pass


class ChannelResolutionError(YouTubeError):
    """Raised when a channel URL or handle cannot be resolved to an ID."""

    pass


class ChannelNotFoundError(ChannelResolutionError):
    """Raised when a channel cannot be found."""

    pass


class MetadataExtractionError(YouTubeError):
    """Raised when fetching channel or video metadata fails."""

    pass


class YouTubeAPIError(YouTubeError):
    """Raised when a YouTube Data API call fails."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class YouTubeConfigError(YouTubeError):
    """Raised when the YouTube Data API is not configured."""

    pass
