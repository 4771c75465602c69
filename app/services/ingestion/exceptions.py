"""Ingestion service exceptions."""


class IngestionError(Exception):
    """Base exception for ingestion errors."""

    pass


class ChannelRecordNotFoundError(IngestionError):
    """Raised when a stored channel cannot be found by its internal ID."""

    pass
