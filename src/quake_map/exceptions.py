"""Exception hierarchy for quake_map."""

from __future__ import annotations


class QuakeMapError(Exception):
    """Base exception for all quake_map errors."""


class FeedError(QuakeMapError):
    """The feed could not be fetched (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        url: str = "",
        status_code: int | None = None,
    ) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class FeedFormatError(QuakeMapError):
    """A feed feature is missing members the map needs."""


class PipelineStateError(QuakeMapError):
    """A pipeline stage was called out of order."""
