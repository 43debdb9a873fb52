"""Exceptions raised by Playlist Sync components."""

from typing import Optional


class PlaylistSyncError(Exception):
    """Base class for all playlist sync errors."""


class FetchError(PlaylistSyncError):
    """The remote playlist document could not be fetched."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class NetworkError(FetchError):
    """Connection-level failure."""


class FetchTimeoutError(NetworkError):
    """Connect or read timeout."""


class HttpStatusError(FetchError):
    """The server answered with a non-2xx status code."""

    def __init__(self, status_code: int, url: Optional[str] = None):
        super().__init__(f"Response code {status_code}", url)
        self.status_code = status_code


class ParseError(PlaylistSyncError):
    """The playlist document is malformed."""


class CacheReadError(PlaylistSyncError):
    """The cached document could not be read."""


class CacheNotFoundError(CacheReadError):
    """No cached document exists yet."""


class CacheWriteError(PlaylistSyncError):
    """The cached document could not be written."""
