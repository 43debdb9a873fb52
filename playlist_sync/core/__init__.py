"""Core functionality for Playlist Sync."""

from .cache import CacheStore
from .fetcher import Fetcher, FetchResult
from .manager import PlaylistManager
from .notifier import Notifier
from .observer import ObserverHub
from .scheduler import SyncScheduler
from .worker import SyncWorker

__all__ = [
    "CacheStore",
    "Fetcher",
    "FetchResult",
    "Notifier",
    "ObserverHub",
    "PlaylistManager",
    "SyncScheduler",
    "SyncWorker",
]
