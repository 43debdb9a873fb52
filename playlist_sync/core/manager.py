"""Public entry point for loading and refreshing the playlist."""

import logging
import sqlite3
from typing import Callable, List, Optional, Sequence, Tuple

from ..config.preferences import PreferenceStore
from ..config.settings import BUILT_IN_PLAYLISTS, Settings
from ..errors import CacheReadError, ParseError
from ..models.playlist import Playlist, create_playlist_from_json
from .cache import KEY_LAST_UPDATE, CacheStore
from .fetcher import Fetcher
from .observer import JobStateHandler, ObserverHub, PlaylistChangeHandler
from .worker import CACHE_EXPIRATION_MS, UPDATE_RETRY_DELAY, SyncWorker, current_millis

KEY_PLAYLIST_URL = "playlist_url"


class PlaylistManager:
    """Serves the cached playlist and keeps it fresh in the background.

    None of the public methods raise on sync or cache failures: errors are
    logged and the background job retries until the cache is fresh.
    """

    def __init__(
        self,
        preferences: PreferenceStore,
        cache: CacheStore,
        fetcher: Fetcher,
        logger: logging.Logger,
        built_in_playlists: Sequence[Tuple[str, str]] = BUILT_IN_PLAYLISTS,
        default_url: Optional[str] = None,
        cache_expiration_ms: int = CACHE_EXPIRATION_MS,
        retry_delay: float = UPDATE_RETRY_DELAY,
        clock: Callable[[], int] = current_millis
    ):
        """Initialize playlist manager.

        Args:
            preferences: Durable store for the playlist URL and sync time
            cache: Cache store for the playlist document
            fetcher: Fetcher for the remote document
            logger: Logger instance
            built_in_playlists: (name, url) pairs offered to the user
            default_url: URL used before one is chosen (first built-in if omitted)
            cache_expiration_ms: Time-to-live of the cached document
            retry_delay: Seconds between failed fetch attempts
            clock: Returns the current time in epoch milliseconds
        """
        self.preferences = preferences
        self.cache = cache
        self.logger = logger
        self.built_in_playlists = list(built_in_playlists)
        self.default_url = default_url or self.built_in_playlists[0][1]
        self.clock = clock

        self.hub = ObserverHub(logger)
        self.worker = SyncWorker(
            cache=cache,
            fetcher=fetcher,
            hub=self.hub,
            url_provider=self.get_playlist_url,
            logger=logger,
            cache_expiration_ms=cache_expiration_ms,
            retry_delay=retry_delay,
            clock=clock
        )

    @classmethod
    def from_settings(cls, settings: Settings, logger: logging.Logger) -> 'PlaylistManager':
        """Build a manager wired to the configured storage and source."""
        preferences = PreferenceStore(settings.storage.preferences_path)
        cache = CacheStore(settings.storage.cache_path, preferences, logger)
        fetcher = Fetcher(
            logger,
            connect_timeout=settings.sync.connect_timeout,
            read_timeout=settings.sync.read_timeout
        )
        return cls(
            preferences=preferences,
            cache=cache,
            fetcher=fetcher,
            logger=logger,
            built_in_playlists=settings.source.built_in,
            default_url=settings.source.default_url,
            cache_expiration_ms=settings.sync.cache_expiration_ms,
            retry_delay=settings.sync.retry_delay_seconds
        )

    @property
    def on_playlist_change(self) -> Optional[PlaylistChangeHandler]:
        return self.hub.on_playlist_change

    @on_playlist_change.setter
    def on_playlist_change(self, handler: Optional[PlaylistChangeHandler]) -> None:
        self.hub.on_playlist_change = handler

    @property
    def on_update_job_state_change(self) -> Optional[JobStateHandler]:
        return self.hub.on_job_state_change

    @on_update_job_state_change.setter
    def on_update_job_state_change(self, handler: Optional[JobStateHandler]) -> None:
        self.hub.on_job_state_change = handler

    @property
    def is_updating(self) -> bool:
        return self.worker.is_running

    def get_built_in_playlists(self) -> List[Tuple[str, str]]:
        return list(self.built_in_playlists)

    def get_playlist_url(self) -> str:
        try:
            return self.preferences.get_string(KEY_PLAYLIST_URL, self.default_url)
        except sqlite3.Error as e:
            self.logger.error(f"Cannot read playlist URL, using default: {e}")
            return self.default_url

    def set_playlist_url(self, url: str) -> None:
        """Switch to another playlist URL and refresh from it."""
        try:
            self.preferences.put_values({KEY_PLAYLIST_URL: url, KEY_LAST_UPDATE: 0})
            self.logger.info(f"Playlist URL set to {url}")
        except sqlite3.Error as e:
            self.logger.error(f"Cannot save playlist URL {url}: {e}")
        self.request_update()

    def get_last_update(self) -> int:
        return self.cache.last_sync

    def set_last_update(self, time: int, request_update: bool = False) -> None:
        """Record the last sync time.

        Args:
            time: Epoch milliseconds; 0 marks the cache as stale
            request_update: Also trigger a background sync
        """
        self._save_last_sync(time)
        if request_update:
            self.request_update()

    def needs_update(self) -> bool:
        return self.worker.needs_update()

    def request_update(self) -> bool:
        """Trigger a background sync; ignored while one is running."""
        return self.worker.request()

    def wait_for_update(self, timeout: Optional[float] = None) -> bool:
        """Block until the running sync job finishes or timeout expires."""
        return self.worker.wait(timeout)

    def load_playlist(self) -> Playlist:
        """Return the cached playlist and trigger a background refresh.

        A missing or unreadable cache yields an empty playlist and marks the
        cache stale so the refresh fetches the remote document.
        """
        try:
            return create_playlist_from_json(self.cache.load())
        except (CacheReadError, ParseError) as e:
            self.logger.warning(f"Cannot load playlist, reason: {e}")
            self._save_last_sync(0)
            return self._load_built_in_playlist()
        finally:
            self.request_update()

    def shutdown(self) -> None:
        """Stop background syncing; the current fetch is allowed to finish."""
        self.worker.shutdown()

    def _save_last_sync(self, time: int) -> None:
        try:
            self.cache.set_last_sync(time)
        except sqlite3.Error as e:
            self.logger.error(f"Cannot save last sync time: {e}")

    def _load_built_in_playlist(self) -> Playlist:
        return create_playlist_from_json("[]")
