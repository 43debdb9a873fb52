"""Background retry loop that refreshes the cached playlist."""

import logging
import threading
import time
from typing import Callable, Optional

from ..errors import CacheReadError, PlaylistSyncError
from ..models.playlist import create_playlist_from_json
from .cache import CacheStore
from .fetcher import Fetcher
from .observer import ObserverHub

CACHE_EXPIRATION_MS = 24 * 60 * 60 * 1000
UPDATE_RETRY_DELAY = 10


def current_millis() -> int:
    """Wall clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class SyncWorker:
    """Runs at most one sync job at a time on a background thread.

    A job keeps fetching while the cache is stale, sleeping a fixed delay
    after each failure. There is no attempt limit: the job ends on the first
    successful fetch, when the cache stops being stale (for example after an
    external set_last_sync), or after shutdown().
    """

    def __init__(
        self,
        cache: CacheStore,
        fetcher: Fetcher,
        hub: ObserverHub,
        url_provider: Callable[[], str],
        logger: logging.Logger,
        cache_expiration_ms: int = CACHE_EXPIRATION_MS,
        retry_delay: float = UPDATE_RETRY_DELAY,
        clock: Callable[[], int] = current_millis
    ):
        """Initialize sync worker.

        Args:
            cache: Cache store consulted for staleness and written on change
            fetcher: Fetcher for the remote document
            hub: Observer hub notified of changes and job state
            url_provider: Returns the playlist URL to fetch
            logger: Logger instance
            cache_expiration_ms: Time-to-live of the cached document
            retry_delay: Seconds to wait between failed attempts
            clock: Returns the current time in epoch milliseconds
        """
        self.cache = cache
        self.fetcher = fetcher
        self.hub = hub
        self.url_provider = url_provider
        self.logger = logger
        self.cache_expiration_ms = cache_expiration_ms
        self.retry_delay = retry_delay
        self.clock = clock

        self._lock = threading.Lock()
        self._active = False
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._active

    def needs_update(self) -> bool:
        return self.cache.is_stale(self.clock(), self.cache_expiration_ms)

    def request(self) -> bool:
        """Start a sync job unless one is already running.

        Returns:
            True if a new job was started, False if the request was ignored
        """
        with self._lock:
            if self._stop_event.is_set():
                self.logger.debug("Worker is shut down, ignore!")
                return False
            if self._active:
                self.logger.info("A job is executing, ignore!")
                return False
            self._active = True
            self._thread = threading.Thread(
                target=self._run, name="playlist-sync-worker", daemon=True
            )
            thread = self._thread

        try:
            thread.start()
        except RuntimeError as e:
            self.logger.error(f"Cannot start sync job: {e}")
            with self._lock:
                self._active = False
            return False
        return True

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the current job finishes.

        Args:
            timeout: Maximum seconds to wait (None waits forever)

        Returns:
            True if no job is running afterwards
        """
        with self._lock:
            thread = self._thread
        if thread is not None:
            thread.join(timeout)
        return not self.is_running

    def shutdown(self) -> None:
        """Stop the running job before its next attempt and refuse new ones.

        A fetch already in progress is not interrupted.
        """
        self._stop_event.set()

    def _run(self) -> None:
        times = 0
        try:
            self.hub.notify_job_state(True)
            while not self._stop_event.is_set() and self.needs_update():
                times += 1
                self.logger.info(f"Updating playlist... attempt={times}")
                try:
                    self._sync_once()
                    self.logger.info("Update playlist successfully.")
                    break
                except PlaylistSyncError as e:
                    self.logger.warning(f"Cannot update playlist, reason: {e}")
                except Exception as e:
                    self.logger.error(f"Unexpected error updating playlist: {e}", exc_info=True)

                if self.needs_update():
                    self._stop_event.wait(self.retry_delay)
        finally:
            self.hub.notify_job_state(False)
            with self._lock:
                self._active = False

    def _sync_once(self) -> None:
        url = self.url_provider()
        remote = self.fetcher.fetch(url).body

        try:
            local = self.cache.load()
        except CacheReadError:
            local = None

        if remote != local:
            # Parse before writing so a malformed document never replaces the cache
            playlist = create_playlist_from_json(remote)
            self.cache.write(remote)
            self.logger.info(f"Playlist changed: {len(playlist)} channel(s) from {url}")
            self.hub.notify_playlist_changed(playlist)
        else:
            self.logger.debug("Playlist unchanged")

        self.cache.set_last_sync(self.clock())
