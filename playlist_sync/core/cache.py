"""Local copy of the playlist document and its sync timestamp."""

import logging
import os
import tempfile
import threading
from pathlib import Path

from ..config.preferences import PreferenceStore
from ..errors import CacheNotFoundError, CacheReadError, CacheWriteError

KEY_LAST_UPDATE = "last_update"


class CacheStore:
    """Persists the last fetched document and tracks its freshness."""

    def __init__(
        self,
        cache_file: Path,
        preferences: PreferenceStore,
        logger: logging.Logger
    ):
        """Initialize cache store.

        Args:
            cache_file: File holding the raw playlist document
            preferences: Store for the last successful sync time
            logger: Logger instance
        """
        self.cache_file = cache_file
        self.preferences = preferences
        self.logger = logger
        self._lock = threading.Lock()

    def load(self) -> str:
        """Read the cached document.

        Returns:
            Raw document text

        Raises:
            CacheNotFoundError: If nothing has been cached yet
            CacheReadError: If the file cannot be read or decoded
        """
        with self._lock:
            try:
                with open(self.cache_file, 'r', encoding='utf-8', newline='') as f:
                    return f.read()
            except FileNotFoundError as e:
                raise CacheNotFoundError(f"No cached playlist at {self.cache_file}") from e
            except (OSError, UnicodeDecodeError) as e:
                raise CacheReadError(f"Cannot read {self.cache_file}: {e}") from e

    def write(self, content: str) -> None:
        """Replace the cached document.

        The new content goes to a temporary file that is renamed over the
        cache file, so readers see either the old or the new document.
        Line endings are stored untranslated.

        Args:
            content: Raw document text

        Raises:
            CacheWriteError: If the document cannot be written
        """
        with self._lock:
            try:
                self.cache_file.parent.mkdir(parents=True, exist_ok=True)
                fd, temp_path = tempfile.mkstemp(
                    dir=self.cache_file.parent, prefix=".playlist_", suffix=".tmp"
                )
                try:
                    with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
                        f.write(content)
                    os.replace(temp_path, self.cache_file)
                except Exception:
                    if os.path.exists(temp_path):
                        os.unlink(temp_path)
                    raise
            except OSError as e:
                raise CacheWriteError(f"Cannot write {self.cache_file}: {e}") from e

        self.logger.debug(f"Cached playlist written to {self.cache_file} ({len(content)} chars)")

    def exists(self) -> bool:
        return self.cache_file.exists()

    @property
    def last_sync(self) -> int:
        """Epoch milliseconds of the last successful sync, 0 if never."""
        with self._lock:
            return self.preferences.get_int(KEY_LAST_UPDATE, 0)

    def set_last_sync(self, time_millis: int) -> None:
        """Persist the last sync time; 0 marks the cache as stale."""
        with self._lock:
            self.preferences.put_int(KEY_LAST_UPDATE, time_millis)

    def is_stale(self, now_millis: int, ttl_millis: int) -> bool:
        """Check whether the cache has outlived its time-to-live."""
        return now_millis - self.last_sync > ttl_millis
