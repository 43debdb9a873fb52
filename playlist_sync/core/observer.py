"""Single-slot callbacks for playlist and job state changes."""

import logging
import threading
from typing import Callable, Optional

from ..models.playlist import Playlist

PlaylistChangeHandler = Callable[[Playlist], None]
JobStateHandler = Callable[[bool], None]


class ObserverHub:
    """Holds at most one handler per event kind.

    Registering a handler replaces the previous one. Handlers run on the
    thread that raises the event, usually the sync worker thread.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._lock = threading.Lock()
        self._job_state_lock = threading.Lock()
        self._on_playlist_change: Optional[PlaylistChangeHandler] = None
        self._on_job_state_change: Optional[JobStateHandler] = None

    @property
    def on_playlist_change(self) -> Optional[PlaylistChangeHandler]:
        with self._lock:
            return self._on_playlist_change

    @on_playlist_change.setter
    def on_playlist_change(self, handler: Optional[PlaylistChangeHandler]) -> None:
        with self._lock:
            self._on_playlist_change = handler

    @property
    def on_job_state_change(self) -> Optional[JobStateHandler]:
        with self._lock:
            return self._on_job_state_change

    @on_job_state_change.setter
    def on_job_state_change(self, handler: Optional[JobStateHandler]) -> None:
        with self._lock:
            self._on_job_state_change = handler

    def notify_playlist_changed(self, playlist: Playlist) -> None:
        """Hand a freshly synced playlist to the registered handler."""
        handler = self.on_playlist_change
        if handler is None:
            return
        try:
            handler(playlist)
        except Exception as e:
            self.logger.error(f"Playlist change handler failed: {e}", exc_info=True)

    def notify_job_state(self, is_running: bool) -> None:
        """Report that the sync job started or stopped.

        Calls are serialized so the handler never runs concurrently with itself.
        """
        with self._job_state_lock:
            handler = self.on_job_state_change
            if handler is None:
                return
            try:
                handler(is_running)
            except Exception as e:
                self.logger.error(f"Job state handler failed: {e}", exc_info=True)
