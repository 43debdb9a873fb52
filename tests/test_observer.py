"""Tests for the observer hub."""

import threading
import time
from unittest import mock

from playlist_sync.core.observer import ObserverHub
from playlist_sync.models import Playlist


class TestObserverHub:
    """Tests for ObserverHub."""

    def test_no_handler_is_a_noop(self, logger):
        hub = ObserverHub(logger)
        hub.notify_playlist_changed(Playlist(title="default"))
        hub.notify_job_state(True)

    def test_last_registration_wins(self, logger):
        hub = ObserverHub(logger)
        first, second = mock.MagicMock(), mock.MagicMock()
        hub.on_playlist_change = first
        hub.on_playlist_change = second

        playlist = Playlist(title="default")
        hub.notify_playlist_changed(playlist)

        first.assert_not_called()
        second.assert_called_once_with(playlist)

    def test_job_state_dispatch(self, logger):
        hub = ObserverHub(logger)
        handler = mock.MagicMock()
        hub.on_job_state_change = handler
        hub.notify_job_state(True)
        hub.notify_job_state(False)
        assert handler.call_args_list == [mock.call(True), mock.call(False)]

    def test_handler_errors_are_logged_not_raised(self, logger):
        hub = ObserverHub(logger)
        hub.on_playlist_change = mock.MagicMock(side_effect=RuntimeError("boom"))
        hub.on_job_state_change = mock.MagicMock(side_effect=RuntimeError("boom"))
        with mock.patch.object(logger, "error") as log_error:
            hub.notify_playlist_changed(Playlist(title="default"))
            hub.notify_job_state(True)
        assert log_error.call_count == 2

    def test_job_state_handler_never_runs_concurrently(self, logger):
        hub = ObserverHub(logger)
        active = []
        overlaps = []

        def handler(is_running):
            active.append(is_running)
            if len(active) > 1:
                overlaps.append(True)
            time.sleep(0.01)
            active.pop()

        hub.on_job_state_change = handler
        threads = [
            threading.Thread(target=hub.notify_job_state, args=(i % 2 == 0,))
            for i in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert overlaps == []
