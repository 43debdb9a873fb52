"""Tests for the periodic staleness check scheduler."""

from unittest import mock

from playlist_sync.core.scheduler import SyncScheduler


class TestSyncScheduler:
    """Tests for SyncScheduler."""

    def test_start_and_stop(self, logger):
        scheduler = SyncScheduler(logger, mock.MagicMock(), check_interval_minutes=60)
        scheduler.start()
        try:
            assert scheduler.scheduler.running
            assert scheduler.get_next_run_time() is not None
        finally:
            scheduler.stop()
        assert not scheduler.scheduler.running

    def test_check_errors_are_swallowed(self, logger):
        check = mock.MagicMock(side_effect=RuntimeError("boom"))
        scheduler = SyncScheduler(logger, check)
        with mock.patch.object(logger, "error") as log_error:
            scheduler._safe_check_function()
        check.assert_called_once_with()
        log_error.assert_called_once()

    def test_next_run_time_before_start(self, logger):
        scheduler = SyncScheduler(logger, mock.MagicMock())
        assert scheduler.get_next_run_time() is None

    def test_stop_when_not_started(self, logger):
        SyncScheduler(logger, mock.MagicMock()).stop()
