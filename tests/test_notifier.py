"""Tests for desktop notifications."""

from unittest import mock

import pytest

from playlist_sync.core import notifier as notifier_module
from playlist_sync.core.notifier import Notifier
from playlist_sync.models import Channel, Playlist


@pytest.fixture
def plyer_backend():
    fake = mock.MagicMock()
    with mock.patch.object(notifier_module, "sys") as fake_sys, \
            mock.patch.object(notifier_module, "PLYER_AVAILABLE", True), \
            mock.patch.object(notifier_module, "plyer_notification", fake, create=True):
        fake_sys.platform = "linux"
        yield fake


class TestNotifier:
    """Tests for Notifier."""

    def test_playlist_changed_message(self, logger, plyer_backend):
        notifier = Notifier(logger)
        playlist = Playlist.create_from_all_channels(
            "default", [Channel(name="A", group_name="G"), Channel(name="B")]
        )

        assert notifier.notify_playlist_changed(playlist)

        kwargs = plyer_backend.notify.call_args.kwargs
        assert kwargs["title"] == "Playlist Updated"
        assert kwargs["message"] == "2 channel(s) in 2 group(s)"

    def test_disabled_sends_nothing(self, logger, plyer_backend):
        notifier = Notifier(logger, enabled=False)
        assert not notifier.send("t", "m")
        plyer_backend.notify.assert_not_called()

    def test_backend_failure_returns_false(self, logger, plyer_backend):
        plyer_backend.notify.side_effect = NotImplementedError("no dbus")
        assert not Notifier(logger).send("t", "m")

    def test_no_backend_disables_notifications(self, logger):
        with mock.patch.object(notifier_module, "PLYER_AVAILABLE", False), \
                mock.patch.object(notifier_module, "WINOTIFY_AVAILABLE", False):
            notifier = Notifier(logger)
        assert notifier.backend is None
        assert not notifier.enabled
