"""Shared fixtures for Playlist Sync tests."""

import logging
from unittest import mock

import pytest

from playlist_sync.config.preferences import PreferenceStore
from playlist_sync.core.cache import CacheStore
from playlist_sync.core.fetcher import Fetcher, FetchResult
from playlist_sync.core.manager import PlaylistManager

HOUR_MS = 60 * 60 * 1000
TTL_MS = 24 * HOUR_MS
NOW_MS = 1_700_000_000_000

SAMPLE_DOCUMENT = '[{"id":"1","name":"A"}]'


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    """Keep default settings paths out of the real home directory."""
    config_home = tmp_path / "config-home"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setenv("APPDATA", str(config_home))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    return config_home


@pytest.fixture
def logger():
    return logging.getLogger("playlist_sync.tests")


@pytest.fixture
def preferences(tmp_path):
    return PreferenceStore(tmp_path / "preferences.db")


@pytest.fixture
def cache_file(tmp_path):
    return tmp_path / "cache" / "playlist.json"


@pytest.fixture
def cache(cache_file, preferences, logger):
    return CacheStore(cache_file, preferences, logger)


@pytest.fixture
def fetcher():
    """Fetcher double returning SAMPLE_DOCUMENT."""
    fake = mock.MagicMock(spec=Fetcher)
    fake.fetch.return_value = FetchResult(body=SAMPLE_DOCUMENT)
    return fake


@pytest.fixture
def clock():
    return mock.MagicMock(return_value=NOW_MS)


@pytest.fixture
def manager(preferences, cache, fetcher, logger, clock):
    """Manager with fast retries and a frozen clock."""
    instance = PlaylistManager(
        preferences=preferences,
        cache=cache,
        fetcher=fetcher,
        logger=logger,
        built_in_playlists=[("full", "https://example.com/full.json")],
        cache_expiration_ms=TTL_MS,
        retry_delay=0.01,
        clock=clock
    )
    yield instance
    instance.shutdown()
    instance.wait_for_update(5)


class EventRecorder:
    """Collects observer callbacks in order."""

    def __init__(self):
        self.playlists = []
        self.job_states = []

    def on_playlist_change(self, playlist):
        self.playlists.append(playlist)

    def on_job_state_change(self, is_running):
        self.job_states.append(is_running)


@pytest.fixture
def recorder(manager):
    events = EventRecorder()
    manager.on_playlist_change = events.on_playlist_change
    manager.on_update_job_state_change = events.on_job_state_change
    return events
