"""Tests for the SQLite preference store."""

from playlist_sync.config.preferences import PreferenceStore


class TestPreferenceStore:
    """Tests for PreferenceStore."""

    def test_defaults_when_absent(self, preferences):
        assert preferences.get_string("playlist_url") is None
        assert preferences.get_string("playlist_url", "https://x") == "https://x"
        assert preferences.get_int("last_update") == 0

    def test_put_and_get(self, preferences):
        preferences.put_string("playlist_url", "https://example.com")
        preferences.put_int("last_update", 1_700_000_000_000)
        assert preferences.get_string("playlist_url") == "https://example.com"
        assert preferences.get_int("last_update") == 1_700_000_000_000

    def test_put_values_overwrites(self, preferences):
        preferences.put_int("last_update", 5)
        preferences.put_values({"playlist_url": "https://a", "last_update": 0})
        assert preferences.get_string("playlist_url") == "https://a"
        assert preferences.get_int("last_update") == 0

    def test_non_integer_value_reads_as_default(self, preferences):
        preferences.put_string("last_update", "yesterday")
        assert preferences.get_int("last_update", 3) == 3

    def test_values_survive_reopen(self, tmp_path):
        path = tmp_path / "nested" / "prefs.db"
        PreferenceStore(path).put_int("last_update", 42)
        assert PreferenceStore(path).get_int("last_update") == 42
