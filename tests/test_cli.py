"""Tests for the command-line interface."""

import time

import pytest
import yaml
from typer.testing import CliRunner

from playlist_sync.cli import app
from playlist_sync.config.preferences import PreferenceStore
from playlist_sync.config.settings import Settings

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({
        "source": {"built_in": [{"name": "demo", "url": "https://example.com/demo.json"}]},
        "storage": {
            "preferences_path": str(tmp_path / "prefs.db"),
            "cache_path": str(tmp_path / "playlist.json"),
        },
    }))
    return path


@pytest.fixture
def fresh_cache(tmp_path, config_file):
    """A cached document synced a moment ago, so no fetch happens."""
    (tmp_path / "playlist.json").write_text(
        '[{"name":"Alpha","groupName":"News","urls":["https://a"]}]', encoding="utf-8"
    )
    PreferenceStore(tmp_path / "prefs.db").put_int("last_update", int(time.time() * 1000))
    return config_file


class TestCli:
    """Tests for CLI commands."""

    def test_get_url_defaults_to_built_in(self, config_file):
        result = runner.invoke(app, ["get-url", "--config", str(config_file)])
        assert result.exit_code == 0
        assert "https://example.com/demo.json" in result.output

    def test_builtin_lists_playlists(self, config_file):
        result = runner.invoke(app, ["builtin", "-c", str(config_file)])
        assert result.exit_code == 0
        assert "demo" in result.output

    def test_show_cached_playlist(self, fresh_cache):
        result = runner.invoke(app, ["show", "-c", str(fresh_cache)])
        assert result.exit_code == 0
        assert "Alpha" in result.output
        assert "News" in result.output

    def test_status(self, fresh_cache):
        result = runner.invoke(app, ["status", "-c", str(fresh_cache)])
        assert result.exit_code == 0
        assert "Cached: yes" in result.output
        assert "Stale: no" in result.output

    def test_set_url_rejects_unknown_name(self, config_file):
        result = runner.invoke(app, ["set-url", "nope", "-c", str(config_file)])
        assert result.exit_code == 1

    def test_init_config(self, tmp_path):
        output = tmp_path / "out" / "config.yaml"
        result = runner.invoke(app, ["init-config", "--output", str(output)])
        assert result.exit_code == 0
        assert output.exists()
        assert Settings.from_file(output).sync.retry_delay_seconds == 10

    def test_init_config_keeps_existing_file(self, tmp_path):
        output = tmp_path / "config.yaml"
        output.write_text("keep: me\n")
        result = runner.invoke(app, ["init-config", "-o", str(output)], input="n\n")
        assert result.exit_code == 0
        assert output.read_text() == "keep: me\n"
