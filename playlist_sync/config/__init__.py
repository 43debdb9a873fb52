"""Configuration module for Playlist Sync."""

from .preferences import PreferenceStore
from .settings import BUILT_IN_PLAYLISTS, Settings

__all__ = ["BUILT_IN_PLAYLISTS", "PreferenceStore", "Settings"]
