"""Data models for Playlist Sync."""

from .channel import Channel
from .playlist import (
    DEFAULT_GROUP_NAME,
    ChannelGroup,
    Playlist,
    create_playlist_from_json,
    playlist_to_json,
)

__all__ = [
    "Channel",
    "ChannelGroup",
    "DEFAULT_GROUP_NAME",
    "Playlist",
    "create_playlist_from_json",
    "playlist_to_json",
]
