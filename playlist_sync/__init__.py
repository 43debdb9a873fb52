"""Playlist Sync: keeps a local copy of a remote channel playlist fresh."""

__version__ = "0.1.0"
