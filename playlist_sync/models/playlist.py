"""Playlist data models."""

import json
from dataclasses import dataclass, field
from typing import Iterable, List

from ..errors import ParseError
from .channel import Channel

DEFAULT_PLAYLIST_TITLE = "default"
DEFAULT_GROUP_NAME = "Ungrouped"


@dataclass
class ChannelGroup:
    """Channels sharing a group name, in document order."""

    name: str
    channels: List[Channel] = field(default_factory=list)


@dataclass
class Playlist:
    """A named collection of channel groups."""

    title: str
    groups: List[ChannelGroup] = field(default_factory=list)

    @classmethod
    def create_from_all_channels(cls, title: str, channels: Iterable[Channel]) -> 'Playlist':
        """Group a flat channel list into a playlist.

        Groups keep the order in which their first channel appears.

        Args:
            title: Playlist title
            channels: Channels in document order

        Returns:
            Playlist instance
        """
        groups = {}
        for channel in channels:
            group_name = channel.group_name or DEFAULT_GROUP_NAME
            group = groups.get(group_name)
            if group is None:
                group = groups[group_name] = ChannelGroup(name=group_name)
            group.channels.append(channel)
        return cls(title=title, groups=list(groups.values()))

    @property
    def channels(self) -> List[Channel]:
        """All channels, flattened in group order."""
        return [channel for group in self.groups for channel in group.channels]

    @property
    def is_empty(self) -> bool:
        return not any(group.channels for group in self.groups)

    def __len__(self) -> int:
        return sum(len(group.channels) for group in self.groups)


def create_playlist_from_json(text: str, title: str = DEFAULT_PLAYLIST_TITLE) -> Playlist:
    """Parse a playlist document into a Playlist.

    Args:
        text: JSON array of channel records
        title: Title for the resulting playlist

    Returns:
        Playlist instance

    Raises:
        ParseError: If the document is not a JSON array of channel objects
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise ParseError(f"Malformed playlist document: {e}") from e

    if not isinstance(data, list):
        raise ParseError(f"Playlist document must be a JSON array, got {type(data).__name__}")

    channels = [Channel.from_dict(item) for item in data]
    return Playlist.create_from_all_channels(title, channels)


def playlist_to_json(playlist: Playlist) -> str:
    """Serialize a playlist back to a JSON array of channel records."""
    return json.dumps(
        [channel.to_dict() for channel in playlist.channels],
        ensure_ascii=False,
        indent=2
    )
