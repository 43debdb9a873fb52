"""Channel data models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..errors import ParseError


@dataclass
class Channel:
    """A single channel record from the remote playlist document."""

    name: str = ""
    group_name: Optional[str] = None
    urls: List[str] = field(default_factory=list)
    id: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)  # Unknown keys, kept verbatim

    @classmethod
    def from_dict(cls, data: Any) -> 'Channel':
        """Build a channel from a decoded JSON object.

        Args:
            data: Decoded JSON value

        Returns:
            Channel instance

        Raises:
            ParseError: If the value is not a JSON object or a field has the wrong type
        """
        if not isinstance(data, dict):
            raise ParseError(f"Channel record must be an object, got {type(data).__name__}")

        extras = dict(data)

        name = extras.pop('name', "")
        if name is None:
            name = ""
        if not isinstance(name, str):
            raise ParseError(f"Channel name must be a string, got {type(name).__name__}")

        group_name = extras.pop('groupName', None)
        if group_name is None:
            group_name = extras.pop('group', None)
        if group_name is not None and not isinstance(group_name, str):
            raise ParseError("Channel group must be a string")

        urls = extras.pop('urls', None)
        if urls is None:
            urls = extras.pop('url', None)
        if urls is None:
            urls = []
        elif isinstance(urls, str):
            urls = [urls]
        if not isinstance(urls, list) or not all(isinstance(u, str) for u in urls):
            raise ParseError(f"Channel '{name}' urls must be a list of strings")

        channel_id = extras.pop('id', None)
        if channel_id is not None:
            channel_id = str(channel_id)

        return cls(
            name=name,
            group_name=group_name,
            urls=list(urls),
            id=channel_id,
            extras=extras
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the channel back to a JSON-compatible object."""
        data: Dict[str, Any] = {}
        if self.id is not None:
            data['id'] = self.id
        data['name'] = self.name
        if self.group_name is not None:
            data['groupName'] = self.group_name
        data['urls'] = list(self.urls)
        data.update(self.extras)
        return data
