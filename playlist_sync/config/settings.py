"""Configuration management for Playlist Sync."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

from ..utils.platform import get_config_dir

BUILT_IN_PLAYLISTS: List[Tuple[str, str]] = [
    ("full", "https://raw.githubusercontent.com/linlin515/iptv_test/refs/heads/main/full.json"),
]


@dataclass
class SourceConfig:
    """Remote playlist source configuration."""

    url: Optional[str] = None
    built_in: List[Tuple[str, str]] = field(default_factory=lambda: list(BUILT_IN_PLAYLISTS))

    def __post_init__(self):
        """Normalize built-in playlists loaded from YAML."""
        normalized = []
        for entry in self.built_in:
            if isinstance(entry, dict):
                entry = (entry.get('name'), entry.get('url'))
            name, url = entry
            if not name or not url:
                raise ValueError("built_in playlists need both a name and a url")
            normalized.append((str(name), str(url)))
        if not normalized:
            raise ValueError("at least one built_in playlist is required")
        self.built_in = normalized

    @property
    def default_url(self) -> str:
        """URL used until the user picks another one."""
        return self.url or self.built_in[0][1]


@dataclass
class SyncConfig:
    """Sync timing configuration."""

    cache_expiration_hours: float = 24
    retry_delay_seconds: float = 10
    connect_timeout: float = 5
    read_timeout: float = 5

    def __post_init__(self):
        """Validate configuration."""
        if self.cache_expiration_hours <= 0:
            raise ValueError("cache_expiration_hours must be > 0")
        if self.retry_delay_seconds <= 0:
            raise ValueError("retry_delay_seconds must be > 0")
        if self.connect_timeout <= 0 or self.read_timeout <= 0:
            raise ValueError("connect_timeout and read_timeout must be > 0")

    @property
    def cache_expiration_ms(self) -> int:
        return int(self.cache_expiration_hours * 60 * 60 * 1000)


@dataclass
class StorageConfig:
    """Local storage configuration."""

    preferences_path: Optional[Path] = None
    cache_path: Optional[Path] = None

    def __post_init__(self):
        """Set default paths if not specified."""
        if self.preferences_path is None:
            self.preferences_path = get_config_dir() / 'preferences.db'
        elif isinstance(self.preferences_path, str):
            self.preferences_path = Path(self.preferences_path).expanduser()

        if self.cache_path is None:
            self.cache_path = get_config_dir() / 'playlist.json'
        elif isinstance(self.cache_path, str):
            self.cache_path = Path(self.cache_path).expanduser()


@dataclass
class SchedulerConfig:
    """Scheduler configuration."""

    check_interval_minutes: int = 60

    def __post_init__(self):
        """Validate configuration."""
        if self.check_interval_minutes < 5:
            raise ValueError("check_interval_minutes must be >= 5")


@dataclass
class NotificationConfig:
    """Notification configuration."""

    enabled: bool = True
    on_playlist_change: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""

    path: Optional[Path] = None
    level: str = "INFO"
    max_size_mb: int = 10
    backup_count: int = 5

    def __post_init__(self):
        """Validate configuration and set defaults."""
        if self.path is None:
            self.path = get_config_dir() / 'service.log'
        elif isinstance(self.path, str):
            self.path = Path(self.path).expanduser()

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.level.upper() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}")


@dataclass
class Settings:
    """Main settings container."""

    source: SourceConfig = field(default_factory=SourceConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)
    notifications: NotificationConfig = field(default_factory=NotificationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, config_path: Path) -> 'Settings':
        """Load settings from YAML file.

        Args:
            config_path: Path to configuration file

        Returns:
            Settings instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        return cls(
            source=SourceConfig(**(data.get('source') or {})),
            sync=SyncConfig(**(data.get('sync') or {})),
            storage=StorageConfig(**(data.get('storage') or {})),
            scheduler=SchedulerConfig(**(data.get('scheduler') or {})),
            notifications=NotificationConfig(**(data.get('notifications') or {})),
            logging=LoggingConfig(**(data.get('logging') or {})),
        )

    @classmethod
    def from_file_or_default(cls, config_path: Optional[Path] = None) -> 'Settings':
        """Load settings from file or return defaults.

        Args:
            config_path: Path to configuration file (optional)

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = get_config_dir() / 'config.yaml'

        if config_path.exists():
            try:
                return cls.from_file(config_path)
            except Exception as e:
                logging.warning(f"Failed to load config from {config_path}: {e}")
                logging.warning("Using default configuration")
                return cls()
        else:
            logging.info(f"Config file not found at {config_path}, using defaults")
            return cls()

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save settings to YAML file.

        Args:
            config_path: Path to save configuration (default: config.yaml in config dir)
        """
        if config_path is None:
            config_path = get_config_dir() / 'config.yaml'

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            'source': {
                'url': self.source.url,
                'built_in': [
                    {'name': name, 'url': url} for name, url in self.source.built_in
                ]
            },
            'sync': {
                'cache_expiration_hours': self.sync.cache_expiration_hours,
                'retry_delay_seconds': self.sync.retry_delay_seconds,
                'connect_timeout': self.sync.connect_timeout,
                'read_timeout': self.sync.read_timeout
            },
            'storage': {
                'preferences_path': str(self.storage.preferences_path) if self.storage.preferences_path else None,
                'cache_path': str(self.storage.cache_path) if self.storage.cache_path else None
            },
            'scheduler': {
                'check_interval_minutes': self.scheduler.check_interval_minutes
            },
            'notifications': {
                'enabled': self.notifications.enabled,
                'on_playlist_change': self.notifications.on_playlist_change
            },
            'logging': {
                'path': str(self.logging.path) if self.logging.path else None,
                'level': self.logging.level,
                'max_size_mb': self.logging.max_size_mb,
                'backup_count': self.logging.backup_count
            }
        }

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, indent=2)
