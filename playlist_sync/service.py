"""Main background service for Playlist Sync."""

import signal
import sys
import time
from pathlib import Path
from typing import Optional

from .config.settings import Settings
from .core.manager import PlaylistManager
from .core.notifier import Notifier
from .core.scheduler import SyncScheduler
from .models.playlist import Playlist
from .utils.logger import setup_logger
from .utils.platform import is_windows


class PlaylistSyncService:
    """Keeps the local playlist in sync with its remote source."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize the service.

        Args:
            config_path: Path to configuration file (optional)
        """
        self.running = False
        self.config_path = config_path

        self.settings = Settings.from_file_or_default(config_path)

        self.logger = setup_logger(
            log_file=self.settings.logging.path,
            level=self.settings.logging.level,
            max_size_mb=self.settings.logging.max_size_mb,
            backup_count=self.settings.logging.backup_count,
            console=True
        )

        self.logger.info("Initializing Playlist Sync service")

        self.manager = PlaylistManager.from_settings(self.settings, self.logger)
        self.notifier = Notifier(
            logger=self.logger,
            enabled=self.settings.notifications.enabled
        )
        self.scheduler: Optional[SyncScheduler] = None

        self.manager.on_playlist_change = self.handle_playlist_change
        self.manager.on_update_job_state_change = self.handle_job_state_change

    def handle_playlist_change(self, playlist: Playlist) -> None:
        """Observer for new playlist content."""
        self.logger.info(
            f"Playlist updated: {len(playlist)} channel(s) in {len(playlist.groups)} group(s)"
        )
        if self.settings.notifications.on_playlist_change:
            self.notifier.notify_playlist_changed(playlist)

    def handle_job_state_change(self, is_running: bool) -> None:
        """Observer for the sync job starting or stopping."""
        if is_running:
            self.logger.debug("Sync job started")
        else:
            self.logger.debug(f"Sync job finished, stale={self.manager.needs_update()}")

    def setup_signal_handlers(self) -> None:
        """Setup signal handlers for graceful shutdown."""

        def signal_handler(signum, frame):
            self.logger.info(f"Received signal {signum}, shutting down...")
            self.shutdown()

        # Windows uses SIGBREAK, Linux/macOS use SIGTERM
        signal.signal(signal.SIGINT, signal_handler)

        if is_windows():
            signal.signal(signal.SIGBREAK, signal_handler)
        else:
            signal.signal(signal.SIGTERM, signal_handler)

    def start(self) -> None:
        """Start the sync service."""
        try:
            self.running = True

            self.setup_signal_handlers()

            self.logger.info(f"Playlist URL: {self.manager.get_playlist_url()}")

            # Initial load also triggers the first refresh
            playlist = self.manager.load_playlist()
            self.logger.info(f"Loaded cached playlist with {len(playlist)} channel(s)")

            self.scheduler = SyncScheduler(
                logger=self.logger,
                check_function=self.manager.request_update,
                check_interval_minutes=self.settings.scheduler.check_interval_minutes
            )
            self.scheduler.start()

            next_run = self.scheduler.get_next_run_time()
            if next_run:
                self.logger.info(f"Next staleness check scheduled for: {next_run}")

            self.logger.info("Service started successfully")
            self.logger.info("Press Ctrl+C to stop")

            self._keep_alive()

        except KeyboardInterrupt:
            self.logger.info("Keyboard interrupt received")
            self.shutdown()
        except Exception as e:
            self.logger.error(f"Service error: {e}", exc_info=True)
            self.shutdown()
            raise

    def _keep_alive(self) -> None:
        """Keep the service alive.

        Windows doesn't support signal.pause(), so we use a sleep loop.
        """
        if is_windows():
            while self.running:
                time.sleep(1)
        else:
            while self.running:
                signal.pause()

    def shutdown(self) -> None:
        """Graceful shutdown."""
        if not self.running:
            return

        self.logger.info("Shutting down service...")
        self.running = False

        if self.scheduler:
            self.scheduler.stop()

        self.manager.shutdown()

        self.logger.info("Service stopped")

        sys.exit(0)


def main():
    """Main entry point."""
    service = PlaylistSyncService()
    service.start()


if __name__ == "__main__":
    main()
