"""Cross-platform desktop notifications for playlist updates."""

import logging
import sys
from typing import Optional

from ..models.playlist import Playlist

try:
    from plyer import notification as plyer_notification
    PLYER_AVAILABLE = True
except ImportError:
    PLYER_AVAILABLE = False

# Windows-specific notification support
if sys.platform == 'win32':
    try:
        from winotify import Notification as WinNotification
        WINOTIFY_AVAILABLE = True
    except ImportError:
        WINOTIFY_AVAILABLE = False
else:
    WINOTIFY_AVAILABLE = False


class Notifier:
    """Cross-platform desktop notification handler."""

    def __init__(
        self,
        logger: logging.Logger,
        enabled: bool = True,
        app_name: str = "Playlist Sync"
    ):
        """Initialize notifier.

        Args:
            logger: Logger instance
            enabled: Whether notifications are enabled
            app_name: Application name shown in notifications
        """
        self.logger = logger
        self.enabled = enabled
        self.app_name = app_name

        self.backend = self._detect_backend()

        if not self.backend and self.enabled:
            self.logger.warning("No notification backend available, notifications disabled")
            self.enabled = False

    def _detect_backend(self) -> Optional[str]:
        """Detect available notification backend.

        Returns:
            Backend name ('winotify', 'plyer', or None)
        """
        if sys.platform == 'win32' and WINOTIFY_AVAILABLE:
            return 'winotify'
        elif PLYER_AVAILABLE:
            return 'plyer'
        return None

    def send(self, title: str, message: str, duration: int = 5) -> bool:
        """Send a desktop notification.

        Args:
            title: Notification title
            message: Notification message
            duration: Duration in seconds (ignored on some platforms)

        Returns:
            True if notification sent successfully, False otherwise
        """
        if not self.enabled:
            return False

        try:
            if self.backend == 'winotify':
                toast = WinNotification(
                    app_id=self.app_name,
                    title=title,
                    msg=message,
                    duration="short"
                )
                toast.show()
            elif self.backend == 'plyer':
                plyer_notification.notify(
                    title=title,
                    message=message,
                    app_name=self.app_name,
                    timeout=duration
                )
            else:
                return False

            self.logger.debug(f"Notification sent: {title}")
            return True

        except Exception as e:
            self.logger.error(f"Failed to send notification: {e}")
            return False

    def notify_playlist_changed(self, playlist: Playlist) -> bool:
        """Notify that a new version of the playlist was downloaded.

        Args:
            playlist: The updated playlist

        Returns:
            True if notification sent
        """
        return self.send(
            title="Playlist Updated",
            message=f"{len(playlist)} channel(s) in {len(playlist.groups)} group(s)"
        )
