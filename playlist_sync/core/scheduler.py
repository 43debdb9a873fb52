"""Scheduler for periodic staleness checks."""

import logging
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger


class SyncScheduler:
    """Periodically asks the manager to refresh a stale playlist."""

    def __init__(
        self,
        logger: logging.Logger,
        check_function: Callable[[], object],
        check_interval_minutes: int = 60
    ):
        """Initialize scheduler.

        Args:
            logger: Logger instance
            check_function: Function to call for checks (takes no args)
            check_interval_minutes: Check interval in minutes
        """
        self.logger = logger
        self.check_function = check_function
        self.check_interval_minutes = check_interval_minutes

        self.scheduler = BackgroundScheduler()
        self._job_id = "playlist_staleness_check"

    def start(self) -> None:
        """Start the scheduler."""
        try:
            trigger = IntervalTrigger(minutes=self.check_interval_minutes)
            self.logger.info(
                f"Starting scheduler with interval: {self.check_interval_minutes} minutes"
            )

            self.scheduler.add_job(
                self._safe_check_function,
                trigger=trigger,
                id=self._job_id,
                name="Playlist Staleness Check",
                replace_existing=True
            )

            self.scheduler.start()
            self.logger.info("Scheduler started successfully")

        except Exception as e:
            self.logger.error(f"Failed to start scheduler: {e}")
            raise

    def stop(self) -> None:
        """Stop the scheduler gracefully."""
        try:
            if self.scheduler.running:
                self.logger.info("Stopping scheduler...")
                self.scheduler.shutdown(wait=True)
                self.logger.info("Scheduler stopped")
        except Exception as e:
            self.logger.error(f"Error stopping scheduler: {e}")

    def _safe_check_function(self) -> None:
        """Run the check without letting errors stop the scheduler."""
        try:
            self.logger.debug("Running scheduled staleness check")
            self.check_function()
        except Exception as e:
            self.logger.error(f"Error in scheduled check: {e}", exc_info=True)

    def get_next_run_time(self) -> Optional[str]:
        """Get the next scheduled run time.

        Returns:
            Next run time as string, or None if scheduler not running
        """
        try:
            job = self.scheduler.get_job(self._job_id)
            if job and job.next_run_time:
                return str(job.next_run_time)
            return None
        except Exception:
            return None
