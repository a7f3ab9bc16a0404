#!/usr/bin/env python3
"""
Cineplex Showtime Alert
Runs the check: Fetch → Select → Notify, once at startup and then on a fixed
interval until stopped.
"""

import logging
import signal
import sys
import threading
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

import schedule

# Setup path for imports
sys.path.insert(0, str(Path(__file__).parent))

from cineplex_showtime_alert.alert_logging import setup_logging
from cineplex_showtime_alert.cineplex_client import CineplexShowtimeClient
from cineplex_showtime_alert.config import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_ENV_PATH,
    AlertConfig,
    load_config,
)
from cineplex_showtime_alert.schema import Theatre, TickResult
from cineplex_showtime_alert.showtime_notifier import ShowtimeNotifier

TARGET_DATE_FORMAT = "%m/%d/%Y"


class ShowtimeAlert:
    """Orchestrates one showtime check per tick, at most one tick at a time"""

    def __init__(
        self,
        config_path: str = DEFAULT_CONFIG_PATH,
        env_path: str = DEFAULT_ENV_PATH,
        config: Optional[AlertConfig] = None,
    ):
        """
        Initialize the alert

        Args:
            config_path: Path to configuration file
            env_path: Path to .env file holding the API subscription key
            config: Prebuilt configuration, used instead of reading files
        """
        self.config = config or load_config(config_path, env_path)
        self.logger = setup_logging(self.config)
        self.client = CineplexShowtimeClient(self.config)
        self.notifier = ShowtimeNotifier()
        self._tick_lock = threading.Lock()
        self.run_count = 0

    def _check_target(self, theatre: Theatre) -> None:
        """Debug-log when the first theatre/date are not the ones requested"""
        if theatre.theatre_id != self.config.location_id:
            self.logger.debug(
                f"First theatre is {theatre.theatre_id}, "
                f"expected {self.config.location_id}"
            )
        if theatre.dates:
            try:
                target = datetime.strptime(
                    self.config.target_date, TARGET_DATE_FORMAT
                ).date()
            except ValueError:
                return
            start = theatre.dates[0].start_date.date()
            if start != target:
                self.logger.debug(f"First date is {start}, expected {target}")

    def _run_tick(self) -> TickResult:
        result = self.client.fetch_showtimes()
        if not result.success:
            return TickResult(success=False, error_message=result.error_message)

        if result.theatres:
            self._check_target(result.theatres[0])

        sessions_found = self.notifier.notify(
            result.theatres, experience_tag=self.config.experience_tag
        )
        return TickResult(success=True, sessions_found=sessions_found)

    def run(self) -> TickResult:
        """
        Run one showtime check

        Returns:
            TickResult describing the check; a tick already in progress
            makes this one a skipped failure
        """
        if not self._tick_lock.acquire(blocking=False):
            self.logger.warning("Previous check still running, skipping this one")
            return TickResult(success=False, error_message="Previous check still running")

        try:
            self.run_count += 1
            return self._run_tick()
        except Exception as e:
            self.logger.error(f"Showtime check failed: {e}", exc_info=True)
            return TickResult(success=False, error_message=str(e))
        finally:
            self._tick_lock.release()

    def run_server_mode(self):
        """
        Run checks on a fixed interval until SIGINT/SIGTERM
        Uses schedule library to run the check at the configured interval
        """
        interval_minutes = self.config.interval_minutes
        shutdown_requested = False

        def signal_handler(signum, frame):
            """Handle graceful shutdown on SIGINT/SIGTERM"""
            nonlocal shutdown_requested
            self.logger.info("Shutdown signal received, stopping")
            shutdown_requested = True

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

        self.logger.info(f"Checking for movie times every {interval_minutes} minutes")

        # Run immediately on startup
        self.run()

        job = schedule.every(interval_minutes).minutes.do(self.run)

        while not shutdown_requested:
            schedule.run_pending()
            time.sleep(1)

        schedule.cancel_job(job)
        self.logger.info(f"Total checks completed: {self.run_count}")


def main():
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(
        description="Watch Cineplex showtimes and alert when sessions appear"
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to config file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--env",
        default=DEFAULT_ENV_PATH,
        help=f"Path to .env file with the API key (default: {DEFAULT_ENV_PATH})",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single check and exit instead of polling",
    )

    args = parser.parse_args()

    alert = ShowtimeAlert(config_path=args.config, env_path=args.env)

    if args.once:
        result = alert.run()
        sys.exit(0 if result.success else 1)

    alert.run_server_mode()
    sys.exit(0)


if __name__ == "__main__":
    main()
