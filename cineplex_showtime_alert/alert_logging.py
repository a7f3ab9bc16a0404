#!/usr/bin/env python3
"""Console and file logging for the showtime alert"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from .config import AlertConfig

LOGGER_NAME = "ShowtimeAlert"
CONSOLE_FORMAT = "%(asctime)s - %(message)s"
FILE_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(funcName)s:%(lineno)d - %(message)s"
)


def format_log_timestamp(dt: datetime) -> str:
    """Render a timestamp as 'yyyy-MM-dd h:mm:ss a', e.g. 2023-07-30 4:05:09 PM"""
    hour = dt.hour % 12 or 12
    period = "AM" if dt.hour < 12 else "PM"
    return f"{dt:%Y-%m-%d} {hour}:{dt:%M:%S} {period}"


class AlertLogFormatter(logging.Formatter):
    """Formatter using the 12-hour alert timestamp"""

    def formatTime(self, record, datefmt=None):
        return format_log_timestamp(datetime.fromtimestamp(record.created))


def setup_logging(config: AlertConfig) -> logging.Logger:
    """Setup logging with console and optional file handlers"""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Remove existing handlers
    logger.handlers = []

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, config.console_level.upper()))
    console_handler.setFormatter(AlertLogFormatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    # File handler (optional based on config)
    if config.enable_file_logging:
        log_dir = Path(config.logs_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"showtime_alert_{timestamp}.log"

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, config.file_level.upper()))
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)
        logger.debug(f"Logging to: {log_file}")

    return logger
