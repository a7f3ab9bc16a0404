#!/usr/bin/env python3
"""
Cineplex Showtime API Client
Fetches showtimes for one theatre, date and experience filter.
Failures are returned as results rather than raised; there is no retry.
"""

import logging
from datetime import datetime
from typing import Optional

import requests

from .config import AlertConfig
from .schema import FetchResult, ShowtimeDecodeError, parse_showtimes


class CineplexShowtimeClient:
    """Single-request client for the Cineplex theatrical showtimes endpoint"""

    def __init__(
        self, config: AlertConfig, session: Optional[requests.Session] = None
    ):
        """
        Initialize client

        Args:
            config: Alert configuration holding endpoint, filters and API key
            session: HTTP session to send requests with (default: requests)
        """
        self.config = config
        self.http = session or requests
        self.logger = logging.getLogger("ShowtimeAlert.Client")
        self.stats = {
            "total_requests": 0,
            "successful_requests": 0,
            "failed_requests": 0,
        }

    def _failure(self, message: str) -> FetchResult:
        self.stats["failed_requests"] += 1
        self.logger.error(message)
        return FetchResult(
            success=False,
            fetch_time=datetime.now().isoformat(),
            error_message=message,
        )

    def fetch_showtimes(self) -> FetchResult:
        """
        Fetch showtimes for the configured theatre and date

        Returns:
            FetchResult with decoded theatres on success, or an error message
        """
        params = self.config.request_params()
        self.logger.debug(f"Fetching {self.config.api_url} with {params}")
        self.stats["total_requests"] += 1

        try:
            response = self.http.get(
                self.config.api_url,
                params=params,
                headers=self.config.request_headers(),
                timeout=self.config.request_timeout,
            )
            response.raise_for_status()
        except requests.exceptions.Timeout:
            return self._failure(
                f"Timeout fetching showtimes for {self.config.target_date}"
            )
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else e
            return self._failure(f"HTTP error fetching showtimes: {status}")
        except requests.exceptions.RequestException as e:
            return self._failure(f"Request error fetching showtimes: {e}")

        try:
            theatres = parse_showtimes(response.json())
        except ShowtimeDecodeError as e:
            return self._failure(f"Unexpected showtime response: {e}")
        except ValueError as e:
            return self._failure(f"Invalid JSON in showtime response: {e}")

        self.stats["successful_requests"] += 1
        self.logger.debug(f"Fetched {len(theatres)} theatre(s)")
        return FetchResult(
            success=True,
            fetch_time=datetime.now().isoformat(),
            theatres=theatres,
        )
