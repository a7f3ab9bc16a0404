"""
Cineplex Showtime Alert Package

Polls the Cineplex showtime API for one movie's premium-format sessions at one
theatre on one date, and announces them on the console with a terminal bell.

This package contains:
- cineplex_client: Fetches showtimes from the Cineplex API
- showtime_notifier: Selects the targeted experience and logs its sessions
- config / alert_logging: Configuration and console logging setup
"""

__version__ = "1.0.0"
__author__ = "Cineplex Showtime Alert"
