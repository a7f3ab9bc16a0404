#!/usr/bin/env python3
"""
Schema Definitions
Centralized dataclasses used across the Cineplex Showtime Alert system.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, List, Optional

logger = logging.getLogger("ShowtimeAlert.Schema")


class ShowtimeDecodeError(ValueError):
    """Raised when a showtime response does not have the expected shape"""


# Showtime API dataclasses
@dataclass(frozen=True)
class Session:
    """A single screening of a movie"""

    show_start_date_time: datetime
    seats_remaining: Any


@dataclass(frozen=True)
class Experience:
    """A screening format (e.g. 70mm, IMAX) and its sessions"""

    experience_types: List[str]
    sessions: List[Session]

    def has_experience_type(self, tag: str) -> bool:
        return tag in self.experience_types


@dataclass(frozen=True)
class Movie:
    """Represents a movie with its details"""

    id: int
    name: str
    detail_page_url: str
    experiences: List[Experience]


@dataclass(frozen=True)
class MovieDate:
    """Movies playing at a theatre on one date"""

    start_date: datetime
    movies: List[Movie]


@dataclass(frozen=True)
class Theatre:
    """Represents a theatre and its showtimes by date"""

    theatre_id: int
    name: str
    dates: List[MovieDate]


# Pipeline result dataclasses
@dataclass
class FetchResult:
    """Outcome of one request to the showtime API"""

    success: bool
    fetch_time: str
    theatres: List[Theatre] = field(default_factory=list)
    error_message: Optional[str] = None


@dataclass
class TickResult:
    """Outcome of one scheduled check"""

    success: bool
    sessions_found: int = 0
    error_message: Optional[str] = None


def parse_datetime(value: Any) -> datetime:
    """Parse an ISO 8601 timestamp, accepting a trailing 'Z'"""
    if not isinstance(value, str):
        raise ShowtimeDecodeError(f"Expected timestamp string, got {value!r}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise ShowtimeDecodeError(f"Invalid timestamp {value!r}: {e}") from e


def _require(data: Any, key: str, kind: str) -> Any:
    if not isinstance(data, dict):
        raise ShowtimeDecodeError(f"Expected {kind} object, got {type(data).__name__}")
    if key not in data:
        raise ShowtimeDecodeError(f"Missing '{key}' in {kind}")
    return data[key]


def _require_list(data: Any, key: str, kind: str) -> list:
    value = _require(data, key, kind)
    if not isinstance(value, list):
        raise ShowtimeDecodeError(f"Expected list for '{key}' in {kind}")
    return value


def _parse_session(data: Any) -> Session:
    # seatsRemaining is passed through as sent
    return Session(
        show_start_date_time=parse_datetime(
            _require(data, "showStartDateTime", "session")
        ),
        seats_remaining=_require(data, "seatsRemaining", "session"),
    )


def _parse_entries(items: list, parser: Callable[[Any], Any], kind: str) -> list:
    """
    Decode a list where only the first entry is read by the alert

    The first entry must decode; later entries that fail are skipped so a
    malformed neighbour cannot hide the targeted showtimes.
    """
    entries = []
    for index, item in enumerate(items):
        try:
            entries.append(parser(item))
        except ShowtimeDecodeError as e:
            if index == 0:
                raise
            logger.debug(f"Skipping {kind} {index}: {e}")
    return entries


def _parse_experience(data: Any) -> Experience:
    return Experience(
        experience_types=[
            str(t) for t in _require_list(data, "experienceTypes", "experience")
        ],
        sessions=[
            _parse_session(s) for s in _require_list(data, "sessions", "experience")
        ],
    )


def _parse_movie(data: Any) -> Movie:
    return Movie(
        id=_require(data, "id", "movie"),
        name=_require(data, "name", "movie"),
        detail_page_url=_require(data, "detailPageUrl", "movie"),
        experiences=[
            _parse_experience(e) for e in _require_list(data, "experiences", "movie")
        ],
    )


def _parse_movie_date(data: Any) -> MovieDate:
    return MovieDate(
        start_date=parse_datetime(_require(data, "startDate", "date")),
        movies=_parse_entries(
            _require_list(data, "movies", "date"), _parse_movie, "movie"
        ),
    )


def _parse_theatre(data: Any) -> Theatre:
    return Theatre(
        theatre_id=_require(data, "theatreId", "theatre"),
        name=_require(data, "theatre", "theatre"),
        dates=_parse_entries(
            _require_list(data, "dates", "theatre"), _parse_movie_date, "date"
        ),
    )


def parse_showtimes(payload: Any) -> List[Theatre]:
    """
    Decode a showtime API response body

    Only theatres[0] -> dates[0] -> movies[0] is decoded strictly; other
    theatres, dates and movies are dropped when they cannot be decoded.

    Args:
        payload: Decoded JSON body, expected to be a list of theatres

    Returns:
        List of Theatre objects, in response order (possibly empty)

    Raises:
        ShowtimeDecodeError: If the body or its first theatre, date or movie
            does not match the expected shape
    """
    if not isinstance(payload, list):
        raise ShowtimeDecodeError(
            f"Expected a list of theatres, got {type(payload).__name__}"
        )
    return _parse_entries(payload, _parse_theatre, "theatre")
