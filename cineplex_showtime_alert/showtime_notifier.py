#!/usr/bin/env python3
"""
Showtime Notifier
Picks the targeted movie experience out of a showtime response and logs one
line per session, followed by a terminal bell and the movie link.
"""

import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, TextIO

from .schema import Experience, Movie, Theatre

# Fallback messages
NO_THEATRE_MESSAGE = "No theatre data available"
NO_MOVIE_MESSAGE = "No movie data available"
NO_EXPERIENCE_MESSAGE = "No imax experience available"

TERMINAL_BELL = "\x07"


@dataclass
class SelectionResult:
    """Matched movie and experience, or the fallback message explaining why not"""

    movie: Optional[Movie] = None
    experience: Optional[Experience] = None
    theatre: Optional[Theatre] = None
    fallback_message: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.experience is not None


def format_show_time(dt: datetime) -> str:
    """Format as 'Sunday July 30, 4:30 PM' in local time"""
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    hour = dt.hour % 12 or 12
    period = "AM" if dt.hour < 12 else "PM"
    return f"{dt:%A %B} {dt.day}, {hour}:{dt:%M} {period}"


def select_experience(theatres: List[Theatre], experience_tag: str) -> SelectionResult:
    """
    Walk theatre -> date -> movie -> experience, stopping at the first empty step

    The first theatre and its first date are used as-is; the API is queried
    for a single theatre and date, so they are assumed to be the requested ones.
    """
    if not theatres:
        return SelectionResult(fallback_message=NO_THEATRE_MESSAGE)

    theatre = theatres[0]
    movies = theatre.dates[0].movies if theatre.dates else []
    if not movies:
        return SelectionResult(theatre=theatre, fallback_message=NO_MOVIE_MESSAGE)

    movie = movies[0]
    experience = next(
        (e for e in movie.experiences if e.has_experience_type(experience_tag)),
        None,
    )
    if experience is None:
        return SelectionResult(
            theatre=theatre, movie=movie, fallback_message=NO_EXPERIENCE_MESSAGE
        )

    return SelectionResult(theatre=theatre, movie=movie, experience=experience)


class ShowtimeNotifier:
    """Console notifier for matching sessions"""

    def __init__(
        self, logger: Optional[logging.Logger] = None, stream: Optional[TextIO] = None
    ):
        self.logger = logger or logging.getLogger("ShowtimeAlert.Notifier")
        self.stream = stream

    def _ring_bell(self) -> None:
        stream = self.stream or sys.stdout
        stream.write(TERMINAL_BELL)
        stream.flush()

    def notify(self, theatres: List[Theatre], experience_tag: str = "70mm") -> int:
        """
        Log available sessions for the targeted experience

        Args:
            theatres: Decoded showtime response
            experience_tag: Experience type a session must be tagged with

        Returns:
            Number of session lines logged
        """
        selection = select_experience(theatres, experience_tag)

        if not selection.found:
            self.logger.info(selection.fallback_message)
            return 0

        movie = selection.movie
        sessions = selection.experience.sessions
        for session in sessions:
            show_time = format_show_time(session.show_start_date_time)
            self.logger.info(
                f"{movie.name} at {show_time} seats remaining: {session.seats_remaining}"
            )

        if sessions:
            self._ring_bell()
            self.logger.info(f"Movie Link: {movie.detail_page_url}")

        return len(sessions)
