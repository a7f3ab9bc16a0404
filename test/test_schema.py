#!/usr/bin/env python3
"""
Test suite for showtime response decoding.
"""

import sys
import unittest
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from cineplex_showtime_alert.schema import (
    ShowtimeDecodeError,
    parse_datetime,
    parse_showtimes,
)


def make_payload():
    return [
        {
            "theatre": "Cineplex Cinemas Langley",
            "theatreId": 1405,
            "extraField": "ignored",
            "dates": [
                {
                    "startDate": "2023-07-30T00:00:00",
                    "movies": [
                        {
                            "id": 35277,
                            "name": "Oppenheimer",
                            "detailPageUrl": "https://www.cineplex.com/movie/oppenheimer",
                            "experiences": [
                                {
                                    "experienceTypes": ["Regular"],
                                    "sessions": [],
                                },
                                {
                                    "experienceTypes": ["imax", "70mm"],
                                    "sessions": [
                                        {
                                            "showStartDateTime": "2023-07-30T16:30:00",
                                            "seatsRemaining": 5,
                                        },
                                        {
                                            "showStartDateTime": "2023-07-30T12:00:00",
                                            "seatsRemaining": 0,
                                        },
                                    ],
                                },
                            ],
                        }
                    ],
                }
            ],
        }
    ]


class TestParseShowtimes(unittest.TestCase):
    """Test cases for parse_showtimes"""

    def test_empty_response(self):
        """Test that an empty list decodes to no theatres"""
        self.assertEqual(parse_showtimes([]), [])

    def test_full_response(self):
        """Test that nested theatre data is decoded in order"""
        theatres = parse_showtimes(make_payload())
        self.assertEqual(len(theatres), 1)
        theatre = theatres[0]
        self.assertEqual(theatre.theatre_id, 1405)
        self.assertEqual(theatre.name, "Cineplex Cinemas Langley")

        movie = theatre.dates[0].movies[0]
        self.assertEqual(movie.name, "Oppenheimer")
        self.assertEqual(movie.detail_page_url, "https://www.cineplex.com/movie/oppenheimer")

        experience = movie.experiences[1]
        self.assertTrue(experience.has_experience_type("70mm"))
        self.assertFalse(movie.experiences[0].has_experience_type("70mm"))
        self.assertEqual(
            [s.seats_remaining for s in experience.sessions], [5, 0]
        )
        self.assertEqual(
            experience.sessions[0].show_start_date_time,
            datetime(2023, 7, 30, 16, 30),
        )

    def test_non_list_body_rejected(self):
        """Test that a body that is not a list raises a decode error"""
        with self.assertRaises(ShowtimeDecodeError):
            parse_showtimes({"message": "Access denied"})

    def test_missing_key_rejected(self):
        """Test that a missing required key raises a decode error"""
        payload = make_payload()
        del payload[0]["dates"][0]["movies"][0]["detailPageUrl"]
        with self.assertRaises(ShowtimeDecodeError):
            parse_showtimes(payload)

    def test_seats_passed_through(self):
        """Test that seat counts are kept as sent, without validation"""
        payload = make_payload()
        sessions = payload[0]["dates"][0]["movies"][0]["experiences"][1]["sessions"]
        sessions[0]["seatsRemaining"] = None
        sessions[1]["seatsRemaining"] = -1
        experience = parse_showtimes(payload)[0].dates[0].movies[0].experiences[1]
        self.assertEqual(
            [s.seats_remaining for s in experience.sessions], [None, -1]
        )

    def test_malformed_later_movie_skipped(self):
        """Test that a broken second movie does not hide the first one"""
        payload = make_payload()
        movies = payload[0]["dates"][0]["movies"]
        movies.append({"id": 1, "name": "Barbie", "experiences": []})
        with self.assertLogs("ShowtimeAlert.Schema", level="DEBUG"):
            theatres = parse_showtimes(payload)
        movies = theatres[0].dates[0].movies
        self.assertEqual([m.name for m in movies], ["Oppenheimer"])

    def test_malformed_later_theatre_and_date_skipped(self):
        payload = make_payload()
        payload[0]["dates"].append({"movies": []})
        payload.append({"theatre": "Cineplex Cinemas Coquitlam", "dates": []})
        theatres = parse_showtimes(payload)
        self.assertEqual(len(theatres), 1)
        self.assertEqual(len(theatres[0].dates), 1)

    def test_malformed_first_movie_rejected(self):
        """Test that the first movie is still decoded strictly"""
        payload = make_payload()
        movies = payload[0]["dates"][0]["movies"]
        movies.insert(0, {"id": 1, "name": "Barbie", "experiences": []})
        with self.assertRaises(ShowtimeDecodeError):
            parse_showtimes(payload)

    def test_decode_error_is_value_error(self):
        """Test that decode errors can be handled as ValueError"""
        with self.assertRaises(ValueError):
            parse_showtimes("not a list")


class TestParseDatetime(unittest.TestCase):
    """Test cases for timestamp parsing"""

    def test_naive_timestamp(self):
        self.assertEqual(
            parse_datetime("2023-07-30T16:30:00"), datetime(2023, 7, 30, 16, 30)
        )

    def test_utc_suffix(self):
        """Test that a trailing Z is read as UTC"""
        parsed = parse_datetime("2023-07-30T16:30:00Z")
        self.assertEqual(parsed, datetime(2023, 7, 30, 16, 30, tzinfo=timezone.utc))

    def test_seven_digit_fraction(self):
        """Test that .NET-style 100ns fractions are accepted"""
        parsed = parse_datetime("2023-07-30T16:30:00.1234567")
        self.assertEqual((parsed.hour, parsed.minute), (16, 30))

    def test_invalid_timestamp(self):
        with self.assertRaises(ShowtimeDecodeError):
            parse_datetime("next sunday")
        with self.assertRaises(ShowtimeDecodeError):
            parse_datetime(1690734600)


if __name__ == "__main__":
    unittest.main()
