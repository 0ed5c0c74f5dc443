"""
Date and timezone utilities.

Centralizes all date/time operations with proper timezone handling.
"""

import logging
from datetime import datetime
from typing import Optional

import pytz
from pytz.tzinfo import BaseTzInfo

SEASONS = {
    12: "winter", 1: "winter", 2: "winter",
    3: "spring", 4: "spring", 5: "spring",
    6: "summer", 7: "summer", 8: "summer",
    9: "autumn", 10: "autumn", 11: "autumn",
}


class DateUtils:
    """Utilities for date and timezone handling."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def parse_timezone(timezone_str: str) -> BaseTzInfo:
        """
        Parse timezone string to pytz timezone object.

        Args:
            timezone_str: Timezone string (e.g., 'Europe/London', 'UTC')

        Returns:
            pytz timezone object

        Raises:
            ValueError: If timezone is invalid
        """
        try:
            return pytz.timezone(timezone_str)
        except pytz.exceptions.UnknownTimeZoneError:
            raise ValueError(f"Invalid timezone: {timezone_str}")

    def parse_timestamp(self, value: str, timezone_str: str = "UTC") -> datetime:
        """
        Parse an ISO 8601 timestamp into a timezone-aware datetime.

        Naive timestamps (as delivered by forecast APIs queried with a local
        timezone) are localized to ``timezone_str``; aware ones are kept.

        Args:
            value: ISO timestamp, e.g. '2024-06-01T14:00' or '2024-06-01T14:00:00Z'
            timezone_str: Timezone for naive timestamps

        Returns:
            Timezone-aware datetime

        Raises:
            ValueError: If the timestamp or timezone cannot be parsed
        """
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"

        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid timestamp: {value}")

        if parsed.tzinfo is None:
            parsed = self.parse_timezone(timezone_str).localize(parsed)

        self.logger.debug(f"Parsed timestamp {value} -> {parsed.isoformat()}")
        return parsed

    @classmethod
    def to_local(cls, dt: datetime, timezone_str: Optional[str]) -> datetime:
        """
        Convert an aware datetime to the given timezone.

        Naive datetimes are assumed to already be local and are returned as-is,
        as is any datetime when no timezone is known.
        """
        if dt.tzinfo is None or not timezone_str:
            return dt
        return dt.astimezone(cls.parse_timezone(timezone_str))

    @staticmethod
    def season_for(dt: datetime) -> str:
        """Return the meteorological season (northern hemisphere) for a date."""
        return SEASONS[dt.month]

    @staticmethod
    def get_day_of_year(dt: datetime) -> int:
        """Get day of year (1-366)."""
        return dt.timetuple().tm_yday
