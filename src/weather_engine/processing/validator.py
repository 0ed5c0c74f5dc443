"""
Data validation module.

Checks converted forecast hours for plausible ranges and ordering. Problems
are reported, never raised: scoring still runs on questionable data.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from ..models import HourlyWeatherData

# (field, lower, upper)
RANGE_CHECKS = (
    ("temperature", -60.0, 60.0),
    ("humidity", 0.0, 100.0),
    ("wind_speed", 0.0, 300.0),
    ("wind_direction", 0.0, 360.0),
    ("pressure", 850.0, 1090.0),
    ("cloud_cover", 0.0, 100.0),
    ("precipitation", 0.0, 500.0),
    ("precipitation_probability", 0.0, 100.0),
    ("uv_index", 0.0, 20.0),
    ("visibility", 0.0, 1000.0),
)


class DataValidator:
    """Validate converted forecast hours."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize data validator.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_hour(self, data: HourlyWeatherData) -> Tuple[bool, List[str]]:
        """
        Validate that one hour's values are in plausible ranges.

        Args:
            data: Forecast hour

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []

        for field, lower, upper in RANGE_CHECKS:
            value = getattr(data, field)
            if not (lower <= value <= upper):
                errors.append(f"Invalid {field}: {value} (expected {lower:g}-{upper:g})")

        if data.dew_point > data.temperature + 0.5:
            errors.append(
                f"Dew point {data.dew_point} exceeds temperature {data.temperature}"
            )

        if data.sunshine_duration is not None and not (0 <= data.sunshine_duration <= 1):
            errors.append(f"Invalid sunshine_duration: {data.sunshine_duration} h (expected 0-1)")

        if data.shortwave_radiation is not None and data.shortwave_radiation < 0:
            errors.append(f"Invalid shortwave_radiation: {data.shortwave_radiation} (must be >= 0)")

        is_valid = len(errors) == 0
        return is_valid, errors

    def validate_series(self, hours: Sequence[HourlyWeatherData]) -> Tuple[bool, List[str]]:
        """
        Validate a forecast series: every hour plus chronological order.

        Args:
            hours: Forecast hours

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []

        for data in hours:
            _, hour_errors = self.validate_hour(data)
            errors.extend(f"{data.time.isoformat()}: {error}" for error in hour_errors)

        for previous, current in zip(hours, hours[1:]):
            if current.time <= previous.time:
                errors.append(
                    f"Hours out of order: {current.time.isoformat()} "
                    f"follows {previous.time.isoformat()}"
                )

        for error in errors:
            self.logger.warning(f"Data quality: {error}")

        return len(errors) == 0, errors
