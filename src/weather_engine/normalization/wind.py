"""
Wind normalization.

Speed, direction and gust curves plus unit conversion and the Beaufort and
compass helpers.
"""

from typing import Dict, Tuple

from ..core import constants
from .base import clamp_score

KMH_PER_UNIT = {
    "kmh": 1.0,
    "km/h": 1.0,
    "mph": 1.60934,
    "ms": 3.6,
    "m/s": 3.6,
    "knots": 1.852,
    "kn": 1.852,
}

GUST_TOLERANCE = {
    "low": (1.3, 1.6),
    "medium": (1.5, 2.0),
    "high": (1.7, 2.5),
}

# (upper bound km/h, force, description)
BEAUFORT_BANDS = (
    (1, 0, "Calm"),
    (6, 1, "Light air"),
    (12, 2, "Light breeze"),
    (20, 3, "Gentle breeze"),
    (29, 4, "Moderate breeze"),
    (39, 5, "Fresh breeze"),
    (50, 6, "Strong breeze"),
    (62, 7, "Near gale"),
    (75, 8, "Gale"),
    (89, 9, "Strong gale"),
    (103, 10, "Storm"),
    (118, 11, "Violent storm"),
)

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)

# Chimney-cap wind bands (km/h)
BURNING_CALM = 3.0
BURNING_OPTIMAL_MIN = 10.0
BURNING_OPTIMAL_MAX = 25.0
BURNING_MODERATE = 40.0
BURNING_GALE = 60.0


def normalize_drying_wind_speed(speed_kmh: float) -> float:
    """
    Score wind speed for drying laundry.

    Plateau peaking at 25 km/h: 50 at 5 km/h, 80 at 15, 100 at 25, 55 at 40,
    then falling 2 points per km/h.
    """
    if speed_kmh < 5:
        score = speed_kmh * 10
    elif speed_kmh < 15:
        score = 50 + (speed_kmh - 5) * 3
    elif speed_kmh <= 25:
        score = 80 + (speed_kmh - 15) * 2
    elif speed_kmh <= 40:
        score = 100 - (speed_kmh - 25) * 3
    else:
        score = 55 - (speed_kmh - 40) * 2
    return clamp_score(score)


def normalize_burning_wind_speed(speed_kmh: float) -> float:
    """
    Score wind speed for a capped chimney.

    Calm air still drafts (60-70), 10-25 km/h is optimal, gales keep a floor
    of 20.
    """
    if speed_kmh < BURNING_CALM:
        score = 60 + max(0.0, speed_kmh) / BURNING_CALM * 10
    elif speed_kmh < BURNING_OPTIMAL_MIN:
        score = 70 + (speed_kmh - BURNING_CALM) / (BURNING_OPTIMAL_MIN - BURNING_CALM) * 15
    elif speed_kmh <= BURNING_OPTIMAL_MAX:
        score = 85 + (speed_kmh - BURNING_OPTIMAL_MIN) / (
            BURNING_OPTIMAL_MAX - BURNING_OPTIMAL_MIN) * 15
    elif speed_kmh < BURNING_MODERATE:
        score = 100 - (speed_kmh - BURNING_OPTIMAL_MAX) / (
            BURNING_MODERATE - BURNING_OPTIMAL_MAX) * 10
    elif speed_kmh < BURNING_GALE:
        score = 90 - (speed_kmh - BURNING_MODERATE) / (BURNING_GALE - BURNING_MODERATE) * 30
    else:
        score = max(20.0, 60 - (speed_kmh - BURNING_GALE) / 20 * 30)
    return clamp_score(score)


def normalize_wind_speed(
    speed_kmh: float,
    optimal_range: Tuple[float, float],
    min_acceptable: float,
    max_acceptable: float
) -> float:
    """
    Generic wind plateau.

    Args:
        speed_kmh: Wind speed (km/h)
        optimal_range: (low, high) band scoring 80-100
        min_acceptable: Speed scoring 30
        max_acceptable: Speed above which the score is 0

    Returns:
        Score between 0 and 100
    """
    opt_min, opt_max = optimal_range

    if speed_kmh < min_acceptable:
        score = speed_kmh / min_acceptable * 30
    elif speed_kmh < opt_min:
        score = 30 + (speed_kmh - min_acceptable) / (opt_min - min_acceptable) * 50
    elif speed_kmh <= opt_max:
        score = 80 + (speed_kmh - opt_min) / (opt_max - opt_min) * 20
    elif speed_kmh <= max_acceptable:
        score = 100 - (speed_kmh - opt_max) / (max_acceptable - opt_max) * 100
    else:
        score = 0.0
    return clamp_score(score)


def angular_difference(a: float, b: float) -> float:
    """Smallest angle between two bearings (0-180)."""
    diff = abs(a - b) % 360
    return 360 - diff if diff > 180 else diff


def normalize_wind_direction(
    direction: float,
    prevailing_direction: float = constants.PREVAILING_WIND_DIRECTION
) -> float:
    """Alignment with the prevailing wind: 100 when aligned, 50 when opposite."""
    diff = angular_difference(direction, prevailing_direction)
    return clamp_score(100 - diff / 180 * 50)


def normalize_wind_gusts(
    average_speed: float,
    gust_speed: float,
    tolerance: str = "medium"
) -> float:
    """
    Score gustiness as the ratio of gust to mean speed.

    Args:
        average_speed: Mean wind speed (km/h); calm is treated as 1 km/h
        gust_speed: Gust speed (km/h)
        tolerance: 'low', 'medium' or 'high'
    """
    acceptable, poor = GUST_TOLERANCE[tolerance]
    ratio = gust_speed / (average_speed or 1)

    if ratio <= acceptable:
        return constants.MAX_SCORE
    if ratio <= poor:
        return clamp_score(100 - (ratio - acceptable) / (poor - acceptable) * 100)
    return constants.MIN_SCORE


def calculate_effective_wind_speed(actual_speed: float, shelter_factor: float) -> float:
    """Wind speed felt at a sheltered site (full shelter removes 60 %)."""
    return actual_speed * (1 - shelter_factor * 0.6)


def beaufort_scale(speed_kmh: float) -> Dict[str, object]:
    """Beaufort force number and description for a speed in km/h."""
    for upper, force, description in BEAUFORT_BANDS:
        if speed_kmh < upper:
            return {"force": force, "description": description}
    return {"force": 12, "description": "Hurricane"}


def convert_wind_speed(speed: float, from_unit: str, to_unit: str) -> float:
    """
    Convert wind speed between kmh, mph, ms and knots.

    Raises:
        ValueError: For an unknown unit
    """
    try:
        return speed * KMH_PER_UNIT[from_unit.lower()] / KMH_PER_UNIT[to_unit.lower()]
    except KeyError as e:
        raise ValueError(f"Unknown wind speed unit: {e.args[0]}")


def get_compass_bearing(degrees: float) -> str:
    """Sixteen-point compass name for a bearing."""
    index = int(round((degrees % 360) / 22.5)) % 16
    return COMPASS_POINTS[index]
