"""
Radiation and sunshine normalization.

Includes the solar geometry used to tell daylight hours from night
(FAO-56 sunset hour angle).
"""

import math
from datetime import datetime
from typing import Dict, Optional

import pytz

from ..core import constants
from .base import clamp, clamp_score

SOLAR_CONSTANT_WM2 = 1361.0
DEFAULT_DAY_LENGTH = 12.0  # hours


def normalize_shortwave_radiation(radiation_wm2: float) -> float:
    """Score shortwave radiation; saturates at 300 W/m²."""
    if radiation_wm2 <= 0:
        return constants.MIN_SCORE
    return clamp_score(radiation_wm2 / 3)


def normalize_sunshine_duration(duration_hours: float, max_possible: Optional[float] = None) -> float:
    """Sunshine as a fraction of the possible duration (default 12 h)."""
    reference = max_possible or DEFAULT_DAY_LENGTH
    return clamp_score(duration_hours / reference * 100)


def normalize_uv_index(uv_index: float) -> float:
    """40 at UV 2, 80 at UV 5, 100 from UV 7."""
    if uv_index <= 2:
        score = uv_index * 20
    elif uv_index <= 5:
        score = 40 + (uv_index - 2) * 13.3
    elif uv_index <= 7:
        score = 80 + (uv_index - 5) * 10
    else:
        score = 100.0
    return clamp_score(score)


def normalize_cloud_cover(cloud_cover_percent: float, inverted: bool = True) -> float:
    if inverted:
        return clamp_score(100 - cloud_cover_percent)
    return clamp_score(cloud_cover_percent)


def normalize_evapotranspiration(et0_mm: float) -> float:
    """50 at 2 mm, 100 from about 5 mm."""
    if et0_mm <= 2:
        score = et0_mm * 25
    elif et0_mm <= 5:
        score = 50 + (et0_mm - 2) * 16.7
    else:
        score = 100.0
    return clamp_score(score)


def calculate_clear_sky_index(actual_radiation: float, clear_sky_radiation: float) -> float:
    if clear_sky_radiation <= 0:
        return 0.0
    return min(1.0, actual_radiation / clear_sky_radiation)


def estimate_clear_sky_radiation(latitude: float, day_of_year: int, hour_of_day: float) -> float:
    """
    Clear-sky global radiation (W/m²) at a local solar hour.

    Uses a simple declination model and an air-mass transmission of 0.7.
    """
    declination = 23.45 * math.sin(math.radians(360 / 365 * (day_of_year - 81)))
    hour_angle = (hour_of_day - 12) * 15

    lat_rad = math.radians(latitude)
    decl_rad = math.radians(declination)

    sin_elevation = (
        math.sin(lat_rad) * math.sin(decl_rad)
        + math.cos(lat_rad) * math.cos(decl_rad) * math.cos(math.radians(hour_angle))
    )
    if sin_elevation <= 0:
        return 0.0

    air_mass = 1 / sin_elevation
    transmission = 0.7 ** (air_mass ** 0.678)
    return SOLAR_CONSTANT_WM2 * sin_elevation * transmission


def calculate_par(solar_radiation: float) -> float:
    """Photosynthetically active share of global radiation (W/m²)."""
    return solar_radiation * constants.PAR_FRACTION


def calculate_day_length(latitude: float, day_of_year: int) -> float:
    """
    Maximum possible sunshine duration N (hours), FAO-56 eq. 34.

    The sunset hour angle argument is clamped so polar day and polar night
    give 24 and 0 hours.
    """
    lat_rad = math.radians(latitude)
    delta = constants.SOLAR_DECLINATION_AMPLITUDE * math.sin(
        2 * math.pi * day_of_year / 365 - constants.SOLAR_DECLINATION_PHASE
    )
    ws = math.acos(clamp(-math.tan(lat_rad) * math.tan(delta), -1.0, 1.0))
    return 24 * ws / math.pi


def solar_time(when: datetime, longitude: float) -> float:
    """
    Local mean solar time in hours (0-24) at a longitude.

    Solar noon is 12:00 UTC on the prime meridian and shifts 4 minutes per
    degree of longitude; clock time and daylight saving play no part.
    Naive datetimes are taken as UTC.
    """
    utc = when if when.tzinfo is None else when.astimezone(pytz.UTC)
    hours = utc.hour + utc.minute / 60 + utc.second / 3600
    return (hours + longitude / 15) % 24


def is_daylight(latitude: float, day_of_year: int, solar_hour: float) -> bool:
    """True when a solar-time hour falls between sunrise and sunset."""
    half_day = calculate_day_length(latitude, day_of_year) / 2
    return 12 - half_day <= solar_hour < 12 + half_day


def classify_sunshine(radiation_wm2: float) -> Dict[str, str]:
    if radiation_wm2 < 100:
        return {"category": "Overcast/Night", "drying_potential": "poor"}
    if radiation_wm2 < 300:
        return {"category": "Mostly Cloudy", "drying_potential": "moderate"}
    if radiation_wm2 < 600:
        return {"category": "Partly Cloudy", "drying_potential": "good"}
    return {"category": "Sunny", "drying_potential": "excellent"}
