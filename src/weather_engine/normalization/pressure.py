"""
Pressure normalization.

High and rising pressure means settled weather; the burning curve scores air
density for chimney draft.
"""

from typing import Dict

from ..core import constants
from .base import clamp_score

HPA_PER_UNIT = {
    "hpa": 1.0,
    "mbar": 1.0,
    "kpa": 10.0,
    "inhg": 33.86389,
    "mmhg": 1.33322,
    "psi": 68.94757,
}

# Chimney draft pressure bands (hPa)
BURNING_FLOOR = 960.0
BURNING_STORM = 985.0
BURNING_LOW = 995.0
BURNING_MODERATE = 1005.0
BURNING_GOOD = 1015.0
BURNING_EXCELLENT = 1025.0

# (upper bound hPa, category, weather tendency)
PRESSURE_CLASSES = (
    (980, "Very Low", "Stormy weather likely"),
    (1000, "Low", "Unsettled, rain likely"),
    (1013, "Below Normal", "Variable conditions"),
    (1020, "Normal", "Fair conditions"),
    (1030, "High", "Settled, dry weather"),
)


def normalize_pressure(pressure_hpa: float) -> float:
    """
    Score sea-level pressure for weather stability.

    30 at 990 hPa, 70 at standard pressure, 100 from 1030 hPa.
    """
    if pressure_hpa >= constants.HIGH_PRESSURE:
        return constants.MAX_SCORE
    if pressure_hpa >= constants.STANDARD_PRESSURE:
        score = 70 + (pressure_hpa - constants.STANDARD_PRESSURE) / (
            constants.HIGH_PRESSURE - constants.STANDARD_PRESSURE) * 30
    elif pressure_hpa >= constants.LOW_PRESSURE:
        score = 30 + (pressure_hpa - constants.LOW_PRESSURE) / (
            constants.STANDARD_PRESSURE - constants.LOW_PRESSURE) * 40
    else:
        score = 30 - (constants.LOW_PRESSURE - pressure_hpa)
    return clamp_score(score)


def normalize_pressure_trend(trend_hpa_per_hour: float) -> float:
    """Score the pressure tendency; rising pressure is favourable."""
    if trend_hpa_per_hour >= 2:
        return constants.MAX_SCORE
    if trend_hpa_per_hour >= 0.5:
        score = 80 + (trend_hpa_per_hour - 0.5) * 13.3
    elif trend_hpa_per_hour >= -0.5:
        score = 60 + trend_hpa_per_hour * 40
    elif trend_hpa_per_hour >= -2:
        score = 40 + (trend_hpa_per_hour + 2) * 13.3
    else:
        score = 40 + (trend_hpa_per_hour + 2) * 20
    return clamp_score(score)


def normalize_burning_pressure(pressure_hpa: float) -> float:
    """Denser air drafts better: 20 at 985 hPa rising to 100 at 1025 hPa."""
    if pressure_hpa < BURNING_STORM:
        score = (pressure_hpa - BURNING_FLOOR) / (BURNING_STORM - BURNING_FLOOR) * 20
    elif pressure_hpa < BURNING_LOW:
        score = 20 + (pressure_hpa - BURNING_STORM) / (BURNING_LOW - BURNING_STORM) * 40
    elif pressure_hpa < BURNING_MODERATE:
        score = 60 + (pressure_hpa - BURNING_LOW) / (BURNING_MODERATE - BURNING_LOW) * 15
    elif pressure_hpa < BURNING_GOOD:
        score = 75 + (pressure_hpa - BURNING_MODERATE) / (BURNING_GOOD - BURNING_MODERATE) * 15
    elif pressure_hpa < BURNING_EXCELLENT:
        score = 90 + (pressure_hpa - BURNING_GOOD) / (BURNING_EXCELLENT - BURNING_GOOD) * 10
    else:
        score = 100.0
    return clamp_score(score)


def calculate_pressure_trend(current: float, previous: float, hours_apart: float) -> float:
    """Pressure tendency in hPa per hour."""
    if hours_apart <= 0:
        raise ValueError(f"hours_apart must be positive, got {hours_apart}")
    return (current - previous) / hours_apart


def adjust_pressure_for_elevation(
    station_pressure: float,
    elevation_m: float,
    temp_c: float
) -> float:
    """Reduce station pressure to sea level (hypsometric approximation)."""
    return station_pressure * (
        1 - (0.0065 * elevation_m) / (temp_c + 0.0065 * elevation_m + 273.15)
    ) ** -5.257


def calculate_altimeter_setting(
    station_pressure: float,
    elevation_m: float,
    temp_c: float
) -> float:
    std_temp = 15 - 0.0065 * elevation_m
    ratio = (temp_c + 273.15) / (std_temp + 273.15)
    return station_pressure * (1 + (elevation_m / 145442.16) * ratio) ** 5.255


def classify_pressure(pressure_hpa: float) -> Dict[str, str]:
    """Category and weather tendency for a pressure reading."""
    for upper, category, tendency in PRESSURE_CLASSES:
        if pressure_hpa < upper:
            return {"category": category, "weather_tendency": tendency}
    return {"category": "Very High", "weather_tendency": "Very stable, clear skies"}


def predict_weather_stability(current_pressure: float, trend: float) -> float:
    """Blend of pressure level (70 %) and tendency (30 %)."""
    return normalize_pressure(current_pressure) * 0.7 + normalize_pressure_trend(trend) * 0.3


def convert_pressure(pressure: float, from_unit: str, to_unit: str) -> float:
    """
    Convert pressure between hpa, mbar, kpa, inhg, mmhg and psi.

    Raises:
        ValueError: For an unknown unit
    """
    try:
        return pressure * HPA_PER_UNIT[from_unit.lower()] / HPA_PER_UNIT[to_unit.lower()]
    except KeyError as e:
        raise ValueError(f"Unknown pressure unit: {e.args[0]}")
