"""
Humidity and moisture normalization.

Covers relative humidity, vapor pressure deficit, absolute humidity, dew
point and precipitation, together with the Magnus-based physics helpers used
to derive them.
"""

import math
from typing import Dict

from ..core import constants
from .base import clamp_score

ABSOLUTE_HUMIDITY_MAX = 30.0  # g/m³

# Combustion humidity bands (%)
BURNING_OPTIMAL_MIN = 40.0
BURNING_OPTIMAL_MAX = 50.0
BURNING_GOOD = 65.0
BURNING_DAMP = 75.0
BURNING_VERY_DAMP = 85.0
BURNING_FOG = 95.0

# Precipitation bands (mm/h)
LIGHT_DRIZZLE = 1.0
LIGHT_RAIN = 3.0
MODERATE_RAIN = 7.0


# === PHYSICS HELPERS ===

def saturation_vapor_pressure(temp_c: float) -> float:
    """
    Saturation vapor pressure using the Magnus/Tetens formula.

    es = 0.6108 * exp(17.27 * T / (T + 237.3))

    Args:
        temp_c: Air temperature (°C)

    Returns:
        Saturation vapor pressure (kPa)
    """
    return constants.MAGNUS_A * math.exp(
        (constants.MAGNUS_B * temp_c) / (temp_c + constants.MAGNUS_C)
    )


def calculate_vpd(temp_c: float, relative_humidity: float) -> float:
    """
    Vapor pressure deficit (kPa), never negative.

    VPD = es * (1 - RH/100)
    """
    es = saturation_vapor_pressure(temp_c)
    ea = es * (relative_humidity / 100)
    return max(0.0, es - ea)


def calculate_dew_point(temp_c: float, relative_humidity: float) -> float:
    """
    Dew point from temperature and relative humidity (Magnus-Tetens).

    Raises:
        ValueError: If relative humidity is not positive
    """
    if relative_humidity <= 0:
        raise ValueError(f"Relative humidity must be positive, got {relative_humidity}")

    a = constants.DEW_POINT_A
    b = constants.DEW_POINT_B
    alpha = (a * temp_c) / (b + temp_c) + math.log(relative_humidity / 100)
    return (b * alpha) / (a - alpha)


def calculate_absolute_humidity(temp_c: float, relative_humidity: float) -> float:
    """Absolute humidity (g/m³) from the Bolton vapor pressure form."""
    es = constants.BOLTON_E0 * math.exp(
        (constants.BOLTON_B * temp_c) / (temp_c + constants.BOLTON_C)
    )
    e = es * (relative_humidity / 100)
    return (e * constants.WATER_VAPOR_FACTOR) / (temp_c + 273.15)


# === NORMALIZATION CURVES ===

def normalize_relative_humidity(rh: float, inverted: bool = True) -> float:
    """
    Score relative humidity.

    Inverted (drying): 100 up to 30 %, 80 at 50 %, 40 at 70 %, 0 from 90 %.
    Non-inverted (comfort): peaks at 60 % and falls to 0 at 90 %.
    """
    if inverted:
        if rh <= 30:
            return constants.MAX_SCORE
        if rh <= 50:
            score = 100 - (rh - 30) / 20 * 20
        elif rh <= 70:
            score = 80 - (rh - 50) / 20 * 40
        elif rh <= 90:
            score = 40 - (rh - 70) / 20 * 40
        else:
            score = 0.0
        return clamp_score(score)

    if rh < 30:
        score = rh / 30 * 50
    elif rh <= 60:
        score = 50 + (rh - 30) / 30 * 50
    else:
        score = 100 - (rh - 60) / 30 * 100
    return clamp_score(score)


def normalize_vapor_pressure_deficit(vpd_kpa: float) -> float:
    """
    Score vapor pressure deficit; higher deficit means faster drying.

    One-sided curve: 10 at 0.5 kPa, 30 at 1, 70 at 2, 95 at 3, saturating at 100.
    """
    if vpd_kpa <= 0.5:
        score = vpd_kpa * 20
    elif vpd_kpa <= 1.0:
        score = 10 + (vpd_kpa - 0.5) * 40
    elif vpd_kpa <= 2.0:
        score = 30 + (vpd_kpa - 1.0) * 40
    elif vpd_kpa <= 3.0:
        score = 70 + (vpd_kpa - 2.0) * 25
    else:
        score = 95 + (vpd_kpa - 3.0) * 2
    return clamp_score(score)


def normalize_absolute_humidity(abs_humidity: float) -> float:
    return clamp_score(100 - abs_humidity / ABSOLUTE_HUMIDITY_MAX * 100)


def normalize_dew_point(dew_point_c: float) -> float:
    """Lower dew points mean drier air."""
    if dew_point_c <= 0:
        return constants.MAX_SCORE
    if dew_point_c <= 10:
        score = 100 - dew_point_c * 2
    elif dew_point_c <= 15:
        score = 80 - (dew_point_c - 10) * 4
    elif dew_point_c <= 20:
        score = 60 - (dew_point_c - 15) * 8
    else:
        score = 20 - (dew_point_c - 20) * 2
    return clamp_score(score)


def normalize_burning_humidity(humidity: float) -> float:
    """
    Score humidity for stove ignition.

    Optimal between 40 and 50 %; fog above 95 % scores at most 10; very dry
    air keeps a floor of 75.
    """
    if humidity > BURNING_FOG:
        score = (100 - humidity) / (100 - BURNING_FOG) * 10
    elif humidity > BURNING_VERY_DAMP:
        score = 10 + (BURNING_FOG - humidity) / (BURNING_FOG - BURNING_VERY_DAMP) * 20
    elif humidity > BURNING_DAMP:
        score = 30 + (BURNING_VERY_DAMP - humidity) / (BURNING_VERY_DAMP - BURNING_DAMP) * 20
    elif humidity > BURNING_GOOD:
        score = 50 + (BURNING_DAMP - humidity) / (BURNING_DAMP - BURNING_GOOD) * 20
    elif humidity > BURNING_OPTIMAL_MAX:
        score = 70 + (BURNING_GOOD - humidity) / (BURNING_GOOD - BURNING_OPTIMAL_MAX) * 20
    elif humidity >= BURNING_OPTIMAL_MIN:
        score = 90 + (BURNING_OPTIMAL_MAX - humidity) / (
            BURNING_OPTIMAL_MAX - BURNING_OPTIMAL_MIN) * 10
    else:
        score = max(75.0, 85 - (BURNING_OPTIMAL_MIN - humidity) * 0.5)
    return clamp_score(score)


def normalize_precipitation(precipitation_mm: float) -> float:
    """Score hourly precipitation; dry is 100, heavy rain keeps a floor of 20."""
    if precipitation_mm <= 0:
        return constants.MAX_SCORE
    if precipitation_mm < LIGHT_DRIZZLE:
        score = 100 - precipitation_mm / LIGHT_DRIZZLE * 10
    elif precipitation_mm < LIGHT_RAIN:
        score = 90 - (precipitation_mm - LIGHT_DRIZZLE) / (LIGHT_RAIN - LIGHT_DRIZZLE) * 20
    elif precipitation_mm < MODERATE_RAIN:
        score = 70 - (precipitation_mm - LIGHT_RAIN) / (MODERATE_RAIN - LIGHT_RAIN) * 20
    else:
        score = max(20.0, 50 - (precipitation_mm - MODERATE_RAIN) / 10 * 20)
    return clamp_score(score)


def normalize_humidity(value: float, kind: str, inverted: bool = True) -> float:
    """
    Dispatch to the humidity curve for one kind of measurement.

    Args:
        value: Raw value
        kind: 'relative', 'absolute', 'vpd' or 'dewpoint'
        inverted: Passed to the relative humidity curve

    Raises:
        ValueError: For an unknown kind
    """
    if kind == "relative":
        return normalize_relative_humidity(value, inverted)
    if kind == "absolute":
        return normalize_absolute_humidity(value)
    if kind == "vpd":
        return normalize_vapor_pressure_deficit(value)
    if kind == "dewpoint":
        return normalize_dew_point(value)
    raise ValueError(f"Unknown humidity type: {kind}")


def classify_humidity(rh: float) -> Dict[str, str]:
    """Describe relative humidity in terms of drying potential."""
    if rh < 30:
        return {"level": "Very dry", "description": "Excellent drying conditions",
                "drying_potential": "excellent"}
    if rh < 50:
        return {"level": "Dry", "description": "Good drying conditions",
                "drying_potential": "good"}
    if rh < 70:
        return {"level": "Moderate", "description": "Acceptable drying conditions",
                "drying_potential": "moderate"}
    if rh < 85:
        return {"level": "Humid", "description": "Slow drying conditions",
                "drying_potential": "poor"}
    return {"level": "Very humid", "description": "Very poor drying conditions",
            "drying_potential": "very-poor"}
