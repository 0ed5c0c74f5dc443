"""
Temperature normalization.

Curves for air temperature, wet-bulb temperature, dew-point spread and the
indoor/outdoor temperature differential, plus the feels-like helpers
(wind chill and heat index).
"""

import math
from typing import Optional, Tuple

from ..core import constants
from .base import clamp_score, normalize_range

# Drying curve breakpoints (°C)
DRYING_MIN = 5.0
DRYING_OPTIMAL_LOW = 15.0
DRYING_OPTIMAL_HIGH = 25.0
DRYING_MAX = 35.0

# Wet bulb (°C)
WET_BULB_OPTIMAL = 5.0
WET_BULB_MAX = 25.0

# Stack-effect differential breakpoints (indoor minus outdoor, °C)
DIFFERENTIAL_VERY_DIFFICULT = 2.0
DIFFERENTIAL_MARGINAL = 5.0
DIFFERENTIAL_GOOD = 10.0
DIFFERENTIAL_EXCELLENT = 15.0


def normalize_drying_temperature(temp_c: float) -> float:
    """
    Score air temperature for outdoor drying.

    Plateau favouring 15-25 °C: 30 at 5 °C, 80-100 across the optimum,
    70 at 35 °C, then decaying by 2 points per degree.
    """
    if temp_c < DRYING_MIN:
        score = temp_c / DRYING_MIN * 30
    elif temp_c <= DRYING_OPTIMAL_LOW:
        score = 30 + (temp_c - DRYING_MIN) / (DRYING_OPTIMAL_LOW - DRYING_MIN) * 50
    elif temp_c <= DRYING_OPTIMAL_HIGH:
        score = 80 + (temp_c - DRYING_OPTIMAL_LOW) / (DRYING_OPTIMAL_HIGH - DRYING_OPTIMAL_LOW) * 20
    elif temp_c <= DRYING_MAX:
        score = 100 - (temp_c - DRYING_OPTIMAL_HIGH) / (DRYING_MAX - DRYING_OPTIMAL_HIGH) * 30
    else:
        score = 70 - (temp_c - DRYING_MAX) * 2
    return clamp_score(score)


def normalize_burning_temperature(temp_c: float) -> float:
    """Score outdoor temperature for lighting a stove; colder is better."""
    if temp_c <= 0:
        score = 100.0
    elif temp_c <= 10:
        score = 90 - temp_c * 1.5
    elif temp_c <= 20:
        score = 75 - (temp_c - 10) * 5
    else:
        score = 25 - (temp_c - 20) * 2
    return clamp_score(score)


def normalize_wet_bulb_temperature(wet_bulb_c: float) -> float:
    """Lower wet-bulb temperature means more evaporative potential."""
    if wet_bulb_c <= WET_BULB_OPTIMAL:
        return constants.MAX_SCORE
    if wet_bulb_c <= WET_BULB_MAX:
        return clamp_score(
            100 - (wet_bulb_c - WET_BULB_OPTIMAL) / (WET_BULB_MAX - WET_BULB_OPTIMAL) * 100
        )
    return constants.MIN_SCORE


def normalize_dew_point_spread(spread_c: float) -> float:
    """
    Score the temperature / dew point spread.

    Below 1 °C condensation is likely (0); 1-3 °C ramps to 50; 3-5 °C ramps
    to 100; wider spreads are ideal.
    """
    if spread_c < 1:
        return constants.MIN_SCORE
    if spread_c < 3:
        return clamp_score((spread_c - 1) * 25)
    if spread_c < 5:
        return clamp_score(50 + (spread_c - 3) * 25)
    return constants.MAX_SCORE


def normalize_temperature_differential(delta_t: float) -> float:
    """
    Score the indoor minus outdoor temperature difference driving chimney draft.

    Negative differentials (inversion) score 0. The curve passes 10 at 2 °C,
    30 at 5 °C, 60 at 10 °C and 80 at 15 °C, then approaches 100
    asymptotically.
    """
    if delta_t < 0:
        return constants.MIN_SCORE
    if delta_t < DIFFERENTIAL_VERY_DIFFICULT:
        score = delta_t / DIFFERENTIAL_VERY_DIFFICULT * 10
    elif delta_t < DIFFERENTIAL_MARGINAL:
        score = 10 + (delta_t - DIFFERENTIAL_VERY_DIFFICULT) / (
            DIFFERENTIAL_MARGINAL - DIFFERENTIAL_VERY_DIFFICULT) * 20
    elif delta_t < DIFFERENTIAL_GOOD:
        score = 30 + (delta_t - DIFFERENTIAL_MARGINAL) / (
            DIFFERENTIAL_GOOD - DIFFERENTIAL_MARGINAL) * 30
    elif delta_t < DIFFERENTIAL_EXCELLENT:
        score = 60 + (delta_t - DIFFERENTIAL_GOOD) / (
            DIFFERENTIAL_EXCELLENT - DIFFERENTIAL_GOOD) * 20
    else:
        score = 80 + 20 * (1 - math.exp(-(delta_t - DIFFERENTIAL_EXCELLENT) / 10))
    return clamp_score(score)


def normalize_temperature(
    temp_c: float,
    minimum: float,
    maximum: float,
    optimal: Optional[float] = None,
    optimal_range: Optional[Tuple[float, float]] = None
) -> float:
    """
    Generic temperature curve.

    Args:
        temp_c: Temperature (°C)
        minimum: Temperature scoring 0 on the low side
        maximum: Temperature scoring 0 on the high side (or 100 for a plain ramp)
        optimal: Single peak temperature
        optimal_range: (low, high) plateau scoring 100; takes precedence over optimal

    Returns:
        Score between 0 and 100

    Raises:
        ValueError: If maximum does not exceed minimum
    """
    if maximum <= minimum:
        raise ValueError(f"maximum must exceed minimum, got {minimum}..{maximum}")

    if optimal_range is not None:
        opt_low, opt_high = optimal_range
        if temp_c < minimum:
            return constants.MIN_SCORE
        if temp_c < opt_low:
            return clamp_score((temp_c - minimum) / (opt_low - minimum) * 100)
        if temp_c <= opt_high:
            return constants.MAX_SCORE
        if temp_c <= maximum:
            return clamp_score(100 - (temp_c - opt_high) / (maximum - opt_high) * 100)
        return constants.MIN_SCORE

    if optimal is not None:
        return normalize_range(temp_c, minimum, maximum, optimal)

    if temp_c <= minimum:
        return constants.MIN_SCORE
    if temp_c >= maximum:
        return constants.MAX_SCORE
    return clamp_score((temp_c - minimum) / (maximum - minimum) * 100)


def calculate_wind_chill(temp_c: float, wind_speed_kmh: float) -> float:
    """
    Wind chill temperature (Environment Canada / NWS 2001 formula).

    Only defined at or below 10 °C with wind above 4.8 km/h; otherwise the
    air temperature is returned unchanged.
    """
    if temp_c > constants.WIND_CHILL_MAX_TEMP or wind_speed_kmh <= constants.WIND_CHILL_MIN_SPEED:
        return temp_c

    v = wind_speed_kmh ** 0.16
    return 13.12 + 0.6215 * temp_c - 11.37 * v + 0.3965 * temp_c * v


def calculate_heat_index(temp_c: float, relative_humidity: float) -> float:
    """
    Heat index (NWS Rothfusz regression with Steadman's simple form below 80 °F).

    Args:
        temp_c: Air temperature (°C)
        relative_humidity: Relative humidity (%)

    Returns:
        Apparent temperature (°C)
    """
    t = temp_c * 9 / 5 + 32
    rh = relative_humidity

    simple = 0.5 * (t + 61.0 + (t - 68.0) * 1.2 + rh * 0.094)
    if (simple + t) / 2 < 80:
        return (simple - 32) * 5 / 9

    hi = (
        -42.379
        + 2.04901523 * t
        + 10.14333127 * rh
        - 0.22475541 * t * rh
        - 0.00683783 * t * t
        - 0.05481717 * rh * rh
        + 0.00122874 * t * t * rh
        + 0.00085282 * t * rh * rh
        - 0.00000199 * t * t * rh * rh
    )

    if rh < 13 and 80 <= t <= 112:
        hi -= (13 - rh) / 4 * math.sqrt((17 - abs(t - 95)) / 17)
    elif rh > 85 and 80 <= t <= 87:
        hi += (rh - 85) / 10 * (87 - t) / 5

    return (hi - 32) * 5 / 9


def calculate_feels_like(temp_c: float, wind_speed_kmh: float, relative_humidity: float) -> float:
    """Apparent temperature: wind chill when cold, heat index when hot and humid."""
    if temp_c <= constants.WIND_CHILL_MAX_TEMP and wind_speed_kmh > constants.WIND_CHILL_MIN_SPEED:
        return calculate_wind_chill(temp_c, wind_speed_kmh)
    if temp_c >= constants.HEAT_INDEX_MIN_TEMP and relative_humidity > constants.HEAT_INDEX_MIN_HUMIDITY:
        return calculate_heat_index(temp_c, relative_humidity)
    return temp_c


def calculate_wet_bulb_temperature(temp_c: float, relative_humidity: float) -> float:
    """
    Wet-bulb temperature from temperature and humidity (Stull 2011).

    Valid to within about 1 °C for 5-99 % humidity at sea-level pressure;
    humidity is clamped to 0-100 %.
    """
    rh = max(0.0, min(100.0, relative_humidity))
    return (
        temp_c * math.atan(0.151977 * math.sqrt(rh + 8.313659))
        + math.atan(temp_c + rh)
        - math.atan(rh - 1.676331)
        + 0.00391838 * rh ** 1.5 * math.atan(0.023101 * rh)
        - 4.686035
    )
