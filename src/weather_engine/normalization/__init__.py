"""
Normalization library.

Pure functions mapping one raw meteorological quantity to a 0-100
suitability score. A quantity can have several curves, one per application,
so curves are looked up by ``(quantity, application)``.
"""

from typing import Callable, Dict, Tuple

from .base import clamp_score, normalize_range
from .temperature import (
    normalize_drying_temperature,
    normalize_burning_temperature,
    normalize_wet_bulb_temperature,
    normalize_dew_point_spread,
    normalize_temperature_differential,
    normalize_temperature,
    calculate_wind_chill,
    calculate_heat_index,
    calculate_feels_like,
    calculate_wet_bulb_temperature,
)
from .humidity import (
    saturation_vapor_pressure,
    calculate_vpd,
    calculate_dew_point,
    calculate_absolute_humidity,
    normalize_relative_humidity,
    normalize_vapor_pressure_deficit,
    normalize_absolute_humidity,
    normalize_dew_point,
    normalize_burning_humidity,
    normalize_precipitation,
    normalize_humidity,
    classify_humidity,
)
from .wind import (
    normalize_drying_wind_speed,
    normalize_burning_wind_speed,
    normalize_wind_speed,
    normalize_wind_direction,
    normalize_wind_gusts,
    calculate_effective_wind_speed,
    angular_difference,
    beaufort_scale,
    convert_wind_speed,
    get_compass_bearing,
)
from .pressure import (
    normalize_pressure,
    normalize_pressure_trend,
    normalize_burning_pressure,
    calculate_pressure_trend,
    adjust_pressure_for_elevation,
    calculate_altimeter_setting,
    classify_pressure,
    predict_weather_stability,
    convert_pressure,
)
from .radiation import (
    normalize_shortwave_radiation,
    normalize_sunshine_duration,
    normalize_uv_index,
    normalize_cloud_cover,
    normalize_evapotranspiration,
    calculate_clear_sky_index,
    estimate_clear_sky_radiation,
    calculate_par,
    calculate_day_length,
    is_daylight,
    solar_time,
    classify_sunshine,
)

Normalizer = Callable[[float], float]

NORMALIZERS: Dict[Tuple[str, str], Normalizer] = {
    ("temperature", "drying"): normalize_drying_temperature,
    ("temperature", "burning"): normalize_burning_temperature,
    ("wet_bulb", "drying"): normalize_wet_bulb_temperature,
    ("dew_point_spread", "drying"): normalize_dew_point_spread,
    ("temperature_differential", "burning"): normalize_temperature_differential,
    ("relative_humidity", "drying"): normalize_relative_humidity,
    ("relative_humidity", "burning"): normalize_burning_humidity,
    ("vpd", "drying"): normalize_vapor_pressure_deficit,
    ("absolute_humidity", "drying"): normalize_absolute_humidity,
    ("dew_point", "drying"): normalize_dew_point,
    ("precipitation", "burning"): normalize_precipitation,
    ("wind_speed", "drying"): normalize_drying_wind_speed,
    ("wind_speed", "burning"): normalize_burning_wind_speed,
    ("wind_direction", "drying"): normalize_wind_direction,
    ("pressure", "stability"): normalize_pressure,
    ("pressure", "burning"): normalize_burning_pressure,
    ("pressure_trend", "stability"): normalize_pressure_trend,
    ("shortwave_radiation", "drying"): normalize_shortwave_radiation,
    ("sunshine_duration", "drying"): normalize_sunshine_duration,
    ("uv_index", "drying"): normalize_uv_index,
    ("cloud_cover", "drying"): normalize_cloud_cover,
    ("evapotranspiration", "drying"): normalize_evapotranspiration,
}


def get_normalizer(quantity: str, application: str) -> Normalizer:
    """
    Look up the curve for a quantity in one application.

    Raises:
        ValueError: If no curve is registered for the pair
    """
    try:
        return NORMALIZERS[(quantity, application)]
    except KeyError:
        available = sorted(app for q, app in NORMALIZERS if q == quantity)
        raise ValueError(
            f"No normalizer for quantity '{quantity}' in application '{application}'"
            + (f". Available: {', '.join(available)}" if available else "")
        )


def normalize(quantity: str, application: str, value: float) -> float:
    """Score ``value`` with the registered curve."""
    return get_normalizer(quantity, application)(value)


__all__ = [
    "NORMALIZERS",
    "get_normalizer",
    "normalize",
    "clamp_score",
    "normalize_range",
    "normalize_drying_temperature",
    "normalize_burning_temperature",
    "normalize_wet_bulb_temperature",
    "normalize_dew_point_spread",
    "normalize_temperature_differential",
    "normalize_temperature",
    "calculate_wind_chill",
    "calculate_heat_index",
    "calculate_feels_like",
    "calculate_wet_bulb_temperature",
    "saturation_vapor_pressure",
    "calculate_vpd",
    "calculate_dew_point",
    "calculate_absolute_humidity",
    "normalize_relative_humidity",
    "normalize_vapor_pressure_deficit",
    "normalize_absolute_humidity",
    "normalize_dew_point",
    "normalize_burning_humidity",
    "normalize_precipitation",
    "normalize_humidity",
    "classify_humidity",
    "normalize_drying_wind_speed",
    "normalize_burning_wind_speed",
    "normalize_wind_speed",
    "normalize_wind_direction",
    "normalize_wind_gusts",
    "calculate_effective_wind_speed",
    "angular_difference",
    "beaufort_scale",
    "convert_wind_speed",
    "get_compass_bearing",
    "normalize_pressure",
    "normalize_pressure_trend",
    "normalize_burning_pressure",
    "calculate_pressure_trend",
    "adjust_pressure_for_elevation",
    "calculate_altimeter_setting",
    "classify_pressure",
    "predict_weather_stability",
    "convert_pressure",
    "normalize_shortwave_radiation",
    "normalize_sunshine_duration",
    "normalize_uv_index",
    "normalize_cloud_cover",
    "normalize_evapotranspiration",
    "calculate_clear_sky_index",
    "estimate_clear_sky_radiation",
    "calculate_par",
    "calculate_day_length",
    "is_daylight",
    "solar_time",
    "classify_sunshine",
]
