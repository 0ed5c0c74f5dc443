"""
Forecast conversion module.

Turns an Open-Meteo style hourly forecast (one array per variable, keyed by
the API's field names) into HourlyWeatherData records in engine units.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core import constants
from ..core.date_utils import DateUtils
from ..models import HourlyWeatherData, Location
from ..normalization import calculate_dew_point

# Engine field -> forecast field(s), first present wins
FIELD_MAP = {
    "temperature": ("temperature_2m", "temperature"),
    "humidity": ("relative_humidity_2m", "relative_humidity", "humidity"),
    "dew_point": ("dew_point_2m", "dew_point"),
    "wind_speed": ("wind_speed_10m", "wind_speed"),
    "wind_direction": ("wind_direction_10m", "wind_direction"),
    "pressure": ("surface_pressure", "pressure_msl", "pressure"),
    "cloud_cover": ("cloud_cover",),
    "precipitation": ("precipitation",),
    "precipitation_probability": ("precipitation_probability",),
    "uv_index": ("uv_index",),
    "visibility": ("visibility",),
    "vapor_pressure_deficit": ("vapour_pressure_deficit", "vapor_pressure_deficit"),
    "wet_bulb_temperature": ("wet_bulb_temperature_2m", "wet_bulb_temperature"),
    "sunshine_duration": ("sunshine_duration",),
    "shortwave_radiation": ("shortwave_radiation",),
    "evapotranspiration": ("et0_fao_evapotranspiration", "evapotranspiration"),
    "wind_gusts": ("wind_gusts_10m", "wind_gusts"),
}

OPTIONAL_FIELDS = (
    "vapor_pressure_deficit",
    "wet_bulb_temperature",
    "sunshine_duration",
    "shortwave_radiation",
    "evapotranspiration",
    "wind_gusts",
)

# Defaults for missing required values
FIELD_DEFAULTS = {
    "pressure": constants.DEFAULT_PRESSURE,
    "visibility": constants.DEFAULT_VISIBILITY,
    "wind_direction": constants.DEFAULT_WIND_DIRECTION,
}

# Units the API reports when none are given
DEFAULT_UNITS = {
    "temperature": "°C",
    "wind_speed": "km/h",
    "pressure": "hPa",
    "visibility": "m",
    "sunshine_duration": "s",
}

SECONDS_PER_HOUR = 3600


class ForecastConverter:
    """Convert raw hourly forecasts into engine records."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize forecast converter.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.date_utils = DateUtils(self.logger)

    def convert_hourly(
        self,
        payload: Dict[str, Any],
        location: Location,
        units: Optional[Dict[str, str]] = None
    ) -> List[HourlyWeatherData]:
        """
        Convert an hourly forecast payload.

        Accepts either the full API response (with ``hourly`` and optionally
        ``hourly_units``) or the ``hourly`` block itself.

        Args:
            payload: Forecast payload
            location: Location whose timezone applies to naive timestamps
            units: Unit overrides by engine field; take precedence over ``hourly_units``

        Returns:
            One HourlyWeatherData per timestamp, in payload order

        Raises:
            ValueError: If the payload has no ``time`` array
        """
        hourly = payload.get("hourly", payload)
        times = hourly.get("time")
        if not times:
            raise ValueError("Forecast payload has no hourly 'time' array")

        source_units = self._resolve_units(payload.get("hourly_units", {}), units)
        self.logger.info(f"Converting {len(times)} forecast hours for {location.name or 'location'}")
        self.logger.debug(f"Forecast units: {source_units}")

        columns = {field: self._column(hourly, field, len(times)) for field in FIELD_MAP}

        records = []
        for index, timestamp in enumerate(times):
            values = {field: column[index] for field, column in columns.items()}
            records.append(self._convert_hour(timestamp, values, location, source_units))

        return records

    def _resolve_units(
        self,
        hourly_units: Dict[str, str],
        overrides: Optional[Dict[str, str]]
    ) -> Dict[str, str]:
        resolved = dict(DEFAULT_UNITS)
        for field in DEFAULT_UNITS:
            for source_name in FIELD_MAP[field]:
                if source_name in hourly_units:
                    resolved[field] = hourly_units[source_name]
                    break
        if overrides:
            resolved.update(overrides)
        return resolved

    @staticmethod
    def _column(hourly: Dict[str, Any], field: str, length: int) -> List[Any]:
        for source_name in FIELD_MAP[field]:
            if source_name in hourly:
                column = list(hourly[source_name])
                # Short columns are padded with nulls
                return column + [None] * (length - len(column))
        return [None] * length

    def _convert_hour(
        self,
        timestamp: str,
        values: Dict[str, Any],
        location: Location,
        units: Dict[str, str]
    ) -> HourlyWeatherData:
        fields: Dict[str, Any] = {}

        for field in FIELD_MAP:
            value = values[field]
            if field in OPTIONAL_FIELDS:
                fields[field] = None if value is None else float(value)
            elif value is None:
                fields[field] = FIELD_DEFAULTS.get(field, 0.0)
            else:
                fields[field] = float(value)

        if values["temperature"] is not None:
            fields["temperature"] = self.convert_temperature(fields["temperature"], units["temperature"])
        if values["wind_speed"] is not None:
            fields["wind_speed"] = self.convert_wind_speed(fields["wind_speed"], units["wind_speed"])
        if fields["wind_gusts"] is not None:
            fields["wind_gusts"] = self.convert_wind_speed(fields["wind_gusts"], units["wind_speed"])
        if values["pressure"] is not None:
            fields["pressure"] = self.convert_pressure(fields["pressure"], units["pressure"])
        if values["visibility"] is not None and units["visibility"].lower() in ("m", "meters"):
            fields["visibility"] = fields["visibility"] / 1000
        if fields["sunshine_duration"] is not None and units["sunshine_duration"].lower() in ("s", "seconds"):
            fields["sunshine_duration"] = fields["sunshine_duration"] / SECONDS_PER_HOUR

        if values["dew_point"] is None:
            fields["dew_point"] = self._derive_dew_point(fields["temperature"], fields["humidity"])

        return HourlyWeatherData(
            time=self.date_utils.parse_timestamp(timestamp, location.timezone),
            **fields
        )

    def _derive_dew_point(self, temperature: float, humidity: float) -> float:
        if humidity <= 0:
            self.logger.warning("Cannot derive dew point at 0% humidity, using temperature")
            return temperature
        return calculate_dew_point(temperature, humidity)

    def convert_temperature(self, value: float, from_unit: str) -> float:
        """
        Convert temperature to Celsius.

        Args:
            value: Temperature value
            from_unit: Source unit (°C, °F, K and their spelled-out names)

        Returns:
            Temperature in °C
        """
        unit = from_unit.lower()
        if unit in ["fahrenheit", "f", "°f"]:
            return (value - 32) * 5 / 9
        elif unit in ["kelvin", "k", "°k"]:
            return value - 273.15
        return value

    def convert_wind_speed(self, value: float, from_unit: str) -> float:
        """
        Convert wind speed to km/h.

        Args:
            value: Wind speed value
            from_unit: Source unit (km/h, m/s, mph, knots)

        Returns:
            Wind speed in km/h
        """
        unit = from_unit.lower()
        if unit in ["m/s", "ms"]:
            return value * 3.6
        elif unit in ["mph", "mi/h", "mp/h"]:
            return value * 1.609344
        elif unit in ["knots", "kn", "kt"]:
            return value * 1.852
        return value

    def convert_pressure(self, value: float, from_unit: str) -> float:
        """
        Convert air pressure to hPa.

        Args:
            value: Pressure value
            from_unit: Source unit (hPa, mbar, kPa, Pa, inHg, mmHg)

        Returns:
            Pressure in hPa
        """
        unit = from_unit.lower()
        if unit in ["kpa"]:
            return value * 10
        elif unit in ["pa", "pascal"]:
            return value / 100
        elif unit in ["inhg"]:
            return value * 33.8639
        elif unit in ["mmhg", "torr"]:
            return value * 1.33322
        return value

    @staticmethod
    def to_location(data: Dict[str, Any]) -> Location:
        """
        Build a Location from a plain mapping.

        Accepts ``lat``/``lon`` as aliases for ``latitude``/``longitude``.

        Raises:
            ValueError: If coordinates are missing
        """
        latitude = data.get("latitude", data.get("lat"))
        longitude = data.get("longitude", data.get("lon"))
        if latitude is None or longitude is None:
            raise ValueError("Location requires latitude and longitude")

        return Location(
            latitude=float(latitude),
            longitude=float(longitude),
            name=data.get("name", ""),
            country=data.get("country", ""),
            timezone=data.get("timezone", "UTC"),
            coastal_distance=data.get("coastal_distance"),
            elevation=data.get("elevation"),
            urban_density=data.get("urban_density"),
            shelter_factor=data.get("shelter_factor"),
            wind_exposure=data.get("wind_exposure"),
        )
