"""
Weather and location data models.

Contains the immutable input records the engine scores.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class HourlyWeatherData:
    """One forecast hour, already normalized by the forecast collaborator."""

    time: datetime
    temperature: float  # °C
    humidity: float  # %
    dew_point: float  # °C
    wind_speed: float  # km/h
    wind_direction: float  # degrees (meteorological, wind from)
    pressure: float  # hPa
    cloud_cover: float  # %
    precipitation: float  # mm
    precipitation_probability: float  # %
    uv_index: float
    visibility: float  # km

    # Optional derived fields
    vapor_pressure_deficit: Optional[float] = None  # kPa
    wet_bulb_temperature: Optional[float] = None  # °C
    sunshine_duration: Optional[float] = None  # hours within this hour (0-1)
    shortwave_radiation: Optional[float] = None  # W/m²
    evapotranspiration: Optional[float] = None  # mm
    wind_gusts: Optional[float] = None  # km/h

    @property
    def dew_point_spread(self) -> float:
        """Temperature minus dew point (°C)."""
        return self.temperature - self.dew_point


@dataclass(frozen=True)
class Location:
    """Location with optional geographic context."""

    latitude: float
    longitude: float
    name: str = ""
    country: str = ""
    timezone: str = "UTC"
    coastal_distance: Optional[float] = None  # km
    elevation: Optional[float] = None  # m
    urban_density: Optional[str] = None  # urban, suburban, rural
    shelter_factor: Optional[float] = None  # 0 = exposed .. 1 = sheltered
    wind_exposure: Optional[str] = None  # high, medium, low
