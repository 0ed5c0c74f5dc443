"""
Forecast processing module.

Converts raw forecasts into engine records and checks their quality.
"""

from .converter import ForecastConverter
from .validator import DataValidator

__all__ = [
    "ForecastConverter",
    "DataValidator",
]
