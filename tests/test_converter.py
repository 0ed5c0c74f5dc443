"""
Tests for forecast conversion and validation.
"""

from datetime import datetime, timedelta

import pytest  # type: ignore
import pytz

from weather_engine.core import constants
from weather_engine.models import Location
from weather_engine.normalization import calculate_dew_point
from weather_engine.processing import DataValidator, ForecastConverter


@pytest.fixture
def converter():
    return ForecastConverter()


@pytest.fixture
def minimal_payload():
    """Two hours with only the basic variables, some of them null."""
    return {
        "hourly": {
            "time": ["2024-03-01T10:00", "2024-03-01T11:00"],
            "temperature_2m": [10.0, None],
            "relative_humidity_2m": [60, 0],
            "wind_speed_10m": [12.0, 8.0],
            "precipitation": [0.0, None],
        }
    }


class TestForecastConversion:
    """Test conversion of Open-Meteo style payloads."""

    def test_fixture_day(self, converter, forecast_payload, london):
        hours = converter.convert_hourly(forecast_payload, london)

        assert len(hours) == 24
        assert hours[0].time == datetime(2024, 6, 15, 0, 0, tzinfo=pytz.UTC)
        assert all(b.time - a.time == timedelta(hours=1) for a, b in zip(hours, hours[1:]))

        midday = hours[12]
        assert midday.temperature == 20.0
        assert midday.visibility == 24.0
        assert midday.sunshine_duration == 1.0
        assert midday.pressure == 1014.4
        assert hours[0].precipitation > 0

    def test_hourly_block_accepted(self, converter, forecast_payload, london):
        hours = converter.convert_hourly(forecast_payload["hourly"], london)
        assert len(hours) == 24
        # Without hourly_units, visibility is still taken as metres
        assert hours[12].visibility == 24.0

    def test_local_timezone_applied(self, converter, forecast_payload):
        paris = Location(latitude=48.85, longitude=2.35, name="Paris", timezone="Europe/Paris")
        hours = converter.convert_hourly(forecast_payload, paris)
        assert hours[0].time.utcoffset() == timedelta(hours=2)
        assert hours[0].time.astimezone(pytz.UTC).hour == 22

    def test_defaults_for_missing_values(self, converter, minimal_payload, london):
        first, second = converter.convert_hourly(minimal_payload, london)

        assert first.pressure == constants.DEFAULT_PRESSURE
        assert first.visibility == constants.DEFAULT_VISIBILITY
        assert first.wind_direction == constants.DEFAULT_WIND_DIRECTION
        assert first.cloud_cover == 0.0
        assert first.shortwave_radiation is None
        assert first.vapor_pressure_deficit is None

        assert second.temperature == 0.0
        assert second.precipitation == 0.0

    def test_dew_point_derived(self, converter, minimal_payload, london):
        first, second = converter.convert_hourly(minimal_payload, london)
        assert abs(first.dew_point - calculate_dew_point(10.0, 60.0)) < 1e-9
        # 0 % humidity falls back to the air temperature
        assert second.dew_point == second.temperature

    def test_short_columns_padded(self, converter, london):
        payload = {"time": ["2024-03-01T10:00", "2024-03-01T11:00"], "temperature_2m": [5.0]}
        hours = converter.convert_hourly(payload, london)
        assert hours[1].temperature == 0.0

    def test_missing_time_array(self, converter, london):
        with pytest.raises(ValueError, match="time"):
            converter.convert_hourly({"hourly": {"temperature_2m": [1.0]}}, london)

    def test_unit_overrides(self, converter, london):
        payload = {
            "time": ["2024-03-01T10:00"],
            "temperature_2m": [50.0],
            "wind_speed_10m": [5.0],
            "wind_gusts_10m": [10.0],
            "pressure_msl": [101.3],
            "visibility": [12.0],
        }
        units = {"temperature": "°F", "wind_speed": "m/s", "pressure": "kPa", "visibility": "km"}
        hour = converter.convert_hourly(payload, london, units)[0]

        assert abs(hour.temperature - 10.0) < 1e-9
        assert abs(hour.wind_speed - 18.0) < 1e-9
        assert abs(hour.wind_gusts - 36.0) < 1e-9
        assert abs(hour.pressure - 1013.0) < 1e-9
        assert hour.visibility == 12.0


class TestUnitConversions:
    """Test individual unit conversions."""

    def test_temperature(self, converter):
        assert converter.convert_temperature(20.0, "°C") == 20.0
        assert abs(converter.convert_temperature(212.0, "fahrenheit") - 100.0) < 1e-9
        assert abs(converter.convert_temperature(273.15, "K")) < 1e-9

    def test_wind_speed(self, converter):
        assert converter.convert_wind_speed(10.0, "km/h") == 10.0
        assert abs(converter.convert_wind_speed(10.0, "m/s") - 36.0) < 1e-9
        assert abs(converter.convert_wind_speed(10.0, "mph") - 16.09344) < 1e-9
        assert abs(converter.convert_wind_speed(10.0, "kn") - 18.52) < 1e-9

    def test_pressure(self, converter):
        assert converter.convert_pressure(1013.0, "hPa") == 1013.0
        assert converter.convert_pressure(101300.0, "Pa") == 1013.0
        assert abs(converter.convert_pressure(29.92, "inHg") - 1013.21) < 0.01


class TestToLocation:

    def test_aliases(self):
        location = ForecastConverter.to_location(
            {"lat": 50.8, "lon": -0.14, "name": "Brighton", "coastal_distance": 0.5}
        )
        assert location.latitude == 50.8
        assert location.longitude == -0.14
        assert location.timezone == "UTC"
        assert location.coastal_distance == 0.5

    def test_missing_coordinates(self):
        with pytest.raises(ValueError, match="latitude and longitude"):
            ForecastConverter.to_location({"name": "Nowhere"})


class TestDataValidator:
    """Test forecast quality checks."""

    @pytest.fixture
    def validator(self):
        return DataValidator()

    def test_valid_hour(self, validator, make_hour):
        is_valid, errors = validator.validate_hour(make_hour())
        assert is_valid
        assert errors == []

    def test_out_of_range(self, validator, make_hour):
        is_valid, errors = validator.validate_hour(make_hour(humidity=120.0, pressure=700.0))
        assert not is_valid
        assert any("humidity" in e for e in errors)
        assert any("pressure" in e for e in errors)

    def test_dew_point_above_temperature(self, validator, make_hour):
        _, errors = validator.validate_hour(make_hour(temperature=10.0, dew_point=12.0))
        assert len(errors) == 1
        assert "Dew point" in errors[0]

    def test_optional_fields(self, validator, make_hour):
        _, errors = validator.validate_hour(make_hour(sunshine_duration=1.5, shortwave_radiation=-3.0))
        assert len(errors) == 2

    def test_fixture_series_is_clean(self, validator, converter, forecast_payload, london):
        is_valid, errors = validator.validate_series(converter.convert_hourly(forecast_payload, london))
        assert is_valid, errors

    def test_out_of_order(self, validator, make_hour):
        is_valid, errors = validator.validate_series([make_hour(1), make_hour(0)])
        assert not is_valid
        assert errors[0].startswith("Hours out of order")
