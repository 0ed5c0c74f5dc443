"""
Tests for the normalization library.

Checks physics helpers against hand-computed values and that every curve
stays within 0-100 for extreme inputs.
"""

import math
from datetime import datetime

import pytest  # type: ignore
import pytz

from weather_engine.normalization import (
    NORMALIZERS,
    get_normalizer,
    normalize,
    normalize_range,
    saturation_vapor_pressure,
    calculate_vpd,
    calculate_dew_point,
    calculate_absolute_humidity,
    calculate_wind_chill,
    calculate_heat_index,
    calculate_feels_like,
    calculate_wet_bulb_temperature,
    normalize_drying_temperature,
    normalize_dew_point_spread,
    normalize_temperature_differential,
    normalize_temperature,
    normalize_vapor_pressure_deficit,
    normalize_relative_humidity,
    normalize_burning_humidity,
    normalize_precipitation,
    normalize_humidity,
    classify_humidity,
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
    normalize_burning_pressure,
    calculate_pressure_trend,
    classify_pressure,
    convert_pressure,
    normalize_shortwave_radiation,
    normalize_sunshine_duration,
    calculate_day_length,
    is_daylight,
    solar_time,
)

EXTREME_VALUES = [-1e6, -500.0, -50.0, -1.0, 0.0, 0.5, 1.0, 50.0, 99.9, 100.0, 1500.0, 1e6]


class TestPhysicsHelpers:
    """Test derived meteorological quantities."""

    def test_saturation_vapor_pressure(self):
        """Magnus formula at 33 °C."""
        es = saturation_vapor_pressure(33.0)
        assert abs(es - 5.030148) < 0.001, f"Expected ~5.030 kPa, got {es}"

    def test_vpd_at_twenty_degrees_half_humidity(self):
        """VPD at 20 °C / 50 % is half the saturation pressure."""
        vpd = calculate_vpd(20.0, 50.0)
        assert abs(vpd - 1.169) < 0.001, f"Expected ~1.169 kPa, got {vpd}"

    def test_vpd_never_negative(self):
        """Supersaturated input clamps to zero."""
        assert calculate_vpd(15.0, 105.0) == 0.0

    def test_dew_point(self):
        """Dew point at 20 °C / 50 %."""
        dew_point = calculate_dew_point(20.0, 50.0)
        assert abs(dew_point - 9.254) < 0.01, f"Expected ~9.25 °C, got {dew_point}"

    def test_dew_point_at_saturation_equals_temperature(self):
        assert abs(calculate_dew_point(12.0, 100.0) - 12.0) < 1e-9

    def test_dew_point_rejects_zero_humidity(self):
        with pytest.raises(ValueError):
            calculate_dew_point(20.0, 0.0)

    def test_absolute_humidity(self):
        """About 8.6 g/m³ at 20 °C / 50 %."""
        absolute = calculate_absolute_humidity(20.0, 50.0)
        assert 8.0 < absolute < 9.5, f"Unexpected absolute humidity {absolute}"

    def test_wind_chill(self):
        """Environment Canada formula at -10 °C, 30 km/h."""
        chill = calculate_wind_chill(-10.0, 30.0)
        assert abs(chill - (-19.5)) < 0.1, f"Expected ~-19.5 °C, got {chill}"

    def test_wind_chill_not_applied_when_warm_or_calm(self):
        assert calculate_wind_chill(15.0, 30.0) == 15.0
        assert calculate_wind_chill(-5.0, 4.0) == -5.0

    def test_heat_index(self):
        """32 °C at 70 % feels around 40-41 °C."""
        heat_index = calculate_heat_index(32.0, 70.0)
        assert 39 < heat_index < 42, f"Unexpected heat index {heat_index}"

    def test_feels_like_neutral_band(self):
        """Mild temperatures are returned unchanged."""
        assert calculate_feels_like(18.0, 20.0, 60.0) == 18.0

    def test_wet_bulb_below_air_temperature(self):
        wet_bulb = calculate_wet_bulb_temperature(20.0, 50.0)
        assert 13.0 < wet_bulb < 14.5, f"Unexpected wet bulb {wet_bulb}"
        assert calculate_wet_bulb_temperature(20.0, 30.0) < wet_bulb

    def test_effective_wind_speed(self):
        assert abs(calculate_effective_wind_speed(20.0, 0.5) - 14.0) < 1e-9

    def test_pressure_trend_rejects_zero_interval(self):
        with pytest.raises(ValueError):
            calculate_pressure_trend(1015.0, 1012.0, 0)

    def test_pressure_trend(self):
        assert abs(calculate_pressure_trend(1015.0, 1012.0, 3) - 1.0) < 1e-9


class TestCurves:
    """Test individual normalization curves."""

    def test_drying_temperature_breakpoints(self):
        assert abs(normalize_drying_temperature(5.0) - 30.0) < 1e-9
        assert abs(normalize_drying_temperature(15.0) - 80.0) < 1e-9
        assert abs(normalize_drying_temperature(25.0) - 100.0) < 1e-9
        assert abs(normalize_drying_temperature(35.0) - 70.0) < 1e-9

    def test_dew_point_spread(self):
        """Below 1 °C is a condensation risk."""
        assert normalize_dew_point_spread(0.99) == 0.0
        assert normalize_dew_point_spread(1.0) == 0.0
        assert abs(normalize_dew_point_spread(3.0) - 50.0) < 1e-9
        assert normalize_dew_point_spread(8.0) == 100.0

    def test_temperature_differential_breakpoints(self):
        assert normalize_temperature_differential(-3.0) == 0.0
        assert abs(normalize_temperature_differential(2.0) - 10.0) < 1e-9
        assert abs(normalize_temperature_differential(5.0) - 30.0) < 1e-9
        assert abs(normalize_temperature_differential(10.0) - 60.0) < 1e-9
        assert abs(normalize_temperature_differential(15.0) - 80.0) < 1e-9
        assert 95 < normalize_temperature_differential(50.0) <= 100

    def test_vpd_curve_is_monotonic(self):
        scores = [normalize_vapor_pressure_deficit(v / 10) for v in range(0, 50)]
        assert scores == sorted(scores), "VPD score should never fall as VPD rises"

    def test_relative_humidity_inverted(self):
        assert normalize_relative_humidity(20.0) > normalize_relative_humidity(80.0)
        assert normalize_relative_humidity(40.0, inverted=False) < normalize_relative_humidity(
            60.0, inverted=False
        )

    def test_burning_humidity_optimum(self):
        assert normalize_burning_humidity(45.0) > normalize_burning_humidity(80.0)
        assert normalize_burning_humidity(98.0) <= 10.0
        assert normalize_burning_humidity(10.0) >= 75.0

    def test_precipitation(self):
        assert normalize_precipitation(0.0) == 100.0
        assert normalize_precipitation(2.0) < normalize_precipitation(0.5)
        assert normalize_precipitation(100.0) == 20.0

    def test_drying_wind_peak(self):
        assert abs(normalize_drying_wind_speed(25.0) - 100.0) < 1e-9
        assert normalize_drying_wind_speed(5.0) < normalize_drying_wind_speed(15.0)
        assert normalize_drying_wind_speed(60.0) < normalize_drying_wind_speed(40.0)

    def test_burning_wind_calm_still_drafts(self):
        assert 60 <= normalize_burning_wind_speed(0.0) <= 70
        assert normalize_burning_wind_speed(100.0) == 20.0

    def test_wind_direction(self):
        assert normalize_wind_direction(225.0) == 100.0
        assert abs(normalize_wind_direction(45.0) - 50.0) < 1e-9

    def test_angular_difference_wraps(self):
        assert angular_difference(350.0, 10.0) == 20.0
        assert angular_difference(10.0, 190.0) == 180.0

    def test_gusts(self):
        assert normalize_wind_gusts(20.0, 22.0) == 100.0
        assert normalize_wind_gusts(10.0, 40.0) == 0.0

    def test_burning_pressure_rises_with_pressure(self):
        assert normalize_burning_pressure(1025.0) > normalize_burning_pressure(995.0)
        assert normalize_burning_pressure(950.0) == 0.0

    def test_shortwave_saturates(self):
        assert normalize_shortwave_radiation(900.0) == 100.0
        assert abs(normalize_shortwave_radiation(150.0) - 50.0) < 1e-9

    def test_sunshine_duration_reference(self):
        assert abs(normalize_sunshine_duration(6.0) - 50.0) < 1e-9
        assert normalize_sunshine_duration(0.5, max_possible=1.0) == 50.0

    def test_generic_curves(self):
        assert normalize_range(5.0, 0.0, 10.0) == 50.0
        assert normalize_range(5.0, 0.0, 10.0, optimal=5.0) == 100.0
        assert normalize_temperature(20.0, 5.0, 35.0, optimal_range=(15.0, 25.0)) == 100.0
        assert normalize_wind_speed(20.0, (15.0, 25.0), 5.0, 50.0) == 90.0

    def test_normalize_range_rejects_inverted_bounds(self):
        with pytest.raises(ValueError):
            normalize_range(1.0, 10.0, 0.0)

    def test_temperature_peak_at_bound(self):
        assert normalize_temperature(5.0, 5.0, 35.0, optimal=5.0) == 100.0
        assert normalize_temperature(2.0, 5.0, 35.0, optimal=5.0) == 0.0
        assert normalize_temperature(20.0, 5.0, 35.0, optimal=5.0) == 50.0
        assert normalize_temperature(40.0, 5.0, 35.0, optimal=35.0) == 0.0
        assert normalize_temperature(5.0, 5.0, 35.0, optimal_range=(5.0, 20.0)) == 100.0

    def test_temperature_rejects_inverted_bounds(self):
        with pytest.raises(ValueError, match="maximum must exceed minimum"):
            normalize_temperature(10.0, 20.0, 20.0, optimal=20.0)

    def test_normalize_humidity_dispatch(self):
        assert normalize_humidity(50.0, "relative") == normalize_relative_humidity(50.0)
        with pytest.raises(ValueError):
            normalize_humidity(50.0, "specific")


class TestTotality:
    """Every registered curve maps any finite input into [0, 100]."""

    @pytest.mark.parametrize("key", sorted(NORMALIZERS))
    def test_registered_curve_bounded(self, key):
        curve = NORMALIZERS[key]
        for value in EXTREME_VALUES:
            score = curve(value)
            assert 0.0 <= score <= 100.0, f"{key} gave {score} for {value}"
            assert not math.isnan(score), f"{key} gave NaN for {value}"


class TestRegistry:
    """Test the (quantity, application) registry."""

    def test_lookup(self):
        assert get_normalizer("wind_speed", "burning") is normalize_burning_wind_speed

    def test_same_quantity_different_curves(self):
        assert normalize("wind_speed", "drying", 2.0) != normalize("wind_speed", "burning", 2.0)

    def test_expected_keys_registered(self):
        expected = {
            ("temperature", "drying"), ("temperature", "burning"),
            ("wet_bulb", "drying"), ("dew_point_spread", "drying"),
            ("temperature_differential", "burning"),
            ("relative_humidity", "drying"), ("relative_humidity", "burning"),
            ("vpd", "drying"), ("precipitation", "burning"),
            ("wind_speed", "drying"), ("wind_speed", "burning"),
            ("pressure", "stability"), ("pressure", "burning"),
            ("shortwave_radiation", "drying"), ("sunshine_duration", "drying"),
        }
        assert expected <= set(NORMALIZERS)

    def test_unknown_application_lists_available(self):
        with pytest.raises(ValueError, match="drying"):
            get_normalizer("vpd", "burning")

    def test_unknown_quantity(self):
        with pytest.raises(ValueError):
            get_normalizer("snow_depth", "drying")


class TestConversionsAndClassification:
    """Test unit conversion and descriptive helpers."""

    def test_convert_wind_speed(self):
        assert abs(convert_wind_speed(10.0, "ms", "kmh") - 36.0) < 1e-9
        with pytest.raises(ValueError):
            convert_wind_speed(10.0, "furlongs", "kmh")

    def test_convert_pressure(self):
        assert abs(convert_pressure(101.325, "kpa", "hpa") - 1013.25) < 1e-6

    def test_beaufort(self):
        assert beaufort_scale(0.5)["force"] == 0
        assert beaufort_scale(200.0)["force"] == 12

    def test_compass(self):
        assert get_compass_bearing(0.0) == "N"
        assert get_compass_bearing(225.0) == "SW"
        assert get_compass_bearing(359.0) == "N"

    def test_classify(self):
        assert classify_humidity(20.0)["drying_potential"] == "excellent"
        assert "category" in classify_pressure(1030.0)


class TestDaylight:
    """Test FAO-56 day length and the daylight check."""

    def test_equinox_is_about_twelve_hours(self):
        length = calculate_day_length(0.0, 80)
        assert abs(length - 12.0) < 0.1, f"Equatorial day length {length}"

    def test_london_midsummer(self):
        length = calculate_day_length(51.5, 172)
        assert 16.0 < length < 17.0, f"London midsummer day length {length}"

    def test_polar_day_and_night(self):
        assert calculate_day_length(80.0, 172) == 24.0
        assert calculate_day_length(80.0, 355) == 0.0

    def test_is_daylight(self):
        assert is_daylight(51.5, 172, 12.0)
        assert not is_daylight(51.5, 172, 1.0)

    def test_solar_time(self):
        noon = datetime(2024, 6, 21, 12, 0, tzinfo=pytz.UTC)
        assert solar_time(noon, 0.0) == 12.0
        assert abs(solar_time(noon, -15.0) - 11.0) < 1e-9
        assert abs(solar_time(noon, 30.0) - 14.0) < 1e-9
        assert abs(solar_time(datetime(2024, 6, 21, 23, 30, tzinfo=pytz.UTC), 15.0) - 0.5) < 1e-9

    def test_summer_time_clock_ignored(self):
        london = pytz.timezone("Europe/London")
        # 04:30 BST is 03:30 UTC, before a London midsummer sunrise
        before_sunrise = london.localize(datetime(2024, 6, 21, 4, 30))
        # 22:30 BST is 21:30 UTC, after sunset
        after_sunset = london.localize(datetime(2024, 6, 21, 22, 30))
        assert not is_daylight(51.5, 172, solar_time(before_sunrise, -0.13))
        assert not is_daylight(51.5, 172, solar_time(after_sunset, -0.13))
        assert is_daylight(51.5, 172, solar_time(london.localize(datetime(2024, 6, 21, 13, 0)), -0.13))
