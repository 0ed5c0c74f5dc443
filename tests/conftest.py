"""
Pytest configuration and shared fixtures for all tests.
"""

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest
import json
import pytz

# Add the src directory to sys.path so the package imports without installation
project_root = Path(__file__).parent.parent
src_dir = project_root / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from weather_engine.models import HourlyWeatherData, Location, ScoringResult  # noqa: E402


@pytest.fixture(scope="session")
def fixtures_dir():
    """Get the fixtures directory path."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def forecast_payload(fixtures_dir):
    """Load the sample Open-Meteo forecast from fixtures."""
    with open(fixtures_dir / "forecast.json") as f:
        return json.load(f)


@pytest.fixture
def base_time():
    """Midday UTC in early summer."""
    return datetime(2024, 6, 15, 12, 0, tzinfo=pytz.UTC)


@pytest.fixture
def make_hour(base_time):
    """
    Factory for HourlyWeatherData.

    Defaults describe a warm, breezy, dry afternoon; keyword arguments
    override any field. ``offset`` shifts the time by whole hours.
    """
    def _make(offset=0, **overrides):
        values = dict(
            time=base_time + timedelta(hours=offset),
            temperature=20.0,
            humidity=50.0,
            dew_point=9.3,
            wind_speed=15.0,
            wind_direction=225.0,
            pressure=1015.0,
            cloud_cover=20.0,
            precipitation=0.0,
            precipitation_probability=5.0,
            uv_index=5.0,
            visibility=20.0,
        )
        values.update(overrides)
        return HourlyWeatherData(**values)

    return _make


@pytest.fixture
def make_result(make_hour):
    """Factory for ScoringResult with a given score at an hour offset."""
    def _make(offset, score, disqualified=False, reasons=(), **weather):
        return ScoringResult(
            timestamp=make_hour(offset).time,
            overall_score=float(score),
            component_scores={},
            modifiers={},
            disqualified=disqualified,
            disqualification_reasons=tuple(reasons),
            weather_data=make_hour(offset, **weather),
        )

    return _make


@pytest.fixture
def london():
    """Inland location in the reference table, UTC for predictable clock times."""
    return Location(latitude=51.5074, longitude=-0.1278, name="London", timezone="UTC")


@pytest.fixture
def brighton():
    """Seafront location in the reference table."""
    return Location(latitude=50.8225, longitude=-0.1372, name="Brighton", timezone="UTC")


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test (end to end through the CLI shell)"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test (no external dependencies)"
    )
