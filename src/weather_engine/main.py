"""
Main entry point for the weather decision engine.

Reads a saved hourly forecast, scores it for one application and prints the
recommendation as JSON.
"""

import json
import sys
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .core import Config, setup_logger, LoggerContext
from .models import Location, Recommendation
from .processing import ForecastConverter, DataValidator
from .apps import create_scorer


class WeatherDecisionApp:
    """Application shell around the scoring engine."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
        """
        self.config = Config(config_file)

        self.logger = setup_logger(log_file=self.config.log_file, log_level=self.config.log_level)
        self.logger.info("=" * 60)
        self.logger.info("Weather Decision Engine")
        self.logger.info("=" * 60)
        self.logger.info(f"Configuration: {self.config}")

        self.converter = ForecastConverter(self.logger)
        self.validator = DataValidator(self.logger)

    def load_forecast(self, forecast_path: str) -> Dict[str, Any]:
        """
        Read a forecast JSON file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not a JSON object
        """
        path = Path(forecast_path)
        if not path.exists():
            raise FileNotFoundError(f"Forecast file not found: {forecast_path}")

        with open(path, "r") as f:
            try:
                payload = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in forecast file: {e}")

        if not isinstance(payload, dict):
            raise ValueError("Forecast file must contain a JSON object")

        return payload

    def run(
        self,
        forecast_path: str,
        location: Location,
        app: Optional[str] = None
    ) -> Recommendation:
        """
        Score a forecast file for one application.

        Args:
            forecast_path: Path to an hourly forecast JSON file
            location: Location the forecast is for
            app: Application name; the configured default when None

        Returns:
            Recommendation for the forecast period
        """
        app = app or self.config.default_app

        with LoggerContext(self.logger, f"{app} recommendation for {location.name or 'location'}"):
            payload = self.load_forecast(forecast_path)
            hours = self.converter.convert_hourly(payload, location)

            is_valid, errors = self.validator.validate_series(hours)
            if not is_valid:
                self.logger.warning(f"Forecast has {len(errors)} data quality issue(s)")

            scorer = create_scorer(app, self.config.algorithm_overrides(app), self.logger)
            recommendation = scorer.recommend(hours, location)

            self.logger.info(
                f"Decision: {recommendation.label} "
                f"(score {recommendation.current_score:.0f}, "
                f"{len(recommendation.optimal_windows)} window(s))"
            )

        return recommendation


def _to_plain(value: Any) -> Any:
    """Dataclasses and read-only mappings to plain dicts and lists."""
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Mapping):
        return {key: _to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(item) for item in value]
    return value


def recommendation_to_json(recommendation: Recommendation) -> str:
    """Serialize a recommendation; datetimes become ISO strings."""
    def default(value):
        if hasattr(value, "isoformat"):
            return value.isoformat()
        return str(value)

    return json.dumps(_to_plain(recommendation), indent=2, default=default)


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Weather decision engine: when to dry washing or light the wood burner"
    )
    parser.add_argument(
        "forecast",
        type=str,
        help="Path to an hourly forecast JSON file (Open-Meteo format)"
    )
    parser.add_argument(
        "--app",
        type=str,
        choices=["drying", "burning"],
        default=None,
        help="Application to score for. Default: from configuration"
    )
    parser.add_argument("--name", type=str, default="", help="Location name")
    parser.add_argument("--lat", type=float, required=True, help="Latitude")
    parser.add_argument("--lon", type=float, required=True, help="Longitude")
    parser.add_argument(
        "--timezone",
        type=str,
        default=None,
        help="Location timezone. Default: from configuration"
    )
    parser.add_argument(
        "--coastal-distance",
        type=float,
        default=None,
        help="Distance to the coast in km, if known"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )

    args = parser.parse_args()

    try:
        app = WeatherDecisionApp(config_file=args.config)
        location = Location(
            latitude=args.lat,
            longitude=args.lon,
            name=args.name,
            timezone=args.timezone or app.config.timezone,
            coastal_distance=args.coastal_distance,
        )
        recommendation = app.run(args.forecast, location, app=args.app)
    except Exception as e:
        print(f"Application failed: {e}", file=sys.stderr)
        sys.exit(1)

    print(recommendation_to_json(recommendation))


if __name__ == "__main__":
    main()
