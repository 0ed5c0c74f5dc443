"""
Laundry drying scorer.

Scores how well washing hung outside will dry. Vapor pressure deficit and
wind dominate; rain, a high rain probability and condensation (dew-point
spread under 1 °C) rule an hour out.
"""

import logging
from typing import Dict, List, Optional, Sequence

from ..core.date_utils import DateUtils
from ..engine import (
    CoastalIntelligence,
    WeatherScorer,
    WindAnalyzer,
    condensation_risk_rule,
    measured_precipitation_rule,
    rain_probability_rule,
    soft_rule,
)
from ..models import (
    AlgorithmConfig,
    DecisionThresholds,
    DisqualificationRule,
    FeatureFlags,
    HourlyWeatherData,
    Location,
    ScoringResult,
    SEVERITY_SOFT,
)
from ..normalization import (
    calculate_vpd,
    calculate_wet_bulb_temperature,
    is_daylight,
    normalize_cloud_cover,
    normalize_dew_point_spread,
    normalize_drying_temperature,
    normalize_drying_wind_speed,
    normalize_evapotranspiration,
    normalize_shortwave_radiation,
    normalize_sunshine_duration,
    normalize_vapor_pressure_deficit,
    normalize_wet_bulb_temperature,
    normalize_wind_direction,
    solar_time,
)

DRYING_WEIGHTS = {
    "vapor_pressure_deficit": 0.30,
    "wind_speed": 0.20,
    "wet_bulb_temperature": 0.10,
    "sunshine_duration": 0.09,
    "temperature": 0.08,
    "shortwave_radiation": 0.08,
    "evapotranspiration": 0.05,
    "wind_direction": 0.05,
    "dew_point_spread": 0.05,
}

DRYING_THRESHOLDS = DecisionThresholds(
    excellent=70,
    acceptable=50,
    poor=0,
    min_window_duration=2,
    labels={"excellent": "YES", "acceptable": "MAYBE", "poor": "NO"},
)

# Component floors
MIN_EFFECTIVE_VPD = 0.2  # kPa
CALM_WIND = 1.0  # km/h
CALM_WIND_SCORE = 10.0
MIN_USEFUL_RADIATION = 50.0  # W/m²
MIN_SUNSHINE_FRACTION = 0.1  # of the hour
HOURS_PER_DAY = 24

NIGHT_PENALTY = -50.0  # percent
SHIFTING_WIND_CONSISTENCY = 0.5
GUSTY_WIND_THRESHOLD = 0.6


def _extreme_humidity(data: HourlyWeatherData) -> bool:
    return data.humidity > 95 and data.vapor_pressure_deficit is None


DRYING_RULES = (
    measured_precipitation_rule(),
    rain_probability_rule(25.0),
    condensation_risk_rule(1.0),
    DisqualificationRule(
        name="Extreme humidity",
        condition=_extreme_humidity,
        reason="Extreme humidity",
        severity=SEVERITY_SOFT,
        penalty=30,
    ),
    soft_rule(
        name="Dangerous wind",
        field_name="wind_speed",
        threshold=50.0,
        reason="Dangerous wind speeds",
        penalty=20,
    ),
)

DRYING_CONFIG = AlgorithmConfig(
    name="Laundry Drying Algorithm",
    version="2.0.0",
    weights=DRYING_WEIGHTS,
    thresholds=DRYING_THRESHOLDS,
    disqualification_rules=DRYING_RULES,
    features=FeatureFlags(
        coastal_intelligence=True,
        wind_analysis=True,
        topographic_adjustments=True,
        temporal_weighting=True,
    ),
)


class DryingScorer(WeatherScorer):
    """Scores hours for drying laundry outdoors."""

    reason_warnings = {
        **WeatherScorer.reason_warnings,
        "Extreme humidity": "Very humid air - washing will dry slowly",
        "Dangerous wind speeds": "Wind strong enough to damage washing lines",
    }

    def __init__(
        self,
        config: AlgorithmConfig = DRYING_CONFIG,
        coastal: Optional[CoastalIntelligence] = None,
        wind_analyzer: Optional[WindAnalyzer] = None,
        logger: Optional[logging.Logger] = None
    ):
        super().__init__(config, coastal, wind_analyzer, logger)

    def get_decision_thresholds(self) -> DecisionThresholds:
        return self.config.thresholds

    def score_hour(self, data: HourlyWeatherData, location: Location) -> ScoringResult:
        """
        Score one hour for drying.

        Hard rule matches return a zero result. Otherwise the nine weighted
        components are combined, the location and daylight modifiers applied
        and soft penalties subtracted.
        """
        outcome = self.check_disqualification(data)
        if outcome.disqualified:
            return self.disqualified_result(data, outcome.reasons)

        components = self.calculate_component_scores(data, location)
        return self.build_result(data, location, components, outcome)

    def calculate_component_scores(
        self,
        data: HourlyWeatherData,
        location: Location
    ) -> Dict[str, float]:
        scores: Dict[str, float] = {}

        vpd = data.vapor_pressure_deficit
        if vpd is None:
            vpd = calculate_vpd(data.temperature, data.humidity)
        scores["vapor_pressure_deficit"] = (
            normalize_vapor_pressure_deficit(vpd) if vpd >= MIN_EFFECTIVE_VPD else 0.0
        )

        scores["wind_speed"] = (
            CALM_WIND_SCORE if data.wind_speed <= CALM_WIND
            else normalize_drying_wind_speed(data.wind_speed)
        )

        wet_bulb = data.wet_bulb_temperature
        if wet_bulb is None:
            wet_bulb = calculate_wet_bulb_temperature(data.temperature, data.humidity)
        scores["wet_bulb_temperature"] = normalize_wet_bulb_temperature(wet_bulb)

        scores["temperature"] = (
            0.0 if data.temperature < 0 else normalize_drying_temperature(data.temperature)
        )

        if data.shortwave_radiation is not None:
            scores["shortwave_radiation"] = (
                0.0 if data.shortwave_radiation < MIN_USEFUL_RADIATION
                else normalize_shortwave_radiation(data.shortwave_radiation)
            )
        else:
            scores["shortwave_radiation"] = normalize_cloud_cover(data.cloud_cover)

        if data.sunshine_duration is not None:
            scores["sunshine_duration"] = (
                0.0 if data.sunshine_duration < MIN_SUNSHINE_FRACTION
                else normalize_sunshine_duration(data.sunshine_duration, max_possible=1.0)
            )
        elif data.shortwave_radiation is not None:
            scores["sunshine_duration"] = scores["shortwave_radiation"]
        else:
            scores["sunshine_duration"] = normalize_cloud_cover(data.cloud_cover)

        if data.evapotranspiration is not None:
            # Hourly ET0 scored against the daily curve
            scores["evapotranspiration"] = normalize_evapotranspiration(
                data.evapotranspiration * HOURS_PER_DAY
            )
        else:
            scores["evapotranspiration"] = (
                scores["vapor_pressure_deficit"] + scores["temperature"] + scores["wind_speed"]
            ) / 3

        scores["wind_direction"] = normalize_wind_direction(data.wind_direction)
        scores["dew_point_spread"] = normalize_dew_point_spread(data.dew_point_spread)

        if self.config.features.coastal_intelligence:
            analysis = self.coastal.analyze(location, data.wind_direction, data.time)
            scores["vapor_pressure_deficit"] /= analysis.modifiers.humidity_penalty
            scores["temperature"] = min(
                100.0, scores["temperature"] * analysis.modifiers.temperature_moderation
            )

        return scores

    def temporal_modifier(self, data: HourlyWeatherData, location: Location) -> float:
        """Washing barely dries in the dark: -50 % outside daylight."""
        hour = solar_time(data.time, location.longitude)
        if is_daylight(location.latitude, DateUtils.get_day_of_year(data.time), hour):
            return 0.0
        return NIGHT_PENALTY

    def collect_warnings(
        self,
        hourly_scores: Sequence[ScoringResult],
        location: Location
    ) -> List[str]:
        warnings = super().collect_warnings(hourly_scores, location)

        weather = [h.weather_data for h in hourly_scores]
        consistency = self.wind_analyzer.analyze_consistency(
            [d.wind_speed for d in weather],
            [d.wind_direction for d in weather],
            [d.wind_gusts for d in weather],
        )
        if consistency.direction_stability < SHIFTING_WIND_CONSISTENCY:
            warnings.append("Shifting wind directions - peg items securely")
        if consistency.gustiness > GUSTY_WIND_THRESHOLD:
            warnings.append("Gusty, variable winds - use extra pegs")

        return warnings
