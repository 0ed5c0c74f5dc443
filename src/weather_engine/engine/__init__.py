"""
Scoring engine.

Disqualification rules, window detection, geographic intelligence and the
extensible scorer base shared by every application.
"""

from .disqualification import (
    DisqualificationOutcome,
    evaluate_rules,
    threshold_rule,
    soft_rule,
    condensation_risk_rule,
    rain_probability_rule,
    measured_precipitation_rule,
)
from .window_detector import WindowDetector
from .coastal import CoastalIntelligence, CoastalAnalysis, CoastalModifiers, load_coastal_reference
from .wind_analyzer import WindAnalyzer, WindAnalysis, WindConsistency
from .geo import haversine_distance, initial_bearing
from .scorer import WeatherScorer

__all__ = [
    "DisqualificationOutcome",
    "evaluate_rules",
    "threshold_rule",
    "soft_rule",
    "condensation_risk_rule",
    "rain_probability_rule",
    "measured_precipitation_rule",
    "WindowDetector",
    "CoastalIntelligence",
    "CoastalAnalysis",
    "CoastalModifiers",
    "load_coastal_reference",
    "WindAnalyzer",
    "WindAnalysis",
    "WindConsistency",
    "haversine_distance",
    "initial_bearing",
    "WeatherScorer",
]
