"""
Data models for the weather decision engine.

Contains immutable records for forecast input, algorithm configuration and
scoring output.
"""

from .weather import HourlyWeatherData, Location
from .config import (
    AlgorithmConfig,
    DecisionThresholds,
    DisqualificationRule,
    FeatureFlags,
    SEVERITY_HARD,
    SEVERITY_SOFT,
    DECISION_EXCELLENT,
    DECISION_ACCEPTABLE,
    DECISION_POOR,
)
from .scoring import (
    ScoringResult,
    TimeWindow,
    WindowDetectionOptions,
    WindowSummary,
    Recommendation,
)

__all__ = [
    "HourlyWeatherData",
    "Location",
    "AlgorithmConfig",
    "DecisionThresholds",
    "DisqualificationRule",
    "FeatureFlags",
    "SEVERITY_HARD",
    "SEVERITY_SOFT",
    "DECISION_EXCELLENT",
    "DECISION_ACCEPTABLE",
    "DECISION_POOR",
    "ScoringResult",
    "TimeWindow",
    "WindowDetectionOptions",
    "WindowSummary",
    "Recommendation",
]
