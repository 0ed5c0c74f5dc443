"""
Algorithm configuration models.

An AlgorithmConfig is built once per application and validated eagerly: an
invalid configuration raises ValueError at construction, before any hour is
scored.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Optional, Tuple

from ..core import constants
from .weather import HourlyWeatherData

SEVERITY_HARD = "hard"
SEVERITY_SOFT = "soft"

DECISION_EXCELLENT = "excellent"
DECISION_ACCEPTABLE = "acceptable"
DECISION_POOR = "poor"


@dataclass(frozen=True)
class DecisionThresholds:
    """Score cutoffs and display labels for the three decision categories."""

    excellent: float
    acceptable: float
    poor: float
    min_window_duration: float = 2  # hours
    labels: Dict[str, str] = field(default_factory=lambda: {
        DECISION_EXCELLENT: "Excellent",
        DECISION_ACCEPTABLE: "Acceptable",
        DECISION_POOR: "Poor",
    })

    def __post_init__(self):
        if not self.excellent > self.acceptable > self.poor:
            raise ValueError(
                "Thresholds must be strictly descending (excellent > acceptable > poor), "
                f"got {self.excellent}/{self.acceptable}/{self.poor}"
            )
        if self.min_window_duration < constants.MIN_WINDOW_DURATION:
            raise ValueError(
                f"min_window_duration must be >= {constants.MIN_WINDOW_DURATION}, "
                f"got {self.min_window_duration}"
            )

    def decision_for(self, score: float) -> str:
        """Highest category whose cutoff the score meets; poor is the fallback."""
        if score >= self.excellent:
            return DECISION_EXCELLENT
        if score >= self.acceptable:
            return DECISION_ACCEPTABLE
        return DECISION_POOR

    def label_for(self, decision: str) -> str:
        return self.labels.get(decision, decision.upper())


@dataclass(frozen=True)
class DisqualificationRule:
    """
    A named exclusion predicate over one hour's raw data.

    Hard rules zero the hour and mark it disqualified. Soft rules subtract
    ``penalty`` points from the final score.
    """

    name: str
    condition: Callable[[HourlyWeatherData], bool]
    reason: str
    severity: str = SEVERITY_HARD
    penalty: float = 0.0

    def __post_init__(self):
        if self.severity not in (SEVERITY_HARD, SEVERITY_SOFT):
            raise ValueError(f"Invalid severity for rule '{self.name}': {self.severity}")
        if self.penalty < 0:
            raise ValueError(f"Penalty for rule '{self.name}' must be >= 0, got {self.penalty}")

    @property
    def is_hard(self) -> bool:
        return self.severity == SEVERITY_HARD


@dataclass(frozen=True)
class FeatureFlags:
    """Switches for the optional location and time modifiers."""

    coastal_intelligence: bool = False
    wind_analysis: bool = False
    topographic_adjustments: bool = False
    temporal_weighting: bool = False


@dataclass(frozen=True)
class AlgorithmConfig:
    """Weights, thresholds, rules and feature flags for one application."""

    name: str
    version: str
    weights: Dict[str, float]
    thresholds: DecisionThresholds
    disqualification_rules: Tuple[DisqualificationRule, ...] = ()
    features: FeatureFlags = field(default_factory=FeatureFlags)

    def __post_init__(self):
        # Lists are accepted for convenience but stored as a tuple
        object.__setattr__(self, "disqualification_rules", tuple(self.disqualification_rules))
        self.validate()

    def validate(self) -> None:
        """
        Check the weight map.

        Raises:
            ValueError: If weights are empty, negative or do not sum to 1.0 ± 0.01
        """
        if not self.weights:
            raise ValueError(f"Algorithm '{self.name}' has no component weights")

        negative = [key for key, weight in self.weights.items() if weight < 0]
        if negative:
            raise ValueError(f"Negative weights are not allowed: {', '.join(negative)}")

        total = sum(self.weights.values())
        if abs(total - 1.0) > constants.WEIGHT_SUM_TOLERANCE:
            raise ValueError(
                f"Weights for algorithm '{self.name}' must sum to 1.0, got {total:.4f}"
            )

    def with_overrides(self, overrides: Optional[Dict[str, Any]] = None) -> "AlgorithmConfig":
        """
        Build a new configuration with partial overrides applied.

        Args:
            overrides: Optional dict with 'weights', 'thresholds' and 'features' keys.
                       Weight overrides replace individual weights; the result
                       must still sum to 1.0.

        Returns:
            New validated AlgorithmConfig

        Raises:
            ValueError: If the overridden configuration is invalid
        """
        if not overrides:
            return self

        unknown = set(overrides) - {"weights", "thresholds", "features"}
        if unknown:
            raise ValueError(f"Unknown algorithm override keys: {', '.join(sorted(unknown))}")

        weights = dict(self.weights)
        unknown_components = set(overrides.get("weights", {})) - set(weights)
        if unknown_components:
            raise ValueError(
                f"Unknown weight components: {', '.join(sorted(unknown_components))}"
            )
        weights.update(overrides.get("weights", {}))

        thresholds = self.thresholds
        if overrides.get("thresholds"):
            thresholds = replace(thresholds, **overrides["thresholds"])

        features = self.features
        if overrides.get("features"):
            features = replace(features, **overrides["features"])

        return replace(self, weights=weights, thresholds=thresholds, features=features)
