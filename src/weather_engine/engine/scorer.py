"""
Scorer core.

``WeatherScorer`` holds everything shared by the applications: rule
evaluation, weighting, location modifiers, window detection and
recommendation synthesis. Each application subclasses it once and supplies
``score_hour`` and ``get_decision_thresholds``.
"""

import logging
import statistics
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

import pytz

from ..core import constants
from ..core.date_utils import DateUtils
from ..models import (
    AlgorithmConfig,
    DecisionThresholds,
    DECISION_POOR,
    HourlyWeatherData,
    Location,
    Recommendation,
    ScoringResult,
    TimeWindow,
    WindowDetectionOptions,
)
from .coastal import CoastalIntelligence
from .disqualification import DisqualificationOutcome, evaluate_rules
from .wind_analyzer import WindAnalyzer
from .window_detector import WindowDetector


class WeatherScorer(ABC):
    """
    Base class for application scorers.

    Subclasses set ``reason_warnings`` to map disqualification reasons to
    user-facing warnings and may override ``temporal_modifier``,
    ``collect_warnings`` and ``generate_tips``.
    """

    reason_warnings: Dict[str, str] = {
        "Rain detected": "Rain expected in forecast period",
        "High rain probability": "High chance of rain in forecast period",
        "High condensation risk": "High humidity may affect conditions",
    }

    def __init__(
        self,
        config: AlgorithmConfig,
        coastal: Optional[CoastalIntelligence] = None,
        wind_analyzer: Optional[WindAnalyzer] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize scorer.

        Args:
            config: Algorithm configuration (validated again here)
            coastal: Coastal intelligence; packaged reference data when None
            wind_analyzer: Wind analyzer; default prevailing direction when None
            logger: Logger instance

        Raises:
            ValueError: If the configuration is invalid
        """
        config.validate()
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.window_detector = WindowDetector(self.logger)
        self.coastal = coastal or CoastalIntelligence(logger=self.logger)
        self.wind_analyzer = wind_analyzer or WindAnalyzer(logger=self.logger)

    # === SECTION 1: APPLICATION HOOKS ===

    @abstractmethod
    def score_hour(self, data: HourlyWeatherData, location: Location) -> ScoringResult:
        """Score one forecast hour."""

    @abstractmethod
    def get_decision_thresholds(self) -> DecisionThresholds:
        """Thresholds defining excellent / acceptable / poor."""

    def temporal_modifier(self, data: HourlyWeatherData, location: Location) -> float:
        """Signed percentage adjustment for the time of day; neutral by default."""
        return 0.0

    def get_config(self) -> AlgorithmConfig:
        return self.config

    # === SECTION 2: PER-HOUR SCORING ===

    def check_disqualification(self, data: HourlyWeatherData) -> DisqualificationOutcome:
        return evaluate_rules(self.config.disqualification_rules, data)

    def apply_weights(self, component_scores: Dict[str, float]) -> float:
        """
        Weighted sum of component scores.

        Components without a configured weight are logged and ignored.
        """
        total = 0.0
        for component, score in component_scores.items():
            weight = self.config.weights.get(component)
            if weight is None:
                self.logger.warning(f"No weight configured for component '{component}', skipping")
                continue
            total += score * weight
        return total

    def calculate_location_modifiers(
        self,
        location: Location,
        data: HourlyWeatherData
    ) -> Dict[str, float]:
        """
        Geographic modifiers for one hour, each a signed percentage.

        Order: coastal wind tolerance (plus the offshore/onshore direction
        factor), wind effectiveness, topographic shelter. Disabled features
        are omitted.
        """
        features = self.config.features
        modifiers: Dict[str, float] = {}

        if features.coastal_intelligence:
            analysis = self.coastal.analyze(location, data.wind_direction, data.time)
            tolerance = self.coastal.wind_tolerance_modifier(analysis.distance, data.wind_speed)
            modifiers["coastal"] = tolerance + (analysis.direction_factor - 1) * 100

        if features.wind_analysis:
            wind = self.wind_analyzer.analyze(data.wind_speed, data.wind_direction, location)
            modifiers["wind"] = wind.score - 50

        if features.topographic_adjustments:
            shelter = self.wind_analyzer.calculate_shelter_factor(location)
            modifiers["topographic"] = (shelter - 0.5) * 20

        return modifiers

    @staticmethod
    def apply_modifiers(score: float, modifiers: Dict[str, float]) -> float:
        """Apply each percentage modifier multiplicatively and clamp to 0-100."""
        for value in modifiers.values():
            score *= 1 + value / 100
        return max(constants.MIN_SCORE, min(constants.MAX_SCORE, score))

    def apply_location_modifiers(
        self,
        score: float,
        location: Location,
        data: HourlyWeatherData
    ) -> float:
        """Score after the enabled geographic modifiers, clamped to 0-100."""
        return self.apply_modifiers(score, self.calculate_location_modifiers(location, data))

    def disqualified_result(
        self,
        data: HourlyWeatherData,
        reasons: Iterable[str]
    ) -> ScoringResult:
        """Zero-score result for an hour excluded by a hard rule."""
        return ScoringResult(
            timestamp=data.time,
            overall_score=0.0,
            component_scores={component: 0.0 for component in self.config.weights},
            modifiers={},
            disqualified=True,
            disqualification_reasons=tuple(reasons),
            weather_data=data,
        )

    def build_result(
        self,
        data: HourlyWeatherData,
        location: Location,
        component_scores: Dict[str, float],
        outcome: DisqualificationOutcome,
        extra_reasons: Sequence[str] = ()
    ) -> ScoringResult:
        """
        Turn component scores into a ScoringResult.

        Weighted base score, then location and temporal modifiers, then the
        soft-rule penalty; rounded to a whole score.
        """
        if outcome.disqualified:
            return self.disqualified_result(data, outcome.reasons)

        base_score = self.apply_weights(component_scores)
        modifiers = self.calculate_location_modifiers(location, data)
        if self.config.features.temporal_weighting:
            modifiers["temporal"] = self.temporal_modifier(data, location)

        modified = self.apply_modifiers(base_score, modifiers)
        final_score = max(constants.MIN_SCORE, modified - outcome.penalty)

        self.logger.debug(
            f"{data.time.isoformat()}: base {base_score:.1f}, modified {modified:.1f}, "
            f"penalty {outcome.penalty:.0f}, final {final_score:.1f}"
        )

        return ScoringResult(
            timestamp=data.time,
            overall_score=float(round(final_score)),
            component_scores=component_scores,
            modifiers=modifiers,
            disqualified=False,
            disqualification_reasons=tuple(outcome.reasons) + tuple(extra_reasons),
            weather_data=data,
        )

    def score_series(
        self,
        hourly_data: Sequence[HourlyWeatherData],
        location: Location
    ) -> List[ScoringResult]:
        return [self.score_hour(data, location) for data in hourly_data]

    # === SECTION 3: WINDOWS ===

    def find_optimal_windows(
        self,
        hourly_scores: Sequence[ScoringResult],
        options: Optional[WindowDetectionOptions] = None,
        **overrides
    ) -> List[TimeWindow]:
        """
        Find qualifying windows using this application's thresholds.

        Defaults: minimum duration from the thresholds, minimum score equal to
        the acceptable threshold, gap tolerance of one hour.
        """
        thresholds = self.get_decision_thresholds()
        if options is None:
            options = WindowDetectionOptions(
                min_duration=thresholds.min_window_duration,
                min_score=thresholds.acceptable,
                max_gap=constants.DEFAULT_MAX_GAP,
                require_continuous=False,
            )
        return self.window_detector.find_optimal_windows(hourly_scores, options, **overrides)

    # === SECTION 4: RECOMMENDATION ===

    def generate_recommendation(
        self,
        hourly_scores: Sequence[ScoringResult],
        location: Location,
        generated_at: Optional[datetime] = None
    ) -> Recommendation:
        """
        Build the recommendation for a scored series.

        Args:
            hourly_scores: Chronological scored hours; the first is "now"
            location: Location
            generated_at: Generation timestamp (current UTC time when None)

        Returns:
            Recommendation

        Raises:
            ValueError: If hourly_scores is empty
        """
        if not hourly_scores:
            raise ValueError("Cannot generate a recommendation from an empty hourly series")

        thresholds = self.get_decision_thresholds()
        current = hourly_scores[0]

        windows = self.find_optimal_windows(hourly_scores)
        best_window = self.window_detector.select_best_window(windows)

        decision = thresholds.decision_for(current.overall_score)
        confidence = self.calculate_confidence(hourly_scores, windows)

        summary = self.generate_summary(
            decision, current.overall_score, best_window, windows, len(hourly_scores), location
        )
        warnings = self.collect_warnings(hourly_scores, location)
        tips = self.generate_tips(decision, best_window, windows, location)

        self.logger.info(
            f"Recommendation for {location.name or (location.latitude, location.longitude)}: "
            f"{decision} (score {current.overall_score:.0f}, {len(windows)} windows, "
            f"confidence {confidence:.2f})"
        )

        return Recommendation(
            decision=decision,
            label=thresholds.label_for(decision),
            confidence=confidence,
            current_score=current.overall_score,
            current_hour=current,
            optimal_windows=tuple(windows),
            best_window=best_window,
            summary=summary,
            warnings=tuple(warnings),
            tips=tuple(tips),
            hourly_scores=tuple(hourly_scores),
            location=location,
            generated_at=generated_at or datetime.now(pytz.UTC),
            valid_until=current.timestamp + timedelta(
                minutes=constants.RECOMMENDATION_VALIDITY_MINUTES
            ),
            algorithm=self.config.name,
            metadata={"version": self.config.version},
        )

    def recommend(
        self,
        hourly_data: Sequence[HourlyWeatherData],
        location: Location,
        generated_at: Optional[datetime] = None
    ) -> Recommendation:
        """Score every hour and build the recommendation."""
        return self.generate_recommendation(
            self.score_series(hourly_data, location), location, generated_at
        )

    @staticmethod
    def calculate_confidence(
        hourly_scores: Sequence[ScoringResult],
        windows: Sequence[TimeWindow]
    ) -> float:
        """
        Confidence 0-1.

        0.5 baseline, +0.1 per window (at most +0.3), up to +0.2 for a steady
        series (standard deviation below 20), minus up to 0.2 for the share of
        disqualified hours.
        """
        confidence = 0.5
        confidence += min(
            len(windows) * constants.WINDOW_CONFIDENCE_STEP,
            constants.MAX_WINDOW_CONFIDENCE_BONUS,
        )

        std_dev = statistics.pstdev([h.overall_score for h in hourly_scores])
        steadiness = max(
            0.0, (constants.VARIANCE_REFERENCE_STD - std_dev) / constants.VARIANCE_REFERENCE_STD
        )
        confidence += steadiness * constants.VARIANCE_CONFIDENCE_WEIGHT

        disqualified = sum(1 for h in hourly_scores if h.disqualified)
        confidence -= disqualified / len(hourly_scores) * constants.DISQUALIFICATION_CONFIDENCE_WEIGHT

        return max(0.0, min(1.0, confidence))

    @staticmethod
    def format_time(dt: datetime, location: Location) -> str:
        """HH:MM in the location's timezone."""
        return f"{DateUtils.to_local(dt, location.timezone):%H:%M}"

    def generate_summary(
        self,
        decision: str,
        current_score: float,
        best_window: Optional[TimeWindow],
        windows: Sequence[TimeWindow],
        hours: int,
        location: Location
    ) -> str:
        parts = [f"Current conditions score: {current_score:.0f}/100 ({decision})."]

        if best_window is not None:
            parts.append(
                f"Best window: {self.format_time(best_window.start, location)}-"
                f"{self.format_time(best_window.end, location)} "
                f"({best_window.duration_hours:.1f}h, avg score {best_window.average_score:.0f})."
            )

        if windows:
            plural = "s" if len(windows) != 1 else ""
            parts.append(f"{len(windows)} optimal window{plural} found in the next {hours} hours.")
        else:
            parts.append(f"No optimal windows found in the next {hours} hours.")

        return " ".join(parts)

    def reason_messages(self, hourly_scores: Sequence[ScoringResult]) -> List[str]:
        """Distinct warnings for the reasons seen in the series, in first-seen order."""
        messages: List[str] = []

        reasons = dict.fromkeys(
            reason for hour in hourly_scores for reason in hour.disqualification_reasons
        )
        for reason in reasons:
            message = self.reason_warnings.get(reason)
            if message and message not in messages:
                messages.append(message)

        return messages

    def collect_warnings(
        self,
        hourly_scores: Sequence[ScoringResult],
        location: Location
    ) -> List[str]:
        """Warnings for the distinct reasons seen in the series, plus strong wind."""
        warnings = self.reason_messages(hourly_scores)

        max_wind = max(h.weather_data.wind_speed for h in hourly_scores)
        if max_wind > constants.STRONG_WIND_WARNING_KMH:
            warnings.append(f"Strong winds expected (up to {max_wind:.0f} km/h)")

        return warnings

    def generate_tips(
        self,
        decision: str,
        best_window: Optional[TimeWindow],
        windows: Sequence[TimeWindow],
        location: Location
    ) -> List[str]:
        tips: List[str] = []

        if decision == DECISION_POOR and best_window is not None:
            tips.append(
                f"Wait until {self.format_time(best_window.start, location)} for better conditions"
            )

        if len(windows) > 1:
            tips.append("Multiple good windows available - choose based on your schedule")

        if best_window is not None and best_window.duration_hours < constants.SHORT_WINDOW_HOURS:
            tips.append("Window is short - be ready to act quickly")

        return tips
