"""
Wood burner ignition scorer.

Chimney draft is driven by the stack effect, so the difference between indoor
and outdoor temperature carries half the weight. An outdoor temperature above
the indoor one (inversion) means backdraft risk and rules the hour out.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence, Tuple

from ..core.date_utils import DateUtils
from ..engine import CoastalIntelligence, WeatherScorer, WindAnalyzer, soft_rule, threshold_rule
from ..models import (
    AlgorithmConfig,
    DecisionThresholds,
    DECISION_ACCEPTABLE,
    DECISION_EXCELLENT,
    DECISION_POOR,
    FeatureFlags,
    HourlyWeatherData,
    Location,
    ScoringResult,
    TimeWindow,
)
from ..normalization import (
    normalize_burning_humidity,
    normalize_burning_pressure,
    normalize_burning_wind_speed,
    normalize_precipitation,
    normalize_temperature_differential,
)

BURNING_WEIGHTS = {
    "temperature_differential": 0.50,
    "atmospheric_pressure": 0.15,
    "humidity": 0.15,
    "wind_speed": 0.10,
    "precipitation": 0.10,
}

BURNING_THRESHOLDS = DecisionThresholds(
    excellent=75,
    acceptable=60,
    poor=45,
    min_window_duration=2,
    labels={"excellent": "EXCELLENT", "acceptable": "GOOD", "poor": "MARGINAL"},
)

BURNING_RULES = (
    threshold_rule(
        name="Extreme storm conditions",
        field_name="pressure",
        threshold=980.0,
        reason="Extreme storm conditions",
        above=False,
    ),
    soft_rule(
        name="Very low pressure",
        field_name="pressure",
        threshold=990.0,
        reason="Very low atmospheric pressure",
        penalty=30,
        above=False,
    ),
    soft_rule(
        name="Heavy rain",
        field_name="precipitation",
        threshold=5.0,
        reason="Heavy rain cooling chimney",
        penalty=20,
    ),
    soft_rule(
        name="Fog conditions",
        field_name="humidity",
        threshold=95.0,
        reason="Fog/mist present",
        penalty=15,
    ),
)

BURNING_CONFIG = AlgorithmConfig(
    name="Wood Burner Ignition Algorithm",
    version="1.0.0",
    weights=BURNING_WEIGHTS,
    thresholds=BURNING_THRESHOLDS,
    disqualification_rules=BURNING_RULES,
    features=FeatureFlags(
        coastal_intelligence=False,
        wind_analysis=True,
        topographic_adjustments=False,
        temporal_weighting=True,
    ),
)

# Typical indoor temperatures (°C): morning 6-9, day 9-17, evening 17-23, night
INDOOR_TEMP_PROFILES = {
    "winter": (15.0, 17.0, 18.0, 15.0),
    "spring": (16.0, 18.0, 19.0, 16.0),
    "autumn": (16.0, 18.0, 19.0, 16.0),
    "summer": (17.0, 19.0, 20.0, 17.0),
}

INVERSION_REASON = "Temperature inversion"
SUMMER_CHIMNEY_REASON = "Summer chimney syndrome"
COLD_CHIMNEY_REASON = "Cold chimney morning"
VERY_DAMP_REASON = "Very damp conditions"

EVENING_BONUS = 10.0  # percent
NIGHT_PENALTY = -10.0  # percent

# Practical stove hours, local time [start, end)
MORNING_HOURS = (6, 11)
EVENING_HOURS = (17, 23)

MORNING_BONUS = 10.0
EVENING_WINDOW_BONUS = 15.0
SPANNING_BONUS = 5.0
PARTIAL_OVERLAP_BONUS = 3.0
IMPRACTICAL_PENALTY = -20.0

BURNING_WINDOW_MIN_DURATION = 2  # hours
DEFAULT_TOP_WINDOWS = 3


@dataclass(frozen=True)
class BurningWindow:
    """A run of good, practical stove hours."""

    start: datetime
    end: datetime  # exclusive
    duration_hours: int
    average_score: float
    quality: str  # EXCELLENT, GOOD or MARGINAL
    peak_score: float
    peak_time: datetime
    lifestyle_bonus: float

    @property
    def adjusted_score(self) -> float:
        return self.average_score + self.lifestyle_bonus


def is_practical_burning_hour(hour: int) -> bool:
    """True for local hours in the morning or evening burn periods."""
    return any(start <= hour < end for start, end in (MORNING_HOURS, EVENING_HOURS))


def lifestyle_bonus(start_hour: int, end_hour: int) -> float:
    """
    Ranking bonus for a window spanning local hours [start_hour, end_hour).

    Evening windows are prime time, morning ones come next. Windows reaching
    from the morning into the evening, or only partly inside a burn period,
    get a small bonus; anything else is penalised.
    """
    morning_start, morning_end = MORNING_HOURS
    evening_start, evening_end = EVENING_HOURS

    if start_hour >= morning_start and end_hour <= morning_end:
        return MORNING_BONUS
    if start_hour >= evening_start and end_hour <= evening_end:
        return EVENING_WINDOW_BONUS
    if start_hour >= morning_start and end_hour >= evening_start:
        return SPANNING_BONUS

    partial = (start_hour < morning_end and end_hour > morning_start) or (
        start_hour < evening_end and end_hour > evening_start
    )
    if partial:
        return PARTIAL_OVERLAP_BONUS
    return IMPRACTICAL_PENALTY


def get_indoor_temp(hour: int, month: int) -> float:
    """Expected indoor temperature for a local hour and month."""
    season = DateUtils.season_for(datetime(2000, month, 1))
    morning, day, evening, night = INDOOR_TEMP_PROFILES[season]

    if 6 <= hour < 9:
        return morning
    if 9 <= hour < 17:
        return day
    if 17 <= hour < 23:
        return evening
    return night


class BurningScorer(WeatherScorer):
    """Scores hours for lighting a wood burning stove."""

    reason_warnings = {
        INVERSION_REASON: (
            "SEVERE BACKDRAFT RISK: Outside temperature exceeds indoor temperature. "
            "Do not light stove."
        ),
        SUMMER_CHIMNEY_REASON: (
            "Summer chimney syndrome likely. Pre-warm chimney essential before attempting ignition."
        ),
        COLD_CHIMNEY_REASON: (
            "Cold chimney from overnight cooling. Use newspaper torch to pre-warm flue "
            "before lighting."
        ),
        VERY_DAMP_REASON: "Very damp conditions. Use only dry kindling (<15% moisture content).",
        "Fog/mist present": "Fog/mist present. Expect difficult ignition and poor smoke dispersion.",
        "Extreme storm conditions": "Storm conditions expected. Avoid lighting the stove.",
        "Heavy rain cooling chimney": "Heavy rain may cool the chimney and weaken draft.",
        "Very low atmospheric pressure": "Very low pressure will weaken chimney draft.",
    }

    def __init__(
        self,
        config: AlgorithmConfig = BURNING_CONFIG,
        indoor_temp: Optional[float] = None,
        coastal: Optional[CoastalIntelligence] = None,
        wind_analyzer: Optional[WindAnalyzer] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize scorer.

        Args:
            config: Algorithm configuration
            indoor_temp: Fixed indoor temperature (°C); seasonal profile when None
            coastal: Coastal intelligence
            wind_analyzer: Wind analyzer
            logger: Logger instance
        """
        super().__init__(config, coastal, wind_analyzer, logger)
        self.indoor_temp = indoor_temp

    def get_decision_thresholds(self) -> DecisionThresholds:
        return self.config.thresholds

    def _local_time(self, data: HourlyWeatherData, location: Location) -> datetime:
        return DateUtils.to_local(data.time, location.timezone)

    def temperature_differential(self, data: HourlyWeatherData, location: Location) -> float:
        """Indoor minus outdoor temperature for this hour."""
        local = self._local_time(data, location)
        indoor = self.indoor_temp
        if indoor is None:
            indoor = get_indoor_temp(local.hour, local.month)
        return indoor - data.temperature

    def score_hour(self, data: HourlyWeatherData, location: Location) -> ScoringResult:
        """
        Score one hour for lighting the stove.

        An inversion (outdoor warmer than indoor) is disqualifying on its own.
        Otherwise the rules are evaluated, the five components weighted and
        hourly advisories appended to the reasons.
        """
        delta_t = self.temperature_differential(data, location)
        if delta_t < 0:
            self.logger.debug(f"{data.time.isoformat()}: inversion (dT={delta_t:.1f})")
            return self.disqualified_result(data, (INVERSION_REASON,))

        outcome = self.check_disqualification(data)
        if outcome.disqualified:
            return self.disqualified_result(data, outcome.reasons)

        components = {
            "temperature_differential": normalize_temperature_differential(delta_t),
            "atmospheric_pressure": normalize_burning_pressure(data.pressure),
            "humidity": normalize_burning_humidity(data.humidity),
            "wind_speed": normalize_burning_wind_speed(data.wind_speed),
            "precipitation": normalize_precipitation(data.precipitation),
        }

        advisories = self.hourly_advisories(data, location, delta_t)
        return self.build_result(data, location, components, outcome, advisories)

    def hourly_advisories(
        self,
        data: HourlyWeatherData,
        location: Location,
        delta_t: float
    ) -> Tuple[str, ...]:
        """Non-disqualifying chimney advisories for one hour."""
        local = self._local_time(data, location)
        advisories = []

        if 6 <= local.month <= 8 and data.pressure > 1020 and data.wind_speed < 5 and delta_t < 5:
            advisories.append(SUMMER_CHIMNEY_REASON)

        if 6 <= local.hour < 9 and delta_t < 8:
            advisories.append(COLD_CHIMNEY_REASON)

        if data.humidity > 85 and delta_t < 10:
            advisories.append(VERY_DAMP_REASON)

        return tuple(advisories)

    def temporal_modifier(self, data: HourlyWeatherData, location: Location) -> float:
        """Evenings are when a stove is wanted; the small hours are not."""
        hour = self._local_time(data, location).hour
        if 17 <= hour < 23:
            return EVENING_BONUS
        if hour >= 23 or hour < 6:
            return NIGHT_PENALTY
        return 0.0

    def generate_tips(
        self,
        decision: str,
        best_window: Optional[TimeWindow],
        windows: Sequence[TimeWindow],
        location: Location
    ) -> List[str]:
        tips: List[str] = []

        if decision == DECISION_EXCELLENT:
            tips.append("Excellent draft conditions - standard ignition procedure will work")
        elif decision == DECISION_ACCEPTABLE:
            tips.append("Good conditions - ensure chimney is clean and use dry kindling")
        else:
            tips.append("Marginal conditions - pre-warm chimney with newspaper torch before lighting")
            tips.append("Use very dry kindling (<15% moisture) and fire starter blocks")

        if decision == DECISION_POOR and best_window is not None:
            tips.append(
                f"Wait until {self.format_time(best_window.start, location)} for better conditions"
            )

        if len(windows) > 1:
            tips.append("Multiple good windows available - choose based on your schedule")

        return tips

    def component_breakdown(self, result: ScoringResult) -> Dict[str, float]:
        """Weighted contribution of each component to the base score."""
        return {
            component: score * self.config.weights.get(component, 0.0)
            for component, score in result.component_scores.items()
        }

    def collect_warnings(
        self,
        hourly_scores: Sequence[ScoringResult],
        location: Location
    ) -> List[str]:
        """Chimney warnings only, each once; no strong-wind warning."""
        return self.reason_messages(hourly_scores)

    # === LIFESTYLE WINDOWS ===

    def find_burning_windows(
        self,
        hourly_scores: Sequence[ScoringResult],
        location: Location
    ) -> List[BurningWindow]:
        """
        Find stove windows in practical hours, best first.

        A window is a run of consecutive hours that each score at least the
        acceptable threshold and fall in the morning or evening burn periods.
        Overnight and mid-afternoon hours break a run. Windows shorter than two
        hours are dropped and the rest are ranked by average score plus the
        lifestyle bonus.

        Args:
            hourly_scores: Chronological scored hours
            location: Location whose timezone defines the local hours

        Returns:
            Windows sorted by adjusted score, highest first
        """
        min_score = self.get_decision_thresholds().acceptable
        windows: List[BurningWindow] = []
        run: List[ScoringResult] = []

        for hour in hourly_scores:
            local_hour = DateUtils.to_local(hour.timestamp, location.timezone).hour
            follows = not run or hour.timestamp - run[-1].timestamp == timedelta(hours=1)
            qualifies = (
                not hour.disqualified
                and hour.overall_score >= min_score
                and is_practical_burning_hour(local_hour)
            )

            if qualifies and follows:
                run.append(hour)
                continue

            if len(run) >= BURNING_WINDOW_MIN_DURATION:
                windows.append(self._create_burning_window(run, location))
            run = [hour] if qualifies else []

        if len(run) >= BURNING_WINDOW_MIN_DURATION:
            windows.append(self._create_burning_window(run, location))

        windows.sort(key=lambda w: w.adjusted_score, reverse=True)
        self.logger.debug(f"Found {len(windows)} burning windows in {len(hourly_scores)} hours")
        return windows

    def top_burning_windows(
        self,
        hourly_scores: Sequence[ScoringResult],
        location: Location,
        limit: int = DEFAULT_TOP_WINDOWS
    ) -> List[BurningWindow]:
        """The best ``limit`` practical windows, for offering alternatives."""
        return self.find_burning_windows(hourly_scores, location)[:limit]

    def _create_burning_window(
        self,
        run: Sequence[ScoringResult],
        location: Location
    ) -> BurningWindow:
        scores = [hour.overall_score for hour in run]
        average = round(sum(scores) / len(scores))
        peak = max(run, key=lambda hour: hour.overall_score)

        start = run[0].timestamp
        end = run[-1].timestamp + timedelta(hours=1)
        thresholds = self.get_decision_thresholds()

        return BurningWindow(
            start=start,
            end=end,
            duration_hours=len(run),
            average_score=average,
            quality=thresholds.label_for(thresholds.decision_for(average)),
            peak_score=peak.overall_score,
            peak_time=peak.timestamp,
            lifestyle_bonus=lifestyle_bonus(
                DateUtils.to_local(start, location.timezone).hour,
                DateUtils.to_local(end, location.timezone).hour,
            ),
        )
