"""
Scoring output models.

ScoringResult, TimeWindow and Recommendation are value objects created fresh
for every scoring pass and never mutated afterwards. Component scores and
modifiers are exposed as read-only mappings.
"""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from ..core.date_utils import DateUtils
from .weather import HourlyWeatherData, Location


@dataclass(frozen=True)
class ScoringResult:
    """Full evaluation of one forecast hour."""

    timestamp: datetime
    overall_score: float  # 0-100
    component_scores: Mapping[str, float]
    modifiers: Mapping[str, float]  # signed percentage adjustments
    disqualified: bool
    disqualification_reasons: Tuple[str, ...]
    weather_data: HourlyWeatherData

    def __post_init__(self):
        object.__setattr__(self, "component_scores", MappingProxyType(dict(self.component_scores)))
        object.__setattr__(self, "modifiers", MappingProxyType(dict(self.modifiers)))


@dataclass(frozen=True)
class TimeWindow:
    """A contiguous (gap-tolerant) run of qualifying hours."""

    start: datetime
    end: datetime  # exclusive: end of the last hour in the run
    duration_hours: float
    average_score: float
    min_score: float
    max_score: float
    hourly_scores: Tuple[ScoringResult, ...]
    consistency: float  # 0-1
    confidence: float  # 0-1

    @property
    def disqualified_count(self) -> int:
        return sum(1 for hour in self.hourly_scores if hour.disqualified)


@dataclass(frozen=True)
class WindowDetectionOptions:
    """Parameters for window detection."""

    min_duration: float = 2  # hours
    min_score: float = 50.0
    max_gap: int = 1  # non-qualifying hours a run may bridge
    require_continuous: bool = False


@dataclass(frozen=True)
class WindowSummary:
    """Aggregate view over a set of windows."""

    count: int
    total_hours: float
    average_score: float
    best_window: Optional[TimeWindow]


@dataclass(frozen=True)
class Recommendation:
    """The engine's output for one forecast and location."""

    decision: str  # excellent, acceptable, poor
    label: str
    confidence: float  # 0-1
    current_score: float
    current_hour: ScoringResult
    optimal_windows: Tuple[TimeWindow, ...]
    best_window: Optional[TimeWindow]
    summary: str
    warnings: Tuple[str, ...]
    tips: Tuple[str, ...]
    hourly_scores: Tuple[ScoringResult, ...]
    location: Location
    generated_at: datetime
    valid_until: datetime
    algorithm: str = ""
    metadata: Dict[str, str] = field(default_factory=dict)

    @property
    def has_window(self) -> bool:
        return self.best_window is not None

    def window_labels(self) -> List[str]:
        """Human-readable 'HH:MM-HH:MM' spans of all optimal windows, in local time."""
        tz = self.location.timezone
        return [
            f"{DateUtils.to_local(w.start, tz):%H:%M}-{DateUtils.to_local(w.end, tz):%H:%M}"
            for w in self.optimal_windows
        ]
