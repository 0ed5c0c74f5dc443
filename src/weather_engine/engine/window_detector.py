"""
Window detection.

Groups a scored hourly series into runs of qualifying hours, computes window
statistics, ranks the windows and optionally merges neighbours.

A window's ``end`` is exclusive (the end of its last hour), so the duration of
N contiguous hourly results is N hours.
"""

import logging
import statistics
from dataclasses import replace
from datetime import timedelta
from typing import List, Optional, Sequence

from ..core import constants
from ..core.date_utils import DateUtils
from ..models import ScoringResult, TimeWindow, WindowDetectionOptions, WindowSummary

HOUR = timedelta(hours=1)


class WindowDetector:
    """Find optimal time windows in a scored hourly series."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def find_optimal_windows(
        self,
        hourly_scores: Sequence[ScoringResult],
        options: Optional[WindowDetectionOptions] = None,
        **overrides
    ) -> List[TimeWindow]:
        """
        Find all qualifying windows, best average first.

        Args:
            hourly_scores: Chronological scored hours
            options: Detection options (defaults: min 2 h, min score 50, gap 1)
            **overrides: Individual option overrides

        Returns:
            Windows sorted by average score descending. Empty if nothing qualifies.
        """
        opts = replace(options or WindowDetectionOptions(), **overrides)

        runs = self._group_runs(hourly_scores, opts)

        windows = []
        for run in runs:
            window = self.build_window(run)
            if window.duration_hours < opts.min_duration:
                self.logger.debug(
                    f"Discarding {window.duration_hours:.1f}h run starting {window.start.isoformat()}"
                )
                continue
            windows.append(window)

        windows.sort(key=lambda w: w.average_score, reverse=True)

        self.logger.debug(
            f"Found {len(windows)} windows (min_score={opts.min_score}, "
            f"min_duration={opts.min_duration}, max_gap={opts.max_gap})"
        )
        return windows

    def _group_runs(
        self,
        hourly_scores: Sequence[ScoringResult],
        opts: WindowDetectionOptions
    ) -> List[List[ScoringResult]]:
        """Group qualifying hours into runs, absorbing short gaps verbatim."""
        runs: List[List[ScoringResult]] = []
        current: List[ScoringResult] = []
        last_index = -1

        for index, hour in enumerate(hourly_scores):
            if hour.disqualified or hour.overall_score < opts.min_score:
                continue

            if current:
                gap = index - last_index - 1
                if gap == 0:
                    current.append(hour)
                elif not opts.require_continuous and gap <= opts.max_gap:
                    current.extend(hourly_scores[last_index + 1:index])
                    current.append(hour)
                else:
                    runs.append(current)
                    current = [hour]
            else:
                current = [hour]

            last_index = index

        if current:
            runs.append(current)

        return runs

    def build_window(self, hours: Sequence[ScoringResult]) -> TimeWindow:
        """
        Compute statistics for a run of hours.

        Args:
            hours: Non-empty chronological run

        Returns:
            TimeWindow
        """
        if not hours:
            raise ValueError("Cannot build a window from no hours")

        scores = [h.overall_score for h in hours]
        length = len(hours)
        std_dev = statistics.pstdev(scores)
        consistency = max(0.0, 1 - std_dev / 100)
        disqualified = sum(1 for h in hours if h.disqualified)

        confidence = (
            0.3 * min(length / constants.WINDOW_LENGTH_REFERENCE, 1.0)
            + 0.5 * consistency
            + 0.2 * (1 - disqualified / length)
        )

        start = hours[0].timestamp
        end = hours[-1].timestamp + HOUR

        return TimeWindow(
            start=start,
            end=end,
            duration_hours=(end - start).total_seconds() / 3600,
            average_score=statistics.fmean(scores),
            min_score=min(scores),
            max_score=max(scores),
            hourly_scores=tuple(hours),
            consistency=consistency,
            confidence=max(0.0, min(1.0, confidence)),
        )

    @staticmethod
    def score_window(window: TimeWindow) -> float:
        """Composite quality score favouring long, stable windows."""
        return (
            window.average_score * 0.5
            + min(window.duration_hours / constants.WINDOW_LENGTH_REFERENCE, 1.0) * 25
            + window.consistency * 15
            + window.confidence * 10
        )

    def find_best_window(self, windows: Sequence[TimeWindow]) -> Optional[TimeWindow]:
        """Window with the highest composite score (first wins ties)."""
        if not windows:
            return None
        return max(windows, key=self.score_window)

    @staticmethod
    def select_best_window(windows: Sequence[TimeWindow]) -> Optional[TimeWindow]:
        """Highest average score; ties go to the longer, then the earlier window."""
        if not windows:
            return None
        return min(windows, key=lambda w: (-w.average_score, -w.duration_hours, w.start))

    def merge_windows(
        self,
        windows: Sequence[TimeWindow],
        max_gap_hours: float = constants.DEFAULT_MERGE_GAP_HOURS
    ) -> List[TimeWindow]:
        """
        Merge overlapping or nearly adjacent windows.

        Two windows merge when the time between the end of one and the start
        of the next is at most ``max_gap_hours``. Statistics are recomputed
        over the union of both windows' hours; hours in the gap belong to
        neither window and are not added.

        Returns:
            Merged windows in chronological order
        """
        if len(windows) <= 1:
            return list(windows)

        ordered = sorted(windows, key=lambda w: w.start)
        merged = [ordered[0]]
        max_gap = timedelta(hours=max_gap_hours)

        for window in ordered[1:]:
            current = merged[-1]
            if window.start - current.end <= max_gap:
                union = {h.timestamp: h for h in current.hourly_scores}
                union.update({h.timestamp: h for h in window.hourly_scores})
                hours = [union[ts] for ts in sorted(union)]
                merged[-1] = self.build_window(hours)
                self.logger.debug(
                    f"Merged windows at {current.start.isoformat()} and {window.start.isoformat()}"
                )
            else:
                merged.append(window)

        return merged

    @staticmethod
    def filter_by_time_of_day(
        windows: Sequence[TimeWindow],
        start_hour: int,
        end_hour: int,
        timezone: Optional[str] = None
    ) -> List[TimeWindow]:
        """
        Keep windows starting within [start_hour, end_hour) of the local day.

        Start times are converted to ``timezone`` (an IANA name) before the
        hour is read. A range with start_hour > end_hour wraps past midnight.
        """
        def in_range(hour: int) -> bool:
            if start_hour <= end_hour:
                return start_hour <= hour < end_hour
            return hour >= start_hour or hour < end_hour

        return [w for w in windows if in_range(DateUtils.to_local(w.start, timezone).hour)]

    def summarize_windows(self, windows: Sequence[TimeWindow]) -> WindowSummary:
        """Count, total hours, mean of window averages and best window."""
        if not windows:
            return WindowSummary(count=0, total_hours=0.0, average_score=0.0, best_window=None)

        return WindowSummary(
            count=len(windows),
            total_hours=sum(w.duration_hours for w in windows),
            average_score=statistics.fmean(w.average_score for w in windows),
            best_window=self.find_best_window(windows),
        )
