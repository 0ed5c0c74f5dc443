"""
Tests for window detection, ranking and merging.
"""

from datetime import timedelta

import pytest  # type: ignore

from weather_engine.engine import WindowDetector
from weather_engine.models import WindowDetectionOptions


@pytest.fixture
def detector():
    return WindowDetector()


@pytest.fixture
def series(make_result):
    """Build a scored series from a list of scores (None = disqualified)."""
    def _series(scores):
        return [
            make_result(i, 0 if s is None else s, disqualified=s is None)
            for i, s in enumerate(scores)
        ]
    return _series


class TestFindOptimalWindows:
    """Test run grouping and filtering."""

    def test_two_hour_run_qualifies(self, detector, series):
        windows = detector.find_optimal_windows(series([20, 80, 80, 20]))
        assert len(windows) == 1
        window = windows[0]
        assert window.duration_hours == 2.0
        assert window.start.hour == 13
        assert window.end.hour == 15
        assert window.average_score == 80.0

    def test_isolated_hour_is_not_a_window(self, detector, series):
        assert detector.find_optimal_windows(series([20, 90, 20, 20])) == []

    def test_nothing_qualifies(self, detector, series):
        assert detector.find_optimal_windows(series([10, 20, 30])) == []

    def test_empty_series(self, detector):
        assert detector.find_optimal_windows([]) == []

    def test_single_gap_bridged_verbatim(self, detector, series):
        """The gap hour is kept in the window and counts toward its stats."""
        windows = detector.find_optimal_windows(series([80, 30, 80]))
        assert len(windows) == 1
        assert windows[0].duration_hours == 3.0
        assert abs(windows[0].average_score - 190 / 3) < 1e-9
        assert windows[0].min_score == 30.0

    def test_disqualified_gap_is_counted(self, detector, series):
        windows = detector.find_optimal_windows(series([80, None, 80]))
        assert windows[0].disqualified_count == 1

    def test_two_hour_gap_splits(self, detector, series):
        windows = detector.find_optimal_windows(series([80, 80, 10, 10, 70, 70]))
        assert len(windows) == 2

    def test_require_continuous(self, detector, series):
        windows = detector.find_optimal_windows(
            series([80, 80, 30, 80, 80]), require_continuous=True
        )
        assert len(windows) == 2
        assert all(w.duration_hours == 2.0 for w in windows)

    def test_sorted_by_average_descending(self, detector, series):
        windows = detector.find_optimal_windows(series([60, 60, 10, 10, 90, 90]))
        assert [w.average_score for w in windows] == [90.0, 60.0]

    def test_options_object(self, detector, series):
        options = WindowDetectionOptions(min_duration=3, min_score=70, max_gap=0)
        windows = detector.find_optimal_windows(series([75, 75, 75, 60, 75, 75]), options)
        assert len(windows) == 1
        assert windows[0].duration_hours == 3.0

    def test_window_statistics(self, detector, series):
        window = detector.find_optimal_windows(series([60, 80, 100]))[0]
        assert window.min_score == 60.0
        assert window.max_score == 100.0
        assert 0.0 <= window.consistency <= 1.0
        assert 0.0 <= window.confidence <= 1.0
        assert window.end == window.hourly_scores[-1].timestamp + timedelta(hours=1)


class TestBestWindow:
    """Test the two ranking strategies."""

    def test_select_best_prefers_average(self, detector, series):
        windows = detector.find_optimal_windows(series([60, 60, 60, 60, 10, 10, 90, 90]))
        assert detector.select_best_window(windows).average_score == 90.0

    def test_select_best_tie_prefers_longer_then_earlier(self, detector, series):
        windows = detector.find_optimal_windows(series([80, 80, 10, 10, 80, 80, 80]))
        best = detector.select_best_window(windows)
        assert best.duration_hours == 3.0

        windows = detector.find_optimal_windows(series([80, 80, 10, 10, 80, 80]))
        best = detector.select_best_window(windows)
        assert best.start.hour == 12

    def test_composite_prefers_long_stable_window(self, detector, series):
        """Six steady hours beat two slightly better ones."""
        windows = detector.find_optimal_windows(series([75] * 6 + [10, 10] + [80, 80]))
        best = detector.find_best_window(windows)
        assert best.duration_hours == 6.0

    def test_no_windows(self, detector):
        assert detector.find_best_window([]) is None
        assert detector.select_best_window([]) is None


class TestMergeWindows:
    """Test merging of near-adjacent windows."""

    def test_one_hour_gap_merges(self, detector, series):
        scored = series([80, 80, 10, 90, 90])
        first = detector.build_window(scored[0:2])
        second = detector.build_window(scored[3:5])

        merged = detector.merge_windows([second, first], max_gap_hours=1)
        assert len(merged) == 1

        expected = detector.build_window(scored[0:2] + scored[3:5])
        assert merged[0].start == first.start
        assert merged[0].average_score == expected.average_score
        assert len(merged[0].hourly_scores) == 4, "Gap hours are not added"

    def test_two_hour_gap_does_not_merge(self, detector, series):
        scored = series([80, 80, 10, 10, 90, 90])
        first = detector.build_window(scored[0:2])
        second = detector.build_window(scored[4:6])
        assert len(detector.merge_windows([first, second], max_gap_hours=1)) == 2

    def test_single_window_unchanged(self, detector, series):
        window = detector.build_window(series([80, 80]))
        assert detector.merge_windows([window]) == [window]


class TestFilterAndSummary:
    """Test time-of-day filtering and summaries."""

    def test_filter_by_time_of_day(self, detector, series):
        # base_time is 12:00 UTC, so windows start at 12:00 and 16:00
        windows = detector.find_optimal_windows(series([80, 80, 10, 10, 80, 80]))
        morning = detector.filter_by_time_of_day(windows, 9, 13)
        assert [w.start.hour for w in morning] == [12]

    def test_filter_wraps_midnight(self, detector, series):
        windows = detector.find_optimal_windows(series([80, 80, 10, 10, 80, 80]))
        assert detector.filter_by_time_of_day(windows, 22, 6) == []
        assert len(detector.filter_by_time_of_day(windows, 15, 13)) == 2

    def test_filter_uses_local_time(self, detector, series):
        # 12:00 and 16:00 UTC are 13:00 and 17:00 in London summer time
        windows = detector.find_optimal_windows(series([80, 80, 10, 10, 80, 80]))
        local = detector.filter_by_time_of_day(windows, 13, 14, "Europe/London")
        assert [w.start.hour for w in local] == [12]
        assert detector.filter_by_time_of_day(windows, 12, 13, "Europe/London") == []

    def test_summary(self, detector, series):
        windows = detector.find_optimal_windows(series([60, 60, 10, 10, 90, 90]))
        summary = detector.summarize_windows(windows)
        assert summary.count == 2
        assert summary.total_hours == 4.0
        assert summary.average_score == 75.0
        assert summary.best_window is not None

    def test_empty_summary(self, detector):
        summary = detector.summarize_windows([])
        assert summary.count == 0
        assert summary.best_window is None

    def test_build_window_rejects_empty(self, detector):
        with pytest.raises(ValueError):
            detector.build_window([])
