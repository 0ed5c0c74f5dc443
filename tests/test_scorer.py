"""
Tests for the shared scorer base: weighting, modifiers, recommendations.

Uses a minimal two-component application so the arithmetic stays visible.
"""

import logging
from datetime import datetime, timedelta

import pytest  # type: ignore
import pytz

from weather_engine.engine import WeatherScorer, rain_probability_rule, soft_rule
from weather_engine.models import (
    AlgorithmConfig,
    DecisionThresholds,
    FeatureFlags,
    Location,
    DECISION_ACCEPTABLE,
    DECISION_EXCELLENT,
    DECISION_POOR,
)


class FixedScorer(WeatherScorer):
    """Scores every hour from its temperature: comfort = temperature * 4."""

    def get_decision_thresholds(self):
        return self.config.thresholds

    def score_hour(self, data, location):
        outcome = self.check_disqualification(data)
        if outcome.disqualified:
            return self.disqualified_result(data, outcome.reasons)
        components = {"comfort": min(100.0, data.temperature * 4), "calm": 100.0}
        return self.build_result(data, location, components, outcome)


def _config(features=None, rules=()):
    return AlgorithmConfig(
        name="Fixed",
        version="0.9.0",
        weights={"comfort": 0.5, "calm": 0.5},
        thresholds=DecisionThresholds(excellent=80, acceptable=60, poor=0),
        disqualification_rules=rules,
        features=features or FeatureFlags(),
    )


@pytest.fixture
def scorer():
    return FixedScorer(
        _config(rules=(
            rain_probability_rule(),
            soft_rule("Windy", "wind_speed", 50.0, "Dangerous wind speeds", penalty=20),
        ))
    )


class TestPerHourScoring:
    """Test base score, penalties and disqualification."""

    def test_weighted_score(self, scorer, make_hour, london):
        result = scorer.score_hour(make_hour(temperature=15.0), london)
        assert result.overall_score == 80.0
        assert result.modifiers == {}
        assert not result.disqualified

    def test_disqualified_hour_is_zero(self, scorer, make_hour, london):
        result = scorer.score_hour(make_hour(precipitation_probability=60.0), london)
        assert result.disqualified
        assert result.overall_score == 0.0
        assert result.disqualification_reasons == ("High rain probability",)
        assert result.component_scores == {"comfort": 0.0, "calm": 0.0}

    def test_soft_penalty(self, scorer, make_hour, london):
        result = scorer.score_hour(make_hour(temperature=15.0, wind_speed=60.0), london)
        assert result.overall_score == 60.0
        assert result.disqualification_reasons == ("Dangerous wind speeds",)

    def test_penalty_floors_at_zero(self, scorer, make_hour, london):
        result = scorer.score_hour(make_hour(temperature=0.0, wind_speed=60.0, humidity=50.0), london)
        assert result.overall_score == 30.0
        result = FixedScorer(_config(rules=(
            soft_rule("Huge", "wind_speed", 10.0, "Huge", penalty=500),
        ))).score_hour(make_hour(), london)
        assert result.overall_score == 0.0

    def test_unknown_component_skipped(self, caplog):
        scorer = FixedScorer(_config(), logger=logging.getLogger("tests.scorer"))
        with caplog.at_level(logging.WARNING):
            total = scorer.apply_weights({"comfort": 100.0, "mystery": 100.0})
        assert total == 50.0
        assert "mystery" in caplog.text

    def test_idempotent(self, scorer, make_hour, london):
        hour = make_hour(temperature=17.3)
        assert scorer.score_hour(hour, london) == scorer.score_hour(hour, london)

    def test_invalid_config_rejected(self):
        """A configuration corrupted after construction is caught by the scorer."""
        config = _config()
        object.__setattr__(config, "weights", {"comfort": 0.9, "calm": 0.5})
        with pytest.raises(ValueError):
            FixedScorer(config)


class TestModifiers:
    """Test location and temporal modifiers."""

    def test_apply_modifiers_multiplicative_and_clamped(self):
        assert abs(WeatherScorer.apply_modifiers(50.0, {"a": 10.0, "b": -50.0}) - 27.5) < 1e-9
        assert WeatherScorer.apply_modifiers(90.0, {"a": 50.0}) == 100.0
        assert WeatherScorer.apply_modifiers(50.0, {"a": -150.0}) == 0.0

    def test_disabled_features_add_nothing(self, scorer, make_hour, london):
        assert scorer.calculate_location_modifiers(london, make_hour()) == {}

    def test_enabled_features_present(self, make_hour, london):
        scorer = FixedScorer(_config(features=FeatureFlags(True, True, True, True)))
        modifiers = scorer.calculate_location_modifiers(london, make_hour())
        assert set(modifiers) == {"coastal", "wind", "topographic"}
        assert modifiers["topographic"] == 0.0, "Default shelter 0.5 is neutral"

        result = scorer.score_hour(make_hour(), london)
        assert result.modifiers["temporal"] == 0.0

    def test_wind_modifier_from_analyzer(self, make_hour, london):
        scorer = FixedScorer(_config(features=FeatureFlags(wind_analysis=True)))
        hour = make_hour()
        expected = scorer.wind_analyzer.analyze(hour.wind_speed, hour.wind_direction, london).score - 50
        assert scorer.calculate_location_modifiers(london, hour)["wind"] == expected

    def test_apply_location_modifiers_bounded(self, make_hour, london):
        scorer = FixedScorer(_config(features=FeatureFlags(True, True, True, False)))
        for speed in (0.0, 20.0, 90.0):
            score = scorer.apply_location_modifiers(95.0, london, make_hour(wind_speed=speed))
            assert 0.0 <= score <= 100.0


class TestRecommendation:
    """Test recommendation synthesis."""

    @pytest.fixture
    def hours(self, make_hour):
        temperatures = [10.0, 12.0, 22.0, 24.0, 25.0, 2.0, 1.0, 23.0, 23.0, 23.0]
        return [make_hour(i, temperature=t) for i, t in enumerate(temperatures)]

    def test_empty_series_rejected(self, scorer, london):
        with pytest.raises(ValueError):
            scorer.generate_recommendation([], london)

    def test_recommendation(self, scorer, hours, london):
        generated_at = datetime(2024, 6, 15, 11, 55, tzinfo=pytz.UTC)
        recommendation = scorer.recommend(hours, london, generated_at)

        # First hour: (40 + 100) / 2 = 70
        assert recommendation.current_score == 70.0
        assert recommendation.decision == DECISION_ACCEPTABLE
        assert recommendation.label == "Acceptable"
        assert recommendation.generated_at == generated_at
        assert recommendation.valid_until == hours[0].time + timedelta(minutes=10)
        assert recommendation.algorithm == "Fixed"
        assert recommendation.metadata == {"version": "0.9.0"}
        assert len(recommendation.hourly_scores) == len(hours)

    def test_best_window(self, scorer, hours, london):
        recommendation = scorer.recommend(hours, london)
        assert recommendation.has_window
        best = recommendation.best_window
        assert best.average_score == max(w.average_score for w in recommendation.optimal_windows)
        assert "Best window:" in recommendation.summary
        assert "optimal windows found in the next 10 hours" in recommendation.summary

    def test_no_window_summary(self, scorer, make_hour, london):
        hours = [make_hour(i, precipitation_probability=80.0) for i in range(4)]
        recommendation = scorer.recommend(hours, london)
        assert recommendation.decision == DECISION_POOR
        assert recommendation.best_window is None
        assert "No optimal windows found in the next 4 hours." in recommendation.summary
        assert "High chance of rain in forecast period" in recommendation.warnings

    def test_wait_tip_when_poor_now(self, scorer, make_hour, london):
        hours = [make_hour(0, temperature=2.0)] + [make_hour(i, temperature=24.0) for i in range(1, 4)]
        recommendation = scorer.recommend(hours, london)
        assert recommendation.decision == DECISION_POOR
        assert "Wait until 13:00 for better conditions" in recommendation.tips

    def test_strong_wind_warning(self, scorer, make_hour, london):
        hours = [make_hour(0), make_hour(1, wind_speed=55.0)]
        recommendation = scorer.recommend(hours, london)
        assert "Strong winds expected (up to 55 km/h)" in recommendation.warnings

    def test_window_labels(self, scorer, hours, london):
        recommendation = scorer.recommend(hours, london)
        assert all("-" in label for label in recommendation.window_labels())

    def test_window_labels_in_local_time(self, scorer, hours):
        bst = Location(latitude=51.5074, longitude=-0.1278, name="London", timezone="Europe/London")
        recommendation = scorer.recommend(hours, bst)
        labels = recommendation.window_labels()

        assert "13:00-18:00" in labels
        assert labels == [
            f"{w.start + timedelta(hours=1):%H:%M}-{w.end + timedelta(hours=1):%H:%M}"
            for w in recommendation.optimal_windows
        ]

    def test_excellent_now(self, scorer, make_hour, london):
        hours = [make_hour(i, temperature=25.0) for i in range(3)]
        recommendation = scorer.recommend(hours, london)
        assert recommendation.decision == DECISION_EXCELLENT


class TestConfidence:
    """Test recommendation confidence."""

    def test_bounded(self, make_result):
        scores = [make_result(i, s) for i, s in enumerate([0, 100, 0, 100])]
        assert 0.0 <= WeatherScorer.calculate_confidence(scores, []) <= 1.0

    def test_more_windows_more_confidence(self, make_result):
        scores = [make_result(i, 70) for i in range(4)]
        none = WeatherScorer.calculate_confidence(scores, [])
        two = WeatherScorer.calculate_confidence(scores, [object(), object()])
        assert two > none

    def test_disqualified_hours_reduce_confidence(self, make_result):
        clean = [make_result(i, 0) for i in range(4)]
        blocked = [make_result(i, 0, disqualified=True) for i in range(4)]
        assert WeatherScorer.calculate_confidence(blocked, []) < WeatherScorer.calculate_confidence(
            clean, []
        )
