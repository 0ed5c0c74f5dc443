"""
Disqualification rule evaluation.

Rules are plain data records (see ``DisqualificationRule``); this module
evaluates an ordered rule list against one hour and provides factories for the
common rule shapes.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple

from ..models import DisqualificationRule, HourlyWeatherData, SEVERITY_HARD, SEVERITY_SOFT


@dataclass(frozen=True)
class DisqualificationOutcome:
    """Result of evaluating every rule against one hour."""

    disqualified: bool
    reasons: Tuple[str, ...]
    penalty: float  # total soft penalty in score points


def evaluate_rules(
    rules: Iterable[DisqualificationRule],
    data: HourlyWeatherData
) -> DisqualificationOutcome:
    """
    Evaluate all rules independently and collect every matching reason.

    A single hard match disqualifies the hour whatever else matched. Soft
    penalties are summed.

    Args:
        rules: Ordered rules
        data: Hour to check

    Returns:
        DisqualificationOutcome
    """
    reasons = []
    disqualified = False
    penalty = 0.0

    for rule in rules:
        if not rule.condition(data):
            continue
        reasons.append(rule.reason)
        if rule.is_hard:
            disqualified = True
        else:
            penalty += rule.penalty

    return DisqualificationOutcome(
        disqualified=disqualified,
        reasons=tuple(reasons),
        penalty=penalty
    )


# === RULE FACTORIES ===

def threshold_rule(
    name: str,
    field_name: str,
    threshold: float,
    reason: str,
    above: bool = True,
    inclusive: bool = False,
    severity: str = SEVERITY_HARD,
    penalty: float = 0.0
) -> DisqualificationRule:
    """
    Build a rule comparing one HourlyWeatherData attribute with a threshold.

    Args:
        name: Rule name
        field_name: Attribute of HourlyWeatherData (or property such as dew_point_spread)
        threshold: Comparison value
        reason: Human-readable reason
        above: Match values above the threshold (otherwise below)
        inclusive: Also match values equal to the threshold
        severity: 'hard' or 'soft'
        penalty: Soft penalty in score points

    Returns:
        DisqualificationRule
    """
    def condition(data: HourlyWeatherData) -> bool:
        value = getattr(data, field_name)
        if value is None:
            return False
        if above:
            return value >= threshold if inclusive else value > threshold
        return value <= threshold if inclusive else value < threshold

    return DisqualificationRule(
        name=name,
        condition=condition,
        reason=reason,
        severity=severity,
        penalty=penalty
    )


def condensation_risk_rule(min_spread: float = 1.0) -> DisqualificationRule:
    """Hard rule: dew-point spread below ``min_spread`` °C (exactly 1.0 passes)."""
    return threshold_rule(
        name="Dew point spread",
        field_name="dew_point_spread",
        threshold=min_spread,
        reason="High condensation risk",
        above=False,
    )


def rain_probability_rule(max_probability: float = 25.0) -> DisqualificationRule:
    """Hard rule: precipitation probability at or above ``max_probability`` %."""
    return threshold_rule(
        name="Rain probability",
        field_name="precipitation_probability",
        threshold=max_probability,
        reason="High rain probability",
        inclusive=True,
    )


def measured_precipitation_rule() -> DisqualificationRule:
    """Hard rule: any measured precipitation."""
    return threshold_rule(
        name="Active precipitation",
        field_name="precipitation",
        threshold=0.0,
        reason="Rain detected",
    )


def soft_rule(
    name: str,
    field_name: str,
    threshold: float,
    reason: str,
    penalty: float,
    above: bool = True
) -> DisqualificationRule:
    """Soft threshold rule subtracting ``penalty`` points."""
    return threshold_rule(
        name=name,
        field_name=field_name,
        threshold=threshold,
        reason=reason,
        above=above,
        severity=SEVERITY_SOFT,
        penalty=penalty,
    )
