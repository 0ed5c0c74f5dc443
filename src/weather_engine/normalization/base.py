"""
Shared helpers for normalization curves.

Every public normalization function routes its result through ``clamp_score``
so that no input, however extreme, escapes the 0-100 range.
"""

from typing import Optional

from ..core import constants


def clamp_score(value: float) -> float:
    """Clamp a raw curve value into [0, 100]."""
    return max(constants.MIN_SCORE, min(constants.MAX_SCORE, value))


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def normalize_range(
    value: float,
    minimum: float,
    maximum: float,
    optimal: Optional[float] = None
) -> float:
    """
    Linear normalization between two bounds, optionally peaking at an optimum.

    Without ``optimal`` the score ramps from 0 at ``minimum`` to 100 at
    ``maximum``. With it, the score is 100 at ``optimal`` and falls linearly
    to 0 at both bounds.

    Args:
        value: Raw value
        minimum: Lower bound (score 0)
        maximum: Upper bound (score 100, or 0 when an optimum is given)
        optimal: Optional peak value

    Returns:
        Score between 0 and 100
    """
    if maximum <= minimum:
        raise ValueError(f"maximum must exceed minimum, got {minimum}..{maximum}")

    if optimal is None:
        return clamp_score((value - minimum) / (maximum - minimum) * 100)

    if value <= optimal:
        if optimal == minimum:
            return constants.MAX_SCORE if value == optimal else constants.MIN_SCORE
        return clamp_score((value - minimum) / (optimal - minimum) * 100)

    if optimal == maximum:
        return constants.MIN_SCORE
    return clamp_score(100 - (value - optimal) / (maximum - optimal) * 100)
