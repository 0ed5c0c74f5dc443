"""
Application scorers.

Each application is one WeatherScorer subclass with its own weights,
thresholds and rules.
"""

import logging
from typing import Any, Dict, Optional

from ..engine import WeatherScorer
from .drying import DryingScorer, DRYING_CONFIG
from .burning import BurningScorer, BurningWindow, BURNING_CONFIG, get_indoor_temp

SCORERS = {
    "drying": (DryingScorer, DRYING_CONFIG),
    "burning": (BurningScorer, BURNING_CONFIG),
}


def create_scorer(
    name: str,
    overrides: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None
) -> WeatherScorer:
    """
    Build the scorer for a named application.

    Args:
        name: 'drying' or 'burning'
        overrides: Optional AlgorithmConfig overrides (weights, thresholds, features)
        logger: Logger instance

    Returns:
        Configured scorer

    Raises:
        ValueError: For an unknown application or an invalid override
    """
    try:
        scorer_class, base_config = SCORERS[name]
    except KeyError:
        raise ValueError(f"Unknown application '{name}'. Available: {', '.join(SCORERS)}")

    return scorer_class(config=base_config.with_overrides(overrides), logger=logger)


__all__ = [
    "SCORERS",
    "create_scorer",
    "DryingScorer",
    "DRYING_CONFIG",
    "BurningScorer",
    "BurningWindow",
    "BURNING_CONFIG",
    "get_indoor_temp",
]
