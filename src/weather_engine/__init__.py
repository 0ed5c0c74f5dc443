"""
Weather Decision Engine

Scores hourly weather forecasts for everyday outdoor decisions, such as
drying washing outside or lighting a wood burner, and finds the best time
windows to do them.
"""

__version__ = "0.1.0"
__description__ = "Weather scoring and time-window decisions for everyday activities"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "WeatherDecisionApp":
        from .main import WeatherDecisionApp
        return WeatherDecisionApp
    if name == "create_scorer":
        from .apps import create_scorer
        return create_scorer
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "WeatherDecisionApp",
    "create_scorer",
]
