"""
Wind and shelter analysis.

Combines a location's shelter (urban density, exposure, elevation), the
alignment of the wind with the prevailing south-westerly and the gust
potential into an effective wind speed and a 0-100 wind score.
"""

import logging
import math
import statistics
from dataclasses import dataclass
from typing import Optional, Sequence

from ..core import constants
from ..models import Location
from ..normalization import angular_difference, normalize_wind_gusts

SHELTER_BY_DENSITY = {
    "urban": 0.7,
    "suburban": 0.5,
    "rural": 0.2,
}
DEFAULT_SHELTER = 0.5

EXPOSURE_MULTIPLIER = {
    "high": 0.5,
    "medium": 1.0,
    "low": 1.5,
}

GUST_DENSITY_MULTIPLIER = {
    "urban": 1.3,
    "rural": 0.8,
}

# (south, north, west, east)
UPLAND_BOXES = (
    (54.0, 54.8, -3.5, -2.5),  # Lake District
    (53.0, 53.5, -2.0, -1.5),  # Peak District
)
VALLEY_BOXES = (
    (51.3, 51.7, -1.0, 0.5),  # Thames
    (51.5, 52.2, -2.5, -2.0),  # Severn
)


@dataclass(frozen=True)
class WindAnalysis:
    """Wind assessment for one hour at one location."""

    wind_speed: float  # km/h, as forecast
    effective_speed: float  # km/h, after shelter
    shelter_factor: float  # 0-1
    direction_factor: float  # 0-1, 1 = aligned with prevailing wind
    gust_potential: float  # 0-1
    topography_factor: float  # regional wind effectiveness multiplier
    score: float  # 0-100


@dataclass(frozen=True)
class WindConsistency:
    """Wind steadiness over a forecast series."""

    speed_variability: float  # 0 = steady, 1 = highly variable
    direction_stability: float  # 0 = shifting, 1 = steady
    gustiness: float  # 0-1
    gust_ratio: Optional[float] = None  # mean gust / mean speed, when gusts are forecast


class WindAnalyzer:
    """Score wind for a specific location."""

    def __init__(
        self,
        prevailing_direction: float = constants.PREVAILING_WIND_DIRECTION,
        logger: Optional[logging.Logger] = None
    ):
        self.prevailing_direction = prevailing_direction
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def calculate_shelter_factor(location: Location) -> float:
        """
        Shelter factor 0 (exposed) to 1 (sheltered).

        Uses the location's own shelter factor when known, otherwise one derived
        from urban density. Wind exposure and elevation then adjust it: high
        ground loses 30 % of its shelter per 1000 m.
        """
        if location.shelter_factor is not None:
            shelter = location.shelter_factor
        else:
            shelter = SHELTER_BY_DENSITY.get(location.urban_density, DEFAULT_SHELTER)

        if location.wind_exposure:
            shelter *= EXPOSURE_MULTIPLIER.get(location.wind_exposure, 1.0)

        if location.elevation:
            shelter *= max(0.0, 1 - location.elevation / 1000 * 0.3)

        return max(0.0, min(1.0, shelter))

    def calculate_direction_factor(self, wind_direction: float) -> float:
        """1.0 for the prevailing direction falling to 0.0 for its opposite."""
        return 1 - angular_difference(wind_direction, self.prevailing_direction) / 180

    @staticmethod
    def calculate_gust_potential(wind_speed: float, location: Location) -> float:
        """Likelihood of disruptive gusts, 0-1."""
        if wind_speed < 15:
            potential = 0.1
        elif wind_speed < 25:
            potential = 0.3
        elif wind_speed < 40:
            potential = 0.6
        else:
            potential = 0.9

        potential *= GUST_DENSITY_MULTIPLIER.get(location.urban_density, 1.0)

        if location.elevation:
            potential *= 1 + location.elevation / 1000 * 0.2

        return max(0.0, min(1.0, potential))

    @staticmethod
    def regional_topography_factor(latitude: float, longitude: float) -> float:
        """
        Regional multiplier for how effective wind is at drying (0.85-1.25).

        Highland Scotland channels and blocks winds, Welsh valleys and the
        Thames and Severn valleys hold moisture, upland Lake and Peak District
        sites are more exposed. Elsewhere 1.0.
        """
        if latitude > 56.5:
            effect = math.sin((longitude + 4) * math.pi) * 0.1 + 1.0
            return max(0.85, min(1.25, effect))

        if 51.5 < latitude < 53 and longitude < -3:
            return 0.90

        for south, north, west, east in UPLAND_BOXES:
            if south < latitude < north and west < longitude < east:
                return 1.15

        for south, north, west, east in VALLEY_BOXES:
            if south < latitude < north and west < longitude < east:
                return 0.92

        return 1.0

    @staticmethod
    def score_effective_speed(effective_speed: float) -> float:
        """Piecewise curve peaking at 80 for winds around 15 km/h."""
        if effective_speed < 5:
            return 30.0
        if effective_speed < 15:
            return 60 + (effective_speed - 5) * 2
        if effective_speed < 25:
            return 80 + (effective_speed - 15)
        if effective_speed < 40:
            return 60 - (effective_speed - 25)
        return max(0.0, 40 - (effective_speed - 40) * 2)

    def analyze(self, wind_speed: float, wind_direction: float, location: Location) -> WindAnalysis:
        """
        Analyze one hour's wind at a location.

        Args:
            wind_speed: Forecast wind speed (km/h)
            wind_direction: Direction the wind comes from (degrees)
            location: Location

        Returns:
            WindAnalysis with a score clamped to 0-100
        """
        shelter = self.calculate_shelter_factor(location)
        direction = self.calculate_direction_factor(wind_direction)
        gusts = self.calculate_gust_potential(wind_speed, location)
        effective = wind_speed * (1 - shelter * constants.SHELTER_WIND_REDUCTION)

        score = self.score_effective_speed(effective)
        if effective > 25:
            # Shelter softens strong winds
            score += shelter * 15
        score += direction * 5
        score -= gusts * 20
        score = max(0.0, min(100.0, score))

        self.logger.debug(
            f"Wind {wind_speed:.1f} km/h -> effective {effective:.1f} km/h "
            f"(shelter {shelter:.2f}, direction {direction:.2f}, gusts {gusts:.2f}), score {score:.1f}"
        )

        return WindAnalysis(
            wind_speed=wind_speed,
            effective_speed=effective,
            shelter_factor=shelter,
            direction_factor=direction,
            gust_potential=gusts,
            topography_factor=self.regional_topography_factor(location.latitude, location.longitude),
            score=score,
        )

    @staticmethod
    def direction_stability(directions: Sequence[float]) -> float:
        """
        Steadiness of wind direction over a series (mean resultant length).

        Returns:
            1.0 for a constant direction, near 0.0 for directions spread all
            round the compass; 1.0 for fewer than two readings
        """
        if len(directions) < 2:
            return 1.0

        sin_sum = sum(math.sin(math.radians(d)) for d in directions)
        cos_sum = sum(math.cos(math.radians(d)) for d in directions)
        return math.hypot(sin_sum, cos_sum) / len(directions)

    @staticmethod
    def speed_variability(speeds: Sequence[float]) -> float:
        """Coefficient of variation of wind speed, capped at 1."""
        if len(speeds) < 2:
            return 0.0
        mean_speed = statistics.fmean(speeds)
        if mean_speed <= 0:
            return 0.0
        return min(1.0, statistics.pstdev(speeds) / mean_speed)

    def analyze_consistency(
        self,
        speeds: Sequence[float],
        directions: Sequence[float],
        gusts: Optional[Sequence[Optional[float]]] = None
    ) -> WindConsistency:
        """
        Analyze how steady the wind is over a series.

        Gustiness is estimated as 1.5 x the speed variability. When every hour
        carries a gust forecast, the gust-to-speed ratio is scored as well and
        the gustier of the two estimates is kept.

        Args:
            speeds: Wind speeds (km/h)
            directions: Wind directions (degrees)
            gusts: Optional gust speeds (km/h), aligned with speeds

        Returns:
            WindConsistency
        """
        variability = self.speed_variability(speeds)
        gustiness = min(1.0, variability * 1.5)

        gust_ratio = None
        if gusts and speeds and all(g is not None for g in gusts):
            mean_speed = statistics.fmean(speeds)
            mean_gust = statistics.fmean(gusts)
            gust_ratio = mean_gust / (mean_speed or 1)
            gustiness = max(gustiness, 1 - normalize_wind_gusts(mean_speed, mean_gust) / 100)

        consistency = WindConsistency(
            speed_variability=variability,
            direction_stability=self.direction_stability(directions),
            gustiness=gustiness,
            gust_ratio=gust_ratio,
        )
        self.logger.debug(f"Wind consistency over {len(speeds)} hours: {consistency}")
        return consistency
