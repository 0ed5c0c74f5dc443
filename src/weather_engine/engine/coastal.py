"""
Coastal intelligence.

Resolves how far a location is from the sea, classifies it into one of five
marine-influence tiers and works out whether a given wind blows offshore or
onshore there.

Reference data (known places, coastline bearing points, the fallback bounding
box and regional corrections) is loaded once from the packaged JSON file into
an immutable ``CoastalReference``; every lookup is a pure function of that
snapshot.
"""

import json
import logging
import math
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from ..core import constants
from ..core.date_utils import DateUtils
from ..models import Location
from ..normalization import angular_difference
from .geo import haversine_distance, initial_bearing

DEFAULT_REFERENCE_FILE = Path(__file__).resolve().parent.parent / "data" / "coastal_reference.json"

STRONGLY_COASTAL = "STRONGLY_COASTAL"
COASTAL = "COASTAL"
TRANSITIONAL = "TRANSITIONAL"
WEAKLY_INLAND = "WEAKLY_INLAND"
STRONGLY_INLAND = "STRONGLY_INLAND"

# (exclusive upper distance km, tier)
TIER_CUTOFFS = (
    (5.0, STRONGLY_COASTAL),
    (10.0, COASTAL),
    (20.0, TRANSITIONAL),
    (40.0, WEAKLY_INLAND),
)

SEASONAL_COEFFICIENTS = {
    "summer": 0.25,
    "winter": 0.08,
    "spring": 0.15,
    "autumn": 0.15,
}

# Inland sites dry better in westerlies and worse in cold winter easterlies
WESTERLY_SECTOR = (225.0, 315.0)
EASTERLY_SECTOR = (45.0, 135.0)
INLAND_WESTERLY_BONUS = {STRONGLY_INLAND: 1.08, WEAKLY_INLAND: 1.04}
INLAND_WINTER_EASTERLY_PENALTY = {STRONGLY_INLAND: 0.95, WEAKLY_INLAND: 0.97}


@dataclass(frozen=True)
class ReferencePlace:
    name: str
    latitude: float
    longitude: float
    coastal_distance: float  # km


@dataclass(frozen=True)
class CoastPoint:
    name: str
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Bounds:
    north: float
    south: float
    east: float
    west: float


@dataclass(frozen=True)
class RegionalCorrection:
    """
    Distance multiplier applied inside a lat/lon box.

    Bounds are open unless ``lon_min_inclusive`` is set, which lets two boxes
    share a meridian without leaving a gap on it.
    """

    name: str
    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float
    multiplier: float
    lon_min_inclusive: bool = False

    def contains(self, latitude: float, longitude: float) -> bool:
        if not self.lat_min < latitude < self.lat_max:
            return False
        if self.lon_min_inclusive:
            return self.lon_min <= longitude < self.lon_max
        return self.lon_min < longitude < self.lon_max


@dataclass(frozen=True)
class CoastalReference:
    """Immutable snapshot of the coastal reference tables."""

    places: Mapping[str, ReferencePlace]
    coast_points: Tuple[CoastPoint, ...]
    bounds: Bounds
    corrections: Tuple[RegionalCorrection, ...]


@dataclass(frozen=True)
class CoastalModifiers:
    """Fixed adjustments carried by a coastal tier."""

    humidity_penalty: float
    offshore_bonus: float
    onshore_penalty: float
    temperature_moderation: float
    description: str


TIER_MODIFIERS = MappingProxyType({
    STRONGLY_COASTAL: CoastalModifiers(1.15, 1.20, 0.85, 0.95, "Strong marine influence"),
    COASTAL: CoastalModifiers(1.10, 1.15, 0.90, 0.97, "Clear marine influence"),
    TRANSITIONAL: CoastalModifiers(1.05, 1.08, 0.95, 0.99, "Mixed marine/continental conditions"),
    WEAKLY_INLAND: CoastalModifiers(1.02, 1.03, 0.98, 1.01, "Slight continental advantage"),
    STRONGLY_INLAND: CoastalModifiers(1.0, 1.0, 1.0, 1.03, "Full continental drying advantage"),
})


@dataclass(frozen=True)
class CoastalAnalysis:
    """Coastal context for one location, wind direction and date."""

    distance: float  # km
    classification: str
    influence: float  # 0-1
    is_coastal: bool
    modifiers: CoastalModifiers
    bearing_to_coast: float  # degrees
    is_offshore: bool
    season: str
    seasonal_multiplier: float
    direction_factor: float  # multiplier, 1.0 = neutral


@lru_cache(maxsize=None)
def load_coastal_reference(path: Optional[str] = None) -> CoastalReference:
    """
    Load coastal reference tables from JSON (cached per path).

    Args:
        path: Reference file path; the packaged table when None

    Returns:
        CoastalReference
    """
    reference_path = Path(path) if path else DEFAULT_REFERENCE_FILE
    with open(reference_path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    places = {
        name: ReferencePlace(
            name=name,
            latitude=entry["lat"],
            longitude=entry["lon"],
            coastal_distance=entry["coastal_distance"],
        )
        for name, entry in raw.get("locations", {}).items()
        if entry.get("coastal_distance") is not None
    }

    return CoastalReference(
        places=MappingProxyType(places),
        coast_points=tuple(
            CoastPoint(name=p["name"], latitude=p["lat"], longitude=p["lon"])
            for p in raw.get("coast_points", [])
        ),
        bounds=Bounds(**raw["bounds"]),
        corrections=tuple(RegionalCorrection(**c) for c in raw.get("regional_corrections", [])),
    )


class CoastalIntelligence:
    """Coastal distance resolution, tier classification and wind orientation."""

    def __init__(
        self,
        reference: Optional[CoastalReference] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.reference = reference or load_coastal_reference()
        self.logger = logger or logging.getLogger(__name__)

    # === SECTION 1: DISTANCE RESOLUTION ===

    def resolve_distance(self, location: Location) -> float:
        """Coastal distance of a location, derived when the Location has none."""
        if location.coastal_distance is not None:
            return location.coastal_distance
        return self.calculate_distance(location.latitude, location.longitude, location.name)

    def calculate_distance(
        self,
        latitude: float,
        longitude: float,
        name: Optional[str] = None
    ) -> float:
        """
        Resolve coastal distance: exact name match, then inverse-distance
        interpolation from the nearest known places, then the bounding-box
        estimate.

        Returns:
            Distance to the coast (km, >= 0)
        """
        if name and name in self.reference.places:
            distance = self.reference.places[name].coastal_distance
            self.logger.debug(f"Coastal distance for {name} from reference table: {distance} km")
            return distance

        interpolated = self.interpolate_distance(latitude, longitude)
        if interpolated is not None:
            self.logger.debug(
                f"Interpolated coastal distance at ({latitude}, {longitude}): {interpolated:.1f} km"
            )
            return interpolated

        estimate = self.estimate_from_bounds(latitude, longitude)
        self.logger.debug(
            f"Bounding-box coastal distance at ({latitude}, {longitude}): {estimate:.1f} km"
        )
        return estimate

    def interpolate_distance(self, latitude: float, longitude: float) -> Optional[float]:
        """
        Inverse-distance weighted coastal distance from the nearest known places.

        Weight is 1 / (distance + 1). Returns None when the table is empty.
        """
        nearest = sorted(
            (
                (haversine_distance(latitude, longitude, p.latitude, p.longitude), p)
                for p in self.reference.places.values()
            ),
            key=lambda item: item[0],
        )[:constants.IDW_NEIGHBOURS]

        if not nearest:
            return None

        weights = [1 / (d + 1) for d, _ in nearest]
        weighted = sum(w * p.coastal_distance for w, (_, p) in zip(weights, nearest))
        return max(0.0, weighted / sum(weights))

    def estimate_from_bounds(self, latitude: float, longitude: float) -> float:
        """Distance to the nearest bounding-box edge, regionally corrected."""
        b = self.reference.bounds
        edge_distance = min(
            (b.north - latitude) * constants.KM_PER_DEGREE_LATITUDE,
            (latitude - b.south) * constants.KM_PER_DEGREE_LATITUDE,
            (b.east - longitude) * constants.KM_PER_DEGREE_LONGITUDE,
            (longitude - b.west) * constants.KM_PER_DEGREE_LONGITUDE,
        )
        edge_distance = max(0.0, edge_distance)

        for correction in self.reference.corrections:
            if correction.contains(latitude, longitude):
                return edge_distance * correction.multiplier
        return edge_distance

    # === SECTION 2: CLASSIFICATION ===

    @staticmethod
    def classify(distance: float) -> str:
        """Five-tier classification by distance from the coast."""
        for upper, tier in TIER_CUTOFFS:
            if distance < upper:
                return tier
        return STRONGLY_INLAND

    @staticmethod
    def get_modifiers(classification: str) -> CoastalModifiers:
        return TIER_MODIFIERS[classification]

    @staticmethod
    def coastal_influence(distance: float) -> float:
        """Marine influence 0-1, decaying exponentially with distance."""
        return math.exp(-max(0.0, distance) / constants.COASTAL_INFLUENCE_DECAY_KM)

    # === SECTION 3: WIND ORIENTATION ===

    def nearest_coast_point(self, latitude: float, longitude: float) -> CoastPoint:
        if not self.reference.coast_points:
            raise ValueError("Coastal reference has no coastline points")
        return min(
            self.reference.coast_points,
            key=lambda p: haversine_distance(latitude, longitude, p.latitude, p.longitude),
        )

    def bearing_to_coast(self, latitude: float, longitude: float) -> float:
        point = self.nearest_coast_point(latitude, longitude)
        return initial_bearing(latitude, longitude, point.latitude, point.longitude)

    def is_offshore_wind(self, latitude: float, longitude: float, wind_direction: float) -> bool:
        """
        True when the wind blows from land towards the sea.

        ``wind_direction`` is where the wind comes from; it is offshore when
        the direction it blows towards is within 60 degrees of the bearing to
        the nearest coast.
        """
        blowing_to = (wind_direction + 180) % 360
        bearing = self.bearing_to_coast(latitude, longitude)
        return angular_difference(blowing_to, bearing) < constants.OFFSHORE_ANGLE_TOLERANCE

    @staticmethod
    def seasonal_multiplier(influence: float, season: str) -> float:
        """Scale of the coastal effect: strongest in summer, weakest in winter."""
        return 1 + influence * SEASONAL_COEFFICIENTS[season]

    @staticmethod
    def wind_tolerance_modifier(distance: float, wind_speed: float) -> float:
        """
        Extra wind a coastal site tolerates, as a percentage bonus.

        Sites within 50 km of the coast get a bonus growing with wind speed up
        to 40 km/h, scaled by proximity; inland sites get none.
        """
        if distance <= 5:
            tolerance = 1.5
        elif distance <= 20:
            tolerance = 1.2
        elif distance <= 50:
            tolerance = 1.0
        else:
            return 0.0

        if wind_speed <= 15:
            return 5 * tolerance
        if wind_speed <= 25:
            return 10 * tolerance
        if wind_speed <= 40:
            return 15 * tolerance
        return max(0.0, 20 - (wind_speed - 40) * 0.5) * tolerance

    def _base_direction_factor(
        self,
        classification: str,
        is_offshore: bool,
        wind_direction: float,
        season: str
    ) -> float:
        modifiers = TIER_MODIFIERS[classification]
        factor = modifiers.offshore_bonus if is_offshore else modifiers.onshore_penalty

        direction = wind_direction % 360
        if classification in INLAND_WESTERLY_BONUS:
            if WESTERLY_SECTOR[0] <= direction <= WESTERLY_SECTOR[1]:
                factor *= INLAND_WESTERLY_BONUS[classification]
            elif season == "winter" and EASTERLY_SECTOR[0] <= direction <= EASTERLY_SECTOR[1]:
                factor *= INLAND_WINTER_EASTERLY_PENALTY[classification]
        return factor

    def analyze(
        self,
        location: Location,
        wind_direction: float,
        when: datetime
    ) -> CoastalAnalysis:
        """
        Full coastal context for one hour.

        The direction factor is the tier's offshore bonus or onshore penalty
        (with the inland westerly and winter-easterly adjustments), with its
        deviation from 1.0 scaled by the seasonal multiplier.

        Args:
            location: Location
            wind_direction: Direction the wind comes from (degrees)
            when: Timestamp of the hour, used for the season

        Returns:
            CoastalAnalysis
        """
        distance = self.resolve_distance(location)
        classification = self.classify(distance)
        influence = self.coastal_influence(distance)
        season = DateUtils.season_for(when)
        seasonal = self.seasonal_multiplier(influence, season)

        bearing = self.bearing_to_coast(location.latitude, location.longitude)
        offshore = self.is_offshore_wind(location.latitude, location.longitude, wind_direction)

        base = self._base_direction_factor(classification, offshore, wind_direction, season)

        return CoastalAnalysis(
            distance=distance,
            classification=classification,
            influence=influence,
            is_coastal=influence > constants.COASTAL_INFLUENCE_THRESHOLD,
            modifiers=TIER_MODIFIERS[classification],
            bearing_to_coast=bearing,
            is_offshore=offshore,
            season=season,
            seasonal_multiplier=seasonal,
            direction_factor=1 + (base - 1) * seasonal,
        )
