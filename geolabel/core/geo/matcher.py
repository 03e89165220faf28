# geolabel/core/geo/matcher.py
"""
Nearest-neighbour matching over grid indices.

Resolution is an ordered list of strategies; the first one that returns a
match wins:

1. ``PriorityRegionStrategy``: only inside the priority bounding box,
   regional index, accepted within the match radius.
2. ``GlobalStrategy``: global gazetteer, no radius cutoff.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, TypeVar

from geolabel.core.geo.distance import haversine_km
from geolabel.core.geo.engine_config import BoundingBox
from geolabel.core.geo.grid import GridIndex, HasCoordinates
from geolabel.core.geo.records import CityRecord, RegionalCityPoint

__all__ = [
    "MatchSource",
    "PlaceMatch",
    "MatchStrategy",
    "PriorityRegionStrategy",
    "GlobalStrategy",
    "NearestNeighborMatcher",
    "find_nearest",
]

P = TypeVar("P", bound=HasCoordinates)


class MatchSource(str, Enum):
    PRIORITY_REGION = "priority_region"
    GLOBAL = "global"


@dataclass(frozen=True)
class PlaceMatch:
    name: str
    country_code: str
    distance_km: float
    source: MatchSource


def find_nearest(index: GridIndex[P], lat: float, lon: float) -> tuple[P, float] | None:
    """Nearest indexed point and its distance in km.

    Scans the 3x3 cell block around the query; when that block is empty
    (open ocean, sparse regions) every indexed point is scanned instead.
    ``None`` only for an empty index.
    """
    candidates: Sequence[P] = index.candidates(lat, lon) or index.points

    nearest: P | None = None
    min_dist = float("inf")
    for point in candidates:
        d = haversine_km(lat, lon, point.latitude, point.longitude)
        if d < min_dist:
            min_dist = d
            nearest = point

    if nearest is None:
        return None
    return nearest, min_dist


class MatchStrategy(Protocol):
    def match(self, lat: float, lon: float) -> PlaceMatch | None: ...


class PriorityRegionStrategy:
    """Native-language dataset of the priority country, strict radius."""

    def __init__(
        self,
        index: GridIndex[RegionalCityPoint],
        country_code: str,
        bounding_box: BoundingBox,
        max_match_km: float,
    ):
        self.index = index
        self.country_code = country_code
        self.bounding_box = bounding_box
        self.max_match_km = max_match_km

    def match(self, lat: float, lon: float) -> PlaceMatch | None:
        if not self.bounding_box.contains(lat, lon):
            return None
        found = find_nearest(self.index, lat, lon)
        if found is None:
            return None
        point, dist = found
        if dist > self.max_match_km:
            return None
        return PlaceMatch(
            name=point.name,
            country_code=self.country_code,
            distance_km=dist,
            source=MatchSource.PRIORITY_REGION,
        )


class GlobalStrategy:
    """Global gazetteer; always matches when the index is non-empty."""

    def __init__(self, index: GridIndex[CityRecord]):
        self.index = index

    def match(self, lat: float, lon: float) -> PlaceMatch | None:
        found = find_nearest(self.index, lat, lon)
        if found is None:
            return None
        city, dist = found
        return PlaceMatch(
            name=city.name,
            country_code=city.country_code,
            distance_km=dist,
            source=MatchSource.GLOBAL,
        )


class NearestNeighborMatcher:
    def __init__(self, strategies: Sequence[MatchStrategy]):
        self.strategies = tuple(strategies)

    def match(self, lat: float, lon: float) -> PlaceMatch | None:
        for strategy in self.strategies:
            result = strategy.match(lat, lon)
            if result is not None:
                return result
        return None
