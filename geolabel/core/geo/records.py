# geolabel/core/geo/records.py
"""
Geographic record types loaded from the bundled datasets.

``CityRecord`` rows come from the global tab-delimited gazetteer,
``RegionalCityPoint`` rows from the priority country's native-language
JSON dataset.  Both are frozen once parsed.

``PriorityCityEntry`` is the pydantic schema of one raw JSON entry; it only
exists during parsing.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

__all__ = [
    "CityRecord",
    "RegionalCityPoint",
    "PriorityCoords",
    "PriorityCityEntry",
    "valid_coordinates",
]


@dataclass(frozen=True)
class CityRecord:
    """A single populated place from the global gazetteer."""

    name: str
    latitude: float
    longitude: float
    country_code: str        # ISO alpha-2, uppercase
    population: int = 0
    feature_code: str = ""   # e.g. PPLC (capital), PPLA (admin seat)


@dataclass(frozen=True)
class RegionalCityPoint:
    """A city from the priority country's dataset (native-language name)."""

    name: str
    latitude: float
    longitude: float


class PriorityCoords(BaseModel):
    # String-encoded in the source file ("55.7522"); plain numbers are tolerated
    lat: str | float | None = None
    lon: str | float | None = None


class PriorityCityEntry(BaseModel):
    name: str = ""
    english_name: str | None = None
    # Validated per point (PriorityCoords); a malformed value drops only the point
    coords: Any = None

    model_config = {"extra": "ignore"}


def valid_coordinates(lat: float, lon: float) -> bool:
    """True for finite WGS84 coordinates inside the valid ranges."""
    return (
        math.isfinite(lat)
        and math.isfinite(lon)
        and -90.0 <= lat <= 90.0
        and -180.0 <= lon <= 180.0
    )
