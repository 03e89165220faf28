# geolabel/core/geo/engine_config.py
"""
Engine configuration.

One ``GeocoderConfig`` covers both geocoder behaviours:

- detailed (``GlobalSizeFilter.NONE``): every gazetteer city is indexed,
  priority country first with a strict match radius;
- large cities only (``GlobalSizeFilter.LARGE_CITIES_ONLY``): the global
  gazetteer keeps only cities above the population threshold or with a
  major feature code.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from geolabel.config import Settings


class GlobalSizeFilter(str, Enum):
    NONE = "none"
    LARGE_CITIES_ONLY = "large_cities_only"


@dataclass(frozen=True)
class BoundingBox:
    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float

    def contains(self, lat: float, lon: float) -> bool:
        return (
            self.lat_min <= lat <= self.lat_max
            and self.lon_min <= lon <= self.lon_max
        )


# Rough outline of Russia
RU_BOUNDING_BOX = BoundingBox(lat_min=41.0, lat_max=82.0, lon_min=19.0, lon_max=180.0)


@dataclass(frozen=True)
class GeocoderConfig:
    priority_dataset_path: Path
    gazetteer_path: Path
    priority_country_code: str = "RU"
    priority_bounding_box: BoundingBox = RU_BOUNDING_BOX
    priority_match_radius_km: float = 80.0
    global_size_filter: GlobalSizeFilter = GlobalSizeFilter.NONE
    large_city_population_threshold: int = 100_000
    major_feature_codes: frozenset[str] = frozenset({"PPLC", "PPLA"})
    # Disputed-territory placeholder, never a translation target
    translation_excluded_names: frozenset[str] = field(
        default_factory=lambda: frozenset({"Донецк"})
    )
    city_prefix: str = "г."

    @classmethod
    def from_settings(cls, s: "Settings") -> "GeocoderConfig":
        size_filter = (
            GlobalSizeFilter.LARGE_CITIES_ONLY
            if s.geocoder_mode == "large_cities"
            else GlobalSizeFilter.NONE
        )
        return cls(
            priority_dataset_path=s.priority_dataset_path,
            gazetteer_path=s.gazetteer_path,
            priority_country_code=s.geo_priority_country_code.strip().upper(),
            priority_bounding_box=BoundingBox(
                lat_min=s.geo_priority_lat_min,
                lat_max=s.geo_priority_lat_max,
                lon_min=s.geo_priority_lon_min,
                lon_max=s.geo_priority_lon_max,
            ),
            priority_match_radius_km=s.geo_priority_match_radius_km,
            global_size_filter=size_filter,
            large_city_population_threshold=s.geo_large_city_population,
            major_feature_codes=s.major_feature_codes,
            translation_excluded_names=s.translation_excluded_names,
            city_prefix=s.geo_city_prefix,
        )
