# geolabel/core/geo/datasets.py
"""
Dataset loader: bundled files → in-memory records + grid indices.

Two datasets:

- **priority region** (``russian-cities_with_english.json``): JSON array of
  ``{"name": ..., "english_name": ..., "coords": {"lat": "..", "lon": ".."}}``
  with native-language names.  Produces the regional grid index and the
  romanized → native name translation map.
- **global gazetteer** (``cities5000.txt``): one tab-delimited record per
  line, at least 15 fields.  Produces the global grid index, optionally
  restricted to large cities.

Malformed entries and lines are skipped and counted; only a missing or
unreadable file (or a priority file that is not a JSON array) fails the
load with ``GeodataLoadError``.

Parsing is synchronous; the only blocking step, reading the file, runs in
the default executor.
"""
from __future__ import annotations

import asyncio
import json
from collections.abc import Collection, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from geolabel.core.geo.engine_config import GeocoderConfig, GlobalSizeFilter
from geolabel.core.geo.errors import GeodataLoadError
from geolabel.core.geo.grid import GridIndex
from geolabel.core.geo.records import (
    CityRecord,
    PriorityCityEntry,
    PriorityCoords,
    RegionalCityPoint,
    valid_coordinates,
)
from geolabel.infra.logging_config import get_logger

__all__ = [
    "PRIORITY_DATASET",
    "GAZETTEER_DATASET",
    "MIN_GAZETTEER_FIELDS",
    "DatasetStats",
    "RegionalDataset",
    "GazetteerDataset",
    "Geodata",
    "GeodataLoader",
    "parse_gazetteer_line",
    "is_large_city",
    "parse_gazetteer",
    "parse_priority_region",
    "build_translation_map",
    "build_priority_region_dataset",
    "build_global_gazetteer",
    "load_priority_region_dataset",
    "load_global_gazetteer",
]

logger = get_logger(__name__)

PRIORITY_DATASET = "priority_region"
GAZETTEER_DATASET = "gazetteer"

# ---------------------------------------------------------------------------
# Gazetteer field layout (GeoNames dump)
# ---------------------------------------------------------------------------
MIN_GAZETTEER_FIELDS = 15
_F_NAME = 1
_F_LAT = 4
_F_LON = 5
_F_FEATURE_CODE = 7
_F_COUNTRY_CODE = 8
_F_POPULATION = 14


# ---------------------------------------------------------------------------
# Loaded datasets
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DatasetStats:
    """Per-dataset load counters."""

    dataset: str
    read: int       # entries / non-blank lines seen
    kept: int       # records in the index
    skipped: int    # malformed, dropped silently
    filtered: int = 0  # well-formed but removed by the size filter


@dataclass(frozen=True)
class RegionalDataset:
    index: GridIndex[RegionalCityPoint]
    translations: Mapping[str, str]
    stats: DatasetStats


@dataclass(frozen=True)
class GazetteerDataset:
    index: GridIndex[CityRecord]
    stats: DatasetStats


@dataclass(frozen=True)
class Geodata:
    """Everything the engine needs, published as one reference."""

    regional: RegionalDataset
    gazetteer: GazetteerDataset


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def _parse_float(raw: Any) -> float | None:
    if raw is None:
        return None
    try:
        return float(str(raw).strip())
    except ValueError:
        return None


def _parse_population(raw: str) -> int:
    raw = raw.strip()
    if not raw:
        return 0
    try:
        return max(0, int(raw))
    except ValueError:
        return 0


# ---------------------------------------------------------------------------
# Global gazetteer
# ---------------------------------------------------------------------------

def parse_gazetteer_line(line: str) -> CityRecord | None:
    """Parse one tab-delimited gazetteer line; ``None`` if malformed."""
    parts = line.split("\t")
    if len(parts) < MIN_GAZETTEER_FIELDS:
        return None

    name = parts[_F_NAME].strip()
    country_code = parts[_F_COUNTRY_CODE].strip().upper()
    if not name or not country_code:
        return None

    lat = _parse_float(parts[_F_LAT])
    lon = _parse_float(parts[_F_LON])
    if lat is None or lon is None or not valid_coordinates(lat, lon):
        return None

    return CityRecord(
        name=name,
        latitude=lat,
        longitude=lon,
        country_code=country_code,
        population=_parse_population(parts[_F_POPULATION]),
        feature_code=parts[_F_FEATURE_CODE].strip().upper(),
    )


def is_large_city(
    record: CityRecord,
    population_threshold: int,
    major_feature_codes: Collection[str],
) -> bool:
    return (
        record.population > population_threshold
        or record.feature_code in major_feature_codes
    )


def parse_gazetteer(
    text: str,
    size_filter: GlobalSizeFilter = GlobalSizeFilter.NONE,
    population_threshold: int = 0,
    major_feature_codes: Collection[str] = (),
) -> tuple[list[CityRecord], DatasetStats]:
    records: list[CityRecord] = []
    read = skipped = filtered = 0

    # Only "\n" ends a record; other Unicode line breaks may occur inside fields
    for line in text.split("\n"):
        line = line.rstrip("\r")
        if not line.strip():
            continue
        read += 1
        record = parse_gazetteer_line(line)
        if record is None:
            skipped += 1
            continue
        if size_filter is GlobalSizeFilter.LARGE_CITIES_ONLY and not is_large_city(
            record, population_threshold, major_feature_codes
        ):
            filtered += 1
            continue
        records.append(record)

    stats = DatasetStats(
        dataset=GAZETTEER_DATASET,
        read=read,
        kept=len(records),
        skipped=skipped,
        filtered=filtered,
    )
    return records, stats


def build_global_gazetteer(
    text: str,
    size_filter: GlobalSizeFilter = GlobalSizeFilter.NONE,
    population_threshold: int = 0,
    major_feature_codes: Collection[str] = (),
) -> GazetteerDataset:
    records, stats = parse_gazetteer(
        text, size_filter, population_threshold, major_feature_codes,
    )
    return GazetteerDataset(index=GridIndex.build(records), stats=stats)


# ---------------------------------------------------------------------------
# Priority region
# ---------------------------------------------------------------------------

def _decode_priority_json(text: str) -> list[Any]:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise GeodataLoadError(PRIORITY_DATASET, f"invalid JSON: {exc}") from exc
    if not isinstance(raw, list):
        raise GeodataLoadError(
            PRIORITY_DATASET, f"expected a JSON array, got {type(raw).__name__}",
        )
    return raw


def _validated_entries(raw: list[Any]) -> tuple[list[PriorityCityEntry], int]:
    entries: list[PriorityCityEntry] = []
    invalid = 0
    for item in raw:
        try:
            entries.append(PriorityCityEntry.model_validate(item))
        except ValidationError:
            invalid += 1
    return entries, invalid


def _entry_coordinates(entry: PriorityCityEntry) -> tuple[float | None, float | None]:
    if entry.coords is None:
        return None, None
    try:
        coords = PriorityCoords.model_validate(entry.coords)
    except ValidationError:
        return None, None
    return _parse_float(coords.lat), _parse_float(coords.lon)


def parse_priority_region(
    entries: list[PriorityCityEntry],
) -> tuple[list[RegionalCityPoint], int]:
    """Entries → points.  Returns ``(points, skipped)``."""
    points: list[RegionalCityPoint] = []
    skipped = 0
    for entry in entries:
        name = entry.name.strip()
        lat, lon = _entry_coordinates(entry)
        if not name or lat is None or lon is None or not valid_coordinates(lat, lon):
            skipped += 1
            continue
        points.append(RegionalCityPoint(name=name, latitude=lat, longitude=lon))
    return points, skipped


def build_translation_map(
    entries: list[PriorityCityEntry],
    excluded_names: Collection[str] = (),
) -> dict[str, str]:
    """Lowercased romanized name → native name.

    Entries without a romanized name and the excluded names (disputed
    territory placeholder) never become translation targets.  Coordinates
    are not required here.
    """
    translations: dict[str, str] = {}
    for entry in entries:
        native = entry.name.strip()
        romanized = (entry.english_name or "").strip()
        if not native or not romanized or native in excluded_names:
            continue
        translations[romanized.lower()] = native
    return translations


def build_priority_region_dataset(
    text: str,
    excluded_names: Collection[str] = (),
) -> RegionalDataset:
    raw = _decode_priority_json(text)
    entries, invalid = _validated_entries(raw)
    points, skipped = parse_priority_region(entries)
    translations = build_translation_map(entries, excluded_names)

    stats = DatasetStats(
        dataset=PRIORITY_DATASET,
        read=len(raw),
        kept=len(points),
        skipped=invalid + skipped,
    )
    return RegionalDataset(
        index=GridIndex.build(points),
        translations=MappingProxyType(translations),
        stats=stats,
    )


# ---------------------------------------------------------------------------
# File access
# ---------------------------------------------------------------------------

def _read_file(path: Path) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


async def _read_text(path: Path, dataset: str) -> str:
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, _read_file, path)
    except (OSError, UnicodeDecodeError) as exc:
        raise GeodataLoadError(dataset, f"cannot read {path}: {exc}") from exc


async def load_priority_region_dataset(
    path: Path,
    excluded_names: Collection[str] = (),
) -> RegionalDataset:
    text = await _read_text(path, PRIORITY_DATASET)
    dataset = build_priority_region_dataset(text, excluded_names)
    _log_stats(dataset.stats, translations=len(dataset.translations))
    return dataset


async def load_global_gazetteer(
    path: Path,
    size_filter: GlobalSizeFilter = GlobalSizeFilter.NONE,
    population_threshold: int = 0,
    major_feature_codes: Collection[str] = (),
) -> GazetteerDataset:
    text = await _read_text(path, GAZETTEER_DATASET)
    dataset = build_global_gazetteer(
        text, size_filter, population_threshold, major_feature_codes,
    )
    _log_stats(dataset.stats)
    return dataset


def _log_stats(stats: DatasetStats, **extra_counts: int) -> None:
    details = "".join(f", {k}={v}" for k, v in extra_counts.items())
    logger.info(
        "Loaded %d of %d records (skipped=%d, filtered=%d%s)",
        stats.kept, stats.read, stats.skipped, stats.filtered, details,
        extra={"dataset": stats.dataset},
    )


class GeodataLoader:
    """Reads both datasets described by a ``GeocoderConfig``."""

    def __init__(self, config: GeocoderConfig):
        self.config = config

    async def load(self) -> Geodata:
        cfg = self.config
        regional = await load_priority_region_dataset(
            cfg.priority_dataset_path,
            cfg.translation_excluded_names,
        )
        gazetteer = await load_global_gazetteer(
            cfg.gazetteer_path,
            cfg.global_size_filter,
            cfg.large_city_population_threshold,
            cfg.major_feature_codes,
        )
        return Geodata(regional=regional, gazetteer=gazetteer)
