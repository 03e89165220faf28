# geolabel/core/geo/engine.py
"""
Offline reverse-geocoding engine.

``ReverseGeocoder`` is the single engine context shared by every query.
Datasets load lazily on the first query and stay in memory for the life
of the process.

Initialization state machine::

    NOT_LOADED ──first query──▶ LOADING ──ok──▶ READY (terminal)
         ▲                         │
         └────────load error───────┘

Concurrent first queries await one shared load task, so the files are read
and parsed once.  A failed load propagates to every waiter and returns the
engine to ``NOT_LOADED``; the next query tries again.  After READY the
indices are only read.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from geolabel.core.geo.datasets import Geodata, GeodataLoader
from geolabel.core.geo.engine_config import GeocoderConfig
from geolabel.core.geo.formatter import format_label
from geolabel.core.geo.localization import LocalizationResolver
from geolabel.core.geo.matcher import (
    GlobalStrategy,
    NearestNeighborMatcher,
    PlaceMatch,
    PriorityRegionStrategy,
)
from geolabel.infra.logging_config import get_logger, mask_coordinates
from geolabel.infra.metrics import GeoMetrics

logger = get_logger(__name__)


class LoadState(str, Enum):
    NOT_LOADED = "not_loaded"
    LOADING = "loading"
    READY = "ready"


class GeodataSource(Protocol):
    async def load(self) -> Geodata: ...


@dataclass(frozen=True)
class _Ready:
    geodata: Geodata
    matcher: NearestNeighborMatcher
    localizer: LocalizationResolver


class ReverseGeocoder:
    """Coordinates → ``"г. Город, Страна"`` using bundled datasets."""

    def __init__(self, config: GeocoderConfig, loader: GeodataSource | None = None):
        self.config = config
        self._loader = loader or GeodataLoader(config)
        self._state = LoadState.NOT_LOADED
        self._ready: _Ready | None = None
        self._pending: asyncio.Task[_Ready] | None = None

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def geodata(self) -> Geodata | None:
        """Loaded datasets, or ``None`` before the first successful load."""
        return self._ready.geodata if self._ready else None

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    async def ensure_loaded(self) -> Geodata:
        ready = await self._ensure_ready()
        return ready.geodata

    async def _ensure_ready(self) -> _Ready:
        if self._ready is not None:
            return self._ready
        if self._pending is None:
            self._state = LoadState.LOADING
            self._pending = asyncio.ensure_future(self._load())
        # Shielded: a cancelled caller must not cancel the load other callers share
        return await asyncio.shield(self._pending)

    async def _load(self) -> _Ready:
        try:
            with GeoMetrics.track_load_time():
                geodata = await self._loader.load()
            ready = self._build(geodata)
        except BaseException as exc:
            self._state = LoadState.NOT_LOADED
            self._pending = None
            GeoMetrics.dataset_load("failed")
            logger.error("Geodata load failed: %s", exc)
            raise

        self._ready = ready
        self._state = LoadState.READY
        self._pending = None
        GeoMetrics.dataset_load("ok")
        GeoMetrics.records_skipped(geodata.regional.stats.dataset, geodata.regional.stats.skipped)
        GeoMetrics.records_skipped(geodata.gazetteer.stats.dataset, geodata.gazetteer.stats.skipped)
        logger.info(
            "Geocoder ready: regional=%d, gazetteer=%d, translations=%d",
            len(geodata.regional.index),
            len(geodata.gazetteer.index),
            len(geodata.regional.translations),
        )
        return ready

    def _build(self, geodata: Geodata) -> _Ready:
        cfg = self.config
        matcher = NearestNeighborMatcher([
            PriorityRegionStrategy(
                geodata.regional.index,
                country_code=cfg.priority_country_code,
                bounding_box=cfg.priority_bounding_box,
                max_match_km=cfg.priority_match_radius_km,
            ),
            GlobalStrategy(geodata.gazetteer.index),
        ])
        localizer = LocalizationResolver(
            geodata.regional.translations,
            cfg.priority_country_code,
        )
        return _Ready(geodata=geodata, matcher=matcher, localizer=localizer)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def match(self, latitude: float, longitude: float) -> PlaceMatch | None:
        """Nearest place for the coordinates, before localization."""
        ready = await self._ensure_ready()
        return ready.matcher.match(latitude, longitude)

    async def reverse_geocode(self, latitude: float, longitude: float) -> str | None:
        """
        Display label for GPS coordinates, e.g. ``"г. Москва, Россия"``.

        Returns ``None`` when nothing matches (empty datasets); callers
        treat that as "location not recognized".  Coordinates are expected
        to be valid WGS84 and are not checked.

        Raises:
            GeodataLoadError: the datasets could not be loaded this time.
        """
        ready = await self._ensure_ready()

        with GeoMetrics.track_lookup_time():
            place_match = ready.matcher.match(latitude, longitude)

        if place_match is None:
            GeoMetrics.lookup_unresolved()
            logger.debug("No match for (%s)", mask_coordinates(latitude, longitude))
            return None

        GeoMetrics.lookup_resolved(place_match.source.value)
        logger.debug(
            "Matched %s (%.1f km) for (%s)",
            place_match.name,
            place_match.distance_km,
            mask_coordinates(latitude, longitude),
            extra={"source": place_match.source.value},
        )
        place = ready.localizer.resolve(place_match)
        return format_label(place.city, place.country, self.config.city_prefix)
