# geolabel/infra/health_checks.py
from __future__ import annotations
from typing import Dict, Any
from enum import Enum

from geolabel.core.geo.engine import LoadState, ReverseGeocoder
from geolabel.infra.logging_config import get_logger

logger = get_logger(__name__)


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class GeocoderHealthCheck:
    """Report whether the geocoder datasets are loaded.

    Never triggers a load: a geocoder that has not answered its first
    query yet is ``degraded``, not broken.
    """

    def __init__(self, geocoder: ReverseGeocoder):
        self.name = "geocoder"
        self.critical = False
        self.geocoder = geocoder

    def check(self) -> Dict[str, Any]:
        state = self.geocoder.state
        geodata = self.geocoder.geodata

        if state is not LoadState.READY or geodata is None:
            return {
                "status": HealthStatus.DEGRADED,
                "details": f"Geodata not loaded (state={state.value})",
            }

        regional = geodata.regional.stats
        gazetteer = geodata.gazetteer.stats
        counts = {
            "regional_records": regional.kept,
            "gazetteer_records": gazetteer.kept,
            "translations": len(geodata.regional.translations),
            "skipped": regional.skipped + gazetteer.skipped,
        }

        if gazetteer.kept == 0:
            logger.warning("Geocoder loaded with an empty gazetteer")
            return {
                "status": HealthStatus.UNHEALTHY,
                "details": "Gazetteer is empty (every lookup outside the priority region fails)",
                **counts,
            }

        return {
            "status": HealthStatus.HEALTHY,
            "details": "Geocoder operational",
            **counts,
        }
