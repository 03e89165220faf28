# geolabel/infra/geocoding.py
"""
Offline reverse geocoding for the bot.

Provides ``reverse_geocode(lat, lon)`` which returns a display label like
``"г. Москва, Россия"``, or ``None`` when the location is not recognized.
No network calls: the label comes from the bundled datasets configured in
``geolabel.config.settings``.

One ``ReverseGeocoder`` is shared by the whole process; it loads the
datasets on the first call.  Load errors (missing dataset files) are
raised to the caller; the next call retries.
"""
from __future__ import annotations

from geolabel.config import settings
from geolabel.core.geo.engine import ReverseGeocoder
from geolabel.core.geo.engine_config import GeocoderConfig
from geolabel.core.geo.errors import GeodataLoadError
from geolabel.infra.logging_config import get_logger, mask_coordinates

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Internal state
# ---------------------------------------------------------------------------

_geocoder: ReverseGeocoder | None = None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def get_geocoder() -> ReverseGeocoder:
    """Return the process-wide geocoder, creating it from settings."""
    global _geocoder
    if _geocoder is None:
        _geocoder = ReverseGeocoder(GeocoderConfig.from_settings(settings))
        logger.debug(
            "Geocoder created (mode=%s, priority=%s)",
            settings.geocoder_mode, settings.geo_priority_country_code,
        )
    return _geocoder


def set_geocoder(geocoder: ReverseGeocoder | None) -> None:
    """Replace the shared geocoder (``None`` drops it)."""
    global _geocoder
    _geocoder = geocoder


async def reverse_geocode(latitude: float, longitude: float) -> str | None:
    """
    Reverse-geocode GPS coordinates to a ``"г. Город, Страна"`` label.

    Returns ``None`` if no place can be resolved; the conversation layer
    then asks the user to type the city.

    Raises:
        GeodataLoadError: bundled datasets are missing or unreadable.
    """
    masked = mask_coordinates(latitude, longitude)
    try:
        label = await get_geocoder().reverse_geocode(latitude, longitude)
    except GeodataLoadError as exc:
        logger.warning("Geocoding unavailable for (%s): %s", masked, exc.detail)
        raise

    if label:
        logger.info("Geocoded (%s) → %s", masked, label[:60])
    else:
        logger.info("Location not recognized (%s)", masked)
    return label
