# geolabel/core/geo/__init__.py
"""
Offline reverse geocoding -- datasets, grid index, matching, localization.

Canonical imports:
    from geolabel.core.geo import ReverseGeocoder, GeocoderConfig
    from geolabel.core.geo.datasets import GeodataLoader
    from geolabel.core.geo.errors import GeodataLoadError
"""
from geolabel.core.geo.engine import LoadState, ReverseGeocoder  # noqa: F401
from geolabel.core.geo.engine_config import (  # noqa: F401
    BoundingBox,
    GeocoderConfig,
    GlobalSizeFilter,
)
from geolabel.core.geo.errors import GeocoderError, GeodataLoadError  # noqa: F401
